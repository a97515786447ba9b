import io

import numpy as np
import pytest

from sdpcore.inputdata import BlockIndex, InputData, build_block_index


def _problem():
    a0 = {
        "sdp": {0: np.array([[1.0, 0.0], [0.0, 2.0]]), 1: np.array([[0.0, 1.0], [1.0, 0.0]])},
        "lp": {0: 3.0},
    }
    a1 = {"sdp": {1: np.eye(2)}}
    return InputData(
        b=[1.0, 2.0], c={}, a=[a0, a1], sdp_block_struct=[2, 2], lp_nblock=1
    )


def test_build_block_index_example():
    index = build_block_index([[0, 2], [1], [2, 0]], 3)
    assert index.constraints == [[0, 2], [1], [0, 2]]
    assert index.positions == [[0, 1], [0], [1, 0]]


def test_build_block_index_invariants():
    sparse = [[3, 1], [], [0, 1, 2], [1]]
    index = build_block_index(sparse, 4)
    assert index.n_block == 4
    assert sum(index.n_constraint) == sum(len(blocks) for blocks in sparse)
    for block in range(index.n_block):
        for constraint, position in index.entries(block):
            assert sparse[constraint][position] == block
        assert index.constraints[block] == sorted(index.constraints[block])


def test_build_block_index_rejects_bad_block():
    with pytest.raises(ValueError):
        build_block_index([[0, 5]], 2)


def test_build_block_index_rejects_negative_count():
    with pytest.raises(ValueError):
        build_block_index([], -1)


def test_empty_block_index():
    index = BlockIndex()
    assert index.n_block == 0
    assert index.n_constraint == []


def test_mismatched_constraint_count():
    with pytest.raises(ValueError):
        InputData(b=[1.0, 2.0], c={}, a=[{}])


def test_initialize_index_sdp_and_lp():
    data = _problem()
    data.initialize_index(2, 0, 1)
    assert data.sdp_index.constraints == [[0], [0, 1]]
    assert data.sdp_index.positions == [[0], [1, 0]]
    assert data.lp_index.constraints == [[0]]
    assert data.socp_index.n_block == 0


def test_inner_products_with_identity():
    data = _problem()
    x = {"sdp": [np.eye(2), np.eye(2)], "socp": [], "lp": np.array([1.0])}
    np.testing.assert_allclose(data.inner_products(x), [6.0, 2.0])


def test_weighted_sum_unit_weight_returns_constraint():
    data = _problem()
    result = data.weighted_sum([1.0, 0.0])
    np.testing.assert_allclose(result["sdp"][0], data.a[0]["sdp"][0])
    np.testing.assert_allclose(result["sdp"][1], data.a[0]["sdp"][1])
    np.testing.assert_allclose(result["lp"], [3.0])


def test_weighted_sum_is_adjoint_of_inner_products():
    data = _problem()
    rng = np.random.default_rng(7)
    blocks = [rng.standard_normal((2, 2)) for _ in range(2)]
    x = {"sdp": [b + b.T for b in blocks], "socp": [], "lp": rng.standard_normal(1)}
    y = rng.standard_normal(2)
    dense = data.weighted_sum(y)
    lhs = sum(float(np.sum(d * xb)) for d, xb in zip(dense["sdp"], x["sdp"]))
    lhs += float(np.dot(dense["lp"], x["lp"]))
    assert lhs == pytest.approx(float(np.dot(y, data.inner_products(x))))


def test_weighted_sum_rejects_wrong_length():
    with pytest.raises(ValueError):
        _problem().weighted_sum([1.0])


def test_display_index_format():
    data = _problem()
    data.initialize_index(2, 0, 1)
    out = io.StringIO()
    data.display_index(out)
    assert out.getvalue() == (
        "display_index: 2 0 1\n"
        "SDP:0th block\n"
        "constraint:0 block:0 \n"
        "SDP:1th block\n"
        "constraint:0 block:1 \n"
        "constraint:1 block:0 \n"
        "LP:0th block\n"
        "constraint:0 block:0 \n"
    )