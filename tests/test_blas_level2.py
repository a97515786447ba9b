import numpy as np
import pytest
from numpy.testing import assert_allclose

from sdpcore.blas_level2 import BlasArgumentError, symv, syr2, trmv, trsv


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


def _symmetric(rng, n):
    m = rng.standard_normal((n, n))
    return m + m.T


def test_symv_matches_full_product_both_triangles(rng):
    a = _symmetric(rng, 5)
    x = rng.standard_normal(5)
    y = rng.standard_normal(5)
    expected = 2.0 * (a @ x) + 0.5 * y
    assert_allclose(symv("U", 2.0, a, x, 0.5, y), expected)
    assert_allclose(symv("L", 2.0, a, x, 0.5, y), expected)


def test_symv_reads_only_named_triangle(rng):
    a = _symmetric(rng, 4)
    x = rng.standard_normal(4)
    y = np.zeros(4)
    garbage = a.copy()
    garbage[np.tril_indices(4, -1)] = 999.0
    assert_allclose(symv("upper", 1.0, garbage, x, 0.0, y), a @ x)


def test_symv_beta_zero_discards_y(rng):
    a = _symmetric(rng, 3)
    x = rng.standard_normal(3)
    y = np.array([np.nan, np.nan, np.nan])
    assert_allclose(symv("L", 1.0, a, x, 0.0, y), a @ x)


def test_symv_quick_return_keeps_y_and_inputs(rng):
    a = _symmetric(rng, 3)
    y = rng.standard_normal(3)
    y_before = y.copy()
    result = symv("U", 0.0, a, rng.standard_normal(3), 1.0, y)
    assert_allclose(result, y_before)
    assert_allclose(y, y_before)


def test_symv_alpha_zero_scales_y(rng):
    y = rng.standard_normal(3)
    assert_allclose(symv("U", 0.0, np.eye(3), np.ones(3), 3.0, y), 3.0 * y)


def test_syr2_updates_only_named_triangle(rng):
    a = rng.standard_normal((4, 4))
    x = rng.standard_normal(4)
    y = rng.standard_normal(4)
    full = a + 1.5 * (np.outer(x, y) + np.outer(y, x))
    upper = syr2("U", 1.5, x, y, a)
    assert_allclose(np.triu(upper), np.triu(full))
    assert_allclose(np.tril(upper, -1), np.tril(a, -1))
    lower = syr2("L", 1.5, x, y, a)
    assert_allclose(np.tril(lower), np.tril(full))
    assert_allclose(np.triu(lower, 1), np.triu(a, 1))


def test_syr2_alpha_zero_returns_copy(rng):
    a = rng.standard_normal((3, 3))
    result = syr2("L", 0.0, np.ones(3), np.ones(3), a)
    assert_allclose(result, a)
    result[0, 0] += 1.0
    assert result[0, 0] != a[0, 0]


@pytest.mark.parametrize("uplo", ["U", "L"])
@pytest.mark.parametrize("trans", ["N", "T", "C"])
def test_trmv_matches_triangular_product(rng, uplo, trans):
    a = rng.standard_normal((5, 5))
    x = rng.standard_normal(5)
    tri = np.triu(a) if uplo == "U" else np.tril(a)
    op = tri if trans == "N" else tri.T
    assert_allclose(trmv(uplo, trans, "N", a, x), op @ x)


def test_trmv_unit_diagonal_ignores_stored_diagonal(rng):
    a = rng.standard_normal((4, 4))
    x = rng.standard_normal(4)
    b = a.copy()
    np.fill_diagonal(b, 0.0)
    assert_allclose(trmv("U", "N", "U", a, x), trmv("U", "N", "U", b, x))
    assert_allclose(trmv("U", "N", "U", a, x), (np.triu(a, 1) + np.eye(4)) @ x)


@pytest.mark.parametrize("uplo", ["U", "L"])
@pytest.mark.parametrize("trans", ["N", "T"])
@pytest.mark.parametrize("diag", ["N", "U"])
def test_trsv_inverts_trmv(rng, uplo, trans, diag):
    a = rng.standard_normal((6, 6)) + 6.0 * np.eye(6)
    x = rng.standard_normal(6)
    b = trmv(uplo, trans, diag, a, x)
    assert_allclose(trsv(uplo, trans, diag, a, b), x, rtol=1e-10, atol=1e-12)


def test_trsv_worked_example():
    a = np.array([[2.0, 1.0], [0.0, 4.0]])
    assert_allclose(trsv("U", "N", "N", a, [4.0, 8.0]), [1.0, 2.0])


def test_trsv_does_not_modify_input(rng):
    a = rng.standard_normal((3, 3)) + 3.0 * np.eye(3)
    x = rng.standard_normal(3)
    x_before = x.copy()
    trsv("L", "N", "N", a, x)
    assert_allclose(x, x_before)


def test_empty_inputs():
    empty = np.zeros((0, 0))
    assert trmv("U", "N", "N", empty, []).shape == (0,)
    assert trsv("L", "T", "U", empty, []).shape == (0,)
    assert symv("U", 1.0, empty, [], 2.0, []).shape == (0,)


@pytest.mark.parametrize(
    "call, argument",
    [
        (lambda: symv("X", 1.0, np.eye(2), np.ones(2), 0.0, np.ones(2)), "uplo"),
        (lambda: syr2("", 1.0, np.ones(2), np.ones(2), np.eye(2)), "uplo"),
        (lambda: trmv("U", "Q", "N", np.eye(2), np.ones(2)), "trans"),
        (lambda: trsv("U", "N", "Z", np.eye(2), np.ones(2)), "diag"),
        (lambda: trmv("U", "N", "N", np.ones((2, 3)), np.ones(2)), "a"),
        (lambda: symv("U", 1.0, np.eye(2), np.ones(3), 0.0, np.ones(2)), "x"),
        (lambda: symv("U", 1.0, np.eye(2), np.ones(2), 0.0, np.ones(3)), "y"),
        (lambda: syr2("L", 1.0, np.ones(2), np.ones(4), np.eye(2)), "y"),
    ],
)
def test_invalid_arguments_raise(call, argument):
    with pytest.raises(BlasArgumentError) as info:
        call()
    assert info.value.argument == argument


def test_flags_are_case_insensitive(rng):
    a = rng.standard_normal((3, 3))
    x = rng.standard_normal(3)
    assert_allclose(trmv("lower", "transpose", "non-unit", a, x), trmv("L", "T", "N", a, x))