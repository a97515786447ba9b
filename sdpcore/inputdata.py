"""Problem data of a conic program and the index from blocks to constraints.

The problem is: minimise ``C . X`` subject to ``A_i . X = b_i``, where
``C`` and every ``A_i`` are block-diagonal spaces holding SDP, SOCP and LP
blocks.

A sparse space (``C`` or one ``A_i``) is a mapping with the optional keys
``"sdp"``, ``"socp"`` and ``"lp"``. Each key maps a block number to that
block's value: a square matrix for SDP, a vector for SOCP and a number for
LP. Blocks that are absent are zero. The order of the entries matters:
the position of a block within its mapping is the position recorded by
the block index.

A dense space is a mapping with the keys ``"sdp"`` (a list of square
arrays), ``"socp"`` (a list of vectors) and ``"lp"`` (a vector with one
entry per LP block).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, Any

import numpy as np

__all__ = ["BlockIndex", "build_block_index", "InputData"]

_KINDS = ("sdp", "socp", "lp")


@dataclass
class BlockIndex:
    """For every block, the constraints whose matrix is nonzero there.

    ``constraints[b][t]`` is a constraint ``i`` whose matrix has block
    ``b`` nonzero, and ``positions[b][t]`` is where that block stands
    among the nonzero blocks of constraint ``i``.
    """

    constraints: list[list[int]] = field(default_factory=list)
    positions: list[list[int]] = field(default_factory=list)

    @property
    def n_block(self) -> int:
        return len(self.constraints)

    @property
    def n_constraint(self) -> list[int]:
        """Number of constraints that are nonzero in each block."""
        return [len(members) for members in self.constraints]

    def entries(self, block: int) -> list[tuple[int, int]]:
        """Return the ``(constraint, position)`` pairs of one block."""
        return list(zip(self.constraints[block], self.positions[block]))


def build_block_index(sparse_blocks: Iterable[Sequence[int]], n_block: int) -> BlockIndex:
    """Invert per-constraint lists of nonzero blocks into a :class:`BlockIndex`.

    ``sparse_blocks[i]`` lists, in storage order, the block numbers in
    which constraint ``i`` is nonzero. Constraints appear in each block's
    list in ascending order.
    """
    if n_block < 0:
        raise ValueError(f"number of blocks must not be negative, got {n_block}")
    constraints: list[list[int]] = [[] for _ in range(n_block)]
    positions: list[list[int]] = [[] for _ in range(n_block)]
    for constraint, blocks in enumerate(sparse_blocks):
        for position, block in enumerate(blocks):
            if not 0 <= block < n_block:
                raise ValueError(
                    f"constraint {constraint} names block {block}, outside 0..{n_block - 1}"
                )
            constraints[block].append(constraint)
            positions[block].append(position)
    return BlockIndex(constraints, positions)


def _part(space: Mapping[str, Any], kind: str) -> Mapping[int, Any]:
    return space.get(kind) or {}


@dataclass
class InputData:
    """The vector ``b``, the cost ``c`` and the constraint spaces ``a``."""

    b: np.ndarray
    c: Mapping[str, Any]
    a: Sequence[Mapping[str, Any]]
    sdp_block_struct: Sequence[int] = ()
    socp_block_struct: Sequence[int] = ()
    lp_nblock: int = 0
    sdp_index: BlockIndex = field(default_factory=BlockIndex)
    socp_index: BlockIndex = field(default_factory=BlockIndex)
    lp_index: BlockIndex = field(default_factory=BlockIndex)

    def __post_init__(self) -> None:
        self.b = np.array(self.b, dtype=float)
        if self.b.ndim != 1:
            raise ValueError(f"b must be a vector, got shape {self.b.shape}")
        self.a = list(self.a)
        if len(self.a) != self.b.shape[0]:
            raise ValueError(
                f"expected {self.b.shape[0]} constraint matrices, got {len(self.a)}"
            )

    @property
    def m(self) -> int:
        """Number of constraints."""
        return self.b.shape[0]

    def initialize_index(self, sdp_nblock, socp_nblock, lp_nblock) -> None:
        """Build the block indices for the SDP and LP parts.

        The SOCP part is not indexed; ``socp_index`` stays empty.
        """
        self.sdp_index = build_block_index(
            (list(_part(space, "sdp")) for space in self.a), sdp_nblock
        )
        self.lp_index = build_block_index(
            (list(_part(space, "lp")) for space in self.a), lp_nblock
        )

    @staticmethod
    def _inner(space: Mapping[str, Any], x: Mapping[str, Any]) -> float:
        total = 0.0
        for block, matrix in _part(space, "sdp").items():
            total += float(np.sum(np.asarray(matrix, dtype=float) * np.asarray(x["sdp"][block])))
        for block, vector in _part(space, "socp").items():
            total += float(np.dot(np.asarray(vector, dtype=float), np.asarray(x["socp"][block])))
        for block, value in _part(space, "lp").items():
            total += float(value) * float(x["lp"][block])
        return total

    def inner_products(self, x) -> np.ndarray:
        """Return the vector of ``A_i . X`` over all constraints."""
        return np.array([self._inner(space, x) for space in self.a], dtype=float)

    def _zero_space(self) -> dict[str, Any]:
        return {
            "sdp": [np.zeros((size, size)) for size in self.sdp_block_struct],
            "socp": [np.zeros(size) for size in self.socp_block_struct],
            "lp": np.zeros(self.lp_nblock),
        }

    def weighted_sum(self, y) -> dict[str, Any]:
        """Return the dense space ``sum_i y_i A_i``."""
        weights = np.asarray(y, dtype=float)
        if weights.ndim != 1 or weights.shape[0] != self.m:
            raise ValueError(f"expected {self.m} weights, got shape {weights.shape}")
        result = self._zero_space()
        for weight, space in zip(weights, self.a):
            for block, matrix in _part(space, "sdp").items():
                result["sdp"][block] += weight * np.asarray(matrix, dtype=float)
            for block, vector in _part(space, "socp").items():
                result["socp"][block] += weight * np.asarray(vector, dtype=float)
            for block, value in _part(space, "lp").items():
                result["lp"][block] += weight * float(value)
        return result

    def display_index(self, file: IO[str] | None) -> None:
        """Write the block indices to ``file``; nothing when it is ``None``."""
        if file is None:
            return
        file.write(
            f"display_index: {self.sdp_index.n_block} "
            f"{self.socp_index.n_block} {self.lp_index.n_block}\n"
        )
        for label, index in (("SDP", self.sdp_index), ("SOCP", self.socp_index),
                             ("LP", self.lp_index)):
            for block in range(index.n_block):
                file.write(f"{label}:{block}th block\n")
                for constraint, position in index.entries(block):
                    file.write(f"constraint:{constraint} block:{position} \n")