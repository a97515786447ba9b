"""Choice of a sparse or dense Schur complement from its aggregate sparsity.

The constraints that share a block are connected in a graph. That graph
is ordered by one or more fill-reducing orderings, and the ordering with
the fewest nonzeros in its Cholesky factor is chosen. When the pattern is
too dense, or the fill too large, dense computation is chosen instead and
the result is ``-1``.

The orderings are supplied by the caller. Each one is a callable that
takes the adjacency lists built by :func:`make_graph` and returns a pair
``(new_to_old, cliques)``: the vertex permutation and the column
structures of the symbolic factorisation, one list of vertices per
clique.
"""

from __future__ import annotations

import heapq
import math
from collections.abc import Callable, Iterable, Mapping, Sequence

__all__ = ["merge_sorted", "make_graph", "count_nonzeros", "best_ordering", "Chordal"]

DENSE = -1

# Index 0 is METIS nested dissection, which is not supported. Indices 1 to 4
# are minimum degree, generalised nested dissection, multisection and the
# better of the last two.
METHOD_NAMES = (
    "nested dissection (METIS)",
    "minimum degree",
    "generalized nested dissection",
    "multisection",
    "best of nested dissection and multisection",
)

Ordering = Callable[[list], tuple]


def merge_sorted(first: Iterable[int], second: Iterable[int]) -> list[int]:
    """Merge two ascending sequences into one ascending list, keeping repeats."""
    return list(heapq.merge(first, second))


def make_graph(constraint_lists: Iterable[Sequence[int]], m: int) -> list[list[int]]:
    """Return the aggregate sparsity pattern as adjacency lists.

    ``constraint_lists`` holds, for every block, the constraints whose
    matrix is nonzero in that block. Constraints that share a block are
    adjacent. Each vertex's list is ascending, free of repeats and
    includes the vertex itself when it appears in any block.
    """
    if m < 0:
        raise ValueError(f"number of constraints must not be negative, got {m}")
    merged: list[list[int]] = [[] for _ in range(m)]
    for block in constraint_lists:
        members = sorted(block)
        for index in members:
            if not 0 <= index < m:
                raise ValueError(f"constraint index {index} is outside 0..{m - 1}")
        for index in members:
            merged[index] = merge_sorted(members, merged[index])

    adjacency = []
    for neighbours in merged:
        unique: list[int] = []
        for vertex in neighbours:
            if not unique or unique[-1] != vertex:
                unique.append(vertex)
        adjacency.append(unique)
    return adjacency


def count_nonzeros(m: int, cliques: Sequence[Sequence[int]]) -> int:
    """Count the nonzeros in one triangle of the factor described by ``cliques``.

    Cliques are visited from last to first; each vertex met for the first
    time at position ``i`` of a clique of size ``s`` owns ``s - i`` entries.
    """
    seen = [False] * m
    nonzeros = 0
    for clique in reversed(cliques):
        size = len(clique)
        for position, vertex in enumerate(clique):
            if not seen[vertex]:
                nonzeros += size - position
                seen[vertex] = True
    return nonzeros


def best_ordering(fills: Sequence[int]) -> int:
    """Return the index of the smallest nonzero fill; ties go to the first.

    A fill of zero marks an ordering that was not tried.
    """
    best = None
    for index, fill in enumerate(fills):
        if fill == 0:
            continue
        if best is None or fill < fills[best]:
            best = index
    if best is None:
        raise ValueError("no ordering was tried")
    return best


class Chordal:
    """Decides between sparse and dense handling of the Schur complement."""

    def __init__(self) -> None:
        # Sparse computation needs m_threshold < m, b_threshold < n_block,
        # an aggregate density of at most aggregate_threshold and an
        # extended (filled) density of at most extend_threshold.
        self.m_threshold = 100
        self.b_threshold = 5
        self.aggregate_threshold = 0.25
        self.extend_threshold = 0.4
        # Which orderings are tried; only minimum degree by default.
        self.methods = [0, 1, 0, 0, 0]
        self.fills = [0] * len(self.methods)
        self.best = DENSE
        self.adjacency: list[list[int]] = []
        self.new_to_old: dict[int, Sequence[int]] = {}
        self.cliques: dict[int, Sequence[Sequence[int]]] = {}

    def _dense(self) -> int:
        self.best = DENSE
        return self.best

    def ordering_bmat(
        self,
        m: int,
        n_block: int,
        constraint_lists: Sequence[Sequence[int]],
        orderings: Mapping[int, Ordering],
    ) -> int:
        """Choose the ordering for an ``m``-by-``m`` Schur complement.

        Returns the index of the chosen ordering, or -1 for dense
        computation, and stores it as ``best``.
        """
        self.fills = [0] * len(self.methods)
        self.new_to_old = {}
        self.cliques = {}

        if m <= self.m_threshold or n_block <= self.b_threshold:
            return self._dense()
        limit = m * math.sqrt(self.aggregate_threshold)
        if any(len(block) > limit for block in constraint_lists):
            return self._dense()

        self.adjacency = make_graph(constraint_lists, m)
        total = sum(len(neighbours) for neighbours in self.adjacency)
        if total > self.aggregate_threshold * m * m:
            return self._dense()

        if self.methods[0]:
            raise ValueError("no support for METIS")

        for method in range(1, len(self.methods)):
            if not self.methods[method]:
                continue
            if method not in orderings:
                raise ValueError(f"no ordering supplied for {METHOD_NAMES[method]}")
            new_to_old, cliques = orderings[method](self.adjacency)
            self.new_to_old[method] = new_to_old
            self.cliques[method] = cliques
            self.fills[method] = count_nonzeros(m, cliques) * 2 - m

        best = best_ordering(self.fills)
        if self.fills[best] > self.extend_threshold * m * m:
            return self._dense()
        self.best = best
        return best