"""Level-1 BLAS operations on real vectors: swap."""

from __future__ import annotations

import numpy as np

from sdpcore.blas_level2 import BlasArgumentError

__all__ = ["swap"]


def _positions(length: int, inc: int) -> list[int]:
    """Return the indices visited by a stride, in the order BLAS pairs them.

    A negative increment walks the same elements from the far end, so the
    first element paired is the last one reached by the forward stride.
    """
    step = abs(inc)
    positions = list(range(0, length, step))
    if inc < 0:
        positions.reverse()
    return positions


def swap(x, y, incx=1, incy=1) -> tuple[np.ndarray, np.ndarray]:
    """Return copies of ``x`` and ``y`` with their strided elements exchanged.

    The elements ``x[0], x[incx], ...`` are exchanged with
    ``y[0], y[incy], ...``; a negative increment pairs the elements in
    reverse order. Both strides must select the same number of elements.
    """
    if incx == 0:
        raise BlasArgumentError("swap", "incx", "increment must not be zero")
    if incy == 0:
        raise BlasArgumentError("swap", "incy", "increment must not be zero")

    first = np.array(x, dtype=float)
    second = np.array(y, dtype=float)
    if first.ndim != 1:
        raise BlasArgumentError("swap", "x", f"expected a vector, got shape {first.shape}")
    if second.ndim != 1:
        raise BlasArgumentError("swap", "y", f"expected a vector, got shape {second.shape}")

    xs = _positions(first.shape[0], incx)
    ys = _positions(second.shape[0], incy)
    if len(xs) != len(ys):
        raise BlasArgumentError(
            "swap", "y", f"strides select {len(xs)} and {len(ys)} elements; they must match"
        )
    if not xs:
        return first, second

    xs_index = np.array(xs)
    ys_index = np.array(ys)
    taken = first[xs_index].copy()
    first[xs_index] = second[ys_index]
    second[ys_index] = taken
    return first, second