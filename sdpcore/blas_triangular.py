"""Level-3 BLAS operations with a triangular factor: trmm and trsm.

``A`` is a square matrix of which only the triangle named by ``uplo`` is
read; with ``diag='U'`` its diagonal is taken to be all ones. ``B`` is an
m-by-n matrix. Both functions return a new array and leave their
arguments unchanged.
"""

from __future__ import annotations

import numpy as np

from sdpcore.blas_level2 import BlasArgumentError, _flag, _triangle

__all__ = ["trmm", "trsm"]


def _prepare(routine, side, uplo, transa, diag, a, b):
    left = _flag(side, "LR", routine, "side") == "L"
    upper = _flag(uplo, "UL", routine, "uplo") == "U"
    transpose = _flag(transa, "NTC", routine, "transa") != "N"
    unit = _flag(diag, "UN", routine, "diag") == "U"

    rhs = np.array(b, dtype=float)
    if rhs.ndim != 2:
        raise BlasArgumentError(routine, "b", f"expected a matrix, got shape {rhs.shape}")
    m, n = rhs.shape
    order = m if left else n

    matrix = np.array(a, dtype=float)
    if matrix.ndim != 2 or matrix.shape != (order, order):
        raise BlasArgumentError(
            routine, "a", f"expected a {order}-by-{order} matrix, got shape {matrix.shape}"
        )
    return left, upper, transpose, unit, matrix, rhs


def trmm(side, uplo, transa, diag, alpha, a, b) -> np.ndarray:
    """Return ``alpha*op(A)*B`` (``side='L'``) or ``alpha*B*op(A)`` (``side='R'``)."""
    left, upper, transpose, unit, matrix, rhs = _prepare(
        "trmm", side, uplo, transa, diag, a, b
    )
    if rhs.size == 0:
        return rhs
    if alpha == 0.0:
        return np.zeros_like(rhs)

    tri = _triangle(matrix, upper, unit)
    op = tri.T if transpose else tri
    product = op @ rhs if left else rhs @ op
    return alpha * product


def _substitute(op: np.ndarray, upper: bool, rhs: np.ndarray) -> np.ndarray:
    """Solve ``op*X = rhs`` for triangular ``op`` by substitution, row by row."""
    size = op.shape[0]
    solution = np.zeros_like(rhs)
    order = reversed(range(size)) if upper else range(size)
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in order:
            if upper:
                partial = op[i, i + 1:] @ solution[i + 1:]
            else:
                partial = op[i, :i] @ solution[:i]
            solution[i] = (rhs[i] - partial) / op[i, i]
    return solution


def trsm(side, uplo, transa, diag, alpha, a, b) -> np.ndarray:
    """Return ``X`` solving ``op(A)*X = alpha*B`` or ``X*op(A) = alpha*B``."""
    left, upper, transpose, unit, matrix, rhs = _prepare(
        "trsm", side, uplo, transa, diag, a, b
    )
    if rhs.size == 0:
        return rhs
    if alpha == 0.0:
        return np.zeros_like(rhs)

    tri = _triangle(matrix, upper, unit)
    op = tri.T if transpose else tri
    scaled = alpha * rhs
    # op is upper triangular exactly when one of "upper" and "transposed" holds.
    op_upper = upper != transpose
    if left:
        return _substitute(op, op_upper, scaled)
    # X*op = B  is  op'*X' = B'.
    return _substitute(op.T, not op_upper, scaled.T).T