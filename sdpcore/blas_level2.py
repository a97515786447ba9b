"""Level-2 BLAS operations on real matrices: symv, syr2, trmv and trsv.

Matrices are square two-dimensional arrays. Only the triangle named by
``uplo`` is read, and for ``syr2`` only that triangle is written. Every
function returns a new array and leaves its arguments unchanged.
"""

from __future__ import annotations

import numpy as np

__all__ = ["BlasArgumentError", "symv", "syr2", "trmv", "trsv"]


class BlasArgumentError(ValueError):
    """An argument passed to a BLAS routine is not valid."""

    def __init__(self, routine: str, argument: str, detail: str) -> None:
        super().__init__(f"{routine}: invalid argument {argument!r}: {detail}")
        self.routine = routine
        self.argument = argument


def _flag(value, allowed: str, routine: str, argument: str) -> str:
    """Return the upper-case first letter of a flag, checked against ``allowed``."""
    if not isinstance(value, str) or not value or value[0].upper() not in allowed:
        choices = ", ".join(allowed)
        raise BlasArgumentError(routine, argument, f"expected one of {choices}, got {value!r}")
    return value[0].upper()


def _square(a, routine: str) -> np.ndarray:
    matrix = np.array(a, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise BlasArgumentError(routine, "a", f"expected a square matrix, got shape {matrix.shape}")
    return matrix


def _vector(v, n: int, routine: str, argument: str) -> np.ndarray:
    vector = np.array(v, dtype=float)
    if vector.ndim != 1 or vector.shape[0] != n:
        raise BlasArgumentError(
            routine, argument, f"expected a vector of length {n}, got shape {vector.shape}"
        )
    return vector


def _triangle(matrix: np.ndarray, upper: bool, unit: bool) -> np.ndarray:
    tri = np.triu(matrix) if upper else np.tril(matrix)
    if unit:
        np.fill_diagonal(tri, 1.0)
    return tri


def symv(uplo, alpha, a, x, beta, y) -> np.ndarray:
    """Return ``alpha*A*x + beta*y`` for symmetric ``A`` stored in one triangle."""
    upper = _flag(uplo, "UL", "symv", "uplo") == "U"
    matrix = _square(a, "symv")
    n = matrix.shape[0]
    xv = _vector(x, n, "symv", "x")
    result = _vector(y, n, "symv", "y")

    if n == 0 or (alpha == 0.0 and beta == 1.0):
        return result

    if beta == 0.0:
        result = np.zeros(n)
    elif beta != 1.0:
        result = beta * result
    if alpha == 0.0:
        return result

    if upper:
        full = np.triu(matrix) + np.triu(matrix, 1).T
    else:
        full = np.tril(matrix) + np.tril(matrix, -1).T
    return result + alpha * (full @ xv)


def syr2(uplo, alpha, x, y, a) -> np.ndarray:
    """Return ``A + alpha*x*y' + alpha*y*x'`` updated in the named triangle only."""
    upper = _flag(uplo, "UL", "syr2", "uplo") == "U"
    matrix = _square(a, "syr2")
    n = matrix.shape[0]
    xv = _vector(x, n, "syr2", "x")
    yv = _vector(y, n, "syr2", "y")

    if n == 0 or alpha == 0.0:
        return matrix

    update = alpha * (np.outer(xv, yv) + np.outer(yv, xv))
    mask = np.triu(np.ones((n, n), dtype=bool)) if upper else np.tril(np.ones((n, n), dtype=bool))
    matrix[mask] += update[mask]
    return matrix


def trmv(uplo, trans, diag, a, x) -> np.ndarray:
    """Return ``op(A)*x`` for triangular ``A``, where ``op`` is identity or transpose."""
    upper = _flag(uplo, "UL", "trmv", "uplo") == "U"
    transpose = _flag(trans, "NTC", "trmv", "trans") != "N"
    unit = _flag(diag, "UN", "trmv", "diag") == "U"
    matrix = _square(a, "trmv")
    xv = _vector(x, matrix.shape[0], "trmv", "x")

    if matrix.shape[0] == 0:
        return xv
    tri = _triangle(matrix, upper, unit)
    return (tri.T if transpose else tri) @ xv


def trsv(uplo, trans, diag, a, x) -> np.ndarray:
    """Return the solution ``z`` of ``op(A)*z = x`` for triangular ``A``."""
    upper = _flag(uplo, "UL", "trsv", "uplo") == "U"
    transpose = _flag(trans, "NTC", "trsv", "trans") != "N"
    unit = _flag(diag, "UN", "trsv", "diag") == "U"
    matrix = _square(a, "trsv")
    n = matrix.shape[0]
    rhs = _vector(x, n, "trsv", "x")

    if n == 0:
        return rhs
    tri = _triangle(matrix, upper, unit)
    op = tri.T if transpose else tri
    # Transposing swaps which triangle holds the entries.
    solve_upper = upper != transpose

    solution = np.zeros(n)
    order = reversed(range(n)) if solve_upper else range(n)
    for j in order:
        if solve_upper:
            partial = op[j, j + 1:] @ solution[j + 1:]
        else:
            partial = op[j, :j] @ solution[:j]
        solution[j] = (rhs[j] - partial) / op[j, j]
    return solution