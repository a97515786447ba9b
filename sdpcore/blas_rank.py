"""Symmetric rank-k and rank-2k updates: syrk and syr2k.

``C`` is a square symmetric matrix stored in the triangle named by
``uplo``. Only that triangle is read and written; the other triangle of
the returned array is copied from ``c`` unchanged. Arguments are never
modified in place.
"""

from __future__ import annotations

import numpy as np

from sdpcore.blas_level2 import BlasArgumentError, _flag

__all__ = ["syrk", "syr2k"]


def _target(c, routine: str) -> np.ndarray:
    matrix = np.array(c, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise BlasArgumentError(routine, "c", f"expected a square matrix, got shape {matrix.shape}")
    return matrix


def _factor(a, n: int, transpose: bool, routine: str, argument: str) -> np.ndarray:
    """Check that ``a`` is n-by-k (or k-by-n when transposed) and return it."""
    matrix = np.array(a, dtype=float)
    if matrix.ndim != 2:
        raise BlasArgumentError(routine, argument, f"expected a matrix, got shape {matrix.shape}")
    rows = matrix.shape[1] if transpose else matrix.shape[0]
    if rows != n:
        layout = "k-by-n" if transpose else "n-by-k"
        raise BlasArgumentError(
            routine, argument, f"expected an {layout} matrix with n={n}, got shape {matrix.shape}"
        )
    return matrix


def _mask(n: int, upper: bool) -> np.ndarray:
    ones = np.ones((n, n), dtype=bool)
    return np.triu(ones) if upper else np.tril(ones)


def _update(result: np.ndarray, mask: np.ndarray, alpha, product, beta) -> np.ndarray:
    """Write ``alpha*product + beta*C`` into the masked triangle of ``result``."""
    if alpha == 0.0:
        if beta == 0.0:
            result[mask] = 0.0
        else:
            result[mask] = beta * result[mask]
        return result
    if beta == 0.0:
        result[mask] = alpha * product[mask]
    else:
        result[mask] = beta * result[mask] + alpha * product[mask]
    return result


def syrk(uplo, trans, alpha, a, beta, c) -> np.ndarray:
    """Return ``alpha*A*A' + beta*C`` (``trans='N'``) or ``alpha*A'*A + beta*C``."""
    upper = _flag(uplo, "UL", "syrk", "uplo") == "U"
    transpose = _flag(trans, "NTC", "syrk", "trans") != "N"
    result = _target(c, "syrk")
    n = result.shape[0]
    factor = _factor(a, n, transpose, "syrk", "a")
    k = factor.shape[0] if transpose else factor.shape[1]

    if n == 0 or ((alpha == 0.0 or k == 0) and beta == 1.0):
        return result

    product = None
    if alpha != 0.0:
        product = factor.T @ factor if transpose else factor @ factor.T
    return _update(result, _mask(n, upper), alpha, product, beta)


def syr2k(uplo, trans, alpha, a, b, beta, c) -> np.ndarray:
    """Return ``alpha*A*B' + alpha*B*A' + beta*C``, or the transposed form."""
    upper = _flag(uplo, "UL", "syr2k", "uplo") == "U"
    transpose = _flag(trans, "NTC", "syr2k", "trans") != "N"
    result = _target(c, "syr2k")
    n = result.shape[0]
    first = _factor(a, n, transpose, "syr2k", "a")
    second = _factor(b, n, transpose, "syr2k", "b")
    if first.shape != second.shape:
        raise BlasArgumentError(
            "syr2k", "b", f"expected the shape of a {first.shape}, got {second.shape}"
        )
    k = first.shape[0] if transpose else first.shape[1]

    if n == 0 or ((alpha == 0.0 or k == 0) and beta == 1.0):
        return result

    product = None
    if alpha != 0.0:
        if transpose:
            product = first.T @ second + second.T @ first
        else:
            product = first @ second.T + second @ first.T
    return _update(result, _mask(n, upper), alpha, product, beta)