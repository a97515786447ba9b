"""Current iterate of the interior-point method and its residuals.

Dense spaces are mappings with the keys ``"sdp"`` (a list of square
arrays), ``"socp"`` (a list of vectors) and ``"lp"`` (a vector with one
entry per LP block), as in :mod:`sdpcore.inputdata`.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from sdpcore.inputdata import InputData

__all__ = ["max_norm_vector", "max_norm_blocks", "Solutions", "Residuals"]


def max_norm_vector(vec) -> float:
    """Return the largest absolute entry of ``vec``, or 0 when it is empty."""
    values = np.asarray(vec, dtype=float).ravel()
    if values.size == 0:
        return 0.0
    return float(np.max(np.abs(values)))


def max_norm_blocks(sdp_blocks: Iterable, socp_blocks: Iterable, lp_block) -> float:
    """Return the largest absolute entry over all blocks of a dense space.

    SOCP blocks are not supported and raise :class:`ValueError`.
    """
    result = 0.0
    for block in sdp_blocks:
        result = max(result, max_norm_vector(block))
    if any(True for _ in socp_blocks):
        raise ValueError("SOCP blocks are not supported")
    return max(result, max_norm_vector(lp_block))


def _scaled_identity(
    sdp_block_struct: Sequence[int], lp_nblock: int, value: float
) -> dict[str, Any]:
    return {
        "sdp": [value * np.eye(size) for size in sdp_block_struct],
        "socp": [],
        "lp": np.full(lp_nblock, value, dtype=float),
    }


def _zero_space(
    sdp_block_struct: Sequence[int], socp_block_struct: Sequence[int], lp_nblock: int
) -> dict[str, Any]:
    return {
        "sdp": [np.zeros((size, size)) for size in sdp_block_struct],
        "socp": [np.zeros(size) for size in socp_block_struct],
        "lp": np.zeros(lp_nblock),
    }


def _check_struct(sdp_block_struct, socp_block_struct, lp_nblock) -> None:
    if any(size < 0 for size in sdp_block_struct) or any(s < 0 for s in socp_block_struct):
        raise ValueError("block sizes must not be negative")
    if lp_nblock < 0:
        raise ValueError(f"number of LP blocks must not be negative, got {lp_nblock}")


@dataclass
class Solutions:
    """Primal matrix ``x_mat``, dual vector ``y_vec`` and dual slack ``z_mat``.

    The inverse Cholesky factors of ``x_mat`` and ``z_mat`` and the inverse
    of ``z_mat`` are kept alongside; they are ``None`` for an iterate made
    by :meth:`zero`.
    """

    m_dim: int
    n_dim: int
    x_mat: dict[str, Any]
    y_vec: np.ndarray
    z_mat: dict[str, Any]
    inv_cholesky_x: dict[str, Any] | None = None
    inv_cholesky_z: dict[str, Any] | None = None
    inv_z_mat: dict[str, Any] | None = None
    xz_min_eigenvalue: float = 1.0

    @classmethod
    def initial(cls, m, sdp_block_struct, socp_block_struct, lp_nblock, lambda_) -> "Solutions":
        """Return the starting point ``X = Z = lambda*I``, ``y = 0``."""
        sdp_block_struct = list(sdp_block_struct)
        socp_block_struct = list(socp_block_struct)
        _check_struct(sdp_block_struct, socp_block_struct, lp_nblock)
        if socp_block_struct:
            raise ValueError("SOCP blocks are not supported")
        if not lambda_ > 0:
            raise ValueError(f"lambda must be positive, got {lambda_}")
        if m < 0:
            raise ValueError(f"number of constraints must not be negative, got {m}")
        n_dim = sum(sdp_block_struct) + sum(socp_block_struct) + lp_nblock
        root = 1.0 / math.sqrt(lambda_)
        return cls(
            m_dim=m,
            n_dim=n_dim,
            x_mat=_scaled_identity(sdp_block_struct, lp_nblock, lambda_),
            y_vec=np.zeros(m),
            z_mat=_scaled_identity(sdp_block_struct, lp_nblock, lambda_),
            inv_cholesky_x=_scaled_identity(sdp_block_struct, lp_nblock, root),
            inv_cholesky_z=_scaled_identity(sdp_block_struct, lp_nblock, root),
            inv_z_mat=_scaled_identity(sdp_block_struct, lp_nblock, 1.0 / lambda_),
        )

    @classmethod
    def zero(cls, m, sdp_block_struct, socp_block_struct, lp_nblock) -> "Solutions":
        """Return an all-zero iterate, to be filled in with a given initial point."""
        sdp_block_struct = list(sdp_block_struct)
        socp_block_struct = list(socp_block_struct)
        _check_struct(sdp_block_struct, socp_block_struct, lp_nblock)
        if m < 0:
            raise ValueError(f"number of constraints must not be negative, got {m}")
        n_dim = sum(sdp_block_struct) + sum(socp_block_struct) + lp_nblock
        return cls(
            m_dim=m,
            n_dim=n_dim,
            x_mat=_zero_space(sdp_block_struct, socp_block_struct, lp_nblock),
            y_vec=np.zeros(m),
            z_mat=_zero_space(sdp_block_struct, socp_block_struct, lp_nblock),
        )

    def copy(self) -> "Solutions":
        """Return an independent copy of this iterate."""
        return copy.deepcopy(self)


def _add_sparse(dense: dict[str, Any], sparse: Mapping[str, Any]) -> None:
    for block, matrix in (sparse.get("sdp") or {}).items():
        dense["sdp"][block] = dense["sdp"][block] + np.asarray(matrix, dtype=float)
    for block, vector in (sparse.get("socp") or {}).items():
        dense["socp"][block] = dense["socp"][block] + np.asarray(vector, dtype=float)
    for block, value in (sparse.get("lp") or {}).items():
        dense["lp"][block] += float(value)


@dataclass
class Residuals:
    """Primal residual ``b - A.X`` and dual residual ``C - Z - sum A_i y_i``."""

    primal_vec: np.ndarray = field(default_factory=lambda: np.zeros(0))
    dual_mat: dict[str, Any] = field(
        default_factory=lambda: {"sdp": [], "socp": [], "lp": np.zeros(0)}
    )
    norm_primal_vec: float = 0.0
    norm_dual_mat: float = 0.0
    center_norm: float = 0.0

    def compute(self, input_data: InputData, solutions: Solutions) -> "Residuals":
        """Recompute both residuals and their max norms; return ``self``."""
        self.primal_vec = input_data.b - input_data.inner_products(solutions.x_mat)

        dual = input_data.weighted_sum(solutions.y_vec)
        dual = {
            "sdp": [-block for block in dual["sdp"]],
            "socp": [-block for block in dual["socp"]],
            "lp": -np.asarray(dual["lp"], dtype=float),
        }
        _add_sparse(dual, input_data.c)
        z = solutions.z_mat
        dual["sdp"] = [d - np.asarray(zb, dtype=float) for d, zb in zip(dual["sdp"], z["sdp"])]
        dual["socp"] = [
            d - np.asarray(zb, dtype=float) for d, zb in zip(dual["socp"], z.get("socp", []))
        ]
        dual["lp"] = dual["lp"] - np.asarray(z["lp"], dtype=float)
        self.dual_mat = dual

        self.norm_primal_vec = max_norm_vector(self.primal_vec)
        self.norm_dual_mat = max_norm_blocks(dual["sdp"], dual["socp"], dual["lp"])
        self.center_norm = 0.0
        return self