"""BLAS kernels, chordal sparsity analysis, problem data and iterates for semidefinite programming."""

__version__ = "0.1.0"

__all__ = [
    "blas_level1",
    "blas_level2",
    "blas_rank",
    "blas_triangular",
    "lapack_env",
    "chordal",
    "inputdata",
    "iterate",
]