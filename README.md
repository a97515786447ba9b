# sdpcore

Building blocks for a primal-dual interior-point solver for semidefinite
programs. It is a library; it has no command-line tool.

## What it contains

- `sdpcore.blas_level1`: `swap(x, y, incx=1, incy=1)` returns copies of two
  vectors with their strided elements exchanged.
- `sdpcore.blas_level2`: `symv`, `syr2`, `trmv` and `trsv`, the symmetric and
  triangular matrix-vector kernels. Invalid flags or shapes raise
  `BlasArgumentError`, a subclass of `ValueError`.
- `sdpcore.blas_rank`: `syrk` and `syr2k`, the symmetric rank-k and rank-2k
  updates.
- `sdpcore.blas_triangular`: `trmm` and `trsm`, the triangular matrix-matrix
  product and solve.
- `sdpcore.lapack_env`: `ilaenv`, the block-size, minimum block-size and
  crossover table for routines named like `Rsytrd` or `Cgetrf`.
- `sdpcore.chordal`: `make_graph` builds the aggregate sparsity pattern of the
  Schur complement matrix. `count_nonzeros` and `best_ordering` measure fill-in,
  and `merge_sorted` merges ascending index lists. `Chordal.ordering_bmat`
  returns the index of the chosen ordering, or `-1` when dense computation is
  better.
- `sdpcore.inputdata`: `InputData` holds `b`, `C` and the constraint spaces
  `A_i`. `build_block_index` and `BlockIndex` record which constraints touch
  each block. `inner_products` computes `A_i . X` and `weighted_sum` computes
  `sum_i y_i A_i`. `display_index` writes the block index to a text file.
- `sdpcore.iterate`: `Solutions.initial` and `Solutions.zero` build the point
  `(X, y, Z)`. `Residuals.compute` computes the primal and dual residuals and
  their max norms, using `max_norm_vector` and `max_norm_blocks`.

The matrix routines take NumPy arrays, or anything that converts to one, and
return a new array. They never modify their arguments. Only the triangle named
by `uplo` is read, and where a triangle is updated, only that one is written.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np
from sdpcore.blas_level2 import trsv

a = np.array([[2.0, 0.0], [1.0, 4.0]])
x = np.array([2.0, 9.0])
z = trsv("L", "N", "N", a, x)   # solves a @ z = x
print(z)                        # [1. 2.]
```

## What it does not do

- It does not solve semidefinite programs. There is no iteration loop, no
  Newton direction and no step-length control.
- It does not read problem files. `InputData` is built from Python mappings
  and arrays.
- It has no fill-reducing ordering algorithms of its own.
  `Chordal.ordering_bmat` calls the orderings that you pass to it. Each ordering
  is a callable that takes the adjacency lists and returns
  `(new_to_old, cliques)`. METIS nested dissection is not supported.
- Second-order cone (SOCP) blocks are handled only in part. They are not
  indexed by `InputData.initialize_index`. They are rejected by
  `Solutions.initial` and `max_norm_blocks`.