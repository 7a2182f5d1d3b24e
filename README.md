# blocklu

Pure-Python pieces for block-partitioned sparse LU factorization: compressed
sparse storage, the symbolic phase that finds the fill-in of the factors,
key/value sorting and search helpers, and kernel timing. It needs nothing
outside the standard library.

## Modules

### `blocklu.sparse`

`CompressedMatrix(nrows, ncols, pointer, indices, values, by_column=True)`
holds a matrix compressed along its columns (CSC, `by_column=True`) or its
rows (CSR, `by_column=False`). Slice `k` is
`indices[pointer[k]:pointer[k + 1]]` with its `values`. The constructor
checks the arrays and raises `ValueError` when they are inconsistent.

- `CompressedMatrix.from_dense(rows)` builds a CSC matrix from dense rows.
  Zeros are skipped.
- `to_dense()` returns a list of dense rows.
- `transposed()` returns the transpose compressed the same way, with the
  indices ascending within each slice.
- `sort_indices()` sorts each slice by index, in place.
- `copy()` returns an independent copy.

### `blocklu.symbolic`

Patterns are column-compressed `(colptr, rowind)` pairs.

- `at_plus_a(n, colptr, rowind)` returns the pattern of `A + Aᵀ`.
- `symmetric_fill_in(n, colptr, rowind, nb, block_length)` computes the
  pattern of L for a structurally symmetric pattern. It returns a
  `BlockSymbolic` with the following fields:
  - `colptr` and `rowind`: the pattern of L.
  - `nnz`: the nonzeros of L and U together, with the diagonal counted once.
  - `block_nnz`: a flat `block_length × block_length` table of nonzeros per
    block of size `nb`.
  - `diagonal_l` and `diagonal_u`: the counts for the diagonal blocks.
- `unsymmetric_fill_in(n, colptr, rowind)` computes the L and U patterns of
  LU without pivoting, using a pruned depth-first search. It returns
  `(l_colptr, l_rowind, u_colptr, u_rowind)`, with each column sorted.
- `symbolic_factorize(matrix, nb, symmetric=True)` runs the symbolic phase on
  a square `CompressedMatrix`.
  - With `symmetric=True` it symmetrizes the pattern first and returns a
    `BlockSymbolic`.
  - With `symmetric=False` it returns the result of `unsymmetric_fill_in`.

### `blocklu.sorting`

- `quick_sort_pairs(keys, values)` sorts keys in place and carries the
  values along. Ranges of 64 items or fewer fall back to
  `insertion_sort_pairs(keys, values)`.
- `partition_pairs(keys, values, start, length)` partitions a range around
  its first key and returns the final index of the pivot.
- `segmented_sum(values, flags)` adds each unflagged value into the nearest
  flagged value before it.
- `lower_bound(seq, key, lo=0, hi=None)` returns the first index in the
  range whose item is not less than `key`.
- `right_boundary(data, key, begin, end)` returns the first index in the
  range whose item is greater than `key`. Here `end` is inclusive.

### `blocklu.timing`

- `Stopwatch` has `start()` and `stop()`, and `stop()` returns the elapsed
  seconds. It also works as a context manager.
- `KernelTimes` is a dataclass of per-phase second counters. `reset()` sets
  every counter to zero. `summary(rank)` returns a tab-separated line with
  the following fields:
  - the rank;
  - the wait time;
  - the getrf, tstrf, gessm and ssssm times;
  - their total;
  - the copy time.

## Example

```python
from blocklu.sparse import CompressedMatrix
from blocklu.symbolic import symbolic_factorize, unsymmetric_fill_in

a = CompressedMatrix.from_dense([
    [4.0, 1.0, 0.0],
    [0.0, 3.0, 0.0],
    [2.0, 0.0, 5.0],
])
result = symbolic_factorize(a, nb=2)                   # BlockSymbolic
l_ptr, l_idx, u_ptr, u_idx = unsymmetric_fill_in(3, a.pointer, a.indices)
```

## What this package does not do

The package computes only structure. It has no numeric kernels: no
triangular solves, no off-diagonal block updates, no Schur-complement
updates. It also has no task scheduling, no distributed execution and no
command-line program.

## Installation and tests

```
pip install .
pip install ".[test]"
pytest
```