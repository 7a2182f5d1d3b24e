"""Symbolic factorisation: the nonzero patterns of the L and U factors.

Patterns are given column-compressed: column ``j`` holds the row indices
``rowind[colptr[j]:colptr[j + 1]]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain, pairwise
from typing import Sequence

from blocklu.sparse import CompressedMatrix

_Pattern = tuple[list[int], list[int]]


@dataclass
class BlockSymbolic:
    """Lower-triangular fill pattern of a symmetric pattern, with per-block counts.

    ``colptr`` and ``rowind`` give the pattern of L, diagonal included.
    ``nnz`` is the number of nonzeros of L and U together, counting the
    diagonal once. ``block_nnz`` is a flat ``block_length`` by
    ``block_length`` table of nonzeros per block; ``diagonal_l`` and
    ``diagonal_u`` hold the L and U counts of each diagonal block.
    """

    colptr: list[int]
    rowind: list[int]
    nnz: int
    block_nnz: list[int]
    diagonal_l: list[int]
    diagonal_u: list[int]
    nb: int
    block_length: int


def _check_pattern(n: int, colptr: Sequence[int], rowind: Sequence[int]) -> tuple[list[int], list[int]]:
    if n < 0:
        raise ValueError("n must not be negative")
    colptr = [int(p) for p in colptr]
    rowind = [int(r) for r in rowind]
    if len(colptr) != n + 1:
        raise ValueError(f"colptr must have {n + 1} entries, got {len(colptr)}")
    if colptr[0] != 0:
        raise ValueError("colptr must start at zero")
    if any(a > b for a, b in pairwise(colptr)):
        raise ValueError("colptr must be non-decreasing")
    if colptr[-1] > len(rowind):
        raise ValueError("colptr refers past the end of rowind")
    if any(not 0 <= r < n for r in rowind[: colptr[-1]]):
        raise ValueError("row index out of range")
    return colptr, rowind


def at_plus_a(n: int, colptr: Sequence[int], rowind: Sequence[int]) -> _Pattern:
    """Return the pattern of ``A + A^T`` as ``(colptr, rowind)``.

    Each column lists the rows of the column of ``A`` first, then the new
    rows contributed by ``A^T``, without duplicates. The diagonal is kept
    where ``A`` has it.
    """
    colptr, rowind = _check_pattern(n, colptr, rowind)
    transposed: list[list[int]] = [[] for _ in range(n)]
    for j, (lo, hi) in enumerate(pairwise(colptr)):
        for r in rowind[lo:hi]:
            transposed[r].append(j)
    out_ptr = [0]
    out_idx: list[int] = []
    for j, (lo, hi) in enumerate(pairwise(colptr)):
        out_idx.extend(dict.fromkeys(chain(rowind[lo:hi], transposed[j])))
        out_ptr.append(len(out_idx))
    return out_ptr, out_idx


def symmetric_fill_in(
    n: int,
    colptr: Sequence[int],
    rowind: Sequence[int],
    nb: int,
    block_length: int,
) -> BlockSymbolic:
    """Compute the L pattern of a structurally symmetric matrix and its block counts.

    Column ``i`` of L takes the rows ``>= i`` of column ``i`` of the input and
    the rows below ``i`` of every column whose first off-diagonal row is
    ``i``. The block table counts each lower block, mirrors it to the upper
    side, stores ``2 * count - nb`` on the diagonal and adds ``nb - n % nb``
    to the last diagonal block.
    """
    colptr, rowind = _check_pattern(n, colptr, rowind)
    if nb < 1:
        raise ValueError("nb must be at least one")
    if block_length < 1 or block_length * nb < n:
        raise ValueError("block_length is too small for the matrix size")

    counts = [0] * (block_length * block_length)
    marker = [-1] * n
    children: list[list[int]] = [[] for _ in range(n)]
    l_ptr = [0]
    l_idx: list[int] = []

    for i in range(n):
        fresh = [r for r in rowind[colptr[i]:colptr[i + 1]] if r >= i]
        for r in fresh:
            marker[r] = i
        for child in children[i]:
            for crow in l_idx[l_ptr[child]:l_ptr[child + 1]]:
                if crow > i and marker[crow] != i:
                    marker[crow] = i
                    fresh.append(crow)
        base = (i // nb) * block_length
        for r in fresh:
            counts[base + r // nb] += 1
        l_idx.extend(fresh)
        l_ptr.append(len(l_idx))
        if len(fresh) > 1:
            below = [r for r in fresh if r > i]
            if below:
                children[min(below)].append(i)

    diagonal = [counts[b * block_length + b] for b in range(block_length)]
    for b in range(block_length):
        counts[b * block_length + b] = diagonal[b] * 2 - nb
        for j in range(b + 1, block_length):
            counts[j * block_length + b] = counts[b * block_length + j]
    counts[-1] += nb - n % nb

    return BlockSymbolic(
        colptr=l_ptr,
        rowind=l_idx,
        nnz=len(l_idx) * 2 - n,
        block_nnz=counts,
        diagonal_l=list(diagonal),
        diagonal_u=list(diagonal),
        nb=nb,
        block_length=block_length,
    )


def _prune(
    jcol: int,
    u_ptr: list[int],
    u_idx: list[int],
    l_ptr: list[int],
    l_idx: list[int],
    marker: list[int],
    prune_end: list[int],
) -> None:
    for crow in u_idx[u_ptr[jcol]:u_ptr[jcol + 1]]:
        lo, hi = l_ptr[crow], prune_end[crow]
        if jcol in l_idx[lo:hi]:
            j = lo
            while j < hi:
                r = l_idx[j]
                if r > jcol and marker[r] == jcol:
                    l_idx[j], l_idx[hi - 1] = l_idx[hi - 1], l_idx[j]
                    hi -= 1
                else:
                    j += 1
        prune_end[crow] = hi


def unsymmetric_fill_in(
    n: int, colptr: Sequence[int], rowind: Sequence[int]
) -> tuple[list[int], list[int], list[int], list[int]]:
    """Compute the L and U patterns of LU factorisation without pivoting.

    Each column is found by depth-first search through the pruned columns of
    L already computed. Returns ``(l_colptr, l_rowind, u_colptr, u_rowind)``;
    L holds the rows ``>= j`` of column ``j``, U the rows above it, each
    column in ascending order.
    """
    colptr, rowind = _check_pattern(n, colptr, rowind)
    marker = [-1] * n
    parent = [-1] * n
    explore = [0] * n
    prune_end = [0] * n
    l_ptr, u_ptr = [0], [0]
    l_idx: list[int] = []
    u_idx: list[int] = []

    for i in range(n):
        for row in rowind[colptr[i]:colptr[i + 1]]:
            if marker[row] == i:
                continue
            marker[row] = i
            if row >= i:
                l_idx.append(row)
                continue
            u_idx.append(row)
            parent[row] = -1
            node, pos, end = row, l_ptr[row], prune_end[row]
            while True:
                while pos < end:
                    child = l_idx[pos]
                    pos += 1
                    if marker[child] == i:
                        continue
                    marker[child] = i
                    if child >= i:
                        l_idx.append(child)
                    else:
                        u_idx.append(child)
                        explore[node] = pos
                        parent[child] = node
                        node, pos, end = child, l_ptr[child], prune_end[child]
                up = parent[node]
                if up == -1:
                    break
                node, pos, end = up, explore[up], prune_end[up]
        l_ptr.append(len(l_idx))
        u_ptr.append(len(u_idx))
        prune_end[i] = len(l_idx)
        _prune(i, u_ptr, u_idx, l_ptr, l_idx, marker, prune_end)

    for ptr, idx in ((l_ptr, l_idx), (u_ptr, u_idx)):
        for lo, hi in pairwise(ptr):
            idx[lo:hi] = sorted(idx[lo:hi])
    return l_ptr, l_idx, u_ptr, u_idx


def symbolic_factorize(matrix: CompressedMatrix, nb: int, symmetric: bool = True):
    """Run the symbolic phase on the pattern of ``matrix``.

    The compressed slices of ``matrix`` are read as columns. With
    ``symmetric`` the pattern is first made symmetric and a
    :class:`BlockSymbolic` with blocks of size ``nb`` is returned; otherwise
    the result of :func:`unsymmetric_fill_in` is returned.
    """
    if matrix.nrows != matrix.ncols:
        raise ValueError("matrix must be square")
    n = matrix.nrows
    if not symmetric:
        return unsymmetric_fill_in(n, matrix.pointer, matrix.indices)
    if nb < 1:
        raise ValueError("nb must be at least one")
    colptr, rowind = at_plus_a(n, matrix.pointer, matrix.indices)
    block_length = max(1, -(-n // nb))
    return symmetric_fill_in(n, colptr, rowind, nb, block_length)