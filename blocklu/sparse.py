"""Compressed sparse matrix storage used by the block kernels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass
class CompressedMatrix:
    """A sparse matrix compressed along its columns (CSC) or its rows (CSR).

    ``pointer`` has one entry more than the number of compressed slices.
    Slice ``k`` holds ``indices[pointer[k]:pointer[k + 1]]`` with the values
    alongside. With ``by_column`` true the slices are columns and the indices
    are row numbers; otherwise the slices are rows and the indices columns.
    """

    nrows: int
    ncols: int
    pointer: list[int]
    indices: list[int]
    values: list[float]
    by_column: bool = field(default=True)

    def __post_init__(self) -> None:
        self.pointer = [int(p) for p in self.pointer]
        self.indices = [int(i) for i in self.indices]
        self.values = [float(v) for v in self.values]
        if self.nrows < 0 or self.ncols < 0:
            raise ValueError("matrix dimensions must not be negative")
        major, minor = self._axes()
        if len(self.pointer) != major + 1:
            raise ValueError(
                f"pointer must have {major + 1} entries, got {len(self.pointer)}"
            )
        if self.pointer[0] != 0:
            raise ValueError("pointer must start at zero")
        if any(a > b for a, b in zip(self.pointer, self.pointer[1:])):
            raise ValueError("pointer must be non-decreasing")
        if len(self.indices) != len(self.values):
            raise ValueError("indices and values must have the same length")
        if self.pointer[-1] != len(self.indices):
            raise ValueError("last pointer entry must equal the number of entries")
        if any(not 0 <= i < minor for i in self.indices):
            raise ValueError("index out of range")

    def _axes(self) -> tuple[int, int]:
        if self.by_column:
            return self.ncols, self.nrows
        return self.nrows, self.ncols

    def _slices(self):
        for k, (lo, hi) in enumerate(zip(self.pointer, self.pointer[1:])):
            yield k, lo, hi

    @classmethod
    def from_dense(cls, dense: Sequence[Sequence[float]]) -> "CompressedMatrix":
        """Build a column-compressed matrix from rows of a dense matrix, skipping zeros."""
        rows = [list(r) for r in dense]
        nrows = len(rows)
        ncols = len(rows[0]) if rows else 0
        if any(len(r) != ncols for r in rows):
            raise ValueError("dense matrix rows must all have the same length")
        pointer = [0]
        indices: list[int] = []
        values: list[float] = []
        for c in range(ncols):
            for r, row in enumerate(rows):
                if row[c] != 0:
                    indices.append(r)
                    values.append(float(row[c]))
            pointer.append(len(indices))
        return cls(nrows, ncols, pointer, indices, values, by_column=True)

    def to_dense(self) -> list[list[float]]:
        """Return the matrix as a list of dense rows."""
        dense = [[0.0] * self.ncols for _ in range(self.nrows)]
        for k, lo, hi in self._slices():
            for idx, val in zip(self.indices[lo:hi], self.values[lo:hi]):
                if self.by_column:
                    dense[idx][k] += val
                else:
                    dense[k][idx] += val
        return dense

    def transposed(self) -> "CompressedMatrix":
        """Return the transpose, compressed along the same kind of axis.

        The arrays of the result are those of this matrix compressed along
        the other axis, with indices in ascending order within each slice.
        """
        _, minor = self._axes()
        counts = [0] * minor
        for idx in self.indices:
            counts[idx] += 1
        pointer = [0]
        for count in counts:
            pointer.append(pointer[-1] + count)
        cursor = pointer[:-1]
        indices = [0] * len(self.indices)
        values = [0.0] * len(self.values)
        for k, lo, hi in self._slices():
            for idx, val in zip(self.indices[lo:hi], self.values[lo:hi]):
                slot = cursor[idx]
                indices[slot] = k
                values[slot] = val
                cursor[idx] += 1
        return CompressedMatrix(
            self.ncols, self.nrows, pointer, indices, values, by_column=self.by_column
        )

    def sort_indices(self) -> None:
        """Sort the entries of every slice by index, in place."""
        for _, lo, hi in self._slices():
            pairs = sorted(zip(self.indices[lo:hi], self.values[lo:hi]), key=lambda p: p[0])
            self.indices[lo:hi] = [i for i, _ in pairs]
            self.values[lo:hi] = [v for _, v in pairs]

    def copy(self) -> "CompressedMatrix":
        """Return an independent copy."""
        return CompressedMatrix(
            self.nrows,
            self.ncols,
            list(self.pointer),
            list(self.indices),
            list(self.values),
            by_column=self.by_column,
        )