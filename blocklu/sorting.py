"""Key/value pair sorting, segmented sums and binary searches used by the kernels."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Any, MutableSequence, Sequence

_INSERTION_LIMIT = 64


def _swap(keys: MutableSequence, values: MutableSequence | None, i: int, j: int) -> None:
    keys[i], keys[j] = keys[j], keys[i]
    if values is not None:
        values[i], values[j] = values[j], values[i]


def _check_pairs(keys: Sequence, values: Sequence | None) -> None:
    if values is not None and len(keys) != len(values):
        raise ValueError("keys and values must have the same length")


def partition_pairs(
    keys: MutableSequence,
    values: MutableSequence | None,
    start: int,
    length: int,
) -> int:
    """Partition ``keys[start:start + length]`` around its first key, in place.

    Values move along with their keys. Smaller keys end up before the pivot,
    the others after it. Returns the index the pivot finally occupies.
    """
    _check_pairs(keys, values)
    if length < 1:
        raise ValueError("length must be at least one")
    if start < 0 or start + length > len(keys):
        raise ValueError("range lies outside the sequence")
    last = start + length - 1
    pivot = keys[start]
    _swap(keys, values, start, last)
    small = start
    for i in range(start, start + length):
        if keys[i] < pivot:
            _swap(keys, values, i, small)
            small += 1
    _swap(keys, values, last, small)
    return small


def _insertion_sort(keys: MutableSequence, values: MutableSequence, lo: int, hi: int) -> None:
    for i in range(lo + 1, hi):
        key, value = keys[i], values[i]
        j = i - 1
        while j >= lo and keys[j] > key:
            keys[j + 1] = keys[j]
            values[j + 1] = values[j]
            j -= 1
        keys[j + 1] = key
        values[j + 1] = value


def insertion_sort_pairs(keys: MutableSequence, values: MutableSequence) -> None:
    """Stable in-place insertion sort of keys, carrying values along."""
    _check_pairs(keys, values)
    _insertion_sort(keys, values, 0, len(keys))


def quick_sort_pairs(keys: MutableSequence, values: MutableSequence) -> None:
    """Sort keys in place, carrying values along.

    Uses a median-of-three rearrangement, returns early on an already sorted
    range, and falls back to insertion sort for ranges of at most 64 items.
    """
    _check_pairs(keys, values)
    pending = [(0, len(keys))]
    while pending:
        lo, length = pending.pop()
        if length < 2:
            continue
        first, last = lo, lo + length - 1
        mid = first + ((last - first) >> 1)
        if keys[mid] > keys[first]:
            _swap(keys, values, mid, first)
        if keys[first] > keys[last]:
            _swap(keys, values, first, last)
        if keys[mid] > keys[last]:
            _swap(keys, values, mid, last)
        segment = keys[lo:lo + length]
        if all(a <= b for a, b in zip(segment, segment[1:])):
            continue
        if length > _INSERTION_LIMIT:
            split = partition_pairs(keys, values, lo, length)
            pending.append((lo, split - lo))
            pending.append((split + 1, lo + length - split - 1))
        else:
            _insertion_sort(keys, values, lo, lo + length)


def segmented_sum(values: MutableSequence[float], flags: Sequence[Any]) -> MutableSequence[float]:
    """Add every unflagged value into the nearest flagged value before it, in place.

    Returns ``values``. Unflagged entries keep their own values.
    """
    if len(values) != len(flags):
        raise ValueError("values and flags must have the same length")
    count = len(values)
    if count < 2:
        return values
    for i in range(count):
        if flags[i]:
            j = i + 1
            while j < count and not flags[j]:
                values[i] += values[j]
                j += 1
    return values


def lower_bound(seq: Sequence, key: Any, lo: int = 0, hi: int | None = None) -> int:
    """Return the first index in ``seq[lo:hi]`` whose item is not less than ``key``."""
    if hi is None:
        hi = len(seq)
    if lo < 0 or hi > len(seq):
        raise ValueError("range lies outside the sequence")
    return bisect_left(seq, key, lo, hi)


def right_boundary(data: Sequence, key: Any, begin: int, end: int) -> int:
    """Return the first index in ``data[begin:end + 1]`` whose item exceeds ``key``.

    ``end`` is inclusive; when no item exceeds ``key`` the result is ``end + 1``.
    """
    if begin < 0 or end >= len(data):
        raise ValueError("range lies outside the sequence")
    if end < begin:
        return begin
    return bisect_right(data, key, begin, end + 1)