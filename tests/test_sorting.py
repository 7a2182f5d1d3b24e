from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blocklu.sorting import (
    insertion_sort_pairs,
    lower_bound,
    partition_pairs,
    quick_sort_pairs,
    right_boundary,
    segmented_sum,
)


@given(st.lists(st.integers(-50, 50), min_size=1, max_size=80))
def test_partition_places_pivot(keys):
    keys = list(keys)
    values = [k * 2 for k in keys]
    pivot = keys[0]
    original = Counter(keys)
    pos = partition_pairs(keys, values, 0, len(keys))
    assert keys[pos] == pivot
    assert all(k < pivot for k in keys[:pos])
    assert all(k >= pivot for k in keys[pos + 1:])
    assert values == [k * 2 for k in keys]
    assert Counter(keys) == original


def test_partition_with_offset_leaves_outside_untouched():
    keys = [9, 9, 5, 3, 8, 1, 9]
    values = [float(k) for k in keys]
    pos = partition_pairs(keys, values, 2, 4)
    assert keys[:2] == [9, 9]
    assert keys[6] == 9
    assert keys[pos] == 5
    assert all(k < 5 for k in keys[2:pos])
    assert all(k >= 5 for k in keys[pos + 1:6])
    assert values == [float(k) for k in keys]


def test_partition_without_values():
    keys = [4, 7, 1, 4, 2]
    pos = partition_pairs(keys, None, 0, len(keys))
    assert keys[pos] == 4
    assert sorted(keys[:pos]) == [1, 2]


def test_partition_rejects_bad_range():
    with pytest.raises(ValueError):
        partition_pairs([1, 2], [1.0, 2.0], 1, 3)
    with pytest.raises(ValueError):
        partition_pairs([1, 2], [1.0, 2.0], 0, 0)


def test_insertion_sort_is_stable():
    keys = [2, 1, 2, 1]
    values = [0, 1, 2, 3]
    insertion_sort_pairs(keys, values)
    assert keys == [1, 1, 2, 2]
    assert values == [1, 3, 0, 2]


@given(st.lists(st.tuples(st.integers(-20, 20), st.integers()), max_size=300))
def test_quick_sort_sorts_and_keeps_pairs(pairs):
    keys = [k for k, _ in pairs]
    values = [v for _, v in pairs]
    quick_sort_pairs(keys, values)
    assert keys == sorted(k for k, _ in pairs)
    assert Counter(zip(keys, values)) == Counter(pairs)


def test_quick_sort_large_reversed_input():
    keys = list(range(999, -1, -1))
    values = [float(k) for k in keys]
    quick_sort_pairs(keys, values)
    assert keys == list(range(1000))
    assert values == [float(k) for k in range(1000)]


def test_quick_sort_length_mismatch():
    with pytest.raises(ValueError):
        quick_sort_pairs([1, 2, 3], [1.0])


def test_segmented_sum_example():
    values = [1.0, 2.0, 3.0, 4.0, 5.0]
    result = segmented_sum(values, [1, 0, 0, 1, 0])
    assert result is values
    assert values == [6.0, 2.0, 3.0, 9.0, 5.0]


@given(st.lists(st.tuples(st.integers(-100, 100), st.booleans()), min_size=2, max_size=40))
def test_segmented_sum_heads_hold_total(items):
    values = [float(v) for v, _ in items]
    flags = [True] + [f for _, f in items[1:]]
    total = sum(values)
    original = list(values)
    segmented_sum(values, flags)
    assert sum(v for v, f in zip(values, flags) if f) == total
    assert all(v == o for v, o, f in zip(values, original, flags) if not f)


def test_segmented_sum_length_mismatch():
    with pytest.raises(ValueError):
        segmented_sum([1.0, 2.0], [1])


@given(st.lists(st.integers(0, 30), max_size=40).map(sorted), st.integers(-5, 35))
def test_lower_bound_invariant(seq, key):
    idx = lower_bound(seq, key)
    assert all(v < key for v in seq[:idx])
    assert all(v >= key for v in seq[idx:])


def test_lower_bound_within_range():
    seq = [1, 3, 3, 5, 7, 9]
    idx = lower_bound(seq, 3, 2, 5)
    assert idx == 2
    assert lower_bound(seq, 8, 2, 5) == 5


@given(st.lists(st.integers(0, 30), min_size=1, max_size=40).map(sorted), st.integers(-5, 35))
def test_right_boundary_invariant(data, key):
    end = len(data) - 1
    idx = right_boundary(data, key, 0, end)
    assert all(v <= key for v in data[:idx])
    assert all(v > key for v in data[idx:end + 1])


def test_right_boundary_empty_range_returns_begin():
    assert right_boundary([1, 2, 3], 10, 2, 1) == 2


def test_right_boundary_rejects_out_of_range_end():
    with pytest.raises(ValueError):
        right_boundary([1, 2, 3], 2, 0, 3)