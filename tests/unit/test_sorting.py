"""Tests for heap, merge and quick sort."""

import random

import pytest

from utilkit.data.comparators import TypedComparator
from utilkit.data.sorting import HeapSort, MergeSort, QuickSort, heapsort, mergesort, quicksort

SORTERS = [HeapSort, MergeSort, QuickSort]


@pytest.mark.parametrize("sorter", SORTERS)
class TestSorters:
    """Behaviour shared by every algorithm."""

    def test_small_example(self, sorter) -> None:
        assert sorter([5, 3, 4, 1, 2]).sort() == [1, 2, 3, 4, 5]

    def test_empty_and_single(self, sorter) -> None:
        assert sorter([]).sort() == []
        assert sorter([7]).sort() == [7]

    def test_duplicates(self, sorter) -> None:
        assert sorter([3, 1, 3, 2, 1]).sort() == [1, 1, 2, 3, 3]

    def test_input_not_modified(self, sorter) -> None:
        data = [3, 2, 1]
        sorter(data).sort()
        assert data == [3, 2, 1]

    def test_is_sorted(self, sorter) -> None:
        s = sorter([2, 1, 3])
        assert not s.is_sorted()
        s.sort()
        assert s.is_sorted()

    def test_custom_comparator_descending(self, sorter) -> None:
        desc = lambda a, b: (b > a) - (b < a)  # noqa: E731
        assert sorter([1, 3, 2], desc).sort() == [3, 2, 1]

    def test_typed_comparator(self, sorter) -> None:
        assert sorter(["pear", "apple", "fig"], TypedComparator()).sort() == ["apple", "fig", "pear"]

    def test_matches_sorted(self, sorter) -> None:
        rng = random.Random(1234)
        data = [rng.randint(-1000, 1000) for _ in range(500)]
        assert sorter(data).sort() == sorted(data)

    def test_str(self, sorter) -> None:
        s = sorter([2, 1])
        s.sort()
        assert str(s) == "1 2"


def test_all_algorithms_agree() -> None:
    rng = random.Random(99)
    data = [rng.random() for _ in range(200)]
    assert heapsort(data) == mergesort(data) == quicksort(data)


def test_quicksort_sorted_input_does_not_overflow_stack() -> None:
    """Already-sorted input is the worst case for a last-element pivot."""
    data = list(range(2000))
    assert quicksort(data) == data
    assert quicksort(list(reversed(data))) == data


def test_mergesort_is_stable() -> None:
    pairs = [(1, "a"), (0, "b"), (1, "c"), (0, "d")]
    by_key = lambda x, y: (x[0] > y[0]) - (x[0] < y[0])  # noqa: E731
    assert mergesort(pairs, by_key) == [(0, "b"), (0, "d"), (1, "a"), (1, "c")]
