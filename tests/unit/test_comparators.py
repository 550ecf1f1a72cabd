"""Tests for typed value and array comparators."""

import math

import pytest

from utilkit.data.comparators import ArrayComparator, TypedComparator, ValueKind, classify, natural_order


class TestClassify:
    @pytest.mark.parametrize(
        "value, kind",
        [
            (True, ValueKind.BOOLEAN),
            (3, ValueKind.INTEGER),
            (3.5, ValueKind.FLOAT),
            ("x", ValueKind.STRING),
            (b"x", ValueKind.BYTES),
        ],
    )
    def test_kinds(self, value, kind) -> None:
        assert classify(value) is kind

    def test_unsupported(self) -> None:
        assert classify([1]) is None


class TestTypedComparator:
    @pytest.fixture
    def comp(self) -> TypedComparator:
        return TypedComparator()

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (1, 2, -1),
            (2, 1, 1),
            (2, 2, 0),
            ("a", "b", -1),
            (False, True, -1),
            (b"b", b"a", 1),
            (1.5, 1.5, 0),
        ],
    )
    def test_same_kind(self, comp: TypedComparator, a, b, expected) -> None:
        assert comp.compare(a, b) == expected

    def test_mismatched_kinds_return_zero(self, comp: TypedComparator, caplog) -> None:
        """Values of different kinds are never ordered."""
        assert comp.compare(1, "1") == 0
        assert comp.compare(1, 1.5) == 0
        assert comp.compare(True, 1) == 0
        assert "non-matching types" in caplog.text

    def test_none_returns_zero(self, comp: TypedComparator) -> None:
        assert comp.compare(None, 1) == 0
        assert comp.compare_type(None, 1) == 1

    def test_nan_is_greatest(self, comp: TypedComparator) -> None:
        assert comp.compare(math.nan, math.inf) == 1
        assert comp.compare(1.0, math.nan) == -1
        assert comp.compare(math.nan, math.nan) == 0

    def test_unsupported_type(self, comp: TypedComparator) -> None:
        assert comp.compare([1], [2]) == 0

    def test_key(self, comp: TypedComparator) -> None:
        assert sorted([3, 1, 2], key=comp.key) == [1, 2, 3]

    def test_callable(self, comp: TypedComparator) -> None:
        assert comp(1, 2) == -1


class TestArrayComparator:
    @pytest.fixture
    def comp(self) -> ArrayComparator:
        return ArrayComparator()

    def test_longer_sorts_first(self, comp: ArrayComparator) -> None:
        assert comp.compare([1, 2, 3], [1, 2]) == -1
        assert comp.compare([1], [1, 2]) == 1

    def test_equal_length(self, comp: ArrayComparator) -> None:
        assert comp.compare([1, 5], [2, 3]) == 0
        assert comp.compare([3, 5], [2, 3]) == 1
        assert comp.compare([1, 1], [2, 3]) == -1

    def test_empty(self, comp: ArrayComparator) -> None:
        assert comp.compare([], []) == 0

    def test_kind_mismatch(self, comp: ArrayComparator) -> None:
        assert comp.compare([1, 2], ["a", "b"]) == 0

    def test_sort_by_key(self, comp: ArrayComparator) -> None:
        rows = [[1], [1, 2, 3], [1, 2]]
        assert sorted(rows, key=comp.key) == [[1, 2, 3], [1, 2], [1]]


def test_natural_order() -> None:
    assert natural_order(1, 2) == -1
    assert natural_order("b", "a") == 1
    assert natural_order(0, 0) == 0
