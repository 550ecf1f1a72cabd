"""Tests for integer math helpers."""

import pytest

from utilkit.numeric import mathutils as mu


class TestSums:
    def test_simple(self) -> None:
        assert mu.simple_summation(10) == 55
        assert mu.simple_summation_between(3, 5) == 9

    def test_geometric(self) -> None:
        assert mu.geometric_summation(3, 2, 4) == 3 + 6 + 12 + 24
        assert mu.geometric_summation(3, 1, 4) == 0

    def test_binomial(self) -> None:
        assert mu.binomial_summation(2, 3, 3) == 125
        assert mu.binomial_summation(2, 3, 0) == 1
        assert mu.choose_summation(5) == 32


class TestCombinatorics:
    def test_factorial(self) -> None:
        assert mu.factorial(0) == 1
        assert mu.factorial(5) == 120

    def test_choose(self) -> None:
        assert mu.choose(5, 2) == 10
        assert mu.choose(5, 6) == 0
        assert mu.choose(5, -1) == 0

    def test_pascal_row(self) -> None:
        assert mu.pascal_row(1) == [1]
        assert mu.pascal_row(5) == [1, 4, 6, 4, 1]
        assert mu.pascal_row(0) == []

    def test_catalan(self) -> None:
        assert [mu.count_valid_parentheses(n) for n in range(1, 6)] == [1, 2, 5, 14, 42]

    def test_magic_constant(self) -> None:
        assert mu.magic_square_constant(3) == 15
        assert mu.magic_square_constant(4) == 34


class TestNumberTheory:
    def test_gcd(self) -> None:
        assert mu.gcd(12, 18) == 6
        assert mu.are_relative_prime(8, 15)
        assert not mu.are_relative_prime(8, 12)

    @pytest.mark.parametrize("x, expected", [(0, False), (1, False), (2, True), (9, False), (97, True)])
    def test_is_prime(self, x: int, expected: bool) -> None:
        assert mu.is_prime(x) is expected

    def test_fibonacci(self) -> None:
        assert [mu.fibonacci(n) for n in range(8)] == [0, 1, 1, 2, 3, 5, 8, 13]
        assert mu.fibonacci_memo(50) == mu.fibonacci(50)


class TestArrays:
    def test_bounds(self) -> None:
        assert mu.array_max([3, 9, 1]) == 9
        assert mu.array_min([3, 9, 1]) == 1
        with pytest.raises(ValueError):
            mu.array_max([])

    def test_sum_min_max(self) -> None:
        assert mu.sum_min_max([1, 2, 3, 4, 5]) == (10, 14)

    def test_non_adjacent(self) -> None:
        assert mu.max_non_adjacent_subset_sum([3, 7, 4, 6, 5]) == 13
        assert mu.max_non_adjacent_subset_sum([-1, -2]) == 0

    def test_indices_with_sum(self) -> None:
        assert mu.first_two_indices_with_sum([2, 7, 11, 15], 9) == (1, 2)
        assert mu.first_two_indices_with_sum([1, 2], 10) == (0, 0)

    def test_values_with_sum(self) -> None:
        assert mu.first_two_values_with_sum([4, 1, 5, 3], 8) == (5, 3)
        assert mu.first_two_values_with_sum([1], 2) == (0, 0)

    def test_local_rank(self) -> None:
        assert mu.min_local_rank_sum([1, 0, 2]) == 5
        assert mu.min_local_rank_sum([1, 2, 2]) == 4
        assert mu.min_local_rank_sum([]) == 0
