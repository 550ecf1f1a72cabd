"""Целочисленные вспомогательные функции: суммы, комбинаторика, простые числа.

Функции чистые и не держат состояния. Комбинаторика опирается на `math.comb`
и `math.factorial`, поэтому работает с произвольно большими целыми.
"""
from __future__ import annotations

import math
from functools import lru_cache
from typing import Dict, List, Sequence, Tuple


def array_max(values: Sequence[int]) -> int:
    """Максимум непустой последовательности."""
    if not values:
        raise ValueError("Пустая последовательность")
    return max(values)


def array_min(values: Sequence[int]) -> int:
    """Минимум непустой последовательности."""
    if not values:
        raise ValueError("Пустая последовательность")
    return min(values)


# ---------- Суммы ----------
def simple_summation(n: int) -> int:
    """1 + 2 + ... + n."""
    return n * (n + 1) // 2


def simple_summation_between(n1: int, n2: int) -> int:
    """(n1 + 1) + ... + n2."""
    return simple_summation(n2) - simple_summation(n1)


def geometric_summation(c: int, r: int, n: int) -> int:
    """c + c*r + ... + c*r**(n-1); 0 при r == 1 или n < 1."""
    if r == 1 or n < 1:
        return 0
    return c * (r ** n - 1) // (r - 1)


def binomial_summation(x: int, y: int, n: int) -> int:
    """Сумма бинома Ньютона: (x + y) ** n (1 при n <= 0)."""
    if n > 0:
        return (x + y) ** n
    return 1


def choose_summation(n: int) -> int:
    """C(n, 0) + C(n, 1) + ... + C(n, n) = 2 ** n."""
    return binomial_summation(1, 1, n)


# ---------- Комбинаторика ----------
def factorial(n: int) -> int:
    if n < 2:
        return 1
    return math.factorial(n)


def choose(n: int, k: int) -> int:
    """Биномиальный коэффициент; 0 вне диапазона 0 <= k <= n."""
    if k < 0 or n < 0 or k > n:
        return 0
    return math.comb(n, k)


def pascal_row(n: int) -> List[int]:
    """n-я строка треугольника Паскаля (нумерация с 1): [C(n-1, 0), ..., C(n-1, n-1)]."""
    if n < 1:
        return []
    row = [1]
    for _ in range(n - 1):
        row = [1] + [a + b for a, b in zip(row, row[1:])] + [1]
    return row


def count_valid_parentheses(n: int) -> int:
    """Число правильных скобочных последовательностей из n пар (число Каталана)."""
    if n < 1:
        return 1
    return choose(2 * n, n) // (n + 1)


def magic_square_constant(n: int) -> int:
    """Магическая константа квадрата n x n."""
    return simple_summation(n * n) // n


# ---------- Теория чисел ----------
def gcd(x: int, y: int) -> int:
    return math.gcd(x, y)


def are_relative_prime(x: int, y: int) -> bool:
    return gcd(x, y) == 1


def is_prime(x: int) -> bool:
    if x < 2:
        return False
    return all(x % i for i in range(2, math.isqrt(x) + 1))


def fibonacci(n: int) -> int:
    """n-е число Фибоначчи (F(0) = 0, F(1) = 1), итеративно."""
    if n < 1:
        return 0
    a, b = 0, 1
    for _ in range(n - 1):
        a, b = b, a + b
    return b


@lru_cache(maxsize=None)
def fibonacci_memo(n: int) -> int:
    """То же с мемоизацией (рекурсивно)."""
    if n < 1:
        return 0
    if n < 2:
        return 1
    return fibonacci_memo(n - 1) + fibonacci_memo(n - 2)


# ---------- Задачи на массивы ----------
def sum_min_max(values: Sequence[int]) -> Tuple[int, int]:
    """Минимальная и максимальная сумма n-1 элементов из n."""
    total = sum(values)
    return total - array_max(values), total - array_min(values)


def max_non_adjacent_subset_sum(values: Sequence[int]) -> int:
    """Максимальная сумма элементов, никакие два из которых не соседние (пустой набор даёт 0)."""
    take, skip = 0, 0
    for value in values:
        take, skip = skip + value, max(take, skip)
    return max(take, skip)


def first_two_indices_with_sum(values: Sequence[int], target: int) -> Tuple[int, int]:
    """Индексы (с 1) первой пары, дающей в сумме `target`; (0, 0), если пары нет."""
    seen: Dict[int, int] = {}
    for i, value in enumerate(values):
        if value in seen:
            return seen[value] + 1, i + 1
        seen[target - value] = i
    return 0, 0


def first_two_values_with_sum(values: Sequence[int], target: int) -> Tuple[int, int]:
    """Значения первой пары, дающей в сумме `target`; (0, 0), если пары нет."""
    complements = set()
    for value in values:
        if value in complements:
            return target - value, value
        complements.add(target - value)
    return 0, 0


def min_local_rank_sum(values: Sequence[int]) -> int:
    """Минимальная сумма рангов (от 1), где элемент больше соседа получает ранг больше соседского."""
    n = len(values)
    if n == 0:
        return 0
    left = [1] * n
    right = [1] * n
    for i in range(1, n):
        if values[i] > values[i - 1]:
            left[i] = left[i - 1] + 1
    for i in range(n - 2, -1, -1):
        if values[i] > values[i + 1]:
            right[i] = right[i + 1] + 1
    return sum(max(a, b) for a, b in zip(left, right))
