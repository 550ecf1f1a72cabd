"""Сортировки кучей, слиянием и быстрая сортировка с произвольным компаратором.

Компаратор — функция `(a, b) -> int` (отрицательное, ноль, положительное).
Каждый сортировщик работает над собственной копией входной последовательности
и упорядочивает её по возрастанию.

    Алгоритм    Худший случай   Средний       Доп. память
    heapsort    O(n log n)      O(n log n)    O(1)
    mergesort   O(n log n)      O(n log n)    O(n)
    quicksort   O(n^2)          O(n log n)    O(log n)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from utilkit.data.comparators import Comparator, natural_order

T = TypeVar("T")


class AbstractSort(ABC, Generic[T]):
    def __init__(self, array: Iterable[T], comp: Optional[Comparator] = None) -> None:
        self.array: List[T] = list(array)
        self.comp: Comparator = comp or natural_order

    def swap(self, left: int, right: int) -> None:
        self.array[left], self.array[right] = self.array[right], self.array[left]

    def is_sorted(self) -> bool:
        """True, если массив упорядочен по возрастанию."""
        return all(self.comp(self.array[i], self.array[i - 1]) >= 0 for i in range(1, len(self.array)))

    @abstractmethod
    def sort(self) -> List[T]:
        """Сортирует `self.array` и возвращает его."""

    def __str__(self) -> str:
        return " ".join(str(a) for a in self.array)


class HeapSort(AbstractSort[T]):
    def sort(self) -> List[T]:
        n = len(self.array)
        # построение max-кучи за O(n)
        for i in range(n // 2 - 1, -1, -1):
            self._heapify(n, i)
        # корень кучи уходит в конец, куча сокращается
        for end in range(n - 1, 0, -1):
            self.swap(end, 0)
            self._heapify(end, 0)
        return self.array

    def _heapify(self, size: int, pos: int) -> None:
        while True:
            largest = pos
            left, right = 2 * pos + 1, 2 * pos + 2
            if left < size and self.comp(self.array[left], self.array[largest]) > 0:
                largest = left
            if right < size and self.comp(self.array[right], self.array[largest]) > 0:
                largest = right
            if largest == pos:
                return
            self.swap(largest, pos)
            pos = largest


class MergeSort(AbstractSort[T]):
    """Нисходящая сортировка слиянием; устойчива (при равенстве берётся левый элемент)."""

    def sort(self) -> List[T]:
        self.array = self._sort(self.array)
        return self.array

    def _sort(self, items: List[T]) -> List[T]:
        if len(items) < 2:
            return items
        middle = len(items) // 2
        return self._merge(self._sort(items[:middle]), self._sort(items[middle:]))

    def _merge(self, a: List[T], b: List[T]) -> List[T]:
        merged: List[T] = []
        i = j = 0
        while i < len(a) and j < len(b):
            if self.comp(a[i], b[j]) < 1:
                merged.append(a[i])
                i += 1
            else:
                merged.append(b[j])
                j += 1
        merged.extend(a[i:])
        merged.extend(b[j:])
        return merged


class QuickSort(AbstractSort[T]):
    """Быстрая сортировка на месте, опорный элемент — последний в отрезке.

    Рекурсия идёт в меньшую часть, большая обрабатывается циклом (Sedgewick 1978),
    так что глубина стека O(log n) даже на упорядоченном входе.
    """

    def sort(self) -> List[T]:
        self._step(0, len(self.array) - 1)
        return self.array

    def _partition(self, left: int, right: int) -> int:
        pivot = self.array[right]
        lo, hi = left, right - 1
        while lo <= hi:
            # слева направо: ищем элемент больше опорного
            while lo <= hi and self.comp(self.array[lo], pivot) < 1:
                lo += 1
            # справа налево: ищем элемент меньше опорного
            while lo <= hi and self.comp(self.array[hi], pivot) > -1:
                hi -= 1
            if lo < hi:
                self.swap(lo, hi)
        self.swap(lo, right)
        return lo

    def _step(self, left: int, right: int) -> None:
        while left < right:
            p = self._partition(left, right)
            if p - left < right - p:
                self._step(left, p - 1)
                left = p + 1
            else:
                self._step(p + 1, right)
                right = p - 1


def heapsort(items: Iterable[Any], comp: Optional[Comparator] = None) -> List[Any]:
    return HeapSort(items, comp).sort()


def mergesort(items: Iterable[Any], comp: Optional[Comparator] = None) -> List[Any]:
    return MergeSort(items, comp).sort()


def quicksort(items: Iterable[Any], comp: Optional[Comparator] = None) -> List[Any]:
    return QuickSort(items, comp).sort()
