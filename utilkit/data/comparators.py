"""Сравнение значений простых типов и последовательностей таких значений.

Тип значения определяется один раз (`ValueKind`), дальше сравнение идёт по
тегу, а не по имени класса. Значения разных видов не сравниваются: компаратор
пишет ошибку в лог и возвращает 0.
"""
from __future__ import annotations

import math
from enum import Enum
from functools import cmp_to_key
from numbers import Integral, Real
from typing import Any, Callable, Optional, Sequence

from utilkit.infrastructure.logging import get_logger

logger = get_logger(__name__)

Comparator = Callable[[Any, Any], int]


class ValueKind(Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BYTES = "bytes"


def classify(value: Any) -> Optional[ValueKind]:
    """Вид значения или `None`, если тип не поддерживается."""
    # bool проверяется раньше int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Integral):
        return ValueKind.INTEGER
    if isinstance(value, Real):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (bytes, bytearray)):
        return ValueKind.BYTES
    return None


def natural_order(a: Any, b: Any) -> int:
    """Естественный порядок: -1, 0 или 1."""
    return (a > b) - (a < b)


def _compare_floats(a: float, b: float) -> int:
    # NaN больше любого числа и равен самому себе
    a_nan, b_nan = math.isnan(a), math.isnan(b)
    if a_nan or b_nan:
        return (a_nan > b_nan) - (a_nan < b_nan)
    return natural_order(a, b)


class TypedComparator:
    """Компаратор значений одного вида (`ValueKind`)."""

    def compare_type(self, a: Any, b: Any) -> int:
        """1, если виды `a` и `b` совпадают (или одно из значений `None`), иначе 0."""
        if a is None or b is None:
            return 1
        if classify(a) is not classify(b):
            logger.error(
                "Comparison between non-matching types: (a) %s != (b) %s, returning 0",
                type(a).__name__,
                type(b).__name__,
            )
            return 0
        return 1

    def compare(self, a: Any, b: Any) -> int:
        if self.compare_type(a, b) != 1:
            return 0
        if a is None or b is None:
            logger.error("Comparison with None, returning 0")
            return 0

        kind = classify(a)
        if kind is None:
            logger.error("Unrecognized type: %s, returning 0", type(a).__name__)
            return 0
        if kind is ValueKind.FLOAT:
            return _compare_floats(float(a), float(b))
        return natural_order(a, b)

    __call__ = compare

    @property
    def key(self) -> Callable[[Any], Any]:
        """Ключ для `sorted(..., key=...)`."""
        return cmp_to_key(self.compare)


class ArrayComparator:
    """Компаратор последовательностей значений одного вида.

    Более длинная последовательность считается меньшей (идёт раньше). Для
    последовательностей равной длины суммируются поэлементные сравнения в обе
    стороны, и результат — сравнение этих сумм.
    """

    def __init__(self, element_comparator: Optional[TypedComparator] = None) -> None:
        self._comp = element_comparator or TypedComparator()

    def compare(self, a: Sequence[Any], b: Sequence[Any]) -> int:
        if len(a) < len(b):
            return 1
        if len(a) > len(b):
            return -1
        if not a:
            return 0
        if self._comp.compare_type(a[0], b[0]) != 1:
            return 0

        forward = sum(self._comp.compare(x, y) for x, y in zip(a, b))
        backward = sum(self._comp.compare(y, x) for x, y in zip(a, b))
        return natural_order(forward, backward)

    __call__ = compare

    @property
    def key(self) -> Callable[[Any], Any]:
        return cmp_to_key(self.compare)
