"""Комплексные числа, кватернионы и октонионы.

Все три типа неизменяемы (`frozen=True`). Кватернионы перемножаются по
Гамильтону, октонионы строятся из пары кватернионов по Кэли-Диксону:

    (a, b) * (c, d) = (a*c - conj(d)*b, d*a + b*conj(c))

Умножение кватернионов некоммутативно, октонионов ещё и неассоциативно.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Sequence, Tuple, Union

from utilkit.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _imag_part(name: str, imag: Tuple[float, ...], n: int) -> float:
    if n < 0 or n >= len(imag):
        logger.warning("Invalid imaginary part in %s: %d, returning 0.0", name, n)
        return 0.0
    return imag[n]


def _fixed(values: Sequence[float], size: int, name: str) -> Tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name}: ожидалось {size} мнимых компонент, получено {len(result)}")
    return result


@dataclass(frozen=True)
class Complex:
    """a + b*i."""
    real: float = 0.0
    imag: float = 0.0

    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imag)

    def norm(self) -> float:
        return math.hypot(self.real, self.imag)

    def __add__(self, other: "Complex") -> "Complex":
        return Complex(self.real + other.real, self.imag + other.imag)

    def __sub__(self, other: "Complex") -> "Complex":
        return Complex(self.real - other.real, self.imag - other.imag)

    def __neg__(self) -> "Complex":
        return Complex(-self.real, -self.imag)

    def __mul__(self, other: Union["Complex", Real]) -> "Complex":
        if isinstance(other, Real):
            return Complex(self.real * other, self.imag * other)
        return Complex(
            self.real * other.real - self.imag * other.imag,
            self.real * other.imag + self.imag * other.real,
        )

    __rmul__ = __mul__

    def to_builtin(self) -> complex:
        return complex(self.real, self.imag)

    def __str__(self) -> str:
        return f"C = {self.real:.2f} + {self.imag:.2f}i"


@dataclass(frozen=True)
class Quaternion:
    """a0 + a1*i + a2*j + a3*k."""
    real: float = 0.0
    imag: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "imag", _fixed(self.imag, 3, "Quaternion"))

    @property
    def components(self) -> Tuple[float, ...]:
        return (self.real,) + self.imag

    def imag_part(self, n: int) -> float:
        return _imag_part("quaternion", self.imag, n)

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.real, tuple(-v for v in self.imag))

    def norm(self) -> float:
        return math.sqrt(sum(v * v for v in self.components))

    def __add__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(self.real + other.real, tuple(a + b for a, b in zip(self.imag, other.imag)))

    def __sub__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(self.real - other.real, tuple(a - b for a, b in zip(self.imag, other.imag)))

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.real, tuple(-v for v in self.imag))

    def __mul__(self, other: Union["Quaternion", Real]) -> "Quaternion":
        if isinstance(other, Real):
            return Quaternion(self.real * other, tuple(v * other for v in self.imag))
        a1, b1, c1, d1 = self.components
        a2, b2, c2, d2 = other.components
        return Quaternion(
            a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2,
            (
                a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2,
                a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2,
                a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2,
            ),
        )

    def __rmul__(self, other: Real) -> "Quaternion":
        return self * other

    def __str__(self) -> str:
        i, j, k = self.imag
        return f"Q = {self.real:.2f} + {i:.2f}i + {j:.2f}j + {k:.2f}k"


@dataclass(frozen=True)
class Octonion:
    """a0 + a1*e1 + ... + a7*e7."""
    real: float = 0.0
    imag: Tuple[float, ...] = (0.0,) * 7

    def __post_init__(self) -> None:
        object.__setattr__(self, "imag", _fixed(self.imag, 7, "Octonion"))

    @property
    def components(self) -> Tuple[float, ...]:
        return (self.real,) + self.imag

    @classmethod
    def from_quaternions(cls, a: Quaternion, b: Quaternion) -> "Octonion":
        return cls(a.real, a.imag + b.components)

    def to_quaternions(self) -> Tuple[Quaternion, Quaternion]:
        c = self.components
        return Quaternion(c[0], c[1:4]), Quaternion(c[4], c[5:8])

    def imag_part(self, n: int) -> float:
        return _imag_part("octonion", self.imag, n)

    def conjugate(self) -> "Octonion":
        return Octonion(self.real, tuple(-v for v in self.imag))

    def norm(self) -> float:
        return math.sqrt(sum(v * v for v in self.components))

    def __add__(self, other: "Octonion") -> "Octonion":
        return Octonion(self.real + other.real, tuple(a + b for a, b in zip(self.imag, other.imag)))

    def __sub__(self, other: "Octonion") -> "Octonion":
        return Octonion(self.real - other.real, tuple(a - b for a, b in zip(self.imag, other.imag)))

    def __neg__(self) -> "Octonion":
        return Octonion(-self.real, tuple(-v for v in self.imag))

    def __mul__(self, other: Union["Octonion", Real]) -> "Octonion":
        if isinstance(other, Real):
            return Octonion(self.real * other, tuple(v * other for v in self.imag))
        a, b = self.to_quaternions()
        c, d = other.to_quaternions()
        return Octonion.from_quaternions(a * c - d.conjugate() * b, d * a + b * c.conjugate())

    def __rmul__(self, other: Real) -> "Octonion":
        return self * other

    def __str__(self) -> str:
        parts = "".join(f" + {v:.2f}e_{n}" for n, v in enumerate(self.imag, start=1))
        return f"O = {self.real:.2f}{parts}"
