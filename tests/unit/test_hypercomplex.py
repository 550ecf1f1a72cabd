"""Tests for complex numbers, quaternions and octonions."""

import math

import pytest

from utilkit.numeric.hypercomplex import Complex, Octonion, Quaternion


def unit_quaternion(n: int) -> Quaternion:
    imag = [0.0, 0.0, 0.0]
    imag[n] = 1.0
    return Quaternion(0.0, tuple(imag))


def unit_octonion(n: int) -> Octonion:
    imag = [0.0] * 7
    imag[n] = 1.0
    return Octonion(0.0, tuple(imag))


class TestComplex:
    def test_multiply(self) -> None:
        assert Complex(1, 2) * Complex(3, 4) == Complex(-5, 10)

    def test_scalar(self) -> None:
        assert 2 * Complex(1, 2) == Complex(2, 4)

    def test_norm_conjugate(self) -> None:
        z = Complex(3, 4)
        assert z.norm() == 5.0
        assert (z * z.conjugate()).real == 25.0

    def test_matches_builtin(self) -> None:
        assert (Complex(1, 2) * Complex(-3, 0.5)).to_builtin() == complex(1, 2) * complex(-3, 0.5)

    def test_str(self) -> None:
        assert str(Complex(1, 2)) == "C = 1.00 + 2.00i"


class TestQuaternion:
    def test_hamilton_units(self) -> None:
        """i * j = k, j * k = i, k * i = j, and the reverse products negate."""
        i, j, k = (unit_quaternion(n) for n in range(3))
        assert i * j == k
        assert j * k == i
        assert k * i == j
        assert j * i == -k

    def test_squares(self) -> None:
        for n in range(3):
            q = unit_quaternion(n)
            assert q * q == Quaternion(-1.0)

    def test_norm_multiplicative(self) -> None:
        a = Quaternion(1, (2, 3, 4))
        b = Quaternion(-2, (0.5, 1, -1))
        assert (a * b).norm() == pytest.approx(a.norm() * b.norm())

    def test_wrong_number_of_parts(self) -> None:
        with pytest.raises(ValueError):
            Quaternion(0, (1, 2))

    def test_imag_part_out_of_range(self) -> None:
        q = Quaternion(0, (1, 2, 3))
        assert q.imag_part(1) == 2.0
        assert q.imag_part(3) == 0.0

    def test_str(self) -> None:
        assert str(Quaternion(1, (2, 3, 4))) == "Q = 1.00 + 2.00i + 3.00j + 4.00k"


class TestOctonion:
    def test_units_square_to_minus_one(self) -> None:
        for n in range(7):
            e = unit_octonion(n)
            assert e * e == Octonion(-1.0)

    def test_units_anticommute(self) -> None:
        for a in range(7):
            for b in range(a + 1, 7):
                ea, eb = unit_octonion(a), unit_octonion(b)
                assert ea * eb == -(eb * ea)

    def test_norm_multiplicative(self) -> None:
        a = Octonion(1, (2, -1, 0.5, 3, 0, 1, -2))
        b = Octonion(-1, (0.5, 1, 2, -3, 1, 0, 4))
        assert (a * b).norm() == pytest.approx(a.norm() * b.norm())

    def test_not_associative(self) -> None:
        e1, e2, e4 = unit_octonion(0), unit_octonion(1), unit_octonion(3)
        assert (e1 * e2) * e4 != e1 * (e2 * e4)

    def test_quaternion_round_trip(self) -> None:
        a, b = Quaternion(1, (2, 3, 4)), Quaternion(5, (6, 7, 8))
        assert Octonion.from_quaternions(a, b).to_quaternions() == (a, b)

    def test_conjugate_product_is_norm_squared(self) -> None:
        o = Octonion(1, (1, 1, 1, 1, 1, 1, 1))
        assert (o * o.conjugate()).real == pytest.approx(8.0)
        assert math.isclose(o.norm(), math.sqrt(8))

    def test_str(self) -> None:
        assert str(Octonion(1)).startswith("O = 1.00 + 0.00e_1")
