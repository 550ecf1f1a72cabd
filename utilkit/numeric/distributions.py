"""Случайные величины: границы, матожидание, дисперсия, CDF, PDF и MGF.

Каждая величина реализует интерфейс `RandomVariable`. В `bounds()` значение
`None` означает неограниченную границу. Для дискретных величин `pdf` — это
функция вероятности (вне носителя равна 0).

Принципы:
- Параметры, при которых распределение не определено, дают `ValueError`
  в конструкторе (кроме `NormalRV`, которая откатывается к стандартной).
- MGF возвращает `math.inf` там, где производящая функция расходится.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from utilkit.infrastructure.logging import get_logger
from utilkit.numeric.mathutils import choose

logger = get_logger(__name__)

Bounds = Tuple[Optional[float], Optional[float]]


class RandomVariable(ABC):
    @abstractmethod
    def bounds(self) -> Bounds:
        """Минимальное и максимальное возможные значения."""

    @abstractmethod
    def expectation(self) -> float:
        ...

    @abstractmethod
    def variance(self) -> float:
        ...

    @abstractmethod
    def cdf(self, x: float) -> float:
        ...

    @abstractmethod
    def pdf(self, x: float) -> float:
        ...

    @abstractmethod
    def mgf(self, t: float) -> float:
        ...


def _check_probability(p: float, name: str) -> float:
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"{name}: вероятность должна быть в [0, 1], получено {p}")
    return float(p)


def _is_integer(x: float) -> bool:
    return float(x).is_integer()


class _DiscreteRV(RandomVariable):
    """Общая реализация CDF/MGF для дискретных величин с конечным носителем."""

    def _support(self) -> range:
        low, high = self.bounds()
        return range(int(low), int(high) + 1)

    def cdf(self, x: float) -> float:
        low, _ = self.bounds()
        if x < low:
            return 0.0
        top = math.floor(x)
        return min(1.0, sum(self.pdf(k) for k in self._support() if k <= top))

    def mgf(self, t: float) -> float:
        return sum(math.exp(t * k) * self.pdf(k) for k in self._support())


# ---------- Дискретные ----------
class BernoulliRV(_DiscreteRV):
    def __init__(self, p: float) -> None:
        self.p = _check_probability(p, "BernoulliRV")

    def bounds(self) -> Bounds:
        return 0, 1

    def expectation(self) -> float:
        return self.p

    def variance(self) -> float:
        return self.p * (1.0 - self.p)

    def pdf(self, x: float) -> float:
        if x == 1:
            return self.p
        if x == 0:
            return 1.0 - self.p
        return 0.0

    def mgf(self, t: float) -> float:
        return 1.0 - self.p + self.p * math.exp(t)


class BinomialRV(_DiscreteRV):
    """Число успехов в `n` независимых испытаниях с вероятностью успеха `p`."""

    def __init__(self, n: int, p: float) -> None:
        if n < 0:
            raise ValueError(f"BinomialRV: n должно быть >= 0, получено {n}")
        self.n = int(n)
        self.p = _check_probability(p, "BinomialRV")

    def bounds(self) -> Bounds:
        return 0, self.n

    def expectation(self) -> float:
        return self.n * self.p

    def variance(self) -> float:
        return self.expectation() * (1.0 - self.p)

    def pdf(self, x: float) -> float:
        if not _is_integer(x) or not 0 <= x <= self.n:
            return 0.0
        k = int(x)
        return choose(self.n, k) * self.p ** k * (1.0 - self.p) ** (self.n - k)

    def mgf(self, t: float) -> float:
        return (1.0 - self.p + self.p * math.exp(t)) ** self.n


class GeometricRV(RandomVariable):
    """Номер первого успешного испытания (носитель 1, 2, ...)."""

    def __init__(self, p: float) -> None:
        self.p = _check_probability(p, "GeometricRV")
        if self.p == 0.0:
            raise ValueError("GeometricRV: p должно быть > 0")

    def bounds(self) -> Bounds:
        return 1, None

    def expectation(self) -> float:
        return 1.0 / self.p

    def variance(self) -> float:
        return (1.0 - self.p) / (self.p * self.p)

    def cdf(self, x: float) -> float:
        if x < 1:
            return 0.0
        return 1.0 - (1.0 - self.p) ** math.floor(x)

    def pdf(self, x: float) -> float:
        if not _is_integer(x) or x < 1:
            return 0.0
        return self.p * (1.0 - self.p) ** (int(x) - 1)

    def mgf(self, t: float) -> float:
        q = (1.0 - self.p) * math.exp(t)
        if q >= 1.0:
            return math.inf
        return self.p * math.exp(t) / (1.0 - q)


class HypergeometricRV(_DiscreteRV):
    """Число успехов в выборке размера `m` без возвращения.

    Args:
        r: Число «успешных» объектов в популяции.
        m: Размер выборки.
        n: Размер популяции.
    """

    def __init__(self, r: int, m: int, n: int) -> None:
        if n <= 0 or not 0 <= r <= n or not 0 <= m <= n:
            raise ValueError(f"HypergeometricRV: недопустимые параметры r={r}, m={m}, n={n}")
        self.r, self.m, self.n = int(r), int(m), int(n)
        logger.debug("Random variable for %d success states with draws of size %d from a population of %d", r, m, n)

    def bounds(self) -> Bounds:
        return max(0, self.m + self.r - self.n), min(self.r, self.m)

    def expectation(self) -> float:
        return self.r * self.m / self.n

    def variance(self) -> float:
        if self.n == 1:
            return 0.0
        return self.expectation() * (self.n - self.r) * (self.n - self.m) / (self.n * (self.n - 1))

    def pdf(self, x: float) -> float:
        if not _is_integer(x):
            return 0.0
        k = int(x)
        return choose(self.r, k) * choose(self.n - self.r, self.m - k) / choose(self.n, self.m)


class NegativeBinomialRV(RandomVariable):
    """Число неудач до `n`-го успеха."""

    def __init__(self, n: int, p: float) -> None:
        if n < 1:
            raise ValueError(f"NegativeBinomialRV: n должно быть >= 1, получено {n}")
        self.n = int(n)
        self.p = _check_probability(p, "NegativeBinomialRV")
        if self.p == 0.0:
            raise ValueError("NegativeBinomialRV: p должно быть > 0")

    def bounds(self) -> Bounds:
        return 0, None

    def expectation(self) -> float:
        return self.n * (1.0 - self.p) / self.p

    def variance(self) -> float:
        return self.expectation() / self.p

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return min(1.0, sum(self.pdf(k) for k in range(math.floor(x) + 1)))

    def pdf(self, x: float) -> float:
        if not _is_integer(x) or x < 0:
            return 0.0
        k = int(x)
        return choose(k + self.n - 1, self.n - 1) * self.p ** self.n * (1.0 - self.p) ** k

    def mgf(self, t: float) -> float:
        q = (1.0 - self.p) * math.exp(t)
        if q >= 1.0:
            return math.inf
        return (self.p / (1.0 - q)) ** self.n


class PoissonRV(RandomVariable):
    def __init__(self, rate: float) -> None:
        if rate <= 0:
            raise ValueError(f"PoissonRV: интенсивность должна быть > 0, получено {rate}")
        self.rate = float(rate)

    def bounds(self) -> Bounds:
        return 0, None

    def expectation(self) -> float:
        return self.rate

    def variance(self) -> float:
        return self.rate

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return min(1.0, sum(self.pdf(k) for k in range(math.floor(x) + 1)))

    def pdf(self, x: float) -> float:
        if not _is_integer(x) or x < 0:
            return 0.0
        k = int(x)
        # в логарифмах, чтобы не переполнить k! для больших k
        return math.exp(k * math.log(self.rate) - self.rate - math.lgamma(k + 1))

    def mgf(self, t: float) -> float:
        return math.exp(self.rate * (math.exp(t) - 1.0))


class UniformDRV(_DiscreteRV):
    """Равномерное распределение на целых a, a+1, ..., b."""

    def __init__(self, a: int, b: int) -> None:
        if b < a:
            raise ValueError(f"UniformDRV: b < a ({b} < {a})")
        self.a, self.b = int(a), int(b)
        self.n = self.b - self.a + 1

    @classmethod
    def of_size(cls, n: int) -> "UniformDRV":
        """n равновероятных значений 0, 1, ..., n-1."""
        return cls(0, n - 1)

    def bounds(self) -> Bounds:
        return self.a, self.b

    def expectation(self) -> float:
        return (self.a + self.b) / 2.0

    def variance(self) -> float:
        return (self.n * self.n - 1) / 12.0

    def cdf(self, x: float) -> float:
        if x < self.a:
            return 0.0
        return min(1.0, (math.floor(x) - self.a + 1) / self.n)

    def pdf(self, x: float) -> float:
        if not _is_integer(x) or not self.a <= x <= self.b:
            return 0.0
        return 1.0 / self.n

    def mgf(self, t: float) -> float:
        if t == 0:
            return 1.0
        return (math.exp(self.a * t) - math.exp((self.b + 1) * t)) / (self.n * (1.0 - math.exp(t)))


class MultinomialRV(_DiscreteRV):
    """Полиномиальное распределение `n` испытаний с вероятностями категорий `p`.

    Методы интерфейса `RandomVariable` описывают маргинальное распределение
    числа исходов категории `category` (это биномиальная величина
    `Binomial(n, p[category])`); совместная вероятность — `joint_pdf`.
    """

    def __init__(self, n: int, p: Sequence[float], category: int = 0) -> None:
        if n < 0:
            raise ValueError(f"MultinomialRV: n должно быть >= 0, получено {n}")
        probabilities = tuple(_check_probability(v, "MultinomialRV") for v in p)
        if not probabilities or not math.isclose(sum(probabilities), 1.0, abs_tol=1e-9):
            raise ValueError("MultinomialRV: вероятности категорий должны давать в сумме 1")
        if not 0 <= category < len(probabilities):
            raise ValueError(f"MultinomialRV: нет категории {category}")
        self.n = int(n)
        self.p = probabilities
        self.category = category
        self._marginal = BinomialRV(self.n, self.p[category])

    def bounds(self) -> Bounds:
        return 0, self.n

    def expectation(self) -> float:
        return self._marginal.expectation()

    def variance(self) -> float:
        return self._marginal.variance()

    def pdf(self, x: float) -> float:
        return self._marginal.pdf(x)

    def mgf(self, t: float) -> float:
        return self._marginal.mgf(t)

    def expectations(self) -> Tuple[float, ...]:
        return tuple(self.n * v for v in self.p)

    def covariance(self, i: int, j: int) -> float:
        if i == j:
            return self.n * self.p[i] * (1.0 - self.p[i])
        return -self.n * self.p[i] * self.p[j]

    def joint_pdf(self, counts: Sequence[int]) -> float:
        """Вероятность набора счётчиков по всем категориям."""
        if len(counts) != len(self.p) or sum(counts) != self.n or any(c < 0 for c in counts):
            return 0.0
        coefficient = math.factorial(self.n)
        for c in counts:
            coefficient //= math.factorial(c)
        return coefficient * math.prod(v ** c for v, c in zip(self.p, counts))


# ---------- Непрерывные ----------
class NormalRV(RandomVariable):
    """Нормальное распределение со средним `m` и дисперсией `v`."""

    def __init__(self, m: float, v: float) -> None:
        if v <= 0:
            logger.warning("Invalid variance of normal random variable: %s, using a standard normal instead", v)
            m, v = 0.0, 1.0
        self.m = float(m)
        self.v = float(v)

    def bounds(self) -> Bounds:
        return None, None

    def expectation(self) -> float:
        return self.m

    def variance(self) -> float:
        return self.v

    def cdf(self, x: float) -> float:
        return 0.5 * (1.0 + math.erf((x - self.m) / math.sqrt(2.0 * self.v)))

    def pdf(self, x: float) -> float:
        return math.exp(-((x - self.m) ** 2) / (2.0 * self.v)) / math.sqrt(2.0 * math.pi * self.v)

    def mgf(self, t: float) -> float:
        return math.exp(self.m * t + self.v * t * t / 2.0)


class StandardNormalRV(NormalRV):
    def __init__(self) -> None:
        super().__init__(0.0, 1.0)


class ExponentialRV(RandomVariable):
    def __init__(self, rate: float) -> None:
        if rate <= 0:
            raise ValueError(f"ExponentialRV: интенсивность должна быть > 0, получено {rate}")
        self.rate = float(rate)

    def bounds(self) -> Bounds:
        return 0.0, None

    def expectation(self) -> float:
        return 1.0 / self.rate

    def variance(self) -> float:
        return self.expectation() / self.rate

    def cdf(self, x: float) -> float:
        if x < 0.0:
            return 0.0
        return 1.0 - math.exp(-self.rate * x)

    def pdf(self, x: float) -> float:
        if x < 0.0:
            return 0.0
        return self.rate * math.exp(-self.rate * x)

    def mgf(self, t: float) -> float:
        if t >= self.rate:
            return math.inf
        return self.rate / (self.rate - t)


def _regularized_lower_gamma(s: float, x: float) -> float:
    """P(s, x) = γ(s, x) / Γ(s): ряд при x < s + 1, иначе цепная дробь."""
    if x <= 0.0:
        return 0.0
    log_prefix = s * math.log(x) - x - math.lgamma(s)
    if x < s + 1.0:
        term = total = 1.0 / s
        a = s
        for _ in range(500):
            a += 1.0
            term *= x / a
            total += term
            if abs(term) < abs(total) * 1e-15:
                break
        return min(1.0, total * math.exp(log_prefix))

    # модифицированный метод Лентца для Q(s, x)
    tiny = 1e-300
    b = x + 1.0 - s
    c = 1.0 / tiny
    d = 1.0 / b
    h = d
    for i in range(1, 500):
        an = -i * (i - s)
        b += 2.0
        d = an * d + b
        d = tiny if abs(d) < tiny else d
        c = b + an / c
        c = tiny if abs(c) < tiny else c
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < 1e-15:
            break
    return max(0.0, 1.0 - math.exp(log_prefix) * h)


class GammaRV(RandomVariable):
    """Гамма-распределение с формой `k` и масштабом `t` (сумма k экспоненциальных величин со средним t)."""

    def __init__(self, k: float, t: float) -> None:
        if k <= 0 or t <= 0:
            raise ValueError(f"GammaRV: k и t должны быть > 0, получено k={k}, t={t}")
        self.k = float(k)
        self.t = float(t)

    def bounds(self) -> Bounds:
        return 0.0, None

    def expectation(self) -> float:
        return self.k * self.t

    def variance(self) -> float:
        return self.expectation() * self.t

    def cdf(self, x: float) -> float:
        return _regularized_lower_gamma(self.k, x / self.t)

    def pdf(self, x: float) -> float:
        if x <= 0.0:
            return 0.0
        log_pdf = (self.k - 1.0) * math.log(x) - x / self.t - math.lgamma(self.k) - self.k * math.log(self.t)
        return math.exp(log_pdf)

    def mgf(self, t: float) -> float:
        if self.t * t >= 1.0:
            return math.inf
        return (1.0 - self.t * t) ** (-self.k)


class UniformCRV(RandomVariable):
    """Равномерное распределение на отрезке [a, b]."""

    def __init__(self, a: float, b: float) -> None:
        if b <= a:
            raise ValueError(f"UniformCRV: b должно быть > a ({b} <= {a})")
        self.a = float(a)
        self.b = float(b)

    def bounds(self) -> Bounds:
        return self.a, self.b

    def expectation(self) -> float:
        return (self.a + self.b) / 2.0

    def variance(self) -> float:
        return (self.b - self.a) ** 2 / 12.0

    def cdf(self, x: float) -> float:
        if x <= self.a:
            return 0.0
        if x >= self.b:
            return 1.0
        return (x - self.a) / (self.b - self.a)

    def pdf(self, x: float) -> float:
        if not self.a <= x <= self.b:
            return 0.0
        return 1.0 / (self.b - self.a)

    def mgf(self, t: float) -> float:
        if t == 0:
            return 1.0
        return (math.exp(t * self.b) - math.exp(t * self.a)) / (t * (self.b - self.a))
