"""Tests for random variable distributions."""

import math

import pytest

from utilkit.numeric.distributions import (
    BernoulliRV,
    BinomialRV,
    ExponentialRV,
    GammaRV,
    GeometricRV,
    HypergeometricRV,
    MultinomialRV,
    NegativeBinomialRV,
    NormalRV,
    PoissonRV,
    StandardNormalRV,
    UniformCRV,
    UniformDRV,
)

DISCRETE = [
    BernoulliRV(0.3),
    BinomialRV(10, 0.4),
    HypergeometricRV(5, 4, 12),
    UniformDRV(2, 7),
    MultinomialRV(6, [0.2, 0.5, 0.3], category=1),
]


@pytest.mark.parametrize("rv", DISCRETE, ids=lambda rv: type(rv).__name__)
class TestFiniteDiscrete:
    """Invariants every finite discrete distribution satisfies."""

    def test_pmf_sums_to_one(self, rv) -> None:
        low, high = rv.bounds()
        assert sum(rv.pdf(k) for k in range(low, high + 1)) == pytest.approx(1.0)

    def test_moments_match_pmf(self, rv) -> None:
        low, high = rv.bounds()
        support = range(low, high + 1)
        mean = sum(k * rv.pdf(k) for k in support)
        var = sum((k - mean) ** 2 * rv.pdf(k) for k in support)
        assert rv.expectation() == pytest.approx(mean)
        assert rv.variance() == pytest.approx(var)

    def test_cdf_reaches_one(self, rv) -> None:
        low, high = rv.bounds()
        assert rv.cdf(low - 1) == 0.0
        assert rv.cdf(high) == pytest.approx(1.0)

    def test_mgf_at_zero(self, rv) -> None:
        assert rv.mgf(0.0) == pytest.approx(1.0)


class TestDiscrete:
    def test_bernoulli(self) -> None:
        rv = BernoulliRV(0.3)
        assert rv.pdf(1) == 0.3
        assert rv.pdf(0) == pytest.approx(0.7)
        assert rv.cdf(0) == pytest.approx(0.7)
        assert rv.cdf(0.5) == pytest.approx(0.7)

    def test_binomial_pmf(self) -> None:
        assert BinomialRV(4, 0.5).pdf(2) == pytest.approx(6 / 16)
        assert BinomialRV(4, 0.5).pdf(2.5) == 0.0

    def test_binomial_mgf(self) -> None:
        rv = BinomialRV(3, 0.2)
        direct = sum(math.exp(0.7 * k) * rv.pdf(k) for k in range(4))
        assert rv.mgf(0.7) == pytest.approx(direct)

    def test_geometric(self) -> None:
        rv = GeometricRV(0.25)
        assert rv.bounds() == (1, None)
        assert rv.pdf(1) == 0.25
        assert rv.cdf(3) == pytest.approx(sum(rv.pdf(k) for k in (1, 2, 3)))
        assert rv.expectation() == 4.0
        assert rv.mgf(math.log(2)) == math.inf

    def test_hypergeometric_bounds(self) -> None:
        assert HypergeometricRV(8, 6, 10).bounds() == (4, 6)

    def test_negative_binomial(self) -> None:
        rv = NegativeBinomialRV(3, 0.5)
        assert sum(rv.pdf(k) for k in range(200)) == pytest.approx(1.0)
        assert rv.expectation() == pytest.approx(sum(k * rv.pdf(k) for k in range(200)))
        assert rv.cdf(2) == pytest.approx(rv.pdf(0) + rv.pdf(1) + rv.pdf(2))

    def test_poisson(self) -> None:
        rv = PoissonRV(3.0)
        assert rv.pdf(2) == pytest.approx(math.exp(-3) * 9 / 2)
        assert rv.cdf(1000) == pytest.approx(1.0)
        assert rv.mgf(0.5) == pytest.approx(math.exp(3 * (math.exp(0.5) - 1)))

    def test_poisson_large_count(self) -> None:
        assert PoissonRV(2.0).pdf(400) == pytest.approx(0.0)

    def test_uniform_of_size(self) -> None:
        rv = UniformDRV.of_size(6)
        assert rv.bounds() == (0, 5)
        assert rv.pdf(3) == pytest.approx(1 / 6)
        assert rv.cdf(2) == pytest.approx(0.5)

    def test_uniform_mgf(self) -> None:
        rv = UniformDRV(1, 4)
        assert rv.mgf(0.3) == pytest.approx(sum(math.exp(0.3 * k) for k in range(1, 5)) / 4)

    def test_multinomial_joint(self) -> None:
        rv = MultinomialRV(3, [0.5, 0.25, 0.25])
        assert rv.joint_pdf([1, 1, 1]) == pytest.approx(6 * 0.5 * 0.25 * 0.25)
        assert rv.joint_pdf([1, 1]) == 0.0
        assert rv.expectations() == (1.5, 0.75, 0.75)
        assert rv.covariance(0, 1) == pytest.approx(-3 * 0.5 * 0.25)

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: BernoulliRV(1.5),
            lambda: BinomialRV(-1, 0.5),
            lambda: GeometricRV(0.0),
            lambda: HypergeometricRV(5, 3, 4),
            lambda: PoissonRV(0),
            lambda: UniformDRV(3, 1),
            lambda: MultinomialRV(3, [0.5, 0.4]),
            lambda: MultinomialRV(3, [0.5, 0.5], category=2),
        ],
    )
    def test_invalid_parameters(self, factory) -> None:
        with pytest.raises(ValueError):
            factory()


class TestContinuous:
    def test_standard_normal(self) -> None:
        rv = StandardNormalRV()
        assert rv.cdf(0) == pytest.approx(0.5)
        assert rv.cdf(1.96) == pytest.approx(0.975, abs=1e-3)
        assert rv.pdf(0) == pytest.approx(1 / math.sqrt(2 * math.pi))
        assert rv.bounds() == (None, None)

    def test_normal_moments(self) -> None:
        rv = NormalRV(2.0, 4.0)
        assert rv.expectation() == 2.0
        assert rv.variance() == 4.0
        assert rv.cdf(2.0) == pytest.approx(0.5)
        assert rv.mgf(1.0) == pytest.approx(math.exp(2 + 2))

    def test_normal_invalid_variance_falls_back(self, caplog) -> None:
        rv = NormalRV(5.0, -1.0)
        assert (rv.expectation(), rv.variance()) == (0.0, 1.0)
        assert "Invalid variance" in caplog.text

    def test_exponential(self) -> None:
        rv = ExponentialRV(2.0)
        assert rv.cdf(1.0) == pytest.approx(1 - math.exp(-2))
        assert rv.pdf(-1.0) == 0.0
        assert rv.expectation() == 0.5
        assert rv.variance() == 0.25
        assert rv.mgf(3.0) == math.inf

    def test_gamma_with_shape_one_is_exponential(self) -> None:
        gamma = GammaRV(1.0, 0.5)
        expo = ExponentialRV(2.0)
        for x in (0.1, 0.5, 1.0, 3.0):
            assert gamma.cdf(x) == pytest.approx(expo.cdf(x))
            assert gamma.pdf(x) == pytest.approx(expo.pdf(x))

    def test_gamma_cdf_integer_shape(self) -> None:
        """For integer k the cdf has an Erlang closed form."""
        rv = GammaRV(3.0, 2.0)
        for x in (0.5, 4.0, 20.0):
            y = x / 2.0
            expected = 1 - math.exp(-y) * (1 + y + y * y / 2)
            assert rv.cdf(x) == pytest.approx(expected)

    def test_gamma_pdf_normalizes(self) -> None:
        """The density includes the 1 / Gamma(k) factor."""
        rv = GammaRV(2.5, 1.5)
        step = 0.01
        area = sum(rv.pdf(step * (i + 0.5)) * step for i in range(5000))
        assert area == pytest.approx(1.0, abs=1e-3)

    def test_gamma_moments(self) -> None:
        rv = GammaRV(2.0, 3.0)
        assert rv.expectation() == 6.0
        assert rv.variance() == 18.0
        assert rv.mgf(0.1) == pytest.approx(0.7 ** -2)

    def test_uniform(self) -> None:
        rv = UniformCRV(2.0, 6.0)
        assert rv.cdf(3.0) == 0.25
        assert rv.cdf(10.0) == 1.0
        assert rv.pdf(4.0) == 0.25
        assert rv.pdf(7.0) == 0.0
        assert rv.variance() == pytest.approx(16 / 12)
        assert rv.mgf(0.0) == 1.0

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: ExponentialRV(0),
            lambda: GammaRV(0, 1),
            lambda: GammaRV(1, -1),
            lambda: UniformCRV(1, 1),
        ],
    )
    def test_invalid_parameters(self, factory) -> None:
        with pytest.raises(ValueError):
            factory()
