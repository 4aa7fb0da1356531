"""
Tests for the product distributions.
"""

import numpy as np
import pytest
from scipy import stats

from stackmc.core.capabilities import CAPABILITY_DENSITY, CAPABILITY_MOMENTS
from stackmc.core.exceptions import ConfigurationError, DimensionError, ValidationError
from stackmc.core.protocols import Distribution
from stackmc.distributions import IndependentGaussian, Uniform


class TestUniform:

    def test_broadcast(self):
        dist = Uniform.create(-3.0, 3.0, dim=4)
        assert dist.dim == 4
        np.testing.assert_array_equal(dist.low, np.full(4, -3.0))
        assert isinstance(dist, Distribution)

    def test_per_dimension_bounds(self):
        dist = Uniform.create([0.0, -1.0], [1.0, 5.0])
        assert dist.dim == 2

    def test_sample_within_bounds(self, rng):
        dist = Uniform.create([0.0, -1.0], [1.0, 5.0])
        X = dist.sample(500, rng)
        assert X.shape == (500, 2)
        assert np.all(X >= dist.low) and np.all(X <= dist.high)

    @pytest.mark.parametrize("order", [1, 2, 3, 4])
    def test_moments_match_scipy(self, order):
        dist = Uniform.create(-3.0, 3.0, dim=2)
        expected = stats.uniform(loc=-3.0, scale=6.0).moment(order)
        np.testing.assert_allclose(dist.moment(order), expected, atol=1e-9)

    def test_known_moments(self):
        dist = Uniform.create(-3.0, 3.0, dim=1)
        assert dist.moment(2)[0] == pytest.approx(3.0)
        assert dist.moment(4)[0] == pytest.approx(16.2)
        assert dist.moment(3)[0] == pytest.approx(0.0)

    def test_density(self):
        dist = Uniform.create(0.0, 2.0, dim=2)
        np.testing.assert_allclose(dist.density([[0.5, 1.5], [3.0, 1.0]]), [0.25, 0.0])

    def test_density_dimension_check(self):
        with pytest.raises(DimensionError):
            Uniform.create(0.0, 1.0, dim=2).density(np.zeros((3, 3)))

    def test_supports(self):
        dist = Uniform.create(0.0, 1.0, dim=1)
        assert dist.supports(CAPABILITY_MOMENTS)
        assert dist.supports(CAPABILITY_DENSITY)
        assert not dist.supports('gradient')

    @pytest.mark.parametrize("low, high", [(1.0, 1.0), (2.0, 1.0)])
    def test_empty_box(self, low, high):
        with pytest.raises(ConfigurationError):
            Uniform.create(low, high, dim=2)

    def test_shape_mismatch(self):
        with pytest.raises(DimensionError):
            Uniform.create([0.0, 0.0], [1.0, 1.0, 1.0])


class TestIndependentGaussian:

    @pytest.mark.parametrize("order", [1, 2, 3, 4])
    def test_moments_match_scipy(self, order):
        dist = IndependentGaussian.create([0.0, 1.5], [2.0, 0.5])
        expected = [
            stats.norm(loc=0.0, scale=2.0).moment(order),
            stats.norm(loc=1.5, scale=0.5).moment(order),
        ]
        np.testing.assert_allclose(dist.moment(order), expected, atol=1e-9)

    def test_known_moments(self):
        dist = IndependentGaussian.create(0.0, 2.0, dim=1)
        assert dist.moment(2)[0] == pytest.approx(4.0)
        assert dist.moment(4)[0] == pytest.approx(48.0)

    def test_sample_statistics(self, rng):
        dist = IndependentGaussian.create(1.0, 2.0, dim=3)
        X = dist.sample(20000, rng)
        assert X.shape == (20000, 3)
        np.testing.assert_allclose(X.mean(axis=0), 1.0, atol=0.1)
        np.testing.assert_allclose(X.std(axis=0), 2.0, atol=0.1)

    def test_density(self):
        dist = IndependentGaussian.create(0.0, 1.0, dim=2)
        expected = stats.norm.pdf(0.0) * stats.norm.pdf(1.0)
        assert dist.density([0.0, 1.0])[0] == pytest.approx(expected)

    @pytest.mark.parametrize("std", [0.0, -1.0])
    def test_bad_std(self, std):
        with pytest.raises(ConfigurationError):
            IndependentGaussian.create(0.0, std, dim=2)

    def test_rejects_nan(self):
        with pytest.raises(ValidationError):
            IndependentGaussian.create(np.nan, 1.0, dim=2)
