"""
Tests for the polynomial and identity surrogates.
"""

import numpy as np
import pytest

from stackmc.core.capabilities import CAPABILITY_ANALYTIC_EXPECTATION, CAPABILITY_DENSITY
from stackmc.core.exceptions import ConfigurationError, DimensionError, FitFailure
from stackmc.core.protocols import FittedSurrogate, Surrogate
from stackmc.distributions import IndependentGaussian, Uniform
from stackmc.surrogates import Identity, Polynomial
from stackmc.surrogates.polynomial import additive_basis


class TestAdditiveBasis:

    def test_layout(self):
        X = np.array([[2.0, 3.0]])
        basis = additive_basis(X, 3)
        np.testing.assert_array_equal(basis, [[1.0, 2.0, 3.0, 4.0, 9.0, 8.0, 27.0]])

    @pytest.mark.parametrize("dim, order, terms", [(10, 3, 31), (2, 1, 3), (5, 2, 11)])
    def test_term_count(self, dim, order, terms, rng):
        X = rng.random((4, dim))
        assert additive_basis(X, order).shape == (4, terms)
        assert Polynomial(order).n_terms(dim) == terms


class TestPolynomial:

    def test_protocols(self):
        assert isinstance(Polynomial(), Surrogate)
        assert isinstance(Identity(), Surrogate)

    def test_names(self):
        assert Polynomial().name == 'polynomial3'
        assert Polynomial(2, fit_dist=True).name == 'polynomial2_fitdist'

    @pytest.mark.parametrize("order", [0, -1, 1.5, True])
    def test_invalid_order(self, order):
        with pytest.raises(ConfigurationError):
            Polynomial(order)

    def test_recovers_additive_cubic(self, rng):
        X = rng.uniform(-2.0, 2.0, size=(40, 3))
        y = 0.5 - X[:, 0] + 2.0 * X[:, 1] ** 2 + 0.25 * X[:, 2] ** 3
        fitted = Polynomial(3).fit(X, y)
        assert isinstance(fitted, FittedSurrogate)
        assert fitted.intercept == pytest.approx(0.5)
        expected = np.array([
            [-1.0, 0.0, 0.0],
            [0.0, 2.0, 0.0],
            [0.0, 0.0, 0.25],
        ])
        np.testing.assert_allclose(fitted.coefficients, expected, atol=1e-9)
        X_new = rng.uniform(-2.0, 2.0, size=(5, 3))
        y_new = 0.5 - X_new[:, 0] + 2.0 * X_new[:, 1] ** 2 + 0.25 * X_new[:, 2] ** 3
        np.testing.assert_allclose(fitted.predict(X_new), y_new, atol=1e-9)

    def test_analytic_expectation_uniform(self, rng):
        """E[0.5 - x + 2 y^2 + 0.25 z^3] on [-2, 2]^3 is 0.5 + 2 * 4/3."""
        X = rng.uniform(-2.0, 2.0, size=(40, 3))
        y = 0.5 - X[:, 0] + 2.0 * X[:, 1] ** 2 + 0.25 * X[:, 2] ** 3
        fitted = Polynomial(3).fit(X, y)
        box = Uniform.create(-2.0, 2.0, dim=3)
        assert fitted.analytic_expectation(box) == pytest.approx(0.5 + 8.0 / 3.0)

    def test_analytic_expectation_gaussian(self, rng):
        """E[1 + x^2] under N(1, 2^2) is 1 + (1 + 4)."""
        X = rng.standard_normal((20, 1))
        fitted = Polynomial(2).fit(X, 1.0 + X[:, 0] ** 2)
        gauss = IndependentGaussian.create(1.0, 2.0, dim=1)
        assert fitted.analytic_expectation(gauss) == pytest.approx(6.0)

    def test_fit_dist_has_no_closed_form(self, rng):
        X = rng.random((20, 2))
        fitted = Polynomial(2, fit_dist=True).fit(X, X[:, 0])
        box = Uniform.create(0.0, 1.0, dim=2)
        assert not fitted.supports(CAPABILITY_ANALYTIC_EXPECTATION, box)
        with pytest.raises(ConfigurationError):
            fitted.analytic_expectation(box)

    def test_supports(self, rng):
        fitted = Polynomial(1).fit(rng.random((10, 2)), rng.random(10))
        assert fitted.supports(CAPABILITY_ANALYTIC_EXPECTATION)
        assert fitted.supports(CAPABILITY_ANALYTIC_EXPECTATION, Uniform.create(0.0, 1.0, dim=2))
        assert not fitted.supports(CAPABILITY_DENSITY)

    def test_too_few_samples(self, rng):
        X = rng.random((6, 10))
        with pytest.raises(FitFailure) as exc_info:
            Polynomial(3).fit(X, rng.random(6))
        assert exc_info.value.n_train == 6
        assert exc_info.value.n_terms == 31
        assert exc_info.value.surrogate == 'polynomial3'

    def test_constant_column_fails(self, rng):
        X = np.column_stack([rng.random(20), np.full(20, 0.5)])
        with pytest.raises(FitFailure):
            Polynomial(1).fit(X, rng.random(20))

    def test_predict_dimension_check(self, rng):
        fitted = Polynomial(1).fit(rng.random((10, 2)), rng.random(10))
        with pytest.raises(DimensionError):
            fitted.predict(rng.random((3, 4)))

    def test_expectation_dimension_check(self, rng):
        fitted = Polynomial(1).fit(rng.random((10, 2)), rng.random(10))
        with pytest.raises(DimensionError):
            fitted.analytic_expectation(Uniform.create(0.0, 1.0, dim=3))


class TestIdentity:

    def test_predicts_zero(self, rng):
        fitted = Identity().fit(rng.random((5, 3)), rng.random(5))
        np.testing.assert_array_equal(fitted.predict(rng.random((4, 3))), np.zeros(4))
        assert fitted.analytic_expectation(Uniform.create(0.0, 1.0, dim=3)) == 0.0
        assert fitted.supports(CAPABILITY_ANALYTIC_EXPECTATION)

    def test_fits_single_sample(self, rng):
        fitted = Identity().fit(rng.random((1, 3)), rng.random(1))
        assert fitted.predict(rng.random((1, 3))).shape == (1,)
