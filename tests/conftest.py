"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from stackmc.distributions import Uniform
from stackmc.functions import rosenbrock, rosenbrock_expectation
from stackmc.problems import Problem
from stackmc.surrogates import Polynomial


def quadratic(X, rng=None):
    """Additive quadratic: inside the order-2 polynomial family."""
    return 1.0 + 2.0 * X[:, 0] + 3.0 * X[:, 1] ** 2


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square():
    """Uniform[-1, 1]^2."""
    return Uniform.create(-1.0, 1.0, dim=2)


@pytest.fixture
def quadratic_problem(square):
    """Target exactly representable by the surrogate. E[f] = 2."""
    return Problem.build(
        'quadratic', square, quadratic, Polynomial(order=2),
        n_folds=5, true_value=2.0,
    )


@pytest.fixture
def rosen2d_problem():
    """Small Rosenbrock problem, cheap enough for many trials."""
    dist = Uniform.create(-3.0, 3.0, dim=2)
    return Problem.build(
        'rosen2d', dist, rosenbrock, Polynomial(order=3),
        n_folds=5, true_value=rosenbrock_expectation(dist),
    )
