"""
Product distributions with independent coordinates.

Both distributions here have closed-form raw moments per coordinate, which
is what the polynomial surrogate needs to integrate itself exactly. Densities
are evaluated through scipy.stats.

Usage:
    from stackmc.distributions import Uniform, IndependentGaussian

    dist = Uniform.create(-3.0, 3.0, dim=10)
    X = dist.sample(50, rng)          # (50, 10)
    dist.moment(4)                    # E[x_d^4] for every d
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats
from scipy.special import comb, factorial2

from stackmc.core.capabilities import CAPABILITY_DENSITY, CAPABILITY_MOMENTS
from stackmc.core.exceptions import ConfigurationError, DimensionError
from stackmc.core.validation import check_array, check_finite, check_1d, check_2d


def _broadcast_params(a, b, dim: int | None, names: tuple[str, str]):
    a_arr = check_array(a, names[0])
    b_arr = check_array(b, names[1])
    if dim is not None:
        if a_arr.ndim == 0:
            a_arr = np.full(dim, float(a_arr))
        if b_arr.ndim == 0:
            b_arr = np.full(dim, float(b_arr))
    a_arr = np.array(a_arr, dtype=np.float64, ndmin=1)
    b_arr = np.array(b_arr, dtype=np.float64, ndmin=1)
    check_1d(a_arr, names[0])
    check_1d(b_arr, names[1])
    check_finite(a_arr, names[0])
    check_finite(b_arr, names[1])
    if a_arr.shape != b_arr.shape:
        raise DimensionError(
            f"{names[0]} and {names[1]} must have the same shape, "
            f"got {a_arr.shape} and {b_arr.shape}"
        )
    if a_arr.shape[0] < 1:
        raise ConfigurationError("distribution must have at least 1 dimension")
    return a_arr, b_arr


def _check_points(X, dim: int) -> NDArray[np.floating[Any]]:
    X = np.asarray(X, dtype=np.float64)
    if X.ndim == 1:
        X = X.reshape(1, -1)
    check_2d(X, 'X')
    if X.shape[1] != dim:
        raise DimensionError(f"X: expected {dim} columns, got {X.shape[1]}")
    return X


@dataclass(frozen=True, eq=False)
class Uniform:
    """
    Uniform distribution on the box [low_1, high_1] x ... x [low_d, high_d].

    Attributes:
        low: Lower bounds, shape (d,)
        high: Upper bounds, shape (d,)
    """
    low: NDArray[np.floating[Any]]
    high: NDArray[np.floating[Any]]

    @classmethod
    def create(cls, low, high, dim: int | None = None) -> Uniform:
        """
        Create a uniform distribution with validation.

        Args:
            low: Lower bound(s), scalar or shape (d,)
            high: Upper bound(s), scalar or shape (d,)
            dim: Broadcast scalar bounds to this many dimensions

        Raises:
            ConfigurationError: If any low >= high
        """
        low_arr, high_arr = _broadcast_params(low, high, dim, ('low', 'high'))
        if np.any(low_arr >= high_arr):
            raise ConfigurationError(
                f"low must be strictly below high in every dimension, "
                f"got low={low_arr.tolist()}, high={high_arr.tolist()}"
            )
        return cls(low=low_arr, high=high_arr)

    @property
    def dim(self) -> int:
        return int(self.low.shape[0])

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        return rng.uniform(self.low, self.high, size=(n, self.dim))

    def density(self, X) -> NDArray[np.floating[Any]]:
        X = _check_points(X, self.dim)
        pdf = stats.uniform.pdf(X, loc=self.low, scale=self.high - self.low)
        return np.prod(pdf, axis=1)

    def moment(self, order: int) -> NDArray[np.floating[Any]]:
        # E[x^k] = (b^(k+1) - a^(k+1)) / ((k+1)(b-a))
        k = int(order)
        a, b = self.low, self.high
        return (b ** (k + 1) - a ** (k + 1)) / ((k + 1) * (b - a))

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_DENSITY, CAPABILITY_MOMENTS)

    def __repr__(self) -> str:
        return f"Uniform(dim={self.dim}, low={self.low.tolist()}, high={self.high.tolist()})"


@dataclass(frozen=True, eq=False)
class IndependentGaussian:
    """
    Gaussian with diagonal covariance.

    Attributes:
        mean: Coordinate means, shape (d,)
        std: Coordinate standard deviations, shape (d,)
    """
    mean: NDArray[np.floating[Any]]
    std: NDArray[np.floating[Any]]

    @classmethod
    def create(cls, mean, std, dim: int | None = None) -> IndependentGaussian:
        """
        Create an independent Gaussian with validation.

        Raises:
            ConfigurationError: If any std <= 0
        """
        mean_arr, std_arr = _broadcast_params(mean, std, dim, ('mean', 'std'))
        if np.any(std_arr <= 0):
            raise ConfigurationError(
                f"std must be positive in every dimension, got {std_arr.tolist()}"
            )
        return cls(mean=mean_arr, std=std_arr)

    @property
    def dim(self) -> int:
        return int(self.mean.shape[0])

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        return rng.normal(self.mean, self.std, size=(n, self.dim))

    def density(self, X) -> NDArray[np.floating[Any]]:
        X = _check_points(X, self.dim)
        return np.prod(stats.norm.pdf(X, loc=self.mean, scale=self.std), axis=1)

    def moment(self, order: int) -> NDArray[np.floating[Any]]:
        # E[(mu + s z)^k] = sum over even j of C(k, j) mu^(k-j) s^j (j-1)!!
        k = int(order)
        total = np.zeros(self.dim)
        for j in range(0, k + 1, 2):
            central = factorial2(j - 1, exact=True) if j > 0 else 1
            total += comb(k, j, exact=True) * self.mean ** (k - j) * self.std ** j * central
        return total

    def supports(self, capability: str) -> bool:
        return capability in (CAPABILITY_DENSITY, CAPABILITY_MOMENTS)

    def __repr__(self) -> str:
        return (
            f"IndependentGaussian(dim={self.dim}, mean={self.mean.tolist()}, "
            f"std={self.std.tolist()})"
        )
