"""
Additive polynomial surrogate.

The basis has no cross terms: an intercept plus x_d, x_d^2, ..., x_d^order
for every coordinate d, so 1 + d * order coefficients. With independent
coordinates the surrogate's expectation is then a dot product of its
coefficients with the distribution's raw moments.

Two modes:
    fit_dist=False: closed-form expectation from the distribution's moments.
    fit_dist=True:  no closed form is offered; the estimator falls back to
                    averaging the surrogate over the sample batch, which is
                    the same as integrating against the empirical moments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from stackmc.core.capabilities import CAPABILITY_ANALYTIC_EXPECTATION, CAPABILITY_MOMENTS
from stackmc.core.exceptions import (
    ConfigurationError,
    DimensionError,
    FitFailure,
    SingularMatrixError,
)
from stackmc.core.linalg import qr_solve_cpu
from stackmc.core.protocols import Distribution


def additive_basis(X: NDArray[np.floating[Any]], order: int) -> NDArray[np.floating[Any]]:
    """
    Build the additive polynomial design matrix.

    Columns are [1, x^1 (d cols), x^2 (d cols), ..., x^order (d cols)].
    """
    n, d = X.shape
    columns = [np.ones((n, 1))]
    power = np.ones_like(X)
    for _ in range(order):
        power = power * X
        columns.append(power)
    return np.hstack(columns)


@dataclass(frozen=True)
class Polynomial:
    """
    Fitting strategy for the additive polynomial surrogate.

    Attributes:
        order: Highest power per coordinate (>= 1)
        fit_dist: If True, do not integrate analytically
    """
    order: int = 3
    fit_dist: bool = False

    def __post_init__(self):
        if isinstance(self.order, bool) or not isinstance(self.order, int) or self.order < 1:
            raise ConfigurationError(f"order must be an integer >= 1, got {self.order!r}")

    @property
    def name(self) -> str:
        suffix = '_fitdist' if self.fit_dist else ''
        return f"polynomial{self.order}{suffix}"

    def n_terms(self, dim: int) -> int:
        """Number of coefficients for a dim-dimensional input."""
        return 1 + dim * self.order

    def fit(self, X: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]]) -> FittedPolynomial:
        """
        Least squares fit via QR.

        Raises:
            FitFailure: If there are fewer training samples than coefficients
                or the basis is rank-deficient on these samples
        """
        n, d = X.shape
        basis = additive_basis(X, self.order)
        try:
            beta = qr_solve_cpu(basis, y, check_rank=True)
        except SingularMatrixError as e:
            raise FitFailure(
                f"{self.name}: cannot fit {basis.shape[1]} coefficients "
                f"from {n} samples ({e})",
                surrogate=self.name,
                n_train=n,
                n_terms=basis.shape[1],
            ) from e

        return FittedPolynomial(
            intercept=float(beta[0]),
            coefficients=beta[1:].reshape(self.order, d),
            fit_dist=self.fit_dist,
        )


@dataclass(frozen=True, eq=False)
class FittedPolynomial:
    """
    Fitted additive polynomial.

    Attributes:
        intercept: Constant term
        coefficients: Shape (order, d); row k-1 multiplies x^k
        fit_dist: Whether analytic integration is disabled
    """
    intercept: float
    coefficients: NDArray[np.floating[Any]]
    fit_dist: bool = False

    @property
    def order(self) -> int:
        return int(self.coefficients.shape[0])

    @property
    def dim(self) -> int:
        return int(self.coefficients.shape[1])

    def predict(self, X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        X = np.atleast_2d(X)
        if X.shape[1] != self.dim:
            raise DimensionError(f"X: expected {self.dim} columns, got {X.shape[1]}")
        out = np.full(X.shape[0], self.intercept)
        power = np.ones_like(X)
        for k in range(self.order):
            power = power * X
            out += power @ self.coefficients[k]
        return out

    def analytic_expectation(self, distribution: Distribution) -> float:
        if not self.supports(CAPABILITY_ANALYTIC_EXPECTATION, distribution):
            raise ConfigurationError(
                "polynomial surrogate cannot integrate analytically against "
                f"{distribution!r} (fit_dist={self.fit_dist})"
            )
        if distribution.dim != self.dim:
            raise DimensionError(
                f"distribution has {distribution.dim} dimensions, surrogate has {self.dim}"
            )
        total = self.intercept
        for k in range(self.order):
            total += float(distribution.moment(k + 1) @ self.coefficients[k])
        return total

    def supports(self, capability: str, distribution: Distribution | None = None) -> bool:
        if capability == CAPABILITY_ANALYTIC_EXPECTATION:
            if self.fit_dist:
                return False
            return distribution is None or distribution.supports(CAPABILITY_MOMENTS)
        return False
