"""
Problem definition.

A Problem is everything the estimator needs to know about one benchmark:
what to integrate, under which distribution, with which surrogates and how
many folds. Immutable, validated at construction, shared read-only by all
trials of a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stackmc.core.exceptions import ConfigurationError
from stackmc.core.protocols import Distribution, Surrogate, TargetFunction
from stackmc.core.validation import check_positive_int


@dataclass(frozen=True)
class Problem:
    """
    Frozen benchmark problem.

    Attributes:
        name: Case identifier, used for output paths
        distribution: Distribution the expectation is taken under
        function: Target function, possibly stochastic
        surrogates: Ordered surrogate strategies; fold estimates are
            averaged across them
        n_folds: Number of folds K (>= 2)
        dim: Dimensionality D; must match the distribution
        true_value: Ground-truth expectation, or None if unknown
    """
    name: str
    distribution: Distribution
    function: TargetFunction
    surrogates: tuple[Surrogate, ...]
    n_folds: int
    dim: int
    true_value: float | None = None

    @classmethod
    def build(
        cls,
        name: str,
        distribution: Distribution,
        function: TargetFunction,
        surrogates,
        *,
        n_folds: int = 10,
        dim: int | None = None,
        true_value: float | None = None,
    ) -> Problem:
        """
        Create a Problem with validation.

        Args:
            name: Case identifier.
            distribution: Sampling distribution.
            function: Target function f(X, rng) -> (n,).
            surrogates: A single strategy or an ordered sequence of them.
            n_folds: Number of folds. Must be >= 2.
            dim: Dimensionality. Defaults to the distribution's.
            true_value: Known expectation, if any.

        Raises:
            ConfigurationError: If inputs are invalid.
        """
        if dim is None:
            dim = getattr(distribution, 'dim', None)
            if dim is None:
                raise ConfigurationError(
                    "dim is not set and the distribution does not report one"
                )
        dim = check_positive_int(dim, 'dim')
        n_folds = check_positive_int(n_folds, 'n_folds', minimum=2)

        if distribution.dim != dim:
            raise ConfigurationError(
                f"distribution has {distribution.dim} dimensions, problem has {dim}"
            )

        if hasattr(surrogates, 'fit'):
            surrogates = (surrogates,)
        surrogates = tuple(surrogates)
        if not surrogates:
            raise ConfigurationError("at least one surrogate strategy is required")

        if not callable(function):
            raise ConfigurationError(f"function must be callable, got {function!r}")

        if true_value is not None:
            true_value = float(true_value)

        return cls(
            name=name,
            distribution=distribution,
            function=function,
            surrogates=surrogates,
            n_folds=n_folds,
            dim=dim,
            true_value=true_value,
        )

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'dim': self.dim,
            'n_folds': self.n_folds,
            'surrogates': [s.name for s in self.surrogates],
            'true_value': self.true_value,
        }
