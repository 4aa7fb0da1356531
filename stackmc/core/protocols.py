"""
Core protocols for stackmc.

These define the structural interfaces of the collaborators the estimator
consumes: distributions, target functions and surrogates. We use Protocol
(structural typing) rather than ABC (nominal typing) so that any object
with the right shape can be plugged into a Problem.

Design Principles:
    - Minimal contracts: prescribe only what the estimator actually calls
    - Capability-driven: use supports() for optional features
    - Vectorized: every call takes a batch of points, shape (n, d)
"""

from typing import Protocol, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class Distribution(Protocol):
    """
    Probability distribution over R^d that the expectation is taken under.

    Implementations must support repeated independent sampling with no
    hidden state across calls: all randomness comes from the generator
    passed to sample().
    """

    @property
    def dim(self) -> int:
        """Dimensionality d of the sample space."""
        ...

    def sample(self, n: int, rng: np.random.Generator) -> NDArray[np.floating[Any]]:
        """Draw n i.i.d. points, shape (n, d)."""
        ...

    def density(self, X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Probability density at each row of X, shape (n,)."""
        ...

    def moment(self, order: int) -> NDArray[np.floating[Any]]:
        """
        Raw moment E[x_d ** order] of every coordinate, shape (d,).

        Only meaningful for distributions supporting CAPABILITY_MOMENTS.
        """
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this distribution supports a given capability.

        Unknown capabilities MUST return False, never raise.
        """
        ...


@runtime_checkable
class TargetFunction(Protocol):
    """
    Scalar function whose expectation is estimated.

    May be stochastic: each call draws fresh noise from rng, exactly once
    per evaluated point. Callers must not assume determinism.
    """

    def __call__(
        self,
        X: NDArray[np.floating[Any]],
        rng: np.random.Generator,
    ) -> NDArray[np.floating[Any]]:
        ...


@runtime_checkable
class FittedSurrogate(Protocol):
    """
    A surrogate model after fitting to training samples.

    Fitted surrogates are immutable and owned by the fold that made them.
    """

    def predict(self, X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Surrogate value at each row of X, shape (n,)."""
        ...

    def analytic_expectation(self, distribution: Distribution) -> float:
        """
        Closed-form expectation of the surrogate under distribution.

        Only valid when supports(CAPABILITY_ANALYTIC_EXPECTATION) is True
        for this distribution.
        """
        ...

    def supports(self, capability: str, distribution: Distribution | None = None) -> bool:
        """Check a capability, optionally against a specific distribution."""
        ...


@runtime_checkable
class Surrogate(Protocol):
    """
    A fitting strategy: stateless, picklable, reusable across folds.

    Raises:
        FitFailure: If the training data cannot support a fit
    """

    @property
    def name(self) -> str:
        """Strategy identifier, e.g. 'polynomial3' or 'identity'."""
        ...

    def fit(
        self,
        X: NDArray[np.floating[Any]],
        y: NDArray[np.floating[Any]],
    ) -> FittedSurrogate:
        ...
