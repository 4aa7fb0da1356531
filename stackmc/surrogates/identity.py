"""
No-op surrogate.

Predicts zero everywhere, so the stacked estimate reduces to the plain
Monte Carlo sample mean. Used as the baseline curve.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from stackmc.core.capabilities import CAPABILITY_ANALYTIC_EXPECTATION
from stackmc.core.protocols import Distribution


@dataclass(frozen=True)
class Identity:
    """Fitting strategy that fits nothing."""

    @property
    def name(self) -> str:
        return 'identity'

    def fit(self, X: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]]) -> FittedIdentity:
        return FittedIdentity()


@dataclass(frozen=True)
class FittedIdentity:

    def predict(self, X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return np.zeros(np.atleast_2d(X).shape[0])

    def analytic_expectation(self, distribution: Distribution) -> float:
        return 0.0

    def supports(self, capability: str, distribution: Distribution | None = None) -> bool:
        return capability == CAPABILITY_ANALYTIC_EXPECTATION
