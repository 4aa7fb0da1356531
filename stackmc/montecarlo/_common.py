"""
Common data structures for the stacked Monte Carlo experiment.

KFoldResult is what one estimator call produces, TrialParams is the
payload wrapped by Result[P] for a whole run, and ErrorStat is the
per-sample-count summary the error curve is made of.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class KFoldResult:
    """
    Output of one K-fold stacked estimate.

    - estimate: fold-size-weighted mean of fold_estimates
    - fold_estimates: expectation + residual mean per fold (averaged over
      surrogate strategies)
    - expectations / residual_means: shape (K, n_surrogates)
    """
    estimate: float
    fold_estimates: NDArray[np.floating[Any]]    # shape (K,)
    fold_sizes: NDArray[np.intp]                 # shape (K,)
    expectations: NDArray[np.floating[Any]]      # shape (K, S)
    residual_means: NDArray[np.floating[Any]]    # shape (K, S)


@dataclass(frozen=True)
class TrialParams:
    """
    Parameter payload for a run of repeated trials.

    - estimates: raw trial estimates keyed by (count index, trial index);
      NaN where a trial was never dispatched (cancelled run)
    - seed_entropy: root entropy of the per-trial SeedSequence tree
    """
    estimates: NDArray[np.floating[Any]]    # shape (n_counts, n_runs)
    sample_counts: tuple[int, ...]
    n_runs: int
    seed_entropy: int


@dataclass(frozen=True)
class ErrorStat:
    """
    Error-in-mean summary for one sample count.

    Truth-dependent fields (bias, mse, mse_se) are None when the statistic
    was computed without a ground-truth expectation.
    """
    sample_count: int
    n_trials: int
    mean: float
    variance: float
    bias: float | None = None
    mse: float | None = None
    mse_se: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
