"""
K-fold stacked Monte Carlo estimator.

For fold i the surrogate g_i is fit on every sample outside the fold, and
the fold's estimate is

    E[g_i] + mean over j in fold i of (f(x_j) - g_i(x_j))

so each sample contributes to exactly one residual mean, evaluated with a
surrogate that never saw it. The run estimate is the fold-size-weighted
average of the fold estimates.

E[g_i] comes from the fitted surrogate's closed form when it supports one
for the problem distribution; otherwise it is the mean of g_i over the
whole sample batch.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from stackmc.core.capabilities import CAPABILITY_ANALYTIC_EXPECTATION
from stackmc.core.exceptions import EstimationFailure, FitFailure
from stackmc.core.protocols import Distribution, FittedSurrogate, Surrogate
from stackmc.core.validation import check_2d, check_consistent_length
from stackmc.montecarlo._common import KFoldResult


def surrogate_expectation(fitted: FittedSurrogate, distribution: Distribution, X: NDArray[np.floating[Any]]) -> float:
    """Closed-form expectation if available, else the sample-batch average."""
    if fitted.supports(CAPABILITY_ANALYTIC_EXPECTATION, distribution):
        return float(fitted.analytic_expectation(distribution))
    return float(np.mean(fitted.predict(X)))


def combine_folds(
    fold_estimates: NDArray[np.floating[Any]],
    fold_sizes: NDArray[np.intp],
) -> float:
    """Fold-size-weighted mean of the fold estimates."""
    weights = np.asarray(fold_sizes, dtype=np.float64)
    return float(np.dot(weights, fold_estimates) / weights.sum())


def kfold_estimate(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    folds: Sequence[NDArray[np.intp]],
    surrogates: Sequence[Surrogate],
    distribution: Distribution,
) -> KFoldResult:
    """
    Stacked Monte Carlo estimate of E[f] from one sample batch.

    Args:
        X: Sample points, shape (N, D).
        y: Function values at X, shape (N,).
        folds: Disjoint index arrays covering range(N).
        surrogates: Ordered fitting strategies; fold estimates are averaged
            across them.
        distribution: Distribution the samples were drawn from.

    Returns:
        KFoldResult with the combined estimate and per-fold detail.

    Raises:
        DimensionError: If X is not 2D or y does not match its length.
        EstimationFailure: If any surrogate fails to fit a fold's training
            set. fold_index names the fold; the FitFailure is chained.
    """
    check_2d(X, "X")
    check_consistent_length(X, y, names=("X", "y"))

    n = X.shape[0]
    n_folds = len(folds)
    n_surrogates = len(surrogates)

    expectations = np.empty((n_folds, n_surrogates))
    residual_means = np.empty((n_folds, n_surrogates))
    fold_sizes = np.array([len(f) for f in folds], dtype=np.intp)

    for i, held_out in enumerate(folds):
        train = np.ones(n, dtype=bool)
        train[held_out] = False
        X_train, y_train = X[train], y[train]
        X_test, y_test = X[held_out], y[held_out]

        for s, surrogate in enumerate(surrogates):
            try:
                fitted = surrogate.fit(X_train, y_train)
            except FitFailure as e:
                raise EstimationFailure(
                    f"surrogate {surrogate.name!r} failed to fit fold {i} "
                    f"({X_train.shape[0]} training samples): {e}",
                    fold_index=i,
                ) from e

            residual_means[i, s] = np.mean(y_test - fitted.predict(X_test))
            expectations[i, s] = surrogate_expectation(fitted, distribution, X)

    fold_estimates = np.mean(expectations + residual_means, axis=1)

    return KFoldResult(
        estimate=combine_folds(fold_estimates, fold_sizes),
        fold_estimates=fold_estimates,
        fold_sizes=fold_sizes,
        expectations=expectations,
        residual_means=residual_means,
    )
