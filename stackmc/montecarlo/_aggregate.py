"""
Error-in-mean aggregation over repeated trials.

Input is the raw estimate matrix, rows indexed by sweep position and
columns by trial. NaN cells (trials never dispatched) are ignored, so a
cancelled run still aggregates over what completed.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from stackmc.core.exceptions import AggregationError, DimensionError
from stackmc.montecarlo._common import ErrorStat


def _rows(estimates, sample_counts):
    estimates = np.asarray(estimates, dtype=np.float64)
    if estimates.ndim != 2:
        raise DimensionError(
            f"estimates: expected 2D array (n_counts, n_runs), got shape {estimates.shape}"
        )
    if estimates.shape[0] != len(sample_counts):
        raise DimensionError(
            f"estimates has {estimates.shape[0]} rows for {len(sample_counts)} sample counts"
        )
    for count, row in zip(sample_counts, estimates):
        yield int(count), row[~np.isnan(row)]


def _mean_and_variance(values: NDArray[np.floating[Any]]) -> tuple[float, float]:
    if values.size == 0:
        return float('nan'), float('nan')
    mean = float(np.mean(values))
    variance = float(np.var(values, ddof=1)) if values.size > 1 else 0.0
    return mean, variance


def summarize(
    estimates: NDArray[np.floating[Any]],
    sample_counts: Sequence[int],
) -> tuple[ErrorStat, ...]:
    """Truth-free statistics (mean and variance) per sample count."""
    stats = []
    for count, values in _rows(estimates, sample_counts):
        mean, variance = _mean_and_variance(values)
        stats.append(ErrorStat(
            sample_count=count,
            n_trials=int(values.size),
            mean=mean,
            variance=variance,
        ))
    return tuple(stats)


def error_in_mean(
    estimates: NDArray[np.floating[Any]],
    sample_counts: Sequence[int],
    true_value: float | None,
) -> tuple[ErrorStat, ...]:
    """
    Mean squared error of the trial estimates against the true expectation.

    mse = (1/n) sum (estimate - truth)^2, with bias, variance and the
    standard error of the mse alongside.

    Raises:
        AggregationError: If true_value is None.
    """
    if true_value is None:
        raise AggregationError(
            "error in mean needs the true expectation; none was supplied. "
            "Use summarize() for truth-free statistics.",
            statistic='mse',
        )
    truth = float(true_value)

    stats = []
    for count, values in _rows(estimates, sample_counts):
        mean, variance = _mean_and_variance(values)
        if values.size == 0:
            bias = mse = mse_se = float('nan')
        else:
            squared = (values - truth) ** 2
            bias = mean - truth
            mse = float(np.mean(squared))
            mse_se = (
                float(np.std(squared, ddof=1) / np.sqrt(values.size))
                if values.size > 1 else 0.0
            )
        stats.append(ErrorStat(
            sample_count=count,
            n_trials=int(values.size),
            mean=mean,
            variance=variance,
            bias=bias,
            mse=mse,
            mse_se=mse_se,
        ))
    return tuple(stats)
