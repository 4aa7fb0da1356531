"""
One trial: draw a sample batch, evaluate the target, estimate.

Every trial gets its own generator derived from the run's root entropy and
its (count index, trial index) key, so a trial's result does not depend on
which worker ran it or in what order.
"""

from __future__ import annotations

import numpy as np

from stackmc.core.exceptions import EstimationFailure
from stackmc.montecarlo._folds import partition
from stackmc.montecarlo._kfold import kfold_estimate
from stackmc.problems.problem import Problem


def trial_rng(entropy: int, count_index: int, trial_index: int) -> np.random.Generator:
    """Independent generator for one (sample count, trial) cell."""
    seq = np.random.SeedSequence(entropy, spawn_key=(count_index, trial_index))
    return np.random.default_rng(seq)


def run_trial(problem: Problem, n_samples: int, rng: np.random.Generator) -> float:
    """
    Run one trial and return its expectation estimate.

    The function is evaluated exactly once per drawn point, so stochastic
    targets contribute one noise draw per sample.

    Raises:
        InvalidFoldCountError: If n_samples < problem.n_folds.
        EstimationFailure: If a surrogate fit fails (fold_index set).
    """
    X = problem.distribution.sample(n_samples, rng)
    y = np.asarray(problem.function(X, rng), dtype=np.float64)
    folds = partition(n_samples, problem.n_folds, rng)
    result = kfold_estimate(X, y, folds, problem.surrogates, problem.distribution)
    return result.estimate


def run_seeded_trial(
    problem: Problem,
    n_samples: int,
    entropy: int,
    count_index: int,
    trial_index: int,
) -> float:
    """
    Run trial (count_index, trial_index) of a seeded run.

    Raises:
        EstimationFailure: With fold_index, trial_index and sample_count set.
    """
    rng = trial_rng(entropy, count_index, trial_index)
    try:
        return run_trial(problem, n_samples, rng)
    except EstimationFailure as e:
        raise EstimationFailure(
            f"trial {trial_index} at sample count {n_samples}: {e}",
            fold_index=e.fold_index,
            trial_index=trial_index,
            sample_count=n_samples,
        ) from e
