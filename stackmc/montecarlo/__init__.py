"""
Stacked Monte Carlo: K-fold surrogate-corrected expectation estimates and
their error-in-mean curve over a sample-count sweep.

Usage:
    from stackmc.montecarlo import run, sample_range

    counts = sample_range(8, 35, 70)
    sol = run(problem, counts, n_runs=2000, seed=42, n_jobs=-1)
    stats = sol.error_in_mean()
    print(sol.summary())

Building blocks:
    sample_range: sample-count sweep
    partition: random K-fold split
    kfold_estimate: one stacked estimate from one sample batch
    run_trial: draw, evaluate, partition, estimate
    error_in_mean / summarize: aggregate raw estimates
"""

from stackmc.montecarlo._sweep import sample_range
from stackmc.montecarlo._folds import partition
from stackmc.montecarlo._kfold import kfold_estimate, combine_folds
from stackmc.montecarlo._trial import run_trial, trial_rng
from stackmc.montecarlo._aggregate import error_in_mean, summarize
from stackmc.montecarlo._common import ErrorStat, KFoldResult, TrialParams
from stackmc.montecarlo.design import RunDesign
from stackmc.montecarlo.solution import TrialSolution
from stackmc.montecarlo.solvers import run

__all__ = [
    "run",
    "sample_range",
    "partition",
    "kfold_estimate",
    "combine_folds",
    "run_trial",
    "trial_rng",
    "error_in_mean",
    "summarize",
    "ErrorStat",
    "KFoldResult",
    "TrialParams",
    "RunDesign",
    "TrialSolution",
]
