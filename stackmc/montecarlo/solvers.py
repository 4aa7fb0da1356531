"""
Solver dispatch for stacked Monte Carlo runs.

This module provides run() (public API) and backend selection.
"""

from __future__ import annotations

from typing import Literal, Sequence

from stackmc.montecarlo.design import RunDesign
from stackmc.montecarlo.solution import TrialSolution
from stackmc.montecarlo.backends.cpu import CPUTrialBackend
from stackmc.problems.problem import Problem


BackendChoice = Literal['auto', 'cpu', 'joblib']


def run(
    problem: Problem,
    sample_counts: Sequence[int],
    n_runs: int = 2000,
    *,
    seed: int | None = None,
    backend: BackendChoice = 'auto',
    n_jobs: int | None = None,
    cancel=None,
) -> TrialSolution:
    """
    Run repeated stacked Monte Carlo trials over a sample-count sweep.

    For every sample count, n_runs independent trials each draw a fresh
    sample batch, evaluate the target and compute one K-fold stacked
    estimate. The raw estimates are returned; error statistics are taken
    from the solution afterwards.

    Args:
        problem: Benchmark problem.
        sample_counts: Sample counts, in curve order.
        n_runs: Trials per sample count.
        seed: Root seed. Same seed, same estimates, for every backend and
            worker count. None draws fresh entropy (recorded in the result).
        backend:
            - 'auto': joblib when n_jobs asks for more than one worker, else cpu
            - 'cpu': serial, in-process
            - 'joblib': process pool of n_jobs workers (-1 for all cores)
        n_jobs: Worker count for the joblib backend.
        cancel: Object with is_set() (e.g. threading.Event). Once set, no new
            trials are dispatched; in-flight ones finish.

    Returns:
        TrialSolution with raw estimates, error_in_mean() and summary().

    Raises:
        ConfigurationError: If the sweep or trial budget is invalid.
        EstimationFailure: If a surrogate fit fails, with fold, trial and
            sample count context.

    Example:
        >>> from stackmc.problems import get_case
        >>> from stackmc.montecarlo import run
        >>> config = get_case('rosenunif', n_runs=100)
        >>> sol = run(config.problem, config.sample_counts, config.n_runs, seed=1)
        >>> print(sol.summary())
    """
    design = RunDesign.for_run(problem, sample_counts, n_runs, seed=seed)
    backend_impl = _get_backend(backend, n_jobs, cancel)
    result = backend_impl.solve(design)
    return TrialSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice, n_jobs: int | None, cancel):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice == 'auto':
        if n_jobs is not None and n_jobs != 1:
            from stackmc.montecarlo.backends.parallel import JoblibTrialBackend
            return JoblibTrialBackend(n_jobs=n_jobs, cancel=cancel)
        return CPUTrialBackend(cancel=cancel)

    elif choice == 'cpu':
        return CPUTrialBackend(cancel=cancel)

    elif choice == 'joblib':
        from stackmc.montecarlo.backends.parallel import JoblibTrialBackend
        return JoblibTrialBackend(n_jobs=-1 if n_jobs is None else n_jobs, cancel=cancel)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
