"""
Parallel CPU backend for repeated trials, on joblib.

Trials are embarrassingly parallel and seeded per (count, trial) cell, so
this backend returns exactly the same estimates as CPUTrialBackend for the
same design, whatever n_jobs is.
"""

from __future__ import annotations

from joblib import Parallel, delayed

from stackmc.core.result import Result
from stackmc.montecarlo._common import TrialParams
from stackmc.montecarlo._trial import run_seeded_trial
from stackmc.montecarlo.backends.cpu import CPUTrialBackend
from stackmc.montecarlo.design import RunDesign


class JoblibTrialBackend(CPUTrialBackend):
    """
    Process-pool backend.

    Args:
        n_jobs: joblib worker count (-1 for all cores).
        cancel: Optional object with is_set(); checked between chunks.
        chunk_size: Trials handed to the pool between cancellation checks.
    """

    def __init__(self, n_jobs: int = -1, cancel=None, chunk_size: int = 250):
        super().__init__(cancel=cancel, chunk_size=chunk_size)
        self._n_jobs = n_jobs
        self._parallel: Parallel | None = None

    @property
    def name(self) -> str:
        return 'cpu_joblib'

    def _info(self) -> dict:
        return {'n_jobs': self._n_jobs}

    def _run_chunk(self, design: RunDesign, count_index: int, trial_indices: range) -> list[float]:
        n_samples = design.sample_counts[count_index]
        return self._parallel(
            delayed(run_seeded_trial)(
                design.problem, n_samples, design.entropy, count_index, t,
            )
            for t in trial_indices
        )

    def solve(self, design: RunDesign) -> Result[TrialParams]:
        """Run all trials on a joblib pool kept alive for the whole run."""
        with Parallel(n_jobs=self._n_jobs) as parallel:
            self._parallel = parallel
            try:
                return super().solve(design)
            finally:
                self._parallel = None
