"""
CPU backend for repeated trials.

CPUTrialBackend runs every trial serially in the calling process. It also
holds the dispatch loop shared with the parallel backend: trials are
dispatched in chunks, a cancellation check runs before each chunk, and
results land in the (count index, trial index) cell they belong to.
"""

from __future__ import annotations

import logging

import numpy as np

from stackmc.core.result import Result
from stackmc.core.timing import Timer
from stackmc.montecarlo._common import TrialParams
from stackmc.montecarlo._trial import run_seeded_trial
from stackmc.montecarlo.design import RunDesign

LOG = logging.getLogger(__name__)


class CPUTrialBackend:
    """
    Serial CPU backend.

    Args:
        cancel: Optional object with is_set() (e.g. threading.Event). When
            set, no further trials are dispatched; completed trials are kept.
        chunk_size: Trials dispatched between cancellation checks.
    """

    def __init__(self, cancel=None, chunk_size: int = 1):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self._cancel = cancel
        self._chunk_size = chunk_size

    @property
    def name(self) -> str:
        return 'cpu_serial'

    def _info(self) -> dict:
        return {'n_jobs': 1}

    def _run_chunk(self, design: RunDesign, count_index: int, trial_indices: range) -> list[float]:
        n_samples = design.sample_counts[count_index]
        return [
            run_seeded_trial(design.problem, n_samples, design.entropy, count_index, t)
            for t in trial_indices
        ]

    def _cancelled(self) -> bool:
        return self._cancel is not None and self._cancel.is_set()

    def solve(self, design: RunDesign) -> Result[TrialParams]:
        """Run all trials and return Result[TrialParams]."""
        timer = Timer()
        timer.start()

        estimates = np.full((design.n_counts, design.n_runs), np.nan)
        warnings_list: list[str] = []
        cancelled = False

        with timer.section('trials'):
            for ci, n_samples in enumerate(design.sample_counts):
                LOG.info(
                    "sample count %d (%d/%d): %d trials",
                    n_samples, ci + 1, design.n_counts, design.n_runs,
                )
                for start in range(0, design.n_runs, self._chunk_size):
                    if self._cancelled():
                        cancelled = True
                        break
                    trials = range(start, min(start + self._chunk_size, design.n_runs))
                    LOG.debug("dispatching trials %d-%d", trials.start, trials.stop - 1)
                    estimates[ci, trials.start:trials.stop] = self._run_chunk(design, ci, trials)
                if cancelled:
                    break

        timer.stop()

        completed = int(np.sum(~np.isnan(estimates)))
        if cancelled:
            LOG.info("run cancelled after %d of %d trials", completed, design.n_trials)
            warnings_list.append(
                f"run cancelled: {completed} of {design.n_trials} trials completed"
            )

        params = TrialParams(
            estimates=estimates,
            sample_counts=design.sample_counts,
            n_runs=design.n_runs,
            seed_entropy=design.entropy,
        )

        info = {
            'problem': design.problem.name,
            'seed_entropy': design.entropy,
            'cancelled': cancelled,
            'completed_trials': completed,
        }
        info.update(self._info())

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
