"""
Solution wrapper for a run of repeated trials.

TrialSolution wraps Result[TrialParams] and provides accessors, error
statistics and a printable summary. Error statistics are computed on
demand from the raw estimates, so a missing ground truth fails at
aggregation time without discarding the trials.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from stackmc.core.result import Result
from stackmc.montecarlo._aggregate import error_in_mean, summarize
from stackmc.montecarlo._common import ErrorStat, TrialParams

if TYPE_CHECKING:
    from stackmc.montecarlo.design import RunDesign
    from stackmc.problems.problem import Problem


@dataclass
class TrialSolution:
    """
    User-facing results of a stacked Monte Carlo run.

    The raw estimate matrix is kept so alternate statistics (bias, variance)
    can be computed without rerunning trials.
    """
    _result: Result[TrialParams]
    _design: 'RunDesign'

    # --- Raw trial data ---

    @property
    def estimates(self) -> NDArray[np.floating[Any]]:
        """Trial estimates, shape (n_counts, n_runs). NaN = not run."""
        return self._result.params.estimates

    @property
    def sample_counts(self) -> tuple[int, ...]:
        return self._result.params.sample_counts

    @property
    def n_runs(self) -> int:
        return self._result.params.n_runs

    @property
    def seed_entropy(self) -> int:
        """Root entropy; pass as seed to reproduce this run."""
        return self._result.params.seed_entropy

    # --- Metadata ---

    @property
    def problem(self) -> 'Problem':
        return self._design.problem

    @property
    def true_value(self) -> float | None:
        return self._design.problem.true_value

    @property
    def cancelled(self) -> bool:
        return bool(self._result.info.get('cancelled', False))

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Statistics ---

    def error_in_mean(self, true_value: float | None = None) -> tuple[ErrorStat, ...]:
        """
        Per-sample-count MSE against the true expectation.

        Args:
            true_value: Overrides the problem's true value.

        Raises:
            AggregationError: If neither is available.
        """
        truth = self.true_value if true_value is None else true_value
        return error_in_mean(self.estimates, self.sample_counts, truth)

    def summarize(self) -> tuple[ErrorStat, ...]:
        """Mean and variance per sample count, no ground truth needed."""
        return summarize(self.estimates, self.sample_counts)

    # --- Display ---

    def summary(self) -> str:
        """
        Error-in-mean table.

        Produces:
            STACKED MONTE CARLO: rosenunif (dim=10, folds=10, runs=2000)

              samples     trials            mean             mse          mse se
                   35       2000      1923.84512      1532.11110        48.23801
        """
        p = self.problem
        lines = [
            f"\nSTACKED MONTE CARLO: {p.name} "
            f"(dim={p.dim}, folds={p.n_folds}, runs={self.n_runs})",
            f"Surrogates: {', '.join(s.name for s in p.surrogates)}",
            "",
        ]

        if self.true_value is not None:
            stats = self.error_in_mean()
            lines.append(
                f"{'samples':>9s} {'trials':>10s} {'mean':>15s} "
                f"{'mse':>15s} {'mse se':>15s}"
            )
            for s in stats:
                lines.append(
                    f"{s.sample_count:9d} {s.n_trials:10d} {s.mean:15.5f} "
                    f"{s.mse:15.5f} {s.mse_se:15.5f}"
                )
            lines.append("")
            lines.append(f"True value: {self.true_value:.10g}")
        else:
            stats = self.summarize()
            lines.append(f"{'samples':>9s} {'trials':>10s} {'mean':>15s} {'variance':>15s}")
            for s in stats:
                lines.append(
                    f"{s.sample_count:9d} {s.n_trials:10d} {s.mean:15.5f} "
                    f"{s.variance:15.5f}"
                )

        if self.cancelled:
            lines.append("Run was cancelled before all trials completed.")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TrialSolution(problem={self.problem.name!r}, "
            f"counts={len(self.sample_counts)}, n_runs={self.n_runs}, "
            f"backend={self.backend_name!r})"
        )
