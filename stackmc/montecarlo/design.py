"""
Design class for a stacked Monte Carlo run.

RunDesign encapsulates all inputs needed by backends to run the repeated
trials: the problem, the sample-count sweep, the trial budget and the root
seed. Immutable, validated at construction, so configuration errors surface
before any trial runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from stackmc.core.exceptions import ConfigurationError, InvalidFoldCountError
from stackmc.core.validation import check_positive_int
from stackmc.problems.problem import Problem


@dataclass(frozen=True)
class RunDesign:
    """
    Frozen design for a run of repeated trials.

    Attributes:
        problem: The benchmark problem (shared read-only by every trial).
        sample_counts: Sweep of sample counts, in curve order.
        n_runs: Trials per sample count.
        seed: Seed the caller asked for, or None.
        entropy: Root entropy actually used. Equals seed when one was given;
            otherwise fresh entropy, recorded so the run can be repeated.
    """
    problem: Problem
    sample_counts: tuple[int, ...]
    n_runs: int
    seed: int | None
    entropy: int

    @classmethod
    def for_run(
        cls,
        problem: Problem,
        sample_counts: Sequence[int],
        n_runs: int = 2000,
        *,
        seed: int | None = None,
    ) -> RunDesign:
        """
        Create a run design with validation.

        Args:
            problem: Validated Problem.
            sample_counts: Sample counts to evaluate, e.g. from sample_range().
            n_runs: Trials per sample count. Must be >= 1.
            seed: Root seed (non-negative int) for reproducible runs.

        Returns:
            Validated RunDesign.

        Raises:
            ConfigurationError: If the sweep or trial budget is invalid.
            InvalidFoldCountError: If any sample count is below the fold count.
            ConfigurationError: If the smallest training set of some sample
                count is too small for a surrogate's coefficients.
        """
        if not isinstance(problem, Problem):
            raise ConfigurationError(
                f"problem must be a Problem, got {type(problem).__name__}"
            )

        counts = tuple(
            check_positive_int(c, f"sample_counts[{i}]")
            for i, c in enumerate(sample_counts)
        )
        if not counts:
            raise ConfigurationError("sample_counts must not be empty")

        too_small = [c for c in counts if c < problem.n_folds]
        if too_small:
            raise InvalidFoldCountError(
                f"sample counts {too_small} are smaller than the fold count "
                f"({problem.n_folds})",
                n_folds=problem.n_folds,
                n_samples=min(too_small),
            )

        _check_training_sizes(problem, counts)

        n_runs = check_positive_int(n_runs, 'n_runs')

        if seed is None:
            entropy = int(np.random.SeedSequence().entropy)
        else:
            entropy = check_positive_int(seed, 'seed', minimum=0)

        return cls(
            problem=problem,
            sample_counts=counts,
            n_runs=n_runs,
            seed=seed,
            entropy=entropy,
        )

    @property
    def n_counts(self) -> int:
        return len(self.sample_counts)

    @property
    def n_trials(self) -> int:
        """Total number of trials in the run."""
        return self.n_counts * self.n_runs


def _check_training_sizes(problem: Problem, counts: tuple[int, ...]) -> None:
    # The largest fold holds ceil(N/K) samples, so its complement is the
    # smallest training set of a trial at N samples.
    for surrogate in problem.surrogates:
        n_terms = getattr(surrogate, 'n_terms', None)
        if n_terms is None:
            continue
        needed = n_terms(problem.dim)
        for count in counts:
            n_train = count - math.ceil(count / problem.n_folds)
            if n_train < needed:
                raise ConfigurationError(
                    f"sample count {count} leaves {n_train} training samples per "
                    f"fold ({problem.n_folds} folds); {surrogate.name} needs "
                    f"{needed} in {problem.dim} dimensions"
                )
