"""
Saving, loading and plotting error-in-mean curves.

Results are written under an explicit output root as

    <root>/<case>/dim_<D>/runs_<R>/eim_json.txt
    <root>/<case>/dim_<D>/runs_<R>/eim.pdf

matplotlib is only imported when a plot is requested.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Sequence

from stackmc.montecarlo._common import ErrorStat
from stackmc.montecarlo.solution import TrialSolution

RESULTS_FILENAME = 'eim_json.txt'
PLOT_FILENAME = 'eim.pdf'
TRUTH_FIELDS = frozenset({'bias', 'mse', 'mse_se'})


def _json_float(value: float | None) -> float | None:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return float(value)


def result_dir(root: str | Path, case: str, dim: int, n_runs: int) -> Path:
    """Directory for one (case, dim, runs) result."""
    return Path(root) / case / f"dim_{dim}" / f"runs_{n_runs}"


def to_record(solution: TrialSolution, stats: Sequence[ErrorStat] | None = None) -> dict[str, Any]:
    """
    JSON-ready record of a run.

    Args:
        solution: Completed run.
        stats: Error statistics; defaults to solution.error_in_mean().
    """
    if stats is None:
        stats = solution.error_in_mean()
    return {
        'Case': solution.problem.name,
        'EIMS': [
            {k: _json_float(v) if isinstance(v, float) else v for k, v in s.to_dict().items()}
            for s in stats
        ],
        'SampSlice': list(solution.sample_counts),
        'NumDim': solution.problem.dim,
        'NumRuns': solution.n_runs,
        'NumFolds': solution.problem.n_folds,
        'Surrogates': [s.name for s in solution.problem.surrogates],
        'TrueValue': solution.true_value,
        'Seed': solution.seed_entropy,
        'Cancelled': solution.cancelled,
    }


def save_results(
    solution: TrialSolution,
    root: str | Path,
    stats: Sequence[ErrorStat] | None = None,
) -> Path:
    """
    Write the run record as indented JSON.

    Returns:
        Path of the written file.
    """
    record = to_record(solution, stats)
    out_dir = result_dir(root, solution.problem.name, solution.problem.dim, solution.n_runs)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / RESULTS_FILENAME
    path.write_text(json.dumps(record, indent='\t'))
    return path


def load_results(path: str | Path) -> tuple[dict[str, Any], tuple[ErrorStat, ...]]:
    """
    Read a record written by save_results().

    Returns:
        (record, stats) with stats rebuilt as ErrorStat objects.
    """
    record = json.loads(Path(path).read_text())
    # null is NaN (no completed trials) except for truth-dependent fields of
    # a run without a true value, where it means "not computed"
    nan_fields = {'mean', 'variance'}
    if record.get('TrueValue') is not None:
        nan_fields |= TRUTH_FIELDS
    stats = tuple(
        ErrorStat(**{k: (float('nan') if v is None and k in nan_fields else v)
                     for k, v in entry.items()})
        for entry in record['EIMS']
    )
    return record, stats


def plot_error_curve(
    stats: Sequence[ErrorStat],
    filename: str | Path,
    *,
    title: str | None = None,
) -> Path:
    """
    Log-log plot of mean squared error against sample count.

    Error bars are one standard error of the MSE estimate.

    Raises:
        ImportError: If matplotlib is not installed.
        ValueError: If stats carry no MSE (computed without ground truth).
    """
    if any(s.mse is None for s in stats):
        raise ValueError("stats have no mse; compute them with error_in_mean()")

    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    counts = [s.sample_count for s in stats]
    mse = [s.mse for s in stats]
    err = [s.mse_se for s in stats]

    fig, ax = plt.subplots(figsize=(6, 4.5))
    ax.errorbar(counts, mse, yerr=err, marker='o', capsize=3)
    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.set_xlabel('Number of samples')
    ax.set_ylabel('Mean squared error')
    if title:
        ax.set_title(title)
    ax.grid(True, which='both', alpha=0.3)
    fig.tight_layout()

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    return path
