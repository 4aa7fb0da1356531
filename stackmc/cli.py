"""
Command-line runner for the registered benchmark cases.

Usage:
    stackmc-run --case rosenunif
    stackmc-run --case rosengauss --dim 5 --runs 500 --jobs -1 --seed 7
    stackmc-run --case friedmanartificial --output-dir results --no-plot
"""

from __future__ import annotations

import argparse
import logging
import sys

from stackmc.core.exceptions import ConfigurationError, EstimationFailure
from stackmc.montecarlo import run
from stackmc.persistence import PLOT_FILENAME, plot_error_curve, save_results
from stackmc.problems import get_case, list_cases

LOG = logging.getLogger("stackmc.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stackmc-run',
        description='Error-in-mean curve of the stacked Monte Carlo estimator.',
    )
    parser.add_argument('--case', required=True, help=f"which case to run: {', '.join(list_cases())}")
    parser.add_argument('--dim', type=int, default=None, help='number of dimensions in the problem')
    parser.add_argument('--runs', type=int, default=None, help='trials per sample count')
    parser.add_argument('--seed', type=int, default=None, help='root seed for reproducible runs')
    parser.add_argument('--jobs', type=int, default=None, help='parallel workers (-1 for all cores)')
    parser.add_argument('--backend', choices=('auto', 'cpu', 'joblib'), default='auto')
    parser.add_argument('--output-dir', default='results', help='root directory for results')
    parser.add_argument('--no-plot', action='store_true', help='skip writing eim.pdf')
    parser.add_argument('--log-level', default='INFO', help='logging level (DEBUG, INFO, ...)')
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        config = get_case(args.case, dim=args.dim, n_runs=args.runs)
    except ConfigurationError as e:
        LOG.error("%s", e)
        return 2

    LOG.info("case is: %s", args.case)
    LOG.info("sample counts are %s", list(config.sample_counts))
    LOG.info("number of runs is %d", config.n_runs)

    try:
        solution = run(
            config.problem,
            config.sample_counts,
            config.n_runs,
            seed=args.seed,
            backend=args.backend,
            n_jobs=args.jobs,
        )
    except ConfigurationError as e:
        LOG.error("%s", e)
        return 2
    except EstimationFailure as e:
        LOG.error(
            "estimation failed (sample count %s, trial %s, fold %s): %s",
            e.sample_count, e.trial_index, e.fold_index, e,
        )
        return 1

    stats = solution.error_in_mean()
    path = save_results(solution, args.output_dir, stats)
    LOG.info("results written to %s (seed %d)", path, solution.seed_entropy)

    print(solution.summary())

    if not args.no_plot:
        plot_path = path.parent / PLOT_FILENAME
        try:
            plot_error_curve(
                stats, plot_path,
                title=f"{config.problem.name}, dim {config.problem.dim}",
            )
        except ImportError:
            LOG.warning("matplotlib is not installed; skipping plot")
        else:
            print(f"Plot filename is: {plot_path}")

    LOG.info("Completed")
    return 0


if __name__ == '__main__':
    sys.exit(main())
