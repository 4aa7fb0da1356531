"""
End-to-end runs of registered cases at a reduced trial budget.

Every registered case goes through run(): uniform and Gaussian moments,
the sample-average fallback of rosenfit and the noisy Friedman target.
"""

import numpy as np
import pytest

from stackmc.montecarlo import run
from stackmc.problems import get_case


def _curve(case, seed, dim=None, n_runs=100, counts=None):
    config = get_case(case, dim=dim, n_runs=n_runs)
    sample_counts = config.sample_counts if counts is None else counts(config.sample_counts)
    sol = run(config.problem, sample_counts, config.n_runs, seed=seed)
    return sol, sol.error_in_mean()


# ---------------------------------------------------------------------------
# Tests: every case produces a decreasing error curve
# ---------------------------------------------------------------------------

class TestRegisteredCases:

    @pytest.mark.parametrize("case", ['rosenunif', 'rosenfit', 'rosenmc'])
    def test_uniform_rosenbrock(self, case):
        sol, stats = _curve(case, seed=2024)
        assert [s.sample_count for s in stats] == [35, 40, 45, 50, 55, 60, 65, 70]
        assert all(s.n_trials == 100 for s in stats)
        assert np.all(np.isfinite(sol.estimates))
        assert stats[-1].mse < stats[0].mse

    def test_rosengauss(self):
        sol, stats = _curve('rosengauss', seed=31, dim=5, n_runs=60)
        assert stats[0].sample_count == 18
        assert stats[-1].sample_count == 350
        assert np.all(np.isfinite(sol.estimates))
        assert sol.true_value == pytest.approx(5205.0 * 4)
        assert stats[-1].mse < stats[0].mse

    def test_friedman(self):
        sol, stats = _curve('friedmanartificial', seed=5, n_runs=40)
        assert stats[0].sample_count == 35
        assert stats[-1].sample_count == 1000
        assert np.all(np.isfinite(sol.estimates))
        assert stats[-1].mse < stats[0].mse
        assert abs(stats[-1].bias) < 0.05

    def test_stacked_mean_near_truth(self):
        sol, (s,) = _curve('rosenunif', seed=8, dim=7, n_runs=60, counts=lambda c: c[-1:])
        assert abs(s.bias) < 4.0 * np.sqrt(s.variance / s.n_trials) + 1e-9


# ---------------------------------------------------------------------------
# Tests: the curve is reproducible across trial seeds
# ---------------------------------------------------------------------------

class TestSeedStability:

    @pytest.mark.parametrize("case, dim, counts", [
        ('rosenmc', 10, None),
        ('friedmanartificial', None, lambda c: c[1:]),
    ])
    def test_curves_agree_within_standard_errors(self, case, dim, counts):
        _, a = _curve(case, seed=11, dim=dim, n_runs=200, counts=counts)
        _, b = _curve(case, seed=12, dim=dim, n_runs=200, counts=counts)
        for sa, sb in zip(a, b):
            assert sa.sample_count == sb.sample_count
            assert sa.mse != sb.mse
            tolerance = 4.0 * np.hypot(sa.mse_se, sb.mse_se)
            assert abs(sa.mse - sb.mse) <= tolerance
