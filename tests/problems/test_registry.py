"""
Tests for Problem and the benchmark case registry.
"""

import pytest

from stackmc.core.exceptions import ConfigurationError, UnknownCaseError
from stackmc.distributions import IndependentGaussian, Uniform
from stackmc.functions import friedman_artificial, rosenbrock
from stackmc.problems import (
    CASES,
    CaseSpec,
    DistributionSpec,
    Problem,
    SurrogateSpec,
    SweepSpec,
    get_case,
    list_cases,
)
from stackmc.problems import registry
from stackmc.surrogates import Identity, Polynomial


# ---------------------------------------------------------------------------
# Tests: Problem.build
# ---------------------------------------------------------------------------

class TestProblem:

    def test_single_surrogate_wrapped(self, square):
        problem = Problem.build('p', square, rosenbrock, Polynomial(2))
        assert problem.surrogates == (Polynomial(2),)
        assert problem.dim == 2
        assert problem.n_folds == 10

    def test_metadata(self, square):
        problem = Problem.build('p', square, rosenbrock, [Identity(), Polynomial(2)],
                                n_folds=4, true_value=3)
        assert problem.metadata == {
            'name': 'p',
            'dim': 2,
            'n_folds': 4,
            'surrogates': ['identity', 'polynomial2'],
            'true_value': 3.0,
        }

    def test_dimension_mismatch(self, square):
        with pytest.raises(ConfigurationError, match="dimensions"):
            Problem.build('p', square, rosenbrock, Polynomial(), dim=3)

    def test_needs_two_folds(self, square):
        with pytest.raises(ConfigurationError):
            Problem.build('p', square, rosenbrock, Polynomial(), n_folds=1)

    def test_needs_a_surrogate(self, square):
        with pytest.raises(ConfigurationError, match="surrogate"):
            Problem.build('p', square, rosenbrock, [])

    def test_function_must_be_callable(self, square):
        with pytest.raises(ConfigurationError, match="callable"):
            Problem.build('p', square, 'rosenbrock', Polynomial())


# ---------------------------------------------------------------------------
# Tests: registered cases
# ---------------------------------------------------------------------------

class TestCases:

    def test_registered_names(self):
        assert list_cases() == (
            'friedmanartificial', 'rosenfit', 'rosengauss', 'rosenmc', 'rosenunif',
        )

    @pytest.mark.parametrize("case", ['rosenunif', 'rosenfit', 'rosenmc'])
    def test_uniform_rosenbrock_cases(self, case):
        config = get_case(case)
        assert isinstance(config.problem.distribution, Uniform)
        assert config.problem.function is rosenbrock
        assert config.problem.true_value == pytest.approx(1924.0 * 9)
        assert config.sample_counts == (35, 40, 45, 50, 55, 60, 65, 70)
        assert config.n_runs == 2000
        assert config.problem.n_folds == 10

    def test_surrogate_choices(self):
        assert get_case('rosenunif').problem.surrogates == (Polynomial(3),)
        assert get_case('rosenfit').problem.surrogates == (Polynomial(3, fit_dist=True),)
        assert get_case('rosenmc').problem.surrogates == (Identity(),)

    def test_rosengauss(self):
        config = get_case('rosengauss')
        assert isinstance(config.problem.distribution, IndependentGaussian)
        assert config.problem.true_value == pytest.approx(5205.0 * 9)
        assert config.sample_counts[0] == 35
        assert config.sample_counts[-1] == 700
        assert len(config.sample_counts) == 8

    def test_friedman(self):
        config = get_case('friedmanartificial')
        assert config.problem.function is friedman_artificial
        assert config.problem.dim == 10
        assert config.problem.true_value == pytest.approx(14.913264896322753)
        assert config.sample_counts[0] == 35
        assert config.sample_counts[-1] == 1000
        assert config.n_runs == 2000

    def test_sweep_scales_with_dim(self):
        config = get_case('rosenunif', dim=4)
        assert config.sample_counts == (14, 16, 18, 20, 22, 24, 26, 28)
        assert config.problem.true_value == pytest.approx(1924.0 * 3)

    def test_runs_override(self):
        assert get_case('rosenunif', n_runs=7).n_runs == 7

    def test_metadata(self):
        config = get_case('rosenmc')
        assert config.metadata['case'] == 'rosenmc'
        assert config.metadata['description']


# ---------------------------------------------------------------------------
# Tests: errors
# ---------------------------------------------------------------------------

class TestCaseErrors:

    def test_unknown_case(self):
        with pytest.raises(UnknownCaseError) as exc_info:
            get_case('rosenfoo')
        assert exc_info.value.case == 'rosenfoo'
        assert 'rosenunif' in exc_info.value.available

    def test_fixed_dim(self):
        with pytest.raises(ConfigurationError, match="fixed"):
            get_case('friedmanartificial', dim=5)
        assert get_case('friedmanartificial', dim=10).problem.dim == 10

    def test_rosenbrock_needs_two_dims(self):
        with pytest.raises(ConfigurationError):
            get_case('rosenunif', dim=1)

    @pytest.mark.parametrize("n_runs", [0, -5])
    def test_bad_runs(self, n_runs):
        with pytest.raises(ConfigurationError):
            get_case('rosenunif', n_runs=n_runs)


# ---------------------------------------------------------------------------
# Tests: adding a case is data only
# ---------------------------------------------------------------------------

class TestNewCase:

    def test_registered_spec_resolves(self, monkeypatch):
        spec = CaseSpec(
            distribution=DistributionSpec('gaussian', (1.0, 0.5)),
            function='rosenbrock',
            surrogates=(SurrogateSpec('identity'),
                        SurrogateSpec('polynomial', (('order', 2),))),
            sweep=SweepSpec(3, 10, 1000, spacing='log'),
            default_dim=3,
            n_folds=5,
            n_runs=11,
        )
        monkeypatch.setitem(CASES, 'rosenwide', spec)

        assert 'rosenwide' in list_cases()
        config = get_case('rosenwide')
        assert config.sample_counts == (10, 100, 1000)
        assert config.n_runs == 11
        assert config.problem.n_folds == 5
        assert config.problem.dim == 3
        assert [s.name for s in config.problem.surrogates] == ['identity', 'polynomial2']

    def test_unknown_family(self, monkeypatch):
        spec = CaseSpec(
            distribution=DistributionSpec('cauchy', (0.0, 1.0)),
            function='rosenbrock',
            surrogates=(SurrogateSpec('identity'),),
            sweep=SweepSpec(2, 10, 20),
        )
        monkeypatch.setitem(registry.CASES, 'broken', spec)
        with pytest.raises(ConfigurationError, match="cauchy"):
            get_case('broken')

    def test_no_closed_form_needs_reference_value(self, monkeypatch):
        spec = CaseSpec(
            distribution=DistributionSpec('uniform', (0.0, 1.0)),
            function='friedman_artificial',
            surrogates=(SurrogateSpec('identity'),),
            sweep=SweepSpec(2, 10, 20),
        )
        monkeypatch.setitem(CASES, 'friedman_analytic', spec)
        with pytest.raises(ConfigurationError, match="closed-form"):
            get_case('friedman_analytic')
