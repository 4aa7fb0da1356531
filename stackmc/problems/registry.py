"""
Benchmark case registry.

Each case is pure data: which distribution, function and surrogates to use,
how to sweep sample counts, how many trials and what the true expectation
is. get_case() turns a CaseSpec into a ready-to-run RunConfig. Adding a
benchmark means adding an entry to CASES, not editing code.

Usage:
    from stackmc.problems import get_case

    config = get_case('rosenunif', dim=5)
    config.problem.true_value       # 1924 * 4
    config.sample_counts            # (18, 20, 23, ...)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stackmc.core.exceptions import ConfigurationError, UnknownCaseError
from stackmc.core.validation import check_positive_int
from stackmc.distributions import IndependentGaussian, Uniform
from stackmc.functions import analytic_expectation, get_function
from stackmc.montecarlo._sweep import sample_range
from stackmc.problems.problem import Problem
from stackmc.surrogates import Identity, Polynomial

DEFAULT_NUM_RUNS = 2000

DISTRIBUTIONS = {
    'uniform': Uniform.create,
    'gaussian': IndependentGaussian.create,
}

SURROGATES = {
    'polynomial': Polynomial,
    'identity': Identity,
}


@dataclass(frozen=True)
class DistributionSpec:
    """Distribution family and per-coordinate parameters, e.g. ('uniform', (-3, 3))."""
    family: str
    params: tuple[float, float]


@dataclass(frozen=True)
class SurrogateSpec:
    """Surrogate strategy name and keyword options."""
    kind: str
    options: tuple[tuple[str, Any], ...] = ()


@dataclass(frozen=True)
class SweepSpec:
    """
    Sample-count sweep.

    When per_dim is True, min_samples and max_samples are multiplied by the
    problem dimension (3.5 * dim .. 7 * dim).
    """
    count: int
    min_samples: float
    max_samples: float
    per_dim: bool = False
    spacing: str = 'linear'


@dataclass(frozen=True)
class CaseSpec:
    """
    Pure-data description of one benchmark case.

    Attributes:
        distribution: Sampling distribution spec.
        function: Name in stackmc.functions.FUNCTIONS.
        surrogates: Ordered surrogate strategies.
        sweep: Sample-count sweep.
        default_dim: Dimension when the caller gives none.
        fixed_dim: If True, the caller may not change the dimension.
        n_folds: Fold count K.
        n_runs: Default trials per sample count.
        true_value: 'analytic' (closed form of the function under the
            distribution) or a reference float.
        description: One-line summary for listings.
    """
    distribution: DistributionSpec
    function: str
    surrogates: tuple[SurrogateSpec, ...]
    sweep: SweepSpec
    default_dim: int = 10
    fixed_dim: bool = False
    n_folds: int = 10
    n_runs: int = DEFAULT_NUM_RUNS
    true_value: str | float = 'analytic'
    description: str = ''


@dataclass(frozen=True)
class RunConfig:
    """A resolved case: problem plus sweep and trial budget."""
    problem: Problem
    sample_counts: tuple[int, ...]
    n_runs: int
    metadata: dict[str, Any] = field(default_factory=dict)


_POLY3 = (SurrogateSpec('polynomial', (('order', 3),)),)
_POLY3_FITDIST = (SurrogateSpec('polynomial', (('order', 3), ('fit_dist', True))),)

CASES: dict[str, CaseSpec] = {
    'rosenunif': CaseSpec(
        distribution=DistributionSpec('uniform', (-3.0, 3.0)),
        function='rosenbrock',
        surrogates=_POLY3,
        sweep=SweepSpec(8, 3.5, 7.0, per_dim=True),
        description='Rosenbrock, Uniform[-3,3]^d, cubic surrogate integrated analytically',
    ),
    'rosenfit': CaseSpec(
        distribution=DistributionSpec('uniform', (-3.0, 3.0)),
        function='rosenbrock',
        surrogates=_POLY3_FITDIST,
        sweep=SweepSpec(8, 3.5, 7.0, per_dim=True),
        description='Rosenbrock, Uniform[-3,3]^d, cubic surrogate integrated over the samples',
    ),
    'rosengauss': CaseSpec(
        distribution=DistributionSpec('gaussian', (0.0, 2.0)),
        function='rosenbrock',
        surrogates=_POLY3,
        sweep=SweepSpec(8, 3.5, 70.0, per_dim=True),
        description='Rosenbrock, N(0, 2^2)^d, cubic surrogate integrated analytically',
    ),
    'rosenmc': CaseSpec(
        distribution=DistributionSpec('uniform', (-3.0, 3.0)),
        function='rosenbrock',
        surrogates=(SurrogateSpec('identity'),),
        sweep=SweepSpec(8, 3.5, 7.0, per_dim=True),
        description='Rosenbrock, Uniform[-3,3]^d, plain Monte Carlo baseline',
    ),
    'friedmanartificial': CaseSpec(
        distribution=DistributionSpec('uniform', (0.0, 1.0)),
        function='friedman_artificial',
        surrogates=_POLY3,
        sweep=SweepSpec(8, 35, 1000),
        default_dim=10,
        fixed_dim=True,
        # 10^9-sample reference value
        true_value=14.913264896322753,
        description='Noisy Friedman function, Uniform[0,1]^10, cubic surrogate',
    ),
}


def list_cases() -> tuple[str, ...]:
    return tuple(sorted(CASES))


def build_problem(name: str, spec: CaseSpec, dim: int) -> Problem:
    """Build the Problem for a case spec at a given dimension."""
    try:
        make_distribution = DISTRIBUTIONS[spec.distribution.family]
    except KeyError:
        raise ConfigurationError(
            f"case {name!r}: unknown distribution family {spec.distribution.family!r}"
        ) from None
    distribution = make_distribution(*spec.distribution.params, dim=dim)

    surrogates = []
    for s in spec.surrogates:
        try:
            surrogates.append(SURROGATES[s.kind](**dict(s.options)))
        except KeyError:
            raise ConfigurationError(
                f"case {name!r}: unknown surrogate {s.kind!r}"
            ) from None

    if spec.true_value == 'analytic':
        true_value = analytic_expectation(spec.function, distribution)
    else:
        true_value = float(spec.true_value)

    return Problem.build(
        name,
        distribution,
        get_function(spec.function),
        surrogates,
        n_folds=spec.n_folds,
        dim=dim,
        true_value=true_value,
    )


def get_case(name: str, dim: int | None = None, n_runs: int | None = None) -> RunConfig:
    """
    Resolve a registered case into a RunConfig.

    Args:
        name: Case name (see list_cases()).
        dim: Problem dimension; defaults to the case's.
        n_runs: Trials per sample count; defaults to the case's.

    Raises:
        UnknownCaseError: If the case is not registered.
        ConfigurationError: If dim is given for a fixed-dimension case, or
            dim/n_runs are invalid.
    """
    try:
        spec = CASES[name]
    except KeyError:
        raise UnknownCaseError(
            f"Unknown case {name!r}; available: {', '.join(list_cases())}",
            case=name,
            available=list_cases(),
        ) from None

    if dim is None:
        dim = spec.default_dim
    elif spec.fixed_dim and dim != spec.default_dim:
        raise ConfigurationError(
            f"case {name!r} has a fixed number of dimensions ({spec.default_dim})"
        )
    dim = check_positive_int(dim, 'dim', minimum=2 if spec.function == 'rosenbrock' else 1)

    scale = dim if spec.sweep.per_dim else 1
    sample_counts = sample_range(
        spec.sweep.count,
        spec.sweep.min_samples * scale,
        spec.sweep.max_samples * scale,
        spec.sweep.spacing,
    )

    runs = spec.n_runs if n_runs is None else check_positive_int(n_runs, 'n_runs')

    problem = build_problem(name, spec, dim)
    return RunConfig(
        problem=problem,
        sample_counts=sample_counts,
        n_runs=runs,
        metadata={'case': name, 'description': spec.description},
    )
