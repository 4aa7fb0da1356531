"""
Benchmark problems and the case registry.

Public API:
    Problem: frozen benchmark definition
    get_case(name, dim=None, n_runs=None) -> RunConfig
    list_cases() -> tuple of registered names
"""

from stackmc.problems.problem import Problem
from stackmc.problems.registry import (
    CASES,
    CaseSpec,
    DistributionSpec,
    RunConfig,
    SurrogateSpec,
    SweepSpec,
    get_case,
    list_cases,
)

__all__ = [
    "Problem",
    "CASES",
    "CaseSpec",
    "DistributionSpec",
    "RunConfig",
    "SurrogateSpec",
    "SweepSpec",
    "get_case",
    "list_cases",
]
