"""
Core infrastructure for stackmc.

This module provides shared abstractions and utilities used by the
estimator, the surrogates and the experiment runner.

Key components:
    protocols: Distribution, TargetFunction, Surrogate protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    timing: Section timer
    linalg: QR least squares
"""

from stackmc.core.protocols import (
    Distribution,
    TargetFunction,
    Surrogate,
    FittedSurrogate,
)
from stackmc.core.result import Result
from stackmc.core.exceptions import (
    StackMCError,
    ValidationError,
    DimensionError,
    ConfigurationError,
    InvalidRangeError,
    InvalidFoldCountError,
    UnknownCaseError,
    NumericalError,
    SingularMatrixError,
    FitFailure,
    EstimationFailure,
    AggregationError,
)

__all__ = [
    # Protocols
    "Distribution",
    "TargetFunction",
    "Surrogate",
    "FittedSurrogate",
    # Result
    "Result",
    # Exceptions
    "StackMCError",
    "ValidationError",
    "DimensionError",
    "ConfigurationError",
    "InvalidRangeError",
    "InvalidFoldCountError",
    "UnknownCaseError",
    "NumericalError",
    "SingularMatrixError",
    "FitFailure",
    "EstimationFailure",
    "AggregationError",
]
