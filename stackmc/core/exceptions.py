"""
Exception hierarchy for stackmc.

All exceptions inherit from StackMCError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class StackMCError(Exception):
    """Base exception for all stackmc errors."""
    pass


class ValidationError(StackMCError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class ConfigurationError(ValidationError):
    """
    Run configuration is invalid.

    Always raised before any trial runs: bad sweep range, bad fold count,
    missing dimensionality, unknown case.
    """
    pass


class InvalidRangeError(ConfigurationError):
    """
    Sample sweep range is invalid.

    Attributes:
        count: Requested number of sample counts
        min_samples: Lower end of the range
        max_samples: Upper end of the range
    """

    def __init__(
        self,
        message: str,
        count: int | None = None,
        min_samples: float | None = None,
        max_samples: float | None = None,
    ):
        super().__init__(message)
        self.count = count
        self.min_samples = min_samples
        self.max_samples = max_samples


class InvalidFoldCountError(ConfigurationError):
    """
    Fold count is incompatible with the number of samples.

    Attributes:
        n_folds: Requested number of folds
        n_samples: Number of samples to partition, if known
    """

    def __init__(
        self,
        message: str,
        n_folds: int | None = None,
        n_samples: int | None = None,
    ):
        super().__init__(message)
        self.n_folds = n_folds
        self.n_samples = n_samples


class UnknownCaseError(ConfigurationError):
    """
    Case name is not in the registry.

    Attributes:
        case: The requested case name
        available: Registered case names
    """

    def __init__(self, message: str, case: str, available: tuple[str, ...] = ()):
        super().__init__(message)
        self.case = case
        self.available = available


class NumericalError(StackMCError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of columns)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class FitFailure(NumericalError):
    """
    A surrogate could not be fit to its training data.

    Attributes:
        surrogate: Name of the surrogate strategy
        n_train: Number of training samples
        n_terms: Number of free parameters the surrogate needed, if known
    """

    def __init__(
        self,
        message: str,
        surrogate: str | None = None,
        n_train: int | None = None,
        n_terms: int | None = None,
    ):
        super().__init__(message)
        self.surrogate = surrogate
        self.n_train = n_train
        self.n_terms = n_terms


class EstimationFailure(NumericalError):
    """
    The K-fold estimator could not produce an estimate.

    Carries enough context to reproduce the failure. The estimator fills
    fold_index; the trial runner adds trial_index and sample_count.

    Attributes:
        fold_index: Fold whose surrogate fit failed
        trial_index: Trial within the sample count, if known
        sample_count: Number of samples in the trial, if known
    """

    def __init__(
        self,
        message: str,
        fold_index: int | None = None,
        trial_index: int | None = None,
        sample_count: int | None = None,
    ):
        super().__init__(message)
        self.fold_index = fold_index
        self.trial_index = trial_index
        self.sample_count = sample_count

    def __reduce__(self):
        # keep context when raised inside a worker process
        return (
            type(self),
            (str(self), self.fold_index, self.trial_index, self.sample_count),
        )


class AggregationError(StackMCError):
    """
    Requested error statistic cannot be computed.

    Raised at aggregation time (never at trial time) when the statistic
    needs a ground-truth expectation that was not supplied.

    Attributes:
        statistic: Name of the requested statistic
    """

    def __init__(self, message: str, statistic: str | None = None):
        super().__init__(message)
        self.statistic = statistic
