"""
Generic result container for all stackmc computations.

The Result class provides a standardized envelope that backends use.
This enables shared tooling for timing, reproducibility and persistence
while allowing each stage to define its own parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (seed entropy, cancellation, counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The stage-specific parameter payload type

    Attributes:
        params: Stage-specific payload (raw trial estimates, etc.)
        info: Structured metadata (seed entropy, n_jobs, cancellation)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=TrialParams(estimates=est, sample_counts=(35, 40), n_runs=10),
        ...     info={'seed_entropy': 42, 'cancelled': False},
        ...     timing={'total_seconds': 0.5, 'trials': 0.49},
        ...     backend_name='cpu_serial'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
