"""
Sample-count sweep.

The error curve is indexed by this sequence, so the spacing rule is fixed:
linspace (or geomspace) over [min, max], rounded half-up. Duplicates that
appear after rounding are kept to preserve one curve point per sweep index.
"""

from __future__ import annotations

import math
import warnings

import numpy as np

from stackmc.core.exceptions import InvalidRangeError

SPACINGS = ('linear', 'log')


def sample_range(
    count: int,
    min_samples: float,
    max_samples: float,
    spacing: str = 'linear',
) -> tuple[int, ...]:
    """
    Ordered integer sample counts spanning [min_samples, max_samples].

    Args:
        count: Number of sample counts. Must be >= 1.
        min_samples: Smallest count (may be fractional, e.g. 3.5 * dim).
        max_samples: Largest count.
        spacing: 'linear' or 'log' (geometric).

    Returns:
        Tuple of count non-decreasing ints. count == 1 gives (min,).

    Raises:
        InvalidRangeError: If count < 1, min > max or min < 1.
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 1:
        raise InvalidRangeError(
            f"count must be an integer >= 1, got {count!r}",
            count=count, min_samples=min_samples, max_samples=max_samples,
        )
    if not (math.isfinite(min_samples) and math.isfinite(max_samples)):
        raise InvalidRangeError(
            f"range must be finite, got [{min_samples}, {max_samples}]",
            count=count, min_samples=min_samples, max_samples=max_samples,
        )
    if min_samples > max_samples:
        raise InvalidRangeError(
            f"min_samples ({min_samples}) must not exceed max_samples ({max_samples})",
            count=count, min_samples=min_samples, max_samples=max_samples,
        )
    if min_samples < 1:
        raise InvalidRangeError(
            f"min_samples must be >= 1, got {min_samples}",
            count=count, min_samples=min_samples, max_samples=max_samples,
        )
    if spacing not in SPACINGS:
        raise InvalidRangeError(
            f"spacing must be one of {SPACINGS}, got {spacing!r}",
            count=count, min_samples=min_samples, max_samples=max_samples,
        )

    if spacing == 'linear':
        points = np.linspace(min_samples, max_samples, count)
    else:
        points = np.geomspace(min_samples, max_samples, count)

    counts = tuple(int(v) for v in np.floor(points + 0.5))

    if len(set(counts)) != len(counts):
        warnings.warn(
            f"sample_range({count}, {min_samples}, {max_samples}) has duplicate "
            f"counts after rounding: {list(counts)}",
            stacklevel=2,
        )

    return counts
