"""
Random K-fold partition of sample indices.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from stackmc.core.exceptions import InvalidFoldCountError


def partition(n: int, k: int, rng: np.random.Generator) -> list[NDArray[np.intp]]:
    """
    Split range(n) into k disjoint folds after a random permutation.

    The first n mod k folds have ceil(n/k) indices, the rest floor(n/k).

    Raises:
        InvalidFoldCountError: If k < 2 or k > n.
    """
    if k < 2:
        raise InvalidFoldCountError(
            f"need at least 2 folds, got {k}", n_folds=k, n_samples=n,
        )
    if k > n:
        raise InvalidFoldCountError(
            f"cannot split {n} samples into {k} folds", n_folds=k, n_samples=n,
        )
    return np.array_split(rng.permutation(n), k)
