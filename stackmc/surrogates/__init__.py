"""
Surrogate fitting strategies.

A strategy is a small frozen object with fit(X, y) returning a fitted
surrogate that can predict and, where possible, integrate itself against
the problem's distribution.

Strategies:
    Polynomial(order, fit_dist=False): additive polynomial, least squares
    Identity(): predicts zero (plain Monte Carlo)
"""

from stackmc.surrogates.polynomial import Polynomial, FittedPolynomial, additive_basis
from stackmc.surrogates.identity import Identity, FittedIdentity

__all__ = [
    "Polynomial",
    "FittedPolynomial",
    "additive_basis",
    "Identity",
    "FittedIdentity",
]
