"""
stackmc: accuracy experiments for stacked Monte Carlo.

Stacked Monte Carlo estimates E[f(x)] as the closed-form expectation of a
cheap surrogate plus a K-fold cross-validated Monte Carlo estimate of the
residual f - surrogate. This package runs that estimator over a sweep of
sample counts, many independent trials per count, and reports the error in
mean against a known true expectation.

Submodules:
    montecarlo: estimator, trial runner, aggregation
    problems: Problem definition and benchmark case registry
    surrogates: polynomial and identity surrogates
    distributions: uniform and independent Gaussian distributions
    functions: benchmark target functions
    persistence: JSON results and plots
"""

__version__ = "0.1.0"

from stackmc import montecarlo
from stackmc import problems

__all__ = [
    "__version__",
    "montecarlo",
    "problems",
]
