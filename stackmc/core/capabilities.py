"""
Capability string constants for stackmc.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from stackmc.core.capabilities import CAPABILITY_ANALYTIC_EXPECTATION

    if fitted.supports(CAPABILITY_ANALYTIC_EXPECTATION):
        ev = fitted.analytic_expectation(distribution)
"""

# Distribution can evaluate its probability density
CAPABILITY_DENSITY = 'density'

# Distribution has independent coordinates with closed-form raw moments
CAPABILITY_MOMENTS = 'moments'

# Fitted surrogate can integrate itself against a distribution in closed form
CAPABILITY_ANALYTIC_EXPECTATION = 'analytic_expectation'

__all__ = [
    'CAPABILITY_DENSITY',
    'CAPABILITY_MOMENTS',
    'CAPABILITY_ANALYTIC_EXPECTATION',
]
