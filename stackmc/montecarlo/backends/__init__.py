"""Trial backends: serial CPU and joblib process pool."""

from stackmc.montecarlo.backends.cpu import CPUTrialBackend
from stackmc.montecarlo.backends.parallel import JoblibTrialBackend

__all__ = [
    "CPUTrialBackend",
    "JoblibTrialBackend",
]
