"""
PySIR: Sampling importance resampling for Binomial posteriors.

Weights a sample of prior draws by the Binomial likelihood of observed
success/failure counts and resamples them with replacement to
approximate the posterior, with log-space numerics and an explicit,
injectable random source.

Submodules:
    sir: Importance weights, resampling, grouped SIR, prior sampling
    core: Exceptions, validation, result envelope, compute utilities
"""

__version__ = "0.1.0"

from pysir import core
from pysir import sir

__all__ = [
    "__version__",
    "core",
    "sir",
]
