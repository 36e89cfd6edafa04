"""
PySIR sampling importance resampling.

Approximates the posterior of a Binomial proportion under an arbitrary
prior sample: weight the prior draws by the Binomial likelihood, then
resample them with replacement.

Usage:
    from pysir.sir import sample_prior, compute_weights, resample, sir

    prior = sample_prior('beta', 1, 1, 10_000, seed=1)

    # Two composable steps
    w = compute_weights(prior, successes=1, failures=7)
    post = resample(prior, w, size=10_000, seed=2)

    # Or both at once
    result = sir(prior, 1, 7, size=10_000, seed=2)
    print(result.summary())
"""

from pysir.sir.solvers import compute_weights, resample, sir
from pysir.sir._priors import sample_prior
from pysir.sir._groups import sir_by_group, prob_greater
from pysir.sir.design import WeightDesign, ResampleDesign
from pysir.sir._common import WeightParams, ResampleParams
from pysir.sir.solution import WeightSolution, ResampleSolution, PosteriorSolution

__all__ = [
    "compute_weights",
    "resample",
    "sir",
    "sample_prior",
    "sir_by_group",
    "prob_greater",
    "WeightDesign",
    "ResampleDesign",
    "WeightParams",
    "ResampleParams",
    "WeightSolution",
    "ResampleSolution",
    "PosteriorSolution",
]
