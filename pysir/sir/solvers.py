"""
Solver dispatch for SIR.

Provides compute_weights() and resample(), the two composable steps of
sampling importance resampling, and sir() which runs both.
"""

from __future__ import annotations

import warnings
from typing import Literal

from numpy.typing import ArrayLike

from pysir.core.compute.device import select_device
from pysir.core.exceptions import ValidationError
from pysir.core.protocols import Backend
from pysir.sir.design import WeightDesign, ResampleDesign, SeedLike
from pysir.sir.solution import WeightSolution, ResampleSolution, PosteriorSolution
from pysir.sir.backends.cpu import CPUWeightBackend, CPUResampleBackend


BackendChoice = Literal['auto', 'cpu', 'gpu']


def _get_backend(
    backend: BackendChoice,
    kind: Literal['weights', 'resample'],
    use_fp64: bool = True,
) -> Backend:
    """
    Select backend based on preference.

    'auto' is the CPU reference. The GPU backends are opt-in: they draw
    from a different random stream, and in FP32 they lose candidates
    within ~6e-8 of 0 or 1.
    """
    if backend in ('cpu', 'auto'):
        return CPUWeightBackend() if kind == 'weights' else CPUResampleBackend()
    if backend != 'gpu':
        raise ValidationError(
            f"Unknown backend: {backend!r}. Use 'auto', 'cpu' or 'gpu'."
        )

    device = select_device('gpu')
    from pysir.sir.backends.gpu import GPUWeightBackend, GPUResampleBackend
    if kind == 'weights':
        return GPUWeightBackend(device=device, use_fp64=use_fp64)
    return GPUResampleBackend(device=device, use_fp64=use_fp64)


def _emit(messages: tuple[str, ...]) -> None:
    for msg in messages:
        warnings.warn(msg, RuntimeWarning, stacklevel=3)


def compute_weights(
    values: ArrayLike,
    successes: int,
    failures: int,
    *,
    backend: BackendChoice = 'auto',
    use_fp64: bool = True,
) -> WeightSolution:
    """
    Binomial importance weights for a sample of candidate proportions.

    Each candidate v gets weight proportional to v**successes *
    (1 - v)**failures, normalized to sum to 1. If the direct kernel
    underflows for every candidate, the weights are recomputed in log
    space with the log-sum-exp shift.

    Parameters
    ----------
    values : array-like
        1D prior draws, every value in [0, 1].
    successes, failures : int
        Observed counts, non-negative. Both zero gives uniform weights.
    backend : str
        'auto' and 'cpu' run the CPU reference; 'gpu' requires CUDA or MPS.
    use_fp64 : bool
        GPU precision. FP64 matches the CPU weights; MPS needs use_fp64=False.

    Returns
    -------
    WeightSolution

    Raises
    ------
    EmptyInputError, InvalidDomainError, InvalidCountError
        Invalid inputs.
    DegenerateWeightError
        No candidate has positive likelihood.
    """
    design = WeightDesign.for_weights(values, successes, failures)
    result = _get_backend(backend, 'weights', use_fp64).solve(design)
    _emit(result.warnings)
    return WeightSolution(_result=result, _design=design)


def resample(
    values: ArrayLike,
    weights: ArrayLike | WeightSolution,
    size: int,
    *,
    seed: SeedLike = None,
    backend: BackendChoice = 'auto',
    use_fp64: bool = True,
) -> ResampleSolution:
    """
    Draw size values from values with replacement, according to weights.

    Draws are i.i.d.; the output keeps draw order. Values may be of any
    dtype; they are not interpreted.

    Parameters
    ----------
    values : array-like
        1D candidates.
    weights : array-like or WeightSolution
        Non-negative weights of the same length; normalized internally.
    size : int
        Number of draws, >= 0. May exceed len(values).
    seed : int, SeedSequence, Generator or None
        Entropy source. A Generator is used (and advanced) in place.
    backend : str
        'auto' and 'cpu' run the CPU reference; 'gpu' requires CUDA or MPS.
    use_fp64 : bool
        GPU precision. FP64 matches the CPU weights; MPS needs use_fp64=False.

    Returns
    -------
    ResampleSolution

    Raises
    ------
    LengthMismatchError
        values and weights differ in length. Raised before any random
        number is drawn.
    DegenerateWeightError
        Every weight is zero.
    """
    if isinstance(weights, WeightSolution):
        weights = weights.weights
    design = ResampleDesign.for_resample(values, weights, size, seed=seed)
    result = _get_backend(backend, 'resample', use_fp64).solve(design)
    return ResampleSolution(_result=result, _design=design)


def sir(
    values: ArrayLike,
    successes: int,
    failures: int,
    size: int,
    *,
    seed: SeedLike = None,
    backend: BackendChoice = 'auto',
    use_fp64: bool = True,
) -> PosteriorSolution:
    """
    Sampling importance resampling for a Binomial proportion.

    Weights the prior draws by the Binomial likelihood of the observed
    counts, then resamples size draws with replacement. The result
    approximates a sample from the posterior.

    Parameters
    ----------
    values : array-like
        1D prior draws in [0, 1].
    successes, failures : int
        Observed counts.
    size : int
        Number of posterior draws.
    seed : int, SeedSequence, Generator or None
        Entropy source for the resampling step.
    backend : str
        'auto' and 'cpu' run the CPU reference; 'gpu' requires CUDA or MPS.
    use_fp64 : bool
        GPU precision. FP64 matches the CPU weights; MPS needs use_fp64=False.

    Returns
    -------
    PosteriorSolution
    """
    weighting = compute_weights(
        values, successes, failures, backend=backend, use_fp64=use_fp64
    )
    resampling = resample(
        weighting.values, weighting.weights, size,
        seed=seed, backend=backend, use_fp64=use_fp64,
    )
    return PosteriorSolution(weighting=weighting, resampling=resampling)
