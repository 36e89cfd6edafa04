"""
Prior sample generation from named parametric families.

A thin layer over scipy.stats random variates, drawing from an injected
Generator. The SIR core never calls this; it only consumes the arrays
it produces.
"""

from __future__ import annotations

import numbers
from typing import Literal

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pysir.core.exceptions import ValidationError
from pysir.core.validation import check_size
from pysir.sir.design import SeedLike, as_generator


PriorFamily = Literal['beta', 'gamma', 'uniform']


def _check_param(value, name: str) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name}: expected a real number, got {value!r}")
    value = float(value)
    if not np.isfinite(value):
        raise ValidationError(f"{name}: must be finite, got {value}")
    return value


def _frozen(family: str, a: float, b: float):
    """scipy frozen distribution for (family, a, b)."""
    if family == 'beta':
        if a <= 0 or b <= 0:
            raise ValidationError(f"beta prior requires a > 0 and b > 0, got a={a}, b={b}")
        return stats.beta(a, b)
    if family == 'gamma':
        # (shape, rate) parameterization
        if a <= 0 or b <= 0:
            raise ValidationError(f"gamma prior requires shape a > 0 and rate b > 0, got a={a}, b={b}")
        return stats.gamma(a, scale=1.0 / b)
    if family == 'uniform':
        if not a < b:
            raise ValidationError(f"uniform prior requires a < b, got a={a}, b={b}")
        return stats.uniform(loc=a, scale=b - a)
    raise ValidationError(
        f"family must be 'beta', 'gamma', or 'uniform', got {family!r}"
    )


def sample_prior(
    family: PriorFamily,
    a: float,
    b: float,
    size: int,
    *,
    seed: SeedLike = None,
) -> NDArray[np.floating]:
    """
    Draw a prior sample from a named two-parameter family.

    Parameters
    ----------
    family : str
        'beta' for Beta(a, b), 'gamma' for Gamma(shape=a, rate=b),
        'uniform' for Uniform(a, b).
    a, b : float
        Shape parameters.
    size : int
        Number of draws, >= 0.
    seed : int, SeedSequence, Generator or None
        Entropy source.

    Returns
    -------
    1D float64 array of length size.

    Notes
    -----
    Draws are not truncated to [0, 1]. Gamma or wide uniform priors can
    produce values that compute_weights() rejects with InvalidDomainError.
    """
    a = _check_param(a, "a")
    b = _check_param(b, "b")
    n = check_size(size, "size")
    dist = _frozen(family, a, b)
    rng = as_generator(seed)
    return np.asarray(dist.rvs(size=n, random_state=rng), dtype=np.float64).reshape(n)
