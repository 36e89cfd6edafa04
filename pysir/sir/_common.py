"""
Common data structures for SIR.

WeightParams and ResampleParams are the parameter payloads wrapped by
Result[P] and exposed through the Solution classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray


WeightMethod = Literal['direct', 'log']


@dataclass(frozen=True)
class WeightParams:
    """
    Parameter payload for importance weights.

    - weights: normalized importance weights, sum to 1
    - log_weights: unnormalized log likelihood kernel (-inf where zero)
    - ess: Kish effective sample size of the weights
    - method: 'direct' if the power kernel was used, 'log' if it underflowed
    """
    weights: NDArray[np.floating[Any]]        # shape (n,)
    log_weights: NDArray[np.floating[Any]]    # shape (n,)
    ess: float
    method: WeightMethod


@dataclass(frozen=True)
class ResampleParams:
    """
    Parameter payload for a weighted resample with replacement.

    - indices: candidate index of each draw, in draw order
    - draws: values[indices]
    - counts: how often each candidate was drawn
    """
    indices: NDArray[np.intp]                 # shape (size,)
    draws: NDArray                            # shape (size,)
    counts: NDArray[np.int64]                 # shape (n,)
