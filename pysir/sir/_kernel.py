"""
Shared numeric utilities for importance weighting.

Binomial likelihood kernel in the direct and log domain, log-sum-exp
normalization, the probability-vector stabilization step (fix_prob)
and the Kish effective sample size.

The binomial coefficient is omitted everywhere: it is constant across
candidates and cancels under normalization.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysir.core.exceptions import DegenerateWeightError, NumericalError
from pysir.core.compute.tolerances import WEIGHT_SUM_ATOL

# Smallest positive normal float64. A kernel sum below this has lost
# relative precision to underflow and must be recomputed in log space.
_TINY = np.finfo(np.float64).tiny


def binomial_kernel(
    values: NDArray[np.floating[Any]],
    successes: int,
    failures: int,
) -> NDArray[np.floating[Any]]:
    """
    Direct likelihood kernel v**s * (1 - v)**f.

    numpy evaluates 0.0**0 as 1.0, which is the convention needed at the
    boundary of [0, 1]. Underflow to zero is silent here; callers check
    the sum and fall back to binomial_log_kernel().
    """
    with np.errstate(under='ignore'):
        return np.power(values, successes) * np.power(1.0 - values, failures)


def binomial_log_kernel(
    values: NDArray[np.floating[Any]],
    successes: int,
    failures: int,
) -> NDArray[np.floating[Any]]:
    """
    Log likelihood kernel s*log(v) + f*log(1 - v).

    A term with a zero count contributes 0 even at v = 0 or v = 1
    (0**0 = 1), otherwise log(0) = -inf. Never produces NaN for
    inputs in [0, 1].
    """
    log_w = np.zeros_like(values, dtype=np.float64)
    with np.errstate(divide='ignore'):
        if successes > 0:
            log_w += successes * np.log(values)
        if failures > 0:
            log_w += failures * np.log1p(-values)
    return log_w


def fix_prob(
    weights: NDArray[np.floating[Any]],
    *,
    successes: int | None = None,
    failures: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Turn non-negative weights into a valid probability vector.

    Negative entries within WEIGHT_SUM_ATOL of zero are rounding noise
    and are clipped to 0. Larger negatives, NaN and Inf are errors.

    Args:
        weights: Unnormalized weights, shape (n,)
        successes: Observed successes, recorded on DegenerateWeightError
        failures: Observed failures, recorded on DegenerateWeightError

    Returns:
        New float64 array, every entry >= 0, summing to 1.

    Raises:
        NumericalError: If weights contain NaN, Inf or clearly negative entries
        DegenerateWeightError: If every weight is zero
    """
    w = np.array(weights, dtype=np.float64)

    if not np.all(np.isfinite(w)):
        raise NumericalError(
            f"weights: {int(np.sum(~np.isfinite(w)))} non-finite entries"
        )

    if np.any(w < -WEIGHT_SUM_ATOL):
        raise NumericalError(
            f"weights: negative entry {float(np.min(w)):.3g} "
            f"beyond rounding tolerance {WEIGHT_SUM_ATOL:g}"
        )
    w[w < 0.0] = 0.0

    total = float(np.sum(w))
    if total <= 0.0:
        raise DegenerateWeightError(
            f"All {w.shape[0]} weights are zero: no candidate has positive likelihood",
            n_candidates=int(w.shape[0]),
            successes=successes,
            failures=failures,
        )

    return w / total


def normalize_log_weights(
    log_weights: NDArray[np.floating[Any]],
    *,
    successes: int | None = None,
    failures: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Normalize log weights with the log-sum-exp shift.

    Subtracting the maximum before exponentiating keeps the largest
    weight at exactly 1 so at least one entry survives, and preserves
    the relative ordering of the rest.

    Raises:
        DegenerateWeightError: If every log weight is -inf
    """
    log_weights = np.asarray(log_weights, dtype=np.float64)
    max_log = float(np.max(log_weights))
    if max_log == -np.inf:
        raise DegenerateWeightError(
            f"All {log_weights.shape[0]} weights are zero: "
            "every candidate has zero likelihood",
            n_candidates=int(log_weights.shape[0]),
            successes=successes,
            failures=failures,
        )

    with np.errstate(under='ignore'):
        shifted = np.exp(log_weights - max_log)
    return fix_prob(shifted, successes=successes, failures=failures)


def effective_sample_size(weights: NDArray[np.floating[Any]]) -> float:
    """
    Kish effective sample size 1 / sum(w**2) of normalized weights.

    Equals n for uniform weights and 1 when all mass sits on one candidate.
    """
    w = np.asarray(weights, dtype=np.float64)
    return float(1.0 / np.sum(w * w))


def needs_log_space(direct_weights: NDArray[np.floating[Any]]) -> bool:
    """True if the direct kernel underflowed for every candidate."""
    return not float(np.sum(direct_weights)) >= _TINY
