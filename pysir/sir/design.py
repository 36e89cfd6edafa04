"""
Design classes for SIR.

WeightDesign and ResampleDesign encapsulate all inputs needed by
backends. Immutable, validated at construction. Validation happens
before any random number is generated, so a rejected design never
advances the caller's Generator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysir.core.compute.tolerances import WEIGHT_SUM_ATOL
from pysir.core.exceptions import DimensionError, ValidationError
from pysir.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_count,
    check_finite,
    check_nonempty,
    check_nonnegative,
    check_size,
    check_unit_interval,
)
from pysir.sir._kernel import fix_prob


SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def as_generator(seed: SeedLike) -> np.random.Generator:
    """
    Resolve a seed argument to a numpy Generator.

    An existing Generator is returned unchanged (and will be advanced by
    sampling). Anything else goes through np.random.default_rng. The
    legacy global numpy state is never used.

    Raises:
        ValidationError: If seed is not a valid seed
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if isinstance(seed, (bool, np.bool_)):
        raise ValidationError(f"seed: expected int, SeedSequence or Generator, got {seed!r}")
    try:
        return np.random.default_rng(seed)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"seed: invalid seed {seed!r}: {e}") from e


@dataclass(frozen=True)
class WeightDesign:
    """
    Frozen design for Binomial importance weighting.

    Attributes:
        values: Candidate proportions (prior draws), shape (n,), all in [0, 1].
        successes: Observed successes.
        failures: Observed failures.
    """
    values: NDArray[np.floating[Any]]
    successes: int
    failures: int

    @property
    def n_candidates(self) -> int:
        return int(self.values.shape[0])

    @classmethod
    def for_weights(
        cls,
        values: ArrayLike,
        successes: int,
        failures: int,
    ) -> WeightDesign:
        """
        Create a weighting design with validation.

        Raises:
            ValidationError: If values are non-numeric or non-finite
            DimensionError: If values are not 1D
            EmptyInputError: If values are empty
            InvalidDomainError: If any value lies outside [0, 1]
            InvalidCountError: If a count is negative or not an integer
        """
        arr = check_array(values, "values")
        check_1d(arr, "values")
        check_nonempty(arr, "values")
        check_finite(arr, "values")
        check_unit_interval(arr, "values")

        s = check_count(successes, "successes")
        f = check_count(failures, "failures")

        return cls(
            values=arr.astype(np.float64, copy=True),
            successes=s,
            failures=f,
        )


@dataclass(frozen=True)
class ResampleDesign:
    """
    Frozen design for weighted resampling with replacement.

    Attributes:
        values: Candidates to draw from, shape (n,). Any dtype.
        weights: Normalized probabilities, shape (n,).
        size: Number of draws (may exceed n, may be 0).
        rng: Entropy source consumed by the backend.
    """
    values: NDArray
    weights: NDArray[np.floating[Any]]
    size: int
    rng: np.random.Generator

    @property
    def n_candidates(self) -> int:
        return int(self.values.shape[0])

    @classmethod
    def for_resample(
        cls,
        values: ArrayLike,
        weights: ArrayLike,
        size: int,
        *,
        seed: SeedLike = None,
    ) -> ResampleDesign:
        """
        Create a resampling design with validation.

        Weights need not be normalized: they are passed through fix_prob,
        which also clips negative rounding noise within WEIGHT_SUM_ATOL.
        The Generator is resolved last, after every check has passed.

        Raises:
            DimensionError: If values or weights are not 1D
            EmptyInputError: If values are empty
            LengthMismatchError: If values and weights differ in length
            ValidationError: If weights are negative or non-finite, or size is invalid
            DegenerateWeightError: If every weight is zero
        """
        try:
            vals = np.array(values)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"values: cannot convert to array: {e}") from e
        if vals.ndim != 1:
            raise DimensionError(
                f"values: expected 1D array, got {vals.ndim}D with shape {vals.shape}"
            )
        check_nonempty(vals, "values")

        w = check_array(weights, "weights")
        check_1d(w, "weights")
        check_consistent_length(vals, w, names=("values", "weights"))
        check_finite(w, "weights")
        check_nonnegative(w, "weights", atol=WEIGHT_SUM_ATOL)

        n_draws = check_size(size, "size")
        probs = fix_prob(w)

        return cls(
            values=vals,
            weights=probs,
            size=n_draws,
            rng=as_generator(seed),
        )
