"""
Input validation utilities for PySIR.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pysir.core.exceptions import (
    ValidationError,
    DimensionError,
    LengthMismatchError,
    EmptyInputError,
    InvalidCountError,
    InvalidDomainError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Booleans are numbers to numpy but never valid probabilities or weights
    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: np.ndarray, name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_nonempty(array: np.ndarray, name: str) -> None:
    """
    Verify array holds at least one element.

    Raises:
        EmptyInputError: If array is empty
    """
    if array.shape[0] == 0:
        raise EmptyInputError(f"{name}: must contain at least 1 value, got 0", name=name)


def check_nonnegative(
    array: NDArray[np.floating[Any]],
    name: str,
    atol: float = 0.0,
) -> None:
    """
    Verify every entry is >= -atol.

    Args:
        atol: Negative entries no larger than this in magnitude are
            accepted as rounding noise and left for the caller to clip.

    Raises:
        ValidationError: If any entry is below -atol
    """
    negative = np.flatnonzero(array < -atol)
    if negative.size > 0:
        raise ValidationError(
            f"{name}: {negative.size} negative entries "
            f"(first at index {int(negative[0])}: {array[negative[0]]!r})"
        )


def check_unit_interval(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every entry lies in the closed interval [0, 1].

    Binomial proportions outside [0, 1] would make the likelihood kernel
    negative or complex, so they are rejected rather than clipped.

    Raises:
        InvalidDomainError: If any entry is outside [0, 1]
    """
    outside = (array < 0.0) | (array > 1.0)
    n_invalid = int(np.sum(outside))
    if n_invalid > 0:
        lo, hi = float(np.min(array)), float(np.max(array))
        raise InvalidDomainError(
            f"{name}: {n_invalid} values outside [0, 1] "
            f"(observed range [{lo:.6g}, {hi:.6g}])",
            n_invalid=n_invalid,
            observed_min=lo,
            observed_max=hi,
        )


def check_count(value: Any, name: str) -> int:
    """
    Validate an observed count and return it as a Python int.

    Accepts Python and numpy integers, and floats with an integral value.
    Booleans are rejected even though they subclass int.

    Raises:
        InvalidCountError: If the value is not a non-negative integer
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidCountError(
            f"{name}: expected a non-negative integer, got bool {value!r}",
            name=name, value=value,
        )

    if isinstance(value, numbers.Integral):
        count = int(value)
    elif isinstance(value, numbers.Real) and np.isfinite(value) and float(value).is_integer():
        count = int(value)
    else:
        raise InvalidCountError(
            f"{name}: expected a non-negative integer, got {value!r}",
            name=name, value=value,
        )

    if count < 0:
        raise InvalidCountError(
            f"{name}: must be >= 0, got {count}", name=name, value=value
        )
    return count


def check_size(value: Any, name: str) -> int:
    """
    Validate a requested sample size (non-negative integer).

    Raises:
        ValidationError: If the value is not a non-negative integer
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected a non-negative integer, got {value!r}"
        )
    if value < 0:
        raise ValidationError(f"{name}: must be >= 0, got {value}")
    return int(value)


def check_consistent_length(
    *arrays: np.ndarray,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        LengthMismatchError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = {name: arr.shape[0] for name, arr in zip(names, arrays)}
    if len(set(lengths.values())) > 1:
        details = ", ".join(f"{name}={length}" for name, length in lengths.items())
        raise LengthMismatchError(f"Inconsistent lengths: {details}", lengths=lengths)
