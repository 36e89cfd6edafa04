"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pysir.core.exceptions import (
    DimensionError,
    EmptyInputError,
    InvalidCountError,
    InvalidDomainError,
    LengthMismatchError,
    ValidationError,
)
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


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "values")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float_passthrough(self):
        arr = np.array([0.1, 0.2])
        assert check_array(arr, "values").dtype == np.float64

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 0.1], "values")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "values")

    def test_rejects_booleans(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array([True, False], "weights")


# ═══════════════════════════════════════════════════════════════════════
# Shape and content checks
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "values")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((2, 2)), "values")

    def test_nonempty(self):
        with pytest.raises(EmptyInputError, match="values") as exc_info:
            check_nonempty(np.array([]), "values")
        assert exc_info.value.name == "values"

    def test_finite(self):
        with pytest.raises(ValidationError, match="1 NaN, 1 Inf"):
            check_finite(np.array([0.1, np.nan, np.inf]), "values")

    def test_nonnegative(self):
        with pytest.raises(ValidationError, match="1 negative"):
            check_nonnegative(np.array([0.5, -0.1, 0.6]), "weights")

    def test_nonnegative_tolerance(self):
        check_nonnegative(np.array([0.5, -1e-17]), "weights", atol=1e-9)
        with pytest.raises(ValidationError, match="1 negative"):
            check_nonnegative(np.array([0.5, -1e-3]), "weights", atol=1e-9)

    def test_consistent_length(self):
        with pytest.raises(LengthMismatchError, match="values=3, weights=2") as exc_info:
            check_consistent_length(
                np.zeros(3), np.zeros(2), names=("values", "weights")
            )
        assert exc_info.value.lengths == {"values": 3, "weights": 2}

    def test_consistent_length_name_count(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), np.zeros(3), names=("values",))


class TestCheckUnitInterval:

    def test_boundaries_accepted(self):
        check_unit_interval(np.array([0.0, 0.5, 1.0]), "values")

    def test_outside_rejected(self):
        with pytest.raises(InvalidDomainError) as exc_info:
            check_unit_interval(np.array([-0.1, 0.5, 1.2]), "values")
        err = exc_info.value
        assert err.n_invalid == 2
        assert err.observed_min == pytest.approx(-0.1)
        assert err.observed_max == pytest.approx(1.2)


# ═══════════════════════════════════════════════════════════════════════
# Scalars
# ═══════════════════════════════════════════════════════════════════════


class TestCheckCount:

    @pytest.mark.parametrize("value, expected", [
        (0, 0), (7, 7), (np.int64(3), 3), (4.0, 4), (np.uint8(2), 2),
    ])
    def test_accepts_integers(self, value, expected):
        result = check_count(value, "successes")
        assert result == expected
        assert type(result) is int

    @pytest.mark.parametrize("value", [-1, -3.0, 1.5, True, "3", None, float("nan")])
    def test_rejects(self, value):
        with pytest.raises(InvalidCountError) as exc_info:
            check_count(value, "failures")
        assert exc_info.value.name == "failures"


class TestCheckSize:

    def test_zero_allowed(self):
        assert check_size(0, "size") == 0

    @pytest.mark.parametrize("value", [-1, 2.0, True, None])
    def test_rejects(self, value):
        with pytest.raises(ValidationError, match="size"):
            check_size(value, "size")
