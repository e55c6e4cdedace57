"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, integer promotion, dtype preservation, rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_2d / check_vector_or_matrix / check_square
    - check_consistent_rows
    - check_positive_int
"""

import numpy as np
import pytest

from pylinxal.core.exceptions import DimensionError, ValidationError
from pylinxal.core.validation import (
    check_2d,
    check_array,
    check_consistent_rows,
    check_finite,
    check_ndim,
    check_positive_int,
    check_square,
    check_vector_or_matrix,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([[1, 2], [3, 4]], "a")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [[1.0, 2.0], [3.0, 4.0]])

    @pytest.mark.parametrize("dtype", [np.float32, np.float64, np.complex64, np.complex128])
    def test_float_and_complex_preserved(self, dtype):
        arr = np.ones((2, 2), dtype=dtype)
        assert check_array(arr, "a") is arr

    def test_float16_kept_for_scalar_rejection(self):
        # the scalar trait, not the validator, rejects unsupported precisions
        assert check_array(np.ones(2, dtype=np.float16), "a").dtype == np.float16

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array(np.array([1, "x", None], dtype=object), "a")

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(np.array(["a", "b"]), "a")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(np.array([True, False]), "a")

    def test_name_in_message(self):
        with pytest.raises(ValidationError, match="my_matrix"):
            check_array(np.array(["a"]), "my_matrix")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "a")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "a")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="1 Inf"):
            check_finite(np.array([np.inf, 1.0]), "a")

    def test_complex_nan_rejected(self):
        with pytest.raises(ValidationError):
            check_finite(np.array([1 + 1j, complex(0, np.nan)]), "a")


# ═══════════════════════════════════════════════════════════════════════
# Shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_check_ndim(self):
        check_ndim(np.zeros((2, 2)), 2, "a")
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "a")

    def test_check_2d_rejects_3d(self):
        with pytest.raises(DimensionError):
            check_2d(np.zeros((2, 2, 2)), "a")

    def test_vector_or_matrix(self):
        check_vector_or_matrix(np.zeros(3), "b")
        check_vector_or_matrix(np.zeros((3, 2)), "b")
        with pytest.raises(DimensionError):
            check_vector_or_matrix(np.zeros((3, 2, 1)), "b")

    def test_square(self):
        check_square(np.zeros((3, 3)), "a")
        with pytest.raises(DimensionError, match=r"\(3, 2\)"):
            check_square(np.zeros((3, 2)), "a")

    def test_consistent_rows(self):
        check_consistent_rows(np.zeros((3, 3)), np.zeros(3), names=("a", "b"))
        with pytest.raises(DimensionError, match="a=3, b=4"):
            check_consistent_rows(np.zeros((3, 3)), np.zeros(4), names=("a", "b"))


class TestCheckPositiveInt:

    def test_accepts_zero_by_default(self):
        check_positive_int(0, "n")

    def test_rejects_zero_when_disallowed(self):
        with pytest.raises(ValidationError, match="> 0"):
            check_positive_int(0, "n", allow_zero=False)

    def test_rejects_negative(self):
        with pytest.raises(ValidationError, match=">= 0"):
            check_positive_int(-1, "n")

    def test_rejects_float(self):
        with pytest.raises(ValidationError, match="expected int"):
            check_positive_int(2.0, "n")

    def test_rejects_bool(self):
        with pytest.raises(ValidationError):
            check_positive_int(True, "n")

    def test_accepts_numpy_int(self):
        check_positive_int(np.int64(3), "n")
