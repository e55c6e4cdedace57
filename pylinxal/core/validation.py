"""
Input validation utilities for pylinxal.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Everything here runs before a
native routine is touched.

Design principles:
    - No silent type coercion (except np.asarray on array-likes and
      integer -> float64 promotion)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinxal.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[Any]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Integer input is promoted to float64; floating and complex dtypes are
    kept as they are, so the scalar trait can reject unsupported precisions.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating or complex dtype

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

    # Reject non-numeric dtypes (strings, bytes, bool, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.integer):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    LAPACK routines are not required to terminate on non-finite input.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_vector_or_matrix(array: NDArray[Any], name: str) -> None:
    """
    Verify array is a 1D right-hand side vector or a 2D matrix of them.

    Raises:
        DimensionError: If array is neither 1D nor 2D
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected 1D or 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_square(array: NDArray[Any], name: str) -> None:
    """
    Verify a 2D array is square.

    Args:
        array: 2D array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If rows != columns
    """
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(
            f"{name}: expected square matrix, got shape ({rows}, {cols})"
        )


def check_consistent_rows(
    a: NDArray[Any],
    b: NDArray[Any],
    names: tuple[str, str],
) -> None:
    """
    Verify two arrays have the same number of rows (first dimension).

    Args:
        a: Coefficient matrix
        b: Right-hand side (1D or 2D)
        names: Parameter names for error messages

    Raises:
        DimensionError: If row counts differ
    """
    if a.shape[0] != b.shape[0]:
        raise DimensionError(
            f"Inconsistent rows: {names[0]}={a.shape[0]}, {names[1]}={b.shape[0]}"
        )


def check_positive_int(value: int, name: str, *, allow_zero: bool = True) -> None:
    """
    Verify a size argument is a non-negative (or positive) integer.

    Raises:
        ValidationError: If value is not an int or is out of range
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected int, got {type(value).__name__}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValidationError(f"{name}: must be {bound}, got {value}")
