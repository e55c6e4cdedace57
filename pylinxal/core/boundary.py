"""
Public-boundary preparation shared by every operation.

Validate here, trust everywhere else: each entry point converts its inputs
once, resolves the scalar trait once, and hands typed arrays to the
operation body.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.layout import AdaptedBuffer
from pylinxal.core.native import NativeCall
from pylinxal.core.scalar import ScalarTrait, scalar_trait, common_trait
from pylinxal.core.validation import (
    check_array,
    check_2d,
    check_finite,
    check_square,
    check_vector_or_matrix,
    check_consistent_rows,
)


def prepare_matrix(
    a: ArrayLike,
    name: str,
    *,
    square: bool = False,
) -> tuple[NDArray[Any], ScalarTrait]:
    """
    Validate a matrix argument and resolve its scalar trait.

    Args:
        a: Matrix-like input
        name: Parameter name for error messages
        square: Require rows == cols

    Returns:
        (array, trait). The array is the caller's object when it already is
        an ndarray, so consuming entry points keep their alias.

    Raises:
        ValidationError: Non-numeric or non-finite input
        DimensionError: Not 2D, or not square when required
        UnsupportedScalarError: dtype has no routine family
    """
    arr = check_array(a, name)
    check_2d(arr, name)
    if square:
        check_square(arr, name)
    trait = scalar_trait(arr.dtype)
    check_finite(arr, name)
    return arr, trait


def prepare_system(
    a: ArrayLike,
    b: ArrayLike,
    *,
    square: bool,
) -> tuple[NDArray[Any], NDArray[Any], ScalarTrait]:
    """
    Validate a coefficient matrix and right-hand side sharing one trait.

    `b` may be 1D (one right-hand side) or 2D (one per column).
    Both arrays are converted to the promoted dtype of the pair.
    """
    a_arr = check_array(a, 'a')
    b_arr = check_array(b, 'b')
    check_2d(a_arr, 'a')
    check_vector_or_matrix(b_arr, 'b')
    if square:
        check_square(a_arr, 'a')
    check_consistent_rows(a_arr, b_arr, names=('a', 'b'))

    trait = common_trait(a_arr, b_arr)
    check_finite(a_arr, 'a')
    check_finite(b_arr, 'b')
    return a_arr, b_arr, trait


def call_info(call: NativeCall, buffer: AdaptedBuffer, **extra: Any) -> dict[str, Any]:
    """Standard Result.info for one native call."""
    info: dict[str, Any] = {
        'routine': call.name,
        'scalar': call.trait.name,
        'layout': buffer.ownership.value,
    }
    info.update(extra)
    return info


def empty_like_rhs(b: NDArray[Any], rows: int, trait: ScalarTrait) -> NDArray[Any]:
    """Empty solution with the right-hand side's dimensionality."""
    if b.ndim == 1:
        return np.zeros(rows, dtype=trait.dtype)
    return np.zeros((rows, b.shape[1]), dtype=trait.dtype, order='F')
