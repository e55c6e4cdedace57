"""
Layout adapter between numpy arrays and the native column-major contract.

LAPACK expects a column-major buffer described by (rows, cols, leading
dimension) of the routine's element type. This module decides whether a
caller's array already satisfies that contract (zero-copy alias) or has to
be copied, and records which of the two happened so the native call knows
whether it may overwrite the buffer.

Ownership:
    BORROWED  alias of the caller's array; the caller did not grant mutation,
              so the native call must not write into it
    CONSUMED  alias of the caller's array; the caller handed it over
              (an ``*_into`` entry point) and results may be written in place
    COPIED    freshly allocated column-major copy owned by this call
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinxal.core.exceptions import LayoutError
from pylinxal.core.scalar import ScalarTrait


# LAPACK sizes, leading dimensions and offsets are 32-bit integers.
LAPACK_INT_MAX = 2**31 - 1


class Ownership(Enum):
    BORROWED = 'borrowed'
    CONSUMED = 'consumed'
    COPIED = 'copied'


@dataclass(frozen=True)
class AdaptedBuffer:
    """
    Column-major buffer ready for a native call.

    Lives for the duration of one native call.

    Attributes:
        data: Fortran-contiguous 2D array of the trait's dtype
        leading_dimension: LDA passed to the routine, >= max(1, rows)
        ownership: Whether data aliases the caller's array
    """
    data: NDArray[Any]
    leading_dimension: int
    ownership: Ownership

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    @property
    def writable(self) -> bool:
        """True if the native routine may overwrite the buffer."""
        return self.ownership is not Ownership.BORROWED

    @property
    def is_alias(self) -> bool:
        return self.ownership is not Ownership.COPIED


def is_empty(array: NDArray[Any]) -> bool:
    """True if any dimension is zero; such arrays never reach a native routine."""
    return 0 in array.shape


def leading_dimension(rows: int) -> int:
    """Leading dimension of a packed column-major buffer with `rows` rows."""
    return max(1, rows)


def check_native_size(shape: tuple[int, ...]) -> None:
    """
    Verify a matrix shape is addressable with 32-bit LAPACK integers.

    Raises:
        LayoutError: If a dimension, or leading dimension times columns,
            does not fit
    """
    for dim in shape:
        if dim > LAPACK_INT_MAX:
            raise LayoutError(
                f"dimension {dim} exceeds the native integer range ({LAPACK_INT_MAX})",
                shape=shape,
            )
    if len(shape) == 2:
        ld = leading_dimension(shape[0])
        if ld * max(1, shape[1]) > LAPACK_INT_MAX:
            raise LayoutError(
                f"leading dimension {ld} x {shape[1]} columns overflows the "
                f"native integer range",
                shape=shape,
            )


def is_column_major(array: NDArray[Any], trait: ScalarTrait) -> bool:
    """
    True if the array can be handed to the routine without a copy.

    Requires the trait's dtype, Fortran contiguity (unit row stride), and a
    leading dimension equal to the row count.
    """
    if array.ndim != 2 or array.dtype != trait.dtype:
        return False
    if not array.flags.f_contiguous:
        return False
    rows = array.shape[0]
    # f_contiguous with column stride rows * itemsize; ld == rows
    return array.strides[0] == array.itemsize or rows <= 1


def adapt(array: NDArray[Any], trait: ScalarTrait, *, consume: bool) -> AdaptedBuffer:
    """
    Produce a column-major buffer for a native call.

    Args:
        array: 2D input matrix (any layout, any castable dtype)
        trait: Scalar trait of the operation
        consume: True if the caller granted in-place mutation

    Returns:
        AdaptedBuffer aliasing `array` when its layout already matches,
        otherwise a fresh column-major copy

    Raises:
        LayoutError: If the shape does not fit native integers
    """
    check_native_size(array.shape)

    if is_column_major(array, trait):
        ownership = Ownership.CONSUMED if consume else Ownership.BORROWED
        data = array
    else:
        ownership = Ownership.COPIED
        data = fresh_copy(array, trait)

    return AdaptedBuffer(
        data=data,
        leading_dimension=leading_dimension(data.shape[0]),
        ownership=ownership,
    )


def adapt_rhs(
    b: NDArray[Any],
    trait: ScalarTrait,
    *,
    consume: bool,
    matrix: NDArray[Any] | None = None,
) -> AdaptedBuffer:
    """
    Adapt a right-hand side, viewing a 1D vector as a one-column matrix.

    Reshaping a contiguous vector is a view, so a consumed vector of the
    right dtype is still solved in place.

    Args:
        b: Right-hand side (n,) or (n x k)
        trait: Scalar trait of the operation
        consume: True if the caller granted in-place mutation
        matrix: Coefficient matrix of the same call. A consumed b that
            overlaps it is copied, since the routine overwrites both.
    """
    if b.ndim == 1:
        b = b.reshape(b.shape[0], 1)
    if consume and matrix is not None and np.may_share_memory(matrix, b):
        data = fresh_copy(b, trait)
        return AdaptedBuffer(
            data=data,
            leading_dimension=leading_dimension(data.shape[0]),
            ownership=Ownership.COPIED,
        )
    return adapt(b, trait, consume=consume)


def fresh_copy(array: NDArray[Any], trait: ScalarTrait) -> NDArray[Any]:
    """Fresh column-major copy in the trait's dtype."""
    check_native_size(array.shape)
    return np.array(array, dtype=trait.dtype, order='F', copy=True)


def buffer_address(array: NDArray[Any]) -> int:
    """Address of the first element of the array's buffer."""
    return array.__array_interface__['data'][0]
