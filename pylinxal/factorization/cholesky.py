"""
Cholesky factorization of a Hermitian positive-definite matrix (?potrf).

    UPPER:  A = U^H U, returns U
    LOWER:  A = L L^H, returns L

Only the selected triangle of the input is read. The other triangle of the
returned factor is always zero.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_matrix
from pylinxal.core.exceptions import ValidationError
from pylinxal.core.layout import adapt, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.scalar import ScalarTrait
from pylinxal.core.types import Symmetric
from pylinxal.properties import is_symmetric


def cholesky(
    a: ArrayLike,
    uplo: Symmetric = Symmetric.UPPER,
    *,
    check_symmetric: bool = False,
) -> NDArray[Any]:
    """
    Cholesky factor of a positive-definite matrix. The input is not modified.

    Args:
        a: Square Hermitian positive-definite matrix
        uplo: Which triangular factor to compute (and which triangle to read)
        check_symmetric: Verify the full matrix is symmetric/Hermitian first

    Returns:
        Triangular factor with the same shape as a

    Raises:
        ValidationError: If check_symmetric is set and a is not symmetric
        NotPositiveDefiniteError: If the leading minor of order
            `leading_minor` is not positive

    Example:
        >>> cholesky([[4.0, 2.0], [2.0, 2.0]])
        array([[2., 1.],
               [0., 1.]])
    """
    arr, trait = prepare_matrix(a, 'a', square=True)
    if check_symmetric and not is_symmetric(arr):
        kind = "Hermitian" if trait.is_complex else "symmetric"
        raise ValidationError(f"a: matrix is not {kind}")
    return _cholesky(arr, trait, uplo, consume=False)


def cholesky_into(a: ArrayLike, uplo: Symmetric = Symmetric.UPPER) -> NDArray[Any]:
    """Like cholesky(), but a column-major input is overwritten by the factor."""
    arr, trait = prepare_matrix(a, 'a', square=True)
    return _cholesky(arr, trait, uplo, consume=True)


def _cholesky(
    arr: NDArray[Any],
    trait: ScalarTrait,
    uplo: Symmetric,
    *,
    consume: bool,
) -> NDArray[Any]:
    if is_empty(arr):
        return np.zeros((0, 0), dtype=trait.dtype, order='F')

    buffer = adapt(arr, trait, consume=consume)
    call = NativeCall(trait, 'cholesky')
    factor, = call(
        buffer.data,
        lower=uplo.lower,
        clean=1,
        overwrite_a=int(buffer.writable),
    )
    return factor
