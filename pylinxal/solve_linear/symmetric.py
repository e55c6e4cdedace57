"""
Solve symmetric (real) or Hermitian (complex) linear systems with the
Bunch-Kaufman diagonal pivoting factorization (?sysv / ?hesv).

Only the triangle selected by `uplo` is read.
"""

from __future__ import annotations

from typing import Any
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_system, empty_like_rhs
from pylinxal.core.exceptions import ValidationError
from pylinxal.core.layout import adapt, adapt_rhs, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.scalar import ScalarTrait
from pylinxal.core.types import Symmetric
from pylinxal.properties import is_symmetric


def solve_symmetric(
    a: ArrayLike,
    b: ArrayLike,
    uplo: Symmetric = Symmetric.UPPER,
    *,
    check_symmetric: bool = False,
) -> NDArray[Any]:
    """
    Solve A x = b for a symmetric/Hermitian matrix.

    Args:
        a: Square coefficient matrix; only the `uplo` triangle is referenced
        b: Right-hand side vector (n,) or matrix (n x k)
        uplo: Triangle holding the matrix
        check_symmetric: Verify the full matrix is symmetric/Hermitian first

    Returns:
        Solution with the same shape as b

    Raises:
        ValidationError: If check_symmetric is set and a is not symmetric
        SingularMatrixError: If D(i,i) of the block factorization is zero
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=True)
    if check_symmetric and not is_symmetric(a_arr):
        kind = "Hermitian" if trait.is_complex else "symmetric"
        raise ValidationError(f"a: matrix is not {kind}")
    return _solve_symmetric(a_arr, b_arr, trait, uplo, consume=False)


def solve_symmetric_into(
    a: ArrayLike,
    b: ArrayLike,
    uplo: Symmetric = Symmetric.UPPER,
) -> NDArray[Any]:
    """Like solve_symmetric(), but consumes both inputs (solution written into b)."""
    a_arr, b_arr, trait = prepare_system(a, b, square=True)
    return _solve_symmetric(a_arr, b_arr, trait, uplo, consume=True)


def _solve_symmetric(
    a: NDArray[Any],
    b: NDArray[Any],
    trait: ScalarTrait,
    uplo: Symmetric,
    *,
    consume: bool,
) -> NDArray[Any]:
    n = a.shape[0]
    if is_empty(a) or is_empty(b):
        return empty_like_rhs(b, n, trait)

    a_buf = adapt(a, trait, consume=consume)
    b_buf = adapt_rhs(b, trait, consume=consume, matrix=a)

    call = NativeCall(trait, 'sym_solve')
    lwork, = call.workspace(n, lower=uplo.lower)
    _factor, _ipiv, x = call(
        a_buf.data, b_buf.data,
        lwork=lwork,
        lower=uplo.lower,
        overwrite_a=int(a_buf.writable),
        overwrite_b=int(b_buf.writable),
    )

    if b.ndim == 1:
        return x.reshape(n)
    return x
