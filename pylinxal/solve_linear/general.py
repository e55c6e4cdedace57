"""
Solve square linear systems A x = b with LU factorization (?gesv).
"""

from __future__ import annotations

from typing import Any
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_system, empty_like_rhs
from pylinxal.core.layout import adapt, adapt_rhs, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.scalar import ScalarTrait
from pylinxal.factorization.permutation import check_pivoted_info


def solve_linear(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """
    Solve A x = b for a general square matrix.

    Neither input is modified.

    Args:
        a: Square coefficient matrix (n x n)
        b: Right-hand side, a vector (n,) or one system per column (n x k)

    Returns:
        Solution with the same shape as b, in the promoted dtype of a and b

    Raises:
        DimensionError: If a is not square or b has the wrong row count
        SingularMatrixError: If U(i,i) is exactly zero; `leading_minor` is i and
            `index` the input row pivoted into that position

    Example:
        >>> solve_linear([[2.0, 0.0], [0.0, 4.0]], [2.0, 2.0])
        array([1. , 0.5])
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=True)
    return _solve(a_arr, b_arr, trait, consume=False)


def solve_linear_into(a: ArrayLike, b: ArrayLike) -> NDArray[Any]:
    """
    Like solve_linear(), but consumes both inputs.

    When b is a column-major array of the system's dtype, the solution is
    written into b and the returned array shares its memory. `a` is
    overwritten with its LU factors.
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=True)
    return _solve(a_arr, b_arr, trait, consume=True)


def _solve(
    a: NDArray[Any],
    b: NDArray[Any],
    trait: ScalarTrait,
    *,
    consume: bool,
) -> NDArray[Any]:
    n = a.shape[0]
    if is_empty(a) or is_empty(b):
        return empty_like_rhs(b, n, trait)

    a_buf = adapt(a, trait, consume=consume)
    b_buf = adapt_rhs(b, trait, consume=consume, matrix=a)

    call = NativeCall(trait, 'solve')
    (_lu, piv, x), info = call.unchecked(
        a_buf.data, b_buf.data,
        overwrite_a=int(a_buf.writable),
        overwrite_b=int(b_buf.writable),
    )
    check_pivoted_info(call, info, piv, n)

    if b.ndim == 1:
        return x.reshape(n)
    return x
