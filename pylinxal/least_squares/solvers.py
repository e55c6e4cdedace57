"""
Least-squares solvers: minimize ||A x - b||_2 for a general m x n matrix A.

Drivers:
    least_squares_full        ?gels, QR/LQ; requires full rank, fastest
    least_squares_degenerate  ?gelsd, SVD divide and conquer; minimum-norm
                              solution for any rank
    least_squares             tries ?gels, falls back to ?gelsd on rank
                              deficiency and records a warning

Overdetermined systems (m > n) get the least-squares solution,
underdetermined ones (m < n) the minimum-norm solution. The native
right-hand side buffer has max(m, n) rows; the returned solution is cut
to the first n.
"""

from __future__ import annotations

import warnings
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_system, call_info
from pylinxal.core.exceptions import SingularMatrixError
from pylinxal.core.layout import AdaptedBuffer, Ownership, adapt, adapt_rhs, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.scalar import ScalarTrait
from pylinxal.core.timing import Timer
from pylinxal.least_squares.solution import LeastSquaresParams, LeastSquaresSolution


def least_squares_full(a: ArrayLike, b: ArrayLike) -> LeastSquaresSolution:
    """
    Solve a full-rank least-squares problem with ?gels.

    Args:
        a: Coefficient matrix (m x n)
        b: Right-hand side vector (m,) or matrix (m x k)

    Returns:
        LeastSquaresSolution; solution has n rows

    Raises:
        SingularMatrixError: If A does not have full rank
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=False)
    return _full(a_arr, b_arr, trait, consume=False)


def least_squares_full_into(a: ArrayLike, b: ArrayLike) -> LeastSquaresSolution:
    """Like least_squares_full(), but consumes both inputs."""
    a_arr, b_arr, trait = prepare_system(a, b, square=False)
    return _full(a_arr, b_arr, trait, consume=True)


def least_squares_degenerate(
    a: ArrayLike,
    b: ArrayLike,
    *,
    rcond: float | None = None,
) -> LeastSquaresSolution:
    """
    Minimum-norm least-squares solution for a possibly rank-deficient A (?gelsd).

    Args:
        a: Coefficient matrix (m x n)
        b: Right-hand side vector (m,) or matrix (m x k)
        rcond: Singular values s_i <= rcond * s_max are treated as zero.
            None uses machine precision.

    Returns:
        LeastSquaresSolution with effective rank and singular values

    Raises:
        ConvergenceError: If the SVD did not converge
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=False)
    return _degenerate(a_arr, b_arr, trait, rcond, consume=False)


def least_squares_degenerate_into(
    a: ArrayLike,
    b: ArrayLike,
    *,
    rcond: float | None = None,
) -> LeastSquaresSolution:
    """Like least_squares_degenerate(), but consumes both inputs."""
    a_arr, b_arr, trait = prepare_system(a, b, square=False)
    return _degenerate(a_arr, b_arr, trait, rcond, consume=True)


def least_squares(a: ArrayLike, b: ArrayLike) -> LeastSquaresSolution:
    """
    Least-squares solution, falling back to the rank-revealing driver.

    Tries least_squares_full(); if A turns out to be rank deficient the
    problem is re-solved with least_squares_degenerate(), a RuntimeWarning
    is issued, and the warning is recorded on the result.

    Example:
        >>> a = [[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]]
        >>> least_squares(a, [1.0, 1.0, 2.0]).solution
        array([1., 1.])
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=False)
    try:
        return _full(a_arr, b_arr, trait, consume=False)
    except SingularMatrixError as e:
        message = (
            f"matrix is rank deficient ({e.routine} info={e.raw_code}); "
            f"using the minimum-norm solution"
        )
        warnings.warn(message, RuntimeWarning, stacklevel=2)
        return _degenerate(a_arr, b_arr, trait, None, consume=False, warn_list=[message])


def least_squares_into(a: ArrayLike, b: ArrayLike) -> LeastSquaresSolution:
    """
    Consuming variant of least_squares().

    A failed full-rank attempt would already have overwritten the inputs,
    so this goes straight to the rank-revealing driver. For full-rank A
    the solution is the same.
    """
    a_arr, b_arr, trait = prepare_system(a, b, square=False)
    return _degenerate(a_arr, b_arr, trait, None, consume=True)


# ═══════════════════════════════════════════════════════════════════════
# Drivers
# ═══════════════════════════════════════════════════════════════════════

def _rhs_buffer(
    b: NDArray[Any],
    a: NDArray[Any],
    rows: int,
    trait: ScalarTrait,
    *,
    consume: bool,
) -> AdaptedBuffer:
    """
    Right-hand side with max(m, n) rows, as ?gels/?gelsd require.

    When n > m the caller's b is too short and is padded into a fresh buffer.
    """
    if b.shape[0] == rows:
        return adapt_rhs(b, trait, consume=consume, matrix=a)
    nrhs = 1 if b.ndim == 1 else b.shape[1]
    padded = np.zeros((rows, nrhs), dtype=trait.dtype, order='F')
    padded[:b.shape[0]] = b.reshape(b.shape[0], nrhs)
    return AdaptedBuffer(data=padded, leading_dimension=rows, ownership=Ownership.COPIED)


def _shape_solution(x: NDArray[Any], n: int, b: NDArray[Any]) -> NDArray[Any]:
    sol = x[:n]
    return sol.reshape(n) if b.ndim == 1 else sol


def _residuals(x: NDArray[Any], m: int, n: int, rank: int, b: NDArray[Any]) -> NDArray[Any] | None:
    """Rows n..m of the native output hold the residual components."""
    if m <= n or rank < n:
        return None
    res = np.sum(np.abs(x[n:m]) ** 2, axis=0)
    return res[0] if b.ndim == 1 else res


def _empty_solution(a: NDArray[Any], b: NDArray[Any], trait: ScalarTrait) -> LeastSquaresSolution:
    m, n = a.shape
    nrhs = 1 if b.ndim == 1 else b.shape[1]
    x = np.zeros((n, nrhs), dtype=trait.dtype, order='F')
    params = LeastSquaresParams(
        solution=x.reshape(n) if b.ndim == 1 else x,
        rank=0,
        singular_values=np.zeros(0, dtype=trait.real_dtype),
        residuals=None,
    )
    return LeastSquaresSolution(_result=Result(
        params=params,
        info={'routine': None, 'scalar': trait.name, 'shape': (m, n)},
        timing=None,
        backend_name=EMPTY_BACKEND,
    ))


def _full(
    a: NDArray[Any],
    b: NDArray[Any],
    trait: ScalarTrait,
    *,
    consume: bool,
) -> LeastSquaresSolution:
    m, n = a.shape
    if is_empty(a) or is_empty(b):
        return _empty_solution(a, b, trait)

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        a_buf = adapt(a, trait, consume=consume)
        b_buf = _rhs_buffer(b, a, max(m, n), trait, consume=consume)
    nrhs = b_buf.cols

    call = NativeCall(trait, 'lstsq')

    with timer.section('workspace_query'):
        lwork, = call.workspace(m, n, nrhs, trans='N')

    with timer.section('compute'):
        _factors, x = call(
            a_buf.data, b_buf.data,
            trans='N',
            lwork=lwork,
            overwrite_a=int(a_buf.writable),
            overwrite_b=int(b_buf.writable),
        )

    timer.stop()

    rank = min(m, n)
    params = LeastSquaresParams(
        solution=_shape_solution(x, n, b),
        rank=rank,
        singular_values=None,
        residuals=_residuals(x, m, n, rank, b),
    )
    result = Result(
        params=params,
        info=call_info(call, a_buf, lwork=lwork, shape=(m, n), driver='full'),
        timing=timer.result(),
        backend_name=call.name,
    )
    return LeastSquaresSolution(_result=result)


def _degenerate(
    a: NDArray[Any],
    b: NDArray[Any],
    trait: ScalarTrait,
    rcond: float | None,
    *,
    consume: bool,
    warn_list: list[str] | None = None,
) -> LeastSquaresSolution:
    m, n = a.shape
    if is_empty(a) or is_empty(b):
        return _empty_solution(a, b, trait)

    cond = -1.0 if rcond is None else float(rcond)

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        a_buf = adapt(a, trait, consume=consume)
        b_buf = _rhs_buffer(b, a, max(m, n), trait, consume=consume)
    nrhs = b_buf.cols

    call = NativeCall(trait, 'lstsq_degenerate')

    with timer.section('workspace_query'):
        # (lwork, iwork) for real, (lwork, rwork, iwork) for complex
        sizes = call.workspace(m, n, nrhs, cond)

    with timer.section('compute'):
        x, s, rank = call(
            a_buf.data, b_buf.data, *sizes,
            cond=cond,
            overwrite_a=int(a_buf.writable),
            overwrite_b=int(b_buf.writable),
        )

    timer.stop()

    rank = int(rank)
    params = LeastSquaresParams(
        solution=_shape_solution(x, n, b),
        rank=rank,
        singular_values=s,
        residuals=_residuals(x, m, n, rank, b),
    )
    result = Result(
        params=params,
        info=call_info(
            call, a_buf, lwork=sizes[0], shape=(m, n), driver='degenerate', rcond=cond,
        ),
        timing=timer.result(),
        backend_name=call.name,
        warnings=tuple(warn_list or ()),
    )
    return LeastSquaresSolution(_result=result)
