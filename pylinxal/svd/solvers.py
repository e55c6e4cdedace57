"""
Solver dispatch for the singular value decomposition.

Two LAPACK drivers are available:

    ?gesdd  divide and conquer; fastest, the default
    ?gesvd  QR iteration; smaller workspace when vectors are requested

gesdd needs O(min(m,n)^2) extra workspace for the vectors, which becomes
the dominant allocation for large matrices, so select_method() switches to
gesvd once vectors are wanted and the larger dimension exceeds
SVD_NORMAL_LIMIT.
"""

from __future__ import annotations

from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_matrix, call_info
from pylinxal.core.layout import adapt, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.scalar import ScalarTrait
from pylinxal.core.timing import Timer
from pylinxal.svd.solution import SVDParams, SVDSolution, SVDVectors


SVD_NORMAL_LIMIT = 200

MethodChoice = Literal['auto', 'divide_conquer', 'normal']


def select_method(m: int, n: int, vectors: SVDVectors, method: MethodChoice = 'auto') -> str:
    """
    Return the logical operation ('svd' or 'svd_normal') for a problem.

    Args:
        m, n: Matrix shape
        vectors: Requested singular vectors
        method: 'auto', or force 'divide_conquer' (gesdd) / 'normal' (gesvd)
    """
    if method == 'divide_conquer':
        return 'svd'
    if method == 'normal':
        return 'svd_normal'
    if method != 'auto':
        raise ValueError(f"Unknown SVD method: {method!r}")
    if vectors is not SVDVectors.NONE and max(m, n) > SVD_NORMAL_LIMIT:
        return 'svd_normal'
    return 'svd'


def svd(
    a: ArrayLike,
    vectors: SVDVectors = SVDVectors.FULL,
    *,
    method: MethodChoice = 'auto',
) -> SVDSolution:
    """
    Singular value decomposition A = U diag(s) V^H.

    Args:
        a: Matrix (m x n), float32/float64/complex64/complex128
        vectors: FULL, ECONOMIC or NONE
        method: Driver selection, see select_method()

    Returns:
        SVDSolution with descending singular values of the real-part dtype

    Raises:
        ConvergenceError: If the bidiagonal iteration did not converge

    Example:
        >>> sol = svd(np.diag([3.0, 1.0, 2.0]), SVDVectors.NONE)
        >>> sol.values
        array([3., 2., 1.])
    """
    arr, trait = prepare_matrix(a, 'a')
    return _svd(arr, trait, vectors, method, consume=False)


def svd_into(
    a: ArrayLike,
    vectors: SVDVectors = SVDVectors.FULL,
    *,
    method: MethodChoice = 'auto',
) -> SVDSolution:
    """Like svd(), but the routine may destroy a column-major input."""
    arr, trait = prepare_matrix(a, 'a')
    return _svd(arr, trait, vectors, method, consume=True)


def singular_values(a: ArrayLike) -> NDArray[np.floating[Any]]:
    """Singular values only, descending."""
    return svd(a, SVDVectors.NONE).values


def _svd(
    arr: NDArray[Any],
    trait: ScalarTrait,
    vectors: SVDVectors,
    method: MethodChoice,
    *,
    consume: bool,
) -> SVDSolution:
    m, n = arr.shape

    if is_empty(arr):
        return _empty_solution(trait, m, n, vectors)

    operation = select_method(m, n, vectors, method)

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        buffer = adapt(arr, trait, consume=consume)

    call = NativeCall(trait, operation)
    job = dict(compute_uv=vectors.compute_uv, full_matrices=vectors.full_matrices)

    with timer.section('workspace_query'):
        lwork, = call.workspace(m, n, **job)

    with timer.section('compute'):
        u, s, vt = call(
            buffer.data, lwork=lwork, overwrite_a=int(buffer.writable), **job,
        )

    timer.stop()

    computed = vectors is not SVDVectors.NONE
    params = SVDParams(
        values=s,
        left_vectors=u if computed else None,
        right_vectors_h=vt if computed else None,
    )
    result = Result(
        params=params,
        info=call_info(call, buffer, lwork=lwork, shape=(m, n)),
        timing=timer.result(),
        backend_name=call.name,
    )
    return SVDSolution(_result=result, _vectors=vectors)


def _empty_solution(trait: ScalarTrait, m: int, n: int, vectors: SVDVectors) -> SVDSolution:
    """
    Zero-dimension input: no routine is called.

    FULL returns identity factors of the non-zero side, which is a valid
    (if arbitrary) unitary completion.
    """
    if vectors is SVDVectors.FULL:
        u = np.eye(m, dtype=trait.dtype, order='F')
        vt = np.eye(n, dtype=trait.dtype, order='F')
    elif vectors is SVDVectors.ECONOMIC:
        u = np.zeros((m, 0), dtype=trait.dtype, order='F')
        vt = np.zeros((0, n), dtype=trait.dtype, order='F')
    else:
        u = vt = None

    params = SVDParams(
        values=np.zeros(0, dtype=trait.real_dtype),
        left_vectors=u,
        right_vectors_h=vt,
    )
    result = Result(
        params=params,
        info={'routine': None, 'scalar': trait.name, 'shape': (m, n)},
        timing=None,
        backend_name=EMPTY_BACKEND,
    )
    return SVDSolution(_result=result, _vectors=vectors)
