"""
Eigenvalues and eigenvectors of general (non-symmetric) square matrices.

Uses the LAPACK ?geev driver. For real input the routine returns the
eigenvalues as two real arrays (real and imaginary parts) and stores the
eigenvectors of a complex-conjugate pair in two consecutive real columns:

    wi[j] > 0:  lambda_j     = wr[j] + i*wi[j],  v_j     = V[:, j] + i*V[:, j+1]
                lambda_{j+1} = wr[j] - i*wi[j],  v_{j+1} = V[:, j] - i*V[:, j+1]

The pair with positive imaginary part always comes first. Pairs are
assembled by matched index in that order; nothing is re-sorted.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_matrix, call_info
from pylinxal.core.layout import adapt, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.scalar import ScalarTrait
from pylinxal.core.timing import Timer
from pylinxal.eigenvalues.solution import EigenParams, EigenSolution


def eigen(
    a: ArrayLike,
    *,
    compute_left: bool = False,
    compute_right: bool = False,
) -> EigenSolution:
    """
    Compute the eigenvalues and, optionally, eigenvectors of a square matrix.

    The input is never modified.

    Args:
        a: Square matrix (n x n), float32/float64/complex64/complex128
        compute_left: Also compute left eigenvectors
        compute_right: Also compute right eigenvectors

    Returns:
        EigenSolution with complex eigenvalues in native order and the
        requested eigenvectors as complex matrices

    Raises:
        DimensionError: If a is not square
        ConvergenceError: If the QR algorithm failed to compute all values

    Example:
        >>> sol = eigen([[1.0, 2.0], [-2.0, 1.0]])
        >>> sol.values
        array([1.+2.j, 1.-2.j])
    """
    arr, trait = prepare_matrix(a, 'a', square=True)
    return _eigen(arr, trait, compute_left, compute_right, consume=False)


def eigen_into(
    a: ArrayLike,
    *,
    compute_left: bool = False,
    compute_right: bool = False,
) -> EigenSolution:
    """
    Like eigen(), but consumes the input.

    When `a` is already a column-major array of a supported dtype its
    storage is used as the routine's workspace and its contents are
    destroyed. Do not use `a` afterwards.
    """
    arr, trait = prepare_matrix(a, 'a', square=True)
    return _eigen(arr, trait, compute_left, compute_right, consume=True)


def _eigen(
    arr: NDArray[Any],
    trait: ScalarTrait,
    compute_left: bool,
    compute_right: bool,
    *,
    consume: bool,
) -> EigenSolution:
    n = arr.shape[0]

    if is_empty(arr):
        return _empty_solution(trait, compute_left, compute_right)

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        buffer = adapt(arr, trait, consume=consume)

    call = NativeCall(trait, 'eigen')
    jobvl, jobvr = int(compute_left), int(compute_right)

    with timer.section('workspace_query'):
        lwork, = call.workspace(n, compute_vl=jobvl, compute_vr=jobvr)

    with timer.section('compute'):
        if trait.is_complex:
            values, vl, vr = call(
                buffer.data, compute_vl=jobvl, compute_vr=jobvr,
                lwork=lwork, overwrite_a=int(buffer.writable),
            )
        else:
            wr, wi, vl, vr = call(
                buffer.data, compute_vl=jobvl, compute_vr=jobvr,
                lwork=lwork, overwrite_a=int(buffer.writable),
            )

    with timer.section('assemble'):
        if trait.is_complex:
            left = vl if compute_left else None
            right = vr if compute_right else None
        else:
            values, left, right = pair_conjugates(
                trait, wr, wi,
                vl if compute_left else None,
                vr if compute_right else None,
            )

    timer.stop()

    params = EigenParams(values=values, left_vectors=left, right_vectors=right)
    result = Result(
        params=params,
        info=call_info(call, buffer, lwork=lwork),
        timing=timer.result(),
        backend_name=call.name,
    )
    return EigenSolution(_result=result)


def pair_conjugates(
    trait: ScalarTrait,
    wr: NDArray[Any],
    wi: NDArray[Any],
    left: NDArray[Any] | None,
    right: NDArray[Any] | None,
) -> tuple[NDArray[Any], NDArray[Any] | None, NDArray[Any] | None]:
    """
    Assemble complex eigenvalues and eigenvectors from real ?geev output.

    Walks the two parallel sequences by index. A zero imaginary part is a
    real eigenvalue occupying one slot; a nonzero one opens a conjugate
    pair occupying slots j and j+1, whose values are built from slot j
    (real part shared, imaginary part negated) and whose vectors are
    V[:, j] +/- i*V[:, j+1].

    Args:
        trait: Real scalar trait of the input
        wr: Real parts (n,)
        wi: Imaginary parts (n,)
        left: Real left eigenvector matrix, or None
        right: Real right eigenvector matrix, or None

    Returns:
        (values, left, right) with complex dtype of matching precision
    """
    n = wr.shape[0]
    values = np.empty(n, dtype=trait.complex_dtype)
    matrices = [m for m in (left, right) if m is not None]
    outputs = [np.empty((n, n), dtype=trait.complex_dtype, order='F') for _ in matrices]

    j = 0
    while j < n:
        if wi[j] == 0 or j + 1 == n:
            values[j] = wr[j]
            for src, dst in zip(matrices, outputs):
                dst[:, j] = src[:, j]
            j += 1
            continue

        values[j] = complex(wr[j], wi[j])
        values[j + 1] = complex(wr[j], -wi[j])
        for src, dst in zip(matrices, outputs):
            re, im = src[:, j], src[:, j + 1]
            dst[:, j] = trait.combine(re, im)
            dst[:, j + 1] = trait.combine(re, -im)
        j += 2

    it = iter(outputs)
    left_out = next(it) if left is not None else None
    right_out = next(it) if right is not None else None
    return values, left_out, right_out


def _empty_solution(
    trait: ScalarTrait,
    compute_left: bool,
    compute_right: bool,
) -> EigenSolution:
    """0 x 0 input: no routine is called."""
    def vectors(wanted: bool) -> NDArray[Any] | None:
        return np.zeros((0, 0), dtype=trait.complex_dtype) if wanted else None

    params = EigenParams(
        values=np.zeros(0, dtype=trait.complex_dtype),
        left_vectors=vectors(compute_left),
        right_vectors=vectors(compute_right),
    )
    result = Result(
        params=params,
        info={'routine': None, 'scalar': trait.name},
        timing=None,
        backend_name=EMPTY_BACKEND,
    )
    return EigenSolution(_result=result)
