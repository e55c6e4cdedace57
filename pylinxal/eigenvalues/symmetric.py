"""
Eigenvalues and eigenvectors of symmetric (real) or Hermitian (complex)
square matrices via ?syev / ?heev.

Only the triangle selected by `uplo` is read; the other triangle is
ignored. Eigenvalues are real and returned in ascending order.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_matrix, call_info
from pylinxal.core.exceptions import ValidationError
from pylinxal.core.layout import adapt, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.scalar import ScalarTrait
from pylinxal.core.timing import Timer
from pylinxal.core.types import Symmetric
from pylinxal.properties import is_symmetric
from pylinxal.eigenvalues.solution import EigenParams, EigenSolution


def sym_eigen(
    a: ArrayLike,
    uplo: Symmetric = Symmetric.UPPER,
    *,
    compute_vectors: bool = False,
    check_symmetric: bool = False,
) -> EigenSolution:
    """
    Eigen-decomposition of a symmetric/Hermitian matrix.

    Args:
        a: Square matrix (n x n). Only the `uplo` triangle is referenced.
        uplo: Triangle holding the matrix
        compute_vectors: Also compute orthonormal eigenvectors (stored in
            right_vectors, one per column)
        check_symmetric: Verify the whole matrix is symmetric/Hermitian
            before calling the routine

    Returns:
        EigenSolution with real ascending eigenvalues

    Raises:
        DimensionError: If a is not square
        ValidationError: If check_symmetric is set and a is not symmetric
        ConvergenceError: If the tridiagonal QR iteration failed
    """
    arr, trait = prepare_matrix(a, 'a', square=True)
    if check_symmetric:
        _require_symmetric(arr, trait)
    return _sym_eigen(arr, trait, uplo, compute_vectors, consume=False)


def sym_eigen_into(
    a: ArrayLike,
    uplo: Symmetric = Symmetric.UPPER,
    *,
    compute_vectors: bool = False,
) -> EigenSolution:
    """
    Like sym_eigen(), but consumes the input.

    When `a` is a column-major array of a supported dtype and vectors are
    requested, the eigenvectors are written into `a` itself and
    right_vectors aliases it. Otherwise `a` is destroyed.
    """
    arr, trait = prepare_matrix(a, 'a', square=True)
    return _sym_eigen(arr, trait, uplo, compute_vectors, consume=True)


def _require_symmetric(arr: NDArray[Any], trait: ScalarTrait) -> None:
    if not is_symmetric(arr):
        kind = "Hermitian" if trait.is_complex else "symmetric"
        raise ValidationError(f"a: matrix is not {kind}")


def _sym_eigen(
    arr: NDArray[Any],
    trait: ScalarTrait,
    uplo: Symmetric,
    compute_vectors: bool,
    *,
    consume: bool,
) -> EigenSolution:
    n = arr.shape[0]

    if is_empty(arr):
        params = EigenParams(
            values=np.zeros(0, dtype=trait.real_dtype),
            left_vectors=None,
            right_vectors=np.zeros((0, 0), dtype=trait.dtype) if compute_vectors else None,
        )
        return EigenSolution(_result=Result(
            params=params,
            info={'routine': None, 'scalar': trait.name},
            timing=None,
            backend_name=EMPTY_BACKEND,
        ))

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        buffer = adapt(arr, trait, consume=consume)

    call = NativeCall(trait, 'sym_eigen')

    with timer.section('workspace_query'):
        lwork, = call.workspace(n, lower=uplo.lower)

    with timer.section('compute'):
        values, vectors = call(
            buffer.data,
            compute_v=int(compute_vectors),
            lower=uplo.lower,
            lwork=lwork,
            overwrite_a=int(buffer.writable),
        )

    timer.stop()

    params = EigenParams(
        values=values,
        left_vectors=None,
        right_vectors=vectors if compute_vectors else None,
    )
    result = Result(
        params=params,
        info=call_info(call, buffer, lwork=lwork, uplo=uplo.value),
        timing=timer.result(),
        backend_name=call.name,
    )
    return EigenSolution(_result=result)
