"""
Matrix property predicates.

Stateless checks on dense matrices: symmetry, diagonality, unitarity,
triangularity and bandwidth. They are public utilities and also serve as
precondition assertions inside the solvers (`check_symmetric=True`).

Every predicate takes an optional tolerance. When omitted, comparisons use
default_tol(a): the scalar type's tolerance scaled by the largest entry
magnitude, so the checks are invariant to the overall scale of the matrix.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.scalar import scalar_trait
from pylinxal.core.types import Symmetric
from pylinxal.core.validation import check_array, check_2d


def _matrix(a: ArrayLike) -> NDArray[Any]:
    arr = check_array(a, 'a')
    check_2d(arr, 'a')
    return arr


def conj_t(a: ArrayLike) -> NDArray[Any]:
    """Conjugate transpose; the plain transpose for real matrices."""
    arr = np.asarray(a)
    if np.iscomplexobj(arr):
        return arr.conj().T
    return arr.T


def is_square(a: ArrayLike) -> bool:
    arr = np.asarray(a)
    return arr.ndim == 2 and arr.shape[0] == arr.shape[1]


def default_tol(a: ArrayLike) -> float:
    """
    Default comparison tolerance for a matrix.

    The scalar type's tolerance times max |a_ij|. Zero for empty matrices.
    """
    arr = _matrix(a)
    if arr.size == 0:
        return 0.0
    trait = scalar_trait(arr.dtype)
    return trait.tol * float(np.max(np.abs(arr)))


def is_symmetric(a: ArrayLike, tol: float | None = None) -> bool:
    """
    True iff `a` is symmetric (real) or Hermitian (complex).

    Checks |a[i, j] - conj(a[j, i])| <= tol for all i, j. Non-square
    matrices are never symmetric.
    """
    arr = _matrix(a)
    if not is_square(arr):
        return False
    if tol is None:
        tol = default_tol(arr)
    return bool(np.all(np.abs(arr - conj_t(arr)) <= tol))


def is_diagonal(a: ArrayLike, tol: float | None = None) -> bool:
    """True iff every off-diagonal entry is within tol of zero. Need not be square."""
    arr = _matrix(a)
    if tol is None:
        tol = default_tol(arr)
    off = np.abs(arr)
    off[np.eye(*arr.shape, dtype=bool)] = 0
    return bool(np.all(off <= tol))


def is_identity(a: ArrayLike, tol: float | None = None) -> bool:
    """
    True iff `a` is square and within tol of the identity.

    Unlike the other predicates, the default tolerance is not scaled by
    the matrix magnitude: the identity has a fixed scale.
    """
    arr = _matrix(a)
    if not is_square(arr):
        return False
    if tol is None:
        tol = scalar_trait(arr.dtype).tol
    return bool(np.all(np.abs(arr - np.eye(arr.shape[0])) <= tol))


def is_unitary(a: ArrayLike, tol: float | None = None) -> bool:
    """
    True iff `a` is unitary (orthogonal for real input): U U^H = I.
    """
    arr = _matrix(a)
    if not is_square(arr):
        return False
    if tol is None:
        tol = default_tol(arr)
    return is_identity(arr @ conj_t(arr), tol)


def lower_bandwidth(a: ArrayLike, tol: float | None = None) -> int:
    """
    Number of nonzero subdiagonals: the largest i - j with |a[i, j]| > tol.

    Zero for upper-triangular and empty matrices.
    """
    arr = _matrix(a)
    if arr.size == 0:
        return 0
    if tol is None:
        tol = default_tol(arr)
    rows, cols = np.nonzero(np.abs(arr) > tol)
    if rows.size == 0:
        return 0
    return int(max(0, np.max(rows - cols)))


def upper_bandwidth(a: ArrayLike, tol: float | None = None) -> int:
    """
    Number of nonzero superdiagonals: the largest j - i with |a[i, j]| > tol.

    Zero for lower-triangular and empty matrices.
    """
    arr = _matrix(a)
    if arr.size == 0:
        return 0
    if tol is None:
        tol = default_tol(arr)
    rows, cols = np.nonzero(np.abs(arr) > tol)
    if rows.size == 0:
        return 0
    return int(max(0, np.max(cols - rows)))


def bandwidth(a: ArrayLike, tol: float | None = None) -> int:
    """
    Largest |i - j| over all entries with |a[i, j]| > tol.

    Computed in a single pass over the nonzero pattern.

    Example:
        >>> bandwidth([[1, 2, 0], [0, 1, 0], [0, 3, 1]])
        1
    """
    arr = _matrix(a)
    if arr.size == 0:
        return 0
    if tol is None:
        tol = default_tol(arr)
    rows, cols = np.nonzero(np.abs(arr) > tol)
    if rows.size == 0:
        return 0
    return int(np.max(np.abs(rows - cols)))


def is_triangular(
    a: ArrayLike,
    uplo: Symmetric = Symmetric.UPPER,
    tol: float | None = None,
) -> bool:
    """
    True iff `a` is upper (or lower) triangular / trapezoidal.

    Args:
        a: Matrix, need not be square
        uplo: UPPER requires zero lower bandwidth, LOWER zero upper bandwidth
        tol: Comparison tolerance for zero
    """
    if uplo is Symmetric.UPPER:
        return lower_bandwidth(a, tol) == 0
    return upper_bandwidth(a, tol) == 0
