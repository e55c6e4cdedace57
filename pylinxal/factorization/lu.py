"""
LU factorization with partial pivoting, A = P L U (?getrf).

For an m x n matrix with k = min(m, n):

    P  m x m permutation, kept in pivot form (MatrixPermutation)
    L  m x k lower trapezoidal with unit diagonal
    U  k x n upper trapezoidal

The factorization fails with SingularMatrixError when some U(i, i) is
exactly zero: inverse() and solve() would be meaningless, so a singular
matrix never produces an LUFactors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_matrix, call_info, empty_like_rhs
from pylinxal.core.exceptions import DimensionError, ValidationError
from pylinxal.core.layout import adapt, adapt_rhs, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.scalar import ScalarTrait, scalar_trait
from pylinxal.core.timing import Timer
from pylinxal.core.validation import check_array, check_vector_or_matrix, check_finite
from pylinxal.factorization.permutation import MatrixPermutation, check_pivoted_info


@dataclass(frozen=True)
class LUParams:
    """
    Compact LU payload.

    raw: m x n matrix holding L below the diagonal (unit diagonal implied)
        and U on and above it
    pivots: 0-based row interchanges, length min(m, n)
    """
    raw: NDArray[Any]
    pivots: NDArray[Any]


@dataclass
class LUFactors:
    """LU factors of an m x n matrix."""
    _result: Result[LUParams]

    @property
    def raw(self) -> NDArray[Any]:
        return self._result.params.raw

    @property
    def shape(self) -> tuple[int, int]:
        return self.raw.shape

    @property
    def k(self) -> int:
        return min(self.shape)

    @property
    def permutation(self) -> MatrixPermutation:
        return MatrixPermutation(self._result.params.pivots)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def routine(self) -> str:
        return self._result.backend_name

    @property
    def result(self) -> Result[LUParams]:
        return self._result

    def l(self) -> NDArray[Any]:
        """Unit lower trapezoidal factor L (m x k)."""
        m, _n = self.shape
        k = self.k
        return np.tril(self.raw[:, :k], -1) + np.eye(m, k, dtype=self.raw.dtype)

    def u(self) -> NDArray[Any]:
        """Upper trapezoidal factor U (k x n)."""
        return np.triu(self.raw[:self.k, :])

    def reconstruct(self) -> NDArray[Any]:
        """P L U, the original matrix up to rounding."""
        return self.permutation.permute(self.l() @ self.u())

    def _require_square(self, what: str) -> int:
        m, n = self.shape
        if m != n:
            raise DimensionError(f"{what} requires a square matrix, got shape ({m}, {n})")
        return n

    def inverse(self) -> NDArray[Any]:
        """
        Inverse of the original (square) matrix via ?getri.

        Raises:
            DimensionError: If the matrix is not square
        """
        n = self._require_square("inverse()")
        trait = scalar_trait(self.raw.dtype)
        if n == 0:
            return np.zeros((0, 0), dtype=trait.dtype)

        call = NativeCall(trait, 'lu_inverse')
        lwork, = call.workspace(n)
        inv, = call(self.raw, self._result.params.pivots, lwork=lwork, overwrite_lu=0)
        return inv

    def solve(self, b: ArrayLike) -> NDArray[Any]:
        """
        Solve A x = b with the stored factors (?getrs).

        Args:
            b: Right-hand side vector (n,) or matrix (n x k)

        Returns:
            Solution with the shape of b

        Raises:
            DimensionError: If the matrix is not square or b has the wrong rows
            ValidationError: If an ndarray b needs a wider dtype than the
                factors, or a non-array b holds complex values for real factors
        """
        n = self._require_square("solve()")
        trait = scalar_trait(self.raw.dtype)

        b_arr = check_array(b, 'b')
        check_vector_or_matrix(b_arr, 'b')
        check_finite(b_arr, 'b')
        if b_arr.shape[0] != n:
            raise DimensionError(f"b: expected {n} rows, got {b_arr.shape[0]}")
        if isinstance(b, np.ndarray):
            fits = np.result_type(b_arr, trait.dtype) == trait.dtype
        else:
            # Python scalars carry no precision; only a complex value is lost
            fits = trait.is_complex or not np.iscomplexobj(b_arr)
        if not fits:
            raise ValidationError(
                f"b: dtype {b_arr.dtype} does not fit the factors' dtype {trait.dtype}"
            )

        if n == 0 or is_empty(b_arr):
            return empty_like_rhs(b_arr, n, trait)

        b_buf = adapt_rhs(b_arr, trait, consume=False)
        call = NativeCall(trait, 'lu_solve')
        x, = call(self.raw, self._result.params.pivots, b_buf.data,
                  trans=0, overwrite_b=int(b_buf.writable))
        return x.reshape(n) if b_arr.ndim == 1 else x

    def __repr__(self) -> str:
        m, n = self.shape
        return f"LUFactors(shape=({m}, {n}), routine={self.routine!r})"


def lu(a: ArrayLike) -> LUFactors:
    """
    LU factorization with partial pivoting. The input is not modified.

    Raises:
        SingularMatrixError: If U(i, i) is exactly zero; `leading_minor` is i and
            `index` the input row pivoted into that position

    Example:
        >>> f = lu([[0.0, 1.0], [1.0, 0.0]])
        >>> f.permutation.as_matrix(2)
        array([[0., 1.],
               [1., 0.]])
    """
    arr, trait = prepare_matrix(a, 'a')
    return _lu(arr, trait, consume=False)


def lu_into(a: ArrayLike) -> LUFactors:
    """Like lu(), but a column-major input is overwritten by the factors."""
    arr, trait = prepare_matrix(a, 'a')
    return _lu(arr, trait, consume=True)


def _lu(arr: NDArray[Any], trait: ScalarTrait, *, consume: bool) -> LUFactors:
    m, n = arr.shape

    if is_empty(arr):
        params = LUParams(
            raw=np.zeros((m, n), dtype=trait.dtype, order='F'),
            pivots=np.zeros(0, dtype=np.int32),
        )
        return LUFactors(_result=Result(
            params=params,
            info={'routine': None, 'scalar': trait.name},
            timing=None,
            backend_name=EMPTY_BACKEND,
        ))

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        buffer = adapt(arr, trait, consume=consume)

    call = NativeCall(trait, 'lu')

    with timer.section('compute'):
        (raw, pivots), info = call.unchecked(buffer.data, overwrite_a=int(buffer.writable))
    check_pivoted_info(call, info, pivots, m)

    timer.stop()

    result = Result(
        params=LUParams(raw=raw, pivots=pivots),
        info=call_info(call, buffer),
        timing=timer.result(),
        backend_name=call.name,
    )
    return LUFactors(_result=result)
