"""
QR factorization A = Q R (?geqrf + ?orgqr / ?ungqr).

The factorization is kept in LAPACK's compact form: R in the upper
triangle of the factored matrix, and Q as a product of Householder
reflectors stored below the diagonal with their scalar factors in `tau`.
Q is only formed on request, and only as many columns as asked for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.boundary import prepare_matrix, call_info
from pylinxal.core.exceptions import DimensionError
from pylinxal.core.layout import adapt, is_empty
from pylinxal.core.native import NativeCall
from pylinxal.core.result import Result, EMPTY_BACKEND
from pylinxal.core.scalar import ScalarTrait, scalar_trait
from pylinxal.core.timing import Timer


@dataclass(frozen=True)
class QRParams:
    """
    Compact QR payload.

    raw: m x n matrix from ?geqrf (R on and above the diagonal, reflectors
        below it)
    tau: min(m, n) reflector scalars
    """
    raw: NDArray[Any]
    tau: NDArray[Any]


@dataclass
class QRFactors:
    """
    QR factors of an m x n matrix.

    Methods build the explicit factors:
        q(k)   first k columns of the m x m unitary Q (default min(m, n))
        r(k)   first k rows of the m x n upper trapezoidal R (default min(m, n))
    """
    _result: Result[QRParams]

    @property
    def raw(self) -> NDArray[Any]:
        return self._result.params.raw

    @property
    def tau(self) -> NDArray[Any]:
        return self._result.params.tau

    @property
    def shape(self) -> tuple[int, int]:
        return self.raw.shape

    @property
    def k(self) -> int:
        return min(self.shape)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def routine(self) -> str:
        return self._result.backend_name

    @property
    def result(self) -> Result[QRParams]:
        return self._result

    def q(self, k: int | None = None) -> NDArray[Any]:
        """
        First k columns of Q.

        Args:
            k: Number of columns, 0 <= k <= m. Defaults to min(m, n).
                Columns past n are completed from the identity, giving a
                full m x m unitary matrix for k = m.

        Raises:
            DimensionError: If k > m
        """
        m, n = self.shape
        if k is None:
            k = self.k
        if k < 0 or k > m:
            raise DimensionError(f"k: expected 0 <= k <= {m}, got {k}")

        trait = scalar_trait(self.raw.dtype)
        reflectors = min(k, n)
        tau = self.tau[:reflectors]

        if reflectors == 0:
            return np.eye(m, k, dtype=trait.dtype, order='F')

        work = np.zeros((m, k), dtype=trait.dtype, order='F')
        # columns past the reflectors are set to unit columns by the routine
        work[:, :reflectors] = self.raw[:, :reflectors]

        call = NativeCall(trait, 'qr_q')
        lwork, = call.workspace(work, tau)
        q, _work = call(work, tau, lwork=lwork, overwrite_a=1)
        return q

    def r(self, k: int | None = None) -> NDArray[Any]:
        """
        First k rows of R (upper trapezoidal, k x n).

        Raises:
            DimensionError: If k > m
        """
        m, _n = self.shape
        if k is None:
            k = self.k
        if k < 0 or k > m:
            raise DimensionError(f"k: expected 0 <= k <= {m}, got {k}")
        return np.triu(self.raw[:k, :])

    @property
    def rank(self) -> int:
        """
        Numerical rank from the diagonal of R.

        Counts |R[i, i]| > max(m, n) * eps * |R[0, 0]|. Column pivoting is
        not used, so this can underestimate the rank of ill-ordered inputs.
        """
        diag_r = np.abs(np.diag(self.raw))
        if len(diag_r) > 0 and diag_r[0] > 0:
            tol = max(self.shape) * np.finfo(diag_r.dtype).eps * diag_r[0]
            return int(np.sum(diag_r > tol))
        return 0

    def reconstruct(self) -> NDArray[Any]:
        """Q R with k = min(m, n); equals the factored matrix up to rounding."""
        return self.q() @ self.r()

    def __repr__(self) -> str:
        m, n = self.shape
        return f"QRFactors(shape=({m}, {n}), routine={self.routine!r})"


def qr(a: ArrayLike) -> QRFactors:
    """
    QR factorization of an m x n matrix. The input is not modified.

    Example:
        >>> f = qr(np.array([[3.0, 1.0], [4.0, 2.0]]))
        >>> np.allclose(f.reconstruct(), [[3.0, 1.0], [4.0, 2.0]])
        True
    """
    arr, trait = prepare_matrix(a, 'a')
    return _qr(arr, trait, consume=False)


def qr_into(a: ArrayLike) -> QRFactors:
    """Like qr(), but a column-major input is overwritten by the compact factors."""
    arr, trait = prepare_matrix(a, 'a')
    return _qr(arr, trait, consume=True)


def _qr(arr: NDArray[Any], trait: ScalarTrait, *, consume: bool) -> QRFactors:
    m, n = arr.shape

    if is_empty(arr):
        params = QRParams(
            raw=np.zeros((m, n), dtype=trait.dtype, order='F'),
            tau=np.zeros(0, dtype=trait.dtype),
        )
        return QRFactors(_result=Result(
            params=params,
            info={'routine': None, 'scalar': trait.name},
            timing=None,
            backend_name=EMPTY_BACKEND,
        ))

    timer = Timer()
    timer.start()

    with timer.section('adapt'):
        buffer = adapt(arr, trait, consume=consume)

    call = NativeCall(trait, 'qr')

    with timer.section('workspace_query'):
        lwork, = call.workspace(buffer.data)

    with timer.section('compute'):
        raw, tau, _work = call(buffer.data, lwork=lwork, overwrite_a=int(buffer.writable))

    timer.stop()

    result = Result(
        params=QRParams(raw=raw, tau=tau),
        info=call_info(call, buffer, lwork=lwork),
        timing=timer.result(),
        backend_name=call.name,
    )
    return QRFactors(_result=result)
