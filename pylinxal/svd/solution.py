"""
Singular value decomposition solution types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinxal.core.result import Result


class SVDVectors(Enum):
    """
    Which singular vectors to compute.

    FULL:      U is m x m, V^H is n x n
    ECONOMIC:  U is m x k, V^H is k x n, k = min(m, n)
    NONE:      singular values only
    """
    FULL = 'full'
    ECONOMIC = 'economic'
    NONE = 'none'

    @property
    def compute_uv(self) -> int:
        return 0 if self is SVDVectors.NONE else 1

    @property
    def full_matrices(self) -> int:
        return 1 if self is SVDVectors.FULL else 0


@dataclass(frozen=True)
class SVDParams:
    """
    Parameter payload for A = U diag(s) V^H.

    values: singular values, real, non-negative, descending
    left_vectors: U, or None
    right_vectors_h: V^H (rows are right singular vectors), or None
    """
    values: NDArray[np.floating[Any]]
    left_vectors: NDArray[Any] | None
    right_vectors_h: NDArray[Any] | None


@dataclass
class SVDSolution:
    """User-facing SVD results."""
    _result: Result[SVDParams]
    _vectors: SVDVectors

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.values

    @property
    def left_vectors(self) -> NDArray[Any] | None:
        return self._result.params.left_vectors

    @property
    def right_vectors_h(self) -> NDArray[Any] | None:
        return self._result.params.right_vectors_h

    @property
    def vectors(self) -> SVDVectors:
        return self._vectors

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
    def result(self) -> Result[SVDParams]:
        return self._result

    def rank(self, tol: float | None = None) -> int:
        """
        Numerical rank: number of singular values above tol.

        Default tol is max(m, n) * eps * s_max, the usual LAPACK cutoff.
        """
        s = self.values
        if s.size == 0:
            return 0
        if tol is None:
            m, n = self._result.info['shape']
            tol = max(m, n) * np.finfo(s.dtype).eps * s[0]
        return int(np.sum(s > tol))

    def reconstruct(self) -> NDArray[Any]:
        """
        U diag(s) V^H, truncated to the k = min(m, n) leading terms.

        Raises:
            ValueError: If singular vectors were not computed
        """
        u, vt = self.left_vectors, self.right_vectors_h
        if u is None or vt is None:
            raise ValueError("reconstruct() requires singular vectors")
        k = self.values.shape[0]
        return (u[:, :k] * self.values) @ vt[:k, :]

    def __repr__(self) -> str:
        m, n = self._result.info['shape']
        return (
            f"SVDSolution(shape=({m}, {n}), routine={self.routine!r}, "
            f"vectors={self._vectors.value!r})"
        )
