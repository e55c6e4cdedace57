"""
Least-squares solution types.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinxal.core.result import Result


@dataclass(frozen=True)
class LeastSquaresParams:
    """
    Parameter payload for min ||A x - b||.

    solution: x with n rows (1D if b was 1D)
    rank: effective rank of A (min(m, n) for the full-rank driver)
    singular_values: singular values of A from the rank-revealing driver,
        None for the full-rank driver
    residuals: per-column residual sum of squares when m > n and A has full
        column rank, otherwise None
    """
    solution: NDArray[Any]
    rank: int
    singular_values: NDArray[np.floating[Any]] | None
    residuals: NDArray[np.floating[Any]] | None


@dataclass
class LeastSquaresSolution:
    """User-facing least-squares results."""
    _result: Result[LeastSquaresParams]

    @property
    def solution(self) -> NDArray[Any]:
        return self._result.params.solution

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def singular_values(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.singular_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.residuals

    @property
    def degenerate(self) -> bool:
        """True if the rank-revealing (minimum-norm) driver produced this."""
        return self._result.info.get('driver') == 'degenerate'

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

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
    def result(self) -> Result[LeastSquaresParams]:
        return self._result

    def __repr__(self) -> str:
        return (
            f"LeastSquaresSolution(rank={self.rank}, routine={self.routine!r}, "
            f"degenerate={self.degenerate})"
        )
