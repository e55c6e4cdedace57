"""
Eigenvalue solution types.

Contains the parameter payload and user-facing solution wrapper shared by
the general and symmetric eigenvalue problems.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinxal.core.result import Result


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for an eigenvalue problem.

    values: eigenvalues in the order the routine produced them. Complex for
        general problems, real and ascending for symmetric ones.
    left_vectors: columns u_j with u_j^H A = lambda_j u_j^H, or None
    right_vectors: columns v_j with A v_j = lambda_j v_j, or None.
        Symmetric problems store their eigenvectors here.
    """
    values: NDArray[Any]
    left_vectors: NDArray[Any] | None
    right_vectors: NDArray[Any] | None


@dataclass
class EigenSolution:
    """
    User-facing eigenvalue results.

    Wraps the Result envelope and exposes values and vectors.
    """
    _result: Result[EigenParams]

    @property
    def values(self) -> NDArray[Any]:
        return self._result.params.values

    @property
    def left_vectors(self) -> NDArray[Any] | None:
        return self._result.params.left_vectors

    @property
    def right_vectors(self) -> NDArray[Any] | None:
        return self._result.params.right_vectors

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
    def result(self) -> Result[EigenParams]:
        return self._result

    def magnitudes(self) -> NDArray[np.floating[Any]]:
        """Absolute values of the eigenvalues, in solution order."""
        return np.abs(self.values)

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={len(self.values)}, routine={self.routine!r}, "
            f"left={self.left_vectors is not None}, "
            f"right={self.right_vectors is not None})"
        )
