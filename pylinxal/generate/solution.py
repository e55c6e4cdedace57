"""
Generated matrix container.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinxal.generate.design import GenerateParams


@dataclass(frozen=True)
class GeneratedMatrix:
    """
    A generated matrix together with the spectrum it was built from.

    Attributes:
        matrix: The generated m x n matrix
        values: Imposed singular values (GENERAL) or eigenvalues (SYMMETRIC,
            POSITIVE), padded with zeros to min(m, n); None when the matrix
            was drawn without an imposed spectrum
        params: The request that produced it
    """
    matrix: NDArray[Any]
    values: NDArray[np.floating[Any]] | None
    params: GenerateParams

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape
