"""
Random matrix generation.

Public API:
    random_general(m, n, rng, ...) -> ndarray
    random_symmetric(n, rng, ...) -> ndarray
    random_positive_definite(n, rng, ...) -> ndarray
    random_unitary(n, rng, ...) -> ndarray
    generate(GenerateParams, rng) -> GeneratedMatrix

Example:
    >>> import numpy as np
    >>> from pylinxal.generate import random_unitary
    >>> q = random_unitary(4, np.random.default_rng(42), dtype=np.complex128)
"""

from pylinxal.generate.design import GenerateParams, MatrixKind, Distribution
from pylinxal.generate.solution import GeneratedMatrix
from pylinxal.generate.solvers import (
    DEFAULT_SHIFT_FACTOR,
    generate,
    random_general,
    random_symmetric,
    random_positive_definite,
    random_unitary,
)

__all__ = [
    "random_general",
    "random_symmetric",
    "random_positive_definite",
    "random_unitary",
    "generate",
    "GenerateParams",
    "GeneratedMatrix",
    "MatrixKind",
    "Distribution",
    "DEFAULT_SHIFT_FACTOR",
]
