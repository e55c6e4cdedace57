"""
Singular value decomposition.

Public API:
    svd(a, vectors=SVDVectors.FULL, method='auto') -> SVDSolution
    svd_into(a, ...) -> SVDSolution
    singular_values(a) -> ndarray
"""

from pylinxal.svd.solution import SVDParams, SVDSolution, SVDVectors
from pylinxal.svd.solvers import (
    SVD_NORMAL_LIMIT,
    select_method,
    singular_values,
    svd,
    svd_into,
)

__all__ = [
    "svd",
    "svd_into",
    "singular_values",
    "select_method",
    "SVD_NORMAL_LIMIT",
    "SVDVectors",
    "SVDSolution",
    "SVDParams",
]
