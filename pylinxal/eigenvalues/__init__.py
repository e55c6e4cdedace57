"""
Eigenvalue problems.

Public API:
    eigen(a, compute_left=..., compute_right=...) -> EigenSolution
    eigen_into(a, ...) -> EigenSolution
    sym_eigen(a, uplo, compute_vectors=...) -> EigenSolution
    sym_eigen_into(a, uplo, ...) -> EigenSolution

Example:
    >>> from pylinxal.eigenvalues import eigen
    >>> eigen([[1.0, 2.0], [-2.0, 1.0]]).values
    array([1.+2.j, 1.-2.j])
"""

from pylinxal.eigenvalues.solution import EigenParams, EigenSolution
from pylinxal.eigenvalues.general import eigen, eigen_into
from pylinxal.eigenvalues.symmetric import sym_eigen, sym_eigen_into

__all__ = [
    "eigen",
    "eigen_into",
    "sym_eigen",
    "sym_eigen_into",
    "EigenSolution",
    "EigenParams",
]
