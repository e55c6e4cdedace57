"""
Matrix factorizations.

Public API:
    qr(a) / qr_into(a) -> QRFactors
    lu(a) / lu_into(a) -> LUFactors
    cholesky(a, uplo) / cholesky_into(a, uplo) -> ndarray
"""

from pylinxal.factorization.permutation import MatrixPermutation
from pylinxal.factorization.qr import QRFactors, QRParams, qr, qr_into
from pylinxal.factorization.lu import LUFactors, LUParams, lu, lu_into
from pylinxal.factorization.cholesky import cholesky, cholesky_into

__all__ = [
    "qr",
    "qr_into",
    "lu",
    "lu_into",
    "cholesky",
    "cholesky_into",
    "QRFactors",
    "QRParams",
    "LUFactors",
    "LUParams",
    "MatrixPermutation",
]
