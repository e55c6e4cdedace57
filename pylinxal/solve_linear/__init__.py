"""
Linear systems A x = b with square coefficient matrices.

Public API:
    solve_linear(a, b) -> ndarray              general matrix (?gesv)
    solve_linear_into(a, b) -> ndarray
    solve_symmetric(a, b, uplo) -> ndarray     symmetric/Hermitian (?sysv/?hesv)
    solve_symmetric_into(a, b, uplo) -> ndarray
"""

from pylinxal.solve_linear.general import solve_linear, solve_linear_into
from pylinxal.solve_linear.symmetric import solve_symmetric, solve_symmetric_into

__all__ = [
    "solve_linear",
    "solve_linear_into",
    "solve_symmetric",
    "solve_symmetric_into",
]
