"""
Linear least squares.

Public API:
    least_squares(a, b) -> LeastSquaresSolution
    least_squares_into(a, b) -> LeastSquaresSolution
    least_squares_full(a, b) / least_squares_full_into(a, b)
    least_squares_degenerate(a, b, rcond=...) / least_squares_degenerate_into(...)
"""

from pylinxal.least_squares.solution import LeastSquaresParams, LeastSquaresSolution
from pylinxal.least_squares.solvers import (
    least_squares,
    least_squares_into,
    least_squares_full,
    least_squares_full_into,
    least_squares_degenerate,
    least_squares_degenerate_into,
)

__all__ = [
    "least_squares",
    "least_squares_into",
    "least_squares_full",
    "least_squares_full_into",
    "least_squares_degenerate",
    "least_squares_degenerate_into",
    "LeastSquaresSolution",
    "LeastSquaresParams",
]
