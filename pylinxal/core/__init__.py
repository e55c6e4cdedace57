"""
Core infrastructure for pylinxal.

Shared abstractions used by every operation package (eigenvalues, svd,
solve_linear, least_squares, factorization, generate).

Key components:
    scalar: ScalarTrait per supported dtype, LAPACK routine dispatch
    layout: column-major buffer adaptation and ownership
    errors: INFO status translation
    native: two-phase (workspace query, compute) native calls
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
"""

from pylinxal.core.result import Result
from pylinxal.core.scalar import (
    ScalarTrait,
    scalar_trait,
    FLOAT32,
    FLOAT64,
    COMPLEX64,
    COMPLEX128,
    SUPPORTED_DTYPES,
)
from pylinxal.core.layout import Ownership, AdaptedBuffer, adapt
from pylinxal.core.errors import ErrorFamily, translate_info
from pylinxal.core.types import Symmetric
from pylinxal.core.exceptions import (
    LinxalError,
    ValidationError,
    DimensionError,
    UnsupportedScalarError,
    LayoutError,
    NativeError,
    IllegalNativeArgumentError,
    ConvergenceError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    UnspecifiedNativeError,
)

__all__ = [
    # Result
    "Result",
    # Scalar dispatch
    "ScalarTrait",
    "scalar_trait",
    "FLOAT32",
    "FLOAT64",
    "COMPLEX64",
    "COMPLEX128",
    "SUPPORTED_DTYPES",
    # Layout
    "Ownership",
    "AdaptedBuffer",
    "adapt",
    # Status translation
    "ErrorFamily",
    "translate_info",
    # Options
    "Symmetric",
    # Exceptions
    "LinxalError",
    "ValidationError",
    "DimensionError",
    "UnsupportedScalarError",
    "LayoutError",
    "NativeError",
    "IllegalNativeArgumentError",
    "ConvergenceError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "UnspecifiedNativeError",
]
