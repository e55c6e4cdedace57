"""
pylinxal: dense linear algebra on numpy arrays, backed by LAPACK.

Every operation accepts float32, float64, complex64 and complex128 arrays
in any memory layout and dispatches to the matching LAPACK routine
family. Borrowing entry points never modify their inputs; the ``*_into``
variants let the routine work in the caller's column-major buffer.

Submodules:
    eigenvalues: general and symmetric eigenvalue problems
    svd: singular value decomposition
    solve_linear: square linear systems
    least_squares: over- and underdetermined systems
    factorization: QR, LU, Cholesky
    generate: random matrices with controlled structure
    properties: structural predicates (symmetry, bandwidth, ...)
"""

__version__ = "0.1.0"

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
from pylinxal.eigenvalues import eigen, eigen_into, sym_eigen, sym_eigen_into
from pylinxal.svd import SVDVectors, singular_values, svd, svd_into
from pylinxal.solve_linear import (
    solve_linear,
    solve_linear_into,
    solve_symmetric,
    solve_symmetric_into,
)
from pylinxal.least_squares import (
    least_squares,
    least_squares_into,
    least_squares_full,
    least_squares_full_into,
    least_squares_degenerate,
    least_squares_degenerate_into,
)
from pylinxal.factorization import qr, qr_into, lu, lu_into, cholesky, cholesky_into
from pylinxal.generate import (
    random_general,
    random_symmetric,
    random_positive_definite,
    random_unitary,
)
from pylinxal import properties

__all__ = [
    "__version__",
    "Symmetric",
    "SVDVectors",
    # Operations
    "eigen",
    "eigen_into",
    "sym_eigen",
    "sym_eigen_into",
    "svd",
    "svd_into",
    "singular_values",
    "solve_linear",
    "solve_linear_into",
    "solve_symmetric",
    "solve_symmetric_into",
    "least_squares",
    "least_squares_into",
    "least_squares_full",
    "least_squares_full_into",
    "least_squares_degenerate",
    "least_squares_degenerate_into",
    "qr",
    "qr_into",
    "lu",
    "lu_into",
    "cholesky",
    "cholesky_into",
    # Generators
    "random_general",
    "random_symmetric",
    "random_positive_definite",
    "random_unitary",
    "properties",
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
