"""
Exception hierarchy for pylinxal.

All exceptions inherit from LinxalError to allow catching any
library-specific error. The taxonomy is closed:

    ValidationError            shape/option precondition violated before
                               any native call (InvalidArgument)
      DimensionError           array dimensions wrong or inconsistent
      UnsupportedScalarError   dtype has no LAPACK routine family
    LayoutError                buffer could not be adapted to column-major
    NativeError                a LAPACK routine reported a nonzero status
      IllegalNativeArgumentError   negative status: marshalling bug
      ConvergenceError             iterative refinement did not converge
      SingularMatrixError          exactly singular system or factor
        NotPositiveDefiniteError   Cholesky found a non-positive minor
      UnspecifiedNativeError       status code the family does not define

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Native errors always carry the raw status code and routine name
    - Never catch and re-raise with less information
"""


class LinxalError(Exception):
    """Base exception for all pylinxal errors."""
    pass


class ValidationError(LinxalError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks. These are
    caught locally and never reach a native routine.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions (e.g. a
    non-square coefficient matrix) or when multiple arrays have
    inconsistent shapes.
    """
    pass


class UnsupportedScalarError(ValidationError):
    """
    Element type has no LAPACK routine family.

    Only float32, float64, complex64 and complex128 are supported.

    Attributes:
        dtype: The rejected dtype
    """

    def __init__(self, message: str, dtype: object = None):
        super().__init__(message)
        self.dtype = dtype


class LayoutError(LinxalError):
    """
    Array could not be adapted to the column-major native layout.

    Raised when a dimension or leading-dimension computation does not fit
    the 32-bit integers LAPACK uses for sizes.

    Attributes:
        shape: Shape of the array that could not be adapted
    """

    def __init__(self, message: str, shape: tuple[int, ...] | None = None):
        super().__init__(message)
        self.shape = shape


class NativeError(LinxalError):
    """
    A native routine reported a nonzero status.

    Attributes:
        raw_code: The routine's INFO value, unmodified
        routine: Name of the LAPACK routine that failed (e.g. 'dgesv')
    """

    def __init__(self, message: str, raw_code: int, routine: str | None = None):
        super().__init__(message)
        self.raw_code = raw_code
        self.routine = routine


class IllegalNativeArgumentError(NativeError):
    """
    A native routine rejected one of its arguments.

    Indicates a bug in argument marshalling, not a user error: all
    preconditions are validated before the call.

    Attributes:
        position: 1-based position of the offending argument
    """

    def __init__(self, message: str, raw_code: int, routine: str | None = None):
        super().__init__(message, raw_code, routine)
        self.position = -raw_code


class ConvergenceError(NativeError):
    """
    Iterative algorithm failed to converge.

    Raised when eigenvalue or SVD refinement stops before converging.
    Retrying the same call is deterministic and would fail again.

    Attributes:
        iterations: Count reported by the routine (failed iteration index or
            number of unconverged off-diagonal elements, per routine)
    """

    def __init__(self, message: str, raw_code: int, routine: str | None = None):
        super().__init__(message, raw_code, routine)
        self.iterations = raw_code


class SingularMatrixError(NativeError):
    """
    Matrix is exactly or numerically singular.

    Attributes:
        leading_minor: 1-based index reported by the routine (the diagonal
            element of the factor that is exactly zero)
        index: 0-based row/column index of that element. Solvers with row
            pivoting report the row of the input matrix instead
        rank: Numerical rank, if known
    """

    def __init__(
        self,
        message: str,
        raw_code: int,
        routine: str | None = None,
        rank: int | None = None,
    ):
        super().__init__(message, raw_code, routine)
        self.leading_minor = raw_code
        self.index = raw_code - 1
        self.rank = rank


class NotPositiveDefiniteError(SingularMatrixError):
    """
    Matrix is not positive definite.

    Raised by Cholesky when the leading minor of order ``leading_minor``
    is not positive, so the factorization could not be completed.
    """
    pass


class UnspecifiedNativeError(NativeError):
    """
    A native routine returned a status code its family does not define.
    """
    pass
