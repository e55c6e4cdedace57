"""
Translation of native status codes into pylinxal exceptions.

All LAPACK drivers report through an INFO integer:

    INFO = 0    success
    INFO = -i   the i-th argument had an illegal value
    INFO = +i   algorithm-specific failure

The meaning of a positive code depends on the routine family, so the
translator is told which family produced it. The translator returns an
exception instance (or None) rather than raising, so callers decide when
to raise and partial outputs can be discarded first.
"""

from enum import Enum

from pylinxal.core.exceptions import (
    NativeError,
    IllegalNativeArgumentError,
    ConvergenceError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    UnspecifiedNativeError,
)


class ErrorFamily(Enum):
    """Interpretation of positive INFO codes."""

    # geev, syev/heev, gesdd, gesvd, gelsd: refinement did not converge
    ITERATIVE = 'iterative'

    # gesv, getrf, getri, getrs, sysv/hesv: U(i,i) or D(i,i) is exactly zero
    FACTORIZATION = 'factorization'

    # potrf: leading minor of order i is not positive
    POSITIVE_DEFINITE = 'positive_definite'

    # gels: i-th diagonal of the triangular factor is zero, A not full rank
    RANK = 'rank'

    # geqrf, orgqr/ungqr: no positive codes are defined
    DIRECT = 'direct'


def translate_info(info: int, family: ErrorFamily, routine: str) -> NativeError | None:
    """
    Map a routine's INFO value to an exception instance.

    Args:
        info: Raw INFO value returned by the routine
        family: Error family of the routine
        routine: Routine name, for diagnostics

    Returns:
        None if info == 0, otherwise the exception describing the failure.
        Never raises; unknown codes become UnspecifiedNativeError.
    """
    info = int(info)

    if info == 0:
        return None

    if info < 0:
        return IllegalNativeArgumentError(
            f"{routine}: argument {-info} had an illegal value",
            info, routine,
        )

    if family is ErrorFamily.ITERATIVE:
        return ConvergenceError(
            f"{routine}: failed to converge (info={info})",
            info, routine,
        )

    if family is ErrorFamily.FACTORIZATION:
        return SingularMatrixError(
            f"{routine}: matrix is singular, diagonal element {info} "
            f"of the factor is exactly zero",
            info, routine,
        )

    if family is ErrorFamily.POSITIVE_DEFINITE:
        return NotPositiveDefiniteError(
            f"{routine}: leading minor of order {info} is not positive",
            info, routine,
        )

    if family is ErrorFamily.RANK:
        return SingularMatrixError(
            f"{routine}: matrix does not have full rank, diagonal element "
            f"{info} of the triangular factor is zero",
            info, routine,
        )

    return UnspecifiedNativeError(
        f"{routine}: unrecognized status code {info}",
        info, routine,
    )


def check_info(info: int, family: ErrorFamily, routine: str) -> None:
    """
    Raise the translated exception if INFO reports a failure.

    Raises:
        NativeError: Subclass matching the family and code
    """
    error = translate_info(info, family, routine)
    if error is not None:
        raise error
