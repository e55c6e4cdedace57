"""
Scalar trait: per-dtype capability descriptors.

Every supported element type has exactly one immutable ScalarTrait,
built once at import time into a static table keyed by dtype. An
operation resolves the trait once at its boundary and from then on
talks only to the trait: which LAPACK routine to call, which dtype the
outputs have, how to build complex values from split real/imaginary
outputs. Nothing downstream inspects the dtype again.

    float32    -> 's' routines, real part float32
    float64    -> 'd' routines, real part float64
    complex64  -> 'c' routines, real part float32
    complex128 -> 'z' routines, real part float64

Any other dtype is rejected with UnsupportedScalarError before any work
happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import lapack

from pylinxal.core import tolerances
from pylinxal.core.errors import ErrorFamily
from pylinxal.core.exceptions import UnsupportedScalarError
from pylinxal.core.tolerances import ToleranceTier


class Workspace(Enum):
    """How a routine family sizes its workspace."""
    NONE = 'none'      # no workspace argument
    QUERY = 'query'    # companion '<routine>_lwork' reports the size
    SELF = 'self'      # the routine itself, called with lwork=-1


@dataclass(frozen=True)
class RoutineFamily:
    """
    LAPACK routine family for one logical operation.

    Attributes:
        real: Routine stem for real scalars (e.g. 'syev')
        complex: Routine stem for complex scalars (e.g. 'heev')
        errors: How positive status codes are interpreted
        workspace: Workspace sizing protocol
    """
    real: str
    complex: str
    errors: ErrorFamily
    workspace: Workspace


# Logical operation -> routine family. This is the fixed native contract;
# argument order and INFO semantics are defined by LAPACK.
ROUTINE_FAMILIES: dict[str, RoutineFamily] = {
    'eigen': RoutineFamily('geev', 'geev', ErrorFamily.ITERATIVE, Workspace.QUERY),
    'sym_eigen': RoutineFamily('syev', 'heev', ErrorFamily.ITERATIVE, Workspace.QUERY),
    'svd': RoutineFamily('gesdd', 'gesdd', ErrorFamily.ITERATIVE, Workspace.QUERY),
    'svd_normal': RoutineFamily('gesvd', 'gesvd', ErrorFamily.ITERATIVE, Workspace.QUERY),
    'solve': RoutineFamily('gesv', 'gesv', ErrorFamily.FACTORIZATION, Workspace.NONE),
    'sym_solve': RoutineFamily('sysv', 'hesv', ErrorFamily.FACTORIZATION, Workspace.QUERY),
    'lstsq': RoutineFamily('gels', 'gels', ErrorFamily.RANK, Workspace.QUERY),
    'lstsq_degenerate': RoutineFamily('gelsd', 'gelsd', ErrorFamily.ITERATIVE, Workspace.QUERY),
    'qr': RoutineFamily('geqrf', 'geqrf', ErrorFamily.DIRECT, Workspace.SELF),
    'qr_q': RoutineFamily('orgqr', 'ungqr', ErrorFamily.DIRECT, Workspace.SELF),
    'lu': RoutineFamily('getrf', 'getrf', ErrorFamily.FACTORIZATION, Workspace.NONE),
    'lu_inverse': RoutineFamily('getri', 'getri', ErrorFamily.FACTORIZATION, Workspace.QUERY),
    'lu_solve': RoutineFamily('getrs', 'getrs', ErrorFamily.FACTORIZATION, Workspace.NONE),
    'cholesky': RoutineFamily('potrf', 'potrf', ErrorFamily.POSITIVE_DEFINITE, Workspace.NONE),
}


@dataclass(frozen=True)
class ScalarTrait:
    """
    Capability descriptor for one element type.

    Attributes:
        name: Scalar type name ('float32', 'float64', 'complex64', 'complex128')
        dtype: Element dtype
        real_dtype: dtype of the real part (same as dtype for real scalars)
        complex_dtype: Complex dtype of matching precision
        prefix: LAPACK precision prefix ('s', 'd', 'c', 'z')
        tolerance: Tolerance tier for comparisons
    """
    name: str
    dtype: np.dtype
    real_dtype: np.dtype
    complex_dtype: np.dtype
    prefix: str
    tolerance: ToleranceTier

    @property
    def is_complex(self) -> bool:
        return self.dtype.kind == 'c'

    @property
    def eps(self) -> float:
        """Machine epsilon of the real part."""
        return float(np.finfo(self.real_dtype).eps)

    @property
    def tol(self) -> float:
        """Default absolute tolerance, scaled by matrix magnitude in property checks."""
        return self.tolerance.atol

    def routine_name(self, operation: str) -> str:
        """
        Return the concrete LAPACK routine name for a logical operation.

        Example:
            FLOAT64.routine_name('sym_eigen') -> 'dsyev'
            COMPLEX128.routine_name('sym_eigen') -> 'zheev'
        """
        family = ROUTINE_FAMILIES[operation]
        stem = family.complex if self.is_complex else family.real
        return self.prefix + stem

    def routine(self, operation: str, *, workspace: bool = False) -> Callable[..., Any]:
        """
        Return the LAPACK entry point for a logical operation.

        Args:
            operation: Logical operation name (key of ROUTINE_FAMILIES)
            workspace: If True, return the '<routine>_lwork' size query
        """
        name = self.routine_name(operation)
        if workspace:
            name += '_lwork'
        return getattr(lapack, name)

    def to_native(self, values: ArrayLike) -> NDArray[Any]:
        """Cast values to the element type the routine expects."""
        return np.asarray(values, dtype=self.dtype)

    def to_real(self, values: ArrayLike) -> NDArray[Any]:
        """Cast values to the real-part type."""
        return np.asarray(values, dtype=self.real_dtype)

    def combine(self, real: ArrayLike, imag: ArrayLike) -> NDArray[Any]:
        """Build complex values from a split pair of real/imaginary arrays."""
        real = np.asarray(real)
        out = np.empty(real.shape, dtype=self.complex_dtype)
        out.real = real
        out.imag = imag
        return out

    def conj(self, values: NDArray[Any]) -> NDArray[Any]:
        """Conjugate values; identity for real scalars."""
        if self.is_complex:
            return np.conj(values)
        return values


FLOAT32 = ScalarTrait(
    name='float32',
    dtype=np.dtype(np.float32),
    real_dtype=np.dtype(np.float32),
    complex_dtype=np.dtype(np.complex64),
    prefix='s',
    tolerance=tolerances.FLOAT32,
)

FLOAT64 = ScalarTrait(
    name='float64',
    dtype=np.dtype(np.float64),
    real_dtype=np.dtype(np.float64),
    complex_dtype=np.dtype(np.complex128),
    prefix='d',
    tolerance=tolerances.FLOAT64,
)

COMPLEX64 = ScalarTrait(
    name='complex64',
    dtype=np.dtype(np.complex64),
    real_dtype=np.dtype(np.float32),
    complex_dtype=np.dtype(np.complex64),
    prefix='c',
    tolerance=tolerances.COMPLEX64,
)

COMPLEX128 = ScalarTrait(
    name='complex128',
    dtype=np.dtype(np.complex128),
    real_dtype=np.dtype(np.float64),
    complex_dtype=np.dtype(np.complex128),
    prefix='z',
    tolerance=tolerances.COMPLEX128,
)

_TRAITS: dict[np.dtype, ScalarTrait] = {
    trait.dtype: trait for trait in (FLOAT32, FLOAT64, COMPLEX64, COMPLEX128)
}

SUPPORTED_DTYPES = tuple(_TRAITS)


def scalar_trait(dtype: Any) -> ScalarTrait:
    """
    Resolve the scalar trait for a dtype.

    Args:
        dtype: Anything np.dtype() accepts

    Returns:
        The ScalarTrait for that dtype

    Raises:
        UnsupportedScalarError: If the dtype has no routine family
    """
    try:
        key = np.dtype(dtype)
    except TypeError as e:
        raise UnsupportedScalarError(f"not a dtype: {dtype!r}", dtype=dtype) from e
    trait = _TRAITS.get(key)
    if trait is None:
        supported = ", ".join(d.name for d in SUPPORTED_DTYPES)
        raise UnsupportedScalarError(
            f"unsupported scalar type {key.name}; expected one of {supported}",
            dtype=key,
        )
    return trait


def common_trait(*arrays: NDArray[Any]) -> ScalarTrait:
    """
    Resolve one trait for several arrays (coefficient matrix and RHS).

    The element type is the numpy promotion of the inputs' dtypes.
    """
    return scalar_trait(np.result_type(*arrays))
