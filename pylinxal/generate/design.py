"""
Random matrix generation parameters.

GenerateParams describes one request: which structure to produce, its
shape and element type, the entry distribution, an optional band limit,
and an optional spectrum or rank to impose. validate() checks the whole request up front, so a
generator never fails half way for a reason the caller could have known.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Sequence
import numpy as np
from numpy.typing import NDArray

from pylinxal.core.exceptions import DimensionError, ValidationError
from pylinxal.core.scalar import ScalarTrait, scalar_trait
from pylinxal.core.validation import check_positive_int


Distribution = Literal['normal', 'uniform']

DISTRIBUTIONS: tuple[str, ...] = ('normal', 'uniform')


class MatrixKind(Enum):
    GENERAL = 'general'
    SYMMETRIC = 'symmetric'
    POSITIVE = 'positive'
    UNITARY = 'unitary'

    @property
    def square(self) -> bool:
        return self is not MatrixKind.GENERAL


@dataclass(frozen=True)
class GenerateParams:
    """
    One random-matrix request.

    Attributes:
        kind: Structure of the result
        m, n: Shape (m == n for every kind but GENERAL)
        dtype: Element type, any supported scalar
        distribution: 'normal' (standard normal) or 'uniform' (on [-1, 1));
            complex types draw real and imaginary parts independently
        values: Spectrum to impose: singular values (GENERAL), eigenvalues
            (SYMMETRIC, POSITIVE). At least `rank` values; extra are ignored.
        rank: Number of nonzero values; defaults to min(m, n)
        shift: Multiple of the identity added to POSITIVE matrices drawn
            without an imposed spectrum; None picks a default from the norm
        lower_bandwidth: Keep at most this many subdiagonals; None keeps all
        upper_bandwidth: Keep at most this many superdiagonals; None keeps
            all. SYMMETRIC and POSITIVE need a symmetric band.
        values_range: (low, high) to draw `rank` spectrum values from,
            uniformly; the alternative to exact `values`
    """
    kind: MatrixKind
    m: int
    n: int
    dtype: Any = np.float64
    distribution: Distribution = 'normal'
    values: tuple[float, ...] | None = None
    rank: int | None = None
    shift: float | None = None
    lower_bandwidth: int | None = None
    upper_bandwidth: int | None = None
    values_range: tuple[float, float] | None = None

    @classmethod
    def build(
        cls,
        kind: MatrixKind,
        m: int,
        n: int | None = None,
        *,
        dtype: Any = np.float64,
        distribution: Distribution = 'normal',
        values: Sequence[float] | NDArray[Any] | None = None,
        rank: int | None = None,
        shift: float | None = None,
        lower_bandwidth: int | None = None,
        upper_bandwidth: int | None = None,
        diagonal: bool = False,
        values_range: tuple[float, float] | None = None,
    ) -> GenerateParams:
        """
        Construct and validate; n defaults to m.

        `diagonal=True` is shorthand for both bandwidths set to 0.
        """
        if diagonal:
            if lower_bandwidth or upper_bandwidth:
                raise ValidationError("diagonal: conflicts with a nonzero bandwidth")
            lower_bandwidth = upper_bandwidth = 0
        params = cls(
            kind=kind,
            m=m,
            n=m if n is None else n,
            dtype=dtype,
            distribution=distribution,
            values=None if values is None else tuple(float(v) for v in np.ravel(values)),
            rank=rank,
            shift=shift,
            lower_bandwidth=lower_bandwidth,
            upper_bandwidth=upper_bandwidth,
            values_range=None if values_range is None else (
                float(values_range[0]), float(values_range[1])
            ),
        )
        params.validate()
        return params

    @property
    def trait(self) -> ScalarTrait:
        return scalar_trait(self.dtype)

    @property
    def effective_rank(self) -> int:
        k = min(self.m, self.n)
        return k if self.rank is None else self.rank

    @property
    def bands(self) -> tuple[int, int] | None:
        """
        (lower, upper) bandwidths actually imposed, or None for a full matrix.

        A band at least as wide as the matrix is no restriction.
        """
        lower = self.m - 1 if self.lower_bandwidth is None else self.lower_bandwidth
        upper = self.n - 1 if self.upper_bandwidth is None else self.upper_bandwidth
        lower = min(lower, max(self.m - 1, 0))
        upper = min(upper, max(self.n - 1, 0))
        if lower >= self.m - 1 and upper >= self.n - 1:
            return None
        return lower, upper

    @property
    def diagonal(self) -> bool:
        return self.bands == (0, 0)

    @property
    def has_spectrum(self) -> bool:
        """True if values are imposed, drawn from a range, or limited by rank."""
        return (
            self.values is not None
            or self.values_range is not None
            or self.effective_rank < min(self.m, self.n)
        )

    def validate(self) -> None:
        """
        Check the request.

        Raises:
            DimensionError: Square structure requested for m != n
            ValidationError: Bad size, unknown distribution, rank larger
                than min(m, n), fewer values than the rank, values for a
                unitary matrix, negative shift, an unusable band or range
            UnsupportedScalarError: dtype is not a supported scalar
        """
        check_positive_int(self.m, 'm')
        check_positive_int(self.n, 'n')
        scalar_trait(self.dtype)

        if self.kind.square and self.m != self.n:
            raise DimensionError(
                f"{self.kind.value} matrix must be square, got shape ({self.m}, {self.n})"
            )
        if self.distribution not in DISTRIBUTIONS:
            raise ValidationError(
                f"distribution: expected one of {DISTRIBUTIONS}, got {self.distribution!r}"
            )
        if self.rank is not None:
            check_positive_int(self.rank, 'rank')
            if self.rank > min(self.m, self.n):
                raise ValidationError(
                    f"rank: {self.rank} exceeds min(m, n) = {min(self.m, self.n)}"
                )
        if self.values is not None:
            if self.kind is MatrixKind.UNITARY:
                raise ValidationError("values: a unitary matrix has no imposable spectrum")
            if len(self.values) < self.effective_rank:
                raise ValidationError(
                    f"values: need at least {self.effective_rank}, got {len(self.values)}"
                )
            if not np.all(np.isfinite(self.values)):
                raise ValidationError("values: contains non-finite entries")
        if self.shift is not None and not self.shift >= 0:
            raise ValidationError(f"shift: must be >= 0, got {self.shift}")
        self._validate_range()
        self._validate_bands()

    def _validate_range(self) -> None:
        if self.values_range is None:
            return
        if self.kind is MatrixKind.UNITARY:
            raise ValidationError("values_range: a unitary matrix has no imposable spectrum")
        if self.values is not None:
            raise ValidationError("values_range: give either values or values_range, not both")
        low, high = self.values_range
        if not (np.isfinite(low) and np.isfinite(high)) or low > high:
            raise ValidationError(
                f"values_range: expected finite low <= high, got ({low}, {high})"
            )

    def _validate_bands(self) -> None:
        for name in ('lower_bandwidth', 'upper_bandwidth'):
            value = getattr(self, name)
            if value is not None:
                check_positive_int(value, name)

        bands = self.bands
        if bands is None:
            return
        if self.kind is MatrixKind.UNITARY:
            raise ValidationError("bandwidth: not supported for unitary matrices")
        if self.kind.square and bands[0] != bands[1]:
            raise ValidationError(
                f"bandwidth: {self.kind.value} matrix needs lower == upper, got {bands}"
            )
        # a band mask would destroy the spectrum; only a diagonal keeps it
        if self.has_spectrum and not self.diagonal:
            raise ValidationError(
                "bandwidth: an imposed spectrum or rank needs a full or diagonal matrix"
            )
