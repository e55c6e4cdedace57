"""
Generic result container for all pylinxal computations.

The Result class provides a standardized envelope that every operation
uses. Operation-specific payloads (eigenvalues, singular values, factors)
live in `params`; everything about HOW the result was produced lives
alongside it.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for call metadata (routine, workspace size, layout ownership)
    - timing is optional (empty inputs never touch a routine)
    - Immutable (frozen=True); a Result is only built from a successful call
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for native computations.

    Type Parameters:
        P: The operation-specific parameter payload type

    Attributes:
        params: Operation-specific payload (values, vectors, factors, ...)
        info: Call metadata ('routine', 'lwork', 'layout', ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: LAPACK routine that produced this result, or 'empty'
            when the input had a zero dimension and no routine was called
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EigenParams(values=w, left_vectors=None, right_vectors=v),
        ...     info={'routine': 'dsyev', 'lwork': 34, 'layout': 'borrowed'},
        ...     timing={'total_seconds': 0.001, 'compute': 0.0008},
        ...     backend_name='dsyev',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    @property
    def native_called(self) -> bool:
        """False for results short-circuited on empty input."""
        return self.backend_name != EMPTY_BACKEND


EMPTY_BACKEND = 'empty'
