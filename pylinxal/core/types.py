"""
Shared option types.
"""

from enum import Enum


class Symmetric(Enum):
    """Which triangle of a symmetric/Hermitian matrix the routine reads."""

    UPPER = 'U'
    LOWER = 'L'

    @property
    def lower(self) -> int:
        """LAPACK 'lower' flag as the scipy wrappers take it."""
        return 1 if self is Symmetric.LOWER else 0
