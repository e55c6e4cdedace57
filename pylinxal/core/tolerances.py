"""
Tolerance tiers for numerical comparison.

Defines precision expectations per scalar type:
- single precision real / complex
- double precision real / complex

The absolute tolerances match the per-type defaults used for property
checks (symmetry, identity, bandwidth) where they are scaled by the
largest entry magnitude.

Used by the scalar trait, the property checker, and the test suite.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FLOAT32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='float32',
    description='single precision real',
)

FLOAT64 = ToleranceTier(
    rtol=1e-10,
    atol=2e-14,
    name='float64',
    description='double precision real',
)

COMPLEX64 = ToleranceTier(
    rtol=1e-4,
    atol=2e-5,
    name='complex64',
    description='single precision complex',
)

COMPLEX128 = ToleranceTier(
    rtol=1e-10,
    atol=4e-14,
    name='complex128',
    description='double precision complex',
)
