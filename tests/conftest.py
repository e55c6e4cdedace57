"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinxal.core.scalar import scalar_trait


ALL_DTYPES = [np.float32, np.float64, np.complex64, np.complex128]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=ALL_DTYPES, ids=lambda d: np.dtype(d).name)
def dtype(request):
    """Every supported scalar type."""
    return np.dtype(request.param)


@pytest.fixture
def rtol(dtype):
    """Relative tolerance for results computed in `dtype`."""
    return scalar_trait(dtype).tolerance.rtol


@pytest.fixture
def random_matrix(rng):
    """Factory for standard normal matrices in a dtype (complex parts independent)."""
    def make(shape, dtype=np.float64):
        dtype = np.dtype(dtype)
        a = rng.standard_normal(shape)
        if dtype.kind == "c":
            a = a + 1j * rng.standard_normal(shape)
        return a.astype(dtype)
    return make


@pytest.fixture
def well_conditioned(random_matrix):
    """Factory for diagonally dominant (hence invertible) square matrices."""
    def make(n, dtype=np.float64):
        a = random_matrix((n, n), dtype)
        a += np.eye(n, dtype=dtype) * (2 * n)
        return a
    return make


@pytest.fixture
def collinear_matrix(rng):
    """Tall matrix whose third column is the sum of the first two."""
    n = 20
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    return np.column_stack([x1, x2, x1 + x2])
