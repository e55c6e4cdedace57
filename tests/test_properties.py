"""
Tests for matrix property predicates.
"""

import numpy as np
import pytest

from pylinxal import Symmetric
from pylinxal.properties import (
    bandwidth,
    conj_t,
    default_tol,
    is_diagonal,
    is_identity,
    is_square,
    is_symmetric,
    is_triangular,
    is_unitary,
    lower_bandwidth,
    upper_bandwidth,
)


TRIDIAGONAL = np.array([
    [2.0, 1.0, 0.0, 0.0],
    [1.0, 2.0, 1.0, 0.0],
    [0.0, 1.0, 2.0, 1.0],
    [0.0, 0.0, 1.0, 2.0],
])


class TestSymmetry:

    def test_symmetric(self):
        assert is_symmetric(TRIDIAGONAL)

    def test_not_symmetric(self):
        assert not is_symmetric([[1.0, 2.0], [3.0, 1.0]])

    def test_non_square(self):
        assert not is_symmetric(np.zeros((2, 3)))

    def test_hermitian(self):
        assert is_symmetric(np.array([[1.0, 1j], [-1j, 2.0]]))

    def test_complex_symmetric_is_not_hermitian(self):
        assert not is_symmetric(np.array([[1.0, 1j], [1j, 2.0]]))

    def test_scale_invariant(self):
        a = np.array([[1.0, 2.0], [2.0 + 1e-15, 1.0]])
        assert is_symmetric(a)
        assert is_symmetric(a * 1e12)

    def test_explicit_tolerance(self):
        a = [[1.0, 2.0], [2.1, 1.0]]
        assert not is_symmetric(a)
        assert is_symmetric(a, tol=0.2)

    def test_conj_t(self):
        a = np.array([[1 + 1j, 2.0]])
        np.testing.assert_array_equal(conj_t(a), [[1 - 1j], [2.0]])


class TestStructure:

    def test_is_square(self):
        assert is_square(np.zeros((3, 3)))
        assert not is_square(np.zeros((3, 2)))
        assert not is_square(np.zeros(3))

    def test_diagonal(self):
        assert is_diagonal(np.diag([1.0, 2.0, 3.0]))
        assert is_diagonal(np.eye(3, 4))
        assert not is_diagonal(TRIDIAGONAL)

    def test_identity(self):
        assert is_identity(np.eye(4, dtype=np.complex64))
        assert not is_identity(2 * np.eye(4))
        assert not is_identity(np.eye(3, 4))

    def test_unitary(self):
        c, s = np.cos(0.3), np.sin(0.3)
        assert is_unitary([[c, -s], [s, c]])
        assert not is_unitary([[1.0, 1.0], [0.0, 1.0]])

    @pytest.mark.parametrize("uplo, expected", [(Symmetric.UPPER, True), (Symmetric.LOWER, False)])
    def test_triangular(self, uplo, expected):
        assert is_triangular(np.triu(np.ones((4, 3))), uplo) is expected

    def test_default_tol(self):
        assert default_tol(np.zeros((0, 0))) == 0.0
        assert default_tol(np.array([[2.0, -4.0]])) == pytest.approx(4 * 2e-14)
        assert default_tol(np.array([[3.0]], dtype=np.float32)) == pytest.approx(3e-5)


class TestBandwidth:

    def test_tridiagonal(self):
        assert lower_bandwidth(TRIDIAGONAL) == 1
        assert upper_bandwidth(TRIDIAGONAL) == 1
        assert bandwidth(TRIDIAGONAL) == 1

    def test_asymmetric_band(self):
        a = np.array([[1, 2, 0], [0, 1, 0], [0, 3, 1]], dtype=float)
        assert bandwidth(a) == 1
        a[2, 0] = 5.0
        assert lower_bandwidth(a) == 2
        assert upper_bandwidth(a) == 1
        assert bandwidth(a) == 2

    def test_diagonal_zero(self):
        assert bandwidth(np.diag([1.0, 2.0])) == 0

    def test_zero_and_empty(self):
        assert bandwidth(np.zeros((3, 3))) == 0
        assert bandwidth(np.zeros((0, 0))) == 0

    def test_rectangular(self):
        a = np.zeros((2, 5))
        a[0, 4] = 1.0
        assert upper_bandwidth(a) == 4
        assert lower_bandwidth(a) == 0

    def test_tolerance_ignores_small(self):
        a = np.eye(3)
        a[2, 0] = 1e-20
        assert lower_bandwidth(a) == 0
        assert lower_bandwidth(a, tol=0.0) == 2
