"""
Tests for random matrix generators.

Validates:
    - Structural guarantees (exact symmetry, positive definiteness, unitarity)
    - Imposed spectra and ranks, exact or drawn from a range
    - Band limits, checked with the bandwidth predicates
    - Reproducibility from a seeded Generator
    - Request validation
"""

import numpy as np
import pytest

from pylinxal import (
    Symmetric,
    random_general,
    random_positive_definite,
    random_symmetric,
    random_unitary,
    svd,
    SVDVectors,
    sym_eigen,
)
from pylinxal.core.exceptions import DimensionError, UnsupportedScalarError, ValidationError
from pylinxal.generate import GenerateParams, MatrixKind, generate
from pylinxal.properties import (
    bandwidth,
    is_diagonal,
    is_symmetric,
    is_triangular,
    is_unitary,
    lower_bandwidth,
    upper_bandwidth,
)


# ═══════════════════════════════════════════════════════════════════════
# General
# ═══════════════════════════════════════════════════════════════════════


class TestGeneral:

    def test_shape_and_dtype(self, rng, dtype):
        a = random_general(5, 3, rng, dtype=dtype)
        assert a.shape == (5, 3)
        assert a.dtype == dtype
        assert a.flags.f_contiguous

    def test_uniform_bounds(self, rng):
        a = random_general(50, 50, rng, distribution='uniform')
        assert np.all(a >= -1.0) and np.all(a < 1.0)

    def test_imposed_singular_values(self, rng, dtype, rtol):
        s = [5.0, 3.0, 1.0]
        a = random_general(6, 3, rng, dtype=dtype, singular_values=s)
        np.testing.assert_allclose(svd(a, SVDVectors.NONE).values, s, rtol=rtol * 10)

    def test_negative_values_use_magnitude(self, rng):
        a = random_general(3, 3, rng, singular_values=[-2.0, 1.0, -0.5])
        np.testing.assert_allclose(svd(a, SVDVectors.NONE).values, [2.0, 1.0, 0.5])

    def test_rank(self, rng):
        a = random_general(8, 6, rng, rank=3)
        assert svd(a, SVDVectors.NONE).rank() == 3

    def test_reproducible(self):
        a = random_general(4, 4, np.random.default_rng(7), dtype=np.complex64)
        b = random_general(4, 4, np.random.default_rng(7), dtype=np.complex64)
        np.testing.assert_array_equal(a, b)

    def test_complex_unit_variance(self, rng):
        a = random_general(200, 200, rng, dtype=np.complex128)
        assert np.mean(np.abs(a) ** 2) == pytest.approx(1.0, abs=0.05)


# ═══════════════════════════════════════════════════════════════════════
# Symmetric / positive definite
# ═══════════════════════════════════════════════════════════════════════


class TestSymmetric:

    def test_exactly_symmetric(self, rng, dtype):
        a = random_symmetric(9, rng, dtype=dtype)
        np.testing.assert_array_equal(a, a.conj().T)
        assert is_symmetric(a, tol=0.0)

    def test_imposed_eigenvalues(self, rng):
        values = [-3.0, 1.0, 2.0, 4.0]
        a = random_symmetric(4, rng, eigenvalues=values)
        np.testing.assert_allclose(sym_eigen(a).values, values, atol=1e-12)

    def test_rank(self, rng):
        a = random_symmetric(6, rng, rank=2)
        values = np.abs(sym_eigen(a).values)
        assert np.sum(values > 1e-10) == 2

    def test_not_square(self):
        with pytest.raises(DimensionError):
            generate(
                GenerateParams(MatrixKind.SYMMETRIC, 3, 4),
                np.random.default_rng(0),
            )


class TestPositiveDefinite:

    def test_eigenvalues_positive(self, rng, dtype):
        a = random_positive_definite(8, rng, dtype=dtype)
        assert is_symmetric(a, tol=0.0)
        assert np.all(sym_eigen(a).values > 0)

    @pytest.mark.parametrize("n", [1, 2, 10, 40])
    def test_positive_across_sizes(self, rng, n):
        assert np.all(sym_eigen(random_positive_definite(n, rng)).values > 0)

    def test_imposed_eigenvalues_use_magnitude(self, rng):
        a = random_positive_definite(3, rng, eigenvalues=[-1.0, 2.0, 3.0])
        np.testing.assert_allclose(sym_eigen(a).values, [1.0, 2.0, 3.0], atol=1e-12)

    def test_shift(self, rng):
        a = random_positive_definite(3, rng, eigenvalues=[1.0, 2.0, 3.0], shift=10.0)
        np.testing.assert_allclose(sym_eigen(a).values, [11.0, 12.0, 13.0], atol=1e-12)

    def test_semidefinite_with_rank(self, rng):
        a = random_positive_definite(5, rng, rank=2)
        values = sym_eigen(a).values
        assert np.all(values > -1e-12)
        assert np.sum(values > 1e-10) == 2

    def test_negative_shift_rejected(self, rng):
        with pytest.raises(ValidationError, match="shift"):
            random_positive_definite(3, rng, shift=-1.0)


# ═══════════════════════════════════════════════════════════════════════
# Unitary
# ═══════════════════════════════════════════════════════════════════════


class TestUnitary:

    @pytest.mark.parametrize("n", [1, 2, 10, 50])
    def test_q_h_q_is_identity(self, rng, dtype, rtol, n):
        q = random_unitary(n, rng, dtype=dtype)
        np.testing.assert_allclose(q.conj().T @ q, np.eye(n), atol=rtol * n)

    def test_is_unitary_predicate(self, rng):
        assert is_unitary(random_unitary(12, rng, dtype=np.complex128))

    def test_column_signs_not_normalised(self):
        # either sign of a column is a valid unitary factor
        q = random_unitary(6, np.random.default_rng(3))
        flipped = q * np.array([1, -1, 1, -1, 1, -1])
        assert is_unitary(flipped)

    def test_empty(self, rng):
        assert random_unitary(0, rng).shape == (0, 0)

    def test_values_rejected(self, rng):
        with pytest.raises(ValidationError, match="spectrum"):
            generate(GenerateParams(MatrixKind.UNITARY, 3, 3, values=(1.0, 1.0, 1.0)), rng)


# ═══════════════════════════════════════════════════════════════════════
# Bands
# ═══════════════════════════════════════════════════════════════════════


class TestBands:

    @pytest.mark.parametrize("m, n", [(1, 1), (1, 5), (5, 1), (4, 7), (7, 4), (6, 6)])
    def test_diagonal(self, rng, dtype, m, n):
        a = random_general(m, n, rng, dtype=dtype, diagonal=True)
        assert a.shape == (m, n)
        assert is_diagonal(a, tol=0.0)

    @pytest.mark.parametrize("m, n", [(3, 3), (5, 8), (8, 5)])
    def test_general_bands_honored(self, rng, m, n):
        for lower in range(m):
            for upper in range(n):
                a = random_general(
                    m, n, rng, lower_bandwidth=lower, upper_bandwidth=upper,
                )
                assert lower_bandwidth(a, tol=0.0) <= lower
                assert upper_bandwidth(a, tol=0.0) <= upper

    def test_one_sided_band(self, rng):
        a = random_general(5, 5, rng, lower_bandwidth=0)
        assert is_triangular(a, Symmetric.UPPER, tol=0.0)

    def test_band_wider_than_matrix_is_full(self, rng):
        params = GenerateParams.build(
            MatrixKind.GENERAL, 3, 4, lower_bandwidth=10, upper_bandwidth=10,
        )
        assert params.bands is None

    def test_diagonal_keeps_singular_values(self, rng):
        a = random_general(4, 3, rng, diagonal=True, singular_values=[3.0, -2.0, 1.0])
        assert is_diagonal(a, tol=0.0)
        np.testing.assert_allclose(svd(a, SVDVectors.NONE).values, [3.0, 2.0, 1.0])

    def test_diagonal_with_rank(self, rng):
        a = random_general(5, 5, rng, diagonal=True, rank=2)
        assert is_diagonal(a, tol=0.0)
        assert np.count_nonzero(np.diag(a)) == 2

    @pytest.mark.parametrize("b", [0, 1, 3])
    def test_symmetric_band(self, rng, dtype, b):
        a = random_symmetric(7, rng, dtype=dtype, bandwidth=b)
        assert is_symmetric(a, tol=0.0)
        assert bandwidth(a, tol=0.0) <= b

    def test_symmetric_diagonal_eigenvalues(self, rng):
        a = random_symmetric(3, rng, diagonal=True, eigenvalues=[-1.0, 2.0, 5.0])
        np.testing.assert_array_equal(np.diag(a), [-1.0, 2.0, 5.0])
        assert is_diagonal(a, tol=0.0)

    @pytest.mark.parametrize("b", [0, 1, 2])
    def test_positive_band(self, rng, dtype, b):
        a = random_positive_definite(8, rng, dtype=dtype, bandwidth=b)
        assert is_symmetric(a, tol=0.0)
        assert bandwidth(a, tol=0.0) <= b
        assert np.all(sym_eigen(a).values > 0)

    def test_positive_diagonal(self, rng):
        a = random_positive_definite(6, rng, diagonal=True)
        assert is_diagonal(a, tol=0.0)
        assert np.all(np.diag(a) > 0)


# ═══════════════════════════════════════════════════════════════════════
# Spectrum ranges
# ═══════════════════════════════════════════════════════════════════════


class TestSpectrumRange:

    def test_singular_values_in_range(self, rng):
        s = svd(random_general(6, 4, rng, singular_value_range=(2.0, 3.0)), SVDVectors.NONE).values
        assert np.all(s >= 2.0 - 1e-12) and np.all(s <= 3.0 + 1e-12)

    def test_range_with_rank(self, rng):
        a = random_general(6, 4, rng, singular_value_range=(1.0, 2.0), rank=2)
        assert svd(a, SVDVectors.NONE).rank() == 2

    def test_eigenvalues_in_range(self, rng):
        values = sym_eigen(random_symmetric(5, rng, eigenvalue_range=(-4.0, -1.0))).values
        assert np.all(values >= -4.0 - 1e-12) and np.all(values <= -1.0 + 1e-12)

    def test_positive_uses_magnitudes(self, rng):
        values = sym_eigen(
            random_positive_definite(5, rng, eigenvalue_range=(-3.0, -1.0))
        ).values
        np.testing.assert_array_less(0.9, values)

    def test_recorded_values(self, rng):
        params = GenerateParams.build(MatrixKind.SYMMETRIC, 4, values_range=(0.5, 1.5))
        out = generate(params, rng)
        assert np.all((out.values >= 0.5) & (out.values < 1.5))


# ═══════════════════════════════════════════════════════════════════════
# Request validation
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:

    def test_rng_required(self):
        with pytest.raises(ValidationError, match="Generator"):
            random_general(2, 2, 42)

    def test_legacy_random_state_rejected(self):
        with pytest.raises(ValidationError):
            random_general(2, 2, np.random.RandomState(0))

    def test_negative_size(self, rng):
        with pytest.raises(ValidationError):
            random_general(-1, 2, rng)

    def test_rank_too_large(self, rng):
        with pytest.raises(ValidationError, match="rank"):
            random_general(3, 2, rng, rank=3)

    def test_too_few_values(self, rng):
        with pytest.raises(ValidationError, match="at least 3"):
            random_symmetric(3, rng, eigenvalues=[1.0, 2.0])

    def test_unknown_distribution(self, rng):
        with pytest.raises(ValidationError, match="distribution"):
            random_general(2, 2, rng, distribution='cauchy')

    def test_unsupported_dtype(self, rng):
        with pytest.raises(UnsupportedScalarError):
            random_general(2, 2, rng, dtype=np.int64)

    def test_generated_matrix_records_values(self, rng):
        params = GenerateParams.build(MatrixKind.SYMMETRIC, 3, values=[1.0, 2.0, 3.0])
        out = generate(params, rng)
        assert out.shape == (3, 3)
        np.testing.assert_array_equal(out.values, [1.0, 2.0, 3.0])
        assert out.params is params

    def test_band_with_spectrum_rejected(self, rng):
        with pytest.raises(ValidationError, match="bandwidth"):
            random_general(4, 4, rng, lower_bandwidth=1, upper_bandwidth=1, rank=2)

    def test_symmetric_needs_symmetric_band(self):
        with pytest.raises(ValidationError, match="lower == upper"):
            GenerateParams.build(MatrixKind.SYMMETRIC, 4, lower_bandwidth=1, upper_bandwidth=2)

    def test_unitary_band_rejected(self):
        with pytest.raises(ValidationError, match="unitary"):
            GenerateParams.build(MatrixKind.UNITARY, 4, diagonal=True)

    def test_diagonal_conflicts_with_band(self, rng):
        with pytest.raises(ValidationError, match="diagonal"):
            random_general(3, 3, rng, diagonal=True, upper_bandwidth=1)

    def test_negative_bandwidth(self, rng):
        with pytest.raises(ValidationError):
            random_general(3, 3, rng, lower_bandwidth=-1)

    def test_range_and_values_exclusive(self):
        with pytest.raises(ValidationError, match="values_range"):
            GenerateParams.build(
                MatrixKind.GENERAL, 2, values=[1.0, 2.0], values_range=(0.0, 1.0),
            )

    def test_reversed_range(self, rng):
        with pytest.raises(ValidationError, match="low <= high"):
            random_symmetric(3, rng, eigenvalue_range=(2.0, 1.0))
