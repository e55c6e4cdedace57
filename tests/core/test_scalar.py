"""
Tests for scalar trait dispatch.

Validates:
    - One trait per supported dtype, with matching precision metadata
    - Routine selection for real vs complex families
    - Rejection of unsupported dtypes before any work
    - Conversion helpers (combine, conj, to_native)
"""

import numpy as np
import pytest
from scipy.linalg import lapack

from pylinxal.core.exceptions import UnsupportedScalarError
from pylinxal.core.scalar import (
    COMPLEX64,
    COMPLEX128,
    FLOAT32,
    FLOAT64,
    ROUTINE_FAMILIES,
    SUPPORTED_DTYPES,
    Workspace,
    common_trait,
    scalar_trait,
)


# ═══════════════════════════════════════════════════════════════════════
# Trait table
# ═══════════════════════════════════════════════════════════════════════


class TestTraitTable:

    @pytest.mark.parametrize("dtype, trait", [
        (np.float32, FLOAT32),
        (np.float64, FLOAT64),
        (np.complex64, COMPLEX64),
        (np.complex128, COMPLEX128),
    ])
    def test_lookup(self, dtype, trait):
        assert scalar_trait(dtype) is trait

    def test_lookup_by_name(self):
        assert scalar_trait('complex128') is COMPLEX128

    def test_exactly_four_supported(self):
        assert len(SUPPORTED_DTYPES) == 4

    @pytest.mark.parametrize("trait, prefix, real, cplx", [
        (FLOAT32, 's', np.float32, np.complex64),
        (FLOAT64, 'd', np.float64, np.complex128),
        (COMPLEX64, 'c', np.float32, np.complex64),
        (COMPLEX128, 'z', np.float64, np.complex128),
    ])
    def test_precision_metadata(self, trait, prefix, real, cplx):
        assert trait.prefix == prefix
        assert trait.real_dtype == np.dtype(real)
        assert trait.complex_dtype == np.dtype(cplx)

    def test_is_complex(self):
        assert not FLOAT64.is_complex
        assert COMPLEX64.is_complex

    def test_eps_matches_numpy(self):
        assert FLOAT32.eps == np.finfo(np.float32).eps
        assert COMPLEX128.eps == np.finfo(np.float64).eps

    def test_tolerances(self):
        assert FLOAT32.tol == pytest.approx(1e-5)
        assert FLOAT64.tol == pytest.approx(2e-14)
        assert COMPLEX64.tol == pytest.approx(2e-5)
        assert COMPLEX128.tol == pytest.approx(4e-14)

    def test_trait_is_frozen(self):
        with pytest.raises(Exception):
            FLOAT64.prefix = 's'


class TestUnsupported:

    @pytest.mark.parametrize("dtype", [np.float16, np.int32, np.int64, np.bool_, np.longdouble])
    def test_rejected(self, dtype):
        if np.dtype(dtype) == np.dtype(np.float64):
            pytest.skip("longdouble is float64 on this platform")
        with pytest.raises(UnsupportedScalarError) as exc_info:
            scalar_trait(dtype)
        assert exc_info.value.dtype == np.dtype(dtype)

    def test_not_a_dtype(self):
        with pytest.raises(UnsupportedScalarError):
            scalar_trait("not-a-dtype")


# ═══════════════════════════════════════════════════════════════════════
# Routine dispatch
# ═══════════════════════════════════════════════════════════════════════


class TestRoutineDispatch:

    @pytest.mark.parametrize("trait, operation, expected", [
        (FLOAT64, 'sym_eigen', 'dsyev'),
        (COMPLEX128, 'sym_eigen', 'zheev'),
        (FLOAT32, 'qr_q', 'sorgqr'),
        (COMPLEX64, 'qr_q', 'cungqr'),
        (FLOAT64, 'sym_solve', 'dsysv'),
        (COMPLEX128, 'sym_solve', 'zhesv'),
        (COMPLEX64, 'eigen', 'cgeev'),
        (FLOAT32, 'cholesky', 'spotrf'),
    ])
    def test_routine_name(self, trait, operation, expected):
        assert trait.routine_name(operation) == expected

    @pytest.mark.parametrize("operation", sorted(ROUTINE_FAMILIES))
    @pytest.mark.parametrize("trait", [FLOAT32, FLOAT64, COMPLEX64, COMPLEX128])
    def test_every_routine_exists(self, trait, operation):
        assert trait.routine(operation) is getattr(lapack, trait.routine_name(operation))

    @pytest.mark.parametrize("operation", sorted(
        op for op, fam in ROUTINE_FAMILIES.items() if fam.workspace is Workspace.QUERY
    ))
    @pytest.mark.parametrize("trait", [FLOAT32, FLOAT64, COMPLEX64, COMPLEX128])
    def test_workspace_query_exists(self, trait, operation):
        assert callable(trait.routine(operation, workspace=True))

    def test_unknown_operation(self):
        with pytest.raises(KeyError):
            FLOAT64.routine_name('transmogrify')


# ═══════════════════════════════════════════════════════════════════════
# Conversions
# ═══════════════════════════════════════════════════════════════════════


class TestConversions:

    def test_combine(self):
        z = FLOAT32.combine([1.0, 2.0], [3.0, -4.0])
        assert z.dtype == np.complex64
        np.testing.assert_array_equal(z, [1 + 3j, 2 - 4j])

    def test_conj_real_is_identity(self):
        a = np.array([1.0, 2.0])
        assert FLOAT64.conj(a) is a

    def test_conj_complex(self):
        np.testing.assert_array_equal(COMPLEX128.conj(np.array([1 + 2j])), [1 - 2j])

    def test_to_native(self):
        assert FLOAT32.to_native([1, 2]).dtype == np.float32

    def test_to_real(self):
        assert COMPLEX64.to_real([1.0]).dtype == np.float32

    def test_common_trait_promotes(self):
        a = np.zeros((2, 2), dtype=np.float32)
        b = np.zeros(2, dtype=np.complex128)
        assert common_trait(a, b) is COMPLEX128

    def test_common_trait_same(self):
        a = np.zeros((2, 2), dtype=np.float32)
        assert common_trait(a, a) is FLOAT32
