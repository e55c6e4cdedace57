"""
Random matrix generators.

Every generator takes an explicit numpy Generator as its random source;
there is no module-level random state, so a seeded Generator gives
reproducible matrices.

Algorithms:
    general      i.i.d. entries. With an imposed spectrum,
                 U diag(s) V^H for random unitary U, V.
    symmetric    (A + A^H) / 2 of a general A. Exactly symmetric/Hermitian:
                 entry (j, i) is computed as the exact conjugate of (i, j).
    positive     A^H A of a general A, symmetrised, plus shift * I so that
                 rounding cannot push an eigenvalue to zero.
    banded       Entries outside the band are zeroed; a banded positive
                 matrix is G^H G for an upper-banded G, which keeps the band.
    unitary      Q of the QR factorization of a Ginibre matrix (i.i.d.
                 standard normal entries). The sign/phase of each column of
                 Q is left as the factorization produced it.
"""

from __future__ import annotations

from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from pylinxal.core.exceptions import ValidationError
from pylinxal.core.scalar import ScalarTrait, scalar_trait
from pylinxal.factorization.qr import qr_into
from pylinxal.generate.design import Distribution, GenerateParams, MatrixKind
from pylinxal.generate.solution import GeneratedMatrix
from pylinxal.properties import conj_t


# Default positive-definite shift is
#   DEFAULT_SHIFT_FACTOR * n * tol(dtype) * ||A^H A||_F
DEFAULT_SHIFT_FACTOR = 1.0

_Built = tuple[NDArray[Any], NDArray[Any] | None]


def random_general(
    m: int,
    n: int,
    rng: np.random.Generator,
    *,
    dtype: Any = np.float64,
    distribution: Distribution = 'normal',
    singular_values: Sequence[float] | NDArray[Any] | None = None,
    singular_value_range: tuple[float, float] | None = None,
    rank: int | None = None,
    lower_bandwidth: int | None = None,
    upper_bandwidth: int | None = None,
    diagonal: bool = False,
) -> NDArray[Any]:
    """
    Random m x n matrix.

    Args:
        m, n: Shape
        rng: Random source
        dtype: Element type
        distribution: 'normal' or 'uniform'
        singular_values: Impose these singular values (absolute values are
            used; at least `rank` of them)
        singular_value_range: Draw `rank` singular values uniformly from
            (low, high) instead
        rank: Rank of the result, at most min(m, n)
        lower_bandwidth, upper_bandwidth: Zero everything outside this band;
            a band narrower than the matrix cannot be combined with a
            spectrum or rank unless it is diagonal
        diagonal: Shorthand for both bandwidths 0

    Example:
        >>> a = random_general(3, 2, np.random.default_rng(0))
        >>> a.shape
        (3, 2)
    """
    params = GenerateParams.build(
        MatrixKind.GENERAL, m, n, dtype=dtype, distribution=distribution,
        values=singular_values, values_range=singular_value_range, rank=rank,
        lower_bandwidth=lower_bandwidth, upper_bandwidth=upper_bandwidth,
        diagonal=diagonal,
    )
    return generate(params, rng).matrix


def random_symmetric(
    n: int,
    rng: np.random.Generator,
    *,
    dtype: Any = np.float64,
    distribution: Distribution = 'normal',
    eigenvalues: Sequence[float] | NDArray[Any] | None = None,
    eigenvalue_range: tuple[float, float] | None = None,
    rank: int | None = None,
    bandwidth: int | None = None,
    diagonal: bool = False,
) -> NDArray[Any]:
    """Random symmetric (real) or Hermitian (complex) n x n matrix."""
    params = GenerateParams.build(
        MatrixKind.SYMMETRIC, n, dtype=dtype, distribution=distribution,
        values=eigenvalues, values_range=eigenvalue_range, rank=rank,
        lower_bandwidth=bandwidth, upper_bandwidth=bandwidth, diagonal=diagonal,
    )
    return generate(params, rng).matrix


def random_positive_definite(
    n: int,
    rng: np.random.Generator,
    *,
    dtype: Any = np.float64,
    distribution: Distribution = 'normal',
    eigenvalues: Sequence[float] | NDArray[Any] | None = None,
    eigenvalue_range: tuple[float, float] | None = None,
    rank: int | None = None,
    shift: float | None = None,
    bandwidth: int | None = None,
    diagonal: bool = False,
) -> NDArray[Any]:
    """
    Random Hermitian positive-definite n x n matrix.

    With `rank` < n (and no shift) the result is positive semi-definite.

    Args:
        eigenvalues: Impose these eigenvalues (absolute values are used)
        eigenvalue_range: Draw the eigenvalues uniformly from (low, high);
            absolute values are used
        shift: Multiple of the identity to add. Defaults to
            n * tol(dtype) * ||A^H A||_F when no spectrum or rank is imposed,
            and to 0 otherwise.
        bandwidth: Number of sub- and superdiagonals kept
        diagonal: Shorthand for bandwidth 0
    """
    params = GenerateParams.build(
        MatrixKind.POSITIVE, n, dtype=dtype, distribution=distribution,
        values=eigenvalues, values_range=eigenvalue_range, rank=rank, shift=shift,
        lower_bandwidth=bandwidth, upper_bandwidth=bandwidth, diagonal=diagonal,
    )
    return generate(params, rng).matrix


def random_unitary(
    n: int,
    rng: np.random.Generator,
    *,
    dtype: Any = np.float64,
) -> NDArray[Any]:
    """
    Random unitary (orthogonal for real dtypes) n x n matrix.

    Raises:
        NativeError: Propagated unchanged from the QR factorization
    """
    params = GenerateParams.build(MatrixKind.UNITARY, n, dtype=dtype)
    return generate(params, rng).matrix


def generate(params: GenerateParams, rng: np.random.Generator) -> GeneratedMatrix:
    """
    Generate a matrix for a validated request.

    Returns:
        GeneratedMatrix with the matrix and, when a spectrum was imposed or
        drawn, the values it was built from
    """
    if not isinstance(rng, np.random.Generator):
        raise ValidationError(
            f"rng: expected numpy.random.Generator, got {type(rng).__name__}"
        )
    params.validate()

    builders = {
        MatrixKind.GENERAL: _general,
        MatrixKind.SYMMETRIC: _symmetric,
        MatrixKind.POSITIVE: _positive,
        MatrixKind.UNITARY: _unitary_matrix,
    }
    matrix, values = builders[params.kind](params, rng)
    return GeneratedMatrix(
        matrix=np.asfortranarray(matrix, dtype=params.trait.dtype),
        values=values,
        params=params,
    )


# ═══════════════════════════════════════════════════════════════════════
# Random sources
# ═══════════════════════════════════════════════════════════════════════

def draw(
    rng: np.random.Generator,
    shape: tuple[int, ...],
    trait: ScalarTrait,
    distribution: Distribution,
) -> NDArray[Any]:
    """
    Independent entries from the distribution, in the trait's dtype.

    'normal' gives standard normal entries; complex entries have
    E|z|^2 = 1 (both parts scaled by 1/sqrt(2)). 'uniform' draws each part
    uniformly on [-1, 1).
    """
    def part() -> NDArray[np.float64]:
        if distribution == 'normal':
            return rng.standard_normal(shape)
        return rng.uniform(-1.0, 1.0, shape)

    if trait.is_complex:
        values = trait.combine(part(), part())
        if distribution == 'normal':
            values /= np.sqrt(2)
        return np.asfortranarray(values, dtype=trait.dtype)
    return np.asfortranarray(part(), dtype=trait.dtype)


def _spectrum(
    params: GenerateParams,
    rng: np.random.Generator,
    *,
    absolute: bool,
) -> NDArray[np.floating[Any]] | None:
    """
    Values to impose, padded with zeros to min(m, n).

    Imposed values win, then values drawn from `values_range`; otherwise,
    when only a rank is requested, `rank` values are drawn from the
    distribution. None means draw the matrix directly.
    """
    k = min(params.m, params.n)
    r = params.effective_rank
    trait = params.trait

    if params.values is not None:
        head = np.asarray(params.values[:r], dtype=np.float64)
    elif params.values_range is not None:
        low, high = params.values_range
        head = rng.uniform(low, high, r)
    elif r < k:
        head = draw(rng, (r,), _real(trait), params.distribution).astype(np.float64)
    else:
        return None

    if absolute:
        head = np.abs(head)
    values = np.zeros(k, dtype=trait.real_dtype)
    values[:r] = head
    return values


def _real(trait: ScalarTrait) -> ScalarTrait:
    return scalar_trait(trait.real_dtype)


def _ginibre_q(n: int, trait: ScalarTrait, rng: np.random.Generator) -> NDArray[Any]:
    """Q factor of an n x n Ginibre matrix."""
    ginibre = draw(rng, (n, n), trait, 'normal')
    return qr_into(ginibre).q()


def _symmetrise(a: NDArray[Any]) -> NDArray[Any]:
    return (a + conj_t(a)) / 2


def _band(a: NDArray[Any], lower: int, upper: int) -> NDArray[Any]:
    """Zero every entry outside the band lower subdiagonals .. upper superdiagonals."""
    return np.triu(np.tril(a, upper), -lower)


def _diagonal_matrix(
    diag: NDArray[Any],
    m: int,
    n: int,
    trait: ScalarTrait,
) -> NDArray[Any]:
    a = np.zeros((m, n), dtype=trait.dtype, order='F')
    a[np.arange(len(diag)), np.arange(len(diag))] = diag
    return a


# ═══════════════════════════════════════════════════════════════════════
# Builders
# ═══════════════════════════════════════════════════════════════════════

def _general(params: GenerateParams, rng: np.random.Generator) -> _Built:
    trait = params.trait
    m, n = params.m, params.n
    k = min(m, n)

    if params.diagonal:
        s = _spectrum(params, rng, absolute=True)
        diag = draw(rng, (k,), trait, params.distribution) if s is None else s
        return _diagonal_matrix(diag, m, n, trait), s

    if params.bands is not None:
        lower, upper = params.bands
        return _band(draw(rng, (m, n), trait, params.distribution), lower, upper), None

    if params.values is not None or params.values_range is not None:
        s = _spectrum(params, rng, absolute=True)
        u = _ginibre_q(m, trait, rng)
        vh = conj_t(_ginibre_q(n, trait, rng))
        return (u[:, :k] * s) @ vh[:k, :], s

    r = params.effective_rank
    if r < k:
        left = draw(rng, (m, r), trait, params.distribution)
        right = draw(rng, (r, n), trait, params.distribution)
        return left @ right, None

    return draw(rng, (m, n), trait, params.distribution), None


def _symmetric(params: GenerateParams, rng: np.random.Generator) -> _Built:
    trait = params.trait
    n = params.n

    values = _spectrum(params, rng, absolute=False)
    if params.diagonal:
        # a Hermitian diagonal is real
        diag = draw(rng, (n,), _real(trait), params.distribution) if values is None else values
        return _diagonal_matrix(diag, n, n, trait), values

    if values is None:
        a = draw(rng, (n, n), trait, params.distribution)
        if params.bands is not None:
            a = _band(a, *params.bands)
    else:
        q = _ginibre_q(n, trait, rng)
        a = (q * values) @ conj_t(q)
    return _symmetrise(a), values


def _positive(params: GenerateParams, rng: np.random.Generator) -> _Built:
    trait = params.trait
    n = params.n

    values = _spectrum(params, rng, absolute=True)
    if values is None:
        if params.diagonal:
            diag = np.abs(draw(rng, (n,), _real(trait), params.distribution))
            a = _diagonal_matrix(diag, n, n, trait)
        else:
            g = draw(rng, (n, n), trait, params.distribution)
            if params.bands is not None:
                # G upper triangular with b superdiagonals makes G^H G b-banded
                g = _band(g, 0, params.bands[1])
            a = _symmetrise(conj_t(g) @ g)
        shift = params.shift
        if shift is None:
            shift = DEFAULT_SHIFT_FACTOR * n * trait.tol * float(np.linalg.norm(a))
    else:
        if params.diagonal:
            a = _diagonal_matrix(values, n, n, trait)
        else:
            q = _ginibre_q(n, trait, rng)
            a = _symmetrise((q * values) @ conj_t(q))
        shift = params.shift or 0.0

    a[np.diag_indices(n)] += shift
    return a, values


def _unitary_matrix(params: GenerateParams, rng: np.random.Generator) -> _Built:
    return _ginibre_q(params.n, params.trait, rng), None
