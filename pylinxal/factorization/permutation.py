"""
Row permutations in LAPACK pivot form.

Factorizations with partial pivoting (?getrf, ?gesv) report the row
permutation as a pivot vector: for i = 0, 1, ..., row i was interchanged
with row piv[i] (0-based, as scipy returns them). MatrixPermutation keeps
that compact form and applies it without building a permutation matrix.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinxal.core.errors import translate_info
from pylinxal.core.exceptions import DimensionError, SingularMatrixError
from pylinxal.core.native import NativeCall


class MatrixPermutation:
    """
    Permutation P of the factorization A = P L U, stored as pivots.

    Args:
        pivots: 0-based pivot indices; pivots[i] >= i
    """

    def __init__(self, pivots: ArrayLike):
        self._pivots = np.asarray(pivots, dtype=np.intp).copy()
        self._pivots.setflags(write=False)

    @property
    def pivots(self) -> NDArray[np.intp]:
        return self._pivots

    def __len__(self) -> int:
        return len(self._pivots)

    def __repr__(self) -> str:
        return f"MatrixPermutation({self._pivots.tolist()})"

    def _check_rows(self, rows: int) -> None:
        if self._pivots.size and (len(self._pivots) > rows or self._pivots.max() >= rows):
            raise DimensionError(
                f"permutation with {len(self._pivots)} pivots cannot be applied "
                f"to a matrix with {rows} rows"
            )

    def permute(self, mat: ArrayLike) -> NDArray[Any]:
        """
        Return P @ mat.

        The interchanges are undone in reverse order, so permute(L @ U)
        reconstructs the original matrix.

        Raises:
            DimensionError: If mat has fewer rows than the permutation needs
        """
        out = np.array(mat, copy=True)
        self._check_rows(out.shape[0])
        for i in range(len(self._pivots) - 1, -1, -1):
            p = self._pivots[i]
            if p != i:
                out[[i, p]] = out[[p, i]]
        return out

    def permute_inverse(self, mat: ArrayLike) -> NDArray[Any]:
        """
        Return P^T @ mat, applying the interchanges in the order the
        factorization performed them.
        """
        out = np.array(mat, copy=True)
        self._check_rows(out.shape[0])
        for i, p in enumerate(self._pivots):
            if p != i:
                out[[i, p]] = out[[p, i]]
        return out

    def row_order(self, rows: int) -> NDArray[np.intp]:
        """
        Row order of the permuted matrix: (P^T A) == A[row_order(m)].
        """
        return self.permute_inverse(np.arange(rows))

    def as_matrix(self, rows: int, dtype: Any = np.float64) -> NDArray[Any]:
        """Explicit rows x rows permutation matrix P."""
        return self.permute(np.eye(rows, dtype=dtype))

    def source_row(self, position: int, rows: int) -> int:
        """Row of the unpermuted matrix that the factorization moved to `position`."""
        return int(self.row_order(rows)[position])


def check_pivoted_info(call: NativeCall, info: int, pivots: ArrayLike, rows: int) -> None:
    """
    check_info() for partial-pivoting routines (?getrf, ?gesv).

    A singular factor is reported at a position of the permuted matrix;
    the raised error's `index` is mapped back to the input row, while
    `leading_minor` keeps the routine's raw position.

    Raises:
        NativeError: Subclass matching the routine family and INFO
    """
    error = translate_info(info, call.family.errors, call.name)
    if error is None:
        return
    if isinstance(error, SingularMatrixError):
        error.index = MatrixPermutation(pivots).source_row(error.index, rows)
    raise error
