"""
Gauss-Jordan inversion.

Elimination runs on a private working copy of the input together with an
identity accumulator that becomes the inverse. The caller's matrix is
never modified, and intermediate states are never returned.

For each diagonal position p:
    1. If work[p, p] is zero, swap in a row r with work[r, p] != 0 and
       work[p, r] != 0 (in both matrices), else the matrix is singular.
    2. For every other row i:
           row_i = row_i * pivot - work[i, p] * row_p
       in both matrices, then divide both copies of row_i by the largest
       magnitude in its working row. The rescale keeps entries near 1
       and cancels in the final division.
Finally each result row is divided by the matching working diagonal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.core.validation import check_not_none, check_square
from pymatrix.linalg._structure import swap_rows

if TYPE_CHECKING:
    from pymatrix.linalg.matrix import Matrix


def _find_swap_row(work: np.ndarray, p: int) -> int | None:
    n = work.shape[0]
    for r in range(n):
        if r != p and work[r, p] != 0.0 and work[p, r] != 0.0:
            return r
    return None


def inverse(matrix: Matrix) -> Matrix:
    """
    Inverse of a square matrix by Gauss-Jordan elimination.

    Raises
    ------
    NullArgumentError
        If matrix is None.
    DimensionError
        If matrix is not square.
    SingularMatrixError
        If a zero pivot cannot be replaced by a row swap.
    """
    check_not_none(matrix, 'matrix')
    check_square(matrix, 'inverse')

    n = matrix.rows
    working = matrix.copy()
    result = type(matrix)(n)
    work = working._data.reshape(n, n)
    acc = result._data.reshape(n, n)
    np.fill_diagonal(acc, 1.0)

    for p in range(n):
        if work[p, p] == 0.0:
            r = _find_swap_row(work, p)
            if r is None:
                raise SingularMatrixError(
                    f"inverse: matrix is singular (no usable pivot at position {p})",
                    matrix_name='matrix',
                    pivot=p,
                )
            swap_rows(working, p, r)
            swap_rows(result, p, r)

        pivot = work[p, p]
        others = np.arange(n) != p
        factors = work[others, p][:, np.newaxis]
        work[others] = work[others] * pivot - factors * work[p]
        acc[others] = acc[others] * pivot - factors * acc[p]

        scale = np.abs(work[others]).max(axis=1, keepdims=True)
        scale[scale == 0.0] = 1.0
        work[others] /= scale
        acc[others] /= scale

    acc /= np.diag(work)[:, np.newaxis]
    return result
