"""
Matrix product, transpose and the product-with-transpose family.

    multiply(A, B)               A . B
    multiply_by_transpose(A, B)  A . B'    (one output row per task)
    multiply_by_transpose(A)     A . A'
    multiply_transpose_by(A, B)  A' . B    (one output column per task)
    multiply_transpose_by(A)     A' . A

The transpose variants read the operands in place; no transposed copy is
materialised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pymatrix.core.compute.parallel import parallel_for
from pymatrix.core.exceptions import DimensionError
from pymatrix.core.validation import check_not_none

if TYPE_CHECKING:
    from pymatrix.linalg.matrix import Matrix


def multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """
    Matrix product m1 . m2.

    Raises
    ------
    NullArgumentError
        If either operand is None.
    DimensionError
        If m1.columns != m2.rows.
    """
    check_not_none(m1, 'm1')
    check_not_none(m2, 'm2')
    if m1.columns != m2.rows:
        raise DimensionError(
            f"multiply: matrix 1 column count ({m1.columns}) must match "
            f"matrix 2 row count ({m2.rows})",
            expected=f"{m1.columns}xN",
            actual=(m2.rows, m2.columns),
        )

    n, k, p = m1.rows, m1.columns, m2.columns
    a = m1.data
    b = m2.data.reshape(k, p)
    out = np.empty(n * p, dtype=np.float64)

    def task(r: int) -> None:
        out[r * p:(r + 1) * p] = a[r * k:(r + 1) * k] @ b

    parallel_for(n, task)
    return type(m1)._from_buffer(n, p, out)


def transpose(matrix: Matrix) -> Matrix:
    check_not_none(matrix, 'matrix')
    rows, columns = matrix.rows, matrix.columns
    relocated = np.array(matrix.data.reshape(rows, columns).T, order='C')
    return type(matrix)._from_buffer(columns, rows, relocated.reshape(-1))


def multiply_by_transpose(m1: Matrix, m2: Matrix | None = None) -> Matrix:
    """
    m1 . m2' (or m1 . m1' when m2 is omitted).

    Raises
    ------
    DimensionError
        If the column counts differ.
    """
    check_not_none(m1, 'm1')
    if m2 is None:
        m2 = m1
    if m1.columns != m2.columns:
        raise DimensionError(
            f"multiply_by_transpose: column counts must match, "
            f"got {m1.columns} and {m2.columns}",
            expected=f"Nx{m1.columns}",
            actual=(m2.rows, m2.columns),
        )

    n, k, p = m1.rows, m1.columns, m2.rows
    a = m1.data
    b = m2.data.reshape(p, k)
    out = np.empty(n * p, dtype=np.float64)

    def task(r: int) -> None:
        out[r * p:(r + 1) * p] = b @ a[r * k:(r + 1) * k]

    parallel_for(n, task)
    return type(m1)._from_buffer(n, p, out)


def multiply_transpose_by(m1: Matrix, m2: Matrix | None = None) -> Matrix:
    """
    m1' . m2 (or m1' . m1 when m2 is omitted).

    Raises
    ------
    DimensionError
        If the row counts differ.
    """
    check_not_none(m1, 'm1')
    if m2 is None:
        m2 = m1
    if m1.rows != m2.rows:
        raise DimensionError(
            f"multiply_transpose_by: row counts must match, "
            f"got {m1.rows} and {m2.rows}",
            expected=f"{m1.rows}xN",
            actual=(m2.rows, m2.columns),
        )

    k, n, p = m1.rows, m1.columns, m2.columns
    a_t = m1.data.reshape(k, n).T
    b = m2.data.reshape(k, p)
    out = np.empty((n, p), dtype=np.float64)

    def task(c: int) -> None:
        out[:, c] = a_t @ b[:, c]

    parallel_for(p, task)
    return type(m1)._from_buffer(n, p, out.reshape(-1))
