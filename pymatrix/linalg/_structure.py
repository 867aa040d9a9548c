"""
Row and column structural operations.

Extraction, replacement, swapping, joining, bias columns, column removal,
polynomial feature expansion, reshape and column-major unrolling. These
run single-threaded.
"""

from __future__ import annotations

import numbers
from typing import TYPE_CHECKING, Literal

import numpy as np

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_choice,
    check_column_index,
    check_dimension,
    check_not_none,
    check_row_index,
    check_scalar,
)

if TYPE_CHECKING:
    from pymatrix.linalg.matrix import Matrix


Axis = Literal['rows', 'columns', 'auto']
AXES: tuple[str, ...] = ('rows', 'columns', 'auto')


def _grid(matrix: Matrix):
    return matrix.data.reshape(matrix.rows, matrix.columns)


def _wrap(like: Matrix, array) -> Matrix:
    rows, columns = array.shape
    # Always copy: transposed views of a vector can be contiguous aliases.
    return type(like)._from_buffer(rows, columns, np.array(array, dtype=np.float64, order='C').reshape(-1))


def get_row(matrix: Matrix, index: int) -> Matrix:
    """Copy of one row as a 1 x columns matrix."""
    check_not_none(matrix, 'matrix')
    index = check_row_index(matrix, index, 'index')
    columns = matrix.columns
    values = matrix.data[index * columns:(index + 1) * columns].copy()
    return type(matrix)._from_buffer(1, columns, values)


def get_column(matrix: Matrix, index: int) -> Matrix:
    """Copy of one column as a rows x 1 matrix."""
    check_not_none(matrix, 'matrix')
    index = check_column_index(matrix, index, 'index')
    values = matrix.data[index::matrix.columns].copy()
    return type(matrix)._from_buffer(matrix.rows, 1, values)


def set_row(matrix: Matrix, index: int, source: Matrix) -> None:
    """
    Overwrite row `index` of matrix, in place, with the first row of source.

    Only min(matrix.columns, source.columns) values are copied.
    """
    check_not_none(matrix, 'matrix')
    check_not_none(source, 'source')
    index = check_row_index(matrix, index, 'index')
    count = min(matrix.columns, source.columns)
    start = index * matrix.columns
    matrix._data[start:start + count] = source.data[:count]


def swap_rows(matrix: Matrix, first: int, second: int) -> None:
    """Exchange two rows in place."""
    check_not_none(matrix, 'matrix')
    first = check_row_index(matrix, first, 'first')
    second = check_row_index(matrix, second, 'second')
    if first == second:
        return
    grid = matrix._data.reshape(matrix.rows, matrix.columns)
    grid[[first, second]] = grid[[second, first]]


def join(m1: Matrix, m2: Matrix, axis: Axis = 'auto') -> Matrix:
    """
    Concatenate two matrices.

    Parameters
    ----------
    axis : {'rows', 'columns', 'auto'}
        'rows' stacks m2 below m1 (column counts must match).
        'columns' places m2 to the right of m1 (row counts must match).
        'auto' uses 'columns' when the row counts match, else 'rows'.

    Raises
    ------
    DimensionError
        If the non-joined dimension differs.
    """
    check_not_none(m1, 'm1')
    check_not_none(m2, 'm2')
    check_choice(axis, AXES, 'axis')

    if axis == 'auto':
        axis = 'columns' if m1.rows == m2.rows else 'rows'

    if axis == 'rows':
        if m1.columns != m2.columns:
            raise DimensionError(
                f"join: joining by rows requires equal column counts, "
                f"got {m1.columns} and {m2.columns}",
                expected=f"Nx{m1.columns}",
                actual=(m2.rows, m2.columns),
            )
        data = np.concatenate([m1.data, m2.data])
        return type(m1)._from_buffer(m1.rows + m2.rows, m1.columns, data)

    if m1.rows != m2.rows:
        raise DimensionError(
            f"join: joining by columns requires equal row counts, "
            f"got {m1.rows} and {m2.rows}",
            expected=f"{m1.rows}xN",
            actual=(m2.rows, m2.columns),
        )
    return _wrap(m1, np.hstack([_grid(m1), _grid(m2)]))


def add_identity_column(matrix: Matrix, value: float = 1.0) -> Matrix:
    """Prepend a constant column (bias/intercept term)."""
    check_not_none(matrix, 'matrix')
    value = check_scalar(value, 'value')
    out = np.empty((matrix.rows, matrix.columns + 1), dtype=np.float64)
    out[:, 0] = value
    out[:, 1:] = _grid(matrix)
    return _wrap(matrix, out)


def remove_column(matrix: Matrix, index: int) -> Matrix:
    """
    Copy of matrix without column `index`.

    Raises
    ------
    DimensionError
        If matrix has a single column.
    IndexOutOfRangeError
        If index is outside [0, columns).
    """
    check_not_none(matrix, 'matrix')
    if matrix.columns == 1:
        raise DimensionError(
            "remove_column: cannot remove the only column of a matrix",
            actual=(matrix.rows, matrix.columns),
        )
    index = check_column_index(matrix, index, 'index')
    return _wrap(matrix, np.delete(_grid(matrix), index, axis=1))


def expand_polynomials(matrix: Matrix, column1: int, column2: int, degree: int) -> Matrix:
    """
    Replace two feature columns with their polynomial terms.

    The terms are x1^(i-j) * x2^j for 0 <= j <= i <= degree, enumerated by
    i then j, giving (degree+1)(degree+2)/2 columns. When column1 ==
    column2 the duplicates collapse to x^0 .. x^degree. The block takes
    the place of the lower of the two columns; every other column keeps
    its original order.

    Raises
    ------
    IndexOutOfRangeError
        If either column index is invalid.
    ValidationError
        If degree is negative or not an integer.
    """
    check_not_none(matrix, 'matrix')
    column1 = check_column_index(matrix, column1, 'column1')
    column2 = check_column_index(matrix, column2, 'column2')
    check_not_none(degree, 'degree')
    if isinstance(degree, bool) or not isinstance(degree, numbers.Integral) or degree < 0:
        raise ValidationError(f"degree: expected a non-negative integer, got {degree!r}")

    grid = _grid(matrix)
    x1 = grid[:, column1]
    x2 = grid[:, column2]

    if column1 == column2:
        terms = [x1 ** i for i in range(degree + 1)]
    else:
        terms = [
            x1 ** (i - j) * x2 ** j
            for i in range(degree + 1)
            for j in range(i + 1)
        ]

    first = min(column1, column2)
    others = [c for c in range(matrix.columns) if c not in (column1, column2)]
    before = [c for c in others if c < first]
    after = [c for c in others if c > first]

    expanded = np.hstack([grid[:, before], np.column_stack(terms), grid[:, after]])
    return _wrap(matrix, expanded)


def reshape(matrix: Matrix, start_index: int, rows: int, columns: int) -> Matrix:
    """
    Build a rows x columns matrix from rows*columns consecutive values.

    Values are read from matrix's row-major buffer starting at start_index
    and written column-major: column 0 top to bottom, then column 1, and
    so on. reshape(m.unrolled(), 0, m.rows, m.columns) reconstructs m.

    Raises
    ------
    IndexOutOfRangeError
        If start_index is negative or beyond the buffer.
    DimensionError
        If fewer than rows*columns values remain after start_index.
    """
    check_not_none(matrix, 'matrix')
    check_not_none(start_index, 'start_index')
    rows = check_dimension(rows, 'rows')
    columns = check_dimension(columns, 'columns')
    if isinstance(start_index, bool) or not isinstance(start_index, numbers.Integral):
        raise IndexOutOfRangeError(
            f"start_index: expected an integer, got {start_index!r}",
            limit=matrix.size,
        )
    if not 0 <= start_index <= matrix.size:
        raise IndexOutOfRangeError(
            f"start_index: {start_index} out of range [0, {matrix.size}]",
            index=int(start_index),
            limit=matrix.size,
        )

    count = rows * columns
    available = matrix.size - start_index
    if count > available:
        raise DimensionError(
            f"reshape: {rows}x{columns} needs {count} values but only "
            f"{available} remain after index {start_index}",
            expected=f"at least {count} values",
            actual=(matrix.rows, matrix.columns),
        )

    values = matrix.data[start_index:start_index + count]
    return _wrap(matrix, values.reshape(columns, rows).T)


def unrolled(matrix: Matrix) -> Matrix:
    """Column-major flattening into a (rows*columns) x 1 column vector."""
    check_not_none(matrix, 'matrix')
    values = np.array(_grid(matrix).T, order='C').reshape(-1)
    return type(matrix)._from_buffer(matrix.size, 1, values)
