"""
Elementwise and scalar arithmetic.

Every operation validates its operands, then computes the output one row
per unit of parallel work through element_operation() or element_map().
Relational operations produce truth matrices of 1.0/0.0.

Operation functions receive numpy row slices, so numpy ufuncs and plain
arithmetic lambdas both work:

    element_operation(a, b, np.maximum)
    element_operation(a, 2.0, lambda x, y: x * y + 1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Union

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.parallel import parallel_for
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import (
    check_not_none,
    check_same_shape,
    check_scalar,
    is_scalar,
)

if TYPE_CHECKING:
    from pymatrix.linalg.matrix import Matrix


BinaryOp = Callable[[NDArray, Union[NDArray, float]], NDArray]
UnaryOp = Callable[[NDArray], NDArray]


def _map_rows(source: Matrix, row_fn: Callable[[int, NDArray], NDArray]) -> Matrix:
    """Fill a new matrix shaped like source, one row per task."""
    rows, columns = source.rows, source.columns
    src = source.data
    out = np.empty(rows * columns, dtype=np.float64)

    def task(r: int) -> None:
        lo = r * columns
        out[lo:lo + columns] = row_fn(r, src[lo:lo + columns])

    parallel_for(rows, task)
    return type(source)._from_buffer(rows, columns, out)


def _check_callable(func, name: str) -> None:
    check_not_none(func, name)
    if not callable(func):
        raise ValidationError(f"{name}: expected a callable, got {type(func).__name__}")


def element_operation(m1: Matrix, m2: Matrix | float, op: BinaryOp) -> Matrix:
    """
    Apply op(m1_value, m2_value) to every element of m1.

    Parameters
    ----------
    m1 : Matrix
        Left operand; fixes the output shape.
    m2 : Matrix or float
        Right operand. A scalar is used for every element. A matrix of
        the same shape pairs up elementwise. A 1 x columns row vector is
        repeated for every row; a rows x 1 column vector is repeated for
        every column.
    op : callable
        Binary function applied to numpy row slices.

    Raises
    ------
    NullArgumentError
        If any argument is None.
    DimensionError
        If m2 is a matrix that cannot be broadcast against m1.
    """
    check_not_none(m1, 'm1')
    check_not_none(m2, 'm2')
    _check_callable(op, 'op')

    if is_scalar(m2):
        value = float(m2)
        return _map_rows(m1, lambda r, row: op(row, value))

    other = m2.data
    columns = m1.columns

    if m2.rows == m1.rows and m2.columns == m1.columns:
        return _map_rows(m1, lambda r, row: op(row, other[r * columns:(r + 1) * columns]))

    if m2.rows == 1 and m2.columns == m1.columns:
        return _map_rows(m1, lambda r, row: op(row, other))

    if m2.columns == 1 and m2.rows == m1.rows:
        return _map_rows(m1, lambda r, row: op(row, other[r]))

    raise DimensionError(
        f"element_operation: cannot broadcast {m2.rows}x{m2.columns} "
        f"against {m1.rows}x{m1.columns}",
        expected=f"{m1.rows}x{m1.columns}, 1x{m1.columns} or {m1.rows}x1",
        actual=(m2.rows, m2.columns),
    )


def element_map(matrix: Matrix, func: UnaryOp) -> Matrix:
    """Apply func to every element of matrix (func receives row slices)."""
    check_not_none(matrix, 'matrix')
    _check_callable(func, 'func')
    return _map_rows(matrix, lambda r, row: func(row))


# --- Matrix (+) Matrix ---

def add(m1: Matrix, m2: Matrix) -> Matrix:
    """m1 + m2. Shapes must match exactly."""
    check_not_none(m1, 'm1')
    check_not_none(m2, 'm2')
    check_same_shape(m1, m2, 'add')
    return element_operation(m1, m2, np.add)


def subtract(m1: Matrix, m2: Matrix) -> Matrix:
    """m1 - m2. Shapes must match exactly."""
    check_not_none(m1, 'm1')
    check_not_none(m2, 'm2')
    check_same_shape(m1, m2, 'subtract')
    return element_operation(m1, m2, np.subtract)


def element_multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """Hadamard product, with vector broadcasting."""
    return element_operation(m1, m2, np.multiply)


def element_divide(m1: Matrix, m2: Matrix) -> Matrix:
    """Elementwise quotient, with vector broadcasting."""
    return element_operation(m1, m2, np.divide)


# --- Scalar forms ---

def add_scalar(matrix: Matrix, scalar: float) -> Matrix:
    check_not_none(matrix, 'matrix')
    return element_operation(matrix, check_scalar(scalar, 'scalar'), np.add)


def subtract_scalar(matrix: Matrix, scalar: float) -> Matrix:
    """matrix - scalar."""
    check_not_none(matrix, 'matrix')
    return element_operation(matrix, check_scalar(scalar, 'scalar'), np.subtract)


def scalar_subtract(scalar: float, matrix: Matrix) -> Matrix:
    """scalar - matrix."""
    value = check_scalar(scalar, 'scalar')
    return element_map(matrix, lambda row: value - row)


def multiply_scalar(matrix: Matrix, scalar: float) -> Matrix:
    check_not_none(matrix, 'matrix')
    return element_operation(matrix, check_scalar(scalar, 'scalar'), np.multiply)


def divide_scalar(matrix: Matrix, scalar: float) -> Matrix:
    """matrix / scalar."""
    check_not_none(matrix, 'matrix')
    return element_operation(matrix, check_scalar(scalar, 'scalar'), np.divide)


def scalar_divide(scalar: float, matrix: Matrix) -> Matrix:
    """scalar / matrix, elementwise."""
    value = check_scalar(scalar, 'scalar')
    return element_map(matrix, lambda row: value / row)


def negate(matrix: Matrix) -> Matrix:
    return element_map(matrix, np.negative)


def element_power(matrix: Matrix, exponent: float) -> Matrix:
    value = check_scalar(exponent, 'exponent')
    return element_map(matrix, lambda row: np.power(row, value))


def element_exp(matrix: Matrix) -> Matrix:
    return element_map(matrix, np.exp)


def element_log(matrix: Matrix) -> Matrix:
    """Natural logarithm; zeros give -inf and negatives NaN, as in IEEE-754."""
    return element_map(matrix, np.log)


# --- Truth matrices ---

def equal_to(matrix: Matrix, other: Matrix | float) -> Matrix:
    return element_operation(matrix, other, np.equal)


def not_equal_to(matrix: Matrix, other: Matrix | float) -> Matrix:
    return element_operation(matrix, other, np.not_equal)


def less_than(matrix: Matrix, other: Matrix | float) -> Matrix:
    return element_operation(matrix, other, np.less)


def greater_than(matrix: Matrix, other: Matrix | float) -> Matrix:
    return element_operation(matrix, other, np.greater)


def less_equal(matrix: Matrix, other: Matrix | float) -> Matrix:
    return element_operation(matrix, other, np.less_equal)


def greater_equal(matrix: Matrix, other: Matrix | float) -> Matrix:
    return element_operation(matrix, other, np.greater_equal)


def _three_way(a: NDArray, b: NDArray | float) -> NDArray:
    return np.where(a < b, -1.0, np.where(a > b, 1.0, 0.0))


def compare(matrix: Matrix, other: Matrix | float) -> Matrix:
    """-1.0 where matrix < other, 1.0 where greater, 0.0 otherwise."""
    return element_operation(matrix, other, _three_way)
