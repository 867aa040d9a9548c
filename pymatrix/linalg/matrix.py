"""
Matrix: dense float64 matrix on a flat row-major buffer.

Storage and shape live here. Arithmetic, products, structural operations
and inversion are implemented as module-level functions in the private
_elementwise, _products, _structure and _inversion modules. The operator
methods below only dispatch to them.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import DimensionError
from pymatrix.core.validation import (
    check_array,
    check_dimension,
    check_not_none,
    is_scalar,
)
from pymatrix.linalg import _elementwise, _inversion, _products, _structure


class Matrix:
    """
    Dense matrix of IEEE-754 doubles.

    Element (r, c) lives at data[r * columns + c]. The shape is fixed at
    construction; operations that change shape return a new Matrix.
    Operators never mutate their operands. The in-place mutators are
    fill(), set_row(), swap_rows() and item assignment.

    Construction:
        Matrix(3, 4)                        # 3x4 zeros
        Matrix(3)                           # 3x3 zeros
        Matrix.from_array([[1, 2], [3, 4]])
        Matrix.from_matrix(other)           # deep copy

    Operators:
        a + b, a - b        same shape required
        a * b               matrix product
        a * 2, 2 * a        scalar product
        a / 2, 1 / a        scalar division (elementwise)
        -a                  negation
        a == b, a != b      value equality (bool)
        a >= 0.5, a == 3    truth matrices of 1.0/0.0
    """

    __slots__ = ('_rows', '_columns', '_data')

    # Make numpy defer to our reflected operators (np.float64(2) * m).
    __array_ufunc__ = None

    # Mutable through the in-place mutators.
    __hash__ = None

    def __init__(self, rows: int, columns: int | None = None):
        rows = check_dimension(rows, 'rows')
        columns = rows if columns is None else check_dimension(columns, 'columns')
        self._rows = rows
        self._columns = columns
        self._data = np.zeros(rows * columns, dtype=np.float64)

    @classmethod
    def _from_buffer(cls, rows: int, columns: int, data: NDArray) -> Matrix:
        """Wrap an owned flat float64 buffer without copying."""
        if data.size != rows * columns:
            raise DimensionError(
                f"buffer of {data.size} values cannot back a {rows}x{columns} matrix"
            )
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._columns = columns
        matrix._data = data
        return matrix

    @classmethod
    def from_array(cls, table: ArrayLike | Matrix) -> Matrix:
        """
        Build a Matrix from a rectangular table of numbers.

        Parameters
        ----------
        table : array-like or Matrix
            Nested sequences or a 2D array. 1D input becomes a column
            vector. A Matrix is deep-copied.

        Raises
        ------
        NullArgumentError
            If table is None.
        ValidationError
            If table is ragged or non-numeric.
        DimensionError
            If table is empty or has more than 2 dimensions.
        """
        check_not_none(table, 'table')
        if isinstance(table, Matrix):
            return table.copy()

        array = check_array(table, 'table')
        if array.ndim == 1:
            array = array.reshape(-1, 1)
        if array.ndim != 2:
            raise DimensionError(
                f"table: expected 1D or 2D data, got {array.ndim}D with shape {array.shape}"
            )
        rows, columns = array.shape
        if rows < 1 or columns < 1:
            raise DimensionError(f"table: cannot build a matrix from shape {array.shape}")

        return cls._from_buffer(rows, columns, np.ascontiguousarray(array).reshape(-1))

    @classmethod
    def from_matrix(cls, other: Matrix) -> Matrix:
        """Deep copy of another matrix."""
        check_not_none(other, 'other')
        return other.copy()

    def copy(self) -> Matrix:
        return type(self)._from_buffer(self._rows, self._columns, self._data.copy())

    # --- Shape ---

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def dimensions(self) -> tuple[int, int]:
        """(rows, columns)."""
        return (self._rows, self._columns)

    @property
    def size(self) -> int:
        return self._data.size

    @property
    def is_square(self) -> bool:
        return self._rows == self._columns

    @property
    def is_vector(self) -> bool:
        """True for a single row or a single column."""
        return self._rows == 1 or self._columns == 1

    # --- Storage access ---

    @property
    def data(self) -> NDArray[np.float64]:
        """Read-only view of the flat row-major buffer."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def to_numpy(self) -> NDArray[np.float64]:
        """Copy as a (rows, columns) array."""
        return self._data.reshape(self._rows, self._columns).copy()

    def tolist(self) -> list[list[float]]:
        return self._data.reshape(self._rows, self._columns).tolist()

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, column = key
        return float(self._data[row * self._columns + column])

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, column = key
        self._data[row * self._columns + column] = value

    def fill(self, value: float) -> None:
        """Overwrite every element with value."""
        self._data.fill(value)

    # --- Equality ---

    def has_same_dimensions(self, other: Matrix) -> bool:
        check_not_none(other, 'other')
        return self._rows == other.rows and self._columns == other.columns

    def equals(self, other: Any) -> bool:
        """Exact value equality: same shape and every element equal."""
        if not isinstance(other, Matrix):
            return False
        if other is self:
            return True
        return self.has_same_dimensions(other) and bool(np.array_equal(self._data, other._data))

    def __eq__(self, other):
        if other is None:
            return False
        if isinstance(other, Matrix):
            return self.equals(other)
        if is_scalar(other):
            return _elementwise.equal_to(self, other)
        return NotImplemented

    def __ne__(self, other):
        if other is None:
            return True
        if isinstance(other, Matrix):
            return not self.equals(other)
        if is_scalar(other):
            return _elementwise.not_equal_to(self, other)
        return NotImplemented

    def _relational(self, other, op):
        if other is None or isinstance(other, Matrix) or is_scalar(other):
            return op(self, other)
        return NotImplemented

    def __lt__(self, other):
        return self._relational(other, _elementwise.less_than)

    def __gt__(self, other):
        return self._relational(other, _elementwise.greater_than)

    def __le__(self, other):
        return self._relational(other, _elementwise.less_equal)

    def __ge__(self, other):
        return self._relational(other, _elementwise.greater_equal)

    # --- Arithmetic ---

    def _binary(self, other, matrix_op, scalar_op):
        if other is None or isinstance(other, Matrix):
            return matrix_op(self, other)
        if is_scalar(other):
            return scalar_op(self, other)
        return NotImplemented

    def __add__(self, other):
        return self._binary(other, _elementwise.add, _elementwise.add_scalar)

    def __radd__(self, other):
        if is_scalar(other):
            return _elementwise.add_scalar(self, other)
        return NotImplemented

    def __sub__(self, other):
        return self._binary(other, _elementwise.subtract, _elementwise.subtract_scalar)

    def __rsub__(self, other):
        if is_scalar(other):
            return _elementwise.scalar_subtract(other, self)
        return NotImplemented

    def __mul__(self, other):
        return self._binary(other, _products.multiply, _elementwise.multiply_scalar)

    def __rmul__(self, other):
        if is_scalar(other):
            return self.__mul__(other)
        return NotImplemented

    def __truediv__(self, other):
        if other is None or is_scalar(other):
            return _elementwise.divide_scalar(self, other)
        return NotImplemented

    def __rtruediv__(self, other):
        if is_scalar(other):
            return _elementwise.scalar_divide(other, self)
        return NotImplemented

    def __neg__(self):
        return _elementwise.negate(self)

    @property
    def sum_all_elements(self) -> float:
        return float(np.sum(self._data))

    # --- Delegating methods ---

    @property
    def T(self) -> Matrix:
        """Transpose (new matrix, data relocated)."""
        return _products.transpose(self)

    def transpose(self) -> Matrix:
        return _products.transpose(self)

    def inverse(self) -> Matrix:
        """Gauss-Jordan inverse. This matrix is left untouched."""
        return _inversion.inverse(self)

    def get_row(self, index: int) -> Matrix:
        return _structure.get_row(self, index)

    def get_column(self, index: int) -> Matrix:
        return _structure.get_column(self, index)

    def set_row(self, index: int, source: Matrix) -> None:
        _structure.set_row(self, index, source)

    def swap_rows(self, first: int, second: int) -> None:
        _structure.swap_rows(self, first, second)

    def remove_column(self, index: int) -> Matrix:
        return _structure.remove_column(self, index)

    def unrolled(self) -> Matrix:
        """Column-major flattening into a (rows*columns) x 1 vector."""
        return _structure.unrolled(self)

    # --- Display ---

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, columns={self._columns})"

    def __str__(self) -> str:
        cells = [[f"{v:.6g}" for v in row] for row in self.tolist()]
        width = max(len(c) for row in cells for c in row)
        return "\n".join(" ".join(c.rjust(width) for c in row) for row in cells)
