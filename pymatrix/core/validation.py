"""
Input validation utilities for pymatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages

Matrix arguments are checked structurally (``rows``/``columns``) so this
module does not depend on the Matrix class itself.
"""

import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    NullArgumentError,
    ValidationError,
)


def check_not_none(value: Any, name: str) -> None:
    """
    Verify a required argument was supplied.

    Args:
        value: Argument to check
        name: Parameter name for error messages

    Raises:
        NullArgumentError: If value is None
    """
    if value is None:
        raise NullArgumentError(f"{name}: required argument is None", argument=name)


def is_scalar(value: Any) -> bool:
    """True for real numbers (Python or numpy), which broadcast over a matrix."""
    return isinstance(value, numbers.Real)


def check_scalar(value: Any, name: str) -> float:
    """
    Verify value is a real number and return it as float.

    Raises:
        NullArgumentError: If value is None
        ValidationError: If value is not a real number
    """
    check_not_none(value, name)
    if not is_scalar(value):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__}"
        )
    return float(value)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating ragged rows, mixed types or
    non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        NullArgumentError: If array is None
        ValidationError: If input cannot be converted to numeric array
    """
    check_not_none(array, name)
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_dimension(value: Any, name: str) -> int:
    """
    Verify a requested matrix dimension is a positive integer.

    Raises:
        NullArgumentError: If value is None
        DimensionError: If value is not an integer >= 1
    """
    check_not_none(value, name)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise DimensionError(
            f"{name}: expected a positive integer, got {value!r}"
        )
    if value < 1:
        raise DimensionError(f"{name}: must be at least 1, got {value}")
    return int(value)


def check_same_shape(a, b, operation: str) -> None:
    """
    Verify two matrices have identical (rows, columns).

    Raises:
        DimensionError: If the shapes differ
    """
    if a.rows != b.rows or a.columns != b.columns:
        raise DimensionError(
            f"{operation}: matrix dimensions must match, "
            f"got {a.rows}x{a.columns} and {b.rows}x{b.columns}",
            expected=f"{a.rows}x{a.columns}",
            actual=(b.rows, b.columns),
        )


def check_square(matrix, operation: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        DimensionError: If rows != columns
    """
    if matrix.rows != matrix.columns:
        raise DimensionError(
            f"{operation}: requires a square matrix, got {matrix.rows}x{matrix.columns}",
            expected="square",
            actual=(matrix.rows, matrix.columns),
        )


def check_row_index(matrix, index: int, name: str) -> int:
    """
    Verify index addresses an existing row.

    Raises:
        IndexOutOfRangeError: If index is outside [0, rows)
    """
    return _check_index(index, matrix.rows, name, "row")


def check_column_index(matrix, index: int, name: str) -> int:
    """
    Verify index addresses an existing column.

    Raises:
        IndexOutOfRangeError: If index is outside [0, columns)
    """
    return _check_index(index, matrix.columns, name, "column")


def _check_index(index: Any, limit: int, name: str, kind: str) -> int:
    check_not_none(index, name)
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise IndexOutOfRangeError(
            f"{name}: {kind} index must be an integer, got {index!r}",
            limit=limit,
        )
    if not 0 <= index < limit:
        raise IndexOutOfRangeError(
            f"{name}: {kind} index {index} out of range [0, {limit})",
            index=int(index),
            limit=limit,
        )
    return int(index)


def check_choice(value: Any, choices: tuple[str, ...], name: str) -> str:
    """
    Verify a string option is one of the allowed choices.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name}: must be one of {', '.join(repr(c) for c in choices)}, got {value!r}"
        )
    return value
