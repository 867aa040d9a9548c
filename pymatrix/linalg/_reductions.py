"""
Reduction framework.

Two generic reducers, parameterised by an axis and a function:

    reduce_binary(m, func, axis, seed)
        Folds func(accumulator, value) element by element through each vector,
        starting from seed. Used for sum().

    reduce_vectors(m, func, axis)
        Hands each row or column (a 1D array) to func, which returns one
        number. Used for every statistic.

Axis resolution:
    'columns'  one value per column -> 1 x columns
    'rows'     one value per row    -> rows x 1
    'auto'     'columns', except that a row or column vector always
               collapses to a 1 x 1 result whatever axis was requested
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.compute.parallel import parallel_for
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_choice, check_not_none
from pymatrix.linalg import _statistics as stats
from pymatrix.linalg._structure import AXES, Axis

if TYPE_CHECKING:
    from pymatrix.linalg.matrix import Matrix


BinaryReducer = Callable[[float, float], float]
VectorReducer = Callable[[NDArray], float]


def resolve_axis(matrix: Matrix, axis: Axis) -> str:
    """Concrete axis ('rows' or 'columns') a reduction will run along."""
    check_choice(axis, AXES, 'axis')
    if matrix.rows == 1:
        return 'rows'
    if matrix.columns == 1:
        return 'columns'
    return 'columns' if axis == 'auto' else axis


def _check_reducer(func, name: str) -> None:
    check_not_none(func, name)
    if not callable(func):
        raise ValidationError(f"{name}: expected a callable, got {type(func).__name__}")


def _vector_source(matrix: Matrix, axis: str):
    """(count, result shape, vector(i) -> private 1D copy) for a resolved axis."""
    grid = matrix.data.reshape(matrix.rows, matrix.columns)
    if axis == 'columns':
        return matrix.columns, (1, matrix.columns), lambda i: grid[:, i].copy()
    return matrix.rows, (matrix.rows, 1), lambda i: grid[i].copy()


def reduce_binary(
    matrix: Matrix,
    func: BinaryReducer,
    axis: Axis = 'auto',
    seed: float = 0.0,
) -> Matrix:
    """
    Fold func over each vector of matrix, left to right.

    func(accumulator, value) is called once per element with plain floats,
    starting from seed, so np.add and ``lambda acc, x: acc if acc > x else x``
    both work. Vectors are folded in parallel.
    """
    check_not_none(matrix, 'matrix')
    _check_reducer(func, 'func')
    start = float(seed)
    count, shape, vector = _vector_source(matrix, resolve_axis(matrix, axis))
    out = np.empty(count, dtype=np.float64)

    def task(i: int) -> None:
        acc = start
        for value in vector(i).tolist():
            acc = func(acc, value)
        out[i] = acc

    parallel_for(count, task)
    return type(matrix)._from_buffer(shape[0], shape[1], out)


def reduce_vectors(matrix: Matrix, func: VectorReducer, axis: Axis = 'auto') -> Matrix:
    """
    Apply func to every column (or row) vector of matrix.

    func receives a private 1D copy of the vector and returns a number.
    Vectors are processed in parallel.
    """
    check_not_none(matrix, 'matrix')
    _check_reducer(func, 'func')
    count, shape, vector = _vector_source(matrix, resolve_axis(matrix, axis))
    out = np.empty(count, dtype=np.float64)

    def task(i: int) -> None:
        out[i] = func(vector(i))

    parallel_for(count, task)
    return type(matrix)._from_buffer(shape[0], shape[1], out)


# --- Named reductions ---

def sum(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_binary(matrix, np.add, axis)


def mean(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_mean, axis)


def mean_square(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_mean_square, axis)


def max(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_max, axis)


def min(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_min, axis)


def max_index(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    """Zero-based position of the first maximum in each vector."""
    return reduce_vectors(matrix, stats.first_max_index, axis)


def min_index(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    """Zero-based position of the first minimum in each vector."""
    return reduce_vectors(matrix, stats.first_min_index, axis)


def value_range(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    """max - min of each vector."""
    return reduce_vectors(matrix, stats.sample_range, axis)


def interquartile_range(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_iqr, axis)


def median(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_median, axis)


def quartile1(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.lower_quartile, axis)


def quartile3(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.upper_quartile, axis)


def mode(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_mode, axis)


def variance(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    """Bessel-corrected variance of each vector."""
    return reduce_vectors(matrix, stats.sample_variance, axis)


def standard_deviation(matrix: Matrix, axis: Axis = 'auto') -> Matrix:
    return reduce_vectors(matrix, stats.sample_standard_deviation, axis)
