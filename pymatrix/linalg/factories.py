"""
Matrix factories: zeros, ones, identity, uniform random and magic squares.
"""

from __future__ import annotations

import time
from typing import Literal

import numpy as np

from pymatrix.core.exceptions import DimensionError
from pymatrix.core.validation import check_choice, check_dimension
from pymatrix.linalg import _magic
from pymatrix.linalg.matrix import Matrix


MatrixKind = Literal['zeros', 'ones', 'identity', 'magic', 'random']
MATRIX_KINDS: tuple[str, ...] = ('zeros', 'ones', 'identity', 'magic', 'random')


def zeros(rows: int, columns: int | None = None) -> Matrix:
    return Matrix(rows, columns)


def ones(rows: int, columns: int | None = None) -> Matrix:
    matrix = Matrix(rows, columns)
    matrix.fill(1.0)
    return matrix


def identity(n: int) -> Matrix:
    matrix = Matrix(n)
    matrix._data[::n + 1] = 1.0
    return matrix


def _time_seed() -> int:
    return time.time_ns() & 0xFFFFFFFF


def rand(rows: int, columns: int | None = None, seed: int | None = None) -> Matrix:
    """
    Uniform [0, 1) random matrix.

    Parameters
    ----------
    seed : int, optional
        Seed for numpy's default generator. When omitted the seed is taken
        from the low 32 bits of the current time.
    """
    rows = check_dimension(rows, 'rows')
    columns = rows if columns is None else check_dimension(columns, 'columns')
    rng = np.random.default_rng(_time_seed() if seed is None else seed)
    return Matrix._from_buffer(rows, columns, rng.random(rows * columns))


def magic(n: int) -> Matrix:
    """
    Magic square of order n.

    Raises
    ------
    DimensionError
        If n == 2 (no magic square exists) or n < 1.
    """
    n = check_dimension(n, 'n')
    if n == 1:
        return identity(1)
    if n == 2:
        raise DimensionError("magic: no magic square of order 2 exists", actual=(2, 2))
    if n % 2 == 1:
        return Matrix.from_array(_magic.odd_magic(n))
    if n % 4 == 0:
        return Matrix.from_array(_magic.doubly_even_magic(n))
    return _magic.singly_even_magic(n)


def create(
    kind: MatrixKind,
    rows: int,
    columns: int | None = None,
    *,
    seed: int | None = None,
) -> Matrix:
    """
    Build one of the special matrices by name.

    'identity' and 'magic' are square; passing a different column count
    raises DimensionError.
    """
    check_choice(kind, MATRIX_KINDS, 'kind')

    if kind in ('identity', 'magic'):
        if columns is not None and columns != rows:
            raise DimensionError(
                f"create: {kind} matrices are square, got {rows}x{columns}",
                expected="square",
                actual=(rows, columns),
            )
        return identity(rows) if kind == 'identity' else magic(rows)

    if kind == 'ones':
        return ones(rows, columns)
    if kind == 'random':
        return rand(rows, columns, seed=seed)
    return zeros(rows, columns)
