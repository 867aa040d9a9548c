"""
Magic square construction.

Three algorithms, selected by the order n:

    odd n           Siamese (De la Loubere) method
    n % 4 == 0      doubly-even diagonal complement
    n % 4 == 2      Strachey's method (four odd quadrants)

Every result holds 1..n^2 exactly once, and all rows, columns and both
main diagonals sum to n(n^2 + 1)/2.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.linalg._structure import join
from pymatrix.linalg.matrix import Matrix


def odd_magic(n: int) -> NDArray[np.float64]:
    """
    Siamese method: start in the middle of the top row and walk up and to
    the right, wrapping around; when the target cell is taken, drop one
    row instead.
    """
    square = np.zeros((n, n), dtype=np.float64)
    row, col = 0, n // 2
    for value in range(1, n * n + 1):
        square[row, col] = value
        up, right = (row - 1) % n, (col + 1) % n
        if square[up, right]:
            row = (row + 1) % n
        else:
            row, col = up, right
    return square


def doubly_even_magic(n: int) -> NDArray[np.float64]:
    """
    Fill 1..n^2 row by row, then replace every cell lying on a diagonal of
    its 4x4 block with its complement n^2 + 1 - value.
    """
    square = np.arange(1, n * n + 1, dtype=np.float64).reshape(n, n)
    i, j = np.indices((n, n))
    on_diagonal = ((i % 4) == (j % 4)) | (((i % 4) + (j % 4)) == 3)
    square[on_diagonal] = n * n + 1 - square[on_diagonal]
    return square


def _swap(first: NDArray, second: NDArray, index) -> None:
    first[index], second[index] = np.copy(second[index]), np.copy(first[index])


def singly_even_magic(n: int) -> Matrix:
    """
    Strachey's method for n = 4k + 2.

    With q = n/2 and A an odd magic square of order q, the quadrants are

        [ A        A + 2q^2 ]
        [ A + 3q^2 A + q^2  ]

    Before joining: the leftmost k columns of the top-left and bottom-left
    quadrants are exchanged (except the middle row, where the exchange
    shifts one cell to the right), and the rightmost k - 1 columns of the
    two right-hand quadrants are exchanged.
    """
    q = n // 2
    k = (n - 2) // 4
    mid = q // 2
    base = odd_magic(q)

    top_left = base.copy()
    bottom_right = base + q * q
    top_right = base + 2 * q * q
    bottom_left = base + 3 * q * q

    _swap(top_left, bottom_left, (slice(None), slice(0, k)))
    # Undo the exchange at the middle of the leftmost column, and exchange
    # the centre cell instead.
    _swap(top_left, bottom_left, (mid, 0))
    _swap(top_left, bottom_left, (mid, mid))
    if k > 1:
        _swap(top_right, bottom_right, (slice(None), slice(q - k + 1, q)))

    top = join(Matrix.from_array(top_left), Matrix.from_array(top_right), 'columns')
    bottom = join(Matrix.from_array(bottom_left), Matrix.from_array(bottom_right), 'columns')
    return join(top, bottom, 'rows')
