"""
Tests for Gauss-Jordan inversion.

Validates:
    - Known inverses and A . A^-1 == I to floating-point tolerance
    - Zero pivots resolved by row swaps
    - SingularMatrixError with the failing pivot
    - Non-square input rejected; the caller's matrix is never modified
"""

import numpy as np
import pytest

from pymatrix import Matrix, identity, magic
from pymatrix.core.exceptions import DimensionError, NullArgumentError, SingularMatrixError
from pymatrix.linalg import inverse


# ═══════════════════════════════════════════════════════════════════════
# Invertible matrices
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    def test_two_by_two(self):
        result = inverse(Matrix.from_array([[4, 7], [2, 6]]))
        np.testing.assert_allclose(result.to_numpy(), [[0.6, -0.7], [-0.2, 0.4]])

    def test_one_by_one(self):
        assert inverse(Matrix.from_array([[4]])).tolist() == [[0.25]]

    def test_identity(self):
        assert inverse(identity(5)) == identity(5)

    @pytest.mark.parametrize("n", [3, 5, 7])
    def test_odd_magic_squares(self, n):
        a = magic(n)
        np.testing.assert_allclose((a * a.inverse()).to_numpy(), np.eye(n), atol=1e-10)

    def test_random_matrices(self, rng):
        for n in (2, 4, 8, 16):
            a = Matrix.from_array(rng.uniform(-1.0, 1.0, size=(n, n)) + n * np.eye(n))
            np.testing.assert_allclose((a * inverse(a)).to_numpy(), np.eye(n), atol=1e-9)
            np.testing.assert_allclose(inverse(a).to_numpy(), np.linalg.inv(a.to_numpy()))

    @pytest.mark.parametrize("n", [9, 12, 16, 40])
    def test_larger_matrices_stay_finite(self, rng, n):
        a = Matrix.from_array(rng.uniform(-1.0, 1.0, size=(n, n)) + n * np.eye(n))
        inv = inverse(a)
        assert np.all(np.isfinite(inv.to_numpy()))
        np.testing.assert_allclose((a * inv).to_numpy(), np.eye(n), atol=1e-9)

    @pytest.mark.parametrize("n", [9, 11])
    def test_larger_odd_magic_squares(self, n):
        a = magic(n)
        np.testing.assert_allclose((a * a.inverse()).to_numpy(), np.eye(n), atol=1e-9)

    def test_zero_pivot_swapped(self):
        permutation = Matrix.from_array([[0, 1], [1, 0]])
        assert inverse(permutation) == permutation

    def test_zero_pivot_three_by_three(self):
        a = Matrix.from_array([[0, 2, 1], [1, 0, 0], [3, 0, 1]])
        np.testing.assert_allclose((a * inverse(a)).to_numpy(), np.eye(3), atol=1e-12)

    def test_input_unchanged(self):
        a = Matrix.from_array([[0, 2, 1], [1, 0, 0], [3, 0, 1]])
        before = a.copy()
        inverse(a)
        assert a == before


# ═══════════════════════════════════════════════════════════════════════
# Failures
# ═══════════════════════════════════════════════════════════════════════


class TestInverseErrors:

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as info:
            inverse(Matrix.from_array([[1, 2], [2, 4]]))
        assert info.value.pivot == 1

    def test_zero_matrix(self):
        with pytest.raises(SingularMatrixError) as info:
            inverse(Matrix(3))
        assert info.value.pivot == 0

    def test_singular_input_unchanged(self):
        a = Matrix.from_array([[1, 2], [2, 4]])
        with pytest.raises(SingularMatrixError):
            a.inverse()
        assert a.tolist() == [[1.0, 2.0], [2.0, 4.0]]

    def test_non_square(self):
        with pytest.raises(DimensionError, match="square"):
            inverse(Matrix(2, 3))

    def test_none(self):
        with pytest.raises(NullArgumentError):
            inverse(None)
