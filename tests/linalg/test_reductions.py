"""
Tests for the reduction framework.

Validates:
    - Axis resolution and result orientation (1 x columns / rows x 1)
    - Vectors collapse to 1 x 1 whatever axis is requested
    - reduce_binary seeds and custom folds
    - reduce_vectors hands private copies to the reducer
    - Named reductions on small known inputs
    - Identical results in sequential and threaded execution
"""

import math

import numpy as np
import pytest

from pymatrix import Matrix
from pymatrix.core.exceptions import NullArgumentError, ValidationError
from pymatrix.linalg import (
    interquartile_range,
    max,
    max_index,
    mean,
    mean_square,
    median,
    min,
    min_index,
    mode,
    quartile1,
    quartile3,
    reduce_binary,
    reduce_vectors,
    resolve_axis,
    standard_deviation,
    sum,
    value_range,
    variance,
)


@pytest.fixture
def a():
    return Matrix.from_array([[1, 2, 3], [4, 5, 6]])


# ═══════════════════════════════════════════════════════════════════════
# Axis handling
# ═══════════════════════════════════════════════════════════════════════


class TestAxis:

    def test_resolve(self, a):
        assert resolve_axis(a, 'auto') == 'columns'
        assert resolve_axis(a, 'rows') == 'rows'
        assert resolve_axis(a, 'columns') == 'columns'

    def test_vectors_resolve_to_their_length(self):
        assert resolve_axis(Matrix(1, 4), 'columns') == 'rows'
        assert resolve_axis(Matrix(4, 1), 'rows') == 'columns'

    def test_unknown_axis(self, a):
        with pytest.raises(ValidationError, match="axis"):
            sum(a, 'diagonal')

    def test_columns_orientation(self, a):
        result = sum(a, 'columns')
        assert result.dimensions == (1, 3)
        assert result.tolist() == [[5.0, 7.0, 9.0]]

    def test_rows_orientation(self, a):
        result = sum(a, 'rows')
        assert result.dimensions == (2, 1)
        assert result.tolist() == [[6.0], [15.0]]

    def test_auto_is_columns(self, a):
        assert sum(a) == sum(a, 'columns')

    @pytest.mark.parametrize("axis", ['auto', 'rows', 'columns'])
    def test_row_vector_collapses(self, axis):
        result = mean(Matrix.from_array([[1, 2, 3, 6]]), axis)
        assert result.dimensions == (1, 1)
        assert result[0, 0] == 3.0

    @pytest.mark.parametrize("axis", ['auto', 'rows', 'columns'])
    def test_column_vector_collapses(self, axis):
        result = sum(Matrix.from_array([1, 2, 3]), axis)
        assert result.dimensions == (1, 1)
        assert result[0, 0] == 6.0


# ═══════════════════════════════════════════════════════════════════════
# Generic reducers
# ═══════════════════════════════════════════════════════════════════════


class TestReduceBinary:

    def test_custom_fold(self, a):
        result = reduce_binary(a, lambda acc, x: acc + x * x)
        assert result.tolist() == [[17.0, 29.0, 45.0]]

    def test_scalar_fold(self):
        m = Matrix.from_array([[1, 5], [4, 2], [3, 9]])
        larger = lambda acc, x: acc if acc > x else x
        assert reduce_binary(m, larger).tolist() == [[4.0, 9.0]]
        assert reduce_binary(m, larger, 'rows').tolist() == [[5.0], [4.0], [9.0]]

    def test_fold_receives_floats(self, a):
        seen = []

        def record(acc, x):
            seen.append(type(x))
            return acc + x

        reduce_binary(a, record)
        assert set(seen) == {float}

    def test_seed(self, a):
        assert reduce_binary(a, np.add, seed=1.0).tolist() == [[6.0, 8.0, 10.0]]

    def test_product_fold_along_rows(self, a):
        result = reduce_binary(a, np.multiply, 'rows', seed=1.0)
        assert result.tolist() == [[6.0], [120.0]]

    def test_not_callable(self, a):
        with pytest.raises(ValidationError, match="callable"):
            reduce_binary(a, 42)

    def test_none(self, a):
        with pytest.raises(NullArgumentError):
            reduce_binary(None, np.add)
        with pytest.raises(NullArgumentError):
            reduce_binary(a, None)


class TestReduceVectors:

    def test_custom_reducer(self, a):
        result = reduce_vectors(a, lambda v: v[-1], 'columns')
        assert result.tolist() == [[4.0, 5.0, 6.0]]

    def test_reducer_gets_private_copy(self, a):
        def destructive(values):
            values[:] = 0.0
            return 1.0

        before = a.copy()
        reduce_vectors(a, destructive)
        assert a == before

    def test_reducer_exception_propagates(self, a):
        def failing(values):
            raise ArithmeticError("bad vector")

        with pytest.raises(ArithmeticError, match="bad vector"):
            reduce_vectors(a, failing)

    def test_modes_agree(self, random_matrix, any_mode):
        m = random_matrix(120, 90)
        np.testing.assert_allclose(
            standard_deviation(m).to_numpy().ravel(),
            np.std(m.to_numpy(), axis=0, ddof=1),
        )
        np.testing.assert_allclose(
            mean(m, 'rows').to_numpy().ravel(),
            np.mean(m.to_numpy(), axis=1),
        )


# ═══════════════════════════════════════════════════════════════════════
# Named reductions
# ═══════════════════════════════════════════════════════════════════════


class TestNamedReductions:

    def test_mean(self, a):
        assert mean(a).tolist() == [[2.5, 3.5, 4.5]]

    def test_mean_square(self, a):
        assert mean_square(a, 'rows').tolist() == [[14.0 / 3.0], [77.0 / 3.0]]

    def test_max_min(self, a):
        assert max(a).tolist() == [[4.0, 5.0, 6.0]]
        assert min(a, 'rows').tolist() == [[1.0], [4.0]]

    def test_index_of_first_extreme(self):
        m = Matrix.from_array([[3, 1, 3, 1]])
        assert max_index(m)[0, 0] == 0.0
        assert min_index(m)[0, 0] == 1.0

    def test_max_index_per_column(self):
        m = Matrix.from_array([[0.1, 0.9], [0.8, 0.2], [0.1, 0.9]])
        assert max_index(m).tolist() == [[1.0, 0.0]]

    def test_value_range(self, a):
        assert value_range(a, 'rows').tolist() == [[2.0], [2.0]]

    def test_variance(self):
        assert variance(Matrix.from_array([[1, 2, 3, 4, 5]]))[0, 0] == 2.5

    def test_standard_deviation(self):
        result = standard_deviation(Matrix.from_array([1, 2, 3, 4, 5]))
        assert result[0, 0] == pytest.approx(math.sqrt(2.5))

    def test_variance_single_value_is_nan(self):
        assert math.isnan(variance(Matrix.from_array([[7]]))[0, 0])

    def test_mode_smallest_of_ties(self):
        assert mode(Matrix.from_array([[1, 1, 2, 2, 3]]))[0, 0] == 1.0

    def test_median(self):
        assert median(Matrix.from_array([[3, 1, 2]]))[0, 0] == 2.0

    def test_quartiles(self):
        m = Matrix.from_array([[1, 2, 3, 4, 5]])
        assert quartile1(m)[0, 0] == 1.75
        assert quartile3(m)[0, 0] == 4.25
        assert interquartile_range(m)[0, 0] == 2.5

    def test_statistics_per_column(self):
        m = Matrix.from_array([[1, 10], [2, 20], [3, 30], [4, 40], [5, 50]])
        assert variance(m).tolist() == [[2.5, 250.0]]
        assert median(m).tolist() == [[3.0, 30.0]]
