"""
Tests for linear regression.

Validates:
    - compute_cost against known values
    - gradient_descent convergence, history and argument checks
    - normal_equation and feature_normalization
    - fit() for both methods, its Result metadata and warnings
"""

import numpy as np
import pytest

from pymatrix import Matrix
from pymatrix.core.exceptions import (
    DimensionError,
    NullArgumentError,
    SingularMatrixError,
    ValidationError,
)
from pymatrix.learning import LinearSolution, fit
from pymatrix.learning.linear import (
    compute_cost,
    feature_normalization,
    gradient_descent,
    normal_equation,
)


# ═══════════════════════════════════════════════════════════════════════
# compute_cost
# ═══════════════════════════════════════════════════════════════════════


class TestComputeCost:

    def test_three_features(self):
        X = Matrix.from_array([[2, 1, 3], [7, 1, 9], [1, 8, 1], [3, 7, 4]])
        y = Matrix.from_array([[2], [5], [5], [6]])
        theta = Matrix.from_array([[0.4], [0.6], [0.8]])
        assert compute_cost(X, y, theta) == pytest.approx(5.295)

    def test_intercept_and_feature(self):
        X = Matrix.from_array([[1, 2], [1, 3], [1, 4], [1, 5]])
        y = Matrix.from_array([[7], [6], [5], [4]])
        theta = Matrix.from_array([[0.1], [0.2]])
        assert compute_cost(X, y, theta) == pytest.approx(11.945)

    def test_intercept_and_two_features(self):
        X = Matrix.from_array([[1, 2, 3], [1, 3, 4], [1, 4, 5], [1, 5, 6]])
        y = Matrix.from_array([[7], [6], [5], [4]])
        theta = Matrix.from_array([[0.1], [0.2], [0.3]])
        assert compute_cost(X, y, theta) == pytest.approx(7.0175)

    def test_perfect_fit(self, regression_data):
        X, y = regression_data
        assert compute_cost(X, y, Matrix.from_array([[1], [2]])) == 0.0

    def test_theta_rows_mismatch(self, regression_data):
        X, y = regression_data
        with pytest.raises(DimensionError):
            compute_cost(X, y, Matrix(3, 1))

    def test_y_rows_mismatch(self, regression_data):
        X, _ = regression_data
        with pytest.raises(DimensionError):
            compute_cost(X, Matrix(3, 1), Matrix(2, 1))

    def test_none(self, regression_data):
        X, y = regression_data
        with pytest.raises(NullArgumentError):
            compute_cost(X, y, None)


# ═══════════════════════════════════════════════════════════════════════
# gradient_descent
# ═══════════════════════════════════════════════════════════════════════


class TestGradientDescent:

    def test_converges(self, regression_data):
        X, y = regression_data
        theta = gradient_descent(X, y, Matrix(2, 1), 0.1, 3000)
        np.testing.assert_allclose(theta.to_numpy().ravel(), [1.0, 2.0], atol=1e-6)

    def test_history_decreases(self, regression_data):
        X, y = regression_data
        history = []
        gradient_descent(X, y, Matrix(2, 1), 0.05, 50, history)
        assert len(history) == 50
        assert all(later <= earlier for earlier, later in zip(history, history[1:]))

    def test_zero_iterations(self, regression_data):
        X, y = regression_data
        start = Matrix.from_array([[0.5], [0.5]])
        assert gradient_descent(X, y, start, 0.1, 0) == start

    def test_start_not_modified(self, regression_data):
        X, y = regression_data
        start = Matrix(2, 1)
        gradient_descent(X, y, start, 0.1, 10)
        assert start == Matrix(2, 1)

    def test_reduces_cost_without_intercept(self):
        X = Matrix.from_array([[2, 1, 3], [7, 1, 9], [1, 8, 1], [3, 7, 4]])
        y = Matrix.from_array([[2], [5], [5], [6]])
        start = Matrix(3, 1)
        theta = gradient_descent(X, y, start, 0.01, 100)
        assert compute_cost(X, y, theta) < compute_cost(X, y, start)

    @pytest.mark.parametrize("iterations", [-1, 2.5, True])
    def test_invalid_iterations(self, regression_data, iterations):
        X, y = regression_data
        with pytest.raises(ValidationError, match="iterations"):
            gradient_descent(X, y, Matrix(2, 1), 0.1, iterations)


# ═══════════════════════════════════════════════════════════════════════
# normal_equation / feature_normalization
# ═══════════════════════════════════════════════════════════════════════


class TestClosedForm:

    def test_normal_equation(self, regression_data):
        X, y = regression_data
        theta = normal_equation(X, y)
        assert theta.dimensions == (2, 1)
        np.testing.assert_allclose(theta.to_numpy().ravel(), [1.0, 2.0], atol=1e-10)

    def test_normal_equation_matches_lstsq(self, rng):
        x = np.column_stack([np.ones(30), rng.standard_normal((30, 3))])
        target = rng.standard_normal(30)
        theta = normal_equation(Matrix.from_array(x), Matrix.from_array(target))
        expected, *_ = np.linalg.lstsq(x, target, rcond=None)
        np.testing.assert_allclose(theta.to_numpy().ravel(), expected, atol=1e-10)

    def test_normal_equation_collinear(self):
        X = Matrix.from_array([[1, 1], [1, 1], [1, 1]])
        with pytest.raises(SingularMatrixError):
            normal_equation(X, Matrix.from_array([1, 2, 3]))

    def test_feature_normalization(self, rng):
        X = Matrix.from_array(rng.uniform(10, 100, size=(25, 3)))
        normalized = feature_normalization(X).to_numpy()
        np.testing.assert_allclose(normalized.mean(axis=0), 0.0, atol=1e-12)
        np.testing.assert_allclose(normalized.std(axis=0, ddof=1), 1.0)

    def test_feature_normalization_single_row(self):
        with pytest.raises(DimensionError, match="at least 2 rows"):
            feature_normalization(Matrix(1, 3))


# ═══════════════════════════════════════════════════════════════════════
# fit
# ═══════════════════════════════════════════════════════════════════════


class TestFit:

    def test_normal(self, regression_data):
        X, y = regression_data
        solution = fit(X, y)
        assert isinstance(solution, LinearSolution)
        assert solution.method == 'normal_equation'
        np.testing.assert_allclose(solution.coefficients, [1.0, 2.0], atol=1e-10)
        assert solution.cost == pytest.approx(0.0, abs=1e-18)
        assert solution.cost_history == ()
        assert solution.info['n_observations'] == 4
        assert solution.info['n_features'] == 2
        assert {'total_seconds', 'normal_equation'} <= set(solution.timing)
        assert solution.warnings == ()

    def test_gradient(self, regression_data):
        X, y = regression_data
        solution = fit(X, y, method='gradient', alpha=0.1, iterations=2000)
        assert solution.method == 'gradient_descent'
        assert len(solution.cost_history) == 2000
        assert solution.info['alpha'] == 0.1
        np.testing.assert_allclose(solution.coefficients, [1.0, 2.0], atol=1e-4)

    def test_gradient_starting_theta(self, regression_data):
        X, y = regression_data
        solution = fit(X, y, method='gradient', iterations=0, theta=[[1], [2]])
        assert solution.cost == 0.0

    def test_accepts_arrays(self):
        x = np.column_stack([np.ones(4), [1, 2, 3, 4]])
        solution = fit(x, [3, 5, 7, 9])
        np.testing.assert_allclose(solution.coefficients, [1.0, 2.0], atol=1e-10)

    def test_divergence_warning(self, regression_data):
        X, y = regression_data
        solution = fit(X, y, method='gradient', alpha=1.0, iterations=10)
        assert solution._result.has_warning("alpha may be too large")

    def test_unknown_method(self, regression_data):
        X, y = regression_data
        with pytest.raises(ValidationError, match="method"):
            fit(X, y, method='qr')

    def test_shape_mismatch(self, regression_data):
        X, _ = regression_data
        with pytest.raises(DimensionError):
            fit(X, [1, 2, 3])

    def test_predict(self, regression_data):
        X, y = regression_data
        np.testing.assert_allclose(fit(X, y).predict(X).to_numpy(), y.to_numpy())

    def test_theta_is_copy(self, regression_data):
        X, y = regression_data
        solution = fit(X, y)
        theta = solution.theta
        theta[0, 0] = 100.0
        assert solution.coefficients[0] != 100.0

    def test_summary(self, regression_data):
        X, y = regression_data
        text = fit(X, y).summary()
        assert "normal_equation" in text
        assert "observations: 4" in text
