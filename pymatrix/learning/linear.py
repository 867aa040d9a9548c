"""
Linear regression built on the matrix engine.

    compute_cost        J(theta) = sum((X theta - y)^2) / (2m)
    gradient_descent    batch descent, theta -= alpha/m * X'(X theta - y)
    normal_equation     theta = (X'X)^-1 X'y
    fit                 either method, wrapped in a LinearSolution

X is m x n (callers add the intercept column themselves, e.g. with
add_identity_column), y is m x 1 and theta is n x 1.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Literal

from numpy.typing import ArrayLike

from pymatrix.core.compute.timing import Timer
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.result import Result
from pymatrix.core.validation import check_choice, check_not_none, check_scalar
from pymatrix.learning.solution import LinearParams, LinearSolution
from pymatrix.linalg import (
    Matrix,
    element_divide,
    element_power,
    inverse,
    mean,
    multiply_transpose_by,
    ones,
    standard_deviation,
    sum,
)

logger = logging.getLogger(__name__)

LinearMethod = Literal['normal', 'gradient']
LINEAR_METHODS: tuple[str, ...] = ('normal', 'gradient')


def _check_problem(X: Matrix, y: Matrix, theta: Matrix, operation: str) -> None:
    check_not_none(X, 'X')
    check_not_none(y, 'y')
    check_not_none(theta, 'theta')
    if y.columns != 1 or theta.columns != 1:
        raise DimensionError(
            f"{operation}: y and theta must be column vectors, "
            f"got {y.rows}x{y.columns} and {theta.rows}x{theta.columns}",
        )
    if X.rows != y.rows or X.columns != theta.rows:
        raise DimensionError(
            f"{operation}: cannot work with X {X.rows}x{X.columns}, "
            f"y {y.rows}x{y.columns} and theta {theta.rows}x{theta.columns}",
            expected="X m x n, y m x 1, theta n x 1",
            actual=(X.rows, X.columns),
        )


def compute_cost(X: Matrix, y: Matrix, theta: Matrix) -> float:
    """
    Squared-error cost of using theta as the hypothesis coefficients.

    The lower the result, the better the fit.
    """
    _check_problem(X, y, theta, 'compute_cost')
    squared = element_power(X * theta - y, 2)
    return sum(squared)[0, 0] / (2.0 * y.rows)


def gradient_descent(
    X: Matrix,
    y: Matrix,
    theta: Matrix,
    alpha: float,
    iterations: int,
    history: list[float] | None = None,
) -> Matrix:
    """
    Improve theta by batch gradient descent.

    Args:
        X: Features, m x n
        y: Targets, m x 1
        theta: Starting coefficients, n x 1 (not modified)
        alpha: Learning rate
        iterations: Number of descent steps
        history: When given, the cost after every step is appended to it

    Returns:
        The n x 1 coefficients after the last step.
    """
    _check_problem(X, y, theta, 'gradient_descent')
    alpha = check_scalar(alpha, 'alpha')
    if isinstance(iterations, bool) or not isinstance(iterations, numbers.Integral) or iterations < 0:
        raise ValidationError(f"iterations: expected a non-negative integer, got {iterations!r}")

    m = y.rows
    for _ in range(iterations):
        errors = X * theta - y
        theta = theta - (alpha / m) * multiply_transpose_by(X, errors)
        if history is not None:
            history.append(compute_cost(X, y, theta))

    return theta


def feature_normalization(X: Matrix) -> Matrix:
    """
    Scale every column to zero mean and unit (sample) standard deviation.

    Raises:
        DimensionError: If X has fewer than two rows
    """
    check_not_none(X, 'X')
    if X.rows < 2:
        raise DimensionError(
            f"feature_normalization: need at least 2 rows, got {X.rows}",
            actual=(X.rows, X.columns),
        )

    column = ones(X.rows, 1)
    mu = column * mean(X, 'columns')
    sigma = column * standard_deviation(X, 'columns')
    return element_divide(X - mu, sigma)


def normal_equation(X: Matrix, y: Matrix) -> Matrix:
    """Closed-form least squares coefficients (X'X)^-1 X'y."""
    check_not_none(X, 'X')
    check_not_none(y, 'y')
    return inverse(multiply_transpose_by(X)) * multiply_transpose_by(X, y)


def _as_matrix(value: Matrix | ArrayLike, name: str) -> Matrix:
    check_not_none(value, name)
    if isinstance(value, Matrix):
        return value
    return Matrix.from_array(value)


def fit(
    X: Matrix | ArrayLike,
    y: Matrix | ArrayLike,
    *,
    method: LinearMethod = 'normal',
    alpha: float = 0.01,
    iterations: int = 1500,
    theta: Matrix | ArrayLike | None = None,
) -> LinearSolution:
    """
    Fit a linear regression model.

    Args:
        X: Features (m x n). A Matrix or anything Matrix.from_array accepts.
        y: Targets (m values or m x 1).
        method: 'normal' solves the normal equation; 'gradient' runs
            gradient_descent from theta (zeros when omitted).
        alpha: Learning rate for 'gradient'.
        iterations: Descent steps for 'gradient'.
        theta: Starting coefficients for 'gradient'.

    Returns:
        LinearSolution with theta, final cost and timing.

    Raises:
        ValidationError: If method is unknown
        DimensionError: If X and y are inconsistent
        SingularMatrixError: If X'X cannot be inverted ('normal')
    """
    check_choice(method, LINEAR_METHODS, 'method')
    X = _as_matrix(X, 'X')
    y = _as_matrix(y, 'y')
    start = Matrix(X.columns, 1) if theta is None else _as_matrix(theta, 'theta')
    _check_problem(X, y, start, 'fit')

    timer = Timer()
    timer.start()
    info: dict = {'n_observations': X.rows, 'n_features': X.columns}
    warnings: list[str] = []
    history: list[float] = []

    if method == 'normal':
        logger.debug("fit: normal equation on %dx%d features", X.rows, X.columns)
        with timer.section('normal_equation'):
            coefficients = normal_equation(X, y)
        method_name = 'normal_equation'
    else:
        logger.debug(
            "fit: gradient descent, alpha=%g, %d iterations", alpha, iterations,
        )
        with timer.section('gradient_descent'):
            coefficients = gradient_descent(X, y, start, alpha, iterations, history)
        info.update(alpha=alpha, iterations=iterations)
        method_name = 'gradient_descent'
        if len(history) > 1 and history[-1] > history[-2]:
            warnings.append("cost increased on the last step; alpha may be too large")

    cost = compute_cost(X, y, coefficients)
    if not math.isfinite(cost):
        warnings.append(f"final cost is not finite ({cost})")
    timer.stop()

    for message in warnings:
        logger.warning("fit: %s", message)

    result = Result(
        params=LinearParams(theta=coefficients, cost=cost, cost_history=tuple(history)),
        info=info,
        timing=timer.result(),
        method=method_name,
        warnings=tuple(warnings),
    )
    return LinearSolution(_result=result)
