"""
Logistic regression and one-vs-all classification.

Binary cost (m examples, h = sigmoid(X theta)):

    J = (1/m) * (-y' log(h) - (1 - y)' log(1 - h))
        + lam/(2m) * sum(theta[1:]^2)
    grad = (1/m) * X'(h - y) + (lam/m) * [0; theta[1:]]

The bias term theta[0] is never regularised.

one_vs_all trains one classifier per label with scipy's conjugate
gradient minimiser and stacks the coefficients as rows of a matrix.
"""

from __future__ import annotations

import logging
import warnings
from typing import Sequence

import numpy as np
from scipy.optimize import minimize

from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import check_not_none, check_scalar
from pymatrix.linalg import (
    Matrix,
    add_identity_column,
    element_exp,
    element_log,
    join,
    max_index,
    multiply_by_transpose,
    multiply_transpose_by,
    ones,
    zeros,
)

logger = logging.getLogger(__name__)


def sigmoid(z: Matrix) -> Matrix:
    """Logistic function 1 / (1 + e^-z), elementwise."""
    check_not_none(z, 'z')
    return 1.0 / (1.0 + element_exp(-z))


def predict(X: Matrix, theta: Matrix) -> Matrix:
    """1.0 where sigmoid(X theta) >= 0.5, else 0.0."""
    check_not_none(X, 'X')
    check_not_none(theta, 'theta')
    return sigmoid(X * theta) >= 0.5


def _check_problem(X: Matrix, y: Matrix, theta: Matrix) -> None:
    check_not_none(X, 'X')
    check_not_none(y, 'y')
    check_not_none(theta, 'theta')
    if y.columns != 1 or theta.columns != 1 or X.rows != y.rows or X.columns != theta.rows:
        raise DimensionError(
            f"cost_function: cannot work with X {X.rows}x{X.columns}, "
            f"y {y.rows}x{y.columns} and theta {theta.rows}x{theta.columns}",
            expected="X m x n, y m x 1, theta n x 1",
            actual=(X.rows, X.columns),
        )


def cost_function(
    X: Matrix,
    y: Matrix,
    theta: Matrix,
    lam: float = 0.0,
) -> tuple[float, Matrix]:
    """
    Regularised logistic cost and its gradient.

    Returns:
        (J, grad) where grad has the shape of theta.
    """
    _check_problem(X, y, theta)
    lam = check_scalar(lam, 'lam')
    m = float(X.rows)

    h = sigmoid(X * theta)
    part1 = multiply_transpose_by(-y, element_log(h)).sum_all_elements
    part2 = multiply_transpose_by(1.0 - y, element_log(1.0 - h)).sum_all_elements
    J = (part1 - part2) / m

    penalised = theta.copy()
    penalised[0, 0] = 0.0
    J += (lam / (2.0 * m)) * multiply_transpose_by(penalised).sum_all_elements
    grad = multiply_transpose_by(X, h - y) / m + (lam / m) * penalised

    return J, grad


def one_vs_all(
    X: Matrix,
    y: Matrix,
    labels: Sequence[float],
    lam: float = 0.0,
    max_iterations: int = 50,
) -> Matrix:
    """
    Train one regularised logistic classifier per label.

    A column of ones is prepended to X, so each classifier has
    X.columns + 1 coefficients.

    Args:
        X: Features, m x n
        y: Labels of each example, m x 1
        labels: The distinct labels to train against
        lam: Regularisation parameter
        max_iterations: Iteration cap for the minimiser of each label

    Returns:
        A len(labels) x (n + 1) matrix; row c holds the coefficients of
        the classifier for labels[c].

    Warns:
        RuntimeWarning: When the minimiser stops before converging.
    """
    check_not_none(X, 'X')
    check_not_none(y, 'y')
    check_not_none(labels, 'labels')
    if len(labels) == 0:
        raise ValidationError("labels: at least one label is required")
    if y.columns != 1 or y.rows != X.rows:
        raise DimensionError(
            f"one_vs_all: y must be {X.rows}x1, got {y.rows}x{y.columns}",
            expected=f"{X.rows}x1",
            actual=(y.rows, y.columns),
        )

    m, n = X.rows, X.columns
    features = join(ones(m, 1), X, 'columns')
    all_theta = Matrix(len(labels), n + 1)

    for c, label in enumerate(labels):
        targets = y == check_scalar(label, 'labels')

        def objective(flat: np.ndarray) -> tuple[float, np.ndarray]:
            J, grad = cost_function(features, targets, Matrix.from_array(flat), lam)
            return J, grad.to_numpy().ravel()

        res = minimize(
            objective,
            np.zeros(n + 1),
            jac=True,
            method='CG',
            options={'maxiter': max_iterations},
        )
        logger.debug(
            "one_vs_all: label %r after %d iterations, cost %.6g", label, res.nit, res.fun,
        )
        if not res.success:
            warnings.warn(
                f"one_vs_all: minimiser did not converge for label {label!r}: {res.message}",
                RuntimeWarning,
                stacklevel=2,
            )

        all_theta.set_row(c, Matrix.from_array(res.x).T)

    return all_theta


def predict_one_vs_all(all_theta: Matrix, X: Matrix) -> Matrix:
    """
    Index of the most probable classifier for every row of X.

    Returns:
        An m x 1 column of zero-based row indices into all_theta.
    """
    check_not_none(all_theta, 'all_theta')
    check_not_none(X, 'X')
    h = sigmoid(multiply_by_transpose(all_theta, add_identity_column(X)))
    return most_probable(h)


def most_probable(h: Matrix) -> Matrix:
    """
    Row index of the largest entry in every column of h.

    h holds one row per output unit and one column per example; the
    result is an m x 1 column. A single output unit always wins.
    """
    if h.rows == 1:
        return zeros(h.columns, 1)
    return max_index(h, 'columns').T
