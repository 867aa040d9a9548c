"""
Feed-forward neural network with a single hidden layer.

    theta1: hidden_size x (input_size + 1)
    theta2: num_labels  x (hidden_size + 1)

Column 0 of each weight matrix multiplies the bias unit and is left out
of regularisation.
"""

from __future__ import annotations

from typing import Sequence

from pymatrix.core.exceptions import DimensionError
from pymatrix.core.validation import check_not_none, check_scalar
from pymatrix.learning.logistic import most_probable, sigmoid
from pymatrix.linalg import (
    Matrix,
    add_identity_column,
    element_log,
    element_multiply,
    element_power,
    join,
    multiply_by_transpose,
    multiply_transpose_by,
    remove_column,
    zeros,
)


def _check_weights(theta1: Matrix, theta2: Matrix, X: Matrix) -> None:
    check_not_none(theta1, 'theta1')
    check_not_none(theta2, 'theta2')
    check_not_none(X, 'X')
    if theta1.columns != X.columns + 1:
        raise DimensionError(
            f"theta1: expected {X.columns + 1} columns for {X.columns} inputs, got {theta1.columns}",
            expected=f"{theta1.rows}x{X.columns + 1}",
            actual=(theta1.rows, theta1.columns),
        )
    if theta2.columns != theta1.rows + 1:
        raise DimensionError(
            f"theta2: expected {theta1.rows + 1} columns for {theta1.rows} hidden units, "
            f"got {theta2.columns}",
            expected=f"{theta2.rows}x{theta1.rows + 1}",
            actual=(theta2.rows, theta2.columns),
        )


def predict(theta1: Matrix, theta2: Matrix, X: Matrix) -> Matrix:
    """
    Most probable output unit for every row of X.

    Returns:
        An m x 1 column of zero-based output indices.
    """
    _check_weights(theta1, theta2, X)
    a1 = add_identity_column(X)
    a2 = add_identity_column(sigmoid(multiply_by_transpose(theta1, a1)).T)
    a3 = sigmoid(multiply_by_transpose(theta2, a2))
    return most_probable(a3)


def sigmoid_gradient(z: Matrix) -> Matrix:
    """Derivative of the sigmoid, g(z) * (1 - g(z)), elementwise."""
    g = sigmoid(z)
    return element_multiply(g, 1.0 - g)


def assign_labels(y: Matrix, labels: Sequence[float]) -> Matrix:
    """
    One-hot encode a column of labels.

    Row i of the result is all zeros except for a 1 in the column of the
    first label equal to y[i, 0]. Values not in labels give a zero row.

    Example: labels (3, 6, 8) and y = [8; 3] give

        0 0 1
        1 0 0
    """
    check_not_none(y, 'y')
    check_not_none(labels, 'labels')
    values = [check_scalar(label, 'labels') for label in labels]
    if not values:
        raise DimensionError("assign_labels: at least one label is required")

    result = Matrix(y.rows, len(values))
    for i in range(y.rows):
        target = y[i, 0]
        for j, label in enumerate(values):
            if target == label:
                result[i, j] = 1.0
                break
    return result


def _without_bias(theta: Matrix) -> Matrix:
    """theta with its bias column replaced by zeros."""
    return join(zeros(theta.rows, 1), remove_column(theta, 0), 'columns')


def cost_function(
    theta1: Matrix,
    theta2: Matrix,
    X: Matrix,
    y: Matrix,
    labels: Sequence[float],
    lam: float = 0.0,
) -> tuple[float, tuple[Matrix, Matrix]]:
    """
    Regularised cross-entropy cost and back-propagated gradients.

    Args:
        theta1: Input-to-hidden weights
        theta2: Hidden-to-output weights, one row per label
        X: Features, m x n
        y: Labels of each example, m x 1
        labels: Label of each output unit
        lam: Regularisation parameter

    Returns:
        (J, (grad1, grad2)) with the gradients shaped like theta1 and theta2.
    """
    _check_weights(theta1, theta2, X)
    check_not_none(y, 'y')
    lam = check_scalar(lam, 'lam')
    if y.rows != X.rows or y.columns != 1:
        raise DimensionError(
            f"cost_function: y must be {X.rows}x1, got {y.rows}x{y.columns}",
            expected=f"{X.rows}x1",
            actual=(y.rows, y.columns),
        )
    if theta2.rows != len(labels):
        raise DimensionError(
            f"theta2: expected one row per label ({len(labels)}), got {theta2.rows}",
            expected=f"{len(labels)}x{theta2.columns}",
            actual=(theta2.rows, theta2.columns),
        )

    m = float(X.rows)
    Y = assign_labels(y, labels)

    # Feed forward
    a1 = add_identity_column(X)
    z2 = multiply_by_transpose(a1, theta1)
    a2 = add_identity_column(sigmoid(z2))
    a3 = sigmoid(multiply_by_transpose(a2, theta2))

    J = (
        element_multiply(-Y, element_log(a3))
        - element_multiply(1.0 - Y, element_log(1.0 - a3))
    ).sum_all_elements / m

    t1 = remove_column(theta1, 0)
    t2 = remove_column(theta2, 0)
    J += (lam / (2.0 * m)) * (
        element_power(t1, 2).sum_all_elements + element_power(t2, 2).sum_all_elements
    )

    # Back propagation
    delta3 = a3 - Y
    delta2 = element_multiply(delta3 * t2, sigmoid_gradient(z2))

    grad1 = multiply_transpose_by(delta2, a1) / m + (lam / m) * _without_bias(theta1)
    grad2 = multiply_transpose_by(delta3, a2) / m + (lam / m) * _without_bias(theta2)

    return J, (grad1, grad2)
