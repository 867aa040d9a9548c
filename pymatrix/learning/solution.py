"""
Linear regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.result import Result
from pymatrix.linalg import Matrix


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    theta is an n x 1 column of coefficients. cost_history holds the cost
    after every gradient descent step (empty for the normal equation).
    """
    theta: Matrix
    cost: float
    cost_history: tuple[float, ...] = ()


@dataclass
class LinearSolution:
    """
    User-facing linear regression results.

    Wraps the Result envelope and exposes the fitted coefficients along
    with the metadata recorded while fitting.
    """
    _result: Result[LinearParams]

    @property
    def theta(self) -> Matrix:
        return self._result.params.theta.copy()

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.theta.to_numpy().ravel()

    @property
    def cost(self) -> float:
        return self._result.params.cost

    @property
    def cost_history(self) -> tuple[float, ...]:
        return self._result.params.cost_history

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def predict(self, X: Matrix) -> Matrix:
        """Hypothesis X * theta for new rows of features."""
        return X * self._result.params.theta

    def summary(self) -> str:
        lines = [
            f"Linear regression ({self.method})",
            f"  observations: {self.info.get('n_observations')}",
            f"  features:     {self.info.get('n_features')}",
            f"  cost:         {self.cost:.6g}",
            "  theta:",
        ]
        lines.extend(f"    [{i}] {value:.6g}" for i, value in enumerate(self.coefficients))
        if self.timing is not None:
            lines.append(f"  time:         {self.timing['total_seconds']:.4f}s")
        for message in self.warnings:
            lines.append(f"  warning: {message}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"LinearSolution(method={self.method!r}, cost={self.cost:.6g})"
