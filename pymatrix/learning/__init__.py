"""
Machine-learning routines built on the matrix engine.

Submodules:
    linear: Cost, gradient descent, normal equation and fit()
    logistic: Sigmoid, regularised cost, one-vs-all training
    neural_network: Single hidden layer prediction, cost and gradients
    bins: Labelled numeric buckets
"""

from pymatrix.learning import linear, logistic, neural_network
from pymatrix.learning.bins import Bins
from pymatrix.learning.linear import fit
from pymatrix.learning.solution import LinearParams, LinearSolution

__all__ = [
    "linear",
    "logistic",
    "neural_network",
    "Bins",
    "fit",
    "LinearParams",
    "LinearSolution",
]
