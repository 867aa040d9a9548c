"""
Core infrastructure for pymatrix.

This module provides shared abstractions and utilities used by the matrix
engine (linalg) and the learning routines built on top of it.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    result: Generic Result[P] envelope
    compute: Parallel execution and timing
"""

from pymatrix.core.result import Result
from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    NullArgumentError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "NullArgumentError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
]
