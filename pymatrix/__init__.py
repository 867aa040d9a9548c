"""
pymatrix: dense matrix engine with a small machine-learning toolkit.

Usage:
    from pymatrix import Matrix, magic
    from pymatrix.linalg import inverse, mean

    a = magic(3)
    product = a * inverse(a)          # identity, up to rounding
    column_means = mean(a)            # 1 x 3
"""

__version__ = "0.1.0"
__author__ = "pymatrix contributors"

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    NullArgumentError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
)
from pymatrix.core.compute.parallel import (
    ExecutionConfig,
    execution,
    get_execution_config,
    set_execution_config,
)
from pymatrix.linalg import (
    Matrix,
    create,
    identity,
    magic,
    ones,
    rand,
    zeros,
)
from pymatrix import linalg, learning

__all__ = [
    "__version__",
    # Engine
    "Matrix",
    "create",
    "identity",
    "magic",
    "ones",
    "rand",
    "zeros",
    # Execution
    "ExecutionConfig",
    "execution",
    "get_execution_config",
    "set_execution_config",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "NullArgumentError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    # Submodules
    "linalg",
    "learning",
]
