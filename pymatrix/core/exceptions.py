"""
Exception hierarchy for pymatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class NullArgumentError(ValidationError, TypeError):
    """
    A required matrix or function argument is missing (None).

    Also a TypeError so callers that guard against bad argument types
    keep working.

    Attributes:
        argument: Name of the missing parameter
    """

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when shapes don't match the requirements of an operation:
    elementwise operations on different shapes, products whose inner
    dimensions disagree, joins along a mismatched axis, inversion of a
    non-square matrix, and so on.

    Attributes:
        expected: Description of the expected shape, if available
        actual: The offending shape, if available
    """

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        actual: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Row or column index outside the valid range.

    Attributes:
        index: The offending index
        limit: Exclusive upper bound that the index had to respect
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        limit: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.limit = limit


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when Gauss-Jordan elimination meets a zero pivot and no other
    row can be swapped into its place.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot: Diagonal position at which elimination stopped
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot = pivot
