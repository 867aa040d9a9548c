"""
Dense matrix engine.

Matrix is the storage type; everything else is a module-level function
taking matrices and returning new ones.

Usage:
    from pymatrix.linalg import Matrix, magic, inverse, mean

    a = magic(4)
    m = mean(a, axis='rows')
    b = inverse(Matrix.from_array([[4, 7], [2, 6]]))
"""

from pymatrix.linalg.matrix import Matrix
from pymatrix.linalg._elementwise import (
    add,
    add_scalar,
    compare,
    divide_scalar,
    element_divide,
    element_exp,
    element_log,
    element_map,
    element_multiply,
    element_operation,
    element_power,
    equal_to,
    greater_equal,
    greater_than,
    less_equal,
    less_than,
    multiply_scalar,
    negate,
    not_equal_to,
    scalar_divide,
    scalar_subtract,
    subtract,
    subtract_scalar,
)
from pymatrix.linalg._products import (
    multiply,
    multiply_by_transpose,
    multiply_transpose_by,
    transpose,
)
from pymatrix.linalg._structure import (
    AXES,
    Axis,
    add_identity_column,
    expand_polynomials,
    get_column,
    get_row,
    join,
    remove_column,
    reshape,
    set_row,
    swap_rows,
    unrolled,
)
from pymatrix.linalg._inversion import inverse
from pymatrix.linalg._reductions import (
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
from pymatrix.linalg.factories import (
    MATRIX_KINDS,
    create,
    identity,
    magic,
    ones,
    rand,
    zeros,
)

__all__ = [
    "Matrix",
    # Elementwise
    "add", "subtract", "add_scalar", "subtract_scalar", "scalar_subtract",
    "multiply_scalar", "divide_scalar", "scalar_divide", "negate",
    "element_operation", "element_map", "element_multiply", "element_divide",
    "element_power", "element_exp", "element_log",
    "equal_to", "not_equal_to", "less_than", "greater_than",
    "less_equal", "greater_equal", "compare",
    # Products
    "multiply", "transpose", "multiply_by_transpose", "multiply_transpose_by",
    # Structure
    "Axis", "AXES", "get_row", "get_column", "set_row", "swap_rows", "join",
    "add_identity_column", "remove_column", "expand_polynomials", "reshape",
    "unrolled",
    # Inversion
    "inverse",
    # Reductions
    "reduce_binary", "reduce_vectors", "resolve_axis",
    "sum", "mean", "mean_square", "max", "min", "max_index", "min_index",
    "value_range", "interquartile_range", "median", "quartile1", "quartile3",
    "mode", "variance", "standard_deviation",
    # Factories
    "MATRIX_KINDS", "create", "identity", "ones", "zeros", "rand", "magic",
]
