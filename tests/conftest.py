"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import Matrix
from pymatrix.core.compute.parallel import execution


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sequential():
    """Force every parallel_for() in the test to run in the calling thread."""
    with execution(mode='sequential') as config:
        yield config


@pytest.fixture
def threaded():
    """Force every parallel_for() in the test onto a small thread pool."""
    with execution(mode='threads', max_workers=4) as config:
        yield config


@pytest.fixture(params=['sequential', 'threads'])
def any_mode(request):
    """Run the test once per execution mode; results must not differ."""
    with execution(mode=request.param, max_workers=4) as config:
        yield config


@pytest.fixture
def random_matrix(rng):
    """Factory for random matrices with a fixed seed."""
    def make(rows, columns=None):
        columns = rows if columns is None else columns
        return Matrix.from_array(rng.uniform(-5.0, 5.0, size=(rows, columns)))
    return make


@pytest.fixture
def regression_data():
    """Four examples with an intercept column, y = 2x + 1 exactly."""
    X = Matrix.from_array([[1, 1], [1, 2], [1, 3], [1, 4]])
    y = Matrix.from_array([[3], [5], [7], [9]])
    return X, y
