"""
Shared compute infrastructure for pymatrix.

Submodules:
    parallel: Execution config and the parallel_for() primitive
    timing: Execution timing utilities
"""

from pymatrix.core.compute.parallel import (
    EXECUTION_MODES,
    ExecutionConfig,
    config_from_env,
    execution,
    get_execution_config,
    parallel_for,
    set_execution_config,
)
from pymatrix.core.compute.timing import Timer, timed

__all__ = [
    # Parallel execution
    "EXECUTION_MODES",
    "ExecutionConfig",
    "config_from_env",
    "execution",
    "get_execution_config",
    "parallel_for",
    "set_execution_config",
    # Timing
    "Timer",
    "timed",
]
