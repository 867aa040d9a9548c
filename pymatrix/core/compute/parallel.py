"""
Data-parallel execution of independent matrix kernels.

Matrix operations hand this module a unit count (rows or columns) and a
task that computes one unit and writes it into its own slice of a
preallocated output buffer. parallel_for() runs every unit and joins
before returning, so callers see a synchronous API.

Execution modes:
    'sequential': plain loop in the calling thread
    'threads':    fan out over a ThreadPoolExecutor
    'auto':       threads when there are enough units and more than one CPU

Every mode produces identical results: tasks only read their inputs and
write disjoint output slices.

The process-wide default is read from the environment:
    PYMATRIX_EXECUTION    auto | threads | sequential
    PYMATRIX_MAX_WORKERS  positive integer
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Callable, Iterator, Literal

from pymatrix.core.exceptions import ValidationError


logger = logging.getLogger(__name__)

ExecutionMode = Literal['auto', 'threads', 'sequential']
EXECUTION_MODES: tuple[str, ...] = ('auto', 'threads', 'sequential')


@dataclass(frozen=True)
class ExecutionConfig:
    """
    How parallel_for() schedules units of work.

    Attributes:
        mode: 'auto', 'threads' or 'sequential'
        max_workers: Thread pool size. None uses min(32, cpu_count + 4),
            the ThreadPoolExecutor default.
        min_parallel_units: In 'auto' mode, fewer units than this run
            sequentially.
    """
    mode: ExecutionMode = 'auto'
    max_workers: int | None = None
    min_parallel_units: int = 64

    def __post_init__(self):
        if self.mode not in EXECUTION_MODES:
            raise ValidationError(
                f"mode: must be one of {EXECUTION_MODES}, got {self.mode!r}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValidationError(
                f"max_workers: must be at least 1, got {self.max_workers}"
            )
        if self.min_parallel_units < 1:
            raise ValidationError(
                f"min_parallel_units: must be at least 1, got {self.min_parallel_units}"
            )

    @property
    def workers(self) -> int:
        """Resolved thread pool size."""
        if self.max_workers is not None:
            return self.max_workers
        return min(32, (os.cpu_count() or 1) + 4)


def config_from_env(environ: dict[str, str] | None = None) -> ExecutionConfig:
    """
    Build an ExecutionConfig from PYMATRIX_* environment variables.

    Raises:
        ValidationError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ
    mode = env.get('PYMATRIX_EXECUTION', 'auto').strip().lower() or 'auto'
    raw_workers = env.get('PYMATRIX_MAX_WORKERS', '').strip()

    max_workers = None
    if raw_workers:
        try:
            max_workers = int(raw_workers)
        except ValueError as e:
            raise ValidationError(
                f"PYMATRIX_MAX_WORKERS: expected an integer, got {raw_workers!r}"
            ) from e

    return ExecutionConfig(mode=mode, max_workers=max_workers)


_config = config_from_env()


def get_execution_config() -> ExecutionConfig:
    """Return the process-wide execution config."""
    return _config


def set_execution_config(
    config: ExecutionConfig | None = None,
    **changes,
) -> ExecutionConfig:
    """
    Replace the process-wide execution config.

    Args:
        config: New config. If None, the current config is used as base.
        **changes: Field overrides applied on top (mode, max_workers,
            min_parallel_units).

    Returns:
        The previous config, so callers can restore it.
    """
    global _config
    previous = _config
    base = config if config is not None else _config
    _config = replace(base, **changes) if changes else base
    logger.debug("execution config set to %s", _config)
    return previous


@contextmanager
def execution(**changes) -> Iterator[ExecutionConfig]:
    """
    Temporarily override the execution config.

    Usage:
        with execution(mode='sequential'):
            product = multiply(a, b)
    """
    previous = set_execution_config(**changes)
    try:
        yield _config
    finally:
        set_execution_config(previous)


def _use_threads(n_units: int, config: ExecutionConfig) -> bool:
    if config.mode == 'sequential' or n_units < 2:
        return False
    if config.mode == 'threads':
        return True
    return n_units >= config.min_parallel_units and (os.cpu_count() or 1) > 1


def parallel_for(
    n_units: int,
    task: Callable[[int], None],
    *,
    config: ExecutionConfig | None = None,
) -> None:
    """
    Run task(i) for every i in range(n_units) and wait for all of them.

    Args:
        n_units: Number of independent units (rows or columns)
        task: Callable computing one unit. It must only write to the
            output slice owned by its unit.
        config: Overrides the process-wide config for this call.

    Raises:
        Whatever the first failing task raised.
    """
    cfg = config if config is not None else _config

    if not _use_threads(n_units, cfg):
        for i in range(n_units):
            task(i)
        return

    workers = min(cfg.workers, n_units)
    logger.debug("dispatching %d units over %d threads", n_units, workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        # Consuming the iterator re-raises the first task exception.
        for _ in pool.map(task, range(n_units)):
            pass
