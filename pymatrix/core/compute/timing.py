"""
Wall-clock timing for the learning routines.

A fit runs many engine operations in a row; Timer splits the total into
named sections so Result.timing shows where the time went.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class Timer:
    """
    Total plus named-section timer built on time.perf_counter().

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('normal_equation'):
            theta = normal_equation(X, y)
        timer.stop()
        timer.result()   # {'total_seconds': ..., 'normal_equation': ...}

    Re-entering a section name adds to its running total, so a section
    can wrap the body of a loop.
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._started: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        if self._started is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started

    @property
    def running(self) -> bool:
        return self._started is not None and self._total is None

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        began = time.perf_counter()
        try:
            yield
        finally:
            spent = time.perf_counter() - began
            self._sections[name] = self._sections.get(name, 0.0) + spent

    def result(self) -> dict[str, float]:
        """
        Timings in seconds, keyed 'total_seconds' plus one key per section.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed(label: str | None = None) -> Iterator[Timer]:
    """
    Time a block; the Timer is stopped on exit, even if the block raises.

    With a label, the total is also logged at DEBUG.
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
        if label is not None:
            logger.debug("%s took %.6fs", label, timer.result()['total_seconds'])
