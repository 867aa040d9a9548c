"""
Result envelope shared by the learning routines.

Each routine defines its own frozen params payload (LinearParams, ...) and
wraps it in Result together with metadata, timings and warnings. Solution
classes then expose the fields users care about as properties.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen output of a fit.

    Attributes:
        params: The routine's payload, e.g. LinearParams
        info: Problem sizes and settings, e.g. {'n_observations': 47, 'alpha': 0.01}
        timing: Timer.result() of the fit, or None when nothing was timed
        method: Algorithm name, e.g. 'normal_equation' or 'gradient_descent'
        warnings: Human-readable notes about a questionable fit
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    method: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
