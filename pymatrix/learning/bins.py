"""
Bins: sorted boundaries that split a numeric range into labelled buckets.
"""

from __future__ import annotations

import bisect
from typing import Iterable

from pymatrix.core.validation import check_scalar


class Bins:
    """
    Half-open buckets [b0, b1), [b1, b2), ... defined by sorted boundaries.

    A single boundary defines one bucket that only holds that exact value.

    Usage:
        bins = Bins([0, 10, 20])
        bins.labels          # ['0-10', '10-20']
        bins.index_of(15)    # 1
        bins.index_of(20)    # -1
    """

    def __init__(self, bounds: Iterable[float] = ()):
        self._bounds: list[float] = []
        for bound in bounds:
            self.add_bin(bound)

    def add_bin(self, bound: float) -> None:
        """Add a boundary; duplicates are ignored."""
        value = check_scalar(bound, 'bound')
        position = bisect.bisect_left(self._bounds, value)
        if position < len(self._bounds) and self._bounds[position] == value:
            return
        self._bounds.insert(position, value)

    @property
    def bounds(self) -> tuple[float, ...]:
        return tuple(self._bounds)

    @property
    def labels(self) -> list[str]:
        """'lower-upper' for each bucket (empty when there are no boundaries)."""
        if len(self._bounds) == 1:
            return [f"{self._bounds[0]:g}"]
        return [
            f"{lower:g}-{upper:g}"
            for lower, upper in zip(self._bounds, self._bounds[1:])
        ]

    @property
    def count(self) -> int:
        if len(self._bounds) <= 1:
            return len(self._bounds)
        return len(self._bounds) - 1

    def index_of(self, value: float) -> int:
        """Zero-based bucket holding value, or -1 when it lies outside every bucket."""
        value = check_scalar(value, 'value')
        if len(self._bounds) == 1:
            return 0 if self._bounds[0] == value else -1
        index = bisect.bisect_right(self._bounds, value) - 1
        if 0 <= index < len(self._bounds) - 1:
            return index
        return -1

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"Bins({self._bounds!r})"
