"""
Statistics of a single vector.

Each function takes a 1D float64 array (a row or a column of a matrix)
and returns one float. They are the reduction functions that
_reductions.reduce_vectors() applies along an axis.

Order statistics work on a sorted copy; the input is never modified.

Median (even count):
    The average of sorted[n//2] and sorted[n//2 + 1], with the upper
    index clamped to n - 1. This is one position above the textbook pair
    (sorted[n//2 - 1], sorted[n//2]) and is kept for compatibility with
    the toolkit's historical results.

Quartiles (Tukey-style hinges with interpolation, n = 4k + r):
    r == 0, 2:  median of the lower/upper half
    r == 1:     Q1 = 0.25*x[k-1] + 0.75*x[k]
                Q3 = 0.75*x[3k] + 0.25*x[3k+1]
    r == 3:     Q1 = 0.75*x[k] + 0.25*x[k+1]
                Q3 = 0.25*x[3k+1] + 0.75*x[3k+2]
    (0-indexed on the sorted values)
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def sample_mean(values: NDArray) -> float:
    return float(np.sum(values) / values.size)


def sample_mean_square(values: NDArray) -> float:
    return float(np.sum(values * values) / values.size)


def sample_max(values: NDArray) -> float:
    return float(np.max(values))


def sample_min(values: NDArray) -> float:
    return float(np.min(values))


def first_max_index(values: NDArray) -> float:
    """Index of the first maximum (ties resolve to the earliest)."""
    return float(np.argmax(values))


def first_min_index(values: NDArray) -> float:
    """Index of the first minimum (ties resolve to the earliest)."""
    return float(np.argmin(values))


def sample_range(values: NDArray) -> float:
    return float(np.max(values) - np.min(values))


def sample_median(values: NDArray) -> float:
    ordered = np.sort(values)
    n = ordered.size
    if n % 2 == 1:
        return float(ordered[n // 2])
    upper = min(n // 2 + 1, n - 1)
    return float((ordered[n // 2] + ordered[upper]) / 2.0)


def _half_median(ordered: NDArray) -> float:
    n = ordered.size
    if n % 2 == 1:
        return float(ordered[n // 2])
    return float((ordered[n // 2 - 1] + ordered[n // 2]) / 2.0)


def lower_quartile(values: NDArray) -> float:
    ordered = np.sort(values)
    n = ordered.size
    if n == 1:
        return float(ordered[0])

    k, r = divmod(n, 4)
    if r == 1:
        return float(0.25 * ordered[k - 1] + 0.75 * ordered[k])
    if r == 3:
        return float(0.75 * ordered[k] + 0.25 * ordered[k + 1])
    return _half_median(ordered[:n // 2])


def upper_quartile(values: NDArray) -> float:
    ordered = np.sort(values)
    n = ordered.size
    if n == 1:
        return float(ordered[0])

    k, r = divmod(n, 4)
    if r == 1:
        return float(0.75 * ordered[3 * k] + 0.25 * ordered[3 * k + 1])
    if r == 3:
        return float(0.25 * ordered[3 * k + 1] + 0.75 * ordered[3 * k + 2])
    return _half_median(ordered[n // 2:])


def sample_iqr(values: NDArray) -> float:
    return upper_quartile(values) - lower_quartile(values)


def sample_mode(values: NDArray) -> float:
    """Most frequent value; the smallest one when several tie."""
    distinct, counts = np.unique(values, return_counts=True)
    # np.unique sorts, so argmax lands on the smallest tied value
    return float(distinct[np.argmax(counts)])


def sample_variance(values: NDArray) -> float:
    """Bessel-corrected variance (n - 1 denominator). NaN for a single value."""
    n = values.size
    if n < 2:
        return math.nan
    deviations = values - np.sum(values) / n
    return float(np.sum(deviations * deviations) / (n - 1))


def sample_standard_deviation(values: NDArray) -> float:
    return math.sqrt(sample_variance(values))
