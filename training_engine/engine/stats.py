"""
Small numeric helpers used by the trend, heatmap and adherence modules.

All functions are total: degenerate input returns a documented value
instead of raising or producing ``NaN``.
"""

from __future__ import annotations

import math
import statistics
from typing import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean (``0.0`` for an empty sequence)."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (``0.0`` for an empty sequence)."""
    if not values:
        return 0.0
    return statistics.pstdev(values)


def linear_regression(xs: Sequence[float], ys: Sequence[float]) -> tuple[float, float, float]:
    """Ordinary least squares fit of ``y = slope * x + intercept``.

    Returns:
        ``(slope, intercept, r2)``.  With fewer than two points, or when
        every ``x`` is identical, the fit is flat through the mean of
        ``ys`` with ``r2 = 0``.  When every ``y`` is identical the fit is
        exact and ``r2 = 1``.
    """
    n = len(xs)
    if n != len(ys):
        raise ValueError("xs and ys must have the same length")
    if n < 2:
        return 0.0, mean(ys), 0.0

    x_mean = mean(xs)
    y_mean = mean(ys)
    sxx = sum((x - x_mean) ** 2 for x in xs)
    if sxx == 0:
        return 0.0, y_mean, 0.0
    sxy = sum((x - x_mean) * (y - y_mean) for x, y in zip(xs, ys))

    slope = sxy / sxx
    intercept = y_mean - slope * x_mean

    ss_total = sum((y - y_mean) ** 2 for y in ys)
    if ss_total == 0:
        return slope, intercept, 1.0
    ss_residual = sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, ys))
    return slope, intercept, 1.0 - ss_residual / ss_total


def quantile(sorted_values: Sequence[float], q: float) -> float:
    """Linear-interpolated quantile of an ascending sequence.

    ``q`` is in ``[0, 1]``; position ``q * (n - 1)`` is interpolated
    between its neighbours.
    """
    if not sorted_values:
        raise ValueError("quantile of an empty sequence")
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"q must be within [0, 1], got {q}")
    pos = q * (len(sorted_values) - 1)
    lower = math.floor(pos)
    upper = math.ceil(pos)
    if lower == upper:
        return float(sorted_values[lower])
    frac = pos - lower
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * frac


def percentage_change(previous: float, current: float) -> float:
    """Percentage change from ``previous`` to ``current``.

    A zero baseline is guarded: ``100.0`` if ``current`` is positive,
    ``0.0`` otherwise.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100.0
