"""Return, drawdown and allocation figures derived from performance series."""
from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from .models import AllocationSnapshot, AllocationSplit, PerformancePoint
from .series import find_nearest_on_or_before, normalize_series


def _roi_pct(start_value: float, end_value: float) -> float:
    if start_value <= 0:
        return 0.0
    return (end_value / start_value - 1) * 100


def calculate_roi_since_inception(points: Sequence[PerformancePoint]) -> float:
    """Return the percentage change between the first and last point."""

    if len(points) < 2:
        return 0.0
    ordered = normalize_series(points)
    return _roi_pct(ordered[0].value, ordered[-1].value)


def calculate_roi_last_n_days(points: Sequence[PerformancePoint], days: int) -> float:
    """Return the trailing ``days`` return anchored on the latest point.

    The window start is the nearest point on or before ``last_date - days``,
    falling back to the first point when the series is shorter than the window.
    """

    if len(points) < 2:
        return 0.0
    ordered = normalize_series(points)
    last_point = ordered[-1]
    target_date = last_point.date - timedelta(days=days)
    start_point = find_nearest_on_or_before(ordered, target_date) or ordered[0]
    return _roi_pct(start_point.value, last_point.value)


def calculate_max_drawdown(points: Sequence[PerformancePoint]) -> float:
    """Return the worst decline from a running peak as a negative percentage."""

    if len(points) < 2:
        return 0.0
    ordered = normalize_series(points)
    peak = ordered[0].value
    max_drawdown = 0.0
    for point in ordered:
        if point.value > peak:
            peak = point.value
            continue
        if peak > 0:
            drawdown = (point.value / peak - 1) * 100
            if drawdown < max_drawdown:
                max_drawdown = drawdown
    return max_drawdown


def calculate_allocation_split(allocation: Optional[AllocationSnapshot]) -> AllocationSplit:
    """Convert an allocation snapshot into invested and cash percentages."""

    if allocation is None:
        return AllocationSplit(invested_pct=0.0, cash_pct=0.0)
    cash_pct = max(0.0, min(1.0, allocation.cash_weight)) * 100
    invested_pct = max(0.0, 100 - cash_pct)
    return AllocationSplit(invested_pct=invested_pct, cash_pct=cash_pct)


__all__ = [
    "calculate_allocation_split",
    "calculate_max_drawdown",
    "calculate_roi_last_n_days",
    "calculate_roi_since_inception",
]
