"""Structural and staleness checks for dashboard inputs."""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Optional, Sequence

from .config import get_settings
from .models import (
    AllocationSnapshot,
    DashboardSettings,
    PerformancePoint,
    ValidationSummary,
)
from .series import normalize_series

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _age_in_days(last_date: date, now: datetime) -> float:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    last_moment = datetime.combine(last_date, time.min, tzinfo=timezone.utc)
    return (now - last_moment).total_seconds() / SECONDS_PER_DAY


def validate_series(
    points: Sequence[PerformancePoint],
    label: str,
    allow_empty: bool = False,
    *,
    now: Optional[datetime] = None,
) -> ValidationSummary:
    """Check one series for emptiness, bad values, ordering and staleness.

    An empty series is an error unless ``allow_empty`` is set, in which case it
    is only a warning (benchmarks are optional).
    """

    summary = ValidationSummary()
    if not points:
        message = f"{label} series has no data."
        if allow_empty:
            summary.warnings.append(message)
        else:
            summary.errors.append(message)
        return summary

    ordered = normalize_series(points)
    if any(point.value <= 0 for point in ordered):
        summary.errors.append(f"{label} series contains non-positive values.")

    for previous, current in zip(ordered, ordered[1:]):
        if current.date <= previous.date:
            summary.warnings.append(f"{label} series dates are not strictly increasing.")
            break

    stale_days = get_settings().stale_days_warning
    age_days = _age_in_days(ordered[-1].date, now or utcnow())
    if age_days > stale_days:
        summary.warnings.append(
            f"{label} series has not been updated in {math.floor(age_days)} days."
        )

    return summary


def validate_allocation(allocation: Optional[AllocationSnapshot]) -> ValidationSummary:
    summary = ValidationSummary()
    if allocation is None:
        summary.warnings.append("Allocation snapshot is missing.")
        return summary

    total = allocation.cash_weight
    if not 0 <= allocation.cash_weight <= 1:
        summary.errors.append("Cash weight must be between 0 and 1.")

    for item in allocation.items:
        if not 0 <= item.weight <= 1:
            summary.errors.append(f"Allocation weight for {item.asset} must be between 0 and 1.")
            break
        total += item.weight

    tolerance = get_settings().weight_tolerance
    if abs(total - 1) > tolerance:
        summary.errors.append(
            f"Allocation weights must sum to 1.0 within {tolerance:.1%} tolerance."
        )

    return summary


def build_validation_summary(
    *,
    settings: Optional[DashboardSettings],
    model_series: Sequence[PerformancePoint],
    btc_series: Sequence[PerformancePoint],
    eth_series: Sequence[PerformancePoint],
    allocation: Optional[AllocationSnapshot],
    now: Optional[datetime] = None,
) -> ValidationSummary:
    """Run every sub-check and concatenate their findings."""

    summary = ValidationSummary()
    if settings is None:
        summary.errors.append("Dashboard settings are missing.")

    summary.extend(validate_series(model_series, "Model", now=now))
    summary.extend(validate_series(btc_series, "BTC", True, now=now))
    summary.extend(validate_series(eth_series, "ETH", True, now=now))
    summary.extend(validate_allocation(allocation))
    return summary


__all__ = ["build_validation_summary", "validate_allocation", "validate_series"]
