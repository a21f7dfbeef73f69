"""Assemble the dashboard payload from already-fetched inputs."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from .config import get_settings
from .metrics import (
    calculate_allocation_split,
    calculate_max_drawdown,
    calculate_roi_last_n_days,
    calculate_roi_since_inception,
)
from .models import (
    AllocationSnapshot,
    ChangeLogEvent,
    DashboardSeries,
    DashboardSettings,
    PerformancePoint,
    RoiDashboardPayload,
    RoiDerivedMetrics,
)
from .series import normalize_series
from .validation import build_validation_summary, utcnow

logger = logging.getLogger(__name__)


def build_settings(
    settings: Optional[DashboardSettings], fallback_inception_date: date
) -> DashboardSettings:
    """Return ``settings`` or the defaults shown when none are stored."""

    if settings is not None:
        return settings
    return DashboardSettings(
        inception_date=fallback_inception_date,
        disclaimer_text=get_settings().default_disclaimer_text,
    )


def latest_timestamp(*timestamps: Optional[datetime]) -> Optional[datetime]:
    present = [ts for ts in timestamps if ts is not None]
    if not present:
        return None
    return max(present)


def compute_metrics(
    model_series: Sequence[PerformancePoint],
    allocation: Optional[AllocationSnapshot],
    *,
    trailing_days: int,
    last_updated_at: Optional[datetime] = None,
) -> RoiDerivedMetrics:
    split = calculate_allocation_split(allocation)
    if allocation is not None:
        as_of_date: Optional[date] = allocation.as_of_date
    elif model_series:
        as_of_date = normalize_series(model_series)[-1].date
    else:
        as_of_date = None
    return RoiDerivedMetrics(
        roi_since_inception_pct=calculate_roi_since_inception(model_series),
        roi_last_30_days_pct=calculate_roi_last_n_days(model_series, trailing_days),
        max_drawdown_pct=calculate_max_drawdown(model_series),
        invested_pct=split.invested_pct,
        cash_pct=split.cash_pct,
        last_updated_at=last_updated_at,
        as_of_date=as_of_date,
    )


def _recent_events(events: Iterable[ChangeLogEvent], limit: int) -> List[ChangeLogEvent]:
    ordered = sorted(events, key=lambda event: event.date, reverse=True)
    return ordered[:limit]


def build_dashboard_payload(
    *,
    settings: Optional[DashboardSettings],
    model_series: Sequence[PerformancePoint],
    btc_series: Sequence[PerformancePoint] = (),
    eth_series: Sequence[PerformancePoint] = (),
    allocation: Optional[AllocationSnapshot] = None,
    change_log_events: Iterable[ChangeLogEvent] = (),
    updated_at: Iterable[Optional[datetime]] = (),
    now: Optional[datetime] = None,
) -> RoiDashboardPayload:
    """Compute metrics and validation for the supplied dashboard inputs.

    ``updated_at`` carries the modification timestamps of the underlying
    records; the newest becomes ``metrics.last_updated_at``. Missing settings
    are replaced by defaults in the payload but still reported by validation.
    """

    engine_settings = get_settings()
    model = normalize_series(model_series)
    btc = normalize_series(btc_series)
    eth = normalize_series(eth_series)

    fallback_inception = model[0].date if model else (now or utcnow()).date()
    metrics = compute_metrics(
        model,
        allocation,
        trailing_days=engine_settings.trailing_window_days,
        last_updated_at=latest_timestamp(*updated_at),
    )
    validation = build_validation_summary(
        settings=settings,
        model_series=model,
        btc_series=btc,
        eth_series=eth,
        allocation=allocation,
        now=now,
    )
    if validation.errors:
        logger.warning("Dashboard payload has %d validation errors", len(validation.errors))

    return RoiDashboardPayload(
        settings=build_settings(settings, fallback_inception),
        series=DashboardSeries(model=model, btc=btc, eth=eth),
        allocation=allocation,
        change_log_events=_recent_events(change_log_events, engine_settings.change_log_limit),
        metrics=metrics,
        validation=validation,
    )


__all__ = [
    "build_dashboard_payload",
    "build_settings",
    "compute_metrics",
    "latest_timestamp",
]
