from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from roi_dashboard import (
    AllocationItem,
    AllocationSnapshot,
    ChangeLogEvent,
    DashboardSettings,
    PerformancePoint,
    build_dashboard_payload,
)
from roi_dashboard.config import DEFAULT_DISCLAIMER_TEXT
from roi_dashboard.payload import build_settings, compute_metrics, latest_timestamp
from roi_dashboard.validation import utcnow


def _model_series():
    return [
        PerformancePoint(date=date(2024, 3, 5), value=130.0),
        PerformancePoint(date=date(2024, 1, 1), value=100.0),
        PerformancePoint(date=date(2024, 2, 1), value=80.0),
        PerformancePoint(date=date(2024, 2, 4), value=120.0),
    ]


def _events(count: int):
    return [
        ChangeLogEvent(
            id=f"evt-{i}",
            date=date(2024, 1, 1) + timedelta(days=i),
            title=f"Rebalance {i}",
            summary="Rotated into majors.",
        )
        for i in range(count)
    ]


def test_payload_metrics_and_validation(fixed_now):
    allocation = AllocationSnapshot(
        as_of_date=date(2024, 3, 4),
        items=(AllocationItem("BTC", 0.6), AllocationItem("ETH", 0.15)),
        cash_weight=0.25,
    )
    payload = build_dashboard_payload(
        settings=DashboardSettings(inception_date=date(2024, 1, 1), disclaimer_text="Not advice."),
        model_series=_model_series(),
        allocation=allocation,
        change_log_events=_events(7),
        updated_at=[None, datetime(2024, 3, 1, tzinfo=timezone.utc), datetime(2024, 3, 5, tzinfo=timezone.utc)],
        now=fixed_now,
    )
    metrics = payload.metrics
    assert metrics.roi_since_inception_pct == pytest.approx(30)
    # Window start Feb 4 lands exactly on a point.
    assert metrics.roi_last_30_days_pct == pytest.approx((130 / 120 - 1) * 100)
    assert metrics.max_drawdown_pct == pytest.approx(-20)
    assert metrics.invested_pct == pytest.approx(75)
    assert metrics.cash_pct == pytest.approx(25)
    assert metrics.as_of_date == date(2024, 3, 4)
    assert metrics.last_updated_at == datetime(2024, 3, 5, tzinfo=timezone.utc)

    assert [p.date for p in payload.series.model] == sorted(p.date for p in _model_series())
    assert payload.validation.errors == []
    assert payload.validation.warnings == ["BTC series has no data.", "ETH series has no data."]

    assert [e.id for e in payload.change_log_events] == ["evt-6", "evt-5", "evt-4", "evt-3", "evt-2"]


def test_missing_settings_are_defaulted_but_still_reported(fixed_now):
    payload = build_dashboard_payload(settings=None, model_series=_model_series(), now=fixed_now)
    assert payload.settings.inception_date == date(2024, 1, 1)
    assert payload.settings.disclaimer_text == DEFAULT_DISCLAIMER_TEXT
    assert payload.settings.show_simulator is True
    assert "Dashboard settings are missing." in payload.validation.errors
    assert "Allocation snapshot is missing." in payload.validation.warnings
    assert payload.metrics.as_of_date == date(2024, 3, 5)
    assert payload.metrics.invested_pct == 0
    assert payload.metrics.last_updated_at is None


def test_empty_model_series(fixed_now):
    payload = build_dashboard_payload(settings=None, model_series=[], now=fixed_now)
    assert payload.settings.inception_date == fixed_now.date()
    assert payload.metrics.roi_since_inception_pct == 0
    assert payload.metrics.as_of_date is None
    assert "Model series has no data." in payload.validation.errors


def test_change_log_limit_from_settings(fixed_now, monkeypatch):
    monkeypatch.setenv("ROI_DASHBOARD_CHANGE_LOG_LIMIT", "2")
    payload = build_dashboard_payload(
        settings=None, model_series=_model_series(), change_log_events=_events(4), now=fixed_now
    )
    assert [e.id for e in payload.change_log_events] == ["evt-3", "evt-2"]


def test_compute_metrics_uses_requested_window():
    metrics = compute_metrics(_model_series(), None, trailing_days=60)
    assert metrics.roi_last_30_days_pct == pytest.approx(30)


def test_build_settings_passthrough():
    stored = DashboardSettings(
        inception_date=date(2023, 6, 1), disclaimer_text="Custom", show_simulator=False
    )
    assert build_settings(stored, date(2024, 1, 1)) is stored


def test_latest_timestamp():
    assert latest_timestamp() is None
    assert latest_timestamp(None, None) is None
    assert latest_timestamp(datetime(2024, 1, 2), None, datetime(2024, 1, 1)) == datetime(2024, 1, 2)


def test_empty_model_inception_defaults_to_utc_today(monkeypatch):
    late_evening = datetime(2024, 6, 30, 23, 30, tzinfo=timezone.utc)
    monkeypatch.setattr("roi_dashboard.payload.utcnow", lambda: late_evening)
    payload = build_dashboard_payload(settings=None, model_series=[])
    assert payload.settings.inception_date == date(2024, 6, 30)


def test_validation_clock_is_utc():
    assert utcnow().tzinfo is timezone.utc
