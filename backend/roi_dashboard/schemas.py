"""Pydantic schemas for the JSON handed to the presentation layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import RoiDashboardPayload, SimulatorInput, SimulatorResult


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PerformancePointSchema(_FromDomain):
    date: date
    value: float


class AllocationItemSchema(_FromDomain):
    asset: str = Field(..., examples=["BTC"])
    weight: float


class AllocationSnapshotSchema(_FromDomain):
    as_of_date: date
    items: list[AllocationItemSchema]
    cash_weight: float


class DashboardSettingsSchema(_FromDomain):
    inception_date: date
    disclaimer_text: str
    show_btc_benchmark: bool
    show_eth_benchmark: bool
    show_simulator: bool
    show_change_log: bool
    show_allocation: bool


class ChangeLogEventSchema(_FromDomain):
    id: str
    date: date
    title: str
    summary: str
    link_url: Optional[str] = None


class RoiDerivedMetricsSchema(_FromDomain):
    roi_since_inception_pct: float
    roi_last_30_days_pct: float
    max_drawdown_pct: float
    invested_pct: float
    cash_pct: float
    last_updated_at: Optional[datetime] = None
    as_of_date: Optional[date] = None


class ValidationSummarySchema(_FromDomain):
    errors: list[str]
    warnings: list[str]


class DashboardSeriesSchema(_FromDomain):
    model: list[PerformancePointSchema]
    btc: list[PerformancePointSchema]
    eth: list[PerformancePointSchema]


class RoiDashboardPayloadSchema(_FromDomain):
    settings: DashboardSettingsSchema
    series: DashboardSeriesSchema
    allocation: Optional[AllocationSnapshotSchema] = None
    change_log_events: list[ChangeLogEventSchema]
    metrics: RoiDerivedMetricsSchema
    validation: ValidationSummarySchema


class SimulatorRequest(BaseModel):
    """Simulation parameters as submitted from the dashboard form."""

    starting_capital: float = Field(..., ge=0.0, examples=[1000])
    start_date: date
    include_monthly_contributions: bool = Field(default=False)
    monthly_contribution: float = Field(default=0.0, ge=0.0)

    def to_input(self) -> SimulatorInput:
        return SimulatorInput(
            starting_capital=self.starting_capital,
            start_date=self.start_date,
            include_monthly_contributions=self.include_monthly_contributions,
            monthly_contribution=self.monthly_contribution,
        )


class SimulationPointSchema(_FromDomain):
    date: date
    balance: float


class SimulatorResultSchema(_FromDomain):
    series: list[SimulationPointSchema]
    final_balance: float
    total_contributed: float
    profit: float
    roi_pct: float
    max_drawdown_pct: float
    max_drawdown_amount: float

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "series": [
                    {"date": "2024-01-01", "balance": 1000.0},
                    {"date": "2024-02-01", "balance": 2000.0},
                ],
                "final_balance": 2000.0,
                "total_contributed": 1000.0,
                "profit": 1000.0,
                "roi_pct": 100.0,
                "max_drawdown_pct": 0.0,
                "max_drawdown_amount": 0.0,
            }
        },
    )


def dump_payload(payload: RoiDashboardPayload) -> dict[str, Any]:
    """Return ``payload`` as a JSON-ready dict."""

    return RoiDashboardPayloadSchema.model_validate(payload).model_dump(mode="json")


def dump_simulation(result: SimulatorResult) -> dict[str, Any]:
    return SimulatorResultSchema.model_validate(result).model_dump(mode="json")


__all__ = [
    "AllocationItemSchema",
    "AllocationSnapshotSchema",
    "ChangeLogEventSchema",
    "DashboardSeriesSchema",
    "DashboardSettingsSchema",
    "PerformancePointSchema",
    "RoiDashboardPayloadSchema",
    "RoiDerivedMetricsSchema",
    "SimulationPointSchema",
    "SimulatorRequest",
    "SimulatorResultSchema",
    "ValidationSummarySchema",
    "dump_payload",
    "dump_simulation",
]
