"""Domain models used by the ROI dashboard metrics engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class PerformancePoint:
    """One sample of a portfolio NAV index or benchmark price index."""

    date: date
    value: float


@dataclass(frozen=True)
class AllocationItem:
    asset: str
    weight: float


@dataclass(frozen=True)
class AllocationSnapshot:
    """Point-in-time breakdown of portfolio weight across assets and cash."""

    as_of_date: date
    items: Tuple[AllocationItem, ...] = ()
    cash_weight: float = 0.0


@dataclass(frozen=True)
class DashboardSettings:
    """Dashboard configuration as stored by the host application."""

    inception_date: date
    disclaimer_text: str
    show_btc_benchmark: bool = True
    show_eth_benchmark: bool = True
    show_simulator: bool = True
    show_change_log: bool = True
    show_allocation: bool = True


@dataclass(frozen=True)
class ChangeLogEvent:
    id: str
    date: date
    title: str
    summary: str
    link_url: Optional[str] = None


@dataclass(frozen=True)
class AllocationSplit:
    invested_pct: float
    cash_pct: float


@dataclass(frozen=True)
class RoiDerivedMetrics:
    """Headline figures shown on the dashboard, recomputed per request."""

    roi_since_inception_pct: float
    roi_last_30_days_pct: float
    max_drawdown_pct: float
    invested_pct: float
    cash_pct: float
    last_updated_at: Optional[datetime] = None
    as_of_date: Optional[date] = None


@dataclass
class ValidationSummary:
    """Errors block publishing, warnings are informational."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_publishable(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationSummary") -> None:
        """Append the errors and warnings of ``other`` to this summary."""

        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


@dataclass
class SeriesParseResult:
    """Outcome of parsing uploaded CSV text into performance points."""

    points: List[PerformancePoint] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class SimulatorInput:
    """Parameters of a hypothetical investment run."""

    starting_capital: float
    start_date: date
    include_monthly_contributions: bool = False
    monthly_contribution: float = 0.0


@dataclass(frozen=True)
class SimulationPoint:
    date: date
    balance: float


@dataclass(frozen=True)
class SimulatorResult:
    series: List[SimulationPoint]
    final_balance: float
    total_contributed: float
    profit: float
    roi_pct: float
    max_drawdown_pct: float
    max_drawdown_amount: float


@dataclass(frozen=True)
class DashboardSeries:
    model: List[PerformancePoint] = field(default_factory=list)
    btc: List[PerformancePoint] = field(default_factory=list)
    eth: List[PerformancePoint] = field(default_factory=list)


@dataclass(frozen=True)
class RoiDashboardPayload:
    """Aggregate handed to the presentation layer."""

    settings: DashboardSettings
    series: DashboardSeries
    allocation: Optional[AllocationSnapshot]
    change_log_events: List[ChangeLogEvent]
    metrics: RoiDerivedMetrics
    validation: ValidationSummary
