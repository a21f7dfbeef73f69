"""Metrics, validation and simulation engine for the ROI dashboard."""

from .csv_import import parse_series_csv
from .metrics import (
    calculate_allocation_split,
    calculate_max_drawdown,
    calculate_roi_last_n_days,
    calculate_roi_since_inception,
)
from .models import (
    AllocationItem,
    AllocationSnapshot,
    AllocationSplit,
    ChangeLogEvent,
    DashboardSeries,
    DashboardSettings,
    PerformancePoint,
    RoiDashboardPayload,
    RoiDerivedMetrics,
    SeriesParseResult,
    SimulationPoint,
    SimulatorInput,
    SimulatorResult,
    ValidationSummary,
)
from .payload import build_dashboard_payload
from .series import find_nearest_on_or_before, normalize_series
from .simulator import run_simulation
from .validation import build_validation_summary

__all__ = [
    "AllocationItem",
    "AllocationSnapshot",
    "AllocationSplit",
    "ChangeLogEvent",
    "DashboardSeries",
    "DashboardSettings",
    "PerformancePoint",
    "RoiDashboardPayload",
    "RoiDerivedMetrics",
    "SeriesParseResult",
    "SimulationPoint",
    "SimulatorInput",
    "SimulatorResult",
    "ValidationSummary",
    "build_dashboard_payload",
    "build_validation_summary",
    "calculate_allocation_split",
    "calculate_max_drawdown",
    "calculate_roi_last_n_days",
    "calculate_roi_since_inception",
    "find_nearest_on_or_before",
    "normalize_series",
    "parse_series_csv",
    "run_simulation",
]
