"""Hypothetical growth of a capital base along the model portfolio's path.

The lump sum and each monthly contribution grow independently, each scaled by
the ratio between the current series value and the value at the point where
the money went in. Drawdown here is measured on the simulated balance, both in
percent and in currency, and is separate from the value-ratio drawdown in
:mod:`roi_dashboard.metrics`.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from .models import PerformancePoint, SimulationPoint, SimulatorInput, SimulatorResult
from .series import find_nearest_on_or_before, normalize_series

logger = logging.getLogger(__name__)


def contribution_dates(start_date: date, end_date: date) -> List[date]:
    """Return the first-of-month dates on which contributions are made.

    The schedule starts on the first of ``start_date``'s month when
    ``start_date`` is itself the 1st, otherwise on the first of the next month,
    and runs up to and including ``end_date``.
    """

    cursor = start_date.replace(day=1)
    if start_date.day != 1:
        cursor += relativedelta(months=1)
    dates: List[date] = []
    while cursor <= end_date:
        dates.append(cursor)
        cursor += relativedelta(months=1)
    return dates


def _calculate_balance_drawdown(series: Sequence[SimulationPoint]) -> Tuple[float, float]:
    if len(series) < 2:
        return 0.0, 0.0
    peak = series[0].balance
    max_drawdown_pct = 0.0
    max_drawdown_amount = 0.0
    for point in series:
        if point.balance > peak:
            peak = point.balance
            continue
        drawdown_amount = peak - point.balance
        drawdown_pct = (point.balance / peak - 1) * 100 if peak > 0 else 0.0
        if drawdown_pct < max_drawdown_pct:
            max_drawdown_pct = drawdown_pct
            max_drawdown_amount = drawdown_amount
    return max_drawdown_pct, max_drawdown_amount


def _empty_result() -> SimulatorResult:
    return SimulatorResult(
        series=[],
        final_balance=0.0,
        total_contributed=0.0,
        profit=0.0,
        roi_pct=0.0,
        max_drawdown_pct=0.0,
        max_drawdown_amount=0.0,
    )


def run_simulation(
    points: Sequence[PerformancePoint], simulator_input: SimulatorInput
) -> SimulatorResult:
    """Project ``simulator_input`` through the historical path in ``points``."""

    ordered = normalize_series(points)
    if not ordered:
        return _empty_result()

    starting_capital = max(0.0, simulator_input.starting_capital)
    monthly_contribution = max(0.0, simulator_input.monthly_contribution)
    last_date = ordered[-1].date

    anchor = find_nearest_on_or_before(ordered, simulator_input.start_date) or ordered[0]
    anchor_value = anchor.value or 1.0
    window = [point for point in ordered if point.date >= anchor.date]

    schedule: List[date] = []
    if simulator_input.include_monthly_contributions:
        schedule = contribution_dates(anchor.date, last_date)
    contributions: List[Tuple[date, Optional[PerformancePoint]]] = [
        (when, find_nearest_on_or_before(ordered, when)) for when in schedule
    ]
    contributing = simulator_input.include_monthly_contributions and monthly_contribution > 0

    series: List[SimulationPoint] = []
    for point in window:
        if anchor_value > 0:
            balance = starting_capital * (point.value / anchor_value)
        else:
            balance = starting_capital
        if contributing:
            for when, contribution_point in contributions:
                if contribution_point is None or point.date < when:
                    continue
                contribution_value = contribution_point.value or 1.0
                balance += monthly_contribution * (point.value / contribution_value)
        series.append(SimulationPoint(date=point.date, balance=balance))

    total_contributed = starting_capital + monthly_contribution * len(schedule)
    final_balance = series[-1].balance if series else starting_capital
    profit = final_balance - total_contributed
    roi_pct = profit / total_contributed * 100 if total_contributed > 0 else 0.0
    max_drawdown_pct, max_drawdown_amount = _calculate_balance_drawdown(series)

    logger.debug(
        "Simulated %d points from %s with %d contributions",
        len(series),
        anchor.date,
        len(schedule),
    )
    return SimulatorResult(
        series=series,
        final_balance=final_balance,
        total_contributed=total_contributed,
        profit=profit,
        roi_pct=roi_pct,
        max_drawdown_pct=max_drawdown_pct,
        max_drawdown_amount=max_drawdown_amount,
    )


__all__ = ["contribution_dates", "run_simulation"]
