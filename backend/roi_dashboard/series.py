"""Series ordering and point lookup helpers."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import List, Optional, Sequence

from .models import PerformancePoint

DATE_ONLY_LENGTH = 10
ISO_DAY_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_date(value: date | datetime | str) -> date:
    """Return the calendar date for ``value``.

    Strings up to ten characters must be ``YYYY-MM-DD``; longer strings must
    start with ``YYYY-MM-DD`` followed by ``T`` or a space and are read as ISO
    datetimes truncated to their date part. Raises ``ValueError`` for anything
    else, including ISO basic and week dates.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        raise ValueError("Empty date")
    if len(text) <= DATE_ONLY_LENGTH:
        if not ISO_DAY_PATTERN.match(text):
            raise ValueError(f"Not a YYYY-MM-DD date: {text!r}")
        return date.fromisoformat(text)
    if not ISO_DAY_PATTERN.match(text[:DATE_ONLY_LENGTH]) or text[DATE_ONLY_LENGTH] not in "T ":
        raise ValueError(f"Not a YYYY-MM-DD datetime: {text!r}")
    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def format_date(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def normalize_series(points: Sequence[PerformancePoint]) -> List[PerformancePoint]:
    """Return a copy of ``points`` sorted ascending by date (stable)."""

    return sorted(points, key=lambda point: point.date)


def find_nearest_on_or_before(
    points: Sequence[PerformancePoint], target_date: date
) -> Optional[PerformancePoint]:
    """Return the last point dated on or before ``target_date``.

    The series is normalized first, then scanned backwards, so among points
    sharing a date the chronologically last one wins. No interpolation is
    performed.
    """

    for point in reversed(normalize_series(points)):
        if point.date <= target_date:
            return point
    return None


__all__ = [
    "find_nearest_on_or_before",
    "format_date",
    "normalize_series",
    "parse_date",
]
