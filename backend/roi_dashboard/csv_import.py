"""Parse uploaded ``date,value`` CSV text into performance points.

Problems are collected per line instead of raised, so a file with a handful of
bad rows still yields every good row. Callers decide whether a partially valid
file is acceptable.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Set

from .models import PerformancePoint, SeriesParseResult
from .series import format_date, parse_date

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\r?\n")


def _is_header(line: str) -> bool:
    lowered = line.lower()
    return "date" in lowered and "value" in lowered


def _parse_value(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_series_csv(text: str) -> SeriesParseResult:
    """Return the points, errors and warnings found in ``text``.

    Line numbers in messages are 1-based positions in the input text.
    """

    result = SeriesParseResult()
    lines = [
        (number, raw.strip())
        for number, raw in enumerate(LINE_BREAK.split(text), start=1)
        if raw.strip()
    ]
    if not lines:
        result.errors.append("CSV input is empty")
        return result

    if _is_header(lines[0][1]):
        lines = lines[1:]

    seen: Set[str] = set()
    for number, line in lines:
        cells = [cell.strip() for cell in line.split(",")]
        if len(cells) != 2 or not cells[0] or not cells[1]:
            result.errors.append(f"Line {number}: Expected date,value")
            logger.debug("Rejected line %d: wrong cell count", number)
            continue
        date_token, value_token = cells

        try:
            point_date = parse_date(date_token)
        except ValueError:
            result.errors.append(
                f"Line {number}: Invalid date '{date_token}'. Use ISO format YYYY-MM-DD."
            )
            logger.debug("Rejected line %d: invalid date %r", number, date_token)
            continue

        value = _parse_value(value_token)
        if value is None:
            result.errors.append(
                f"Line {number}: Invalid value '{value_token}'. Value must be a positive number."
            )
            logger.debug("Rejected line %d: invalid value %r", number, value_token)
            continue

        date_key = format_date(point_date)
        if date_key in seen:
            result.errors.append(f"Line {number}: Duplicate date {date_key}")
            logger.debug("Rejected line %d: duplicate date %s", number, date_key)
            continue
        seen.add(date_key)
        result.points.append(PerformancePoint(date=point_date, value=value))

    if not result.points and not result.errors:
        result.errors.append("No valid rows found in CSV")

    logger.info(
        "Parsed series CSV: %d points accepted, %d errors",
        len(result.points),
        len(result.errors),
    )
    return result


__all__ = ["parse_series_csv"]
