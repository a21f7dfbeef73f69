"""Check a performance series CSV before it is uploaded to the dashboard."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from roi_dashboard import SimulatorInput, parse_series_csv, run_simulation
from roi_dashboard.config import get_settings
from roi_dashboard.logging_config import setup_logging
from roi_dashboard.schemas import dump_simulation
from roi_dashboard.series import format_date
from roi_dashboard.validation import validate_series

logger = logging.getLogger(__name__)


def _run(args: argparse.Namespace) -> int:
    text = Path(args.path).read_text(encoding="utf-8")
    parsed = parse_series_csv(text)
    report: dict = {
        "path": args.path,
        "imported": len(parsed.points),
        "errors": parsed.errors,
        "warnings": parsed.warnings,
    }
    if parsed.points:
        validation = validate_series(parsed.points, args.label)
        report["validation"] = {"errors": validation.errors, "warnings": validation.warnings}
        report["first_date"] = format_date(parsed.points[0].date)
        report["last_date"] = format_date(parsed.points[-1].date)
    if args.simulate is not None and parsed.points:
        simulation = run_simulation(
            parsed.points,
            SimulatorInput(
                starting_capital=args.simulate,
                start_date=args.start_date or parsed.points[0].date,
                include_monthly_contributions=args.monthly > 0,
                monthly_contribution=args.monthly,
            ),
        )
        summary = dump_simulation(simulation)
        summary.pop("series")
        report["simulation"] = summary
    print(json.dumps(report, indent=2))
    if parsed.errors:
        logger.error("CSV validation failed for %s with %d errors", args.path, len(parsed.errors))
        return 1
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse and validate a date,value series CSV")
    parser.add_argument("path")
    parser.add_argument("--label", default="Model", choices=["Model", "BTC", "ETH"])
    parser.add_argument("--simulate", type=float, default=None, help="Starting capital to simulate")
    parser.add_argument("--start-date", type=date.fromisoformat, default=None)
    parser.add_argument("--monthly", type=float, default=0.0, help="Monthly contribution")
    args = parser.parse_args()
    setup_logging(get_settings().log_level)
    sys.exit(_run(args))


if __name__ == "__main__":
    main()
