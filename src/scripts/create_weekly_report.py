#!/usr/bin/env python3
"""
Compare a week of calendar time against the weekly budget.

Fetches events from the CalDAV calendar for a Monday-to-Sunday week,
totals hours per budget category (matched by title prefix), and prints a
CSV variance table.

Usage:
    uv run python src/scripts/create_weekly_report.py [YYYY-MM-DD] [--budget=budget.yml] [--debug]

Example:
    uv run python src/scripts/create_weekly_report.py 2025-11-03 --xlsx output/week.xlsx
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import config
from core.budget import load_budget
from core.reconcile import reconcile
from core.week import get_week_window
from services.calendar import fetch_events
from services.reports import create_weekly_excel_report, format_csv, format_debug_report


def abort(message: str):
    """Print an error to stderr and exit with status 1."""
    print(message, file=sys.stderr)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare calendar time for a week against the weekly budget"
    )
    parser.add_argument(
        "date",
        nargs="?",
        help="Week start (YYYY-MM-DD, must be a Monday). Defaults to next Monday.",
    )
    parser.add_argument(
        "--budget",
        default=config.DEFAULT_BUDGET_FILE,
        help=f"Path to the budget YAML file (default: {config.DEFAULT_BUDGET_FILE})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print every fetched event and how it is categorized, then exit",
    )
    parser.add_argument(
        "--xlsx",
        type=Path,
        help="Also write the report to this Excel file",
    )
    return parser


def main(argv: list[str] | None = None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if config.missing_credentials():
        abort(config.MISSING_CREDENTIALS_HELP)

    # 1. Resolve the week
    try:
        window = get_week_window(args.date)
    except ValueError as e:
        abort(f"Error: {e}")

    # 2. Load and validate budget
    try:
        budget = load_budget(args.budget)
    except ValueError as e:
        abort(f"Error: {e}")

    # 3. Fetch calendar events
    try:
        events = fetch_events(window)
    except ValueError as e:
        abort(f"Error: Invalid calendar data: {e}")
    except Exception as e:
        abort(f"Error: Could not fetch calendar events from {config.CALDAV_URL}: {e}")

    if args.debug:
        print(format_debug_report(events, window, list(budget), config.CALDAV_URL))
        return

    # 4. Reconcile and output CSV
    rows = reconcile(events, window, budget)
    print(format_csv(rows))

    if args.xlsx:
        create_weekly_excel_report(rows, window, args.xlsx)
        print(f"Saved Excel report to: {args.xlsx}", file=sys.stderr)


if __name__ == "__main__":
    main()
