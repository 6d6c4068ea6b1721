"""
Report rendering: CSV lines, debug dump, and Excel workbook.
"""

import re
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import CSV_HEADERS, SECONDS_PER_HOUR, TOTAL
from core.reconcile import expand_recurrences, match_category, resolve_duration
from models.events import Event, ReportRow, Window

CSV_QUOTE_PATTERN = re.compile(r"[,:]")


def format_date_display(d: date) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def format_category(category: str) -> str:
    """Quote category names containing a comma or colon."""
    if CSV_QUOTE_PATTERN.search(category):
        return f'"{category}"'
    return category


def format_csv(rows: Sequence[ReportRow]) -> str:
    """
    Render report rows as CSV for table display.

    Numbers are rounded to 1 decimal here and nowhere earlier.
    """
    lines = [",".join(CSV_HEADERS)]
    for row in rows:
        budgeted, actual, variance = row.display()
        lines.append(f"{format_category(row.category)},{budgeted},{actual},{variance}")
    return "\n".join(lines)


# =============================================================================
# DEBUG DUMP
# =============================================================================


def format_debug_report(
    events: Sequence[Event],
    window: Window,
    categories: Sequence[str],
    caldav_url: str = "",
) -> str:
    """
    Describe every fetched event and how it would be reconciled.

    Mirrors the reconciliation steps: duration, recurrence expansion, and
    category matching. Events without a duration are omitted.
    """
    time_min, time_max = window.time_range()
    lines = [
        f"DEBUG: All calendar events for {window.week_start} to {window.week_end}",
        "=" * 80,
        f"CalDAV URL: {caldav_url}",
        f"Time range: {time_min} to {time_max}",
        "",
        f"Number of events returned: {len(events)}",
        "",
    ]

    if not events:
        lines += [
            "No events returned from CalDAV server.",
            "",
            "Possible issues:",
            "- Wrong calendar URL",
            "- Authentication failed silently",
            "- No events in this time range",
            "- Calendar permissions issue",
        ]
        return "\n".join(lines)

    lines += ["Parsed events:", ""]

    for idx, event in enumerate(events, start=1):
        duration_seconds = resolve_duration(event)
        if duration_seconds is None:
            continue

        duration_hours = duration_seconds / SECONDS_PER_HOUR
        occurrences = expand_recurrences(event.rrule, window)

        lines.append(f"Event {idx}:")
        lines.append(f"  Title: {event.title}")
        lines.append(f"  Start: {event.start}")
        lines.append(f"  Duration: {round(duration_hours, 2)} hours")

        if event.rrule:
            by_day = ", ".join(event.rrule.by_day or ())
            lines.append(f"  RRULE: {event.rrule.frequency} on {by_day}")
            if len(occurrences) > 1:
                lines.append(f"  Expands to {len(occurrences)} occurrences in week:")
                lines.extend(f"    - {d}" for d in occurrences)
                total = round(duration_hours * len(occurrences), 2)
                lines.append(f"  Total duration for week: {total} hours")

        matched = match_category(event.title, categories)
        if matched:
            lines.append(f"  Matches budget category: {matched}")
        else:
            lines.append("  NO MATCH - would be categorized as Uncategorized")
        lines.append("")

    return "\n".join(lines)


# =============================================================================
# EXCEL REPORT
# =============================================================================


def write_excel_budget_sheet(ws, rows: Sequence[ReportRow], window: Window):
    """
    Write the weekly budget table to an Excel worksheet.

    Row 1: title with the window dates
    Row 3: headers (Category, Budgeted, Actual, Variance)
    Row 4+: one row per report row, TOTAL in bold
    """
    ws.cell(
        row=1,
        column=1,
        value=(
            f"Weekly budget {format_date_display(window.week_start)}"
            f" - {format_date_display(window.week_end)}"
        ),
    ).font = Font(bold=True)

    for col_idx, header in enumerate(CSV_HEADERS, start=1):
        cell = ws.cell(row=3, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, row in enumerate(rows, start=4):
        values = [row.category, *row.display()]
        for col_idx, value in enumerate(values, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if row.category == TOTAL:
                cell.font = Font(bold=True)

    ws.column_dimensions[get_column_letter(1)].width = max(
        [len(CSV_HEADERS[0])] + [len(row.category) for row in rows]
    ) + 2


def create_weekly_excel_report(rows: Sequence[ReportRow], window: Window, output_path: Path):
    """Create a one-sheet Excel workbook with the weekly budget report."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Weekly Budget"
    write_excel_budget_sheet(ws, rows, window)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
