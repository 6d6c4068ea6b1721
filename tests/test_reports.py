"""Tests for report rendering."""

from datetime import datetime

from openpyxl import load_workbook

from core.reconcile import build_report, reconcile
from models.events import DurationSpec, Event, ReportRow
from services.reports import (
    create_weekly_excel_report,
    format_category,
    format_csv,
    format_debug_report,
)


def test_format_category_quotes_commas_and_colons():
    assert format_category("Meetings: 1:1") == '"Meetings: 1:1"'
    assert format_category("Errands, chores") == '"Errands, chores"'
    assert format_category("Work") == "Work"


def test_format_csv_end_to_end(sample_events, window, budget):
    csv = format_csv(reconcile(sample_events, window, budget))
    assert csv.splitlines() == [
        "Category,Budgeted,Actual,Variance",
        "Work,80.0,5.0,-75.0",
        "Sleep,56.0,56.0,0.0",
        "Personal,32.0,0.0,-32.0",
        "Uncategorized,0.0,1.0,1.0",
        "TOTAL,168.0,62.0,-106.0",
    ]


def test_format_csv_rounds_and_quotes():
    rows = build_report({"Meetings: 1:1": 100, "Work": 68}, {"Meetings: 1:1": 2.25, "Work": 0.04})
    lines = format_csv(rows).splitlines()
    assert lines[1] == '"Meetings: 1:1",100.0,2.2,-97.8'
    assert lines[2] == "Work,68.0,0.0,-68.0"


def test_display_never_shows_negative_zero():
    row = ReportRow(category="Work", budgeted=10.0, actual=9.96)
    assert row.display() == (10.0, 10.0, 0.0)
    assert str(row.display()[2]) == "0.0"


def test_debug_report_lists_events(sample_events, window, budget):
    text = format_debug_report(sample_events, window, list(budget), "https://caldav.example.com/cal/")

    assert "DEBUG: All calendar events for 2024-01-01 to 2024-01-07" in text
    assert "CalDAV URL: https://caldav.example.com/cal/" in text
    assert "  Title: Work: standup" in text
    assert "  RRULE: WEEKLY on MO, TU, WE, TH, FR" in text
    assert "  Expands to 5 occurrences in week:" in text
    assert "    - 2024-01-05" in text
    assert "  Total duration for week: 56.0 hours" in text
    assert "  Matches budget category: Sleep" in text
    assert "NO MATCH - would be categorized as Uncategorized" in text


def test_debug_report_skips_events_without_duration(window):
    events = [Event(title="Placeholder", start=datetime(2024, 1, 2, 9, 0))]
    text = format_debug_report(events, window, ["Work"])
    assert "Placeholder" not in text


def test_debug_report_without_events(window):
    text = format_debug_report([], window, ["Work"])
    assert "No events returned from CalDAV server." in text
    assert "- Wrong calendar URL" in text


def test_excel_report(tmp_path, sample_events, window, budget):
    rows = reconcile(sample_events, window, budget)
    output_path = tmp_path / "reports" / "week.xlsx"

    create_weekly_excel_report(rows, window, output_path)

    ws = load_workbook(output_path)["Weekly Budget"]
    assert ws["A1"].value == "Weekly budget 1/1/2024 - 1/7/2024"
    assert [cell.value for cell in ws[3]] == ["Category", "Budgeted", "Actual", "Variance"]
    assert [cell.value for cell in ws[4]] == ["Work", 80.0, 5.0, -75.0]
    assert [cell.value for cell in ws[8]] == ["TOTAL", 168.0, 62.0, -106.0]
    assert ws["A8"].font.bold


def test_duration_spec_event_in_csv(window):
    events = [Event(title="Work", start=datetime(2024, 1, 2), duration=DurationSpec(minutes=90))]
    lines = format_csv(reconcile(events, window, {"Work": 168})).splitlines()
    assert lines[1] == "Work,168.0,1.5,-166.5"
