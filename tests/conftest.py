"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Add src and fixture helpers to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent / "fixtures"))

from models.events import DurationSpec, EndInstant, Event, RecurrenceRule, Window

WEEKDAYS = ("MO", "TU", "WE", "TH", "FR")
ALL_DAYS = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")


@pytest.fixture
def window():
    """Week of Monday 2024-01-01 to Sunday 2024-01-07."""
    return Window(date(2024, 1, 1))


@pytest.fixture
def budget():
    """Budget adding up to 168 hours."""
    return {"Work": 80, "Sleep": 56, "Personal": 32}


@pytest.fixture
def sample_events():
    """Standup on weekdays, nightly sleep, and one uncategorized gym session."""
    return [
        Event(
            title="Work: standup",
            start=datetime(2024, 1, 1, 9, 0),
            duration=EndInstant(datetime(2024, 1, 1, 10, 0)),
            rrule=RecurrenceRule("WEEKLY", WEEKDAYS),
        ),
        Event(
            title="Sleep",
            start=datetime(2024, 1, 1, 23, 0),
            duration=DurationSpec(hours=8),
            rrule=RecurrenceRule("WEEKLY", ALL_DAYS),
        ),
        Event(
            title="Gym",
            start=datetime(2024, 1, 3, 18, 0),
            duration=EndInstant(datetime(2024, 1, 3, 19, 0)),
        ),
    ]


@pytest.fixture
def budget_file(tmp_path):
    """Write a budget YAML file and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "budget.yml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
