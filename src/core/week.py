"""
Week selection for reports.
"""

from datetime import date, datetime, timedelta

from models.events import Window


def next_monday(today: date | None = None) -> date:
    """The Monday after today (a week ahead if today is Monday)."""
    today = today or date.today()
    days_until_monday = (7 - today.weekday()) % 7 or 7
    return today + timedelta(days=days_until_monday)


def parse_week_start(date_str: str) -> date:
    """
    Parse a YYYY-MM-DD string that must fall on a Monday.

    Raises:
        ValueError: if the string is not a valid date or not a Monday.
    """
    try:
        parsed = datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date format '{date_str}'. Use YYYY-MM-DD")

    if parsed.weekday() != 0:
        raise ValueError(f"{date_str} is not a Monday")
    return parsed


def get_week_window(date_str: str | None) -> Window:
    """Window for the given Monday, or for next Monday if none is given."""
    week_start = parse_week_start(date_str) if date_str else next_monday()
    return Window(week_start)
