"""
Data models for calendar events and budget reports.

Events are immutable once read from calendar data. An event's length is a
tagged union: either an explicit end instant or a duration specification.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from core.config import DAY_MAP


@dataclass(frozen=True)
class EndInstant:
    """Event length given as an explicit end instant (DTEND)."""

    instant: datetime


@dataclass(frozen=True)
class DurationSpec:
    """Event length given as a duration value (DURATION)."""

    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "DurationSpec":
        hours, remainder = divmod(delta.seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        return cls(days=delta.days, hours=hours, minutes=minutes, seconds=seconds)


Duration = EndInstant | DurationSpec


@dataclass(frozen=True)
class RecurrenceRule:
    """Recurrence rule (RRULE). Only WEEKLY with BYDAY is expanded."""

    frequency: str
    by_day: tuple[str, ...] | None = None

    def __post_init__(self):
        if self.by_day is None:
            return
        object.__setattr__(self, "by_day", tuple(self.by_day))
        # Other frequencies are never expanded, so their BYDAY (e.g. 1TU) is kept as-is
        if self.frequency != "WEEKLY":
            return
        unknown = [code for code in self.by_day if code not in DAY_MAP]
        if unknown:
            raise ValueError(
                f"Unknown weekday code(s) in recurrence rule: {', '.join(unknown)}"
            )

    @property
    def is_weekly_by_day(self) -> bool:
        return self.frequency == "WEEKLY" and bool(self.by_day)


@dataclass(frozen=True)
class Event:
    """Parsed calendar event."""

    title: str
    start: datetime
    duration: Duration | None = None
    rrule: RecurrenceRule | None = None

    def __post_init__(self):
        if isinstance(self.duration, EndInstant):
            start_aware = self.start.tzinfo is not None
            end_aware = self.duration.instant.tzinfo is not None
            if start_aware != end_aware:
                raise ValueError(
                    f"Event '{self.title}' mixes time zone aware and naive start/end times"
                )


@dataclass(frozen=True)
class Window:
    """Monday-to-Sunday reconciliation window (inclusive)."""

    week_start: date

    def __post_init__(self):
        if self.week_start.weekday() != 0:
            raise ValueError(f"{self.week_start.isoformat()} is not a Monday")

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)

    def dates(self) -> list[date]:
        return [self.week_start + timedelta(days=offset) for offset in range(7)]

    def time_range(self) -> tuple[datetime, datetime]:
        """First and last second of the window, as naive local datetimes."""
        return (
            datetime.combine(self.week_start, time(0, 0, 0)),
            datetime.combine(self.week_end, time(23, 59, 59)),
        )


@dataclass(frozen=True)
class ReportRow:
    """
    One line of the budget variance report.

    Values are kept unrounded; use display() when rendering.
    """

    category: str
    budgeted: float
    actual: float
    variance: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "variance", self.actual - self.budgeted)

    def display(self) -> tuple[float, float, float]:
        """Budgeted, actual and variance rounded to 1 decimal."""
        return (
            round_hours(self.budgeted),
            round_hours(self.actual),
            round_hours(self.variance),
        )


def round_hours(value: float) -> float:
    """Round to 1 decimal for display (never shows -0.0)."""
    return round(float(value), 1) or 0.0
