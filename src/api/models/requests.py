"""Pydantic request models for API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from models.events import DurationSpec, EndInstant, Event, RecurrenceRule


class DurationPayload(BaseModel):
    """ISO 8601 style duration split into integer fields."""

    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0


class RecurrencePayload(BaseModel):
    """Recurrence rule (RRULE subset)."""

    frequency: str
    by_day: list[str] | None = None


class EventPayload(BaseModel):
    """
    Calendar event as submitted by clients.

    At most one of end/duration is used; end wins when both are sent.
    """

    title: str
    start: datetime
    end: datetime | None = None
    duration: DurationPayload | None = None
    rrule: RecurrencePayload | None = None

    def to_event(self) -> Event:
        """
        Convert to the domain Event.

        Raises:
            ValueError: if a weekly recurrence rule has unknown weekday codes,
                or start and end mix aware and naive times.
        """
        duration = None
        if self.end is not None:
            duration = EndInstant(self.end)
        elif self.duration is not None:
            duration = DurationSpec(**self.duration.model_dump())

        rrule = None
        if self.rrule is not None:
            rrule = RecurrenceRule(
                frequency=self.rrule.frequency.upper(),
                by_day=tuple(code.upper() for code in self.rrule.by_day)
                if self.rrule.by_day
                else None,
            )

        return Event(title=self.title.strip(), start=self.start, duration=duration, rrule=rrule)


class WeeklyReportRequest(BaseModel):
    """Events and budget for one Monday-to-Sunday week."""

    week_start: date
    budget: dict[str, float]
    events: list[EventPayload] = Field(default_factory=list)
