"""
Calendar event fetching from a CalDAV server and iCalendar parsing.
"""

from datetime import date, datetime, time

import caldav
from icalendar import Calendar

from core.config import CALDAV_URL, CALDAV_VERIFY_TLS, FASTMAIL_EMAIL, FASTMAIL_PASSWORD
from models.events import DurationSpec, EndInstant, Event, RecurrenceRule, Window


def get_caldav_client() -> caldav.DAVClient:
    """Create a CalDAV client from the configured credentials."""
    return caldav.DAVClient(
        url=CALDAV_URL,
        username=FASTMAIL_EMAIL,
        password=FASTMAIL_PASSWORD,
        ssl_verify_cert=CALDAV_VERIFY_TLS,
    )


def fetch_calendar_data(window: Window) -> list[str]:
    """
    Fetch raw iCalendar payloads for all events overlapping the window.

    Recurring events are returned as their master definition; weekly
    expansion happens in the reconciliation engine.
    """
    client = get_caldav_client()
    calendar = client.calendar(url=CALDAV_URL)
    time_min, time_max = window.time_range()

    results = calendar.search(start=time_min, end=time_max, event=True, expand=False)
    return [result.data for result in results]


def _as_datetime(value: date | datetime) -> datetime:
    """Promote all-day DATE values to midnight."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time(0, 0, 0))


def _as_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_rrule(component) -> RecurrenceRule | None:
    """Build a RecurrenceRule from the first RRULE of a VEVENT, if any."""
    rrules = _as_list(component.get("RRULE"))
    if not rrules:
        return None

    rrule = rrules[0]
    if not isinstance(rrule, dict):
        raise ValueError(f"Unreadable recurrence rule: {rrule}")

    frequency = _as_list(rrule.get("FREQ"))
    by_day = _as_list(rrule.get("BYDAY"))
    return RecurrenceRule(
        frequency=str(frequency[0]).upper() if frequency else "",
        by_day=tuple(str(code).upper() for code in by_day) or None,
    )


def parse_event(component) -> Event:
    """Parse a VEVENT component into our Event model."""
    title = str(component.get("SUMMARY", "")).strip()
    rrule_errors = [message for name, message in component.errors if name == "RRULE"]
    if rrule_errors:
        raise ValueError(f"Invalid recurrence rule on '{title}': {rrule_errors[0]}")

    start = _as_datetime(component.decoded("DTSTART"))

    duration = None
    if component.get("DTEND") is not None:
        duration = EndInstant(_as_datetime(component.decoded("DTEND")))
    elif component.get("DURATION") is not None:
        duration = DurationSpec.from_timedelta(component.decoded("DURATION"))

    return Event(title=title, start=start, duration=duration, rrule=parse_rrule(component))


def parse_calendar_data(calendar_data: str | bytes) -> list[Event]:
    """Parse every VEVENT in an iCalendar payload."""
    calendar = Calendar.from_ical(calendar_data)
    return [
        parse_event(component)
        for component in calendar.walk("VEVENT")
        if component.get("DTSTART") is not None
    ]


def fetch_events(window: Window) -> list[Event]:
    """Fetch and parse all calendar events for the window."""
    events = []
    for calendar_data in fetch_calendar_data(window):
        events.extend(parse_calendar_data(calendar_data))
    return events
