"""Tests for iCalendar parsing and CalDAV fetching."""

from datetime import date, datetime

import pytest

from core.reconcile import aggregate_hours
from generate_events import generate_week_calendar
from models.events import DurationSpec, EndInstant, RecurrenceRule, Window
from services import calendar as calendar_service

ICS = """\
BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//test//EN
BEGIN:VEVENT
UID:standup@test
SUMMARY:  Work: standup  
DTSTART:20240101T090000Z
DTEND:20240101T091500Z
RRULE:FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR
END:VEVENT
BEGIN:VEVENT
UID:sleep@test
SUMMARY:Sleep
DTSTART:20240101T230000Z
DURATION:PT8H
END:VEVENT
BEGIN:VEVENT
UID:holiday@test
SUMMARY:Holiday
DTSTART;VALUE=DATE:20240101
DTEND;VALUE=DATE:20240102
END:VEVENT
BEGIN:VEVENT
UID:reminder@test
SUMMARY:Reminder
DTSTART:20240102T080000Z
END:VEVENT
END:VCALENDAR
"""


def test_parse_calendar_data():
    standup, sleep, holiday, reminder = calendar_service.parse_calendar_data(ICS)

    assert standup.title == "Work: standup"
    assert isinstance(standup.duration, EndInstant)
    assert standup.rrule == RecurrenceRule("WEEKLY", ("MO", "TU", "WE", "TH", "FR"))

    assert sleep.duration == DurationSpec(hours=8)
    assert sleep.rrule is None

    assert holiday.start == datetime(2024, 1, 1, 0, 0)
    assert holiday.duration == EndInstant(datetime(2024, 1, 2, 0, 0))

    assert reminder.duration is None


def test_parsed_events_reconcile(window):
    events = calendar_service.parse_calendar_data(ICS)
    actual = aggregate_hours(events, window, ["Work", "Sleep"])
    assert actual["Work"] == 1.25
    assert actual["Sleep"] == 8.0
    assert actual["Uncategorized"] == 24.0


def test_unknown_weekday_in_rrule_is_an_error():
    ics = ICS.replace("BYDAY=MO,TU,WE,TH,FR", "BYDAY=MO,XX")
    with pytest.raises(ValueError):
        calendar_service.parse_calendar_data(ics)


def test_monthly_rule_with_ordinal_day_counts_once(window):
    ics = ICS.replace("FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR", "FREQ=MONTHLY;BYDAY=1TU")
    standup = calendar_service.parse_calendar_data(ics)[0]

    assert standup.rrule.frequency == "MONTHLY"
    assert aggregate_hours([standup], window, ["Work"])["Work"] == 0.25


def test_generated_week_matches_expected_hours():
    window = Window(date(2025, 11, 3))
    ics, expected = generate_week_calendar(window.week_start, seed=7)

    events = calendar_service.parse_calendar_data(ics)
    actual = aggregate_hours(events, window, ["Work", "Sleep"])

    for category, hours in expected.items():
        assert actual[category] == pytest.approx(hours)


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeCalendar:
    def __init__(self, payloads):
        self.payloads = payloads
        self.search_kwargs = None

    def search(self, **kwargs):
        self.search_kwargs = kwargs
        return [FakeResult(payload) for payload in self.payloads]


class FakeClient:
    def __init__(self, calendar):
        self._calendar = calendar

    def calendar(self, url):
        return self._calendar


def test_fetch_events(monkeypatch, window):
    fake_calendar = FakeCalendar([ICS, ICS])
    monkeypatch.setattr(calendar_service, "get_caldav_client", lambda: FakeClient(fake_calendar))

    events = calendar_service.fetch_events(window)

    assert len(events) == 8
    assert fake_calendar.search_kwargs == {
        "start": datetime(2024, 1, 1, 0, 0, 0),
        "end": datetime(2024, 1, 7, 23, 59, 59),
        "event": True,
        "expand": False,
    }
