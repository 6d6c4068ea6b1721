"""
Reconcile calendar events against a weekly time budget.

Pipeline per event: resolve duration, expand weekly recurrences inside the
window, match a budget category by title prefix, add hours to that category.
The resulting totals are joined with the budget into report rows.
"""

import warnings
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from core.config import (
    DAY_MAP,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_WEEK,
    TOTAL,
    UNCATEGORIZED,
)
from models.events import (
    DurationSpec,
    EndInstant,
    Event,
    RecurrenceRule,
    ReportRow,
    Window,
)


class DurationWarning(UserWarning):
    """An event's computed duration was negative and has been ignored."""


# =============================================================================
# DURATION
# =============================================================================


def resolve_duration(event: Event) -> int | float | None:
    """
    Return the event's nominal duration in seconds.

    Returns None when the event has neither an end instant nor a duration,
    in which case it contributes nothing. A negative duration (end before
    start) is reported with a DurationWarning and clamped to zero.
    """
    match event.duration:
        case EndInstant(instant=end):
            seconds = (end - event.start).total_seconds()
        case DurationSpec(weeks=w, days=d, hours=h, minutes=m, seconds=s):
            seconds = (
                w * SECONDS_PER_WEEK
                + d * SECONDS_PER_DAY
                + h * SECONDS_PER_HOUR
                + m * SECONDS_PER_MINUTE
                + s
            )
        case _:
            return None

    if seconds < 0:
        warnings.warn(
            f"Event '{event.title}' starting {event.start} has a negative "
            f"duration ({seconds}s); counting it as zero",
            DurationWarning,
            stacklevel=2,
        )
        return 0
    return seconds


# =============================================================================
# RECURRENCE
# =============================================================================


def _day_ordinal(d: date) -> int:
    # date.weekday() is Monday = 0; DAY_MAP is Sunday = 0
    return (d.weekday() + 1) % 7


def expand_recurrences(rrule: RecurrenceRule | None, window: Window) -> list[date | None]:
    """
    Return the dates inside the window on which the event is counted.

    Only WEEKLY rules with a BYDAY list are expanded. Anything else counts
    once, represented by a single None entry (the event's own start date).
    """
    if rrule is None or not rrule.is_weekly_by_day:
        return [None]

    target_days = {DAY_MAP[code] for code in rrule.by_day}
    return [d for d in window.dates() if _day_ordinal(d) in target_days]


# =============================================================================
# CATEGORY
# =============================================================================


def match_category(title: str, categories: Sequence[str]) -> str | None:
    """First category (in budget order) that the title starts with."""
    for category in categories:
        if title.startswith(category):
            return category
    return None


# =============================================================================
# AGGREGATION
# =============================================================================


def event_hours(event: Event, window: Window) -> float | None:
    """Hours the event contributes to the window, or None if it has no duration."""
    seconds = resolve_duration(event)
    if seconds is None:
        return None
    occurrences = expand_recurrences(event.rrule, window)
    return seconds / SECONDS_PER_HOUR * len(occurrences)


def aggregate_hours(
    events: Iterable[Event], window: Window, categories: Sequence[str]
) -> dict[str, float]:
    """
    Total actual hours per category.

    Events matching no category are counted under UNCATEGORIZED. Absent
    categories read as 0.0.
    """
    actual_hours: dict[str, float] = defaultdict(float)

    for event in events:
        hours = event_hours(event, window)
        if hours is None:
            continue
        category = match_category(event.title, categories) or UNCATEGORIZED
        actual_hours[category] += hours

    return actual_hours


# =============================================================================
# REPORT
# =============================================================================


def build_report(budget: Mapping[str, float], actual_hours: Mapping[str, float]) -> list[ReportRow]:
    """
    Join budgeted and actual hours into report rows.

    One row per budget category in budget order, then an Uncategorized row
    when it has hours, then the TOTAL row.
    """
    rows = [
        ReportRow(category=category, budgeted=budgeted, actual=actual_hours.get(category, 0.0))
        for category, budgeted in budget.items()
    ]

    uncategorized = actual_hours.get(UNCATEGORIZED, 0.0)
    if uncategorized > 0:
        rows.append(ReportRow(category=UNCATEGORIZED, budgeted=0.0, actual=uncategorized))

    rows.append(
        ReportRow(
            category=TOTAL,
            budgeted=sum(budget.values()),
            actual=sum(actual_hours.values()),
        )
    )
    return rows


def reconcile(events: Iterable[Event], window: Window, budget: Mapping[str, float]) -> list[ReportRow]:
    """Aggregate events for the window and build the budget report."""
    actual_hours = aggregate_hours(events, window, list(budget))
    return build_report(budget, actual_hours)
