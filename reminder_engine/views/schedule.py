"""
Upcoming Schedule

Merges the occurrences of many reminders over the next N days into one
date-ordered feed for the dashboard.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional
from uuid import UUID

import structlog

from reminder_engine.models.reminder import Occurrence, Reminder
from reminder_engine.recurrence.date_math import add_days
from reminder_engine.recurrence.expander import InvalidWindowError, RecurrenceExpander


logger = structlog.get_logger(__name__)


def schedule(
    reminders: Iterable[Reminder],
    today: date,
    horizon_days: int,
    expander: Optional[RecurrenceExpander] = None,
) -> list[Occurrence]:
    """
    Occurrences of all active reminders in [today, today + horizon_days].

    Sorted by date, ties broken by reminder id. Two reminders due on the
    same day both appear.
    """
    if horizon_days < 0:
        raise InvalidWindowError(f"Horizon must not be negative, got {horizon_days}")
    expander = expander or RecurrenceExpander()
    window_end = add_days(today, horizon_days)

    merged: list[Occurrence] = []
    for reminder in reminders:
        if not reminder.is_active:
            continue
        merged.extend(expander.expand(reminder, today, window_end))

    merged.sort(key=lambda occ: (occ.date, occ.reminder_id))
    logger.debug(
        "schedule_built",
        start=today.isoformat(),
        horizon_days=horizon_days,
        occurrences=len(merged),
    )
    return merged


def group_by_reminder(occurrences: Iterable[Occurrence]) -> dict[UUID, list[date]]:
    """Dates per reminder, keeping the order they arrive in."""
    grouped: dict[UUID, list[date]] = defaultdict(list)
    for occurrence in occurrences:
        grouped[occurrence.reminder_id].append(occurrence.date)
    return dict(grouped)


def due_on(
    reminders: Iterable[Reminder],
    day: date,
    expander: Optional[RecurrenceExpander] = None,
) -> list[Reminder]:
    """Active reminders with an occurrence on exactly this day."""
    expander = expander or RecurrenceExpander()
    return [
        reminder for reminder in reminders
        if reminder.is_active and expander.occurs_on(reminder, day)
    ]
