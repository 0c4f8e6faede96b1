"""
Month Calendar Grid

Builds the cells of a month view: whole weeks covering every day of the
target month, each cell carrying the occurrences that land on it.

This is a pure projection. It reads reminders, never changes them, and
allocates a fresh grid on every call; caching a grid is the caller's concern.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

import structlog

from reminder_engine.config import get_settings
from reminder_engine.models.reminder import (
    CalendarCell,
    DayTotals,
    Occurrence,
    Reminder,
    ReminderType,
)
from reminder_engine.recurrence.date_math import (
    end_of_month,
    first_of_month,
    iter_days,
    week_end,
    week_start,
)
from reminder_engine.recurrence.expander import InvalidWindowError, RecurrenceExpander


logger = structlog.get_logger(__name__)


def month_window(year: int, month: int, first_weekday: int) -> tuple[date, date]:
    """
    (first, last) day of the grid for a month.

    Starts on the week boundary at or before the 1st and ends on the week
    boundary at or after the month's last day.
    """
    if not 1 <= month <= 12:
        raise InvalidWindowError(f"Month must be between 1 and 12, got {month}")
    return (
        week_start(first_of_month(year, month), first_weekday),
        week_end(end_of_month(year, month), first_weekday),
    )


def build_month(
    year: int,
    month: int,
    reminders: Iterable[Reminder],
    today: Optional[date] = None,
    first_weekday: Optional[int] = None,
    expander: Optional[RecurrenceExpander] = None,
) -> list[CalendarCell]:
    """
    Build the month grid.

    Args:
        year, month: Target month
        reminders: Reminder records; inactive ones are skipped
        today: Reference date for `is_today` (defaults to date.today())
        first_weekday: Weekday the grid starts on, Monday=0.
                       Defaults to the configured week start.
        expander: Expander to use (defaults to one with configured bounds)

    Returns:
        Cells in date order; the count is always a multiple of 7.
    """
    if first_weekday is None:
        first_weekday = get_settings().engine.first_weekday
    today = today or date.today()
    expander = expander or RecurrenceExpander()

    window_start, window_end = month_window(year, month, first_weekday)

    by_date: dict[date, list[Occurrence]] = defaultdict(list)
    for reminder in reminders:
        if not reminder.is_active:
            continue
        for occurrence in expander.expand(reminder, window_start, window_end):
            by_date[occurrence.date].append(occurrence)

    cells = [
        CalendarCell(
            date=day,
            in_target_month=(day.year == year and day.month == month),
            is_today=(day == today),
            occurrences=by_date.get(day, []),
        )
        for day in iter_days(window_start, window_end)
    ]

    logger.debug(
        "calendar_built",
        year=year,
        month=month,
        cells=len(cells),
        occurrences=sum(len(v) for v in by_date.values()),
    )
    return cells


def occurrences_on(cells: Iterable[CalendarCell], day: date) -> list[Occurrence]:
    """Occurrences of the selected day, or [] if the day is not on the grid."""
    for cell in cells:
        if cell.date == day:
            return list(cell.occurrences)
    return []


def day_totals(cell: CalendarCell, reminders: Iterable[Reminder]) -> DayTotals:
    """Sum payments and receivables due on a cell's date."""
    by_id: dict[UUID, Reminder] = {r.id: r for r in reminders}

    payments = Decimal("0")
    receivables = Decimal("0")
    for occurrence in cell.occurrences:
        reminder = by_id.get(occurrence.reminder_id)
        if reminder is None:
            continue
        if reminder.type == ReminderType.PAYMENT:
            payments += reminder.amount
        else:
            receivables += reminder.amount

    return DayTotals(date=cell.date, payments=payments, receivables=receivables)
