"""
Recurrence Expansion

Turns one reminder plus an inclusive date window into the list of dates on
which that reminder is due inside the window.

GUARANTEES:
- Output is strictly ascending with no duplicate dates
- Every date lies inside [window_start, window_end]
- No date falls after the reminder's duration_end
- The reminder is never modified; dates are never stepped in place

DESIGN DECISION: Monthly expansion is bounded by an iteration ceiling derived
from the window itself (months spanned plus a small padding). A long window
is therefore always fully expanded, while a caller that wants a harder bound
can pass max_iterations. Hitting the ceiling is not an error: the partial,
still-sorted result is returned and a warning is logged.
"""

from datetime import date
from typing import Optional

import structlog

from reminder_engine.config import get_settings
from reminder_engine.models.reminder import Occurrence, RecurrenceKind, Reminder
from reminder_engine.recurrence.date_math import (
    add_days,
    clamp_day,
    days_between,
    months_between,
    shift_month,
)


logger = structlog.get_logger(__name__)

# Longest gap between two clamped monthly occurrences is 31 days.
MONTHLY_LOOKAHEAD_DAYS = 31

_FIXED_STEPS = {
    RecurrenceKind.DAILY: 1,
    RecurrenceKind.WEEKLY: 7,
}


class RecurrenceError(Exception):
    """Base exception for recurrence errors."""
    pass


class InvalidRecurrenceError(RecurrenceError):
    """The reminder's recurrence rule cannot be expanded."""
    pass


class InvalidWindowError(RecurrenceError):
    """The query window is empty or malformed."""
    pass


def check_interval(
    recurrence: RecurrenceKind,
    interval: Optional[int],
    label: str = "Reminder",
) -> None:
    """
    Raise InvalidRecurrenceError if a rule/interval pair is unusable.

    Only custom recurrence carries a parameter; it must be a whole
    number of days, at least 1.
    """
    if recurrence != RecurrenceKind.CUSTOM:
        return
    if interval is None:
        raise InvalidRecurrenceError(
            f"{label}: custom recurrence requires recurrence_interval"
        )
    if interval < 1:
        raise InvalidRecurrenceError(
            f"{label}: recurrence_interval must be at least 1, got {interval}"
        )


def validate_rule(reminder: Reminder) -> None:
    check_interval(
        reminder.recurrence,
        reminder.recurrence_interval,
        label=f"Reminder {reminder.id}",
    )


def check_window(window_start: date, window_end: date) -> None:
    if window_start > window_end:
        raise InvalidWindowError(
            f"Window start {window_start.isoformat()} is after window end {window_end.isoformat()}"
        )


def step_days(reminder: Reminder) -> Optional[int]:
    """Fixed step in days, or None for one-time and monthly rules."""
    if reminder.recurrence == RecurrenceKind.CUSTOM:
        validate_rule(reminder)
        return reminder.recurrence_interval
    return _FIXED_STEPS.get(reminder.recurrence)


def monthly_occurrence(anchor: date, month_offset: int) -> date:
    """Anchor's day-of-month in the month `month_offset` after the anchor's, clamped."""
    year, month = shift_month(anchor.year, anchor.month, month_offset)
    return clamp_day(year, month, anchor.day)


class RecurrenceExpander:
    """
    Expands reminders into occurrences.

    Stateless apart from its bounds, so one instance can be shared by any
    number of threads or requests.
    """

    def __init__(
        self,
        iteration_padding: Optional[int] = None,
        max_iterations: Optional[int] = None,
    ):
        """
        Initialize expander.

        Args:
            iteration_padding: Extra monthly iterations beyond the months a
                window spans. Defaults to the configured padding.
            max_iterations: Hard cap on monthly iterations per call.
                Defaults to the configured cap (none unless set).
        """
        settings = get_settings().engine
        self._padding = (
            iteration_padding
            if iteration_padding is not None
            else settings.monthly_iteration_padding
        )
        self._max_iterations = (
            max_iterations
            if max_iterations is not None
            else settings.max_monthly_iterations
        )

    def expand(
        self,
        reminder: Reminder,
        window_start: date,
        window_end: date,
        max_iterations: Optional[int] = None,
    ) -> list[Occurrence]:
        """
        Occurrences of `reminder` inside [window_start, window_end].

        Raises:
            InvalidWindowError: window_start is after window_end
            InvalidRecurrenceError: custom rule without a usable interval
        """
        check_window(window_start, window_end)
        validate_rule(reminder)

        if reminder.recurrence == RecurrenceKind.ONCE:
            dates = self._expand_once(reminder, window_start, window_end)
        elif reminder.recurrence == RecurrenceKind.MONTHLY:
            dates = self._expand_monthly(reminder, window_start, window_end, max_iterations)
        else:
            dates = self._expand_fixed_step(reminder, step_days(reminder), window_start, window_end)

        return [self._to_occurrence(reminder, d) for d in dates]

    def occurs_on(self, reminder: Reminder, day: date) -> bool:
        """Is the reminder due on exactly this day?"""
        return len(self.expand(reminder, day, day)) > 0

    def next_occurrence(self, reminder: Reminder, on_or_after: date) -> Optional[date]:
        """
        First occurrence on or after a date.

        Returns None once the series has ended (or a one-time
        reminder's date has passed).
        """
        validate_rule(reminder)
        anchor = reminder.due_date
        if anchor >= on_or_after:
            if reminder.duration_end is not None and anchor > reminder.duration_end:
                return None
            return anchor
        if reminder.recurrence == RecurrenceKind.ONCE:
            return None

        lookahead = step_days(reminder) or MONTHLY_LOOKAHEAD_DAYS
        found = self.expand(reminder, on_or_after, add_days(on_or_after, lookahead))
        return found[0].date if found else None

    def last_occurrence(self, reminder: Reminder) -> Optional[date]:
        """
        Final occurrence of a bounded series.

        One-time reminders end on their due date; recurring reminders
        without duration_end never end and return None.
        """
        validate_rule(reminder)
        anchor = reminder.due_date
        if reminder.recurrence == RecurrenceKind.ONCE:
            return anchor
        end = reminder.duration_end
        if end is None or end < anchor:
            return None

        if reminder.recurrence == RecurrenceKind.MONTHLY:
            offset = months_between(anchor, end)
            candidate = monthly_occurrence(anchor, offset)
            if candidate > end:
                candidate = monthly_occurrence(anchor, offset - 1)
            return candidate

        step = step_days(reminder)
        return add_days(anchor, (days_between(anchor, end) // step) * step)

    def upcoming_occurrences(
        self,
        reminder: Reminder,
        on_or_after: date,
        limit: int,
    ) -> list[Occurrence]:
        """The next `limit` occurrences starting from a date."""
        results: list[Occurrence] = []
        current = self.next_occurrence(reminder, on_or_after)
        while current is not None and len(results) < limit:
            results.append(self._to_occurrence(reminder, current))
            current = self.next_occurrence(reminder, add_days(current, 1))
        return results

    # -------------------------------------------------------------------------
    # Per-rule expansion
    # -------------------------------------------------------------------------

    @staticmethod
    def _stop_date(reminder: Reminder, window_end: date) -> date:
        if reminder.duration_end is None:
            return window_end
        return min(window_end, reminder.duration_end)

    def _expand_once(
        self,
        reminder: Reminder,
        window_start: date,
        window_end: date,
    ) -> list[date]:
        due = reminder.due_date
        if window_start <= due <= self._stop_date(reminder, window_end):
            return [due]
        return []

    def _expand_fixed_step(
        self,
        reminder: Reminder,
        step: int,
        window_start: date,
        window_end: date,
    ) -> list[date]:
        anchor = reminder.due_date
        stop = self._stop_date(reminder, window_end)

        steps = 0
        if anchor < window_start:
            # ceil division: whole steps needed to reach or pass window_start
            steps = -(-days_between(anchor, window_start) // step)

        dates = []
        current = add_days(anchor, steps * step)
        while current <= stop:
            dates.append(current)
            current = add_days(current, step)
        return dates

    def _expand_monthly(
        self,
        reminder: Reminder,
        window_start: date,
        window_end: date,
        max_iterations: Optional[int],
    ) -> list[date]:
        anchor = reminder.due_date
        stop = self._stop_date(reminder, window_end)

        # Smallest offset k >= 0 whose clamped date is on/after window_start.
        # Clamped dates grow with k, so only the window_start month can fall short.
        offset = max(0, months_between(anchor, window_start))
        if monthly_occurrence(anchor, offset) < window_start:
            offset += 1

        ceiling = self._monthly_ceiling(anchor, offset, window_end, max_iterations)

        dates = []
        iterations = 0
        while True:
            if iterations >= ceiling:
                logger.warning(
                    "expansion_truncated",
                    reminder_id=str(reminder.id),
                    window_start=window_start.isoformat(),
                    window_end=window_end.isoformat(),
                    iterations=iterations,
                    returned=len(dates),
                )
                break
            iterations += 1

            candidate = monthly_occurrence(anchor, offset)
            if candidate > stop:
                break
            dates.append(candidate)
            offset += 1

        return dates

    def _monthly_ceiling(
        self,
        anchor: date,
        first_offset: int,
        window_end: date,
        max_iterations: Optional[int],
    ) -> int:
        first = monthly_occurrence(anchor, first_offset)
        spanned = max(0, months_between(first, window_end)) + 1
        ceiling = spanned + self._padding

        cap = max_iterations if max_iterations is not None else self._max_iterations
        if cap is not None:
            ceiling = min(ceiling, cap)
        return ceiling

    @staticmethod
    def _to_occurrence(reminder: Reminder, d: date) -> Occurrence:
        return Occurrence(
            reminder_id=reminder.id,
            date=d,
            is_anchor=d == reminder.due_date,
        )


def expand(
    reminder: Reminder,
    window_start: date,
    window_end: date,
    max_iterations: Optional[int] = None,
) -> list[Occurrence]:
    """Expand with the configured bounds. See RecurrenceExpander.expand."""
    return RecurrenceExpander().expand(reminder, window_start, window_end, max_iterations)
