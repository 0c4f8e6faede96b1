"""
Due-Date Classification

Computes how many days remain until a reminder's next relevant occurrence
and which status band that places it in.

Bands, first match wins:
    INACTIVE   reminder switched off, whatever the date
    OVERDUE    days_until_due < 0
    DUE_TODAY  days_until_due == 0
    DUE_SOON   1 .. due_soon_days        (default 3)
    UPCOMING   .. upcoming_days          (default 7)
    ACTIVE     anything further out
"""

from datetime import date
from typing import Iterable, Optional

from reminder_engine.config import get_settings
from reminder_engine.models.reminder import (
    DueClassification,
    DueStatus,
    RecurrenceKind,
    Reminder,
)
from reminder_engine.recurrence.date_math import days_between
from reminder_engine.recurrence.expander import RecurrenceExpander


class DueClassifier:
    """Classifies reminders against a reference date."""

    def __init__(
        self,
        due_soon_days: Optional[int] = None,
        upcoming_days: Optional[int] = None,
        expander: Optional[RecurrenceExpander] = None,
    ):
        settings = get_settings().engine
        self._due_soon_days = due_soon_days if due_soon_days is not None else settings.due_soon_days
        self._upcoming_days = upcoming_days if upcoming_days is not None else settings.upcoming_days
        self._expander = expander or RecurrenceExpander()

    def next_relevant_date(self, reminder: Reminder, today: date) -> date:
        """
        The occurrence the day offset is measured to.

        A one-time reminder always measures to its due date. A recurring
        reminder measures to its next occurrence on or after today; once a
        bounded series has run out, it measures to its final occurrence so
        the reminder reads as overdue.
        """
        if reminder.recurrence == RecurrenceKind.ONCE:
            return reminder.due_date

        upcoming = self._expander.next_occurrence(reminder, today)
        if upcoming is not None:
            return upcoming

        last = self._expander.last_occurrence(reminder)
        return last if last is not None else reminder.due_date

    def status_for(self, reminder: Reminder, days_until_due: int) -> DueStatus:
        if not reminder.is_active:
            return DueStatus.INACTIVE
        if days_until_due < 0:
            return DueStatus.OVERDUE
        if days_until_due == 0:
            return DueStatus.DUE_TODAY
        if days_until_due <= self._due_soon_days:
            return DueStatus.DUE_SOON
        if days_until_due <= self._upcoming_days:
            return DueStatus.UPCOMING
        return DueStatus.ACTIVE

    def classify(self, reminder: Reminder, today: date) -> DueClassification:
        next_due = self.next_relevant_date(reminder, today)
        days = days_between(today, next_due)
        return DueClassification(
            days_until_due=days,
            status=self.status_for(reminder, days),
            next_due=next_due,
        )

    def classify_many(
        self,
        reminders: Iterable[Reminder],
        today: date,
    ) -> list[tuple[Reminder, DueClassification]]:
        """Classify every reminder, soonest (most overdue) first."""
        results = [(r, self.classify(r, today)) for r in reminders]
        results.sort(key=lambda pair: (pair[1].days_until_due, str(pair[0].id)))
        return results

    def overdue(
        self,
        reminders: Iterable[Reminder],
        today: date,
    ) -> list[tuple[Reminder, DueClassification]]:
        return [
            pair for pair in self.classify_many(reminders, today)
            if pair[1].status == DueStatus.OVERDUE
        ]

    def due_within(
        self,
        reminders: Iterable[Reminder],
        today: date,
        days: int,
    ) -> list[tuple[Reminder, DueClassification]]:
        """Active reminders due between today and `days` from now, inclusive."""
        return [
            pair for pair in self.classify_many(reminders, today)
            if pair[1].status != DueStatus.INACTIVE
            and 0 <= pair[1].days_until_due <= days
        ]


def classify(reminder: Reminder, today: date) -> DueClassification:
    """Classify with the configured bands. See DueClassifier.classify."""
    return DueClassifier().classify(reminder, today)
