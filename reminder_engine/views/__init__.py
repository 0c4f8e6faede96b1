"""Views built on top of recurrence expansion."""

from reminder_engine.views.calendar import (
    build_month,
    day_totals,
    month_window,
    occurrences_on,
)
from reminder_engine.views.classifier import DueClassifier, classify
from reminder_engine.views.schedule import due_on, group_by_reminder, schedule

__all__ = [
    "DueClassifier",
    "build_month",
    "classify",
    "day_totals",
    "due_on",
    "group_by_reminder",
    "month_window",
    "occurrences_on",
    "schedule",
]
