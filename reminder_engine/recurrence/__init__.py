"""Recurrence expansion package."""

from reminder_engine.recurrence.expander import (
    MONTHLY_LOOKAHEAD_DAYS,
    check_interval,
    InvalidRecurrenceError,
    InvalidWindowError,
    RecurrenceError,
    RecurrenceExpander,
    expand,
    monthly_occurrence,
    step_days,
    validate_rule,
)

__all__ = [
    "MONTHLY_LOOKAHEAD_DAYS",
    "check_interval",
    "InvalidRecurrenceError",
    "InvalidWindowError",
    "RecurrenceError",
    "RecurrenceExpander",
    "expand",
    "monthly_occurrence",
    "step_days",
    "validate_rule",
]
