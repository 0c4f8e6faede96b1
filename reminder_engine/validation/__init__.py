"""Validation package."""

from reminder_engine.validation.validator import (
    ReminderValidationError,
    ReminderValidator,
)

__all__ = ["ReminderValidationError", "ReminderValidator"]
