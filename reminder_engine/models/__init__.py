"""
Data Models Package

This package contains all Pydantic models used by the reminder engine.
All data flowing through the engine must conform to these schemas.
"""

from reminder_engine.models.reminder import (
    CalendarCell,
    DayTotals,
    DueClassification,
    DueStatus,
    Occurrence,
    RecurrenceKind,
    Reminder,
    ReminderCreate,
    ReminderType,
)
from reminder_engine.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from reminder_engine.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Reminder models
    "CalendarCell",
    "DayTotals",
    "DueClassification",
    "DueStatus",
    "Occurrence",
    "RecurrenceKind",
    "Reminder",
    "ReminderCreate",
    "ReminderType",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
