"""
Audit Models for the Reminder Engine

Views built for the presentation layer and reminder creation attempts are
recorded as audit events. This provides:
1. Traceability of what a user was shown and when
2. Debugging information when a view looks wrong
3. A record of rejected creation requests

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Reminder lifecycle
    REMINDER_VALIDATED = "reminder_validated"
    REMINDER_REJECTED = "reminder_rejected"
    REMINDER_CREATED = "reminder_created"

    # Views
    CALENDAR_BUILT = "calendar_built"
    SCHEDULE_BUILT = "schedule_built"
    REMINDERS_CLASSIFIED = "reminders_classified"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'reminder', 'calendar', 'schedule')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one dashboard load)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.calendar_built(2024, 2, cell_count, occurrence_count)
        event = AuditEventBuilder.reminder_created(reminder_id, title, correlation_id)
    """

    @staticmethod
    def reminder_validated(
        request_id: UUID,
        warning_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_VALIDATED,
            entity_type="reminder_request",
            entity_id=request_id,
            correlation_id=correlation_id,
            description=f"Reminder request passed validation with {warning_count} warnings",
            details={
                "warning_count": warning_count,
            },
        )

    @staticmethod
    def reminder_rejected(
        request_id: UUID,
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="reminder_request",
            entity_id=request_id,
            correlation_id=correlation_id,
            description=f"Reminder request rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def reminder_created(
        reminder_id: UUID,
        title: str,
        recurrence: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDER_CREATED,
            entity_type="reminder",
            entity_id=reminder_id,
            correlation_id=correlation_id,
            description=f"Reminder created: {title}",
            details={
                "title": title,
                "recurrence": recurrence,
            },
            is_user_action=True,
        )

    @staticmethod
    def calendar_built(
        year: int,
        month: int,
        cell_count: int,
        occurrence_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CALENDAR_BUILT,
            entity_type="calendar",
            correlation_id=correlation_id,
            description=f"Calendar built for {year:04d}-{month:02d}",
            details={
                "year": year,
                "month": month,
                "cell_count": cell_count,
                "occurrence_count": occurrence_count,
            },
        )

    @staticmethod
    def schedule_built(
        start: date,
        horizon_days: int,
        occurrence_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCHEDULE_BUILT,
            entity_type="schedule",
            correlation_id=correlation_id,
            description=f"Schedule built: {occurrence_count} occurrences in {horizon_days} days",
            details={
                "start": start.isoformat(),
                "horizon_days": horizon_days,
                "occurrence_count": occurrence_count,
            },
        )

    @staticmethod
    def reminders_classified(
        reference_date: date,
        counts: dict[str, int],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMINDERS_CLASSIFIED,
            entity_type="classification",
            correlation_id=correlation_id,
            description=f"Classified {sum(counts.values())} reminders",
            details={
                "reference_date": reference_date.isoformat(),
                "counts": counts,
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
            correlation_id=correlation_id,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
