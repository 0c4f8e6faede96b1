"""
Audit Logger

DESIGN DECISION: Every view handed to the presentation layer and every
reminder creation attempt is logged. This provides:
1. Traceability of what a user was shown
2. Debugging capability when a calendar or feed looks wrong
3. A history of rejected reminder requests

The audit logger:
- Is async to match the storage collaborator
- Gracefully handles failures (a broken audit sink never breaks a view)
- Supports correlation IDs to trace related events
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID, uuid4

import structlog

from reminder_engine.config import get_settings
from reminder_engine.models.audit import AuditEvent, AuditEventBuilder
from reminder_engine.services.storage import AuditStorageInterface


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure stdlib logging and structlog for the engine.

    Engine modules log through structlog.get_logger(__name__);
    this routes them through the stdlib root logger as JSON lines.
    """
    level = level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_reminder_validated(
        self,
        request_id: UUID,
        warning_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.reminder_validated(
            request_id=request_id,
            warning_count=warning_count,
            correlation_id=correlation_id,
        ))

    async def log_reminder_rejected(
        self,
        request_id: UUID,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a creation request that failed validation."""
        await self.log(AuditEventBuilder.reminder_rejected(
            request_id=request_id,
            issues=issues,
            correlation_id=correlation_id,
        ))

    async def log_reminder_created(
        self,
        reminder_id: UUID,
        title: str,
        recurrence: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.reminder_created(
            reminder_id=reminder_id,
            title=title,
            recurrence=recurrence,
            correlation_id=correlation_id,
        ))

    async def log_calendar_built(
        self,
        year: int,
        month: int,
        cell_count: int,
        occurrence_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.calendar_built(
            year=year,
            month=month,
            cell_count=cell_count,
            occurrence_count=occurrence_count,
            correlation_id=correlation_id,
        ))

    async def log_schedule_built(
        self,
        start: date,
        horizon_days: int,
        occurrence_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.schedule_built(
            start=start,
            horizon_days=horizon_days,
            occurrence_count=occurrence_count,
            correlation_id=correlation_id,
        ))

    async def log_reminders_classified(
        self,
        reference_date: date,
        counts: dict[str, int],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.reminders_classified(
            reference_date=reference_date,
            counts=counts,
            correlation_id=correlation_id,
        ))

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., opening the dashboard).
    Pass it through all subsequent operations.
    """
    return uuid4()
