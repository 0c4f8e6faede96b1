"""
Main Orchestrator for the Reminder Engine

This module ties the pure engine functions to the storage collaborator and
defines the flows the presentation layer calls:
1. Month calendar (load → expand per active reminder → grid)
2. Dashboard feed (load → expand over the horizon → merged schedule)
3. Status lists (load → classify → overdue / due-soon filters)
4. Reminder creation (validate → save)

DESIGN DECISION: The orchestrator is the only async, I/O-touching layer.
Everything it calls into is synchronous and side-effect free, so the same
reminder list can be projected many ways without reloading.
"""

from collections import Counter
from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from reminder_engine.audit import AuditLogger, create_correlation_id
from reminder_engine.config import get_settings
from reminder_engine.models.reminder import (
    CalendarCell,
    DueClassification,
    Occurrence,
    Reminder,
    ReminderCreate,
)
from reminder_engine.recurrence.date_math import add_days
from reminder_engine.recurrence.expander import RecurrenceExpander
from reminder_engine.services.storage import (
    ConnectionError,
    NotFoundError,
    ReminderStorageInterface,
    StorageError,
)
from reminder_engine.validation import ReminderValidationError, ReminderValidator
from reminder_engine.views.calendar import build_month
from reminder_engine.views.classifier import DueClassifier
from reminder_engine.views.schedule import due_on as reminders_due_on
from reminder_engine.views.schedule import schedule as build_schedule


class ReminderViewService:
    """
    Serves reminder views for one storage backend.

    All `user_id` / `wallet_ids` arguments are passed straight to the
    storage collaborator, which decides what the user may see.
    """

    def __init__(
        self,
        storage: ReminderStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        expander: Optional[RecurrenceExpander] = None,
        classifier: Optional[DueClassifier] = None,
        validator: Optional[ReminderValidator] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._expander = expander or RecurrenceExpander()
        self._classifier = classifier or DueClassifier(expander=self._expander)
        self._validator = validator or ReminderValidator()
        self._settings = get_settings().engine

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @retry(
        retry=retry_if_exception_type(ConnectionError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _fetch(
        self,
        user_id: Optional[UUID],
        wallet_ids: Optional[Iterable[UUID]],
        active_only: bool,
    ) -> list[Reminder]:
        return await self._storage.list_reminders(
            user_id=user_id,
            wallet_ids=wallet_ids,
            active_only=active_only,
        )

    async def _load(
        self,
        user_id: Optional[UUID],
        wallet_ids: Optional[Iterable[UUID]],
        active_only: bool,
        correlation_id: UUID,
    ) -> list[Reminder]:
        if wallet_ids is not None:
            wallet_ids = list(wallet_ids)
        try:
            return await self._fetch(user_id, wallet_ids, active_only)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="list_reminders",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    async def calendar_month(
        self,
        year: int,
        month: int,
        today: Optional[date] = None,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> list[CalendarCell]:
        """Month grid with each visible active reminder's occurrences."""
        correlation_id = correlation_id or create_correlation_id()
        reminders = await self._load(user_id, wallet_ids, True, correlation_id)

        cells = build_month(
            year,
            month,
            reminders,
            today=today,
            first_weekday=self._settings.first_weekday,
            expander=self._expander,
        )

        if self._audit_logger:
            await self._audit_logger.log_calendar_built(
                year=year,
                month=month,
                cell_count=len(cells),
                occurrence_count=sum(len(c.occurrences) for c in cells),
                correlation_id=correlation_id,
            )
        return cells

    async def schedule(
        self,
        today: Optional[date] = None,
        horizon_days: Optional[int] = None,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> list[Occurrence]:
        """Merged, date-ordered occurrences for the next `horizon_days`."""
        correlation_id = correlation_id or create_correlation_id()
        today = today or date.today()
        if horizon_days is None:
            horizon_days = self._settings.default_horizon_days
        reminders = await self._load(user_id, wallet_ids, True, correlation_id)

        occurrences = build_schedule(reminders, today, horizon_days, expander=self._expander)

        if self._audit_logger:
            await self._audit_logger.log_schedule_built(
                start=today,
                horizon_days=horizon_days,
                occurrence_count=len(occurrences),
                correlation_id=correlation_id,
            )
        return occurrences

    async def classify_all(
        self,
        today: Optional[date] = None,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> list[tuple[Reminder, DueClassification]]:
        """Every visible reminder with its status badge, soonest first."""
        correlation_id = correlation_id or create_correlation_id()
        today = today or date.today()
        reminders = await self._load(user_id, wallet_ids, False, correlation_id)

        classified = self._classifier.classify_many(reminders, today)

        if self._audit_logger:
            counts = Counter(c.status.value for _, c in classified)
            await self._audit_logger.log_reminders_classified(
                reference_date=today,
                counts=dict(counts),
                correlation_id=correlation_id,
            )
        return classified

    async def overdue(
        self,
        today: Optional[date] = None,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
    ) -> list[tuple[Reminder, DueClassification]]:
        today = today or date.today()
        reminders = await self._load(user_id, wallet_ids, True, create_correlation_id())
        return self._classifier.overdue(reminders, today)

    async def due_within(
        self,
        today: Optional[date] = None,
        days: Optional[int] = None,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
    ) -> list[tuple[Reminder, DueClassification]]:
        """Active reminders whose next occurrence is within `days` (default: upcoming band)."""
        today = today or date.today()
        if days is None:
            days = self._settings.upcoming_days
        reminders = await self._load(user_id, wallet_ids, True, create_correlation_id())
        return self._classifier.due_within(reminders, today, days)

    async def due_on(
        self,
        day: date,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
    ) -> list[Reminder]:
        reminders = await self._load(user_id, wallet_ids, True, create_correlation_id())
        return reminders_due_on(reminders, day, expander=self._expander)

    async def upcoming_occurrences(
        self,
        today: Optional[date] = None,
        days: int = 30,
        per_reminder: Optional[int] = None,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
    ) -> list[tuple[Reminder, list[date]]]:
        """
        Active reminders paired with their next few dates inside `days`.

        Reminders with nothing due in that span are left out.
        """
        today = today or date.today()
        limit = per_reminder or self._settings.upcoming_occurrence_limit
        horizon_end = add_days(today, days)
        reminders = await self._load(user_id, wallet_ids, True, create_correlation_id())

        results = []
        for reminder in reminders:
            dates = [
                occ.date
                for occ in self._expander.upcoming_occurrences(reminder, today, limit)
                if occ.date <= horizon_end
            ]
            if dates:
                results.append((reminder, dates))
        return results

    async def next_occurrence(
        self,
        reminder_id: UUID,
        on_or_after: Optional[date] = None,
    ) -> Optional[date]:
        """
        Next date a stored reminder is due.

        Raises:
            NotFoundError: If no reminder has this ID
        """
        reminder = await self._storage.get_reminder(reminder_id)
        if reminder is None:
            raise NotFoundError(f"Reminder not found: {reminder_id}")
        return self._expander.next_occurrence(reminder, on_or_after or date.today())

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    async def create_reminder(
        self,
        request: ReminderCreate,
        user_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Reminder:
        """
        Validate and save a new reminder.

        Raises:
            ReminderValidationError: If the request has error-level issues
            StorageError: If the reminder could not be saved
        """
        correlation_id = correlation_id or create_correlation_id()
        result = self._validator.validate(request)

        if not result.is_valid:
            if self._audit_logger:
                await self._audit_logger.log_reminder_rejected(
                    request_id=result.request_id,
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise ReminderValidationError(result)

        if self._audit_logger:
            await self._audit_logger.log_reminder_validated(
                request_id=result.request_id,
                warning_count=len(result.warnings),
                correlation_id=correlation_id,
            )

        reminder = self._validator.build(request, user_id=user_id)
        try:
            await self._storage.save_reminder(reminder)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="save_reminder",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_reminder_created(
                reminder_id=reminder.id,
                title=reminder.title,
                recurrence=reminder.recurrence.value,
                correlation_id=correlation_id,
            )
        return reminder
