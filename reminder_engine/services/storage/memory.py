"""
In-Memory Storage

Dictionary-backed implementations of the storage interfaces.
Used by the test suite and for running the engine without a backend.
"""

from typing import Iterable, Optional
from uuid import UUID

from reminder_engine.models.audit import AuditEvent
from reminder_engine.models.reminder import Reminder
from reminder_engine.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    ReminderStorageInterface,
)


class InMemoryReminderStorage(ReminderStorageInterface):
    """Keeps reminders in a dict keyed by id, in insertion order."""

    def __init__(self, reminders: Optional[Iterable[Reminder]] = None):
        self._reminders: dict[UUID, Reminder] = {}
        for reminder in reminders or []:
            self.add(reminder)

    def add(self, reminder: Reminder) -> None:
        if reminder.id in self._reminders:
            raise DuplicateError(f"Reminder already exists: {reminder.id}")
        self._reminders[reminder.id] = reminder

    def remove(self, reminder_id: UUID) -> None:
        if self._reminders.pop(reminder_id, None) is None:
            raise NotFoundError(f"Reminder not found: {reminder_id}")

    async def get_reminder(self, reminder_id: UUID) -> Optional[Reminder]:
        return self._reminders.get(reminder_id)

    async def list_reminders(
        self,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
        active_only: bool = False,
    ) -> list[Reminder]:
        shared = set(wallet_ids or [])
        results = []
        for reminder in self._reminders.values():
            if active_only and not reminder.is_active:
                continue
            if user_id is not None:
                owned = reminder.user_id == user_id
                via_wallet = reminder.wallet_id is not None and reminder.wallet_id in shared
                if not (owned or via_wallet):
                    continue
            results.append(reminder)
        return results

    async def save_reminder(self, reminder: Reminder) -> bool:
        self.add(reminder)
        return True


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events[-limit:])) if limit > 0 else []
