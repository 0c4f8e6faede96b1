"""
Abstract Storage Interface

DESIGN DECISION: The engine never talks to a database directly. Reminder
records come from a storage collaborator behind this interface. This allows us to:
1. Plug in whatever backend the surrounding app uses
2. Use in-memory storage for testing
3. Keep the recurrence logic decoupled from persistence

The interface is intentionally read-mostly. Full reminder CRUD and
access control belong to the surrounding application.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from uuid import UUID

from reminder_engine.models.reminder import Reminder
from reminder_engine.models.audit import AuditEvent


class ReminderStorageInterface(ABC):
    """
    Abstract interface for reminder storage operations.

    Any storage implementation (SQL, document store, remote API, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def get_reminder(self, reminder_id: UUID) -> Optional[Reminder]:
        """
        Retrieve a reminder by its ID.

        Args:
            reminder_id: The reminder's unique identifier

        Returns:
            The reminder if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_reminders(
        self,
        user_id: Optional[UUID] = None,
        wallet_ids: Optional[Iterable[UUID]] = None,
        active_only: bool = False,
    ) -> list[Reminder]:
        """
        List reminders visible to a user.

        Args:
            user_id: Owner filter. None means no owner filter.
            wallet_ids: Shared wallets whose reminders are also visible
            active_only: Skip inactive reminders

        Returns:
            Matching reminders

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def save_reminder(self, reminder: Reminder) -> bool:
        """
        Persist a validated reminder.

        Returns:
            True if saved successfully

        Raises:
            DuplicateError: If a reminder with the same ID exists
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
