"""
Storage Services Package

Provides abstract interfaces for the reminder storage collaborator and an
in-memory implementation. Real backends live in the surrounding application.
"""

from reminder_engine.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    DuplicateError,
    NotFoundError,
    ReminderStorageInterface,
    StorageError,
)
from reminder_engine.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryReminderStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "ReminderStorageInterface",
    # Exceptions
    "ConnectionError",
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryReminderStorage",
]
