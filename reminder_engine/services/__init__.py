"""Services package."""

from reminder_engine.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryReminderStorage,
    NotFoundError,
    ReminderStorageInterface,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "ConnectionError",
    "DuplicateError",
    "InMemoryAuditStorage",
    "InMemoryReminderStorage",
    "NotFoundError",
    "ReminderStorageInterface",
    "StorageError",
]
