"""
Core Data Models for the Reminder Engine

These models define the schemas for everything the engine reads and returns.
They are designed to:
1. Keep reminder records immutable once loaded (frozen models)
2. Provide clear validation error messages for creation requests
3. Be serializable for storage, logging and the presentation layer

DESIGN DECISION: The stored Reminder record is permissive about
recurrence_interval. Creation-time rules live in ReminderCreate and the
validator; the expander raises on bad stored records instead of guessing.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ReminderType(str, Enum):
    """Direction of money for a reminder. Display/aggregation only."""
    PAYMENT = "Payment"
    RECEIVABLE = "Receivable"


class RecurrenceKind(str, Enum):
    """
    Supported recurrence rules.

    CUSTOM repeats every `recurrence_interval` days.
    Anything richer (e.g. "every second Tuesday") is not supported.
    """
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class DueStatus(str, Enum):
    """
    Status badge of a reminder relative to a reference date.

    Bands are evaluated in declaration order; first match wins.
    """
    INACTIVE = "inactive"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"
    ACTIVE = "active"


# =============================================================================
# REMINDER RECORDS
# =============================================================================

class Reminder(BaseModel):
    """
    A reminder record as supplied by the storage collaborator.

    CRITICAL: The engine never mutates a Reminder. It only reads and projects.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Opaque reminder identifier"
    )
    user_id: Optional[UUID] = Field(
        default=None,
        description="Owner of the reminder"
    )
    wallet_id: Optional[UUID] = Field(
        default=None,
        description="Wallet the reminder belongs to, if any"
    )

    title: str = Field(
        ...,
        max_length=200,
        description="Short label shown on cards and calendar cells"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Amount due or expected"
    )
    type: ReminderType = Field(
        ...,
        description="Payment or Receivable"
    )

    # Recurrence
    due_date: date = Field(
        ...,
        description="Anchor date and first occurrence"
    )
    recurrence: RecurrenceKind = Field(
        default=RecurrenceKind.ONCE,
        description="Recurrence rule"
    )
    recurrence_interval: Optional[int] = Field(
        default=None,
        description="Step in days, meaningful only for custom recurrence"
    )
    duration_end: Optional[date] = Field(
        default=None,
        description="Inclusive last date an occurrence may fall on"
    )

    is_active: bool = Field(
        default=True,
        description="Inactive reminders are left out of calendar and feeds"
    )

    @property
    def is_recurring(self) -> bool:
        return self.recurrence != RecurrenceKind.ONCE


class ReminderCreate(BaseModel):
    """
    A request to create a reminder.

    This is PROPOSED data. It only becomes a Reminder after
    ReminderValidator has checked it.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        max_length=200,
        description="Reminder title"
    )
    amount: Decimal = Field(
        ...,
        decimal_places=2,
        description="Amount, must be positive"
    )
    type: ReminderType
    due_date: date
    recurrence: RecurrenceKind = RecurrenceKind.ONCE
    recurrence_interval: Optional[int] = Field(
        default=None,
        description="Days between occurrences for custom recurrence"
    )
    duration_end: Optional[date] = None
    wallet_id: Optional[UUID] = None


# =============================================================================
# DERIVED VALUES (never persisted)
# =============================================================================

class Occurrence(BaseModel):
    """One concrete date on which a reminder is due."""
    model_config = ConfigDict(frozen=True)

    reminder_id: UUID
    date: date
    is_anchor: bool = Field(
        default=False,
        description="True only for the reminder's literal due_date"
    )


class CalendarCell(BaseModel):
    """One day of a month grid, with the occurrences landing on it."""
    model_config = ConfigDict(frozen=True)

    date: date
    in_target_month: bool
    is_today: bool = False
    occurrences: list[Occurrence] = Field(default_factory=list)

    @property
    def has_occurrences(self) -> bool:
        return len(self.occurrences) > 0

    @property
    def has_recurring(self) -> bool:
        """True when any occurrence is a repeat rather than the anchor."""
        return any(not occ.is_anchor for occ in self.occurrences)


class DayTotals(BaseModel):
    """Sum of payments and receivables falling on one day."""

    date: date
    payments: Decimal = Decimal("0")
    receivables: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.receivables - self.payments


class DueClassification(BaseModel):
    """Result of classifying a reminder against a reference date."""
    model_config = ConfigDict(frozen=True)

    days_until_due: int = Field(
        ...,
        description="Signed whole days from the reference date to next_due"
    )
    status: DueStatus
    next_due: date = Field(
        ...,
        description="Occurrence the offset was measured to"
    )

    @property
    def is_overdue(self) -> bool:
        return self.status == DueStatus.OVERDUE
