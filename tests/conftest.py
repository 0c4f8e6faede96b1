"""Shared fixtures for the reminder engine tests."""

from datetime import date
from decimal import Decimal

import pytest

from reminder_engine.config import get_settings
from reminder_engine.models.reminder import RecurrenceKind, Reminder, ReminderType


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_reminder():
    """Factory for reminder records with sensible defaults."""

    def _make(
        due_date: date,
        recurrence: RecurrenceKind = RecurrenceKind.ONCE,
        **overrides,
    ) -> Reminder:
        fields = {
            "title": "Electricity",
            "amount": Decimal("1500.00"),
            "type": ReminderType.PAYMENT,
            "due_date": due_date,
            "recurrence": recurrence,
        }
        fields.update(overrides)
        return Reminder(**fields)

    return _make
