"""Tests for reminder creation validation."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from reminder_engine.models.reminder import RecurrenceKind, ReminderCreate, ReminderType
from reminder_engine.validation import ReminderValidationError, ReminderValidator


def _request(**overrides) -> ReminderCreate:
    fields = {
        "title": "Internet",
        "amount": Decimal("49.99"),
        "type": ReminderType.PAYMENT,
        "due_date": date(2024, 1, 10),
    }
    fields.update(overrides)
    return ReminderCreate(**fields)


def _issue_fields(result, severity):
    return [issue.field for issue in result.issues if issue.severity == severity]


class TestValidate:
    """Issue reporting."""

    def test_valid_one_time(self):
        result = ReminderValidator().validate(_request())
        assert result.is_valid
        assert result.issues == []

    def test_blank_title(self):
        result = ReminderValidator().validate(_request(title="   "))
        assert not result.is_valid
        assert _issue_fields(result, "error") == ["title"]

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5.00")])
    def test_non_positive_amount(self, amount):
        result = ReminderValidator().validate(_request(amount=amount))
        assert _issue_fields(result, "error") == ["amount"]

    @pytest.mark.parametrize("interval", [None, 0, -1])
    def test_custom_needs_interval(self, interval):
        result = ReminderValidator().validate(
            _request(recurrence=RecurrenceKind.CUSTOM, recurrence_interval=interval)
        )
        assert not result.is_valid
        assert _issue_fields(result, "error") == ["recurrence_interval"]

    def test_custom_with_interval(self):
        result = ReminderValidator().validate(
            _request(recurrence=RecurrenceKind.CUSTOM, recurrence_interval=14)
        )
        assert result.is_valid

    def test_end_before_due_date(self):
        result = ReminderValidator().validate(
            _request(recurrence=RecurrenceKind.DAILY, duration_end=date(2024, 1, 9))
        )
        assert not result.is_valid
        assert result.issues[0].issue_type == "out_of_order"

    def test_end_on_due_date_is_allowed(self):
        result = ReminderValidator().validate(
            _request(recurrence=RecurrenceKind.DAILY, duration_end=date(2024, 1, 10))
        )
        assert result.is_valid

    def test_interval_on_other_rule_is_a_warning(self):
        result = ReminderValidator().validate(
            _request(recurrence=RecurrenceKind.WEEKLY, recurrence_interval=3)
        )
        assert result.is_valid
        assert _issue_fields(result, "warning") == ["recurrence_interval"]

    def test_end_on_one_time_is_info(self):
        result = ReminderValidator().validate(_request(duration_end=date(2024, 2, 1)))
        assert result.is_valid
        assert _issue_fields(result, "info") == ["duration_end"]

    def test_collects_every_issue(self):
        result = ReminderValidator().validate(_request(
            title="",
            amount=Decimal("0"),
            recurrence=RecurrenceKind.CUSTOM,
            duration_end=date(2024, 1, 1),
        ))
        assert result.error_count == 4


class TestBuild:
    """Turning requests into reminders."""

    def test_builds_active_reminder(self):
        user_id = uuid4()
        wallet_id = uuid4()
        reminder = ReminderValidator().build(
            _request(recurrence=RecurrenceKind.MONTHLY, wallet_id=wallet_id),
            user_id=user_id,
        )
        assert reminder.is_active is True
        assert reminder.user_id == user_id
        assert reminder.wallet_id == wallet_id
        assert reminder.recurrence == RecurrenceKind.MONTHLY

    def test_drops_interval_for_non_custom_rule(self):
        reminder = ReminderValidator().build(
            _request(recurrence=RecurrenceKind.WEEKLY, recurrence_interval=3)
        )
        assert reminder.recurrence_interval is None

    def test_keeps_interval_for_custom_rule(self):
        reminder = ReminderValidator().build(
            _request(recurrence=RecurrenceKind.CUSTOM, recurrence_interval=3)
        )
        assert reminder.recurrence_interval == 3

    def test_invalid_request_raises(self):
        with pytest.raises(ReminderValidationError) as exc_info:
            ReminderValidator().build(_request(recurrence=RecurrenceKind.CUSTOM))
        assert exc_info.value.result.has_errors
        assert "interval" in str(exc_info.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
