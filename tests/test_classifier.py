"""Tests for due-date classification."""

from datetime import date
from uuid import UUID

import pytest

from reminder_engine.models.reminder import DueStatus, RecurrenceKind
from reminder_engine.views.classifier import DueClassifier, classify


TODAY = date(2024, 3, 15)


class TestOneTime:
    """Bands for one-time reminders."""

    def test_overdue(self, make_reminder):
        result = classify(make_reminder(date(2024, 3, 13)), TODAY)
        assert result.days_until_due == -2
        assert result.status == DueStatus.OVERDUE
        assert result.is_overdue

    @pytest.mark.parametrize(
        "due, days, status",
        [
            (date(2024, 3, 15), 0, DueStatus.DUE_TODAY),
            (date(2024, 3, 16), 1, DueStatus.DUE_SOON),
            (date(2024, 3, 18), 3, DueStatus.DUE_SOON),
            (date(2024, 3, 19), 4, DueStatus.UPCOMING),
            (date(2024, 3, 22), 7, DueStatus.UPCOMING),
            (date(2024, 3, 23), 8, DueStatus.ACTIVE),
        ],
    )
    def test_band_edges(self, make_reminder, due, days, status):
        result = classify(make_reminder(due), TODAY)
        assert result.days_until_due == days
        assert result.status == status
        assert result.next_due == due

    def test_inactive_wins_over_date(self, make_reminder):
        """An inactive reminder is Inactive even when its date has passed."""
        result = classify(make_reminder(date(2024, 3, 10), is_active=False), TODAY)
        assert result.status == DueStatus.INACTIVE
        assert result.days_until_due == -5


class TestRecurring:
    """Recurring reminders measure to their next occurrence."""

    def test_weekly_due_today(self, make_reminder):
        weekly = make_reminder(date(2024, 3, 1), RecurrenceKind.WEEKLY)
        result = classify(weekly, TODAY)
        assert result.next_due == TODAY
        assert result.status == DueStatus.DUE_TODAY

    def test_weekly_due_soon(self, make_reminder):
        weekly = make_reminder(date(2024, 3, 4), RecurrenceKind.WEEKLY)
        result = classify(weekly, TODAY)
        assert result.next_due == date(2024, 3, 18)
        assert result.status == DueStatus.DUE_SOON

    def test_custom_interval(self, make_reminder):
        custom = make_reminder(date(2024, 3, 1), RecurrenceKind.CUSTOM, recurrence_interval=10)
        result = classify(custom, TODAY)
        assert result.next_due == date(2024, 3, 21)
        assert result.days_until_due == 6
        assert result.status == DueStatus.UPCOMING

    def test_monthly_clamped_next_date(self, make_reminder):
        monthly = make_reminder(date(2024, 1, 31), RecurrenceKind.MONTHLY)
        result = classify(monthly, TODAY)
        assert result.next_due == date(2024, 3, 31)
        assert result.status == DueStatus.ACTIVE

    def test_series_starting_later(self, make_reminder):
        daily = make_reminder(date(2024, 3, 20), RecurrenceKind.DAILY)
        result = classify(daily, TODAY)
        assert result.days_until_due == 5
        assert result.status == DueStatus.UPCOMING

    def test_ended_series_is_overdue(self, make_reminder):
        """A finished series measures to its final occurrence."""
        daily = make_reminder(
            date(2024, 3, 1), RecurrenceKind.DAILY, duration_end=date(2024, 3, 10)
        )
        result = classify(daily, TODAY)
        assert result.next_due == date(2024, 3, 10)
        assert result.days_until_due == -5
        assert result.status == DueStatus.OVERDUE

    def test_ended_monthly_series(self, make_reminder):
        monthly = make_reminder(
            date(2024, 1, 31), RecurrenceKind.MONTHLY, duration_end=date(2024, 3, 30)
        )
        result = classify(monthly, TODAY)
        assert result.next_due == date(2024, 2, 29)
        assert result.status == DueStatus.OVERDUE


class TestClassifier:
    """Custom bands and list helpers."""

    def test_custom_bands(self, make_reminder):
        classifier = DueClassifier(due_soon_days=1, upcoming_days=2)
        assert classifier.classify(make_reminder(date(2024, 3, 16)), TODAY).status == DueStatus.DUE_SOON
        assert classifier.classify(make_reminder(date(2024, 3, 17)), TODAY).status == DueStatus.UPCOMING
        assert classifier.classify(make_reminder(date(2024, 3, 18)), TODAY).status == DueStatus.ACTIVE

    def test_bands_from_settings(self, make_reminder, monkeypatch):
        monkeypatch.setenv("REMINDER_DUE_SOON_DAYS", "5")
        monkeypatch.setenv("REMINDER_UPCOMING_DAYS", "10")
        classifier = DueClassifier()
        assert classifier.classify(make_reminder(date(2024, 3, 20)), TODAY).status == DueStatus.DUE_SOON
        assert classifier.classify(make_reminder(date(2024, 3, 25)), TODAY).status == DueStatus.UPCOMING

    def test_classify_many_sorted_soonest_first(self, make_reminder):
        later = make_reminder(date(2024, 3, 20), id=UUID(int=1))
        overdue = make_reminder(date(2024, 3, 1), id=UUID(int=2))
        today_b = make_reminder(TODAY, id=UUID(int=4))
        today_a = make_reminder(TODAY, id=UUID(int=3))

        results = DueClassifier().classify_many([later, overdue, today_b, today_a], TODAY)
        assert [r.id for r, _ in results] == [overdue.id, today_a.id, today_b.id, later.id]

    def test_overdue_filter(self, make_reminder):
        late = make_reminder(date(2024, 3, 1))
        late_inactive = make_reminder(date(2024, 3, 1), is_active=False)
        fine = make_reminder(date(2024, 3, 20))

        results = DueClassifier().overdue([late, late_inactive, fine], TODAY)
        assert [r.id for r, _ in results] == [late.id]

    def test_due_within(self, make_reminder):
        late = make_reminder(date(2024, 3, 1))
        today = make_reminder(TODAY)
        in_window = make_reminder(date(2024, 3, 22))
        beyond = make_reminder(date(2024, 3, 23))
        inactive = make_reminder(date(2024, 3, 16), is_active=False)

        results = DueClassifier().due_within([late, today, in_window, beyond, inactive], TODAY, 7)
        assert {r.id for r, _ in results} == {today.id, in_window.id}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
