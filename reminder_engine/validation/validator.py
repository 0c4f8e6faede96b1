"""
Reminder Creation Validation

DESIGN DECISION: Invalid reminders are rejected when they are created,
not patched up later by the expander. Validation happens in two stages:

STAGE 1 - FIELD CHECKS:
- Title present
- Amount positive

STAGE 2 - RECURRENCE CHECKS:
- Custom recurrence has a usable interval (same rule the expander enforces)
- duration_end is not before due_date
- Parameters that the chosen rule ignores are flagged

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the calling layer can show them to the user.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from reminder_engine.models.reminder import RecurrenceKind, Reminder, ReminderCreate
from reminder_engine.models.validation import ValidationIssue, ValidationResult
from reminder_engine.recurrence.expander import InvalidRecurrenceError, check_interval


class ReminderValidationError(Exception):
    """A creation request failed validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Reminder request is invalid: {messages}")


class ReminderValidator:
    """Validates reminder creation requests."""

    def _validate_fields(self, request: ReminderCreate) -> list[ValidationIssue]:
        """Stage 1: per-field checks."""
        issues = []

        if not request.title:
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="Title is required",
                severity="error",
                suggested_fix="Give the reminder a short name",
            ))

        if request.amount <= Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            ))

        return issues

    def _validate_recurrence(self, request: ReminderCreate) -> list[ValidationIssue]:
        """Stage 2: recurrence rule consistency."""
        issues = []

        try:
            check_interval(request.recurrence, request.recurrence_interval)
        except InvalidRecurrenceError:
            issues.append(ValidationIssue(
                field="recurrence_interval",
                issue_type="invalid_value",
                message="Custom recurrence needs an interval of at least 1 day",
                severity="error",
                suggested_fix="Enter how many days apart the reminder repeats",
            ))

        if (
            request.recurrence_interval is not None
            and request.recurrence != RecurrenceKind.CUSTOM
        ):
            issues.append(ValidationIssue(
                field="recurrence_interval",
                issue_type="ignored",
                message=(
                    f"Interval is only used by custom recurrence and will be "
                    f"ignored for '{request.recurrence.value}'"
                ),
                severity="warning",
            ))

        if request.duration_end is not None:
            if request.duration_end < request.due_date:
                issues.append(ValidationIssue(
                    field="duration_end",
                    issue_type="out_of_order",
                    message=(
                        f"End date ({request.duration_end}) is before the "
                        f"due date ({request.due_date})"
                    ),
                    severity="error",
                    suggested_fix="Pick an end date on or after the due date",
                ))
            elif request.recurrence == RecurrenceKind.ONCE:
                issues.append(ValidationIssue(
                    field="duration_end",
                    issue_type="ignored",
                    message="End date has no effect on a one-time reminder",
                    severity="info",
                ))

        return issues

    def validate(self, request: ReminderCreate) -> ValidationResult:
        """Run both stages and collect every issue."""
        issues = self._validate_fields(request) + self._validate_recurrence(request)
        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def build(
        self,
        request: ReminderCreate,
        user_id: Optional[UUID] = None,
    ) -> Reminder:
        """
        Turn a request into a Reminder.

        Raises:
            ReminderValidationError: If any error-level issue was found
        """
        result = self.validate(request)
        if not result.is_valid:
            raise ReminderValidationError(result)
        return self._to_reminder(request, user_id)

    @staticmethod
    def _to_reminder(
        request: ReminderCreate,
        user_id: Optional[UUID] = None,
    ) -> Reminder:
        return Reminder(
            user_id=user_id,
            wallet_id=request.wallet_id,
            title=request.title,
            amount=request.amount,
            type=request.type,
            due_date=request.due_date,
            recurrence=request.recurrence,
            recurrence_interval=(
                request.recurrence_interval
                if request.recurrence == RecurrenceKind.CUSTOM
                else None
            ),
            duration_end=request.duration_end,
        )
