"""
Add-Expense Form Validation

The form hands over raw text. Validation turns it into an ExpenseDraft or
explains, field by field, why it can't.

Severity:
- error:   the expense cannot be saved (missing/invalid amount, unknown category)
- warning: the expense can be saved but the user should look again
           (a date that won't parse, a date in the future)

IMPORTANT: Validation NEVER silently fixes issues.
A bad amount is reported, not rounded or guessed.
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import ValidationError

from spend_tracker.models.expense import (
    EXPENSE_CATEGORIES,
    MAX_AMOUNT,
    MAX_AMOUNT_DIGITS,
    ExpenseDraft,
    ExpenseFormInput,
    ExpenseSource,
    ValidationIssue,
    ValidationResult,
    parse_expense_date,
)
from spend_tracker.store.expense_store import INVALID_AMOUNT_MESSAGE


def _digit_count(amount: Decimal) -> int:
    """Significant digits including leading fractional zeros (0.001 has 3)."""
    _, digits, exponent = amount.as_tuple()
    if exponent >= 0:
        return len(digits) + exponent
    return max(len(digits), -exponent)


class ExpenseFormValidator:
    """Validates add-expense form input."""

    def __init__(self, future_date_tolerance_days: int = 1):
        """
        Args:
            future_date_tolerance_days: How far past today a date may be
                                        before it gets a warning.
        """
        self._future_tolerance = timedelta(days=future_date_tolerance_days)

    def _validate_amount(self, raw: str) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        text = (raw or "").strip()
        if not text:
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message=INVALID_AMOUNT_MESSAGE,
                severity="error",
            )]

        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=INVALID_AMOUNT_MESSAGE,
                severity="error",
            )]

        if not amount.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=INVALID_AMOUNT_MESSAGE,
                severity="error",
            )]

        if amount <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            )]

        if amount > MAX_AMOUNT or _digit_count(amount) > MAX_AMOUNT_DIGITS:
            return None, [ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=f"Amount must be at most {MAX_AMOUNT} with no more than "
                        f"{MAX_AMOUNT_DIGITS} digits",
                severity="error",
            )]

        return amount, []

    def _validate_date(self, raw: str, today: date) -> list[ValidationIssue]:
        parsed = parse_expense_date((raw or "").strip())
        if parsed is None:
            return [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=(
                    f"'{raw}' is not a valid date (YYYY-MM-DD); "
                    "this expense won't count toward monthly totals"
                ),
                severity="warning",
            )]

        if parsed > today + self._future_tolerance:
            return [ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({parsed.isoformat()}) is in the future",
                severity="warning",
            )]

        return []

    def validate(
        self,
        form: ExpenseFormInput,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate the form and build the draft.

        Args:
            form: Raw form values
            today: Reference date for the future-date check

        Returns:
            ValidationResult; `draft` is set only when there are no errors
        """
        today = today or date.today()
        issues: list[ValidationIssue] = []

        amount, amount_issues = self._validate_amount(form.amount)
        issues.extend(amount_issues)

        if form.category not in EXPENSE_CATEGORIES:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Unknown category: {form.category}",
                severity="error",
            ))

        issues.extend(self._validate_date(form.date, today))

        if any(issue.severity == "error" for issue in issues):
            return ValidationResult(is_valid=False, issues=issues)

        try:
            draft = ExpenseDraft(
                amount=amount,
                date=form.date.strip(),
                category=form.category,
                merchant=form.merchant,
                notes=form.notes,
                source=ExpenseSource.OCR if form.from_scan else ExpenseSource.MANUAL,
            )
        except ValidationError as e:
            for error in e.errors():
                issues.append(ValidationIssue(
                    field=".".join(str(part) for part in error["loc"]),
                    issue_type="invalid_value",
                    message=error["msg"],
                    severity="error",
                ))
            return ValidationResult(is_valid=False, issues=issues)

        return ValidationResult(is_valid=True, draft=draft, issues=issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is the text shown in the alert.
        """
        if result.is_valid and not result.warnings:
            return "All details look good."

        lines = []

        errors = [issue for issue in result.issues if issue.severity == "error"]
        if errors:
            # The first error is the headline, the rest are listed below it
            lines.append(errors[0].message)
            for issue in errors[1:]:
                lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
