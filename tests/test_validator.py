"""Tests for ExpenseFormValidator."""

from datetime import date
from decimal import Decimal

import pytest

from spend_tracker.models.expense import ExpenseFormInput, ExpenseSource
from spend_tracker.store import INVALID_AMOUNT_MESSAGE
from spend_tracker.validation import ExpenseFormValidator

from conftest import TODAY


@pytest.fixture
def validator():
    return ExpenseFormValidator()


def form(**kwargs) -> ExpenseFormInput:
    values = {"amount": "45.67", "date": "2026-10-19"}
    values.update(kwargs)
    return ExpenseFormInput(**values)


class TestExpenseFormValidator:
    """Tests for form validation."""

    def test_valid_form(self, validator):
        result = validator.validate(form(merchant="Starbucks Coffee"), today=TODAY)

        assert result.is_valid is True
        assert result.issues == []
        assert result.draft.amount == Decimal("45.67")
        assert result.draft.merchant == "Starbucks Coffee"
        assert result.draft.source == ExpenseSource.MANUAL

    def test_scan_form_is_tagged_ocr(self, validator):
        result = validator.validate(form(from_scan=True), today=TODAY)
        assert result.draft.source == ExpenseSource.OCR

    @pytest.mark.parametrize("amount", ["", "   ", "abc", "NaN", "Infinity"])
    def test_invalid_amount(self, validator, amount):
        result = validator.validate(form(amount=amount), today=TODAY)

        assert result.is_valid is False
        assert result.draft is None
        assert result.issues[0].message == INVALID_AMOUNT_MESSAGE

    @pytest.mark.parametrize("amount", ["0", "-3.50"])
    def test_non_positive_amount(self, validator, amount):
        result = validator.validate(form(amount=amount), today=TODAY)
        assert result.is_valid is False
        assert result.issues[0].issue_type == "invalid_value"

    @pytest.mark.parametrize("amount", [
        "1" + "0" * 27,
        "1000000000.00",
        "0.0000000000000001",
    ])
    def test_oversized_amount(self, validator, amount):
        result = validator.validate(form(amount=amount), today=TODAY)

        assert result.is_valid is False
        assert result.draft is None
        assert result.issues[0].issue_type == "out_of_range"

    def test_largest_amount(self, validator):
        result = validator.validate(form(amount="999999999.99"), today=TODAY)
        assert result.is_valid is True
        assert result.draft.amount == Decimal("999999999.99")

    def test_unknown_category(self, validator):
        result = validator.validate(form(category="Groceries"), today=TODAY)
        assert result.is_valid is False
        assert result.issues[0].field == "category"

    def test_unparseable_date_is_a_warning(self, validator):
        result = validator.validate(form(date="last tuesday"), today=TODAY)

        assert result.is_valid is True
        assert result.draft.date == "last tuesday"
        assert len(result.warnings) == 1

    def test_future_date_is_a_warning(self, validator):
        result = validator.validate(form(date="2026-12-25"), today=TODAY)
        assert result.is_valid is True
        assert result.issues[0].issue_type == "future_date"

    def test_tomorrow_is_tolerated(self, validator):
        result = validator.validate(form(date="2026-10-20"), today=TODAY)
        assert result.issues == []

    def test_defaults_to_today(self, validator):
        result = validator.validate(ExpenseFormInput(amount="5"))
        assert result.draft.date == date.today().isoformat()

    def test_summary_headline_is_first_error(self, validator):
        result = validator.validate(form(amount="abc", category="Nope"), today=TODAY)

        summary = validator.get_user_friendly_summary(result)
        assert summary.splitlines()[0] == INVALID_AMOUNT_MESSAGE
        assert "Unknown category: Nope" in summary

    def test_summary_for_clean_form(self, validator):
        result = validator.validate(form(), today=TODAY)
        assert validator.get_user_friendly_summary(result) == "All details look good."
