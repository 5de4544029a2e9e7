"""Tests for the expense statistics functions."""

from datetime import date
from decimal import Decimal

import pytest

from spend_tracker.analytics import (
    aggregate_by_category,
    average_per_day,
    filter_history,
    filter_month,
    recent_expenses,
    summarize_month,
    top_category,
    total_amount,
)
from spend_tracker.models.expense import ExpenseCategory

from conftest import TODAY, make_expense


FOOD = ExpenseCategory.FOOD_AND_DINING
SHOPPING = ExpenseCategory.SHOPPING
TRAVEL = ExpenseCategory.TRAVEL


@pytest.fixture
def october_expenses():
    """Three expenses in the reference month, newest first."""
    return [
        make_expense("10.00", FOOD, "2026-10-18", expense_id="c"),
        make_expense("123.45", SHOPPING, "2026-10-05", expense_id="b"),
        make_expense("45.67", FOOD, "2026-10-01", expense_id="a"),
    ]


class TestMonthlySummary:
    """Tests for summarize_month."""

    def test_reference_scenario(self, october_expenses):
        """Test totals for 45.67 + 123.45 + 10.00 in one month."""
        stats = summarize_month(october_expenses, TODAY)

        assert stats.total_spent == Decimal("179.12")
        assert stats.expense_count == 3
        assert stats.top_category == "Shopping"
        assert stats.average_per_day == Decimal("179.12") / 19

    def test_empty_month(self):
        stats = summarize_month([], TODAY)

        assert stats.total_spent == Decimal("0")
        assert stats.expense_count == 0
        assert stats.top_category == "None"
        assert stats.average_per_day == Decimal("0")

    def test_other_month_excluded(self, october_expenses):
        expenses = october_expenses + [make_expense("500", TRAVEL, "2026-09-30")]

        stats = summarize_month(expenses, TODAY)
        assert stats.total_spent == Decimal("179.12")
        assert stats.expense_count == 3

    def test_expense_dated_today_included(self):
        """Test that a record dated on the reference day always counts."""
        expenses = [make_expense("5", FOOD, TODAY.isoformat())]

        stats = summarize_month(expenses, TODAY)
        assert stats.expense_count == 1
        assert stats.total_spent == Decimal("5")

    def test_month_boundaries(self):
        expenses = [
            make_expense("1", FOOD, "2026-10-01", expense_id="first"),
            make_expense("2", FOOD, "2026-10-31", expense_id="last"),
            make_expense("4", FOOD, "2026-11-01", expense_id="next"),
        ]
        assert [e.id for e in filter_month(expenses, TODAY)] == ["first", "last"]

    def test_same_month_other_year_excluded(self):
        expenses = [make_expense("20", FOOD, "2025-10-19")]
        assert summarize_month(expenses, TODAY).expense_count == 0

    def test_malformed_date_excluded(self, october_expenses):
        expenses = october_expenses + [make_expense("99", TRAVEL, "sometime")]

        stats = summarize_month(expenses, TODAY)
        assert stats.expense_count == 3
        assert stats.top_category == "Shopping"

    def test_timestamp_dates_count(self):
        expenses = [make_expense("5", FOOD, "2026-10-03T09:15:00")]
        assert summarize_month(expenses, TODAY).total_spent == Decimal("5")


class TestCategoryAggregation:
    """Tests for aggregate_by_category and top_category."""

    def test_breakdown(self, october_expenses):
        breakdown = aggregate_by_category(october_expenses)

        assert breakdown.totals == {
            "Food & Dining": Decimal("55.67"),
            "Shopping": Decimal("123.45"),
        }
        assert [row.category for row in breakdown.ranked] == ["Shopping", "Food & Dining"]

    def test_totals_sum_to_month_total(self, october_expenses):
        breakdown = aggregate_by_category(october_expenses)
        assert sum(breakdown.totals.values()) == total_amount(october_expenses)
        assert breakdown.total == Decimal("179.12")

    def test_percentages(self):
        breakdown = aggregate_by_category([
            make_expense("75", FOOD),
            make_expense("25", SHOPPING),
        ])
        percentages = {row.category: row.percentage for row in breakdown.ranked}
        assert percentages == {"Food & Dining": Decimal("75"), "Shopping": Decimal("25")}

    def test_tie_first_category_wins(self):
        """Test that on a tie the category seen first is the top one."""
        totals = {"Shopping": Decimal("10"), "Food & Dining": Decimal("10")}
        assert top_category(totals) == "Shopping"

    def test_tie_in_ranked_keeps_first_occurrence(self):
        breakdown = aggregate_by_category([
            make_expense("10", TRAVEL, expense_id="t"),
            make_expense("10", FOOD, expense_id="f"),
        ])
        assert breakdown.top_category == "Travel"

    def test_top_category_empty(self):
        assert top_category({}) == "None"


class TestAveragePerDay:
    """Tests for average_per_day."""

    def test_divides_by_day_of_month(self):
        assert average_per_day(Decimal("30"), date(2026, 10, 3)) == Decimal("10")

    def test_first_of_month(self):
        assert average_per_day(Decimal("42.50"), date(2026, 10, 1)) == Decimal("42.50")

    def test_zero_total(self):
        assert average_per_day(Decimal("0"), TODAY) == Decimal("0")


class TestRecentAndHistory:
    """Tests for recent_expenses and filter_history."""

    def test_recent_limit_and_order(self):
        expenses = [make_expense(str(n), FOOD, "2026-10-10", expense_id=str(n)) for n in range(1, 8)]

        recent = recent_expenses(expenses, TODAY, limit=5)
        assert [e.id for e in recent] == ["1", "2", "3", "4", "5"]

    def test_recent_only_current_month(self, october_expenses):
        expenses = [make_expense("1", FOOD, "2026-09-01")] + october_expenses
        assert len(recent_expenses(expenses, TODAY)) == 3

    def test_history_filters_category(self, october_expenses):
        shopping = filter_history(october_expenses, "Shopping")
        assert [e.id for e in shopping] == ["b"]

    def test_history_all(self, october_expenses):
        assert len(filter_history(october_expenses, "All")) == 3

    def test_history_sort_by_date(self):
        expenses = [
            make_expense("1", FOOD, "2026-10-02", expense_id="old"),
            make_expense("1", FOOD, "garbage", expense_id="bad"),
            make_expense("1", FOOD, "2026-10-15", expense_id="new"),
        ]
        ordered = filter_history(expenses, sort_by="date")
        assert [e.id for e in ordered] == ["new", "old", "bad"]

    def test_history_sort_by_amount(self, october_expenses):
        ordered = filter_history(october_expenses, sort_by="amount")
        assert [e.id for e in ordered] == ["b", "a", "c"]

    def test_history_unknown_sort(self, october_expenses):
        with pytest.raises(ValueError):
            filter_history(october_expenses, sort_by="merchant")

    def test_filter_month_keeps_store_order(self, october_expenses):
        assert [e.id for e in filter_month(october_expenses, TODAY)] == ["c", "b", "a"]
