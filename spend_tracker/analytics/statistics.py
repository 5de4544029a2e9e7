"""
Expense Statistics

DESIGN DECISION: Every function here is PURE.
The reference date is always a parameter, never read from the clock,
so the home page, the analytics page and the tests all get the same
answer for the same input.

Pipeline for the monthly report:
    filter_month -> aggregate_by_category -> summarize_month
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from spend_tracker.models.expense import (
    NO_CATEGORY,
    CategoryBreakdown,
    CategoryTotal,
    Expense,
    MonthlyStats,
)


ALL_CATEGORIES = "All"
SORT_BY_DATE = "date"
SORT_BY_AMOUNT = "amount"

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def is_in_month(expense: Expense, reference: date) -> bool:
    """True if the expense date is in the reference month and year."""
    expense_date = expense.parsed_date
    if expense_date is None:
        return False
    return expense_date.year == reference.year and expense_date.month == reference.month


def filter_month(expenses: Iterable[Expense], reference: date) -> list[Expense]:
    """
    Expenses dated in the same calendar month as the reference.

    Malformed dates never match. Store order is preserved.
    """
    return [expense for expense in expenses if is_in_month(expense, reference)]


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), _ZERO)


def top_category(totals: Mapping[str, Decimal]) -> str:
    """
    The category with the largest total.

    On a tie the category that appears first in the mapping wins;
    an empty mapping gives the literal "None".
    """
    best = NO_CATEGORY
    best_amount = None
    for category, amount in totals.items():
        if best_amount is None or amount > best_amount:
            best, best_amount = category, amount
    return best


def aggregate_by_category(expenses: Iterable[Expense]) -> CategoryBreakdown:
    """
    Sum amounts per category.

    `totals` keeps the order in which categories first appear.
    `ranked` is sorted largest first; the sort is stable, so tied
    categories keep that first-appearance order.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        category = expense.category.value
        totals[category] = totals.get(category, _ZERO) + expense.amount

    grand_total = sum(totals.values(), _ZERO)

    ranked = [
        CategoryTotal(
            category=category,
            amount=amount,
            percentage=(amount / grand_total * _HUNDRED) if grand_total > 0 else _ZERO,
        )
        for category, amount in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]

    return CategoryBreakdown(total=grand_total, totals=totals, ranked=ranked)


def average_per_day(total: Decimal, reference: date) -> Decimal:
    """
    Total divided by the days elapsed so far this month.

    NOTE: Divides by reference.day (days elapsed so far, including
    today), not by the number of days in the month.
    """
    if total == 0:
        return _ZERO
    return total / reference.day


def summarize_month(expenses: Iterable[Expense], reference: date) -> MonthlyStats:
    """Monthly statistics report for the reference month."""
    monthly = filter_month(expenses, reference)
    breakdown = aggregate_by_category(monthly)

    return MonthlyStats(
        total_spent=breakdown.total,
        expense_count=len(monthly),
        top_category=top_category(breakdown.totals),
        average_per_day=average_per_day(breakdown.total, reference),
    )


def recent_expenses(
    expenses: Sequence[Expense],
    reference: date,
    limit: int = 5,
) -> list[Expense]:
    """The first `limit` expenses of the reference month, in store order."""
    return filter_month(expenses, reference)[:limit]


def filter_history(
    expenses: Iterable[Expense],
    category: str = ALL_CATEGORIES,
    sort_by: str = SORT_BY_DATE,
) -> list[Expense]:
    """
    Expenses for the history page.

    Args:
        category: "All" or a category label
        sort_by: "date" (latest expense date first) or "amount" (largest first)

    Expenses with a malformed date sort last when sorting by date.
    """
    if sort_by not in (SORT_BY_DATE, SORT_BY_AMOUNT):
        raise ValueError(f"Unknown sort order: {sort_by}")

    selected = [
        expense for expense in expenses
        if category == ALL_CATEGORIES or expense.category.value == category
    ]

    if sort_by == SORT_BY_AMOUNT:
        return sorted(selected, key=lambda expense: expense.amount, reverse=True)
    return sorted(
        selected,
        key=lambda expense: expense.parsed_date or date.min,
        reverse=True,
    )
