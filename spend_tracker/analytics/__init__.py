"""Expense statistics package."""

from spend_tracker.analytics.statistics import (
    ALL_CATEGORIES,
    SORT_BY_AMOUNT,
    SORT_BY_DATE,
    aggregate_by_category,
    average_per_day,
    filter_history,
    filter_month,
    is_in_month,
    recent_expenses,
    summarize_month,
    top_category,
    total_amount,
)

__all__ = [
    "ALL_CATEGORIES",
    "SORT_BY_AMOUNT",
    "SORT_BY_DATE",
    "aggregate_by_category",
    "average_per_day",
    "filter_history",
    "filter_month",
    "is_in_month",
    "recent_expenses",
    "summarize_month",
    "top_category",
    "total_amount",
]
