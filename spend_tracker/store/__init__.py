"""Expense store package."""

from spend_tracker.store.expense_store import (
    INVALID_AMOUNT_MESSAGE,
    ExpenseError,
    ExpenseStore,
    ExpenseValidationError,
)

__all__ = [
    "INVALID_AMOUNT_MESSAGE",
    "ExpenseError",
    "ExpenseStore",
    "ExpenseValidationError",
]
