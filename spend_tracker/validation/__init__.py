"""Form validation package."""

from spend_tracker.validation.validator import ExpenseFormValidator

__all__ = ["ExpenseFormValidator"]
