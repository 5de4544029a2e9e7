"""
Data Models Package

This package contains all Pydantic models used in Spend Tracker.
All data flowing through the system must conform to these schemas.
"""

from spend_tracker.models.expense import (
    DEFAULT_CATEGORY,
    MAX_AMOUNT,
    EXPENSE_CATEGORIES,
    NO_CATEGORY,
    CategoryBreakdown,
    CategoryTotal,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseFormInput,
    ExpenseSource,
    MonthlyStats,
    ScanResult,
    ValidationIssue,
    ValidationResult,
    parse_expense_date,
    today_iso,
)
from spend_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from spend_tracker.models.user import UserProfile

__all__ = [
    # Expense models
    "DEFAULT_CATEGORY",
    "MAX_AMOUNT",
    "EXPENSE_CATEGORIES",
    "NO_CATEGORY",
    "CategoryBreakdown",
    "CategoryTotal",
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "ExpenseFormInput",
    "ExpenseSource",
    "MonthlyStats",
    "ScanResult",
    "ValidationIssue",
    "ValidationResult",
    "parse_expense_date",
    "today_iso",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # User models
    "UserProfile",
]
