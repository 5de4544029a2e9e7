"""
Core Data Models for Spend Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for the local JSON snapshot
4. Keep derived statistics separate from stored records

DESIGN DECISION: Amounts are Decimal, never float.
Summing 45.67 + 123.45 + 10.00 must give exactly 179.12.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    The declaration order is the display order. The first member is the
    default for a new expense.
    """
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    TRAVEL = "Travel"
    EDUCATION = "Education"
    OTHER = "Other"


EXPENSE_CATEGORIES: list[str] = [category.value for category in ExpenseCategory]
DEFAULT_CATEGORY = ExpenseCategory.FOOD_AND_DINING

# Literal shown when there is nothing to rank
NO_CATEGORY = "None"

# Largest single amount accepted; keeps sums well inside the decimal context
MAX_AMOUNT = Decimal("999999999.99")
MAX_AMOUNT_DIGITS = 15


class ExpenseSource(str, Enum):
    """How an expense entered the system."""
    MANUAL = "manual"  # Typed in by the user
    OCR = "ocr"        # Pre-filled by the receipt scan flow


# =============================================================================
# DATE HELPERS
# =============================================================================

def today_iso() -> str:
    """Today's date as YYYY-MM-DD."""
    return date.today().isoformat()


def parse_expense_date(value: Optional[str]) -> Optional[date]:
    """
    Parse the stored date string of an expense.

    Accepts a plain ISO date or a full ISO timestamp.
    Returns None for anything else instead of raising.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value).date()
    except (TypeError, ValueError):
        return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# CORE EXPENSE MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    An expense as submitted, before the store accepts it.

    The store assigns id and created_at. Everything else is
    decided here, including the positive-amount rule.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        max_digits=MAX_AMOUNT_DIGITS,
        allow_inf_nan=False,
        description="Amount spent, currency-agnostic"
    )
    date: str = Field(
        default_factory=today_iso,
        description="Calendar date of the expense (YYYY-MM-DD)"
    )
    category: ExpenseCategory = Field(
        default=DEFAULT_CATEGORY,
        description="Expense category"
    )
    merchant: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Where the money was spent"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Free-text annotation"
    )
    source: ExpenseSource = Field(
        default=ExpenseSource.MANUAL,
        description="Manual entry or scan pre-fill"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def float_amount_as_text(cls, v: Any) -> Any:
        """Route floats through str so 45.67 stays 45.67."""
        if isinstance(v, bool):
            raise ValueError("Amount must be a number")
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator('merchant', 'notes', mode='before')
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Expense(ExpenseDraft):
    """
    A stored expense.

    CRITICAL: Expenses are immutable once created.
    The only way to change one is to delete it.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Unique expense ID"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the expense was recorded"
    )

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, expense_id: str, created_at: datetime) -> "Expense":
        return cls(
            **draft.model_dump(),
            id=expense_id,
            created_at=created_at,
        )

    @property
    def parsed_date(self) -> Optional[date]:
        """The expense date, or None when the stored string is malformed."""
        return parse_expense_date(self.date)

    @property
    def display_merchant(self) -> str:
        return self.merchant or "Manual Entry"


# =============================================================================
# FORM AND SCAN MODELS
# =============================================================================

class ExpenseFormInput(BaseModel):
    """
    Raw values of the add-expense form.

    Everything is text, exactly as typed. ExpenseFormValidator turns
    this into an ExpenseDraft.
    """

    amount: str = ""
    date: str = Field(default_factory=today_iso)
    category: str = DEFAULT_CATEGORY.value
    merchant: str = ""
    notes: str = ""
    from_scan: bool = Field(
        default=False,
        description="True when the form was pre-filled by a receipt scan"
    )


class ScanResult(BaseModel):
    """
    What the receipt scanner returned.

    This is PROPOSED data: it only pre-fills the form,
    the user still submits it.
    """

    success: bool
    amount: Optional[Decimal] = None
    merchant: Optional[str] = None
    date: Optional[str] = None
    raw_text: str = ""

    def to_form_input(self) -> ExpenseFormInput:
        """Form defaults for a successful scan."""
        return ExpenseFormInput(
            amount=str(self.amount) if self.amount is not None else "",
            merchant=self.merchant or "",
            date=self.date or today_iso(),
            from_scan=True,
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating the add-expense form."""

    is_valid: bool
    draft: Optional[ExpenseDraft] = Field(
        default=None,
        description="The accepted draft, present only when is_valid"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]


# =============================================================================
# DERIVED STATISTICS (never stored)
# =============================================================================

class CategoryTotal(BaseModel):
    """One row of the category breakdown."""

    category: str
    amount: Decimal
    percentage: Decimal = Field(
        ...,
        description="Share of the total, 0-100"
    )


class CategoryBreakdown(BaseModel):
    """Spending grouped by category."""

    total: Decimal = Decimal("0")
    # Insertion order is order of first occurrence
    totals: dict[str, Decimal] = Field(default_factory=dict)
    # Same data, largest first
    ranked: list[CategoryTotal] = Field(default_factory=list)

    @property
    def top_category(self) -> str:
        if not self.ranked:
            return NO_CATEGORY
        return self.ranked[0].category


class MonthlyStats(BaseModel):
    """
    Summary of one calendar month.

    Recomputed from the expense list on every read.
    """

    total_spent: Decimal
    expense_count: int = Field(ge=0)
    top_category: str
    average_per_day: Decimal
