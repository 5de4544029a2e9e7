"""Display helpers shared by the UI pages."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from spend_tracker.models.expense import ExpenseCategory, parse_expense_date


CATEGORY_ICONS: dict[str, str] = {
    ExpenseCategory.FOOD_AND_DINING.value: "🍽️",
    ExpenseCategory.TRANSPORTATION.value: "🚗",
    ExpenseCategory.SHOPPING.value: "🛍️",
    ExpenseCategory.ENTERTAINMENT.value: "🎮",
    ExpenseCategory.BILLS_AND_UTILITIES.value: "🧾",
    ExpenseCategory.HEALTHCARE.value: "⚕️",
    ExpenseCategory.TRAVEL.value: "✈️",
    ExpenseCategory.EDUCATION.value: "🎓",
    ExpenseCategory.OTHER.value: "•••",
}

_CENTS = Decimal("0.01")


def format_amount(amount: Decimal, currency_symbol: str = "$") -> str:
    """Two decimals with a currency prefix, e.g. $45.67."""
    return f"{currency_symbol}{amount.quantize(_CENTS, rounding=ROUND_HALF_UP):,.2f}"


def format_percentage(value: Decimal) -> str:
    return f"{value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"


def format_expense_date(value: Optional[str]) -> str:
    """Short month and day (e.g. 'Oct 19'), or the raw text if it won't parse."""
    parsed: Optional[date] = parse_expense_date(value)
    if parsed is None:
        return value or ""
    return f"{parsed.strftime('%b')} {parsed.day}"


def category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(category, CATEGORY_ICONS[ExpenseCategory.OTHER.value])
