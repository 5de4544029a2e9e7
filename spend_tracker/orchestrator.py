"""
Main Orchestrator for Spend Tracker

This module ties together all the components and defines the
end-to-end flows for:
1. Add Expense (manual form, or scan -> pre-filled form -> submit)
2. Insights (home, history and analytics reads, deletion, clearing data)

DESIGN DECISION: Flows return (result, message) pairs instead of raising
for anything the user can fix. The UI shows the message and hands control
back to the user; no failure here is fatal.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional
from uuid import UUID

import structlog

from spend_tracker.analytics import (
    ALL_CATEGORIES,
    SORT_BY_DATE,
    aggregate_by_category,
    filter_history,
    filter_month,
    recent_expenses,
    summarize_month,
    total_amount,
)
from spend_tracker.audit import AuditLogger, create_correlation_id
from spend_tracker.config import get_settings
from spend_tracker.models.expense import (
    CategoryBreakdown,
    Expense,
    ExpenseFormInput,
    MonthlyStats,
    ScanResult,
)
from spend_tracker.services.auth import AuthSession, MockCredentialService
from spend_tracker.services.scan import (
    MockReceiptScanner,
    ReceiptScanner,
    ScanError,
    extract_amount_from_text,
    extract_merchant_from_text,
)
from spend_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    StorageError,
)
from spend_tracker.store import ExpenseStore, ExpenseValidationError
from spend_tracker.validation import ExpenseFormValidator


logger = structlog.get_logger(__name__)

SAVE_FAILED_MESSAGE = "Failed to add expense. Please try again."
SAVE_SUCCEEDED_MESSAGE = "Expense added successfully!"

PLACEHOLDER_MESSAGES: dict[str, str] = {
    "export": (
        "Data export feature will be available in a future update. "
        "For now, your data is safely stored on your device."
    ),
    "backup": (
        "Cloud backup feature will be available in a future update. "
        "Currently, data is stored locally on your device."
    ),
    "notifications": "Notification settings will be available soon",
    "privacy": "Privacy settings will be available soon",
    "help": "Help center will be available soon",
}


def placeholder_message(feature: str) -> str:
    """Text for menu items that are not built yet. Performs no I/O."""
    return PLACEHOLDER_MESSAGES.get(feature, "This feature will be available soon")


class AddExpenseFlow:
    """
    Orchestrates adding an expense.

    Flow:
    1. Manual: blank form -> submit
    2. Scan:   image -> scanner -> pre-filled form -> submit

    Nothing is stored until submit() is called with a valid form.
    """

    def __init__(
        self,
        store: ExpenseStore,
        scanner: Optional[ReceiptScanner] = None,
        validator: Optional[ExpenseFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._scanner = scanner or MockReceiptScanner()
        self._validator = validator or ExpenseFormValidator()
        self._audit_logger = audit_logger

    def new_manual_form(self) -> ExpenseFormInput:
        """Blank form: today's date, default category."""
        return ExpenseFormInput()

    async def scan_receipt(
        self,
        image_ref: str,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[ExpenseFormInput], bool, str]:
        """
        Scan a receipt and build the pre-filled form.

        Returns:
            (form, can_proceed, message)

        If can_proceed is False the user should retry or add manually.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            result = await self._scanner.scan(image_ref)
        except ScanError as e:
            logger.warning("scan_error", error=str(e))
            result = ScanResult(success=False, raw_text=f"Failed to process image: {e}")

        # Fill gaps from the raw text when the scanner left fields empty
        if result.success:
            updates = {}
            if result.amount is None:
                updates["amount"] = extract_amount_from_text(result.raw_text)
            if not result.merchant:
                updates["merchant"] = extract_merchant_from_text(result.raw_text)
            if updates:
                result = result.model_copy(update=updates)

        can_proceed, message = self._scanner.should_proceed_with_scan(result)

        if not can_proceed:
            if self._audit_logger:
                self._audit_logger.log_scan_failed(image_ref, result.raw_text, correlation_id)
            return None, False, message

        if self._audit_logger:
            self._audit_logger.log_scan_completed(
                image_ref=image_ref,
                merchant=result.merchant,
                amount=str(result.amount) if result.amount is not None else None,
                correlation_id=correlation_id,
            )

        return result.to_form_input(), True, message

    async def submit(
        self,
        form: ExpenseFormInput,
        correlation_id: Optional[UUID] = None,
        today: Optional[date] = None,
    ) -> tuple[Optional[Expense], str]:
        """
        Validate the form and store the expense.

        Returns:
            (expense, message); expense is None when nothing was stored
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(form, today=today)
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    [
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in result.issues
                    ],
                    correlation_id,
                )
            return None, self._validator.get_user_friendly_summary(result)

        try:
            expense = await self._store.add(result.draft, correlation_id=correlation_id)
        except ExpenseValidationError as e:
            return None, str(e)
        except StorageError:
            return None, SAVE_FAILED_MESSAGE

        return expense, SAVE_SUCCEEDED_MESSAGE


class ExpenseInsights:
    """
    Read side for the home, history and analytics pages.

    Statistics are recomputed on every call; the reference date comes
    from the injected `today` callable.
    """

    def __init__(
        self,
        store: ExpenseStore,
        today: Callable[[], date] = date.today,
        recent_limit: Optional[int] = None,
    ):
        self._store = store
        self._today = today
        if recent_limit is None:
            recent_limit = get_settings().app.recent_expenses_limit
        self._recent_limit = recent_limit

    async def refresh(self) -> list[Expense]:
        """Reload the expense list from storage."""
        return await self._store.load()

    @property
    def has_expenses(self) -> bool:
        return len(self._store) > 0

    def current_month_expenses(self) -> list[Expense]:
        return filter_month(self._store.list_expenses(), self._today())

    def monthly_stats(self) -> MonthlyStats:
        return summarize_month(self._store.list_expenses(), self._today())

    def category_breakdown(self) -> CategoryBreakdown:
        return aggregate_by_category(self.current_month_expenses())

    def recent_expenses(self) -> list[Expense]:
        return recent_expenses(
            self._store.list_expenses(),
            self._today(),
            limit=self._recent_limit,
        )

    def history(
        self,
        category: str = ALL_CATEGORIES,
        sort_by: str = SORT_BY_DATE,
    ) -> tuple[list[Expense], Decimal]:
        """
        Returns:
            (expenses, total) for the selected category and order
        """
        expenses = filter_history(self._store.list_expenses(), category, sort_by)
        return expenses, total_amount(expenses)

    async def delete_expense(self, expense_id: str) -> tuple[bool, str]:
        try:
            await self._store.delete(expense_id)
        except StorageError:
            return False, "Failed to delete expense. Please try again."
        return True, "Expense deleted."

    async def clear_all_data(self) -> tuple[bool, str]:
        try:
            await self._store.clear()
        except StorageError:
            return False, "Failed to clear data."
        return True, "All data has been cleared."


@dataclass
class AppComponents:
    """Everything the UI needs, wired together."""

    store: ExpenseStore
    add_flow: AddExpenseFlow
    insights: ExpenseInsights
    auth: AuthSession
    audit_logger: AuditLogger
    storage: KeyValueStorageInterface


def create_app_components(
    data_dir: Optional[Path] = None,
    use_file_storage: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        data_dir: Directory for the JSON files (defaults to settings)
        use_file_storage: Set to False to keep everything in memory

    Returns:
        AppComponents; call `await components.insights.refresh()` and
        `await components.auth.load_user()` before the first render.
    """
    settings = get_settings()
    audit_logger = AuditLogger()

    storage: KeyValueStorageInterface
    if use_file_storage:
        storage = JsonFileStorage(data_dir)
    else:
        storage = InMemoryStorage()

    store = ExpenseStore(
        storage,
        expenses_key=settings.storage.expenses_key,
        audit_logger=audit_logger,
    )
    auth = AuthSession(
        MockCredentialService(),
        storage,
        auth_key=settings.storage.auth_key,
        audit_logger=audit_logger,
    )

    return AppComponents(
        store=store,
        add_flow=AddExpenseFlow(store, audit_logger=audit_logger),
        insights=ExpenseInsights(store),
        auth=auth,
        audit_logger=audit_logger,
        storage=storage,
    )
