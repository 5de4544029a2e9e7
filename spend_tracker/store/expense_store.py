"""
Expense Record Store

The store owns the canonical, newest-first list of expenses and mirrors it
to local storage under the expenses key.

CONTRACT:
- add() validates, assigns id and created_at, PREPENDS, then persists
- delete() removes by id; an unknown id is not an error
- Every mutation rewrites the whole snapshot (no append log)
- The in-memory list only changes after the write succeeded

Error handling:
- Reads are forgiving: a failed or corrupt read is logged and the store
  starts empty
- Writes propagate StorageError so the UI can alert the user
- Invalid drafts raise ExpenseValidationError before anything is stored
"""

from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union
from uuid import UUID, uuid4

import structlog
from pydantic import ValidationError

from spend_tracker.audit import AuditLogger
from spend_tracker.config import get_settings
from spend_tracker.models.expense import Expense, ExpenseDraft
from spend_tracker.services.storage import KeyValueStorageInterface, StorageError


logger = structlog.get_logger(__name__)

INVALID_AMOUNT_MESSAGE = "Please enter a valid amount"
INVALID_CATEGORY_MESSAGE = "Please choose one of the listed categories"


class ExpenseError(Exception):
    """Base exception for expense store errors."""
    pass


class ExpenseValidationError(ExpenseError):
    """A draft was rejected before it reached the store."""

    def __init__(self, message: str, issues: Optional[list[dict]] = None):
        self.issues = issues or []
        super().__init__(message)


def _user_message(errors: list[dict]) -> str:
    fields = {str(error["loc"][0]) for error in errors if error.get("loc")}
    if "amount" in fields:
        return INVALID_AMOUNT_MESSAGE
    if "category" in fields:
        return INVALID_CATEGORY_MESSAGE
    return "Please check the expense details and try again"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_expense_id() -> str:
    return uuid4().hex


class ExpenseStore:
    """
    In-memory expense list with a persisted snapshot.

    The storage backend, clock and id factory are injected so tests can
    run against InMemoryStorage with fixed values.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        expenses_key: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_expense_id,
    ):
        self._storage = storage
        self._key = expenses_key or get_settings().storage.expenses_key
        self._audit_logger = audit_logger
        self._clock = clock
        self._id_factory = id_factory
        self._expenses: list[Expense] = []
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._expenses)

    async def load(self) -> list[Expense]:
        """
        (Re)load the list from storage.

        Never raises: on any read problem the store is empty.
        Records that fail validation are skipped one by one.
        """
        try:
            stored = await self._storage.get_item(self._key)
        except StorageError as e:
            logger.warning("error_loading_expenses", key=self._key, error=str(e))
            if self._audit_logger:
                self._audit_logger.log_storage_failed("load", self._key, str(e))
            stored = None

        expenses: list[Expense] = []
        if stored is not None and not isinstance(stored, list):
            logger.warning("expenses_not_a_list", key=self._key, type=type(stored).__name__)
            stored = None

        for item in stored or []:
            try:
                expenses.append(Expense.model_validate(item))
            except ValidationError as e:
                logger.warning("skipping_invalid_expense", error=str(e))

        self._expenses = expenses
        self._loaded = True
        if self._audit_logger:
            self._audit_logger.log_expenses_loaded(len(expenses))
        return self.list_expenses()

    async def _ensure_loaded(self) -> None:
        # Writing before the first load would overwrite the stored snapshot
        if not self._loaded:
            await self.load()

    async def _save(self, expenses: list[Expense]) -> None:
        snapshot = [expense.model_dump(mode="json") for expense in expenses]
        try:
            await self._storage.set_item(self._key, snapshot)
        except StorageError as e:
            logger.error("error_saving_expenses", key=self._key, error=str(e))
            if self._audit_logger:
                self._audit_logger.log_storage_failed("save", self._key, str(e))
            raise
        self._expenses = expenses

    def _next_id(self) -> str:
        existing = {expense.id for expense in self._expenses}
        expense_id = self._id_factory()
        while expense_id in existing:
            expense_id = self._id_factory()
        return expense_id

    async def add(
        self,
        draft: Union[ExpenseDraft, Mapping[str, Any]],
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Validate a draft and store it as the newest expense.

        Args:
            draft: An ExpenseDraft, or a mapping of its fields
            correlation_id: Ties the audit event to a user action

        Returns:
            The stored Expense

        Raises:
            ExpenseValidationError: If the amount (or any other field) is invalid
            StorageError: If the snapshot could not be written
        """
        if not isinstance(draft, ExpenseDraft):
            try:
                draft = ExpenseDraft.model_validate(dict(draft))
            except ValidationError as e:
                issues = [
                    {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in e.errors()
                ]
                if self._audit_logger:
                    self._audit_logger.log_validation_failed(issues, correlation_id)
                raise ExpenseValidationError(_user_message(e.errors()), issues) from e

        await self._ensure_loaded()

        expense = Expense.from_draft(draft, self._next_id(), self._clock())
        await self._save([expense, *self._expenses])

        if self._audit_logger:
            self._audit_logger.log_expense_added(
                expense_id=expense.id,
                amount=str(expense.amount),
                category=expense.category.value,
                source=expense.source.value,
                correlation_id=correlation_id,
            )
        return expense

    async def delete(
        self,
        expense_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete an expense by id.

        Returns True if it existed. The snapshot is rewritten either way.
        """
        await self._ensure_loaded()

        remaining = [expense for expense in self._expenses if expense.id != expense_id]
        found = len(remaining) != len(self._expenses)
        await self._save(remaining)

        if self._audit_logger:
            self._audit_logger.log_expense_deleted(expense_id, found, correlation_id)
        return found

    async def clear(self) -> int:
        """
        Remove every expense and the stored key itself.

        Returns the number of expenses removed.
        """
        await self._ensure_loaded()

        try:
            await self._storage.remove_item(self._key)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_failed("save", self._key, str(e))
            raise

        removed = len(self._expenses)
        self._expenses = []
        if self._audit_logger:
            self._audit_logger.log_data_cleared(removed)
        return removed

    def list_expenses(self) -> list[Expense]:
        """All expenses, newest first by insertion."""
        return list(self._expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None
