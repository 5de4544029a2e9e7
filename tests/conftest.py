"""
Shared fixtures for Spend Tracker tests.

Nothing here sleeps or touches the real data directory: mock services
run with zero delay and storage is in memory unless a test asks for
a temporary directory.
"""

import itertools
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

import pytest

from spend_tracker.audit import AuditLogger
from spend_tracker.models.expense import Expense, ExpenseCategory, ScanResult
from spend_tracker.services.scan import ReceiptScanner
from spend_tracker.services.storage import (
    InMemoryStorage,
    KeyValueStorageInterface,
    StorageError,
)
from spend_tracker.store import ExpenseStore


EXPENSES_KEY = "monthly_expenses"
AUTH_KEY = "auth_user"
TODAY = date(2026, 10, 19)
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FailingStorage(KeyValueStorageInterface):
    """Storage whose reads and/or writes always fail."""

    def __init__(self, fail_reads: bool = True, fail_writes: bool = True, initial=None):
        self._inner = InMemoryStorage(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.write_attempts = 0

    async def get_item(self, key: str) -> Optional[Any]:
        if self.fail_reads:
            raise StorageError("disk unavailable")
        return await self._inner.get_item(key)

    async def set_item(self, key: str, value: Any) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise StorageError("disk full")
        await self._inner.set_item(key, value)

    async def remove_item(self, key: str) -> bool:
        if self.fail_writes:
            raise StorageError("disk full")
        return await self._inner.remove_item(key)

    async def has_item(self, key: str) -> bool:
        return await self._inner.has_item(key)


class FixedResultScanner(ReceiptScanner):
    """Scanner that returns a preset result."""

    def __init__(self, result: ScanResult):
        self.result = result
        self.calls: list[str] = []

    async def scan(self, image_ref: str) -> ScanResult:
        self.calls.append(image_ref)
        return self.result


def make_expense(
    amount: str,
    category: ExpenseCategory = ExpenseCategory.FOOD_AND_DINING,
    expense_date: str = "2026-10-10",
    expense_id: Optional[str] = None,
    merchant: Optional[str] = None,
) -> Expense:
    """Build a stored expense directly, bypassing the store."""
    return Expense(
        id=expense_id or f"exp-{amount}-{expense_date}",
        amount=Decimal(amount),
        category=category,
        date=expense_date,
        merchant=merchant,
        created_at=FIXED_NOW,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store(storage, audit_logger, sequential_ids) -> ExpenseStore:
    return ExpenseStore(
        storage,
        expenses_key=EXPENSES_KEY,
        audit_logger=audit_logger,
        clock=lambda: FIXED_NOW,
        id_factory=sequential_ids,
    )
