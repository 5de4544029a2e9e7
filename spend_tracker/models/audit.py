"""
Audit Models for Spend Tracker

Every significant action in the system is logged for audit purposes.
This provides:
1. Traceability of every change to the expense list
2. Debugging information when storage or a mock service misbehaves
3. A record of sign-in activity

DESIGN DECISION: Audit events are emitted to the structured log only.
Local storage holds exactly two keys (expenses and the signed-in user).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense store
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_LOADED = "expenses_loaded"
    DATA_CLEARED = "data_cleared"
    VALIDATION_FAILED = "validation_failed"
    SAVE_FAILED = "save_failed"
    LOAD_FAILED = "load_failed"

    # Receipt scan
    SCAN_COMPLETED = "scan_completed"
    SCAN_FAILED = "scan_failed"

    # Authentication
    USER_SIGNED_IN = "user_signed_in"
    USER_SIGNED_UP = "user_signed_up"
    USER_SIGNED_OUT = "user_signed_out"
    AUTH_FAILED = "auth_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'receipt', 'user')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one scan-and-submit)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, amount, category)
        event = AuditEventBuilder.scan_failed(image_ref, reason, correlation_id)
    """

    @staticmethod
    def expense_added(
        expense_id: str,
        amount: str,
        category: str,
        source: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense added: {category} - {amount}",
            details={
                "amount": amount,
                "category": category,
                "source": source,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(
        expense_id: str,
        found: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=(
                "Expense deleted" if found else "Delete requested for unknown expense"
            ),
            details={"found": found},
            is_user_action=True,
        )

    @staticmethod
    def expenses_loaded(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            entity_type="expense",
            description=f"Loaded {count} expenses from storage",
            details={"count": count},
        )

    @staticmethod
    def data_cleared(removed: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"All expense data cleared ({removed} expenses)",
            details={"removed": removed},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            correlation_id=correlation_id,
            description=f"Expense rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def storage_failed(
        operation: str,
        key: str,
        error_message: str,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.LOAD_FAILED
            if operation == "load"
            else AuditEventType.SAVE_FAILED
        )
        return AuditEvent(
            event_type=event_type,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Storage {operation} failed for key '{key}'",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def scan_completed(
        image_ref: str,
        merchant: Optional[str],
        amount: Optional[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCAN_COMPLETED,
            entity_type="receipt",
            entity_id=image_ref,
            correlation_id=correlation_id,
            description=f"Receipt scanned: {merchant or 'unknown merchant'}",
            details={
                "merchant": merchant,
                "amount": amount,
            },
        )

    @staticmethod
    def scan_failed(
        image_ref: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCAN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="receipt",
            entity_id=image_ref,
            correlation_id=correlation_id,
            description="Receipt scan failed",
            error_message=reason,
        )

    @staticmethod
    def user_signed_in(
        user_id: str,
        email: str,
        provider: str,
        is_new_user: bool = False
    ) -> AuditEvent:
        return AuditEvent(
            event_type=(
                AuditEventType.USER_SIGNED_UP
                if is_new_user
                else AuditEventType.USER_SIGNED_IN
            ),
            entity_type="user",
            entity_id=user_id,
            description=f"User {'signed up' if is_new_user else 'signed in'} via {provider}",
            details={
                "email": email,
                "provider": provider,
            },
            is_user_action=True,
        )

    @staticmethod
    def user_signed_out(user_id: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_OUT,
            entity_type="user",
            entity_id=user_id,
            description="User signed out",
            is_user_action=True,
        )

    @staticmethod
    def auth_failed(
        email: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AUTH_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            description="Authentication failed",
            error_message=error_message,
            details={"email": email},
            is_user_action=True,
        )
