"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Traceability of every change to the expense list
2. Debugging capability for storage and mock-service failures
3. A history of sign-in activity

The audit logger:
- Writes structured JSON lines through structlog
- Never raises: a logging failure must not break an expense save
- Supports correlation IDs to trace related events
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from spend_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Keeps the last events in memory as well, so the UI and the
    tests can look at what happened.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("spend_tracker.audit")
        self._history: list[AuditEvent] = []
        self._history_size = history_size

    @property
    def history(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._history)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the event could not be written.
        """
        self._history.append(event)
        if len(self._history) > self._history_size:
            del self._history[0]

        log_dict = event.to_log_dict()
        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False
        return True

    def log_expense_added(
        self,
        expense_id: str,
        amount: str,
        category: str,
        source: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            amount=amount,
            category=category,
            source=source,
            correlation_id=correlation_id,
        ))

    def log_expense_deleted(
        self,
        expense_id: str,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            found=found,
            correlation_id=correlation_id,
        ))

    def log_expenses_loaded(self, count: int) -> None:
        self.log(AuditEventBuilder.expenses_loaded(count))

    def log_data_cleared(self, removed: int) -> None:
        self.log(AuditEventBuilder.data_cleared(removed))

    def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_storage_failed(
        self,
        operation: str,
        key: str,
        error_message: str,
    ) -> None:
        """Log a failed storage read ('load') or write ('save')."""
        self.log(AuditEventBuilder.storage_failed(
            operation=operation,
            key=key,
            error_message=error_message,
        ))

    def log_scan_completed(
        self,
        image_ref: str,
        merchant: Optional[str],
        amount: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.scan_completed(
            image_ref=image_ref,
            merchant=merchant,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_scan_failed(
        self,
        image_ref: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.scan_failed(
            image_ref=image_ref,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_user_signed_in(
        self,
        user_id: str,
        email: str,
        provider: str,
        is_new_user: bool = False,
    ) -> None:
        self.log(AuditEventBuilder.user_signed_in(
            user_id=user_id,
            email=email,
            provider=provider,
            is_new_user=is_new_user,
        ))

    def log_user_signed_out(self, user_id: Optional[str]) -> None:
        self.log(AuditEventBuilder.user_signed_out(user_id))

    def log_auth_failed(self, email: str, error_message: str) -> None:
        self.log(AuditEventBuilder.auth_failed(
            email=email,
            error_message=error_message,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., scan then submit)
    and pass it through all subsequent operations.
    """
    return uuid4()
