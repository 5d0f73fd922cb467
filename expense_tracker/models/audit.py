"""
Audit Models for Expense Tracker

Every state change in the tracker (and every call to the remote
assistant) is described by an AuditEvent. Events go to the structured
log; they are not persisted alongside the expenses.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store lifecycle
    STORE_LOADED = "store_loaded"
    STORE_LOAD_FAILED = "store_load_failed"
    STORE_SAVE_FAILED = "store_save_failed"

    # Expense mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"

    # Preferences
    BASE_CURRENCY_CHANGED = "base_currency_changed"

    # Assistant
    ADVICE_REQUESTED = "advice_requested"
    ADVICE_FAILED = "advice_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO
    entity_id: Optional[UUID] = Field(
        default=None,
        description="Expense this event relates to, if any"
    )
    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "12.50 EUR")
        audit_logger.log(event)
    """

    @staticmethod
    def store_loaded(count: int, key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {count} expenses",
            details={"count": count, "key": key},
        )

    @staticmethod
    def store_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            description="Persisted expenses unreadable, starting empty",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def store_save_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Failed to persist expenses",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def expense_added(expense_id: UUID, amount: str, category: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_id=expense_id,
            description=f"Expense added: {amount}",
            details={"amount": amount, "category": category},
        )

    @staticmethod
    def expense_deleted(expense_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_id=expense_id,
            description="Expense deleted",
        )

    @staticmethod
    def base_currency_changed(old: str, new: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BASE_CURRENCY_CHANGED,
            description=f"Base currency changed from {old} to {new}",
            details={"old": old, "new": new},
        )

    @staticmethod
    def advice_requested(question_length: int, expense_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVICE_REQUESTED,
            description="Spending advice requested",
            details={
                "question_length": question_length,
                "expense_count": expense_count,
            },
        )

    @staticmethod
    def advice_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVICE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Advice service call failed",
            error_message=error_message,
        )
