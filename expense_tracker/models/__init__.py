"""
Data Models Package

This package contains the currency model and all Pydantic models
used in the Expense Tracker.
"""

from expense_tracker.models.currency import (
    Currency,
    PIVOT_CURRENCY,
    RATES,
    convert,
    format_amount,
    symbol,
)
from expense_tracker.models.expense import (
    Expense,
    ExpenseCategory,
    ExpenseDraft,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Currency model
    "Currency",
    "PIVOT_CURRENCY",
    "RATES",
    "convert",
    "format_amount",
    "symbol",
    # Expense models
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
