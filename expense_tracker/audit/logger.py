"""
Audit Logger

DESIGN DECISION: Every state change is logged as a structured event.
This provides:
1. Traceability of what happened to the local store
2. Debugging capability for the remote assistant
3. A single place where logging is configured

The audit logger never raises: a logging problem must not break
adding or deleting an expense.
"""

import logging
from typing import Optional
from uuid import UUID

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(debug: bool = False) -> None:
    """Configure stdlib logging and structlog (idempotent)."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )
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


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Writes AuditEvents to the structured local log at their severity.
    """

    def __init__(self, name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(name)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()

        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            logging.getLogger(__name__).exception("failed to write audit event")

    def log_store_loaded(self, count: int, key: str) -> None:
        self.log(AuditEventBuilder.store_loaded(count=count, key=key))

    def log_store_load_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.store_load_failed(key=key, error_message=error_message))

    def log_store_save_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.store_save_failed(key=key, error_message=error_message))

    def log_expense_added(self, expense_id: UUID, amount: str, category: str) -> None:
        self.log(
            AuditEventBuilder.expense_added(
                expense_id=expense_id,
                amount=amount,
                category=category,
            )
        )

    def log_expense_deleted(self, expense_id: UUID) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id=expense_id))

    def log_base_currency_changed(self, old: str, new: str) -> None:
        self.log(AuditEventBuilder.base_currency_changed(old=old, new=new))

    def log_advice_requested(self, question_length: int, expense_count: int) -> None:
        self.log(
            AuditEventBuilder.advice_requested(
                question_length=question_length,
                expense_count=expense_count,
            )
        )

    def log_advice_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.advice_failed(error_message=error_message))


_default_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Shared audit logger for components created without one."""
    global _default_logger
    if _default_logger is None:
        _default_logger = AuditLogger()
    return _default_logger
