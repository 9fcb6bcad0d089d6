"""
Audit Logger

DESIGN DECISION: Every player action, accepted or rejected, is logged.
This provides:
1. Traceability of the saved game
2. Debugging capability when documents fail to load or save
3. A record of the Fast Track transition

The audit logger:
- Is synchronous, like the rest of the game core
- Keeps recent events in memory for the UI and tests
- Supports correlation IDs to tie together events from one action
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from cashflow.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog for JSON output."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level, logging.INFO))
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

    Routes events to the structured log at a level matching their
    severity. Keeps the last events in memory so the UI and tests can
    inspect them.
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("cashflow.audit")
        self._history_size = history_size
        self._recent: list[AuditEvent] = []

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(self._recent)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._recent.insert(0, event)
        del self._recent[self._history_size:]

        log_dict = event.to_log_dict()
        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_action_applied(
        self,
        player_id: UUID,
        action: str,
        cash: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.action_applied(
            player_id=player_id,
            action=action,
            cash=cash,
            correlation_id=correlation_id,
        ))

    def log_action_rejected(
        self,
        player_id: UUID,
        action: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.action_rejected(
            player_id=player_id,
            action=action,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_fast_track_entered(
        self,
        player_id: UUID,
        passive_income: float,
        total_expenses: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.fast_track_entered(
            player_id=player_id,
            passive_income=passive_income,
            total_expenses=total_expenses,
            correlation_id=correlation_id,
        ))

    def log_storage_failed(self, key: str, operation: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_failed(
            key=key,
            operation=operation,
            error_message=error_message,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action and pass it through.
    """
    return uuid4()
