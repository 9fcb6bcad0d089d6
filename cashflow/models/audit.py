"""
Audit Models for Cashflow Helper

Every user action, accepted or rejected, produces an audit event.
This provides:
1. Traceability of how the saved game got into its current state
2. Debugging information when a document fails to load or save
3. A record of the one-time Fast Track transition

DESIGN DECISION: Audit events go to the structured log only. The ledger
is the player-facing history; audit events are for operators.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from cashflow.models.player import utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Player actions
    ACTION_APPLIED = "action_applied"
    ACTION_REJECTED = "action_rejected"
    AUTO_LOAN_TAKEN = "auto_loan_taken"
    FAST_TRACK_ENTERED = "fast_track_entered"

    # Game lifecycle
    STATE_LOADED = "state_loaded"
    STATE_RESET = "state_reset"

    # Presets
    PRESET_SAVED = "preset_saved"
    PRESET_APPLIED = "preset_applied"
    PRESET_DELETED = "preset_deleted"

    # Storage
    STORAGE_READ_FAILED = "storage_read_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"


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

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
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
        description="Type of entity (e.g., 'player', 'asset', 'preset')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events raised by one user action"
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
            "entity_id": str(self.entity_id) if self.entity_id else None,
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
        event = AuditEventBuilder.action_applied(player_id, "buy_stock", correlation_id)
        event = AuditEventBuilder.action_rejected(player_id, "pay_off", message, correlation_id)
    """

    @staticmethod
    def action_applied(
        player_id: UUID,
        action: str,
        cash: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACTION_APPLIED,
            entity_type="player",
            entity_id=player_id,
            correlation_id=correlation_id,
            description=f"Action applied: {action}",
            details={
                "action": action,
                "cash": cash,
            },
            is_user_action=True,
        )

    @staticmethod
    def action_rejected(
        player_id: UUID,
        action: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="player",
            entity_id=player_id,
            correlation_id=correlation_id,
            description=f"Action rejected: {action}",
            details={
                "action": action,
                "reason": reason,
            },
            is_user_action=True,
        )

    @staticmethod
    def auto_loan_taken(
        liability_id: UUID,
        principal: float,
        shortfall: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AUTO_LOAN_TAKEN,
            entity_type="liability",
            entity_id=liability_id,
            correlation_id=correlation_id,
            description=f"Auto loan of {principal:,.0f} covered a shortfall of {shortfall:,.2f}",
            details={
                "principal": principal,
                "shortfall": shortfall,
            },
        )

    @staticmethod
    def fast_track_entered(
        player_id: UUID,
        passive_income: float,
        total_expenses: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FAST_TRACK_ENTERED,
            entity_type="player",
            entity_id=player_id,
            correlation_id=correlation_id,
            description="Passive income now covers expenses",
            details={
                "passive_income": passive_income,
                "total_expenses": total_expenses,
            },
        )

    @staticmethod
    def state_loaded(
        player_id: UUID,
        fresh: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            entity_type="player",
            entity_id=player_id,
            description="Started a new game" if fresh else "Loaded saved game",
            details={"fresh": fresh},
        )

    @staticmethod
    def state_reset(
        player_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_RESET,
            entity_type="player",
            entity_id=player_id,
            correlation_id=correlation_id,
            description="Game reset to a fresh player",
            is_user_action=True,
        )

    @staticmethod
    def preset_event(
        event_type: AuditEventType,
        preset_kind: str,
        preset_id: UUID,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        verb = event_type.value.replace("preset_", "")
        return AuditEvent(
            event_type=event_type,
            entity_type=f"{preset_kind}_preset",
            entity_id=preset_id,
            correlation_id=correlation_id,
            description=f"{preset_kind.capitalize()} preset {verb}: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def storage_failed(
        key: str,
        operation: str,
        error_message: str,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.STORAGE_READ_FAILED
            if operation == "read"
            else AuditEventType.STORAGE_WRITE_FAILED
        )
        severity = (
            AuditSeverity.WARNING
            if operation == "read"
            else AuditSeverity.ERROR
        )
        return AuditEvent(
            event_type=event_type,
            severity=severity,
            entity_type="document",
            description=f"Storage {operation} failed for {key}",
            error_message=error_message,
            details={
                "key": key,
                "operation": operation,
            },
        )
