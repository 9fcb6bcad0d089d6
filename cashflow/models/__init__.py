"""
Data Models Package

This package contains all Pydantic models used in Cashflow Helper.
All persisted documents must conform to these schemas.
"""

from cashflow.models.player import (
    Asset,
    AssetType,
    BusinessAsset,
    FixedDebtKey,
    LedgerEntry,
    LedgerEntryType,
    Liability,
    LiabilityOrigin,
    LiabilityType,
    PersonalPropertyAsset,
    Phase,
    Player,
    Profession,
    RealEstateAsset,
    StockAsset,
    new_player,
    utc_now,
)
from cashflow.models.presets import PlayerPreset, ProfessionPreset
from cashflow.models.summary import ActionOutcome, FinancialSummary
from cashflow.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Player models
    "Asset",
    "AssetType",
    "BusinessAsset",
    "FixedDebtKey",
    "LedgerEntry",
    "LedgerEntryType",
    "Liability",
    "LiabilityOrigin",
    "LiabilityType",
    "PersonalPropertyAsset",
    "Phase",
    "Player",
    "Profession",
    "RealEstateAsset",
    "StockAsset",
    "new_player",
    "utc_now",
    # Presets
    "PlayerPreset",
    "ProfessionPreset",
    # Derived / outcome models
    "ActionOutcome",
    "FinancialSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
