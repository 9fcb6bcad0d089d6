"""Tests for configuration, audit logging and display helpers."""

import pytest

from cashflow.audit import AuditLogger
from cashflow.config import CashflowSettings, LoggingSettings, StorageSettings, validate_all_settings
from cashflow.models.audit import AuditEventBuilder, AuditEventType
from cashflow.models.player import (
    FixedDebtKey,
    LedgerEntryType,
    Liability,
    LiabilityOrigin,
    RealEstateAsset,
    StockAsset,
    new_player,
)
from cashflow.presentation import describe_asset, describe_liability, format_money, ledger_label


class TestSettings:
    """Environment-driven configuration."""

    def test_game_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("CASHFLOW_AUTO_LOAN_INCREMENT", "500")
        monkeypatch.setenv("CASHFLOW_APPLY_SAVINGS_TO_CASH", "false")
        settings = CashflowSettings(_env_file=None)
        assert settings.auto_loan_increment == 500
        assert settings.apply_savings_to_cash is False

    def test_storage_keys_are_checked(self):
        with pytest.raises(ValueError):
            StorageSettings(player_key="../player")

    def test_log_level_is_normalized(self):
        assert LoggingSettings(level="debug").level == "DEBUG"
        with pytest.raises(ValueError):
            LoggingSettings(level="chatty")

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("CASHFLOW_LOG_LEVEL", "chatty")
        status = validate_all_settings()
        assert status["storage"] is True
        assert status["logging"] is False
        assert "logging_error" in status


class TestAuditLogger:
    """In-memory history of audit events."""

    def test_recent_events_newest_first(self):
        audit_logger = AuditLogger()
        player_id = new_player().id
        audit_logger.log_action_applied(player_id, "receive_money", 10)
        audit_logger.log_action_rejected(player_id, "pay_money", "Pay money: amount must be greater than 0.")

        events = audit_logger.recent_events
        assert [e.event_type for e in events] == [
            AuditEventType.ACTION_REJECTED,
            AuditEventType.ACTION_APPLIED,
        ]

    def test_history_is_bounded(self):
        audit_logger = AuditLogger(history_size=3)
        for _ in range(5):
            audit_logger.log(AuditEventBuilder.state_loaded(new_player().id, fresh=True))
        assert len(audit_logger.recent_events) == 3


class TestPresentation:
    """Display strings."""

    @pytest.mark.parametrize("value,expected", [
        (0, "0 kr"),
        (1234567, "1 234 567 kr"),
        (-12345.4, "-12 345 kr"),
        (-0.4, "0 kr"),
        (float("nan"), "0 kr"),
    ])
    def test_format_money(self, value, expected):
        assert format_money(value) == expected

    def test_custom_suffix(self):
        assert format_money(10, "$") == "10 $"
        assert format_money(10, "") == "10"

    def test_every_ledger_type_has_a_label(self):
        assert all(ledger_label(t) for t in LedgerEntryType)

    def test_describe_asset(self):
        stock = StockAsset(name="OK4U", share_price=10, num_shares=200, dividend_per_share=0.5)
        assert describe_asset(stock) == "OK4U: 200 shares @ 10 kr, 100 kr/mo"
        house = RealEstateAsset(name="House", cost=65000, down_payment=5000, liability=60000, cash_flow_monthly=220)
        assert describe_asset(house) == "House: cost 65 000 kr, owes 60 000 kr, 220 kr/mo"

    def test_describe_liability(self):
        mirror = Liability(
            name="Home Mortgage",
            principal=50000,
            payment_monthly=500,
            origin=LiabilityOrigin.FIXED,
            fixed_key=FixedDebtKey.MORTGAGE,
        )
        assert describe_liability(mirror) == "Home Mortgage (profession): 50 000 kr, 500 kr/mo"
