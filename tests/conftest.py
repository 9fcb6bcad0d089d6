"""Shared fixtures for the Cashflow Helper tests."""

import pytest

from cashflow.config import CashflowSettings, LoggingSettings, Settings, StorageSettings
from cashflow.engine.state import PlayerStateCore
from cashflow.models.player import Player, Profession, StockAsset
from cashflow.orchestrator import create_app_components
from cashflow.services.storage import InMemoryStore


@pytest.fixture
def game_settings() -> CashflowSettings:
    """Default game rules, independent of the environment."""
    return CashflowSettings(
        auto_loan_increment=1000,
        auto_loan_name="Auto Loan",
        apply_savings_to_cash=True,
        save_profession_as_preset=True,
        _env_file=None,
    )


@pytest.fixture
def settings(game_settings, tmp_path) -> Settings:
    """Settings whose sections point at a temporary directory."""
    return Settings(
        game=game_settings,
        storage=StorageSettings(directory=tmp_path),
        logging=LoggingSettings(level="WARNING"),
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def core(game_settings) -> PlayerStateCore:
    """A state core around a fresh player."""
    return PlayerStateCore(settings=game_settings)


@pytest.fixture
def salaried_profession() -> Profession:
    """A card whose base expenses alone exceed zero passive income."""
    return Profession(
        profession_name="Engineer",
        savings=3000,
        salary=5000,
        taxes=1500,
    )


@pytest.fixture
def salaried_core(game_settings, salaried_profession) -> PlayerStateCore:
    """A rat race player with cash 3000 and cash flow 3500."""
    player = Player(profession=salaried_profession, cash=3000)
    return PlayerStateCore(player, settings=game_settings)


@pytest.fixture
def dividend_player(salaried_profession) -> Player:
    """Salary 5000, taxes 1500 and 200 shares paying 0.5 each."""
    return Player(
        profession=salaried_profession,
        assets=[StockAsset(name="MYT4U", share_price=10, num_shares=200, dividend_per_share=0.5)],
    )


@pytest.fixture
def session(store, settings):
    return create_app_components(store=store, settings=settings)
