"""
Configuration Management for Cashflow Helper

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Game rules that a table might house-rule (auto loan size, whether a new
profession resets cash to savings) live next to storage and logging options
so they can be changed without touching the engine.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CASHFLOW_STORAGE_",
        extra="ignore"
    )

    directory: Path = Field(
        default=Path.home() / ".cashflow",
        description="Directory holding one JSON document per key"
    )

    # Keys of the three independent documents
    player_key: str = Field(
        default="cashflow_player_v1",
        description="Key of the saved player document"
    )
    profession_presets_key: str = Field(
        default="cashflow_presets_v1",
        description="Key of the profession presets document"
    )
    player_presets_key: str = Field(
        default="cashflow_player_presets_v1",
        description="Key of the player name presets document"
    )

    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed document write is attempted"
    )

    @field_validator("player_key", "profession_presets_key", "player_presets_key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys become file names, so keep them to a safe alphabet."""
        cleaned = v.strip()
        if not cleaned or not all(c.isalnum() or c in "_-." for c in cleaned):
            raise ValueError(f"Invalid storage key: {v!r}")
        return cleaned


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CASHFLOW_LOG_",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level for audit events"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class CashflowSettings(BaseSettings):
    """
    Game rule settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CASHFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Auto loan rules
    auto_loan_increment: int = Field(
        default=1000,
        ge=1,
        description="Auto loans are rounded up to a multiple of this amount"
    )
    auto_loan_name: str = Field(
        default="Auto Loan",
        min_length=1,
        description="Display name of system-generated overdraft loans"
    )

    # Profession rules
    apply_savings_to_cash: bool = Field(
        default=True,
        description="Reset cash to the profession's savings when it is set"
    )
    save_profession_as_preset: bool = Field(
        default=True,
        description="Store every profession set from the form as a preset"
    )

    # Presentation
    currency_suffix: str = Field(
        default="kr",
        description="Currency label appended to formatted amounts"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    game: CashflowSettings = Field(default_factory=CashflowSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for each section that failed to load.
    """
    results = {}

    sections = {
        "game": CashflowSettings,
        "storage": StorageSettings,
        "logging": LoggingSettings,
    }
    for name, section in sections.items():
        try:
            section()
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
