"""
Preset Models

Two independent lists live next to the saved player:
- profession presets: reusable profession cards, keyed by name
- player presets: saved display names

Names are compared case-insensitively everywhere.
"""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from cashflow.models.player import PLAYER_NAME_MAX_LENGTH, Profession, utc_now


class ProfessionPreset(BaseModel):
    """A named, reusable profession record."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=PLAYER_NAME_MAX_LENGTH)
    profession: Profession = Field(default_factory=Profession)
    created_at: datetime = Field(default_factory=utc_now)

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.strip().lower()


class PlayerPreset(BaseModel):
    """A saved player display name."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=PLAYER_NAME_MAX_LENGTH)
    created_at: datetime = Field(default_factory=utc_now)

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.strip().lower()
