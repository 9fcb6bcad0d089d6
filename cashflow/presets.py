"""
Preset Management

Profession presets and player name presets, each stored in its own
document.

Rules:
- Profession presets: saving under an existing name (case-insensitive)
  overwrites that preset's profession; otherwise a new one is prepended.
- Player presets: a name that already exists (case-insensitive) is
  rejected.
- Either kind can be deleted by id.
"""

from typing import Optional, Union
from uuid import UUID

from cashflow.errors import ActionRejectedError
from cashflow.models.player import PLAYER_NAME_MAX_LENGTH, Profession
from cashflow.models.presets import PlayerPreset, ProfessionPreset
from cashflow.services.storage import PlayerPresetRepository, ProfessionPresetRepository
from cashflow.validation.validator import ActionValidator, clean_name, require


def _as_uuid(value: Union[UUID, str]) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class PresetManager:
    """Business rules for both preset lists."""

    def __init__(
        self,
        profession_presets: ProfessionPresetRepository,
        player_presets: PlayerPresetRepository,
    ):
        self._professions = profession_presets
        self._players = player_presets

    # -------------------------------------------------------------------------
    # Profession presets
    # -------------------------------------------------------------------------

    def profession_presets(self) -> list[ProfessionPreset]:
        return self._professions.load_all()

    def find_profession_preset(self, preset_id: Union[UUID, str]) -> ProfessionPreset:
        preset_id = _as_uuid(preset_id)
        preset = next((p for p in self.profession_presets() if p.id == preset_id), None)
        if preset is None:
            raise ActionRejectedError("Profession preset not found.", field="preset_id")
        return preset

    def save_profession_preset(
        self,
        profession: Profession,
        name: Optional[str] = None,
    ) -> ProfessionPreset:
        """
        Save a profession under `name`, or under its own profession name.

        An existing preset with the same name is overwritten in place.
        """
        preset_name = clean_name(name) or clean_name(profession.profession_name)
        require(bool(preset_name), "Preset name is required.", field="name")
        ActionValidator.validate_name("Preset", preset_name, limit=PLAYER_NAME_MAX_LENGTH)

        presets = self.profession_presets()
        existing = next((p for p in presets if p.matches(preset_name)), None)
        if existing is not None:
            existing.profession = profession.model_copy(deep=True)
            saved = existing
        else:
            saved = ProfessionPreset(name=preset_name, profession=profession.model_copy(deep=True))
            presets.insert(0, saved)

        self._professions.save_all(presets)
        return saved

    def delete_profession_preset(self, preset_id: Union[UUID, str]) -> bool:
        preset_id = _as_uuid(preset_id)
        presets = self.profession_presets()
        remaining = [p for p in presets if p.id != preset_id]
        if len(remaining) == len(presets):
            return False
        self._professions.save_all(remaining)
        return True

    # -------------------------------------------------------------------------
    # Player presets
    # -------------------------------------------------------------------------

    def player_presets(self) -> list[PlayerPreset]:
        return self._players.load_all()

    def find_player_preset(self, preset_id: Union[UUID, str]) -> PlayerPreset:
        preset_id = _as_uuid(preset_id)
        preset = next((p for p in self.player_presets() if p.id == preset_id), None)
        if preset is None:
            raise ActionRejectedError("Player preset not found.", field="preset_id")
        return preset

    def save_player_preset(self, name: str) -> PlayerPreset:
        ActionValidator.validate_player_name(name)
        preset_name = clean_name(name)

        presets = self.player_presets()
        require(
            not any(p.matches(preset_name) for p in presets),
            "Player already saved.",
            field="name",
        )

        preset = PlayerPreset(name=preset_name)
        presets.insert(0, preset)
        self._players.save_all(presets)
        return preset

    def delete_player_preset(self, preset_id: Union[UUID, str]) -> bool:
        preset_id = _as_uuid(preset_id)
        presets = self.player_presets()
        remaining = [p for p in presets if p.id != preset_id]
        if len(remaining) == len(presets):
            return False
        self._players.save_all(remaining)
        return True
