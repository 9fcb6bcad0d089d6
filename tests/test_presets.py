"""Tests for profession and player presets."""

import pytest

from cashflow.errors import ActionRejectedError
from cashflow.models.player import Profession
from cashflow.presets import PresetManager
from cashflow.services.storage import (
    InMemoryStore,
    PlayerPresetRepository,
    ProfessionPresetRepository,
)


@pytest.fixture
def manager() -> PresetManager:
    store = InMemoryStore()
    return PresetManager(
        ProfessionPresetRepository(store, "professions"),
        PlayerPresetRepository(store, "players"),
    )


class TestProfessionPresets:
    """Named profession cards, overwritten by name."""

    def test_save_uses_profession_name(self, manager):
        preset = manager.save_profession_preset(Profession(profession_name="Janitor", salary=1600))
        assert preset.name == "Janitor"
        assert manager.profession_presets()[0].profession.salary == 1600

    def test_same_name_overwrites(self, manager):
        first = manager.save_profession_preset(Profession(profession_name="Nurse", salary=3100))
        second = manager.save_profession_preset(Profession(profession_name="x", salary=3200), name="NURSE")

        presets = manager.profession_presets()
        assert len(presets) == 1
        assert second.id == first.id
        assert presets[0].name == "Nurse"
        assert presets[0].profession.salary == 3200

    def test_new_names_are_prepended(self, manager):
        manager.save_profession_preset(Profession(profession_name="Pilot"))
        manager.save_profession_preset(Profession(profession_name="Doctor"))
        assert [p.name for p in manager.profession_presets()] == ["Doctor", "Pilot"]

    def test_name_is_required(self, manager):
        with pytest.raises(ActionRejectedError, match="Preset name is required."):
            manager.save_profession_preset(Profession(profession_name=" "))

    def test_find_and_delete(self, manager):
        preset = manager.save_profession_preset(Profession(profession_name="Lawyer"))
        assert manager.find_profession_preset(str(preset.id)).name == "Lawyer"

        assert manager.delete_profession_preset(preset.id) is True
        assert manager.delete_profession_preset(preset.id) is False
        with pytest.raises(ActionRejectedError, match="Profession preset not found."):
            manager.find_profession_preset(preset.id)

    def test_stored_card_is_a_copy(self, manager):
        card = Profession(profession_name="Mechanic", salary=2000)
        manager.save_profession_preset(card)
        card.salary = 1
        assert manager.profession_presets()[0].profession.salary == 2000

    def test_long_preset_name_is_rejected(self, manager):
        with pytest.raises(ActionRejectedError, match="Preset: name must be at most 100 characters."):
            manager.save_profession_preset(Profession(profession_name="Janitor"), name="J" * 101)
        assert manager.profession_presets() == []


class TestPlayerPresets:
    """Saved display names, unique case-insensitively."""

    def test_save_and_list(self, manager):
        manager.save_player_preset(" Ada ")
        manager.save_player_preset("Bob")
        assert [p.name for p in manager.player_presets()] == ["Bob", "Ada"]

    def test_duplicates_are_rejected(self, manager):
        manager.save_player_preset("Ada")
        with pytest.raises(ActionRejectedError, match="Player already saved."):
            manager.save_player_preset("ada")

    def test_name_is_required(self, manager):
        with pytest.raises(ActionRejectedError, match="Player name is required."):
            manager.save_player_preset("")

    def test_long_name_is_rejected(self, manager):
        with pytest.raises(ActionRejectedError, match="Player name: name must be at most 100 characters."):
            manager.save_player_preset("A" * 101)
        assert manager.player_presets() == []

    def test_delete(self, manager):
        preset = manager.save_player_preset("Ada")
        assert manager.delete_player_preset(preset.id) is True
        assert manager.player_presets() == []
        assert manager.delete_player_preset("garbage") is False
