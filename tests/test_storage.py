"""
Tests for storage

Documents are stored independently; a bad document falls back to its
default without touching the others.
"""

import json
import os

import pytest

from cashflow.audit import AuditLogger
from cashflow.models.audit import AuditEventType
from cashflow.models.player import (
    FixedDebtKey,
    LiabilityOrigin,
    Player,
    Profession,
    RealEstateAsset,
    StockAsset,
)
from cashflow.models.presets import PlayerPreset
from cashflow.services.storage import (
    InMemoryStore,
    JsonFileStore,
    PlayerPresetRepository,
    PlayerRepository,
    ProfessionPresetRepository,
    StorageReadError,
    StorageWriteError,
)


class TestJsonFileStore:
    """One UTF-8 JSON file per key."""

    def test_set_and_get(self, tmp_path):
        store = JsonFileStore(tmp_path / "saves")
        store.set("player", '{"cash": 1}')

        assert store.get("player") == '{"cash": 1}'
        assert (tmp_path / "saves" / "player.json").exists()

    def test_missing_key(self, tmp_path):
        assert JsonFileStore(tmp_path).get("nothing") is None

    def test_delete_and_keys(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set("b", "1")
        store.set("a", "2")
        assert store.keys() == ["a", "b"]

        assert store.delete("a") is True
        assert store.delete("a") is False
        assert store.keys() == ["b"]

    def test_no_temporary_files_left(self, tmp_path):
        store = JsonFileStore(tmp_path)
        store.set("player", "x")
        store.set("player", "y")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["player.json"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_invalid_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            JsonFileStore(tmp_path).get(key)

    def test_unreadable_document(self, tmp_path):
        (tmp_path / "player.json").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(StorageReadError):
            JsonFileStore(tmp_path).get("player")

    def test_write_failure_is_retried_then_raised(self, tmp_path, monkeypatch):
        calls = []

        def failing_replace(src, dst):
            calls.append(dst)
            raise PermissionError("locked")

        monkeypatch.setattr(os, "replace", failing_replace)
        store = JsonFileStore(tmp_path, write_attempts=2)

        with pytest.raises(StorageWriteError):
            store.set("player", "x")
        assert len(calls) == 2
        assert list(tmp_path.iterdir()) == []


class TestPlayerRepository:
    """The saved game document."""

    def test_round_trip_keeps_asset_variants(self):
        store = InMemoryStore()
        repository = PlayerRepository(store, "player")
        player = Player(
            cash=1234.5,
            assets=[
                StockAsset(name="OK4U", share_price=10, num_shares=5),
                RealEstateAsset(name="House", cost=100, down_payment=10, liability=90),
            ],
        )
        repository.save(player)

        loaded, fresh = repository.load()
        assert fresh is False
        assert loaded == player
        assert isinstance(loaded.assets[1], RealEstateAsset)

    def test_missing_document_gives_fresh_player(self):
        loaded, fresh = PlayerRepository(InMemoryStore(), "player").load()
        assert fresh is True
        assert loaded.cash == 0
        assert loaded.ledger == []

    def test_corrupt_document_is_reported(self):
        audit_logger = AuditLogger()
        store = InMemoryStore({"player": "{not json"})

        loaded, fresh = PlayerRepository(store, "player", audit_logger).load()
        assert fresh is True
        assert audit_logger.recent_events[0].event_type == AuditEventType.STORAGE_READ_FAILED

    def test_load_repairs_fixed_mirror(self):
        player = Player(profession=Profession(mortgage_balance=1000, mortgage_payment=100))
        store = InMemoryStore({"player": player.model_dump_json()})

        loaded, _ = PlayerRepository(store, "player").load()
        assert [l.origin for l in loaded.liabilities] == [LiabilityOrigin.FIXED]
        assert loaded.liabilities[0].fixed_key == FixedDebtKey.MORTGAGE

    def test_clear(self):
        store = InMemoryStore()
        repository = PlayerRepository(store, "player")
        repository.save(Player())
        assert repository.clear() is True
        assert store.get("player") is None


class TestPresetRepositories:
    """Preset lists are independent of the player document."""

    def test_corrupt_presets_do_not_affect_player(self):
        store = InMemoryStore()
        PlayerRepository(store, "player").save(Player(cash=42))
        store.set("presets", json.dumps([{"name": 5}]))

        assert ProfessionPresetRepository(store, "presets").load_all() == []
        loaded, fresh = PlayerRepository(store, "player").load()
        assert fresh is False
        assert loaded.cash == 42

    def test_save_all_and_load_all(self, tmp_path):
        repository = PlayerPresetRepository(JsonFileStore(tmp_path), "players")
        repository.save_all([PlayerPreset(name="Ada"), PlayerPreset(name="Bob")])

        assert [p.name for p in repository.load_all()] == ["Ada", "Bob"]
        assert json.loads((tmp_path / "players.json").read_text(encoding="utf-8"))[0]["name"] == "Ada"
