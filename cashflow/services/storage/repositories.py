"""
Document Repositories

Typed access to the three persisted documents on top of a key-value
store.

DESIGN DECISION: Reading never fails. A missing, unreadable or invalid
document is replaced by its default (a fresh player, an empty preset
list) and the failure is reported to the audit logger. Writing does fail
loudly with StorageWriteError; the caller decides what to do about it.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from cashflow.audit import AuditLogger
from cashflow.engine.fixed_debts import sync_fixed_liabilities
from cashflow.models.player import Player, new_player
from cashflow.models.presets import PlayerPreset, ProfessionPreset
from cashflow.services.storage.interface import KeyValueStoreInterface, StorageReadError


class _Repository:
    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._key = key
        self._audit_logger = audit_logger

    @property
    def key(self) -> str:
        return self._key

    def _read(self) -> Optional[str]:
        try:
            return self._store.get(self._key)
        except StorageReadError as e:
            self._report_read_failure(str(e))
            return None

    def _report_read_failure(self, message: str) -> None:
        if self._audit_logger:
            self._audit_logger.log_storage_failed(self._key, "read", message)


class PlayerRepository(_Repository):
    """The saved game."""

    def load(self) -> tuple[Player, bool]:
        """
        Load the saved player.

        Returns:
            (player, fresh) where fresh is True if a new default player was
            created because nothing usable was stored.
        """
        raw = self._read()
        if raw is None:
            return new_player(), True

        try:
            player = Player.model_validate_json(raw)
        except ValidationError as e:
            self._report_read_failure(f"Invalid player document: {e.error_count()} errors")
            return new_player(), True

        return sync_fixed_liabilities(player), False

    def save(self, player: Player) -> None:
        self._store.set(self._key, player.model_dump_json())

    def clear(self) -> bool:
        return self._store.delete(self._key)


ItemT = TypeVar("ItemT", bound=BaseModel)


class PresetListRepository(_Repository, Generic[ItemT]):
    """A JSON array of presets, newest first."""

    item_model: type[BaseModel] = BaseModel

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(store, key, audit_logger)
        self._adapter = TypeAdapter(list[self.item_model])

    def load_all(self) -> list[ItemT]:
        raw = self._read()
        if raw is None:
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            self._report_read_failure(f"Invalid preset document: {e.error_count()} errors")
            return []

    def save_all(self, items: list[ItemT]) -> None:
        self._store.set(self._key, self._adapter.dump_json(items).decode("utf-8"))


class ProfessionPresetRepository(PresetListRepository[ProfessionPreset]):
    item_model = ProfessionPreset


class PlayerPresetRepository(PresetListRepository[PlayerPreset]):
    item_model = PlayerPreset
