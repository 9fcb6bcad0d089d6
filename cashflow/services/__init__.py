"""Services package."""

from cashflow.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    PlayerPresetRepository,
    PlayerRepository,
    ProfessionPresetRepository,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStoreInterface",
    "PlayerPresetRepository",
    "PlayerRepository",
    "ProfessionPresetRepository",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
