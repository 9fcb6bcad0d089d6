"""
Storage Services Package

Provides the abstract key-value interface, concrete stores and the typed
repositories for the player and preset documents.
"""

from cashflow.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from cashflow.services.storage.json_file import JsonFileStore
from cashflow.services.storage.memory import InMemoryStore
from cashflow.services.storage.repositories import (
    PlayerPresetRepository,
    PlayerRepository,
    PresetListRepository,
    ProfessionPresetRepository,
)

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Stores
    "InMemoryStore",
    "JsonFileStore",
    # Repositories
    "PlayerPresetRepository",
    "PlayerRepository",
    "PresetListRepository",
    "ProfessionPresetRepository",
]
