"""
Abstract Storage Interface

DESIGN DECISION: The game persists three independent JSON documents
(player, profession presets, player presets) in a key-value store.
An abstract interface lets us:
1. Use an in-memory store for testing
2. Keep the file layout out of the game logic
3. Swap in another backend (browser storage, a database) later

Stores deal in raw text only. Parsing and fallback to defaults belong to
the repositories, so a corrupt document never takes the others with it.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for a string key-value store.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a document.

        Returns:
            The stored text, or None if the key does not exist

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a document, replacing any previous value.

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a document.

        Returns:
            True if the key existed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """A document could not be read from the backend."""
    pass


class StorageWriteError(StorageError):
    """A document could not be written to the backend."""
    pass
