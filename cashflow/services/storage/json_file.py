"""
JSON File Storage Implementation

DESIGN DECISION: Each key is one UTF-8 file "<key>.json" in a single
directory. That keeps the three documents independent: a corrupt or
half-written presets file cannot damage the saved player.

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so readers see either the old or the new document.
Transient OS errors (locked file on Windows, full network share) are
retried with exponential backoff.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from cashflow.services.storage.interface import (
    KeyValueStoreInterface,
    StorageReadError,
    StorageWriteError,
)


SUFFIX = ".json"


class JsonFileStore(KeyValueStoreInterface):
    """Directory-backed key-value store."""

    def __init__(self, directory: Path, write_attempts: int = 3):
        self._directory = Path(directory)
        self._write_attempts = write_attempts

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e

    def _write(self, path: Path, value: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=self._directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            retrying(self._write, path, value)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Failed to delete {path}: {e}") from e

    def keys(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            p.stem for p in self._directory.glob(f"*{SUFFIX}")
            if not p.name.startswith(".")
        )
