"""Key-value store implementations."""

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..config.models import Config
from ..core.interfaces import IKeyValueStore
from .logging import LoggerMixin


class JsonFileStore(IKeyValueStore, LoggerMixin):
    """Text key-value store persisted as a single JSON object on disk."""

    def __init__(self, config: Config) -> None:
        """Initialize file store.

        Args:
            config: Application configuration.
        """
        self._path = Path(config.cache.path)

    @property
    def path(self) -> Path:
        """Location of the store file."""
        return self._path

    def get(self, key: str) -> Optional[str]:
        """Get the text stored under a key."""
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> List[str]:
        """List stored keys."""
        return list(self._read())

    def _read(self) -> Dict[str, str]:
        """Read the whole store.

        Returns:
            Stored entries. An unreadable store file reads as empty.
        """
        if not self._path.exists():
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable store file {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring store file {self._path}: root is not an object")
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        """Atomically replace the store file.

        Args:
            data: Entries to persist.

        Raises:
            OSError: If the file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=str(self._path.parent), prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class MemoryStore(IKeyValueStore):
    """In-process key-value store."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)
