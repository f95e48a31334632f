"""Device-local key-value persistence.

Stores hold their whole state under a single named entry and write it back
on every change. This module provides the interface they write through and
two implementations:

* ``JsonFileStore`` – one JSON file per key inside the data directory
* ``InMemoryStore`` – keeps serialized values in a dict, for tests

Both serialize with :mod:`json`, so a value that survives ``set`` will come
back from ``get`` as plain lists, dicts, strings and numbers.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import config
from .exceptions import PersistenceError

logger = logging.getLogger(__name__)


def safe_key(name: str, default: str = 'entry') -> str:
    """Turn a key into a safe filename stem.

    Preserves alphanumeric characters, underscores and hyphens; spaces
    become underscores.

    Example:
        >>> safe_key("my expenses!")
        'my_expenses'
    """
    if not name:
        return default

    cleaned = ''.join(c for c in name if c.isalnum() or c in {' ', '_', '-'})
    cleaned = cleaned.strip().replace(' ', '_')

    while '__' in cleaned:
        cleaned = cleaned.replace('__', '_')

    cleaned = cleaned.rstrip('_')
    return cleaned if cleaned else default


def _encode(key: str, value: Any) -> str:
    try:
        return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Value for '{key}' is not serializable: {e}") from e


class KeyValueStore(ABC):
    """Get/set/clear of serializable values by string name."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or ``default`` when the key is absent.

        Raises:
            PersistenceError: If the entry exists but cannot be read
        """

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Replace the stored value.

        Raises:
            PersistenceError: If the value cannot be serialized or written
        """

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove an entry. Missing keys are ignored."""


class JsonFileStore(KeyValueStore):
    """Key-value store backed by JSON files in a directory."""

    def __init__(self, directory: Optional[Path] = None):
        """Initialize file storage.

        Args:
            directory: Optional custom directory for the entry files.
                       Defaults to DATA_DIR from config.
        """
        self.directory = Path(directory) if directory is not None else config.DATA_DIR

    def get_path(self, key: str) -> Path:
        return self.directory / f"{safe_key(key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        target = self.get_path(key)
        if not target.exists():
            return default
        try:
            with target.open('r', encoding='utf-8') as handle:
                return json.load(handle)
        except (json.JSONDecodeError, OSError) as e:
            raise PersistenceError(f"Could not read '{key}' from {target}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        payload = _encode(key, value)
        target = self.get_path(key)
        tmp = target.with_suffix('.json.tmp')
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp.open('w', encoding='utf-8') as handle:
                handle.write(payload)
            os.replace(tmp, target)
        except OSError as e:
            try:
                tmp.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning("Could not remove %s: %s", tmp, cleanup_error)
            raise PersistenceError(f"Failed to save '{key}' to {target}: {e}") from e
        logger.debug("Saved %s to %s", key, target)

    def clear(self, key: str) -> None:
        target = self.get_path(key)
        if not target.exists():
            return
        try:
            target.unlink()
        except OSError as e:
            raise PersistenceError(f"Failed to delete {target}: {e}") from e


class InMemoryStore(KeyValueStore):
    """Key-value store that keeps serialized values in memory.

    ``quota_bytes`` caps the total size of all entries, mimicking a
    browser's storage quota; a write that would exceed it fails.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._entries: Dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._entries:
            return default
        return json.loads(self._entries[key])

    def set(self, key: str, value: Any) -> None:
        payload = _encode(key, value)
        if self.quota_bytes is not None:
            others = sum(len(v.encode('utf-8')) for k, v in self._entries.items() if k != key)
            if others + len(payload.encode('utf-8')) > self.quota_bytes:
                raise PersistenceError(f"Storage quota exceeded while saving '{key}'")
        self._entries[key] = payload

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)

    def keys(self):
        return list(self._entries)


Notifier = Callable[[str], None]


class WriteThroughStore:
    """Base for in-memory state mirrored to a single persisted entry.

    Failures on either side are reported through ``notify`` and never
    raised: the in-memory state stays authoritative for the session.
    """

    key: str = ''

    def __init__(self, storage: KeyValueStore, notify: Optional[Notifier] = None):
        self.storage = storage
        self.notifications: List[str] = []
        self._notify = notify or self.notifications.append

    def _load(self, default: Any) -> Any:
        try:
            return self.storage.get(self.key, default)
        except PersistenceError as e:
            logger.warning("Starting with empty %s: %s", self.key, e)
            self._notify(f"Could not load saved {self.key}; starting empty. ({e})")
            return default

    def _persist(self, value: Any) -> bool:
        try:
            self.storage.set(self.key, value)
        except PersistenceError as e:
            logger.warning("Write-through of %s failed: %s", self.key, e)
            self._notify(f"Changes to {self.key} are kept for this session but could not be saved. ({e})")
            return False
        return True
