"""Thread-safe flat key/value store for merged configuration."""

import threading
from collections.abc import Mapping
from typing import Any, Optional


class ConfigurationCache:
    """Flat configuration map guarded by a single lock.

    Entries change only through ``merge``, ``set`` and ``clear``. On key
    collisions the most recent write wins.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}
        self._lock = threading.Lock()

    def merge(self, entries: Mapping[str, Any]) -> int:
        """Overwrite or add every entry of a flat map.

        Returns:
            Number of entries in the cache afterwards
        """
        with self._lock:
            self._data.update(entries)
            return len(self._data)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def lookup(self, key: str) -> tuple[bool, Any]:
        """Return ``(found, value)`` so stored None is distinguishable."""
        with self._lock:
            if key in self._data:
                return True, self._data[key]
            return False, None

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def snapshot(self, prefix: Optional[str] = None) -> dict[str, Any]:
        """Copy of the cache, optionally limited to keys starting with prefix."""
        with self._lock:
            if prefix is None:
                return dict(self._data)
            return {
                key: value for key, value in self._data.items() if key.startswith(prefix)
            }

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
