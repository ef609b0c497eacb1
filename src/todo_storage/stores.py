from __future__ import annotations

from abc import ABC, abstractmethod
from threading import RLock
from typing import Optional

from .settings import Settings, get_settings


class StoreError(Exception):
    """Raised by a key-value store when a read or write cannot be completed."""


class StoreQuotaExceededError(StoreError):
    """Raised when a write would exceed the store's size quota."""


# PUBLIC_INTERFACE
class KeyValueStore(ABC):
    """Abstract string key-value store, shaped like browser session storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the string stored under key, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any prior value. Raise StoreError on failure."""


class InMemoryStore(KeyValueStore):
    """
    Thread-safe in-memory store suitable for testing and default runtime.

    quota_bytes caps the UTF-8 size of any single value; an oversized write raises
    StoreQuotaExceededError and leaves the previous value in place.
    """

    def __init__(self, quota_bytes: Optional[int] = None) -> None:
        self._lock = RLock()
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            size = len(value.encode("utf-8"))
            if size > self._quota_bytes:
                raise StoreQuotaExceededError(
                    f"value for {key!r} is {size} bytes, quota is {self._quota_bytes}"
                )
        with self._lock:
            self._items[key] = value


# PUBLIC_INTERFACE
def get_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """
    Factory to return the configured store based on settings.
    - memory: InMemoryStore
    - sqlite: SQLiteStore backed by settings.sqlite_db_path
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteStore

        return SQLiteStore(settings.sqlite_db_path)
    return InMemoryStore()
