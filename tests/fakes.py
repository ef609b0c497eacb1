from __future__ import annotations

from typing import Optional

from todo_storage.stores import KeyValueStore, StoreError


class FailingStore(KeyValueStore):
    """
    Store whose reads and/or writes always fail.

    Records every attempted write so tests can assert nothing was persisted.
    """

    def __init__(self, fail_get: bool = True, fail_set: bool = True, value: Optional[str] = None) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.value = value
        self.attempted_writes: list[str] = []

    def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise StoreError("storage unavailable")
        return self.value

    def set(self, key: str, value: str) -> None:
        self.attempted_writes.append(value)
        if self.fail_set:
            raise StoreError("storage unavailable")
        self.value = value
