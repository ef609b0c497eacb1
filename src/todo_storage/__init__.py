"""
Todo storage package.

Normalizes untrusted todo data read from a key-value store into validated
Todo records and writes records back in their persisted JSON form. The
FastAPI application lives in todo_storage.main.
"""

from .diagnostics import Diagnostics
from .models import PersistedTodo, Todo, to_persisted
from .normalizer import Normalized, Normalizer, NormalizeResult, Rejected, RejectReason
from .storage import TODO_STORAGE_KEY, LoadOutcome, LoadStatus, SaveOutcome, TodoStorage
from .stores import InMemoryStore, KeyValueStore, StoreError, StoreQuotaExceededError

__all__ = [
    "Diagnostics",
    "InMemoryStore",
    "KeyValueStore",
    "LoadOutcome",
    "LoadStatus",
    "Normalized",
    "NormalizeResult",
    "Normalizer",
    "PersistedTodo",
    "Rejected",
    "RejectReason",
    "SaveOutcome",
    "StoreError",
    "StoreQuotaExceededError",
    "TODO_STORAGE_KEY",
    "Todo",
    "TodoStorage",
    "to_persisted",
]
