from __future__ import annotations

import logging

import pytest

from todo_storage.diagnostics import Diagnostics
from todo_storage.settings import Settings
from todo_storage.storage import TodoStorage
from todo_storage.stores import InMemoryStore


@pytest.fixture()
def settings(tmp_path) -> Settings:
    """Production-like settings on the memory backend."""
    return Settings(
        persistence_backend="memory",
        sqlite_db_path=str(tmp_path / "todos.db"),
        cors_allow_origins=["*"],
        app_env="production",
        log_level=logging.INFO,
    )


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def storage(store: InMemoryStore) -> TodoStorage:
    return TodoStorage(store)


@pytest.fixture()
def dev_storage(store: InMemoryStore) -> TodoStorage:
    """TodoStorage with development diagnostics switched on."""
    return TodoStorage(store, diagnostics=Diagnostics(enabled=True))
