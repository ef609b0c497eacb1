import logging
import os

import pytest

from todo_storage.db import SQLiteStore
from todo_storage.settings import Settings, get_settings
from todo_storage.storage import TODO_STORAGE_KEY, TodoStorage
from todo_storage.models import Todo
from todo_storage.stores import InMemoryStore, StoreError, StoreQuotaExceededError, get_store


class TestInMemoryStore:
    def test_get_missing_key(self):
        assert InMemoryStore().get("todoItems") is None

    def test_set_replaces_value(self):
        store = InMemoryStore()
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"

    def test_quota_counts_utf8_bytes(self):
        store = InMemoryStore(quota_bytes=4)
        store.set("k", "abcd")
        with pytest.raises(StoreQuotaExceededError):
            # two characters, six bytes
            store.set("k", "☕☕")
        assert store.get("k") == "abcd"

    def test_quota_error_is_a_store_error(self):
        assert issubclass(StoreQuotaExceededError, StoreError)


class TestSQLiteStore:
    def test_get_set_round_trip(self, tmp_path):
        store = SQLiteStore(str(tmp_path / "todos.db"))
        assert store.get(TODO_STORAGE_KEY) is None
        store.set(TODO_STORAGE_KEY, "[]")
        store.set(TODO_STORAGE_KEY, '[{"id":"1"}]')
        assert store.get(TODO_STORAGE_KEY) == '[{"id":"1"}]'

    def test_value_survives_reopen(self, tmp_path):
        path = str(tmp_path / "nested" / "dir" / "todos.db")
        SQLiteStore(path).set("k", "persisted")
        assert os.path.exists(path)
        assert SQLiteStore(path).get("k") == "persisted"

    def test_storage_over_sqlite(self, tmp_path):
        storage = TodoStorage(SQLiteStore(str(tmp_path / "todos.db")))
        todos = [Todo.new("Water plants", due_date="2031-04-01")]
        storage.save_all(todos)
        assert [t.id for t in storage.load_all()] == [todos[0].id]

    def test_unopenable_database_raises_store_error(self, tmp_path):
        store = SQLiteStore(str(tmp_path / "todos.db"))
        # A directory in place of the database file cannot be opened
        store._db_path = str(tmp_path)
        with pytest.raises(StoreError):
            store.get("k")

    def test_storage_swallows_sqlite_failures(self, tmp_path):
        store = SQLiteStore(str(tmp_path / "todos.db"))
        store._db_path = str(tmp_path)
        storage = TodoStorage(store)
        assert storage.load_all() == []
        assert storage.save([]).ok is False


class TestGetStore:
    def test_memory_backend(self, settings):
        assert isinstance(get_store(settings), InMemoryStore)

    def test_sqlite_backend(self, tmp_path):
        settings = Settings(
            persistence_backend="sqlite",
            sqlite_db_path=str(tmp_path / "data" / "todos.db"),
            cors_allow_origins=["*"],
            app_env="production",
            log_level=logging.INFO,
        )
        assert isinstance(get_store(settings), SQLiteStore)


class TestSettings:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("PERSISTENCE_BACKEND", "SQLITE_DB_PATH", "CORS_ALLOW_ORIGINS", "APP_ENV", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        s = get_settings()
        assert s.persistence_backend == "memory"
        assert s.sqlite_db_path == "./data/todos.db"
        assert s.cors_allow_origins == ["*"]
        assert s.app_env == "production"
        assert s.dev_mode is False
        assert s.log_level == logging.INFO

    def test_development_enables_diagnostics(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "Development")
        s = get_settings()
        assert s.dev_mode is True
        assert s.log_level == logging.DEBUG

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "redis")
        assert get_settings().persistence_backend == "memory"

    def test_origins_and_log_level(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        s = get_settings()
        assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert s.log_level == logging.WARNING

    def test_bad_log_level_uses_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert get_settings().log_level == logging.INFO
