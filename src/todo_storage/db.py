from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Optional

from .stores import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "kv_items"
    key: str = "key"
    value: str = "value"


_COLS = _Cols()


class SQLiteStore(KeyValueStore):
    """
    Lightweight SQLite key-value store.

    Each call opens its own connection; sqlite3 errors surface as StoreError.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()
        logger.info("SQLiteStore ready db=%s", db_path)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.key} TEXT PRIMARY KEY,
                    {_COLS.value} TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._conn() as conn:
            row = conn.execute(
                f"SELECT {_COLS.value} FROM {_COLS.table} WHERE {_COLS.key} = ?", (key,)
            ).fetchone()
            return str(row[_COLS.value]) if row else None

    def set(self, key: str, value: str) -> None:
        with self._conn() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO {_COLS.table} ({_COLS.key}, {_COLS.value}) VALUES (?, ?)",
                (key, value),
            )
