from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional

from .diagnostics import Diagnostics
from .models import Todo, to_persisted
from .normalizer import Normalized, Normalizer
from .stores import KeyValueStore

logger = logging.getLogger(__name__)

TODO_STORAGE_KEY = "todoItems"


class LoadStatus(str, Enum):
    LOADED = "loaded"
    MISSING = "missing"
    READ_FAILED = "read_failed"
    INVALID_JSON = "invalid_json"
    NOT_A_LIST = "not_a_list"


@dataclass(frozen=True)
class LoadOutcome:
    """Result of reading the stored collection. todos is always usable."""

    status: LoadStatus
    todos: List[Todo] = field(default_factory=list)
    rejected: int = 0


@dataclass(frozen=True)
class SaveOutcome:
    """Result of writing the collection. error carries the failure text when ok is False."""

    ok: bool
    count: int = 0
    error: Optional[str] = None


def _reject_constant(name: str) -> Any:
    # JSON proper has no NaN/Infinity literals
    raise ValueError(f"invalid JSON literal {name}")


# PUBLIC_INTERFACE
def dump_todos(todos: Iterable[Todo]) -> str:
    """Serialize todos to the compact JSON text kept in the store."""
    return json.dumps(
        [to_persisted(t) for t in todos],
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


# PUBLIC_INTERFACE
class TodoStorage:
    """
    Loads and saves the todo collection under a single fixed store key.

    Neither direction raises: unreadable data loads as an empty list (dropping
    individual bad records), and failed writes are reported in SaveOutcome and
    otherwise ignored.
    """

    def __init__(
        self,
        store: KeyValueStore,
        diagnostics: Optional[Diagnostics] = None,
        normalizer: Optional[Normalizer] = None,
        key: str = TODO_STORAGE_KEY,
    ) -> None:
        self._store = store
        self._diagnostics = diagnostics or Diagnostics(enabled=False, logger=logger)
        self._normalizer = normalizer or Normalizer(self._diagnostics)
        self._key = key

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def normalizer(self) -> Normalizer:
        return self._normalizer

    def load(self) -> LoadOutcome:
        try:
            stored = self._store.get(self._key)
        except Exception as e:
            self._diagnostics.debug("TodoStorage: Error loading todos: %r", e)
            return LoadOutcome(LoadStatus.READ_FAILED)
        if not stored:
            return LoadOutcome(LoadStatus.MISSING)

        try:
            parsed = json.loads(stored, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            self._diagnostics.debug("TodoStorage: Error loading todos: %r", e)
            return LoadOutcome(LoadStatus.INVALID_JSON)
        if not isinstance(parsed, list):
            return LoadOutcome(LoadStatus.NOT_A_LIST)

        todos: List[Todo] = []
        rejected = 0
        for candidate in parsed:
            result = self._normalizer.normalize(candidate)
            if isinstance(result, Normalized):
                todos.append(result.todo)
            else:
                rejected += 1
        return LoadOutcome(LoadStatus.LOADED, todos=todos, rejected=rejected)

    def load_all(self) -> List[Todo]:
        """Return the stored todos in order; empty on any failure."""
        return self.load().todos

    def save(self, todos: Iterable[Todo]) -> SaveOutcome:
        try:
            items = list(todos)
            text = dump_todos(items)
            self._store.set(self._key, text)
        except Exception as e:
            self._diagnostics.debug("TodoStorage: Error saving todos: %r", e)
            return SaveOutcome(ok=False, error=str(e) or type(e).__name__)
        return SaveOutcome(ok=True, count=len(items))

    def save_all(self, todos: Iterable[Todo]) -> None:
        """Overwrite the stored collection with todos; failures are swallowed."""
        self.save(todos)
