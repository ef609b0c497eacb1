from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple, Union

from .diagnostics import Diagnostics
from .models import Todo, is_calendar_date, parse_instant

logger = logging.getLogger(__name__)


class RejectReason(str, Enum):
    NOT_AN_OBJECT = "not_an_object"
    MISSING_ID = "missing_id"
    INVALID_ID = "invalid_id"
    MISSING_TITLE = "missing_title"
    INVALID_TITLE = "invalid_title"
    COMPLETED_NOT_BOOLEAN = "completed_not_boolean"
    INVALID_CREATED_AT = "invalid_created_at"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class Normalized:
    """A candidate that became a Todo. dropped_fields names fields that were cleared."""

    todo: Todo
    dropped_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Rejected:
    """A candidate that could not be turned into a Todo."""

    reason: RejectReason
    detail: str = ""


NormalizeResult = Union[Normalized, Rejected]


# PUBLIC_INTERFACE
class Normalizer:
    """
    Turns untrusted, JSON-decoded values into Todo records.

    Required fields are checked strictly and failures reject the whole candidate;
    description and dueDate are handled leniently and never cause a rejection.
    Integer ids are kept as their decimal string. A description that is not a
    string (even a truthy one such as 42) becomes "" rather than being carried
    through, since Todo.description is always text.

    The first malformed dueDate or unexpected error seen by an instance is
    reported once through the diagnostics sink (when enabled); later ones are
    silent for the lifetime of the instance.
    """

    def __init__(self, diagnostics: Optional[Diagnostics] = None) -> None:
        self._diagnostics = diagnostics or Diagnostics(enabled=False, logger=logger)
        self._malformed_logged = False

    @property
    def malformed_logged(self) -> bool:
        return self._malformed_logged

    def _notice_once(self, msg: str, *args: Any) -> None:
        if self._malformed_logged or not self._diagnostics.enabled:
            return
        self._diagnostics.debug(msg, *args)
        self._malformed_logged = True

    def normalize(self, candidate: Any) -> NormalizeResult:
        """Validate a single candidate; never raises."""
        try:
            return self._normalize(candidate)
        except Exception as e:
            self._notice_once("TodoStorage: Error normalizing todo: %r", e)
            return Rejected(RejectReason.UNEXPECTED_ERROR, repr(e))

    def _normalize(self, candidate: Any) -> NormalizeResult:
        if not isinstance(candidate, Mapping):
            return Rejected(RejectReason.NOT_AN_OBJECT, type(candidate).__name__)

        todo_id = candidate.get("id")
        # numeric ids written by older clients
        if isinstance(todo_id, int) and not isinstance(todo_id, bool) and todo_id:
            todo_id = str(todo_id)
        else:
            todo_id = _required_text(candidate, "id", RejectReason.MISSING_ID, RejectReason.INVALID_ID)
        if isinstance(todo_id, Rejected):
            return todo_id
        title = _required_text(candidate, "title", RejectReason.MISSING_TITLE, RejectReason.INVALID_TITLE)
        if isinstance(title, Rejected):
            return title

        completed = candidate.get("completed")
        # bool only; 1/0 and "true" are not accepted
        if not isinstance(completed, bool):
            return Rejected(RejectReason.COMPLETED_NOT_BOOLEAN, repr(completed))

        created_at = _created_at(candidate.get("createdAt"))
        if created_at is None:
            return Rejected(RejectReason.INVALID_CREATED_AT, repr(candidate.get("createdAt")))

        description = candidate.get("description")
        if not isinstance(description, str):
            description = ""

        raw_due = candidate.get("dueDate")
        due_date = self._due_date(raw_due)
        dropped = ("dueDate",) if due_date is None and raw_due is not None else ()

        todo = Todo(
            id=todo_id,
            title=title,
            description=description,
            completed=completed,
            created_at=created_at,
            due_date=due_date,
        )
        return Normalized(todo=todo, dropped_fields=dropped)

    def _due_date(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            self._notice_once("TodoStorage: Ignoring invalid dueDate format: %r", value)
            return None
        if not is_calendar_date(value):
            self._notice_once("TodoStorage: Ignoring malformed dueDate value: %r", value)
            return None
        return value


def _required_text(
    candidate: Mapping, key: str, missing: RejectReason, invalid: RejectReason
) -> Union[str, Rejected]:
    value = candidate.get(key)
    if not value:
        return Rejected(missing)
    if not isinstance(value, str):
        return Rejected(invalid, repr(value))
    return value


def _created_at(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_instant(value)
    return None
