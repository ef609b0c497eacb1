from __future__ import annotations

import re
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Calendar dates are stored as plain 'YYYY-MM-DD' strings
DUE_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_INSTANT_PATTERN = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"(?:[Tt ](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:[.,](?P<fraction>[0-9]+))?)?)?"
    r"(?P<offset>[Zz]|[+-][0-9]{2}(?::?[0-9]{2})?)?"
)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# PUBLIC_INTERFACE
def parse_instant(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or date-time string into an aware UTC datetime.

    Accepts 'YYYY-MM-DD' optionally followed by 'T' (or a space) and 'HH:MM',
    'HH:MM:SS' or 'HH:MM:SS.f...' with any number of fraction digits (truncated
    to microseconds), then an optional 'Z' or '+HH:MM' / '+HHMM' / '+HH' offset.
    Values without an offset are taken as UTC; date-only strings are midnight UTC.
    Returns None when the string is not a valid instant.
    """
    m = _INSTANT_PATTERN.fullmatch(value.strip())
    if m is None:
        return None
    fraction = (m["fraction"] or "")[:6].ljust(6, "0")
    try:
        tz = _parse_offset(m["offset"])
        parsed = datetime(
            int(m["year"]),
            int(m["month"]),
            int(m["day"]),
            int(m["hour"] or 0),
            int(m["minute"] or 0),
            int(m["second"] or 0),
            int(fraction),
            tzinfo=tz,
        )
    except ValueError:
        return None
    return as_utc(parsed)


def _parse_offset(offset: Optional[str]) -> timezone:
    if not offset or offset in ("Z", "z"):
        return timezone.utc
    sign = -1 if offset[0] == "-" else 1
    digits = offset[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:] or 0)
    if hours > 23 or minutes > 59:
        raise ValueError(f"invalid UTC offset {offset!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


# PUBLIC_INTERFACE
def format_instant(value: datetime) -> str:
    """Render an instant as '2024-01-01T00:00:00.000Z' (UTC, millisecond precision)."""
    utc = as_utc(value).replace(tzinfo=None)
    return utc.isoformat(timespec="milliseconds") + "Z"


# PUBLIC_INTERFACE
def is_calendar_date(value: str) -> bool:
    """True if value is exactly 'YYYY-MM-DD' and names a real calendar day."""
    if DUE_DATE_PATTERN.fullmatch(value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


class _PersistedTodoBase(TypedDict):
    id: str
    title: str
    description: str
    completed: bool
    createdAt: str


# PUBLIC_INTERFACE
class PersistedTodo(_PersistedTodoBase, total=False):
    """
    Plain JSON-serializable shape of a Todo as written to the store.

    Same fields as Todo with camelCase keys; createdAt is an ISO-8601 instant
    string and dueDate is omitted when the todo has no due date.
    """

    dueDate: str


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A validated todo record.

    Instances always carry a non-empty id and title, a strict boolean completion
    flag and an aware UTC creation instant. due_date, when set, is a real
    calendar date in 'YYYY-MM-DD' form.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "3f2b9c1e8a7d4e6f9b0c1d2e3f4a5b6c",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
                "createdAt": "2025-01-25T10:15:30.123Z",
                "dueDate": "2025-02-01",
            }
        },
    )

    id: str = Field(..., min_length=1, strict=True, description="Opaque unique identifier")
    title: str = Field(..., min_length=1, strict=True, description="Short title for the todo item")
    description: str = Field(default="", strict=True, description="Detailed description, may be empty")
    completed: bool = Field(..., strict=True, description="Completion status flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation instant (UTC)")
    due_date: Optional[str] = Field(
        default=None, alias="dueDate", description="Optional due date in YYYY-MM-DD form"
    )

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        """Store creation instants as aware UTC datetimes."""
        return as_utc(v)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not is_calendar_date(v):
            raise ValueError("dueDate must be a valid calendar date in YYYY-MM-DD form")
        return v

    @field_serializer("created_at", when_used="json")
    def serialize_created_at(self, v: datetime) -> str:
        return format_instant(v)

    # PUBLIC_INTERFACE
    @classmethod
    def new(
        cls,
        title: str,
        description: str = "",
        due_date: Optional[str] = None,
        completed: bool = False,
    ) -> "Todo":
        """Create a fresh todo with a random id, stamped with the current time."""
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            completed=completed,
            created_at=datetime.now(timezone.utc),
            due_date=due_date,
        )


# PUBLIC_INTERFACE
def to_persisted(todo: Todo) -> PersistedTodo:
    """Map a Todo to the plain shape written to the store."""
    return todo.model_dump(mode="json", by_alias=True, exclude_none=True)  # type: ignore[return-value]
