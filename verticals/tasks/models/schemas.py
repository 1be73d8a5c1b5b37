"""Pydantic schemas for the task record and per-endpoint request bodies.

Wire names are camelCase (``createdAt``, ``dueDate``); Python attributes
stay snake_case. ``Task.to_wire()`` produces the JSON shape the API returns.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def ordinal(self) -> int:
        return PRIORITY_ORDER[self]


PRIORITY_ORDER: dict[TaskPriority, int] = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}

# Fields a client may write; everything else is owned by the store.
WRITABLE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "status",
    "priority",
    "due_date",
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Record model
# ---------------------------------------------------------------------------

class Task(BaseModel):
    """A stored task. Only the store creates and mutates these."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    created_at: datetime
    updated_at: datetime
    due_date: Optional[datetime] = None

    @field_validator("created_at", "updated_at", "due_date")
    @classmethod
    def normalize_tz(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    def writable_view(self) -> dict[str, Any]:
        """Current values of the client-writable fields, as a flat dict."""
        return {name: getattr(self, name) for name in WRITABLE_FIELDS}


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TaskInput(BaseModel):
    """Body of POST and PUT.

    Types are checked here; field rules (required title, lengths, enum
    membership) are checked by ``verticals.tasks.rules.validate_task`` so
    that every violation is reported in one pass. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = None

    @field_validator("status", "priority", "due_date", mode="before")
    @classmethod
    def blank_means_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("due_date")
    @classmethod
    def due_date_tz(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

    def to_payload(self) -> dict[str, Any]:
        """All writable fields, omitted ones as None."""
        return self.model_dump(include=set(WRITABLE_FIELDS))


class TaskCreate(TaskInput):
    pass


class TaskReplace(TaskInput):
    pass


class TaskPatch(TaskInput):
    """Body of PATCH. Only the keys actually sent are applied."""

    @model_validator(mode="after")
    def enums_not_cleared(self) -> "TaskPatch":
        for name in ("status", "priority"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name.capitalize()} cannot be empty")
        return self

    def to_changes(self) -> dict[str, Any]:
        """Only the writable fields present in the request."""
        return self.model_dump(include=set(WRITABLE_FIELDS), exclude_unset=True)
