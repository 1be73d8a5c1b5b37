"""Task store — the in-memory owner of every task record.

Extends InMemoryRepository with task writes: defaulting on insert and
replace, key-wise patching, timestamp stamping and not-found signalling.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Mapping, Optional

from fastapi import Request

from patterns.repository import InMemoryRepository
from verticals.tasks.errors import TaskNotFoundError, TaskValidationError
from verticals.tasks.models.schemas import (
    WRITABLE_FIELDS,
    Task,
    TaskPriority,
    TaskStatus,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Validator = Callable[[Mapping[str, Any]], list[str]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _trimmed(value: Optional[str]) -> str:
    return value.strip() if value else ""


def _defaulted(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Writable fields with insert-time defaults for anything omitted."""
    return {
        "title": _trimmed(payload.get("title")),
        "description": _trimmed(payload.get("description")),
        "status": TaskStatus(payload.get("status") or TaskStatus.PENDING),
        "priority": TaskPriority(payload.get("priority") or TaskPriority.MEDIUM),
        "due_date": payload.get("due_date") or None,
    }


def _coerced(name: str, value: Any) -> Any:
    if name in ("title", "description"):
        return _trimmed(value)
    if name == "status":
        return TaskStatus(value)
    if name == "priority":
        return TaskPriority(value)
    return value or None


# ---------------------------------------------------------------------------
# Task store
# ---------------------------------------------------------------------------

class TaskStore(InMemoryRepository[Task]):
    """Ordered task collection with a monotonic id generator.

    ``clock`` supplies "now" for timestamps and overdue checks; tests pass a
    fake one. ``updated_at`` never goes backwards: if the clock has not
    advanced since the last write the new stamp is bumped by a microsecond.
    """

    def __init__(self, tasks: Iterable[Task] = (), clock: Clock = utcnow):
        super().__init__(tasks)
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def _stamp_after(self, previous: datetime) -> datetime:
        now = self._clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _locate(self, task_id: int) -> int:
        index = self._index_of(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        return index

    # -- Reads --

    def all(self) -> list[Task]:
        """Every task, in insertion order."""
        return self.list()

    def get(self, task_id: int) -> Task:
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    # -- Writes --

    def insert(self, payload: Mapping[str, Any]) -> Task:
        """Create a task from an already-validated payload."""
        fields = _defaulted(payload)

        def build(new_id: int) -> Task:
            now = self._clock()
            return Task(id=new_id, created_at=now, updated_at=now, **fields)

        task = self._add(build)
        logger.debug("Created task %s", task.id)
        return task

    def replace(
        self,
        task_id: int,
        payload: Mapping[str, Any],
        validate: Optional[Validator] = None,
    ) -> Task:
        """Overwrite every writable field, defaulting omitted ones.

        ``id`` and ``created_at`` are kept. Existence is checked before
        ``validate`` runs.
        """
        with self._lock:
            index = self._locate(task_id)
            if validate is not None:
                errors = validate(payload)
                if errors:
                    raise TaskValidationError(errors)
            current = self._items[index]
            updated = current.model_copy(
                update={
                    **_defaulted(payload),
                    "updated_at": self._stamp_after(current.updated_at),
                }
            )
            task = self._swap(index, updated)
        logger.debug("Replaced task %s", task_id)
        return task

    def patch(
        self,
        task_id: int,
        changes: Mapping[str, Any],
        validate: Optional[Validator] = None,
    ) -> tuple[Task, list[str]]:
        """Apply only the supplied writable keys.

        ``validate`` sees the merged view: current values overlaid with the
        changes. Returns the updated task and the keys that were applied,
        in field order.
        """
        applied = [name for name in WRITABLE_FIELDS if name in changes]
        with self._lock:
            index = self._locate(task_id)
            current = self._items[index]
            if validate is not None:
                merged = {**current.writable_view(), **changes}
                errors = validate(merged)
                if errors:
                    raise TaskValidationError(errors)
            update = {name: _coerced(name, changes[name]) for name in applied}
            update["updated_at"] = self._stamp_after(current.updated_at)
            task = self._swap(index, current.model_copy(update=update))
        logger.debug("Patched task %s: %s", task_id, ", ".join(applied) or "-")
        return task, applied

    def delete(self, task_id: int) -> Task:
        """Remove a task permanently and return it."""
        task = self._remove(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.debug("Deleted task %s", task_id)
        return task


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_task_store(request: Request) -> TaskStore:
    """FastAPI dependency for the app-owned TaskStore."""
    return request.app.state.task_store
