"""Query engine — filter, search and sort over a snapshot of tasks.

Pure functions: the input sequence is never mutated and the result is a new
list. Pipeline order is fixed: status, priority, search, sort.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from verticals.tasks.models.schemas import Task

# Wire name (and snake_case alias) -> Task attribute
SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "description": "description",
    "status": "status",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
    "dueDate": "due_date",
    "due_date": "due_date",
}


@dataclass(frozen=True)
class TaskQuery:
    """Parameters accepted by GET /api/tasks. Empty strings mean absent."""

    status: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None
    sort_by: Optional[str] = None
    order: Optional[str] = None

    @property
    def descending(self) -> bool:
        return self.order == "desc"

    def echo(self) -> dict[str, str]:
        """The parameters that were supplied, under their wire names."""
        supplied = {
            "status": self.status,
            "priority": self.priority,
            "search": self.search,
            "sortBy": self.sort_by,
            "order": self.order,
        }
        return {k: v for k, v in supplied.items() if v is not None}


@dataclass
class QueryResult:
    data: list[Task]
    total: int
    filters: dict[str, str] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.data)


# ---------------------------------------------------------------------------
# Sort keys
# ---------------------------------------------------------------------------

def _priority_key(task: Task) -> int:
    return task.priority.ordinal


def _field_key(attribute: str) -> Callable[[Task], tuple]:
    # Missing values (no due date) sort before present ones.
    def key(task: Task) -> tuple:
        value = getattr(task, attribute)
        if value is None:
            return (0,)
        if attribute == "status":
            value = value.value
        return (1, value)

    return key


def sort_key_for(sort_by: str) -> Optional[Callable[[Task], Any]]:
    """Key function for a sortBy value, or None for an unknown field."""
    if sort_by == "priority":
        return _priority_key
    attribute = SORTABLE_FIELDS.get(sort_by)
    if attribute is None:
        return None
    return _field_key(attribute)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def _matches_search(task: Task, needle: str) -> bool:
    return needle in task.title.lower() or needle in (task.description or "").lower()


def query_tasks(tasks: Sequence[Task], params: TaskQuery) -> QueryResult:
    """Apply the filter/search/sort pipeline to a snapshot of tasks.

    Sorting is stable; with no ``sort_by`` (or an unknown field) the
    insertion order of the filtered set is kept. Descending order keeps
    ties in their original relative order as well.
    """
    result = list(tasks)

    if params.status:
        wanted = params.status.lower()
        result = [t for t in result if t.status.value.lower() == wanted]

    if params.priority:
        wanted = params.priority.lower()
        result = [t for t in result if t.priority.value.lower() == wanted]

    if params.search:
        needle = params.search.lower()
        result = [t for t in result if _matches_search(t, needle)]

    if params.sort_by:
        key = sort_key_for(params.sort_by)
        if key is not None:
            result = sorted(result, key=key, reverse=params.descending)

    return QueryResult(data=result, total=len(tasks), filters=params.echo())
