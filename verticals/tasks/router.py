"""Task API router — CRUD, query and stats endpoints.

Follows the standard router pattern:
- Store injection via FastAPI Depends
- Per-endpoint pydantic request bodies
- Field rules from verticals.tasks.rules
- Errors raised as exceptions, rendered by the app's exception handlers
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic.alias_generators import to_camel

from patterns.domain_config import TaskTrackerConfig
from verticals.tasks.errors import TaskNotFoundError, TaskValidationError
from verticals.tasks.models.schemas import TaskCreate, TaskPatch, TaskReplace
from verticals.tasks.query import TaskQuery, query_tasks
from verticals.tasks.repository import TaskStore, get_task_store
from verticals.tasks.rules import validate_task
from verticals.tasks.stats import compute_stats

router = APIRouter()


def get_config(request: Request) -> TaskTrackerConfig:
    """FastAPI dependency for the app configuration."""
    return request.app.state.config


TASK_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_task_id(task_id: str) -> int:
    """Path ids are plain decimal integers; anything else is an unknown task."""
    if not TASK_ID_PATTERN.fullmatch(task_id):
        raise TaskNotFoundError(task_id)
    return int(task_id)


# ============================================================================
# Task Endpoints
# ============================================================================

@router.get("/tasks")
async def list_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = None,
    store: TaskStore = Depends(get_task_store),
):
    """List tasks with filtering, search and sorting."""
    params = TaskQuery(
        status=status,
        priority=priority,
        search=search,
        sort_by=sort_by,
        order=order,
    )
    result = query_tasks(store.all(), params)
    return {
        "success": True,
        "count": result.count,
        "total": result.total,
        "filters": result.filters,
        "data": [t.to_wire() for t in result.data],
    }


@router.get("/tasks/{task_id}")
async def get_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
):
    task = store.get(parse_task_id(task_id))
    return {"success": True, "data": task.to_wire()}


@router.post("/tasks", status_code=201)
async def create_task(
    request: TaskCreate,
    store: TaskStore = Depends(get_task_store),
    config: TaskTrackerConfig = Depends(get_config),
):
    """Create a task; omitted optional fields take their defaults."""
    payload = request.to_payload()
    errors = validate_task(payload, config.limits)
    if errors:
        raise TaskValidationError(errors)
    task = store.insert(payload)
    return {
        "success": True,
        "message": "Task created successfully",
        "data": task.to_wire(),
    }


@router.put("/tasks/{task_id}")
async def replace_task(
    task_id: str,
    request: TaskReplace,
    store: TaskStore = Depends(get_task_store),
    config: TaskTrackerConfig = Depends(get_config),
):
    """Replace a task. Omitted optional fields are reset to defaults."""
    task = store.replace(
        parse_task_id(task_id),
        request.to_payload(),
        validate=lambda candidate: validate_task(candidate, config.limits),
    )
    return {
        "success": True,
        "message": "Task updated successfully",
        "data": task.to_wire(),
    }


@router.patch("/tasks/{task_id}")
async def patch_task(
    task_id: str,
    request: TaskPatch,
    store: TaskStore = Depends(get_task_store),
    config: TaskTrackerConfig = Depends(get_config),
):
    """Update only the supplied fields."""
    task, applied = store.patch(
        parse_task_id(task_id),
        request.to_changes(),
        validate=lambda candidate: validate_task(candidate, config.limits),
    )
    return {
        "success": True,
        "message": "Task updated successfully",
        "data": task.to_wire(),
        "updated": [to_camel(name) for name in applied],
    }


@router.delete("/tasks/{task_id}")
async def delete_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
):
    """Remove a task and return it."""
    task = store.delete(parse_task_id(task_id))
    return {
        "success": True,
        "message": "Task deleted successfully",
        "data": task.to_wire(),
    }


# ============================================================================
# Stats Endpoint
# ============================================================================

@router.get("/stats")
async def get_stats(store: TaskStore = Depends(get_task_store)):
    """Counts, overdue tasks and completion rate over every task."""
    stats = compute_stats(store.all(), store.now())
    return {"success": True, "data": stats.to_dict()}
