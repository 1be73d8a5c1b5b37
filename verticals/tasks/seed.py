"""Demo tasks loaded into a fresh store at startup (ids 1-3)."""

from datetime import datetime, timezone

from verticals.tasks.models.schemas import Task, TaskPriority, TaskStatus


def _at(day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2025, 9, day, hour, minute, second, tzinfo=timezone.utc)


def demo_tasks() -> list[Task]:
    return [
        Task(
            id=1,
            title="Setup Docker Environment",
            description="Configure Docker for the task tracker service",
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.HIGH,
            created_at=_at(12, 10),
            updated_at=_at(12, 10, 30),
            due_date=_at(15, 23, 59, 59),
        ),
        Task(
            id=2,
            title="Implement CRUD API",
            description="Create RESTful API with full CRUD operations",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            created_at=_at(12, 11),
            updated_at=_at(12, 11),
            due_date=_at(16, 23, 59, 59),
        ),
        Task(
            id=3,
            title="Write Documentation",
            description="Document all API endpoints and usage examples",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            created_at=_at(12, 12),
            updated_at=_at(12, 12),
            due_date=_at(17, 23, 59, 59),
        ),
    ]
