"""Stats aggregator — counts and derived metrics over the whole store."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from verticals.tasks.models.schemas import Task, TaskPriority, TaskStatus


@dataclass
class TaskStats:
    total_tasks: int
    status_breakdown: dict[str, int] = field(default_factory=dict)
    priority_breakdown: dict[str, int] = field(default_factory=dict)
    overdue_tasks: int = 0
    completion_rate: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTasks": self.total_tasks,
            "statusBreakdown": self.status_breakdown,
            "priorityBreakdown": self.priority_breakdown,
            "overdueTasks": self.overdue_tasks,
            "completionRate": self.completion_rate,
        }


def count_by_status(tasks: Sequence[Task]) -> dict[str, int]:
    """Count per status, with an explicit zero for every status."""
    counts = {s.value: 0 for s in TaskStatus}
    for task in tasks:
        counts[task.status.value] += 1
    return counts


def count_by_priority(tasks: Sequence[Task]) -> dict[str, int]:
    counts = {p.value: 0 for p in TaskPriority}
    for task in tasks:
        counts[task.priority.value] += 1
    return counts


def is_overdue(task: Task, now: datetime) -> bool:
    """Due date strictly in the past and not completed.

    Cancelled tasks past their due date count as overdue.
    """
    return (
        task.due_date is not None
        and task.due_date < now
        and task.status is not TaskStatus.COMPLETED
    )


def completion_rate(completed: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 for an empty store."""
    if total == 0:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def compute_stats(tasks: Sequence[Task], now: datetime) -> TaskStats:
    by_status = count_by_status(tasks)
    return TaskStats(
        total_tasks=len(tasks),
        status_breakdown=by_status,
        priority_breakdown=count_by_priority(tasks),
        overdue_tasks=sum(1 for t in tasks if is_overdue(t, now)),
        completion_rate=completion_rate(
            by_status[TaskStatus.COMPLETED.value], len(tasks)
        ),
    )
