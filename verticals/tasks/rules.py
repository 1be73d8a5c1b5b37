"""Task business rules — pure functions.

Composes the field rules from the rules engine pattern into the payload
validator used on create, replace and patch.
"""

from typing import Any, Mapping

from patterns.domain_config import ValidationLimits
from patterns.rules_engine import (
    RuleSetResult,
    check_max_length,
    check_one_of,
    check_required_text,
    evaluate_rules,
)
from verticals.tasks.models.schemas import TaskPriority, TaskStatus

STATUS_VALUES = [s.value for s in TaskStatus]
PRIORITY_VALUES = [p.value for p in TaskPriority]


def evaluate_task(
    candidate: Mapping[str, Any],
    limits: ValidationLimits = ValidationLimits(),
) -> RuleSetResult:
    """Run every task field rule against a candidate payload.

    All rules run; nothing short-circuits. A too-long title is measured
    before trimming, independent of the required check.
    """
    title = candidate.get("title")
    description = candidate.get("description")
    status = candidate.get("status")
    priority = candidate.get("priority")

    return evaluate_rules(
        check_required_text(title, "title", "Title is required"),
        check_max_length(
            title,
            "title",
            limits.title_max_length,
            f"Title must be less than {limits.title_max_length} characters",
        ),
        check_max_length(
            description,
            "description",
            limits.description_max_length,
            f"Description must be less than {limits.description_max_length} characters",
        ),
        check_one_of(
            status,
            "status",
            STATUS_VALUES,
            f"Status must be one of: {', '.join(STATUS_VALUES)}",
        ),
        check_one_of(
            priority,
            "priority",
            PRIORITY_VALUES,
            f"Priority must be one of: {', '.join(PRIORITY_VALUES)}",
        ),
    )


def validate_task(
    candidate: Mapping[str, Any],
    limits: ValidationLimits = ValidationLimits(),
) -> list[str]:
    """Return the validation error messages for a candidate (empty = valid)."""
    return evaluate_task(candidate, limits).messages
