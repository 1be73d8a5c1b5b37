"""Pure-function rules engine pattern.

Rules are stateless functions: (value, constraint) -> RuleResult.
No store access, no side effects. This makes them:
- Trivially testable (pure input/output)
- Composable (every rule runs, failures are collected in one pass)
- Auditable (deterministic, explainable)

The task vertical composes these field rules into its payload validator.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def messages(self) -> list[str]:
        """Messages of the failed rules, in evaluation order."""
        return [r.message for r in self.failed]


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

def check_required_text(value: Any, field_name: str, message: str) -> RuleResult:
    """Fail when a text field is missing or blank after trimming."""
    passed = isinstance(value, str) and len(value.strip()) > 0
    return RuleResult(
        passed=passed,
        rule_name=f"{field_name}_required",
        message="OK" if passed else message,
        details={"field": field_name},
    )


def check_max_length(
    value: Any, field_name: str, max_length: int, message: str
) -> RuleResult:
    """Fail when a supplied text value is longer than max_length.

    The raw value is measured; trimming happens later, on write.
    Missing or empty values pass.
    """
    length = len(value) if isinstance(value, str) else 0
    passed = length <= max_length
    return RuleResult(
        passed=passed,
        rule_name=f"{field_name}_max_length",
        message="OK" if passed else message,
        details={"field": field_name, "length": length, "max_length": max_length},
    )


def check_one_of(
    value: Any, field_name: str, allowed: Iterable[str], message: str
) -> RuleResult:
    """Fail when a supplied value is not one of the allowed values.

    Missing or empty values pass; defaulting is someone else's job.
    """
    allowed = list(allowed)
    passed = not value or value in allowed
    return RuleResult(
        passed=passed,
        rule_name=f"{field_name}_one_of",
        message="OK" if passed else message,
        details={"field": field_name, "value": value, "allowed": allowed},
    )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rules: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate.

    Example::

        result = evaluate_rules(
            check_required_text(title, "title", "Title is required"),
            check_max_length(title, "title", 100, "Title too long"),
        )
        if not result.all_passed:
            raise TaskValidationError(result.messages)
    """
    return RuleSetResult(
        all_passed=all(r.passed for r in rules),
        results=list(rules),
    )
