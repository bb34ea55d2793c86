"""Self-review of a decomposition: completeness and consistency checks.

Each check contributes at most one issue and one follow-up question. Quality
problems are reported, never raised; the caller decides whether to ask the
questions or finish.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from taskorg.clock import Clock, resolve_clock
from taskorg.constants import HIGH_SCORE, MAX_REVIEW_QUESTIONS, URGENT_DEADLINE_WINDOW_DAYS, WORKLOAD_TOLERANCE
from taskorg.dependencies import check_circular_dependencies
from taskorg.models import Assignee, Confidence, Decomposition, ReviewResult, parse_model

logger = structlog.get_logger()

MISSING_DEADLINE = "Missing deadline for parent task"
MISSING_FIRST_STEP = "Missing first step"
BUDGET_NOT_CONSIDERED = "Budget not considered"
UNBALANCED_WORKLOAD = "Unbalanced workload"
UNREALISTIC_DEADLINES = "Potentially unrealistic urgent deadlines"
CIRCULAR_DEPENDENCIES = "Circular dependencies detected"

QUESTIONS: dict[str, str] = {
    MISSING_DEADLINE: "What's the overall deadline for this task?",
    MISSING_FIRST_STEP: "What would be a good first step to get started?",
    BUDGET_NOT_CONSIDERED: "What's your budget for this task?",
    UNBALANCED_WORKLOAD: "Would you prefer to balance the workload differently between Mario and Maria?",
    UNREALISTIC_DEADLINES: "Are these urgent deadlines realistic given the task complexity?",
    CIRCULAR_DEPENDENCIES: "Can you clarify the dependency relationships between these tasks?",
}

SUGGESTIONS: dict[str, str] = {
    UNBALANCED_WORKLOAD: "Consider redistributing some tasks to balance the workload",
    UNREALISTIC_DEADLINES: "Consider extending some deadlines or reducing urgency levels",
    MISSING_DEADLINE: "Setting a clear deadline helps with prioritization",
}

BUDGET_KEYWORDS = ("buy", "purchase", "cost", "budget")


def calculate_confidence(issues: Sequence[str]) -> Confidence:
    """High with no issues, medium with one or two, low otherwise."""
    if not issues:
        return Confidence.HIGH
    if len(issues) <= 2:
        return Confidence.MEDIUM
    return Confidence.LOW


def generate_suggestions(issues: Sequence[str]) -> list[str]:
    """Return remediation hints for the issues that have one, in table order."""
    return [hint for issue, hint in SUGGESTIONS.items() if issue in issues]


def review_decomposition(
    decomposition: Decomposition | Mapping[str, Any],
    lenient: bool = False,
    *,
    clock: Clock | None = None,
) -> ReviewResult:
    """Run the review checks over *decomposition*.

    ``lenient`` suppresses the missing-deadline and missing-first-step checks,
    which is what a refinement round wants once the human has had a chance to
    answer. Questions are capped at four here; any tighter cap belongs to the
    caller.
    """
    plan = parse_model(Decomposition, decomposition)
    parent = plan.parent_task
    subtasks = plan.subtasks
    today = resolve_clock(clock).now().date()
    issues: list[str] = []

    if not lenient and parent.deadline is None:
        issues.append(MISSING_DEADLINE)

    if not lenient and not parent.first_step:
        issues.append(MISSING_FIRST_STEP)

    name = parent.name.lower()
    if any(word in name for word in BUDGET_KEYWORDS):
        criteria = (parent.completion_criteria or "").lower()
        if "budget" not in criteria:
            issues.append(BUDGET_NOT_CONSIDERED)

    mario = sum(1 for t in subtasks if t.assignee == Assignee.MARIO)
    maria = sum(1 for t in subtasks if t.assignee == Assignee.MARIA)
    if abs(mario - maria) > WORKLOAD_TOLERANCE:
        issues.append(UNBALANCED_WORKLOAD)

    rushed = [
        t
        for t in subtasks
        if t.urgent >= HIGH_SCORE
        and t.deadline is not None
        and (t.deadline - today).days < URGENT_DEADLINE_WINDOW_DAYS
    ]
    if rushed:
        issues.append(UNREALISTIC_DEADLINES)

    if check_circular_dependencies(subtasks):
        issues.append(CIRCULAR_DEPENDENCIES)

    confidence = calculate_confidence(issues)
    logger.debug(
        "decomposition reviewed",
        task_id=parent.id,
        lenient=lenient,
        issue_count=len(issues),
        confidence=confidence.value,
    )
    return ReviewResult(
        is_complete=not issues,
        confidence=confidence,
        issues=issues,
        questions=[QUESTIONS[issue] for issue in issues][:MAX_REVIEW_QUESTIONS],
        suggestions=generate_suggestions(issues),
    )
