"""Finalizer: summary statistics and close-out message for a decomposition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from taskorg.integrations import suggest_integrations
from taskorg.models import Assignee, Decomposition, DecompositionSummary, FinalSummary, parse_model
from taskorg.prioritizer import assign_matrix_positions

logger = structlog.get_logger()

NEXT_STEPS = (
    "Review the Eisenhower matrix positions for prioritization",
    "Add important deadlines to your calendar",
    "Consider the suggested integrations",
    "Start with the highest priority tasks",
)


def finalize_decomposition(decomposition: Decomposition | Mapping[str, Any]) -> FinalSummary:
    """Summarize a decomposition once the human is satisfied with it."""
    plan = parse_model(Decomposition, decomposition)
    parent = plan.parent_task
    subtasks = plan.subtasks

    summary = DecompositionSummary(
        total_tasks=len(subtasks) + 1,
        mario_tasks=sum(1 for t in subtasks if t.assignee == Assignee.MARIO),
        maria_tasks=sum(1 for t in subtasks if t.assignee == Assignee.MARIA),
        both_tasks=sum(1 for t in subtasks if t.assignee == Assignee.BOTH),
        deadlines=sum(1 for t in subtasks if t.deadline is not None),
        dependencies=sum(1 for t in subtasks if t.depends_on),
    )
    logger.info("decomposition finalized", task_id=parent.id, total_tasks=summary.total_tasks)

    return FinalSummary(
        parent_task=parent,
        subtasks=subtasks,
        summary=summary,
        matrix_positions=assign_matrix_positions(subtasks),
        integrations=suggest_integrations(parent.name, subtasks),
        next_steps=list(NEXT_STEPS),
        message=(
            f'Perfect! Your task "{parent.name}" has been successfully decomposed '
            f"into {len(subtasks)} manageable subtasks."
        ),
    )
