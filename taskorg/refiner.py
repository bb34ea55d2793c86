"""Refinement: apply the human's answers to a decomposition.

Answers are matched by keywords in the question text and applied in order,
so a later answer can override an earlier one. The input decomposition is
never modified; a new one is returned.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

import structlog

from taskorg.clock import Clock
from taskorg.constants import DEADLINE_EXTENSION_DAYS, HIGH_SCORE
from taskorg.deadlines import calculate_deadline, parse_deadline
from taskorg.dependencies import sequential_chain
from taskorg.integrations import suggest_integrations
from taskorg.models import Answer, Assignee, Decomposition, Task, parse_model
from taskorg.prioritizer import assign_matrix_positions

logger = structlog.get_logger()


def _mentions(text: str, *words: str) -> bool:
    return any(word in text for word in words)


def _reassign_first(subtasks: list[Task], source: Assignee, target: Assignee) -> list[Task]:
    """Move the first subtask assigned to *source* over to *target*."""
    for index, subtask in enumerate(subtasks):
        if subtask.assignee == source:
            updated = list(subtasks)
            updated[index] = subtask.model_copy(update={"assignee": target})
            return updated
    return subtasks


def _extend_urgent_deadlines(subtasks: list[Task]) -> list[Task]:
    extended: list[Task] = []
    for subtask in subtasks:
        if subtask.urgent >= HIGH_SCORE and subtask.deadline is not None:
            subtask = subtask.model_copy(
                update={"deadline": subtask.deadline + timedelta(days=DEADLINE_EXTENSION_DAYS)}
            )
        extended.append(subtask)
    return extended


def refine_decomposition(
    decomposition: Decomposition | Mapping[str, Any],
    answers: Iterable[Answer | Mapping[str, Any]],
    *,
    clock: Clock | None = None,
) -> Decomposition:
    """Return a new decomposition with *answers* applied.

    When the parent deadline ends up different from where it started, every
    subtask deadline is recomputed from it, which discards any per-subtask
    extensions made by earlier answers in the same call.
    """
    original = parse_model(Decomposition, decomposition)
    parent = original.parent_task
    subtasks = list(original.subtasks)
    applied = 0

    for raw in answers:
        answer = parse_model(Answer, raw)
        question = answer.question.lower()
        response = answer.response.lower()
        matched = False

        if _mentions(question, "deadline", "when") and "overall" in question:
            parent = parent.model_copy(update={"deadline": parse_deadline(response, clock)})
            matched = True

        if _mentions(question, "budget", "cost"):
            budget = f"Budget: {answer.response}"
            criteria = f"{parent.completion_criteria}. {budget}" if parent.completion_criteria else budget
            parent = parent.model_copy(update={"completion_criteria": criteria})
            matched = True

        if _mentions(question, "balance", "workload"):
            if "mario" in response:
                subtasks = _reassign_first(subtasks, Assignee.MARIA, Assignee.MARIO)
            elif "maria" in response:
                subtasks = _reassign_first(subtasks, Assignee.MARIO, Assignee.MARIA)
            matched = True

        if _mentions(question, "first step", "start"):
            parent = parent.model_copy(update={"first_step": answer.response})
            matched = True

        if _mentions(question, "realistic", "urgent") and _mentions(response, "no", "extend"):
            subtasks = _extend_urgent_deadlines(subtasks)
            matched = True

        if _mentions(question, "dependency", "order"):
            subtasks = sequential_chain(subtasks)
            matched = True

        if matched:
            applied += 1
        else:
            logger.debug("answer did not match any refinement rule", question=answer.question)

    if parent.deadline is not None and parent.deadline != original.parent_task.deadline:
        subtasks = [
            subtask.model_copy(update={"deadline": calculate_deadline(index, parent.deadline)})
            for index, subtask in enumerate(subtasks)
        ]

    logger.info("decomposition refined", task_id=parent.id, answer_count=applied)
    return Decomposition(
        parent_task=parent,
        subtasks=subtasks,
        message="Decomposition refined based on your answers.",
        matrix_positions=assign_matrix_positions(subtasks),
        integrations=suggest_integrations(parent.name, subtasks),
    )
