"""Decomposition engine: turns one large task into a chain of subtasks.

Subtask content is placeholder text; the structure (count, ids, assignees,
scores, deadlines and the dependency chain) is what the rest of the pipeline
works on.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

import structlog

from taskorg.clock import Clock, resolve_clock
from taskorg.config import PlannerSettings
from taskorg.constants import PARENT_ICON, SUBTASK_ICON, SUBTASK_SCORE_RANGE
from taskorg.deadlines import calculate_deadline
from taskorg.dependencies import sequential_chain
from taskorg.errors import ValidationError
from taskorg.integrations import suggest_integrations
from taskorg.models import Assignee, Decomposition, Size, Task, TaskDescription, check_assignee, parse_model
from taskorg.prioritizer import assign_matrix_positions

logger = structlog.get_logger()

SUBTASK_SIZES = (Size.S, Size.M, Size.L)


def _coerce_description(description: TaskDescription | Mapping[str, Any] | None) -> TaskDescription:
    if isinstance(description, TaskDescription):
        return description
    if description is not None and not isinstance(description, Mapping):
        raise ValidationError("Task description must be a mapping with a name")
    if not description or not description.get("name"):
        raise ValidationError("Task name is required for decomposition")
    if description.get("assignee") is not None:
        check_assignee(description["assignee"])
    return parse_model(TaskDescription, dict(description))


def decompose_task(
    description: TaskDescription | Mapping[str, Any] | None,
    organization_id: str | None = None,
    *,
    clock: Clock | None = None,
    rng: random.Random | None = None,
    settings: PlannerSettings | None = None,
) -> Decomposition:
    """Build a parent task and 3-6 chained subtasks from a task description.

    Raises ValidationError when the description or its name is missing.
    """
    desc = _coerce_description(description)
    clock = resolve_clock(clock)
    rng = rng or random.Random()
    settings = settings or PlannerSettings()

    created_at = clock.now()
    parent = Task(
        id=clock.new_id(),
        name=desc.name,
        assignee=desc.assignee,
        size=Size.XL,
        urgent=desc.urgent,
        important=desc.important,
        icon=desc.icon or PARENT_ICON,
        first_step=desc.first_step,
        completion_criteria=desc.completion_criteria,
        deadline=desc.deadline,
        created_at=created_at,
        organization_id=organization_id,
    )

    count = rng.randint(settings.min_subtasks, settings.max_subtasks)
    low, high = SUBTASK_SCORE_RANGE
    subtasks: list[Task] = []
    for i in range(count):
        subtasks.append(
            Task(
                id=clock.new_id(),
                name=f'Subtask {i + 1} for "{desc.name}"',
                assignee=Assignee.MARIO if i % 2 == 0 else Assignee.MARIA,
                size=rng.choice(SUBTASK_SIZES),
                urgent=rng.randint(low, high),
                important=rng.randint(low, high),
                icon=SUBTASK_ICON,
                first_step=f"Start working on subtask {i + 1}",
                completion_criteria=f"Complete subtask {i + 1} requirements",
                deadline=calculate_deadline(i, desc.deadline),
                parent_task_id=parent.id,
                created_at=created_at,
                organization_id=organization_id,
            )
        )
    subtasks = sequential_chain(subtasks)

    logger.info(
        "task decomposed",
        task_id=parent.id,
        subtask_count=len(subtasks),
        organization_id=organization_id,
    )
    return Decomposition(
        parent_task=parent,
        subtasks=subtasks,
        message=f'Task "{desc.name}" has been decomposed into {len(subtasks)} subtasks.',
        matrix_positions=assign_matrix_positions(subtasks),
        integrations=suggest_integrations(desc.name, subtasks),
    )
