"""Single-task helpers: create, split, update and query.

These share the field rules of the decomposition pipeline: assignee and size
must come from their label sets and scores are clamped into [1, 5].
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from taskorg.clock import Clock, resolve_clock
from taskorg.constants import PARENT_ICON
from taskorg.errors import ValidationError
from taskorg.models import (
    Assignee,
    Size,
    SplitDescription,
    SplitResult,
    Task,
    TaskFilters,
    TaskQueryResult,
    UpdateResult,
    check_assignee,
    check_size,
    clamp_score,
    parse_model,
)
from taskorg.store import InMemoryTaskStore, TaskStore, sample_tasks

logger = structlog.get_logger()

UPDATABLE_FIELDS = (
    "name",
    "assignee",
    "size",
    "urgent",
    "important",
    "completed",
    "icon",
    "first_step",
    "completion_criteria",
)

# Stands in for the stored task when a split target cannot be looked up.
_PLACEHOLDER_ORIGINAL = {
    "name": "Original Task",
    "assignee": Assignee.MARIO,
    "size": Size.M,
    "urgent": 3,
    "important": 3,
    "icon": PARENT_ICON,
}

_default_store: InMemoryTaskStore | None = None


def _get_default_store() -> InMemoryTaskStore:
    global _default_store
    if _default_store is None:
        _default_store = InMemoryTaskStore(sample_tasks())
    return _default_store


def create_task(data: Mapping[str, Any], *, clock: Clock | None = None) -> Task:
    """Create a standalone task. ``name`` and ``assignee`` are required."""
    if not isinstance(data, Mapping) or not data.get("name") or not data.get("assignee"):
        raise ValidationError("Task name and assignee are required")
    assignee = check_assignee(data["assignee"])
    size = check_size(data["size"]) if data.get("size") else Size.M

    clock = resolve_clock(clock)
    task = Task(
        id=clock.new_id(),
        name=data["name"],
        assignee=assignee,
        size=size,
        urgent=clamp_score(data.get("urgent")),
        important=clamp_score(data.get("important")),
        icon=data.get("icon") or None,
        first_step=data.get("first_step") or None,
        completion_criteria=data.get("completion_criteria") or None,
        created_at=clock.now(),
        organization_id=data.get("organization_id"),
    )
    logger.info("task created", task_id=task.id, assignee=task.assignee.value)
    return task


def split_task(
    task_id: str | None,
    split: SplitDescription | Mapping[str, Any] | None,
    *,
    store: TaskStore | None = None,
    clock: Clock | None = None,
) -> SplitResult:
    """Split a task into two new tasks that inherit its assignee and scores."""
    if not task_id:
        raise ValidationError("Task ID is required")
    if not isinstance(split, SplitDescription):
        if not isinstance(split, Mapping) or not split.get("part1") or not split.get("part2"):
            raise ValidationError("Split description must include both part1 and part2 task names")
        for key in ("size1", "size2"):
            if split.get(key):
                check_size(split[key])
        split = parse_model(SplitDescription, dict(split))

    original = store.get(task_id) if store is not None else None
    if original is None:
        logger.debug("split target not found, using placeholder", task_id=task_id)
        base: dict[str, Any] = dict(_PLACEHOLDER_ORIGINAL)
        organization_id = None
    else:
        base = original.model_dump(include={"name", "assignee", "size", "urgent", "important", "icon"})
        organization_id = original.organization_id

    clock = resolve_clock(clock)
    parts = (
        (split.part1, split.size1, split.first_step1, split.completion_criteria1),
        (split.part2, split.size2, split.first_step2, split.completion_criteria2),
    )
    new_tasks = [
        Task(
            id=clock.new_id(),
            name=name,
            assignee=base["assignee"],
            size=size or base["size"],
            urgent=base["urgent"],
            important=base["important"],
            icon=base["icon"],
            first_step=first_step,
            completion_criteria=criteria,
            created_at=clock.now(),
            organization_id=organization_id,
        )
        for name, size, first_step, criteria in parts
    ]
    logger.info("task split", task_id=task_id, new_task_ids=[t.id for t in new_tasks])
    return SplitResult(
        original_task_id=task_id,
        new_tasks=new_tasks,
        message=f'Task "{base["name"]}" has been split into two tasks.',
    )


def update_task(
    task_id: str | None,
    updates: Mapping[str, Any],
    *,
    store: TaskStore | None = None,
) -> UpdateResult:
    """Validate a partial update. Only fields present in *updates* are kept.

    When a store is given and holds the task, the updated task is written back.
    """
    if not task_id:
        raise ValidationError("Task ID is required")
    if not isinstance(updates, Mapping):
        raise ValidationError("Updates must be a mapping of field names to values")

    valid: dict[str, Any] = {}
    for field in UPDATABLE_FIELDS:
        if field not in updates:
            continue
        value = updates[field]
        if field == "name":
            if not value:
                raise ValidationError("Task name cannot be empty")
        elif field == "assignee":
            value = check_assignee(value).value
        elif field == "size":
            value = check_size(value).value
        elif field in ("urgent", "important"):
            value = clamp_score(value)
        elif field == "completed":
            value = bool(value)
        valid[field] = value

    if store is not None:
        current = store.get(task_id)
        if current is not None:
            store.put(parse_model(Task, {**current.model_dump(), **valid}))

    logger.info("task updated", task_id=task_id, fields=sorted(valid))
    changed = ", ".join(valid) if valid else "no fields"
    return UpdateResult(task_id=task_id, updates=valid, message=f"Task {task_id} updated: {changed}.")


def get_tasks(
    filters: TaskFilters | Mapping[str, Any] | None = None,
    organization_id: str | None = None,
    *,
    store: TaskStore | None = None,
) -> TaskQueryResult:
    """Query stored tasks. Score filters are minimums; the others match exactly."""
    if filters is None:
        filters = TaskFilters()
    elif not isinstance(filters, TaskFilters):
        if not isinstance(filters, Mapping):
            raise ValidationError("Filters must be a mapping")
        if filters.get("assignee") is not None:
            check_assignee(filters["assignee"])
        filters = parse_model(TaskFilters, dict(filters))

    source = store if store is not None else _get_default_store()
    tasks = source.all(organization_id)
    if filters.assignee is not None:
        tasks = [t for t in tasks if t.assignee == filters.assignee]
    if filters.completed is not None:
        tasks = [t for t in tasks if t.completed == filters.completed]
    if filters.urgent is not None:
        tasks = [t for t in tasks if t.urgent >= filters.urgent]
    if filters.important is not None:
        tasks = [t for t in tasks if t.important >= filters.important]

    return TaskQueryResult(
        tasks=tasks,
        count=len(tasks),
        filters=filters,
        message=f"Found {len(tasks)} tasks matching filters",
    )
