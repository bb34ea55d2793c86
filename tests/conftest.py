"""Shared fixtures for the planner test suite."""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any

import pytest

from taskorg.clock import FixedClock
from taskorg.models import Decomposition, Task

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)
TODAY = date(2026, 3, 10)


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW with ids task_1, task_2, ..."""
    return FixedClock(NOW)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks with sensible defaults; any field can be overridden."""

    def _make(task_id: str = "t1", **overrides: Any) -> Task:
        fields: dict[str, Any] = {
            "id": task_id,
            "name": f"Task {task_id}",
            "assignee": "mario",
            "size": "m",
            "created_at": NOW,
        }
        fields.update(overrides)
        return Task.model_validate(fields)

    return _make


@pytest.fixture
def make_plan(make_task: Callable[..., Task]) -> Callable[..., Decomposition]:
    """Factory for a decomposition from parent overrides and a subtask list.

    Subtasks without a parent link are attached to the parent.
    """

    def _make(subtasks: list[Task] | None = None, **parent_overrides: Any) -> Decomposition:
        parent_fields: dict[str, Any] = {"name": "Parent task", "assignee": "both", "size": "xl"}
        parent_fields.update(parent_overrides)
        parent = make_task("parent", **parent_fields)
        linked = [
            task if task.parent_task_id is not None else task.model_copy(update={"parent_task_id": parent.id})
            for task in subtasks or []
        ]
        return Decomposition(parent_task=parent, subtasks=linked)

    return _make
