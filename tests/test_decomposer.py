"""Tests for the decomposition engine."""

from __future__ import annotations

import random
from datetime import date

import pytest

from taskorg.clock import FixedClock
from taskorg.config import PlannerSettings
from taskorg.decomposer import decompose_task
from taskorg.deadlines import calculate_deadline
from taskorg.errors import ValidationError
from taskorg.models import Assignee, Size, TaskDescription

from tests.conftest import NOW


def test_decompose_minimal_description(clock: FixedClock, rng: random.Random) -> None:
    """Only a name is required; parent defaults are applied."""
    result = decompose_task({"name": "Plan vacation"}, clock=clock, rng=rng)
    parent = result.parent_task

    assert parent.name == "Plan vacation"
    assert parent.assignee == Assignee.BOTH
    assert parent.size == Size.XL
    assert parent.urgent == 3
    assert parent.important == 3
    assert parent.completed is False
    assert parent.deadline is None
    assert parent.depends_on is None
    assert parent.parent_task_id is None
    assert parent.created_at == NOW
    assert 3 <= len(result.subtasks) <= 6
    assert result.message == f'Task "Plan vacation" has been decomposed into {len(result.subtasks)} subtasks.'


def test_subtask_count_covers_three_to_six(clock: FixedClock) -> None:
    counts = {len(decompose_task({"name": "T"}, clock=clock, rng=random.Random(seed)).subtasks) for seed in range(200)}
    assert counts == {3, 4, 5, 6}


def test_subtask_structure(clock: FixedClock, rng: random.Random) -> None:
    result = decompose_task({"name": "Plan vacation"}, clock=clock, rng=rng)
    parent = result.parent_task

    for i, subtask in enumerate(result.subtasks):
        assert subtask.parent_task_id == parent.id
        assert subtask.completed is False
        assert subtask.assignee == (Assignee.MARIO if i % 2 == 0 else Assignee.MARIA)
        assert subtask.size in (Size.S, Size.M, Size.L)
        assert 2 <= subtask.urgent <= 4
        assert 2 <= subtask.important <= 4
        assert subtask.name == f'Subtask {i + 1} for "Plan vacation"'
        assert subtask.deadline is None


def test_subtasks_form_a_strict_chain(clock: FixedClock, rng: random.Random) -> None:
    subtasks = decompose_task({"name": "T"}, clock=clock, rng=rng).subtasks

    assert subtasks[0].depends_on is None
    for previous, current in zip(subtasks, subtasks[1:], strict=False):
        assert current.depends_on == [previous.id]


def test_ids_are_unique_and_come_from_the_clock(clock: FixedClock, rng: random.Random) -> None:
    result = decompose_task({"name": "T"}, clock=clock, rng=rng)
    ids = [result.parent_task.id] + [t.id for t in result.subtasks]

    assert result.parent_task.id == "task_1"
    assert len(set(ids)) == len(ids)


def test_optional_fields_and_deadlines(clock: FixedClock, rng: random.Random) -> None:
    description = {
        "name": "Plan family vacation to Europe",
        "assignee": "mario",
        "urgent": 10,
        "important": 4,
        "deadline": "2026-08-15",
        "icon": "🎯",
        "firstStep": "Research destinations",
        "completionCriteria": "Booked flights and accommodation",
    }
    result = decompose_task(description, clock=clock, rng=rng)
    parent = result.parent_task

    assert parent.assignee == Assignee.MARIO
    assert parent.urgent == 5
    assert parent.important == 4
    assert parent.icon == "🎯"
    assert parent.first_step == "Research destinations"
    assert parent.completion_criteria == "Booked flights and accommodation"
    assert parent.deadline == date(2026, 8, 15)
    for i, subtask in enumerate(result.subtasks):
        assert subtask.deadline == calculate_deadline(i, "2026-08-15")


def test_accepts_task_description_model(clock: FixedClock, rng: random.Random) -> None:
    result = decompose_task(TaskDescription(name="Write thesis"), clock=clock, rng=rng)
    assert result.parent_task.name == "Write thesis"


def test_organization_id_is_propagated(clock: FixedClock, rng: random.Random) -> None:
    result = decompose_task({"name": "T"}, "org_123", clock=clock, rng=rng)

    assert result.parent_task.organization_id == "org_123"
    assert all(t.organization_id == "org_123" for t in result.subtasks)


def test_matrix_positions_and_integrations(clock: FixedClock, rng: random.Random) -> None:
    result = decompose_task({"name": "Buy tickets for the event"}, clock=clock, rng=rng)

    assert [p.task_id for p in result.matrix_positions] == [t.id for t in result.subtasks]
    assert [(s.type, s.action) for s in result.integrations] == [("calendar", "schedule"), ("shopping", "add_items")]


@pytest.mark.parametrize("description", [None, {}, {"name": ""}, {"assignee": "mario"}])
def test_missing_name_raises(description: dict | None) -> None:
    with pytest.raises(ValidationError, match="Task name is required for decomposition"):
        decompose_task(description)


@pytest.mark.parametrize("description", ["Plan party", ["Plan party"], 42])
def test_non_mapping_description_raises(description: object) -> None:
    with pytest.raises(ValidationError, match="Task description must be a mapping"):
        decompose_task(description)  # type: ignore[arg-type]


def test_invalid_assignee_raises() -> None:
    with pytest.raises(ValidationError, match="Assignee must be one of: mario, maria, both"):
        decompose_task({"name": "T", "assignee": "luigi"})


def test_subtask_count_follows_settings(
    monkeypatch: pytest.MonkeyPatch, clock: FixedClock, rng: random.Random
) -> None:
    monkeypatch.setenv("TASKORG_MIN_SUBTASKS", "4")
    monkeypatch.setenv("TASKORG_MAX_SUBTASKS", "4")
    result = decompose_task({"name": "T"}, clock=clock, rng=rng, settings=PlannerSettings())
    assert len(result.subtasks) == 4


def test_subtask_count_ignores_out_of_range_settings(monkeypatch: pytest.MonkeyPatch, clock: FixedClock) -> None:
    """A misconfigured environment never pushes the count outside 3-6."""
    monkeypatch.setenv("TASKORG_MIN_SUBTASKS", "9")
    monkeypatch.setenv("TASKORG_MAX_SUBTASKS", "12")
    settings = PlannerSettings()
    counts = {
        len(decompose_task({"name": "X"}, clock=clock, rng=random.Random(seed), settings=settings).subtasks)
        for seed in range(20)
    }
    assert counts == {6}


def test_same_seed_same_plan() -> None:
    first = decompose_task({"name": "T"}, clock=FixedClock(NOW), rng=random.Random(7))
    second = decompose_task({"name": "T"}, clock=FixedClock(NOW), rng=random.Random(7))
    assert first == second
