"""Tests for the decomposition reviewer."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta

import pytest

from taskorg.clock import FixedClock
from taskorg.models import Confidence, Decomposition, Task
from taskorg.reviewer import (
    BUDGET_NOT_CONSIDERED,
    CIRCULAR_DEPENDENCIES,
    MISSING_DEADLINE,
    MISSING_FIRST_STEP,
    QUESTIONS,
    UNBALANCED_WORKLOAD,
    UNREALISTIC_DEADLINES,
    calculate_confidence,
    generate_suggestions,
    review_decomposition,
)
from tests.conftest import TODAY

PlanFactory = Callable[..., Decomposition]
TaskFactory = Callable[..., Task]


@pytest.fixture
def complete_kwargs() -> dict:
    return {"deadline": TODAY + timedelta(days=30), "first_step": "Open the calendar"}


def test_complete_plan(make_plan: PlanFactory, make_task: TaskFactory, complete_kwargs: dict, clock: FixedClock) -> None:
    subtasks = [make_task("a", assignee="mario"), make_task("b", assignee="maria", depends_on=["a"])]
    review = review_decomposition(make_plan(subtasks, **complete_kwargs), clock=clock)

    assert review.is_complete is True
    assert review.confidence == Confidence.HIGH
    assert review.issues == []
    assert review.questions == []
    assert review.suggestions == []


def test_missing_deadline_and_first_step(make_plan: PlanFactory, clock: FixedClock) -> None:
    review = review_decomposition(make_plan(), clock=clock)

    assert review.issues == [MISSING_DEADLINE, MISSING_FIRST_STEP]
    assert review.questions == [QUESTIONS[MISSING_DEADLINE], QUESTIONS[MISSING_FIRST_STEP]]
    assert review.confidence == Confidence.MEDIUM
    assert review.is_complete is False
    assert review.suggestions == ["Setting a clear deadline helps with prioritization"]


def test_lenient_suppresses_parent_checks(make_plan: PlanFactory, clock: FixedClock) -> None:
    plan = make_plan(name="Buy expensive item")
    strict = review_decomposition(plan, clock=clock)
    lenient = review_decomposition(plan, lenient=True, clock=clock)

    assert lenient.issues == [BUDGET_NOT_CONSIDERED]
    assert len(lenient.issues) <= len(strict.issues)


def test_budget_issue_for_purchases(make_plan: PlanFactory, complete_kwargs: dict, clock: FixedClock) -> None:
    review = review_decomposition(make_plan(name="Buy supplies", **complete_kwargs), clock=clock)
    assert review.issues == [BUDGET_NOT_CONSIDERED]
    assert review.questions == ["What's your budget for this task?"]


def test_budget_mentioned_in_criteria(make_plan: PlanFactory, complete_kwargs: dict, clock: FixedClock) -> None:
    plan = make_plan(name="Purchase a car", completion_criteria="Car bought. Budget: $20k", **complete_kwargs)
    assert review_decomposition(plan, clock=clock).issues == []


def test_unbalanced_workload(
    make_plan: PlanFactory, make_task: TaskFactory, complete_kwargs: dict, clock: FixedClock
) -> None:
    subtasks = [make_task(str(i), assignee="mario") for i in range(4)] + [make_task("m", assignee="maria")]
    review = review_decomposition(make_plan(subtasks, **complete_kwargs), clock=clock)

    assert review.issues == [UNBALANCED_WORKLOAD]
    assert review.suggestions == ["Consider redistributing some tasks to balance the workload"]


def test_difference_of_one_is_balanced(
    make_plan: PlanFactory, make_task: TaskFactory, complete_kwargs: dict, clock: FixedClock
) -> None:
    subtasks = [make_task("a", assignee="mario"), make_task("b", assignee="maria"), make_task("c", assignee="mario")]
    assert review_decomposition(make_plan(subtasks, **complete_kwargs), clock=clock).issues == []


def test_unrealistic_urgent_deadline(
    make_plan: PlanFactory, make_task: TaskFactory, complete_kwargs: dict, clock: FixedClock
) -> None:
    subtasks = [
        make_task("a", assignee="mario", urgent=5, deadline=TODAY + timedelta(days=1)),
        make_task("b", assignee="maria", urgent=3, deadline=TODAY),
    ]
    review = review_decomposition(make_plan(subtasks, **complete_kwargs), clock=clock)

    assert review.issues == [UNREALISTIC_DEADLINES]
    assert review.suggestions == ["Consider extending some deadlines or reducing urgency levels"]


def test_urgent_deadline_three_days_out_is_fine(
    make_plan: PlanFactory, make_task: TaskFactory, complete_kwargs: dict, clock: FixedClock
) -> None:
    subtasks = [make_task("a", urgent=4, deadline=TODAY + timedelta(days=3))]
    assert review_decomposition(make_plan(subtasks, **complete_kwargs), clock=clock).issues == []


def test_circular_dependencies(
    make_plan: PlanFactory, make_task: TaskFactory, complete_kwargs: dict, clock: FixedClock
) -> None:
    subtasks = [
        make_task("task_1", assignee="mario", depends_on=["task_2"]),
        make_task("task_2", assignee="maria", depends_on=["task_1"]),
    ]
    review = review_decomposition(make_plan(subtasks, **complete_kwargs), clock=clock)
    assert review.issues == [CIRCULAR_DEPENDENCIES]


def test_every_check_fires(make_plan: PlanFactory, make_task: TaskFactory, clock: FixedClock) -> None:
    """Six issues, low confidence, questions capped at the first four."""
    subtasks = [
        make_task("a", assignee="mario", urgent=5, deadline=TODAY, depends_on=["b"]),
        make_task("b", assignee="mario", depends_on=["a"]),
        make_task("c", assignee="mario"),
    ]
    review = review_decomposition(make_plan(subtasks, name="Buy on a budget"), clock=clock)

    assert review.issues == [
        MISSING_DEADLINE,
        MISSING_FIRST_STEP,
        BUDGET_NOT_CONSIDERED,
        UNBALANCED_WORKLOAD,
        UNREALISTIC_DEADLINES,
        CIRCULAR_DEPENDENCIES,
    ]
    assert review.confidence == Confidence.LOW
    assert review.questions == [QUESTIONS[issue] for issue in review.issues[:4]]
    assert len(review.suggestions) == 3


def test_review_is_idempotent(make_plan: PlanFactory, make_task: TaskFactory, clock: FixedClock) -> None:
    plan = make_plan([make_task("a")], name="Buy things")
    assert review_decomposition(plan, clock=clock) == review_decomposition(plan, clock=clock)
    assert review_decomposition(plan, True, clock=clock) == review_decomposition(plan, True, clock=clock)


def test_accepts_serialized_decomposition(make_plan: PlanFactory, make_task: TaskFactory, clock: FixedClock) -> None:
    plan = make_plan([make_task("a", deadline=TODAY)], name="Shop")
    assert review_decomposition(plan.to_dict(), clock=clock) == review_decomposition(plan, clock=clock)


def test_review_serializes_with_camel_case(make_plan: PlanFactory, clock: FixedClock) -> None:
    data = review_decomposition(make_plan(), clock=clock).to_dict()
    assert data["isComplete"] is False
    assert data["confidence"] == "medium"


def test_calculate_confidence() -> None:
    assert calculate_confidence([]) == Confidence.HIGH
    assert calculate_confidence(["x"]) == Confidence.MEDIUM
    assert calculate_confidence(["x", "y"]) == Confidence.MEDIUM
    assert calculate_confidence(["x", "y", "z"]) == Confidence.LOW


def test_generate_suggestions_ignores_unknown_issues() -> None:
    assert generate_suggestions(["Some other issue"]) == []
