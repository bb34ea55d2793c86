"""Tests for Eisenhower matrix placement."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from taskorg.models import Quadrant, Task
from taskorg.prioritizer import assign_matrix_positions, matrix_position


@pytest.mark.parametrize(
    ("urgent", "important", "expected"),
    [
        (5, 5, Quadrant.DO),
        (4, 4, Quadrant.DO),
        (1, 5, Quadrant.SCHEDULE),
        (2, 4, Quadrant.SCHEDULE),
        (5, 1, Quadrant.DELEGATE),
        (4, 2, Quadrant.DELEGATE),
        (1, 1, Quadrant.DELETE),
        (2, 2, Quadrant.DELETE),
    ],
)
def test_matrix_position_rules(urgent: int, important: int, expected: Quadrant) -> None:
    assert matrix_position(urgent, important) == expected


@pytest.mark.parametrize(("urgent", "important"), [(3, 3), (4, 3), (3, 4), (2, 3), (3, 1)])
def test_matrix_position_defaults_to_do(urgent: int, important: int) -> None:
    """Middle-band combinations are treated as actionable."""
    assert matrix_position(urgent, important) == Quadrant.DO


def test_assign_matrix_positions_preserves_order(make_task: Callable[..., Task]) -> None:
    tasks = [
        make_task("a", urgent=5, important=5),
        make_task("b", urgent=1, important=5),
        make_task("c", urgent=5, important=1),
        make_task("d", urgent=1, important=1),
    ]
    positions = assign_matrix_positions(tasks)

    assert [p.task_id for p in positions] == ["a", "b", "c", "d"]
    assert [p.position for p in positions] == ["do", "schedule", "delegate", "delete"]


def test_assign_matrix_positions_reasoning(make_task: Callable[..., Task]) -> None:
    [position] = assign_matrix_positions([make_task("a", urgent=1, important=5)])
    assert position.reasoning == "Urgent: 1/5, Important: 5/5 → schedule"


def test_assign_matrix_positions_empty() -> None:
    assert assign_matrix_positions([]) == []
