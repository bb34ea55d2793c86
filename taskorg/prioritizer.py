"""Eisenhower matrix placement from urgency and importance scores."""

from __future__ import annotations

from collections.abc import Iterable

from taskorg.constants import HIGH_SCORE, LOW_SCORE, MAX_SCORE
from taskorg.models import MatrixPosition, Quadrant, Task


def matrix_position(urgent: int, important: int) -> Quadrant:
    """Map an (urgent, important) pair to a quadrant.

    Rules are checked in order: do, delegate, schedule, delete. Anything in
    the middle band (a score of 3, or a 4/3 mix) falls back to ``do``.
    """
    if urgent >= HIGH_SCORE and important >= HIGH_SCORE:
        return Quadrant.DO
    if urgent >= HIGH_SCORE and important <= LOW_SCORE:
        return Quadrant.DELEGATE
    if urgent <= LOW_SCORE and important >= HIGH_SCORE:
        return Quadrant.SCHEDULE
    if urgent <= LOW_SCORE and important <= LOW_SCORE:
        return Quadrant.DELETE
    return Quadrant.DO


def assign_matrix_positions(tasks: Iterable[Task]) -> list[MatrixPosition]:
    """Return one MatrixPosition per task, in input order."""
    positions: list[MatrixPosition] = []
    for task in tasks:
        position = matrix_position(task.urgent, task.important)
        positions.append(
            MatrixPosition(
                task_id=task.id,
                position=position,
                reasoning=(
                    f"Urgent: {task.urgent}/{MAX_SCORE}, Important: {task.important}/{MAX_SCORE} → {position.value}"
                ),
            )
        )
    return positions
