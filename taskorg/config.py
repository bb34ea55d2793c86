"""Planner configuration loaded from environment variables."""

from __future__ import annotations

import os

from taskorg.constants import (
    DEFAULT_MAX_ROUNDS,
    DEFAULT_MAX_SUBTASKS,
    DEFAULT_MIN_SUBTASKS,
    DEFAULT_REFINEMENT_MAX_QUESTIONS,
)


def _env_int(name: str, default: int) -> int:
    """Read a positive integer env var, falling back to *default* when unset or invalid."""
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _clamp_subtasks(value: int) -> int:
    """Keep a subtask count bound within [3, 6] whatever the environment says."""
    return max(DEFAULT_MIN_SUBTASKS, min(DEFAULT_MAX_SUBTASKS, value))


class PlannerSettings:
    """Configuration for the decomposition pipeline, loaded from environment variables.

    Prefix: TASKORG_ for every setting.
    """

    log_level: str
    log_service: str
    min_subtasks: int
    max_subtasks: int
    refinement_max_questions: int
    max_rounds: int

    def __init__(self) -> None:
        self.log_level = os.environ.get("TASKORG_LOG_LEVEL", "info")
        self.log_service = os.environ.get("TASKORG_LOG_SERVICE", "taskorg-planner")

        low = _env_int("TASKORG_MIN_SUBTASKS", DEFAULT_MIN_SUBTASKS)
        high = _env_int("TASKORG_MAX_SUBTASKS", DEFAULT_MAX_SUBTASKS)
        low, high = _clamp_subtasks(low), _clamp_subtasks(high)
        self.min_subtasks, self.max_subtasks = min(low, high), max(low, high)

        self.refinement_max_questions = _env_int(
            "TASKORG_REFINEMENT_MAX_QUESTIONS", DEFAULT_REFINEMENT_MAX_QUESTIONS
        )
        self.max_rounds = _env_int("TASKORG_MAX_ROUNDS", DEFAULT_MAX_ROUNDS)
