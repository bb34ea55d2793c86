"""Decomposition entry point exposed to the model."""

from __future__ import annotations

import random
from typing import Any

from taskorg.clock import Clock
from taskorg.decomposer import decompose_task
from taskorg.functions._base import ASSIGNEE_SCHEMA, SCORE_SCHEMA, FunctionDefinition, FunctionResult
from taskorg.reviewer import review_decomposition

DEFINITION = FunctionDefinition(
    name="decomposeTask",
    description=(
        "Break a large task into smaller, prioritized subtasks with deadlines and dependencies. "
        "Returns the plan together with a self-review listing clarifying questions."
    ),
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "The large task to decompose"},
            "assignee": {**ASSIGNEE_SCHEMA, "description": "Who owns the overall task"},
            "urgent": {**SCORE_SCHEMA, "description": "Urgency level of the overall task"},
            "important": {**SCORE_SCHEMA, "description": "Importance level of the overall task"},
            "deadline": {"type": "string", "description": "Overall deadline as YYYY-MM-DD"},
            "icon": {"type": "string", "description": "Emoji icon for the task"},
            "firstStep": {"type": "string", "description": "The first step to get started"},
            "completionCriteria": {"type": "string", "description": "What done looks like"},
        },
        "required": ["name"],
    },
)


class DecomposeTaskFunction:
    """Run decomposition plus the initial strict review."""

    def __init__(
        self,
        organization_id: str | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._organization_id = organization_id
        self._clock = clock
        self._rng = rng

    def execute(self, arguments: dict[str, Any]) -> FunctionResult:
        decomposition = decompose_task(arguments, self._organization_id, clock=self._clock, rng=self._rng)
        review = review_decomposition(decomposition, clock=self._clock)
        payload = {"decomposition": decomposition.to_dict(), "review": review.to_dict()}
        return FunctionResult.from_payload(payload)
