"""Planning session: the decompose → review → refine → finalize loop.

One session per conversation. The session keeps the current decomposition
between chat turns and applies the tighter question cap for refinement rounds
on top of the reviewer's own cap.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any

import structlog

from taskorg.clock import Clock, resolve_clock
from taskorg.config import PlannerSettings
from taskorg.decomposer import decompose_task
from taskorg.errors import ValidationError
from taskorg.finalizer import finalize_decomposition
from taskorg.logger import planning_context
from taskorg.models import Answer, Decomposition, FinalSummary, ReviewResult, TaskDescription
from taskorg.refiner import refine_decomposition
from taskorg.reviewer import review_decomposition

logger = structlog.get_logger()


@dataclass(frozen=True)
class SessionTurn:
    """What the chat handler shows after one step of the loop."""

    decomposition: Decomposition
    review: ReviewResult
    round: int
    done: bool


class PlanningSession:
    """Drives one task through decomposition, review rounds and finalization."""

    def __init__(
        self,
        settings: PlannerSettings | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings or PlannerSettings()
        self._clock = resolve_clock(clock)
        self._rng = rng or random.Random()
        self._current: Decomposition | None = None
        self._round = 0

    @property
    def decomposition(self) -> Decomposition | None:
        return self._current

    @property
    def round(self) -> int:
        """Number of refinement rounds applied so far."""
        return self._round

    def start(
        self,
        description: TaskDescription | Mapping[str, Any] | None,
        organization_id: str | None = None,
    ) -> SessionTurn:
        """Decompose a new task and run a strict review over it."""
        decomposition = decompose_task(
            description,
            organization_id,
            clock=self._clock,
            rng=self._rng,
            settings=self._settings,
        )
        self._current = decomposition
        self._round = 0
        with self._context(decomposition):
            review = review_decomposition(decomposition, clock=self._clock)
            return self._turn(decomposition, review)

    def answer(self, answers: Iterable[Answer | Mapping[str, Any]]) -> SessionTurn:
        """Apply one round of answers and review the result leniently.

        The review's questions are cut to ``refinement_max_questions``.
        """
        current = self._require_current()
        with self._context(current):
            refined = refine_decomposition(current, answers, clock=self._clock)
            self._current = refined
            self._round += 1
            review = review_decomposition(refined, lenient=True, clock=self._clock)
            limit = self._settings.refinement_max_questions
            if len(review.questions) > limit:
                review = review.model_copy(update={"questions": review.questions[:limit]})
            return self._turn(refined, review)

    def finalize(self) -> FinalSummary:
        """Close out the session with the current decomposition."""
        current = self._require_current()
        with self._context(current):
            return finalize_decomposition(current)

    def _require_current(self) -> Decomposition:
        if self._current is None:
            raise ValidationError("No decomposition in progress")
        return self._current

    def _context(self, decomposition: Decomposition) -> AbstractContextManager[None]:
        parent = decomposition.parent_task
        return planning_context(parent.id, parent.organization_id)

    def _turn(self, decomposition: Decomposition, review: ReviewResult) -> SessionTurn:
        done = review.is_complete or self._round >= self._settings.max_rounds
        logger.info(
            "planning turn",
            round=self._round,
            confidence=review.confidence.value,
            question_count=len(review.questions),
            done=done,
        )
        return SessionTurn(decomposition=decomposition, review=review, round=self._round, done=done)
