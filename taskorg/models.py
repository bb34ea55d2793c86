"""Domain models for tasks and the decomposition pipeline.

Field names follow the JSON the chat handler exchanges with the client:
snake_case on tasks, camelCase on the pipeline envelopes. Python attributes
are always snake_case; every model accepts either name on input and
``to_dict()`` serializes by alias.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from taskorg.constants import DEFAULT_SCORE, MAX_REVIEW_QUESTIONS, MAX_SCORE, MIN_SCORE
from taskorg.errors import ValidationError


class Assignee(StrEnum):
    """Who a task is assigned to."""

    MARIO = "mario"
    MARIA = "maria"
    BOTH = "both"


class Size(StrEnum):
    """T-shirt size estimate for a task."""

    XS = "xs"
    S = "s"
    M = "m"
    L = "l"
    XL = "xl"


class Quadrant(StrEnum):
    """Eisenhower matrix quadrant."""

    DO = "do"
    SCHEDULE = "schedule"
    DELEGATE = "delegate"
    DELETE = "delete"


class Confidence(StrEnum):
    """How confident the reviewer is that a plan is ready."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def clamp_score(value: object) -> int:
    """Clamp an urgency/importance score into [1, 5]; ``None`` means the default."""
    if value is None:
        return DEFAULT_SCORE
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValidationError(f"Score must be a number between {MIN_SCORE} and {MAX_SCORE}")
    try:
        score = int(value)
    except ValueError as exc:
        raise ValidationError(f"Score must be a number between {MIN_SCORE} and {MAX_SCORE}") from exc
    return max(MIN_SCORE, min(MAX_SCORE, score))


def check_assignee(value: object) -> Assignee:
    """Return *value* as an Assignee or raise ValidationError."""
    try:
        return Assignee(value)
    except ValueError as exc:
        allowed = ", ".join(a.value for a in Assignee)
        raise ValidationError(f"Assignee must be one of: {allowed}") from exc


def check_size(value: object) -> Size:
    """Return *value* as a Size or raise ValidationError."""
    try:
        return Size(value)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in Size)
        raise ValidationError(f"Size must be one of: {allowed}") from exc


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, validate_by_name=True, validate_by_alias=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON-ready shape sent back to the client."""
        return self.model_dump(mode="json", by_alias=True)


M = TypeVar("M", bound=BaseModel)


def parse_model(model: type[M], data: object) -> M:
    """Validate *data* into *model*, converting pydantic errors into ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(f"Invalid {field}: {first['msg']}") from exc


class Task(_Model):
    """A task or subtask. Frozen: changes go through ``model_copy(update=...)``."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    assignee: Assignee = Assignee.BOTH
    size: Size = Size.M
    urgent: int = DEFAULT_SCORE
    important: int = DEFAULT_SCORE
    completed: bool = False
    icon: str | None = None
    first_step: str | None = None
    completion_criteria: str | None = None
    deadline: date | None = None
    depends_on: list[str] | None = None
    parent_task_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    organization_id: str | None = None

    @field_validator("urgent", "important", mode="before")
    @classmethod
    def _clamp_scores(cls, v: object) -> int:
        return clamp_score(v)


class TaskDescription(_Model):
    """Input to the decomposition engine."""

    name: str = Field(min_length=1)
    assignee: Assignee = Assignee.BOTH
    urgent: int = DEFAULT_SCORE
    important: int = DEFAULT_SCORE
    deadline: date | None = None
    icon: str | None = None
    first_step: str | None = Field(default=None, alias="firstStep")
    completion_criteria: str | None = Field(default=None, alias="completionCriteria")

    @field_validator("urgent", "important", mode="before")
    @classmethod
    def _clamp_scores(cls, v: object) -> int:
        return clamp_score(v)


class MatrixPosition(_Model):
    """Eisenhower quadrant assigned to one task, with an auditable reason."""

    task_id: str = Field(alias="taskId")
    position: Quadrant
    reasoning: str


class IntegrationSuggestion(_Model):
    """Advisory external action (calendar entry, shopping list, ...)."""

    type: str
    action: str
    details: str


class Decomposition(_Model):
    """A parent task and its ordered subtasks, carried through the pipeline."""

    parent_task: Task = Field(alias="parentTask")
    subtasks: list[Task] = Field(default_factory=list)
    message: str = ""
    matrix_positions: list[MatrixPosition] = Field(default_factory=list)
    integrations: list[IntegrationSuggestion] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_parent_links(self) -> Decomposition:
        parent_id = self.parent_task.id
        for subtask in self.subtasks:
            if subtask.parent_task_id is None:
                msg = f"subtask {subtask.id} has no parent_task_id, expected {parent_id}"
                raise ValueError(msg)
            if subtask.parent_task_id != parent_id:
                msg = f"subtask {subtask.id} belongs to {subtask.parent_task_id}, not {parent_id}"
                raise ValueError(msg)
        return self


class ReviewResult(_Model):
    """Outcome of one review pass. Produced fresh on every call."""

    is_complete: bool = Field(alias="isComplete")
    confidence: Confidence
    issues: list[str] = Field(default_factory=list)
    questions: list[str] = Field(default_factory=list, max_length=MAX_REVIEW_QUESTIONS)
    suggestions: list[str] = Field(default_factory=list)


class Answer(_Model):
    """A clarifying question and the human's response to it."""

    question: str
    response: str


class DecompositionSummary(_Model):
    """Counts reported when a decomposition is finalized."""

    total_tasks: int = Field(alias="totalTasks")
    mario_tasks: int = Field(alias="marioTasks")
    maria_tasks: int = Field(alias="mariaTasks")
    both_tasks: int = Field(alias="bothTasks")
    deadlines: int
    dependencies: int


class FinalSummary(_Model):
    """Close-out record produced by the finalizer."""

    success: bool = True
    parent_task: Task = Field(alias="parentTask")
    subtasks: list[Task]
    summary: DecompositionSummary
    matrix_positions: list[MatrixPosition] = Field(default_factory=list)
    integrations: list[IntegrationSuggestion] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    message: str


class SplitDescription(_Model):
    """How to split one task into two."""

    part1: str = Field(min_length=1)
    part2: str = Field(min_length=1)
    size1: Size | None = None
    size2: Size | None = None
    first_step1: str | None = Field(default=None, alias="firstStep1")
    first_step2: str | None = Field(default=None, alias="firstStep2")
    completion_criteria1: str | None = Field(default=None, alias="completionCriteria1")
    completion_criteria2: str | None = Field(default=None, alias="completionCriteria2")


class SplitResult(_Model):
    original_task_id: str = Field(alias="originalTaskId")
    new_tasks: list[Task] = Field(alias="newTasks", min_length=2, max_length=2)
    message: str


class UpdateResult(_Model):
    task_id: str = Field(alias="taskId")
    updates: dict[str, Any]
    message: str


class TaskFilters(_Model):
    """Filters for task queries. Score filters are minimums."""

    assignee: Assignee | None = None
    completed: bool | None = None
    urgent: int | None = None
    important: int | None = None


class TaskQueryResult(_Model):
    tasks: list[Task]
    count: int
    filters: TaskFilters
    message: str
