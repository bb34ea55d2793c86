"""Task decomposition pipeline: decompose, review, refine and finalize large tasks."""

from taskorg.decomposer import decompose_task
from taskorg.deadlines import calculate_deadline, parse_deadline
from taskorg.dependencies import check_circular_dependencies
from taskorg.errors import ValidationError
from taskorg.finalizer import finalize_decomposition
from taskorg.integrations import suggest_integrations
from taskorg.models import (
    Answer,
    Assignee,
    Confidence,
    Decomposition,
    FinalSummary,
    IntegrationSuggestion,
    MatrixPosition,
    Quadrant,
    ReviewResult,
    Size,
    Task,
    TaskDescription,
)
from taskorg.prioritizer import assign_matrix_positions
from taskorg.refiner import refine_decomposition
from taskorg.reviewer import review_decomposition
from taskorg.session import PlanningSession
from taskorg.tasks import create_task, get_tasks, split_task, update_task

__all__ = [
    "Answer",
    "Assignee",
    "Confidence",
    "Decomposition",
    "FinalSummary",
    "IntegrationSuggestion",
    "MatrixPosition",
    "PlanningSession",
    "Quadrant",
    "ReviewResult",
    "Size",
    "Task",
    "TaskDescription",
    "ValidationError",
    "assign_matrix_positions",
    "calculate_deadline",
    "check_circular_dependencies",
    "create_task",
    "decompose_task",
    "finalize_decomposition",
    "get_tasks",
    "parse_deadline",
    "refine_decomposition",
    "review_decomposition",
    "split_task",
    "suggest_integrations",
    "update_task",
]
