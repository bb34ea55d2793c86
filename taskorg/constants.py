"""Centralized constants for the task decomposition pipeline.

Label sets and magic numbers shared by the engine, the reviewer and the
refiner are collected here for easy discovery and consistent usage.
"""

from __future__ import annotations

# -- Task scores -------------------------------------------------------------
MIN_SCORE = 1
MAX_SCORE = 5
DEFAULT_SCORE = 3
HIGH_SCORE = 4  # Scores at or above this count as "high" for the matrix.
LOW_SCORE = 2  # Scores at or below this count as "low" for the matrix.

# -- Decomposition -----------------------------------------------------------
DEFAULT_MIN_SUBTASKS = 3
DEFAULT_MAX_SUBTASKS = 6
SUBTASK_SCORE_RANGE = (2, 4)  # Inclusive range for generated urgency/importance.
PARENT_ICON = "\U0001f4cb"  # clipboard
SUBTASK_ICON = "✅"  # check mark

# -- Deadlines ---------------------------------------------------------------
DEADLINE_SPACING_DAYS = 3  # Subtask i is due (i + 1) * 3 days before the parent.
DEFAULT_DEADLINE_DAYS = 14  # Unparseable answers land two weeks out.
URGENT_DEADLINE_WINDOW_DAYS = 3  # Urgent work due sooner than this is flagged.
DEADLINE_EXTENSION_DAYS = 2

# -- Review / refinement loop ------------------------------------------------
MAX_REVIEW_QUESTIONS = 4
DEFAULT_REFINEMENT_MAX_QUESTIONS = 2
DEFAULT_MAX_ROUNDS = 3
WORKLOAD_TOLERANCE = 1  # Allowed difference between mario and maria subtasks.
