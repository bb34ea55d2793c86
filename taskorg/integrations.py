"""Keyword-driven suggestions for calendar and shopping integrations."""

from __future__ import annotations

from collections.abc import Iterable

from taskorg.models import IntegrationSuggestion, Task

CALENDAR_KEYWORDS = ("event", "meeting")
SHOPPING_KEYWORDS = ("buy", "purchase", "shop")
TIME_BLOCK_KEYWORDS = ("research", "call")


def _mentions(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in keywords)


def suggest_integrations(task_name: str, subtasks: Iterable[Task]) -> list[IntegrationSuggestion]:
    """Suggest external actions for a task and its subtasks.

    The task-level checks are independent, so a "shopping event" gets both a
    calendar and a shopping suggestion. Every qualifying subtask adds its own
    time-block entry; nothing is deduplicated.
    """
    suggestions: list[IntegrationSuggestion] = []

    if _mentions(task_name, CALENDAR_KEYWORDS):
        suggestions.append(
            IntegrationSuggestion(
                type="calendar",
                action="schedule",
                details=f'Consider adding "{task_name}" deadlines to your calendar',
            )
        )

    if _mentions(task_name, SHOPPING_KEYWORDS):
        suggestions.append(
            IntegrationSuggestion(
                type="shopping",
                action="add_items",
                details=f'Create shopping list for "{task_name}"',
            )
        )

    for subtask in subtasks:
        if _mentions(subtask.name, TIME_BLOCK_KEYWORDS):
            suggestions.append(
                IntegrationSuggestion(
                    type="calendar",
                    action="block_time",
                    details=f'Block time for "{subtask.name}"',
                )
            )

    return suggestions
