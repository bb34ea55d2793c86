"""Task CRUD functions exposed to the model: create, split, update, query."""

from __future__ import annotations

from typing import Any

from taskorg.clock import Clock
from taskorg.functions._base import ASSIGNEE_SCHEMA, SCORE_SCHEMA, SIZE_SCHEMA, FunctionDefinition, FunctionResult
from taskorg.store import TaskStore
from taskorg.tasks import create_task, get_tasks, split_task, update_task

CREATE_TASK = FunctionDefinition(
    name="createTask",
    description="Create a new task in the TaskOrgApp system",
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "The name/title of the task"},
            "assignee": {**ASSIGNEE_SCHEMA, "description": "Who the task is assigned to"},
            "size": {**SIZE_SCHEMA, "description": "The estimated size/complexity of the task"},
            "urgent": {**SCORE_SCHEMA, "description": "Urgency level (1-5, where 5 is most urgent)"},
            "important": {**SCORE_SCHEMA, "description": "Importance level (1-5, where 5 is most important)"},
            "icon": {"type": "string", "description": "Emoji icon for the task"},
            "first_step": {"type": "string", "description": "The first step to start working on this task"},
            "completion_criteria": {
                "type": "string",
                "description": "What needs to be true for this task to be considered complete",
            },
        },
        "required": ["name", "assignee"],
    },
)

SPLIT_TASK = FunctionDefinition(
    name="splitTask",
    description="Split an existing task into two smaller subtasks",
    parameters={
        "type": "object",
        "properties": {
            "taskId": {"type": "string", "description": "The ID of the task to split"},
            "splitDescription": {
                "type": "object",
                "properties": {
                    "part1": {"type": "string", "description": "Name of the first part of the split task"},
                    "part2": {"type": "string", "description": "Name of the second part of the split task"},
                    "size1": {**SIZE_SCHEMA, "description": "Size for the first part"},
                    "size2": {**SIZE_SCHEMA, "description": "Size for the second part"},
                    "firstStep1": {"type": "string", "description": "First step for the first part"},
                    "firstStep2": {"type": "string", "description": "First step for the second part"},
                    "completionCriteria1": {"type": "string", "description": "Completion criteria for the first part"},
                    "completionCriteria2": {
                        "type": "string",
                        "description": "Completion criteria for the second part",
                    },
                },
                "required": ["part1", "part2"],
            },
        },
        "required": ["taskId", "splitDescription"],
    },
)

UPDATE_TASK = FunctionDefinition(
    name="updateTask",
    description="Update an existing task with new information",
    parameters={
        "type": "object",
        "properties": {
            "taskId": {"type": "string", "description": "The ID of the task to update"},
            "updates": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "New name for the task"},
                    "assignee": {**ASSIGNEE_SCHEMA, "description": "New assignee"},
                    "size": {**SIZE_SCHEMA, "description": "New size"},
                    "urgent": {**SCORE_SCHEMA, "description": "New urgency level"},
                    "important": {**SCORE_SCHEMA, "description": "New importance level"},
                    "completed": {"type": "boolean", "description": "Mark task as completed or not"},
                    "icon": {"type": "string", "description": "New emoji icon"},
                    "first_step": {"type": "string", "description": "New first step"},
                    "completion_criteria": {"type": "string", "description": "New completion criteria"},
                },
            },
        },
        "required": ["taskId", "updates"],
    },
)

GET_TASKS = FunctionDefinition(
    name="getTasks",
    description="Query and retrieve tasks based on filters",
    parameters={
        "type": "object",
        "properties": {
            "filters": {
                "type": "object",
                "properties": {
                    "assignee": {**ASSIGNEE_SCHEMA, "description": "Filter by assignee"},
                    "completed": {"type": "boolean", "description": "Filter by completion status"},
                    "urgent": {**SCORE_SCHEMA, "description": "Minimum urgency level"},
                    "important": {**SCORE_SCHEMA, "description": "Minimum importance level"},
                },
            },
        },
    },
)


class CreateTaskFunction:
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock

    def execute(self, arguments: dict[str, Any]) -> FunctionResult:
        task = create_task(arguments, clock=self._clock)
        return FunctionResult.from_payload(task.to_dict())


class SplitTaskFunction:
    def __init__(self, store: TaskStore | None = None, clock: Clock | None = None) -> None:
        self._store = store
        self._clock = clock

    def execute(self, arguments: dict[str, Any]) -> FunctionResult:
        result = split_task(
            arguments.get("taskId"),
            arguments.get("splitDescription"),
            store=self._store,
            clock=self._clock,
        )
        return FunctionResult.from_payload(result.to_dict())


class UpdateTaskFunction:
    def __init__(self, store: TaskStore | None = None) -> None:
        self._store = store

    def execute(self, arguments: dict[str, Any]) -> FunctionResult:
        result = update_task(arguments.get("taskId"), arguments.get("updates") or {}, store=self._store)
        return FunctionResult.from_payload(result.to_dict())


class GetTasksFunction:
    def __init__(self, store: TaskStore | None = None, organization_id: str | None = None) -> None:
        self._store = store
        self._organization_id = organization_id

    def execute(self, arguments: dict[str, Any]) -> FunctionResult:
        result = get_tasks(arguments.get("filters"), self._organization_id, store=self._store)
        return FunctionResult.from_payload(result.to_dict())
