"""Function registry for model function calling.

The chat handler forwards ``get_openai_tools()`` to the completion endpoint
and routes each returned call through ``execute``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from taskorg.errors import ValidationError
from taskorg.functions._base import FunctionDefinition, FunctionExecutor, FunctionResult

if TYPE_CHECKING:
    import random

    from taskorg.clock import Clock
    from taskorg.store import TaskStore

logger = structlog.get_logger()

__all__ = [
    "FunctionDefinition",
    "FunctionExecutor",
    "FunctionRegistry",
    "FunctionResult",
    "build_default_registry",
]


class FunctionRegistry:
    """Container for function definitions and their executors."""

    def __init__(self) -> None:
        self._functions: dict[str, tuple[FunctionDefinition, FunctionExecutor]] = {}

    def register(self, definition: FunctionDefinition, executor: FunctionExecutor) -> None:
        """Register a function definition with its executor."""
        self._functions[definition.name] = (definition, executor)

    def get_openai_tools(self) -> list[dict[str, Any]]:
        """Return all definitions in OpenAI function-calling format."""
        return [
            {
                "type": "function",
                "function": {
                    "name": defn.name,
                    "description": defn.description,
                    "parameters": defn.parameters,
                },
            }
            for defn, _ in self._functions.values()
        ]

    def execute(self, name: str, arguments: dict[str, Any]) -> FunctionResult:
        """Execute a function by name. Unknown names and invalid input become error results."""
        entry = self._functions.get(name)
        if entry is None:
            return FunctionResult(output="", error=f"unknown function: {name}", success=False)
        _, executor = entry
        try:
            return executor.execute(arguments)
        except ValidationError as exc:
            logger.info("function call rejected", function=name, error=str(exc))
            return FunctionResult(output="", error=str(exc), success=False)

    @property
    def function_names(self) -> list[str]:
        """Return sorted list of registered function names."""
        return sorted(self._functions.keys())


def build_default_registry(
    store: TaskStore | None = None,
    organization_id: str | None = None,
    clock: Clock | None = None,
    rng: random.Random | None = None,
) -> FunctionRegistry:
    """Create a FunctionRegistry with the task and decomposition functions registered."""
    from taskorg.functions import decompose_function, task_functions

    registry = FunctionRegistry()
    registry.register(task_functions.CREATE_TASK, task_functions.CreateTaskFunction(clock))
    registry.register(task_functions.SPLIT_TASK, task_functions.SplitTaskFunction(store, clock))
    registry.register(task_functions.UPDATE_TASK, task_functions.UpdateTaskFunction(store))
    registry.register(task_functions.GET_TASKS, task_functions.GetTasksFunction(store, organization_id))
    registry.register(
        decompose_function.DEFINITION,
        decompose_function.DecomposeTaskFunction(organization_id, clock, rng),
    )
    return registry
