"""Base types for the function-calling layer."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class FunctionDefinition:
    """A function the model may call: its name, what it does and a JSON Schema for its arguments."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class FunctionResult:
    """Outcome of one call. ``output`` is the JSON text handed back to the model."""

    output: str
    error: str = ""
    success: bool = True

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> FunctionResult:
        """Serialize a result payload (emoji kept as-is) into a successful result."""
        return cls(output=json.dumps(payload, ensure_ascii=False))


class FunctionExecutor(Protocol):
    """Runs one function against already-decoded arguments."""

    def execute(self, arguments: dict[str, Any]) -> FunctionResult: ...


ASSIGNEE_SCHEMA: dict[str, Any] = {"type": "string", "enum": ["mario", "maria", "both"]}
SIZE_SCHEMA: dict[str, Any] = {"type": "string", "enum": ["xs", "s", "m", "l", "xl"]}
SCORE_SCHEMA: dict[str, Any] = {"type": "integer", "minimum": 1, "maximum": 5}
