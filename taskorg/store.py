"""In-memory stand-in for task persistence.

The real system keeps tasks in a database owned by the request handler; the
core only needs lookups for split/query helpers.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Protocol

from taskorg.models import Assignee, Size, Task


class TaskStore(Protocol):
    """Read/write access to stored tasks."""

    def get(self, task_id: str) -> Task | None: ...

    def put(self, task: Task) -> None: ...

    def all(self, organization_id: str | None = None) -> list[Task]: ...


class InMemoryTaskStore:
    """Dict-backed TaskStore. Insertion order is preserved."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: dict[str, Task] = {}
        for task in tasks:
            self.put(task)

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def put(self, task: Task) -> None:
        self._tasks[task.id] = task

    def all(self, organization_id: str | None = None) -> list[Task]:
        """Return stored tasks, scoped to *organization_id* when given."""
        tasks = list(self._tasks.values())
        if organization_id is None:
            return tasks
        return [t for t in tasks if t.organization_id == organization_id]

    def __len__(self) -> int:
        return len(self._tasks)


def sample_tasks() -> list[Task]:
    """Three demo tasks used when no real store is wired in."""
    return [
        Task(
            id="task_001",
            name="Write project proposal",
            assignee=Assignee.MARIO,
            size=Size.L,
            urgent=4,
            important=5,
            icon="\U0001f4dd",
            first_step="Research competitors",
            completion_criteria="Proposal approved by team",
            created_at=datetime(2024, 12, 20, 10, 0, tzinfo=UTC),
        ),
        Task(
            id="task_002",
            name="Review code changes",
            assignee=Assignee.MARIA,
            size=Size.M,
            urgent=3,
            important=4,
            completed=True,
            icon="\U0001f4bb",
            first_step="Pull latest changes",
            completion_criteria="All critical issues resolved",
            created_at=datetime(2024, 12, 19, 14, 30, tzinfo=UTC),
        ),
        Task(
            id="task_003",
            name="Plan team meeting",
            assignee=Assignee.BOTH,
            size=Size.S,
            urgent=2,
            important=3,
            icon="\U0001f465",
            first_step="Check calendar availability",
            completion_criteria="Meeting scheduled and agenda sent",
            created_at=datetime(2024, 12, 21, 9, 15, tzinfo=UTC),
        ),
    ]
