"""Dependency graph helpers for subtasks.

Edges run from a task to each task it depends on. Only ids present in the
input list are nodes; dependencies on unknown ids are ignored.
"""

from __future__ import annotations

from collections.abc import Sequence

from taskorg.models import Task


def check_circular_dependencies(tasks: Sequence[Task]) -> bool:
    """Return True if the ``depends_on`` relation contains a cycle.

    Uses an iterative depth-first search with a visiting set, so mutual
    back-references (A↔B) and longer loops (A→B→C→A) are both found.
    """
    adjacency: dict[str, list[str]] = {task.id: list(task.depends_on or []) for task in tasks}

    done: set[str] = set()
    for root in adjacency:
        if root in done:
            continue
        visiting: set[str] = {root}
        stack: list[tuple[str, int]] = [(root, 0)]
        while stack:
            node, next_edge = stack[-1]
            edges = adjacency[node]
            if next_edge >= len(edges):
                stack.pop()
                visiting.discard(node)
                done.add(node)
                continue
            stack[-1] = (node, next_edge + 1)
            target = edges[next_edge]
            if target not in adjacency or target in done:
                continue
            if target in visiting:
                return True
            visiting.add(target)
            stack.append((target, 0))
    return False


def sequential_chain(subtasks: Sequence[Task]) -> list[Task]:
    """Return copies of *subtasks* where each depends only on its predecessor."""
    chained: list[Task] = []
    for index, subtask in enumerate(subtasks):
        depends_on = [subtasks[index - 1].id] if index > 0 else None
        chained.append(subtask.model_copy(update={"depends_on": depends_on}))
    return chained
