"""Cycle detection over the task dependency graph."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable
from uuid import UUID


def creates_cycle(
    task_id: UUID,
    depends_on_task_id: UUID,
    prerequisites_of: Callable[[UUID], Iterable[UUID]],
) -> bool:
    """Return whether adding ``task_id -> depends_on_task_id`` closes a cycle.

    Walks prerequisites breadth-first from the new prerequisite; reaching
    ``task_id`` means the new edge would loop back.
    """
    visited: set[UUID] = set()
    queue: deque[UUID] = deque([depends_on_task_id])
    while queue:
        current = queue.popleft()
        if current == task_id:
            return True
        if current in visited:
            continue
        visited.add(current)
        queue.extend(prerequisites_of(current))
    return False
