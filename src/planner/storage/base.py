"""Interface shared by the physical task storage backends."""

from __future__ import annotations

from typing import Protocol

from planner.tasks.models import Task


class TaskBackend(Protocol):
    """A physical home for task records.

    Implementations must return identical results for identical inputs.
    Range queries take inclusive epoch-millisecond bounds and return tasks
    ordered by the queried timestamp, then by id.
    """

    name: str

    async def initialize(self) -> None: ...

    async def close(self) -> None: ...

    async def insert(self, task: Task) -> int: ...

    async def update(self, task: Task) -> None: ...

    async def delete(self, task_id: int) -> None: ...

    async def delete_all(self) -> int: ...

    async def count(self) -> int: ...

    async def get_all(self) -> list[Task]: ...

    async def query_due_between(self, start_ms: int, end_ms: int) -> list[Task]: ...

    async def query_reminders_between(
        self, start_ms: int, end_ms: int
    ) -> list[Task]: ...


__all__ = ["TaskBackend"]
