"""Task store: CRUD and date-scoped queries over a single bound backend."""

from __future__ import annotations

import asyncio
import datetime
import logging
from typing import Callable, Optional

from planner.storage.base import TaskBackend
from planner.storage.errors import StorageFailure
from planner.utils.datetime_utils import day_bounds, month_bounds, to_epoch_ms

from .models import Task, validate_task

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


class TaskStore:
    """Persist tasks and answer calendar queries.

    The store is bound to one backend for its whole lifetime. The backend is
    opened on first use (or by an explicit :meth:`initialize`). That attempt
    happens once: a failure is remembered and re-raised to every later caller
    until the store is closed.
    """

    def __init__(self, backend: TaskBackend, *, clock: Optional[Clock] = None) -> None:
        self._backend = backend
        self._clock: Clock = clock or datetime.datetime.now
        self._init_lock = asyncio.Lock()
        self._initialized = False
        self._init_error: StorageFailure | None = None

    @property
    def backend_name(self) -> str:
        return self._backend.name

    def now(self) -> datetime.datetime:
        """Current time according to the store's clock."""
        return self._clock()

    async def initialize(self) -> None:
        """Open the backend, or re-raise the failure of an earlier attempt."""

        async with self._init_lock:
            if self._init_error is not None:
                raise self._init_error
            if self._initialized:
                return
            try:
                await self._backend.initialize()
            except StorageFailure as exc:
                self._init_error = exc
                logger.error("Task store initialization failed: %s", exc)
                raise
            self._initialized = True

    async def close(self) -> None:
        async with self._init_lock:
            if self._initialized:
                await self._backend.close()
            self._initialized = False
            self._init_error = None

    async def _ready(self) -> TaskBackend:
        if not self._initialized or self._init_error is not None:
            await self.initialize()
        return self._backend

    # ---- mutations ----

    async def insert(self, task: Task) -> int:
        """Persist a new task and return the id assigned to it."""

        validate_task(task)
        backend = await self._ready()
        return await backend.insert(task.copy_with(id=None))

    async def update(self, task: Task) -> None:
        """Replace the stored record with ``task.id``; no-op if none exists."""

        if task.id is None:
            raise ValueError("cannot update a task without an id")
        validate_task(task)
        backend = await self._ready()
        await backend.update(task)

    async def delete(self, task_id: int) -> None:
        backend = await self._ready()
        await backend.delete(int(task_id))

    async def delete_all(self) -> int:
        """Remove every task and return how many were removed.

        Not atomic: a task inserted concurrently may or may not survive.
        """

        backend = await self._ready()
        return await backend.delete_all()

    # ---- queries ----

    async def get_all(self) -> list[Task]:
        backend = await self._ready()
        return await backend.get_all()

    async def count(self) -> int:
        backend = await self._ready()
        return await backend.count()

    async def get_tasks_for_date_range(
        self, start: datetime.datetime, end: datetime.datetime
    ) -> list[Task]:
        """Tasks due within ``[start, end]``, earliest first."""

        backend = await self._ready()
        return await backend.query_due_between(to_epoch_ms(start), to_epoch_ms(end))

    async def get_tasks_for_date(
        self, date: datetime.date | datetime.datetime
    ) -> list[Task]:
        start, end = day_bounds(date)
        return await self.get_tasks_for_date_range(start, end)

    async def get_today_tasks(self) -> list[Task]:
        return await self.get_tasks_for_date(self.now())

    async def get_reminders_between(
        self, start: datetime.datetime, end: datetime.datetime
    ) -> list[Task]:
        """Incomplete tasks with a reminder within ``[start, end]``, earliest first."""

        backend = await self._ready()
        return await backend.query_reminders_between(to_epoch_ms(start), to_epoch_ms(end))

    async def get_today_reminders(self) -> list[Task]:
        start, end = day_bounds(self.now())
        return await self.get_reminders_between(start, end)

    async def get_dates_with_tasks(
        self, month: datetime.date | datetime.datetime
    ) -> list[datetime.date]:
        """Distinct days of ``month``'s month that have at least one task due."""

        start, end = month_bounds(month)
        tasks = await self.get_tasks_for_date_range(start, end)
        return sorted({task.due_date.date() for task in tasks})


__all__ = ["Clock", "TaskStore"]
