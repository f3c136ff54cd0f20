"""Flat-file task backend storing the whole task list under one key."""

from __future__ import annotations

import json
import logging

from planner.tasks.models import Task, TaskRecord

from .errors import StorageUnavailable
from .kv_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks_storage"


class KeyValueTaskBackend:
    """Keep every task as one JSON array string inside a key-value store.

    Each call deserializes the full array; mutations rewrite it whole. Two
    overlapping mutations can race and the later writer wins.
    """

    name = "Local Storage"

    def __init__(self, store: JsonKeyValueStore, key: str = TASKS_KEY) -> None:
        self._store = store
        self._key = key

    async def initialize(self) -> None:
        await self._store.initialize()
        logger.info("Key-value task backend ready path=%s key=%s", self._store.path, self._key)

    async def close(self) -> None:
        await self._store.close()

    async def _read_records(self) -> list[TaskRecord]:
        raw = await self._store.get(self._key)
        if raw is None:
            return []
        try:
            records = json.loads(raw) if isinstance(raw, str) else raw
        except json.JSONDecodeError as exc:
            raise StorageUnavailable(f"Stored task list is not valid JSON: {exc}") from exc
        if not isinstance(records, list):
            raise StorageUnavailable("Stored task list is not a JSON array")
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise StorageUnavailable(
                    f"Stored task list entry {index} is not a JSON object: {record!r}"
                )
        return records

    async def _read_tasks(self) -> list[Task]:
        try:
            return [Task.from_map(record) for record in await self._read_records()]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageUnavailable(f"Stored task record is malformed: {exc}") from exc

    async def _write_tasks(self, tasks: list[Task]) -> None:
        payload = json.dumps([task.to_map() for task in tasks], ensure_ascii=False)
        await self._store.set(self._key, payload)

    async def insert(self, task: Task) -> int:
        tasks = await self._read_tasks()
        next_id = max((t.id or 0 for t in tasks), default=0) + 1
        tasks.append(task.copy_with(id=next_id))
        await self._write_tasks(tasks)
        logger.debug("Task inserted id=%s title=%r", next_id, task.title)
        return next_id

    async def update(self, task: Task) -> None:
        tasks = await self._read_tasks()
        for index, existing in enumerate(tasks):
            if existing.id == task.id:
                tasks[index] = task
                await self._write_tasks(tasks)
                logger.debug("Task updated id=%s", task.id)
                return

    async def delete(self, task_id: int) -> None:
        tasks = await self._read_tasks()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return
        await self._write_tasks(remaining)
        logger.debug("Task deleted id=%s", task_id)

    async def delete_all(self) -> int:
        tasks = await self._read_tasks()
        if not tasks:
            return 0
        await self._write_tasks([])
        logger.info("Deleted all tasks count=%s", len(tasks))
        return len(tasks)

    async def count(self) -> int:
        return len(await self._read_records())

    async def get_all(self) -> list[Task]:
        return await self._read_tasks()

    async def query_due_between(self, start_ms: int, end_ms: int) -> list[Task]:
        matches = []
        for task in await self._read_tasks():
            due_ms = task.to_map()["dueDate"]
            if start_ms <= due_ms <= end_ms:
                matches.append((due_ms, task.id or 0, task))
        matches.sort(key=lambda item: item[:2])
        return [task for _, _, task in matches]

    async def query_reminders_between(self, start_ms: int, end_ms: int) -> list[Task]:
        matches = []
        for task in await self._read_tasks():
            if task.is_completed:
                continue
            reminder_ms = task.to_map()["reminderTime"]
            if reminder_ms is None:
                continue
            if start_ms <= reminder_ms <= end_ms:
                matches.append((reminder_ms, task.id or 0, task))
        matches.sort(key=lambda item: item[:2])
        return [task for _, _, task in matches]


__all__ = ["KeyValueTaskBackend", "TASKS_KEY"]
