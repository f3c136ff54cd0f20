"""SQLite-backed task backend."""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

from planner.tasks.models import Task

from .errors import StorageUnavailable, StorageWriteFailed

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class SqliteTaskBackend:
    """Persist tasks in a single ``tasks`` table.

    Timestamps are stored as integer epoch milliseconds and ``isCompleted``
    as 0/1, so date filters run as integer range predicates in SQL.
    """

    name = "SQLite"

    def __init__(self, database_path: Path):
        self._path = database_path
        self._connection: aiosqlite.Connection | None = None

    @property
    def path(self) -> Path:
        return self._path

    async def initialize(self) -> None:
        """Open the SQLite connection and ensure the schema exists."""

        if self._connection is not None:
            return

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._path)
            self._connection.row_factory = aiosqlite.Row
            await self._connection.execute("PRAGMA journal_mode=WAL;")
            await self._create_schema()
        except (OSError, aiosqlite.Error) as exc:
            await self.close()
            raise StorageUnavailable(
                f"Failed to open task database {self._path}: {exc}"
            ) from exc
        logger.info("SQLite task backend ready db=%s", self._path)

    async def _create_schema(self) -> None:
        assert self._connection is not None
        cursor = await self._connection.execute("PRAGMA user_version")
        row = await cursor.fetchone()
        await cursor.close()
        version = int(row[0]) if row is not None else 0
        if version >= SCHEMA_VERSION:
            return

        await self._connection.executescript(
            f"""
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT,
                dueDate INTEGER NOT NULL,
                reminderTime INTEGER,
                isCompleted INTEGER NOT NULL DEFAULT 0
            );

            CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(dueDate);
            CREATE INDEX IF NOT EXISTS idx_tasks_reminder_time ON tasks(reminderTime);

            PRAGMA user_version = {SCHEMA_VERSION};
            """
        )
        await self._connection.commit()
        logger.info("Created tasks table (schema version %s)", SCHEMA_VERSION)

    async def close(self) -> None:
        if self._connection is not None:
            try:
                await self._connection.close()
            finally:
                self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageUnavailable("Task database is not initialized")
        return self._connection

    async def _fetch(self, sql: str, params: tuple = ()) -> list[Task]:
        connection = self._require_connection()
        try:
            cursor = await connection.execute(sql, params)
            rows = await cursor.fetchall()
            await cursor.close()
        except aiosqlite.Error as exc:
            raise StorageUnavailable(f"Failed to query tasks: {exc}") from exc
        return [Task.from_map(dict(row)) for row in rows]

    async def _write(self, sql: str, params: tuple) -> int | None:
        connection = self._require_connection()
        try:
            cursor = await connection.execute(sql, params)
            await connection.commit()
            rowid = cursor.lastrowid
            await cursor.close()
        except aiosqlite.Error as exc:
            raise StorageWriteFailed(f"Failed to write task: {exc}") from exc
        return rowid

    async def insert(self, task: Task) -> int:
        record = task.to_map()
        rowid = await self._write(
            """
            INSERT INTO tasks (id, title, description, dueDate, reminderTime, isCompleted)
            VALUES ((SELECT COALESCE(MAX(id), 0) + 1 FROM tasks), ?, ?, ?, ?, ?)
            """,
            (
                record["title"],
                record["description"],
                record["dueDate"],
                record["reminderTime"],
                record["isCompleted"],
            ),
        )
        if rowid is None:
            raise StorageWriteFailed("SQLite did not return lastrowid for task insert")
        logger.debug("Task inserted id=%s title=%r", rowid, task.title)
        return int(rowid)

    async def update(self, task: Task) -> None:
        record = task.to_map()
        await self._write(
            """
            UPDATE tasks
            SET title = ?, description = ?, dueDate = ?, reminderTime = ?, isCompleted = ?
            WHERE id = ?
            """,
            (
                record["title"],
                record["description"],
                record["dueDate"],
                record["reminderTime"],
                record["isCompleted"],
                int(task.id),  # type: ignore[arg-type]
            ),
        )
        logger.debug("Task updated id=%s", task.id)

    async def delete(self, task_id: int) -> None:
        await self._write("DELETE FROM tasks WHERE id = ?", (int(task_id),))
        logger.debug("Task deleted id=%s", task_id)

    async def delete_all(self) -> int:
        # Count and delete are separate statements, not one transaction.
        deleted = await self.count()
        await self._write("DELETE FROM tasks", ())
        logger.info("Deleted all tasks count=%s", deleted)
        return deleted

    async def count(self) -> int:
        connection = self._require_connection()
        try:
            cursor = await connection.execute("SELECT COUNT(*) FROM tasks")
            row = await cursor.fetchone()
            await cursor.close()
        except aiosqlite.Error as exc:
            raise StorageUnavailable(f"Failed to count tasks: {exc}") from exc
        return int(row[0]) if row is not None else 0

    async def get_all(self) -> list[Task]:
        return await self._fetch("SELECT * FROM tasks")

    async def query_due_between(self, start_ms: int, end_ms: int) -> list[Task]:
        return await self._fetch(
            """
            SELECT * FROM tasks
            WHERE dueDate >= ? AND dueDate <= ?
            ORDER BY dueDate ASC, id ASC
            """,
            (int(start_ms), int(end_ms)),
        )

    async def query_reminders_between(self, start_ms: int, end_ms: int) -> list[Task]:
        return await self._fetch(
            """
            SELECT * FROM tasks
            WHERE reminderTime IS NOT NULL
              AND reminderTime >= ? AND reminderTime <= ?
              AND isCompleted = 0
            ORDER BY reminderTime ASC, id ASC
            """,
            (int(start_ms), int(end_ms)),
        )


__all__ = ["SCHEMA_VERSION", "SqliteTaskBackend"]
