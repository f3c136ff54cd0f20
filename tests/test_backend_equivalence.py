"""The SQLite and key-value backends must be observably identical."""

from __future__ import annotations

import datetime
from pathlib import Path

import pytest

from planner.storage.kv_backend import KeyValueTaskBackend
from planner.storage.kv_store import JsonKeyValueStore
from planner.storage.sqlite_backend import SqliteTaskBackend
from planner.tasks.models import Task
from planner.tasks.store import TaskStore

pytestmark = pytest.mark.anyio

NOW = datetime.datetime(2024, 3, 15, 10, 5, 0)


async def _run_script(store: TaskStore) -> list:
    observed: list = []
    base = datetime.datetime(2024, 3, 15, 9, 0)

    for offset, title in enumerate(["alpha", "beta", "gamma", "delta", "epsilon"]):
        observed.append(
            await store.insert(
                Task(
                    title=title,
                    due_date=base + datetime.timedelta(hours=offset * 7),
                    reminder_time=(
                        base + datetime.timedelta(minutes=offset * 90) if offset % 2 == 0 else None
                    ),
                    description=f"{title} notes" if offset != 1 else None,
                )
            )
        )

    await store.delete(observed[2])
    observed.append(await store.insert(Task(title="zeta", due_date=base)))
    await store.update(
        Task(id=observed[0], title="alpha*", due_date=base, reminder_time=base, is_completed=True)
    )
    await store.update(Task(id=999, title="missing", due_date=base))
    # Same due date as "alpha*" so the id tie-break is exercised.
    await store.update(Task(id=observed[1], title="beta*", due_date=base))
    await store.delete(observed[-1])
    observed.append(await store.insert(Task(title="eta", due_date=base + datetime.timedelta(days=20))))

    observed.append(sorted(await store.get_all(), key=lambda t: t.id or 0))
    observed.append(await store.get_tasks_for_date(base.date()))
    observed.append(await store.get_tasks_for_date(base.date() + datetime.timedelta(days=1)))
    observed.append(await store.get_today_tasks())
    observed.append(await store.get_today_reminders())
    observed.append(await store.get_dates_with_tasks(base))
    observed.append(
        await store.get_tasks_for_date_range(base, base + datetime.timedelta(days=1))
    )
    observed.append(await store.count())
    observed.append(await store.delete_all())
    observed.append(await store.insert(Task(title="after clear", due_date=base)))
    return observed


async def test_backends_produce_identical_results(tmp_path: Path) -> None:
    sqlite_store = TaskStore(SqliteTaskBackend(tmp_path / "planner.db"), clock=lambda: NOW)
    kv_store = TaskStore(
        KeyValueTaskBackend(JsonKeyValueStore(tmp_path / "local_storage.json")),
        clock=lambda: NOW,
    )
    try:
        sqlite_result = await _run_script(sqlite_store)
        kv_result = await _run_script(kv_store)
    finally:
        await sqlite_store.close()
        await kv_store.close()

    assert sqlite_result == kv_result
    # zeta (6) was the highest id when deleted, so eta is assigned 6 again
    assert sqlite_result[:7] == [1, 2, 3, 4, 5, 6, 6]
