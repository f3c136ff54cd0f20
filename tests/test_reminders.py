"""Tests for the start-up reminder check."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

import pytest

from planner.services.preferences import PreferencesStore
from planner.services.reminders import check_reminders
from planner.storage.errors import StorageUnavailable
from planner.storage.kv_store import JsonKeyValueStore
from planner.tasks.models import Task
from planner.tasks.store import TaskStore

pytestmark = pytest.mark.anyio


@pytest.fixture
def preferences(tmp_path: Path) -> PreferencesStore:
    return PreferencesStore(JsonKeyValueStore(tmp_path / "prefs.json"))


async def _seed(store: TaskStore, now: datetime.datetime) -> None:
    hour_start = now.replace(minute=0, second=0)
    due = now.replace(hour=23)
    await store.insert(Task(title="on the hour", due_date=due, reminder_time=hour_start))
    await store.insert(
        Task(title="later this hour", due_date=due, reminder_time=hour_start.replace(minute=50))
    )
    await store.insert(
        Task(title="next hour", due_date=due, reminder_time=hour_start + datetime.timedelta(hours=1))
    )
    await store.insert(
        Task(title="earlier", due_date=due, reminder_time=hour_start - datetime.timedelta(minutes=1))
    )
    await store.insert(
        Task(
            title="completed",
            due_date=due,
            reminder_time=hour_start.replace(minute=10),
            is_completed=True,
        )
    )


async def test_reports_reminders_in_current_hour(
    task_store: TaskStore, preferences: PreferencesStore, fixed_now
) -> None:
    await _seed(task_store, fixed_now)
    notified: list[list[Task]] = []

    active = await check_reminders(task_store, preferences, notify=notified.append)

    assert [t.title for t in active] == ["on the hour", "later this hour"]
    assert notified == [active]


async def test_no_notification_when_nothing_due(
    task_store: TaskStore, preferences: PreferencesStore
) -> None:
    notified: list[list[Task]] = []
    assert await check_reminders(task_store, preferences, notify=notified.append) == []
    assert notified == []


async def test_disabled_reminders_skip_check(
    task_store: TaskStore, preferences: PreferencesStore, fixed_now
) -> None:
    await _seed(task_store, fixed_now)
    await preferences.set_reminders_enabled(False)

    assert await check_reminders(task_store, preferences) == []


async def test_storage_errors_are_swallowed(
    preferences: PreferencesStore, caplog: pytest.LogCaptureFixture
) -> None:
    class BrokenBackend:
        name = "Broken"

        async def initialize(self) -> None:
            raise StorageUnavailable("disk on fire")

        async def close(self) -> None:
            return None

    store = TaskStore(BrokenBackend())  # type: ignore[arg-type]

    with caplog.at_level(logging.WARNING, logger="planner.services.reminders"):
        result = await check_reminders(store, preferences)

    assert result == []
    assert "disk on fire" in caplog.text


async def test_explicit_now_on_another_day_uses_that_days_reminders(
    task_store: TaskStore, preferences: PreferencesStore, fixed_now
) -> None:
    other_day = fixed_now + datetime.timedelta(days=3)
    await _seed(task_store, other_day)
    await _seed(task_store, fixed_now)

    active = await check_reminders(task_store, preferences, now=other_day)

    assert [t.title for t in active] == ["on the hour", "later this hour"]
    assert all(t.reminder_time.date() == other_day.date() for t in active)
    assert [t.id for t in active] == [1, 2]
