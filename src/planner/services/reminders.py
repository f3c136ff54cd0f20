"""Start-up reminder check."""

from __future__ import annotations

import datetime
import logging
from typing import Callable, Optional

from planner.tasks.models import Task
from planner.tasks.store import TaskStore
from planner.utils.datetime_utils import hour_window

from .preferences import PreferencesStore

logger = logging.getLogger(__name__)

ReminderCallback = Callable[[list[Task]], None]


async def check_reminders(
    task_store: TaskStore,
    preferences: PreferencesStore,
    *,
    now: Optional[datetime.datetime] = None,
    notify: Optional[ReminderCallback] = None,
) -> list[Task]:
    """Return incomplete tasks whose reminder falls in the current hour.

    Runs once at start-up. Errors are logged and swallowed so a storage
    problem never blocks launch.
    """

    try:
        if not await preferences.get_reminders_enabled():
            logger.debug("Reminders disabled; skipping start-up check")
            return []

        window_start, window_end = hour_window(now or task_store.now())
        # The window end is exclusive; the store range is inclusive.
        active = await task_store.get_reminders_between(
            window_start, window_end - datetime.timedelta(milliseconds=1)
        )
        if active:
            logger.info("%d reminder(s) due this hour", len(active))
            if notify is not None:
                notify(active)
        return active
    except Exception as exc:
        logger.warning("Error checking reminders: %s", exc)
        return []


__all__ = ["ReminderCallback", "check_reminders"]
