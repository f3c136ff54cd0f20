"""Application container wiring the planner stores together."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

from dotenv import load_dotenv

from .config import Settings, get_settings
from .services.preferences import PreferencesStore
from .services.reminders import ReminderCallback, check_reminders
from .storage.factory import create_task_backend
from .storage.kv_store import JsonKeyValueStore
from .tasks.store import Clock, TaskStore

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_logging(settings: Settings) -> None:
    """Configure logging based on the configured level and optional log file."""

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = []

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Always add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    logging.getLogger("planner").setLevel(log_level)

    # aiosqlite logs every statement at DEBUG
    if log_level > logging.DEBUG:
        logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@dataclass
class PlannerApp:
    """Explicitly constructed stores handed to whatever layer needs them."""

    settings: Settings
    kv_store: JsonKeyValueStore
    task_store: TaskStore
    preferences: PreferencesStore

    async def close(self) -> None:
        try:
            await self.task_store.close()
        finally:
            await self.kv_store.close()


def create_app(
    settings: Optional[Settings] = None,
    *,
    clock: Optional[Clock] = None,
    platform: Optional[str] = None,
    configure_logging: bool = True,
) -> PlannerApp:
    """Build the planner stores, selecting the task backend exactly once."""

    if settings is None:
        load_dotenv()
        settings = get_settings()
    if configure_logging:
        _configure_logging(settings)

    kv_store = JsonKeyValueStore(settings.local_storage_path)
    backend = create_task_backend(settings, kv_store, platform=platform)
    task_store = TaskStore(backend, clock=clock)
    preferences = PreferencesStore(kv_store, default_storage_method=backend.name)

    return PlannerApp(
        settings=settings,
        kv_store=kv_store,
        task_store=task_store,
        preferences=preferences,
    )


@asynccontextmanager
async def lifespan(
    app: PlannerApp, *, notify: Optional[ReminderCallback] = None
) -> AsyncIterator[PlannerApp]:
    """Run the start-up reminder check, then close the stores on exit."""

    logger.info("Starting planner (storage=%s)", app.task_store.backend_name)
    await check_reminders(app.task_store, app.preferences, notify=notify)
    try:
        yield app
    finally:
        try:
            await app.close()
        except Exception as exc:
            logger.warning("Error during planner shutdown: %s", exc)


__all__ = ["PlannerApp", "create_app", "lifespan"]
