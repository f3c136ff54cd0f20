"""Build the task backend for the current process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import TaskBackend
from .kv_backend import KeyValueTaskBackend
from .kv_store import JsonKeyValueStore
from .platform import resolve_backend_kind
from .sqlite_backend import SqliteTaskBackend

if TYPE_CHECKING:
    from planner.config import Settings

logger = logging.getLogger(__name__)


def create_task_backend(
    settings: "Settings",
    kv_store: JsonKeyValueStore,
    *,
    platform: str | None = None,
) -> TaskBackend:
    """Choose and construct the task backend once, without opening it."""

    kind = resolve_backend_kind(settings.storage_backend, platform)
    backend: TaskBackend
    if kind == "sqlite":
        backend = SqliteTaskBackend(settings.database_path)
    else:
        backend = KeyValueTaskBackend(kv_store)
    logger.info(
        "Selected %s task backend (configured=%s)", backend.name, settings.storage_backend
    )
    return backend


__all__ = ["create_task_backend"]
