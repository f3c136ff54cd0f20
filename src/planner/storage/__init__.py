"""Physical storage backends for planner tasks."""

from .base import TaskBackend
from .errors import StorageFailure, StorageUnavailable, StorageWriteFailed
from .factory import create_task_backend
from .kv_backend import KeyValueTaskBackend
from .kv_store import JsonKeyValueStore
from .platform import detect_platform, resolve_backend_kind
from .sqlite_backend import SqliteTaskBackend

__all__ = [
    "JsonKeyValueStore",
    "KeyValueTaskBackend",
    "SqliteTaskBackend",
    "StorageFailure",
    "StorageUnavailable",
    "StorageWriteFailed",
    "TaskBackend",
    "create_task_backend",
    "detect_platform",
    "resolve_backend_kind",
]
