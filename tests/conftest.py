import datetime
import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from planner.storage.kv_backend import KeyValueTaskBackend  # noqa: E402
from planner.storage.kv_store import JsonKeyValueStore  # noqa: E402
from planner.storage.sqlite_backend import SqliteTaskBackend  # noqa: E402
from planner.tasks.store import TaskStore  # noqa: E402

# A fixed "now" so day-scoped queries are deterministic.
FIXED_NOW = datetime.datetime(2024, 5, 1, 14, 30, 0)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def make_backend(kind: str, tmp_path: pathlib.Path):
    if kind == "sqlite":
        return SqliteTaskBackend(tmp_path / "planner.db")
    return KeyValueTaskBackend(JsonKeyValueStore(tmp_path / "local_storage.json"))


@pytest.fixture(params=["sqlite", "local_storage"])
def backend_kind(request) -> str:
    return request.param


@pytest.fixture
async def task_store(backend_kind, tmp_path):
    store = TaskStore(make_backend(backend_kind, tmp_path), clock=lambda: FIXED_NOW)
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
def fixed_now() -> datetime.datetime:
    return FIXED_NOW


@pytest.fixture
def backend_factory(backend_kind, tmp_path):
    """Build fresh backends of the parametrized kind over the same files."""
    return lambda: make_backend(backend_kind, tmp_path)
