"""Tests for backend selection and configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from planner.config import Settings, default_data_dir
from planner.storage.factory import create_task_backend
from planner.storage.kv_backend import KeyValueTaskBackend
from planner.storage.kv_store import JsonKeyValueStore
from planner.storage.platform import detect_platform, resolve_backend_kind
from planner.storage.sqlite_backend import SqliteTaskBackend


@pytest.mark.parametrize(
    ("platform", "expected"),
    [("linux", "native"), ("win32", "native"), ("darwin", "native"), ("emscripten", "browser"), ("wasi", "browser")],
)
def test_detect_platform(platform: str, expected: str) -> None:
    assert detect_platform(platform) == expected


def test_auto_backend_follows_platform() -> None:
    assert resolve_backend_kind("auto", "linux") == "sqlite"
    assert resolve_backend_kind("auto", "emscripten") == "local_storage"


def test_explicit_backend_overrides_platform() -> None:
    assert resolve_backend_kind("local_storage", "linux") == "local_storage"
    assert resolve_backend_kind("SQLite", "emscripten") == "sqlite"


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_backend_kind("postgres")


def test_factory_builds_sqlite_on_native(tmp_path: Path) -> None:
    settings = Settings(data_dir=tmp_path)
    kv = JsonKeyValueStore(settings.local_storage_path)

    backend = create_task_backend(settings, kv, platform="linux")

    assert isinstance(backend, SqliteTaskBackend)
    assert backend.path == tmp_path / "study_planner.db"
    assert backend.name == "SQLite"


def test_factory_builds_kv_backend_in_browser(tmp_path: Path) -> None:
    settings = Settings(data_dir=tmp_path)
    kv = JsonKeyValueStore(settings.local_storage_path)

    backend = create_task_backend(settings, kv, platform="emscripten")

    assert isinstance(backend, KeyValueTaskBackend)
    assert backend.name == "Local Storage"


def test_settings_read_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PLANNER_STORAGE_BACKEND", "local_storage")
    monkeypatch.setenv("PLANNER_DATABASE_FILENAME", "custom.db")

    settings = Settings()

    assert settings.storage_backend == "local_storage"
    assert settings.database_path == tmp_path / "data" / "custom.db"
    assert settings.local_storage_path == tmp_path / "data" / "local_storage.json"


def test_default_data_dir_respects_xdg(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("planner.config.sys.platform", "linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert default_data_dir() == tmp_path / "study_planner"
