"""Application configuration using environment variables."""

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "study_planner"

# Resolve the project root once so that `.env` is discovered regardless of CWD
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def default_data_dir() -> Path:
    """Return the platform-standard application data directory."""

    home = Path.home()
    if sys.platform == "win32":
        base = Path(os.getenv("APPDATA") or home / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or home / ".local" / "share")
    return base / APP_DIR_NAME


class Settings(BaseSettings):
    """Load configuration from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(
        default_factory=default_data_dir,
        validation_alias=AliasChoices("PLANNER_DATA_DIR", "data_dir"),
    )
    database_filename: str = Field(
        default="study_planner.db",
        validation_alias=AliasChoices("PLANNER_DATABASE_FILENAME", "database_filename"),
    )
    local_storage_filename: str = Field(
        default="local_storage.json",
        validation_alias=AliasChoices(
            "PLANNER_LOCAL_STORAGE_FILENAME",
            "local_storage_filename",
        ),
    )
    storage_backend: Literal["auto", "sqlite", "local_storage"] = Field(
        default="auto",
        validation_alias=AliasChoices("PLANNER_STORAGE_BACKEND", "storage_backend"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )
    log_file: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices("LOG_FILE", "log_file"),
    )

    @property
    def database_path(self) -> Path:
        return self.data_dir.expanduser() / self.database_filename

    @property
    def local_storage_path(self) -> Path:
        return self.data_dir.expanduser() / self.local_storage_filename


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()  # pyright: ignore[reportCallIssue]


__all__ = ["Settings", "default_data_dir", "get_settings"]
