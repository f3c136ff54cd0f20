"""JSON-file key-value store standing in for browser local storage."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from .errors import StorageUnavailable, StorageWriteFailed

logger = logging.getLogger(__name__)


class JsonKeyValueStore:
    """Persist a flat mapping of string keys to JSON values in one file.

    The file is read once, lazily, and cached. Every write replaces the file
    via a temporary sibling and ``os.replace``, and the cache only changes
    after the write succeeded.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = asyncio.Lock()
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Internal I/O
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        try:
            if not self._path.exists():
                return {}
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageUnavailable(
                f"Failed to read key-value store {self._path}: {exc}"
            ) from exc
        if not isinstance(raw, dict):
            raise StorageUnavailable(
                f"Key-value store {self._path} does not contain a JSON object"
            )
        return raw

    def _save(self, data: dict[str, Any]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(data, indent=2, sort_keys=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StorageWriteFailed(
                f"Failed to write key-value store {self._path}: {exc}"
            ) from exc

    async def _ensure_loaded(self) -> dict[str, Any]:
        if self._data is None:
            self._data = await asyncio.to_thread(self._load)
            logger.debug("Loaded key-value store %s (%d keys)", self._path, len(self._data))
        return self._data

    async def _commit(self, data: dict[str, Any]) -> None:
        await asyncio.to_thread(self._save, data)
        self._data = data

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load the backing file, raising ``StorageUnavailable`` if unreadable."""
        async with self._lock:
            await self._ensure_loaded()

    async def get(self, key: str, default: Any = None) -> Any:
        async with self._lock:
            data = await self._ensure_loaded()
            return data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            data = dict(await self._ensure_loaded())
            data[key] = value
            await self._commit(data)

    async def set_many(self, values: Mapping[str, Any]) -> None:
        """Write several keys with a single file replacement."""
        async with self._lock:
            data = dict(await self._ensure_loaded())
            data.update(values)
            await self._commit(data)

    async def remove(self, key: str) -> None:
        async with self._lock:
            current = await self._ensure_loaded()
            if key not in current:
                return
            data = dict(current)
            del data[key]
            await self._commit(data)

    async def keys(self) -> list[str]:
        async with self._lock:
            return sorted(await self._ensure_loaded())

    async def close(self) -> None:
        async with self._lock:
            self._data = None


__all__ = ["JsonKeyValueStore"]
