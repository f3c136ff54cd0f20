"""Preferences persisted in the key-value store."""

from __future__ import annotations

import logging
from typing import Any

from planner.schemas.preferences import Preferences
from planner.storage.kv_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

REMINDERS_ENABLED_KEY = "reminders_enabled"
STORAGE_METHOD_KEY = "storage_method"

# Public name -> (persisted key, expected type)
_FIELDS: dict[str, tuple[str, type]] = {
    "remindersEnabled": (REMINDERS_ENABLED_KEY, bool),
    "storageMethod": (STORAGE_METHOD_KEY, str),
}
_ATTRIBUTE_NAMES = {
    "reminders_enabled": "remindersEnabled",
    "storage_method": "storageMethod",
}


def _resolve(key: str) -> tuple[str, str, type]:
    name = _ATTRIBUTE_NAMES.get(key, key)
    try:
        stored_key, expected = _FIELDS[name]
    except KeyError:
        raise KeyError(f"Unknown preference: {key}") from None
    return name, stored_key, expected


class PreferencesStore:
    """Read and write the planner's global preferences with defaults."""

    def __init__(
        self, store: JsonKeyValueStore, *, default_storage_method: str = "SQLite"
    ) -> None:
        self._store = store
        self._defaults = Preferences(
            reminders_enabled=True, storage_method=default_storage_method
        )

    @property
    def defaults(self) -> Preferences:
        return self._defaults.model_copy()

    def _default_for(self, name: str) -> Any:
        return self._defaults.model_dump(by_alias=True)[name]

    async def get(self, key: str) -> Any:
        """Return the stored value for ``key`` or its documented default."""
        name, stored_key, expected = _resolve(key)
        value = await self._store.get(stored_key)
        if value is None:
            return self._default_for(name)
        if not isinstance(value, expected):
            logger.warning(
                "Ignoring stored %s=%r (expected %s)", stored_key, value, expected.__name__
            )
            return self._default_for(name)
        return value

    async def set(self, key: str, value: Any) -> None:
        name, stored_key, expected = _resolve(key)
        if not isinstance(value, expected):
            raise TypeError(
                f"{name} must be {expected.__name__}, got {type(value).__name__}"
            )
        await self._store.set(stored_key, value)
        logger.debug("Preference %s set to %r", name, value)

    async def reset_to_defaults(self) -> Preferences:
        """Overwrite every recognized preference with its default in one write."""
        await self._store.set_many(
            {
                REMINDERS_ENABLED_KEY: self._defaults.reminders_enabled,
                STORAGE_METHOD_KEY: self._defaults.storage_method,
            }
        )
        logger.info("Preferences reset to defaults")
        return self.defaults

    async def get_all(self) -> Preferences:
        return Preferences(
            reminders_enabled=await self.get("remindersEnabled"),
            storage_method=await self.get("storageMethod"),
        )

    async def get_reminders_enabled(self) -> bool:
        return await self.get("remindersEnabled")

    async def set_reminders_enabled(self, enabled: bool) -> None:
        await self.set("remindersEnabled", enabled)

    async def get_storage_method(self) -> str:
        return await self.get("storageMethod")

    async def set_storage_method(self, method: str) -> None:
        await self.set("storageMethod", method)


__all__ = ["PreferencesStore", "REMINDERS_ENABLED_KEY", "STORAGE_METHOD_KEY"]
