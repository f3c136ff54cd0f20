"""Runtime environment detection used to pick a task backend."""

from __future__ import annotations

import sys
from typing import Literal

PlatformKind = Literal["native", "browser"]
BackendKind = Literal["sqlite", "local_storage"]

# WebAssembly sandboxes (Pyodide, WASI) have no thread pool for aiosqlite.
_BROWSER_PLATFORMS = frozenset({"emscripten", "wasi"})

_BACKEND_ALIASES: dict[str, BackendKind] = {
    "sqlite": "sqlite",
    "local_storage": "local_storage",
    "localstorage": "local_storage",
    "kv": "local_storage",
}


def detect_platform(platform: str | None = None) -> PlatformKind:
    """Return ``"browser"`` inside a WebAssembly sandbox, ``"native"`` otherwise."""

    current = (platform or sys.platform).lower()
    return "browser" if current in _BROWSER_PLATFORMS else "native"


def resolve_backend_kind(
    configured: str = "auto", platform: str | None = None
) -> BackendKind:
    """Map a configured backend name to a concrete backend kind.

    ``auto`` picks SQLite on native platforms and the key-value store in a
    browser sandbox.
    """

    normalized = configured.strip().lower()
    if normalized in ("", "auto"):
        return "local_storage" if detect_platform(platform) == "browser" else "sqlite"
    try:
        return _BACKEND_ALIASES[normalized]
    except KeyError:
        raise ValueError(f"Unknown storage backend: {configured!r}") from None


__all__ = ["BackendKind", "PlatformKind", "detect_platform", "resolve_backend_kind"]
