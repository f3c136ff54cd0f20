"""Application services built on top of the storage layer."""

from .preferences import PreferencesStore
from .reminders import check_reminders

__all__ = ["PreferencesStore", "check_reminders"]
