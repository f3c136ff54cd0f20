"""Preferences schema shared by the preferences store and its callers."""

from pydantic import BaseModel, ConfigDict, Field


class Preferences(BaseModel):
    """Global user preferences."""

    model_config = ConfigDict(populate_by_name=True)

    reminders_enabled: bool = Field(
        default=True,
        alias="remindersEnabled",
        description="Whether due reminders are surfaced at start-up.",
    )
    storage_method: str = Field(
        default="SQLite",
        alias="storageMethod",
        description="Display label of the storage method in use.",
    )
