"""Domain model for a planner task."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, replace
from typing import Any, Optional

from planner.utils.datetime_utils import from_epoch_ms, to_epoch_ms, to_local_naive

TaskRecord = dict[str, Any]


@dataclass(slots=True)
class Task:
    """A to-do item with a due date and an optional reminder.

    ``id`` stays ``None`` until the task store assigns one on insert.
    Datetimes are kept as naive local wall-clock values.
    """

    title: str
    due_date: datetime.datetime
    description: Optional[str] = None
    reminder_time: Optional[datetime.datetime] = None
    is_completed: bool = False
    id: Optional[int] = None

    def __post_init__(self) -> None:
        self.due_date = to_local_naive(self.due_date)
        if self.reminder_time is not None:
            self.reminder_time = to_local_naive(self.reminder_time)

    def to_map(self) -> TaskRecord:
        """Return the persisted representation shared by every backend."""

        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": to_epoch_ms(self.due_date),
            "reminderTime": (
                to_epoch_ms(self.reminder_time)
                if self.reminder_time is not None
                else None
            ),
            "isCompleted": 1 if self.is_completed else 0,
        }

    @classmethod
    def from_map(cls, record: TaskRecord) -> "Task":
        reminder = record.get("reminderTime")
        raw_id = record.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            title=str(record["title"]),
            description=record.get("description"),
            due_date=from_epoch_ms(record["dueDate"]),
            reminder_time=from_epoch_ms(reminder) if reminder is not None else None,
            is_completed=bool(record.get("isCompleted")),
        )

    def copy_with(self, **changes: Any) -> "Task":
        return replace(self, **changes)

    def is_due_today(self, now: Optional[datetime.datetime] = None) -> bool:
        current = to_local_naive(now or datetime.datetime.now())
        return self.due_date.date() == current.date()

    def is_overdue(self, now: Optional[datetime.datetime] = None) -> bool:
        current = to_local_naive(now or datetime.datetime.now())
        return self.due_date < current and not self.is_completed

    @property
    def formatted_due_date(self) -> str:
        return self.due_date.strftime("%b %d, %Y")

    @property
    def formatted_reminder_time(self) -> Optional[str]:
        if self.reminder_time is None:
            return None
        return self.reminder_time.strftime("%H:%M")


def validate_task(task: Task) -> None:
    """Raise ``ValueError`` when ``task`` cannot be persisted."""

    if not task.title or not task.title.strip():
        raise ValueError("title is required")


__all__ = ["Task", "TaskRecord", "validate_task"]
