"""Task domain package: the task model and its store."""

from .models import Task, TaskRecord, validate_task

__all__ = ["Task", "TaskRecord", "validate_task"]
