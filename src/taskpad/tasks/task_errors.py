# src/taskpad/tasks/task_errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for every recoverable task-list error."""


class ValidationError(TaskError, ValueError):
    """Bad user input: empty/too long/duplicate text, unknown priority."""


class NotFoundError(TaskError, LookupError):
    """An operation referenced a task id that is not in the collection."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(TaskError, RuntimeError):
    """Persistence read/write failure. Never fatal."""
