# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

MAX_TEXT_LENGTH = 150
COPY_SUFFIX = " (copy)"


class Priority(StrEnum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @classmethod
    def parse(cls, raw: Any) -> Priority | None:
        """Return the matching priority, or None for anything unknown."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class TaskFilter(StrEnum):
    """View selector over the collection. Never stored on a task."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool
    priority: Priority
    created_at: datetime


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int


# ---- record schema (persisted shape) ----

_RECORD_FIELDS = ("id", "text", "completed", "priority", "createdAt")


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 in UTC with a trailing Z (sub-second precision is kept)."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "priority": task.priority.value,
        "createdAt": format_timestamp(task.created_at),
    }


def task_from_record(record: Any) -> Task:
    """
    Build a Task from one persisted record.

    Raises ValueError naming the offending field when the record does not
    match the schema; callers decide whether to drop the record.
    """
    if not isinstance(record, dict):
        raise ValueError("record is not an object")

    missing = [name for name in _RECORD_FIELDS if name not in record]
    if missing:
        raise ValueError(f"missing fields: {', '.join(missing)}")

    task_id = record["id"]
    if not isinstance(task_id, str) or not task_id:
        raise ValueError("id must be a non-empty string")

    text = record["text"]
    if not isinstance(text, str):
        raise ValueError("text must be a string")
    if not 1 <= len(text) <= MAX_TEXT_LENGTH or not text.strip():
        raise ValueError("text length out of range")

    completed = record["completed"]
    if not isinstance(completed, bool):
        raise ValueError("completed must be a boolean")

    priority = Priority.parse(record["priority"])
    if priority is None:
        raise ValueError(f"unknown priority: {record['priority']!r}")

    raw_ts = record["createdAt"]
    if not isinstance(raw_ts, str):
        raise ValueError("createdAt must be a string")
    created_at = parse_timestamp(raw_ts)

    return Task(
        id=task_id,
        text=text,
        completed=completed,
        priority=priority,
        created_at=created_at,
    )
