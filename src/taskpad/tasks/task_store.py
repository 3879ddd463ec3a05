# src/taskpad/tasks/task_store.py

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable
from datetime import datetime, timezone

from ..core.ports import NoticeSink, TaskPersistence
from .task_errors import NotFoundError, StorageError, ValidationError
from .task_models import (
    COPY_SUFFIX,
    MAX_TEXT_LENGTH,
    Priority,
    Task,
    TaskFilter,
    TaskStats,
)

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save tasks. Storage may be full."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_task_id() -> str:
    return f"task-{int(time.time() * 1000)}-{secrets.token_hex(5)[:9]}"


class TaskStore:
    """
    Ordered in-memory task collection plus the current view filter.

    Insertion order is the only ordering. Every mutating operation either
    raises (ValidationError / NotFoundError) with the collection untouched,
    or applies the change and then writes the whole collection through the
    injected storage. A failed write is logged and reported as a notice;
    the in-memory collection stays authoritative.
    """

    def __init__(
        self,
        storage: TaskPersistence | None = None,
        notices: NoticeSink | None = None,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_task_id,
    ) -> None:
        self._storage = storage
        self._notices = notices
        self._clock = clock
        self._id_factory = id_factory
        self._tasks: list[Task] = []
        self._filter = TaskFilter.ALL

    # ---- low-level helpers ----

    def _find_index(self, task_id: str) -> int:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        raise NotFoundError(task_id)

    def _fresh_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate
            logger.debug("Task id collision (%s); drawing another.", candidate)

    def _persist(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save(list(self._tasks))
        except StorageError:
            logger.warning("Failed to save %d task(s).", len(self._tasks), exc_info=True)
            if self._notices is not None:
                self._notices.error(SAVE_FAILED_MESSAGE)

    @staticmethod
    def _clean_text(text: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValidationError("Please enter a task description")
        if len(cleaned) > MAX_TEXT_LENGTH:
            raise ValidationError(
                f"Task description must be less than {MAX_TEXT_LENGTH} characters"
            )
        if not cleaned.isprintable():
            raise ValidationError("Task description contains unprintable characters")
        return cleaned

    # ---- loading ----

    def load(self) -> int:
        """Replace the collection with whatever the storage holds."""
        if self._storage is None:
            return 0
        self._tasks = list(self._storage.load())
        logger.info("TaskStore loaded total=%d", len(self._tasks))
        return len(self._tasks)

    # ---- queries ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def current_filter(self) -> TaskFilter:
        return self._filter

    def __len__(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: str) -> Task:
        return self._tasks[self._find_index(task_id)]

    def filtered_view(self) -> list[Task]:
        return [t for t in self._tasks if self._filter.matches(t)]

    def stats(self) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskStats(total=total, completed=completed, pending=total - completed)

    # ---- operations ----

    def add_task(self, text: str) -> Task:
        cleaned = self._clean_text(text)
        folded = cleaned.casefold()
        if any(t.text.casefold() == folded for t in self._tasks):
            raise ValidationError("This task already exists")

        task = Task(
            id=self._fresh_id(),
            text=cleaned,
            completed=False,
            priority=Priority.NORMAL,
            created_at=self._clock(),
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        self._persist()
        return task

    def toggle_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        self._persist()
        return task

    def delete_task(self, task_id: str) -> Task:
        task = self._tasks.pop(self._find_index(task_id))
        logger.debug("Task deleted id=%s", task.id)
        self._persist()
        return task

    def duplicate_task(self, task_id: str) -> Task:
        """
        Append a copy of a task with " (copy)" appended to its text.

        Copies skip the duplicate-text check that add_task applies, so
        duplicating twice yields two identical "(copy)" tasks.
        """
        source = self.get_task(task_id)
        base = source.text
        if len(base) + len(COPY_SUFFIX) > MAX_TEXT_LENGTH:
            base = base[: MAX_TEXT_LENGTH - len(COPY_SUFFIX)].rstrip()

        copy = Task(
            id=self._fresh_id(),
            text=base + COPY_SUFFIX,
            completed=False,
            priority=source.priority,
            created_at=self._clock(),
        )
        self._tasks.append(copy)
        logger.debug("Task duplicated source=%s copy=%s", source.id, copy.id)
        self._persist()
        return copy

    def change_priority(self, task_id: str, priority: Priority | str) -> Task:
        parsed = Priority.parse(priority)
        if parsed is None:
            raise ValidationError(f"Unknown priority: {priority}")
        task = self.get_task(task_id)
        task.priority = parsed
        logger.debug("Task priority id=%s priority=%s", task.id, parsed.value)
        self._persist()
        return task

    def set_filter(self, task_filter: TaskFilter | str) -> None:
        # Unknown values raise ValueError: filters only come from a fixed set.
        self._filter = TaskFilter(task_filter)

    def clear_completed(self) -> int:
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        if removed == 0:
            return 0
        self._tasks = remaining
        logger.debug("Cleared %d completed task(s).", removed)
        self._persist()
        return removed
