# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage and the display layer swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskPersistence(Protocol):
    """
    Durable slot holding the whole ordered task sequence.

    save() raises StorageError on failure.
    load() never raises: absent or malformed data yields an empty list.
    """

    def save(self, tasks: Sequence[Task]) -> None: ...
    def load(self) -> list[Task]: ...


class NoticeSink(Protocol):
    """Display-side channel for short-lived user-visible messages."""

    def error(self, message: str) -> object: ...
    def success(self, message: str) -> object: ...
