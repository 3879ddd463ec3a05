# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.cli.bootstrap import create_initial_state
from taskpad.core.notices import NoticeBoard
from taskpad.core.state import AppState
from taskpad.tasks.task_store import TaskStore

from .fakes import InMemoryTaskStorage, StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="taskpad-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "tasks.sqlite3",
        storage_key="tasks",
        error_notice_ms=4000,
        success_notice_ms=3000,
        confirm_destructive=True,
    )


@pytest.fixture()
def storage() -> InMemoryTaskStorage:
    return InMemoryTaskStorage()


@pytest.fixture()
def notices() -> NoticeBoard:
    return NoticeBoard()


@pytest.fixture()
def store(storage: InMemoryTaskStorage, notices: NoticeBoard) -> TaskStore:
    return TaskStore(storage, notices, clock=StepClock())


@pytest.fixture()
def state(settings: SimpleNamespace, storage: InMemoryTaskStorage) -> AppState:
    """AppState wired through the real composition root with in-memory storage."""
    return create_initial_state(settings=settings, storage=storage)
