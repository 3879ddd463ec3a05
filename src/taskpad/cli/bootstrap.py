# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage and the notice board into a TaskStore,
- loads the persisted task list into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.notices import NoticeBoard
from ..core.state import AppState
from ..tasks.task_storage import SqliteTaskStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and storage injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to
    get_settings(); if storage is None, a SQLite slot at settings.db_path is used.
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = SqliteTaskStorage(settings.db_path, key=settings.storage_key)

    notices = NoticeBoard(
        error_ms=settings.error_notice_ms,
        success_ms=settings.success_notice_ms,
    )
    store = TaskStore(storage, notices)
    total = store.load()
    logger.info("Session ready with %d task(s).", total)

    return AppState(settings=settings, store=store, notices=notices)
