# src/taskpad/tasks/task_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from collections.abc import Sequence
from pathlib import Path

from .task_errors import StorageError
from .task_models import Task, task_from_record, task_to_record

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


class SqliteTaskStorage:
    """
    Durable key-value slot for the task list, backed by SQLite.

    The whole ordered sequence lives as one JSON array under a fixed key:
    - save() overwrites the slot and raises StorageError on failure
    - load() returns [] when the slot is absent, unreadable or malformed,
      and drops individual records that do not match the schema

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._db_path = Path(db_path)
        self._key = key
        self._schema_ready = False
        try:
            self._ensure_schema()
        except (sqlite3.Error, OSError):
            # Unusable file: load() yields [] and save() raises StorageError.
            logger.exception("Task storage unavailable db=%s", self._db_path)
            return
        logger.info("SqliteTaskStorage ready db=%s key=%s", self._db_path, self._key)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()
        self._schema_ready = True

    def _read_raw(self) -> str | None:
        self._ensure_schema()
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
            return None if row is None else row[0]
        finally:
            conn.close()

    def write_raw(self, payload: str) -> None:
        """Overwrite the slot with an already-serialized payload."""
        self._ensure_schema()
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (self._key, payload, time.time()),
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            payload = json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)
            self.write_raw(payload)
        except (sqlite3.Error, OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write tasks to {self._db_path}: {e}") from e
        logger.debug("Saved %d task(s) key=%s", len(tasks), self._key)

    def load(self) -> list[Task]:
        try:
            raw = self._read_raw()
        except (sqlite3.Error, OSError):
            logger.exception("Failed to read tasks from %s; starting fresh.", self._db_path)
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Stored tasks under key=%s are not valid JSON; starting fresh.", self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored tasks under key=%s are not a list; starting fresh.", self._key)
            return []

        out: list[Task] = []
        seen: set[str] = set()
        for idx, record in enumerate(data):
            try:
                task = task_from_record(record)
            except ValueError as e:
                logger.warning("Dropping stored task #%d: %s", idx, e)
                continue
            if task.id in seen:
                logger.warning("Dropping stored task #%d: repeated id %s", idx, task.id)
                continue
            seen.add(task.id)
            out.append(task)

        logger.debug("Loaded %d of %d stored task(s).", len(out), len(data))
        return out
