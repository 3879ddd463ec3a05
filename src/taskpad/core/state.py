# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .notices import NoticeBoard


@dataclass
class AppState:
    """
    Everything one running session owns.

    Built once by the composition root (cli/bootstrap.py) and passed
    explicitly to commands and connectors; there is no module-level store.
    """

    # Settings (or a test stand-in with the same attributes).
    settings: Any

    store: TaskStore
    notices: NoticeBoard
