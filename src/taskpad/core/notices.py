# src/taskpad/core/notices.py

from __future__ import annotations

"""
Transient notices.

A single channel for short-lived user-visible messages (errors and successes).
Each notice expires after a fixed duration that depends on its severity;
expiry is checked lazily whenever the display asks for active notices.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MS = 4000
DEFAULT_SUCCESS_MS = 3000


class NoticeSeverity(StrEnum):
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True, slots=True)
class Notice:
    message: str
    severity: NoticeSeverity
    duration_ms: int
    posted_at: float  # monotonic seconds

    @property
    def expires_at(self) -> float:
        return self.posted_at + self.duration_ms / 1000.0

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


NoticeListener = Callable[[Notice], None]


class NoticeBoard:
    """In-process notice channel with per-severity display durations."""

    def __init__(
        self,
        *,
        error_ms: int = DEFAULT_ERROR_MS,
        success_ms: int = DEFAULT_SUCCESS_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._durations = {
            NoticeSeverity.ERROR: int(error_ms),
            NoticeSeverity.SUCCESS: int(success_ms),
        }
        self._clock = clock
        self._notices: list[Notice] = []
        self._listeners: list[NoticeListener] = []

    def subscribe(self, listener: NoticeListener) -> None:
        self._listeners.append(listener)

    def post(self, message: str, severity: NoticeSeverity) -> Notice:
        notice = Notice(
            message=message,
            severity=severity,
            duration_ms=self._durations[severity],
            posted_at=self._clock(),
        )
        self._notices.append(notice)
        logger.debug("Notice posted severity=%s message=%r", severity.value, message)

        for listener in list(self._listeners):
            try:
                listener(notice)
            except Exception:
                logger.exception("Notice listener failed.")
        return notice

    def error(self, message: str) -> Notice:
        return self.post(message, NoticeSeverity.ERROR)

    def success(self, message: str) -> Notice:
        return self.post(message, NoticeSeverity.SUCCESS)

    def active(self) -> list[Notice]:
        """Notices still on screen; expired ones are dismissed here."""
        now = self._clock()
        self._notices = [n for n in self._notices if not n.is_expired(now)]
        return list(self._notices)
