"""
toasts.py
Auto-expiring user notices.

Each push records an expiry deadline for its toast. Streamlit reruns the script on
every interaction, so expiry is applied whenever the queue is read; an explicit
dismiss and a natural expiry both end in the same removal.
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

import config
from logger import get_logger
from models import TOAST_TYPES, Toast

log = get_logger("toasts")


def _new_toast_id() -> str:
    return uuid.uuid4().hex[:9]


class ToastQueue:
    def __init__(self, ttl_ms: int | None = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_ms = config.toast_ttl_ms() if ttl_ms is None else ttl_ms
        self._clock = clock
        self._toasts: list[Toast] = []
        self._deadlines: dict[str, float] = {}

    def push(self, message: str, type: str = "success") -> str:
        if type not in TOAST_TYPES:
            log.warning("unknown toast type %r, using 'info'", type)
            type = "info"
        toast_id = _new_toast_id()
        while toast_id in self._deadlines:
            toast_id = _new_toast_id()
        self._toasts.append(Toast(id=toast_id, message=message, type=type))
        self._deadlines[toast_id] = self._clock() + self.ttl_ms / 1000.0
        log.debug("toast %s pushed (%s): %s", toast_id, type, message)
        return toast_id

    def dismiss(self, toast_id: str) -> None:
        self._remove(toast_id)

    def expire_due(self) -> list[str]:
        """Drop every toast whose deadline has passed; returns the expired ids."""
        now = self._clock()
        due = [tid for tid, deadline in self._deadlines.items() if deadline <= now]
        for tid in due:
            self._remove(tid)
        return due

    def active(self) -> list[Toast]:
        """Live toasts in insertion order."""
        self.expire_due()
        return list(self._toasts)

    def _remove(self, toast_id: str) -> None:
        if self._deadlines.pop(toast_id, None) is None:
            return
        self._toasts = [t for t in self._toasts if t.id != toast_id]

    def __len__(self) -> int:
        return len(self.active())
