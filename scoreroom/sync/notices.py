"""Short-lived user notices (toasts) raised by the sync layer."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import asdict, dataclass

from scoreroom.core.constants import NOTICE_ERROR, NOTICE_TTL_MS
from scoreroom.utils import now_ms


@dataclass(frozen=True)
class Notice:
    """A message for the user with a severity level."""

    message: str
    level: str
    created_at: int

    def to_dict(self) -> dict:
        return asdict(self)


class NoticeBoard:
    """Thread-safe queue of notices for one device.

    Notices expire ``ttl_ms`` after they are raised; expired ones are
    dropped when the board is drained.
    """

    def __init__(
        self, ttl_ms: int = NOTICE_TTL_MS, clock: Callable[[], int] = now_ms
    ) -> None:
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._items: deque[Notice] = deque()
        self._lock = threading.Lock()

    def push(self, message: str, level: str = NOTICE_ERROR) -> Notice:
        notice = Notice(message=message, level=level, created_at=self._clock())
        with self._lock:
            self._items.append(notice)
        return notice

    def drain(self) -> list[Notice]:
        """Remove and return every notice that has not expired yet."""
        now = self._clock()
        with self._lock:
            items = [n for n in self._items if now - n.created_at < self.ttl_ms]
            self._items.clear()
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
