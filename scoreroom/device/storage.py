"""Key/value persistence for per-device preferences."""

from __future__ import annotations

import json
import threading
from typing import Any, Protocol

from flask import session


class DeviceStorage(Protocol):
    """String-keyed store of JSON-serialisable values."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStorage:
    """In-process storage. Values are held in their JSON form."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._items: dict[str, str] = {}
        self._lock = threading.Lock()
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or ``default`` when unset."""
        with self._lock:
            raw = self._items.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        """Store a value; ``None`` removes the key."""
        with self._lock:
            if value is None:
                self._items.pop(key, None)
            else:
                self._items[key] = json.dumps(value)


class SessionStorage:
    """Storage backed by the signed Flask session cookie.

    Only usable inside a request context.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or ``default`` when unset."""
        return session.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a value; ``None`` removes the key."""
        if value is None:
            session.pop(key, None)
        else:
            session[key] = value
