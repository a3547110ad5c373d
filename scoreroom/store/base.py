"""Interface of the remote document store consumed by the sync layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol

from scoreroom.core.constants import ROOMS_COLLECTION

if TYPE_CHECKING:
    from concurrent.futures import Future


@dataclass(frozen=True)
class StoreSnapshot:
    """A point-in-time read of a store path."""

    path: str
    value: Any
    exists: bool


@dataclass(frozen=True)
class StoreStatus:
    """Connection state of the remote store."""

    ready: bool
    error: Optional[str] = None


class Subscription(Protocol):
    """Handle returned by RemoteStore.subscribe."""

    def close(self) -> None: ...


class RemoteStore(Protocol):
    """Per-path value store with live subscriptions.

    ``subscribe`` fires with the current value right away and again on every
    change, including changes written by the subscriber itself. A value of
    ``None`` means the path is absent.
    """

    def subscribe(
        self,
        path: str,
        on_value: Callable[[Any], None],
        on_error: Callable[[Exception], None],
    ) -> Subscription: ...

    def once(self, path: str) -> StoreSnapshot: ...

    def set(self, path: str, value: Any) -> Future[Any]: ...

    def shutdown(self) -> None: ...


def room_path(room_code: str, key: str) -> str:
    """Build the logical store path of a key under a room."""
    return f"{ROOMS_COLLECTION}/{room_code}/{key}"
