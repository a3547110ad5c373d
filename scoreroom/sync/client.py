"""Bidirectional sync of a room's four state slices with the remote store."""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Optional

from scoreroom.core.constants import (
    MATCHES_SLICE,
    MESSAGES_SLICE,
    NOTICE_ERROR,
    PLAYERS_SLICE,
    SLICES,
    TIMER_SLICE,
)
from scoreroom.store.base import room_path
from scoreroom.timer.services import default_timer

from .notices import NoticeBoard

if TYPE_CHECKING:
    from concurrent.futures import Future

    from scoreroom.core.types import BroadcastMessage, Match, Player, TimerState
    from scoreroom.store.base import RemoteStore, Subscription

logger = logging.getLogger(__name__)

SliceListener = Callable[[str, Any], None]


def default_value(slice_name: str) -> Any:
    """Value a slice holds before hydration or when the store has none."""
    if slice_name == TIMER_SLICE:
        return default_timer()
    return []


def _error_code(error: BaseException) -> str:
    return str(getattr(error, "code", None) or "unknown")


@dataclass
class SliceState:
    """Local copy of one slice plus its sync flags."""

    name: str
    value: Any
    hydrated: bool = False
    echo_suppress: bool = False


class RoomSyncClient:
    """Keeps local copies of one room's slices in step with the store.

    Every slice follows the same protocol. A remote value marks the slice
    hydrated, arms echo suppression and replaces the local copy. Every local
    change (including the one a remote value just caused) then goes through
    the write-back rule: nothing is written before hydration, a change caused
    by a remote value only consumes the suppression flag, and anything else
    writes the whole slice back to the store.

    Concurrent edits from other clients are not merged; the last write the
    store sees wins.
    """

    def __init__(
        self,
        store: Optional[RemoteStore],
        room_code: Optional[str],
        notices: Optional[NoticeBoard] = None,
    ) -> None:
        self.room_code = room_code
        self.notices = notices if notices is not None else NoticeBoard()
        self._store = store
        self._lock = threading.RLock()
        self._slices = {name: SliceState(name, default_value(name)) for name in SLICES}
        self._subscriptions: list[Subscription] = []
        self._listeners: list[SliceListener] = []
        self._closed = False

    # Lifecycle

    def open(self) -> RoomSyncClient:
        """Reset local state and subscribe to every slice of the room."""
        with self._lock:
            stale, self._subscriptions = self._subscriptions, []
            for subscription in stale:
                subscription.close()
            self._closed = False
            for name in SLICES:
                self._slices[name] = SliceState(name, default_value(name))
            if self._store is None or not self.room_code:
                logger.info(
                    f"Room {self.room_code or '-'} not syncing: store unavailable "
                    "or no room code."
                )
                return self
            for name in SLICES:
                subscription = self._store.subscribe(
                    room_path(self.room_code, name),
                    partial(self._on_remote, name),
                    partial(self._on_subscription_error, name),
                )
                self._subscriptions.append(subscription)
        return self

    def close(self) -> None:
        """Unsubscribe from every slice. In-flight writes are left to finish."""
        with self._lock:
            self._closed = True
            subscriptions, self._subscriptions = self._subscriptions, []
            self._listeners.clear()
        for subscription in subscriptions:
            subscription.close()

    def __enter__(self) -> RoomSyncClient:
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # State inspection

    @property
    def ready(self) -> bool:
        """True once every slice has received its first remote value."""
        with self._lock:
            return all(s.hydrated for s in self._slices.values())

    def is_hydrated(self, slice_name: str) -> bool:
        with self._lock:
            return self._slices[slice_name].hydrated

    def slice_state(self, slice_name: str) -> SliceState:
        """Return a copy of a slice's value and flags."""
        with self._lock:
            return copy.deepcopy(self._slices[slice_name])

    def get(self, slice_name: str) -> Any:
        with self._lock:
            return copy.deepcopy(self._slices[slice_name].value)

    @property
    def players(self) -> list[Player]:
        return self.get(PLAYERS_SLICE)

    @property
    def matches(self) -> list[Match]:
        return self.get(MATCHES_SLICE)

    @property
    def timer(self) -> TimerState:
        return self.get(TIMER_SLICE)

    @property
    def messages(self) -> list[BroadcastMessage]:
        return self.get(MESSAGES_SLICE)

    def add_listener(self, listener: SliceListener) -> None:
        """Call ``listener(slice_name, value)`` after each applied remote value."""
        with self._lock:
            self._listeners.append(listener)

    # Local mutations

    def set(self, slice_name: str, value: Any) -> None:
        """Replace a slice locally and run the write-back rule."""
        with self._lock:
            self._slices[slice_name].value = copy.deepcopy(value)
            self._after_change(slice_name)

    def update(self, slice_name: str, fn: Callable[[Any], Any]) -> Any:
        """Apply ``fn`` to the current value and store the result atomically."""
        with self._lock:
            value = fn(copy.deepcopy(self._slices[slice_name].value))
            self.set(slice_name, value)
            return copy.deepcopy(value)

    def set_players(self, players: list[Player]) -> None:
        self.set(PLAYERS_SLICE, players)

    def set_matches(self, matches: list[Match]) -> None:
        self.set(MATCHES_SLICE, matches)

    def set_timer(self, timer: TimerState) -> None:
        self.set(TIMER_SLICE, timer)

    def set_messages(self, messages: list[BroadcastMessage]) -> None:
        self.set(MESSAGES_SLICE, messages)

    # Protocol

    def _on_remote(self, slice_name: str, value: Any) -> None:
        with self._lock:
            if self._closed:
                return
            state = self._slices[slice_name]
            state.hydrated = True
            state.echo_suppress = True
            state.value = default_value(slice_name) if value is None else value
            self._after_change(slice_name)
            listeners = list(self._listeners)
            current = copy.deepcopy(state.value)
        for listener in listeners:
            listener(slice_name, current)

    def _after_change(self, slice_name: str) -> None:
        state = self._slices[slice_name]
        if not state.hydrated:
            logger.debug(f"Skipping {slice_name} write before hydration.")
            return
        if state.echo_suppress:
            state.echo_suppress = False
            return
        self._write(slice_name, copy.deepcopy(state.value))

    def _write(self, slice_name: str, value: Any) -> None:
        if self._store is None or not self.room_code:
            return
        path = room_path(self.room_code, slice_name)
        try:
            future = self._store.set(path, value)
        except Exception as e:
            self._report_write_failure(slice_name, e)
            return
        future.add_done_callback(partial(self._on_write_done, slice_name))

    def _on_write_done(self, slice_name: str, future: Future[Any]) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._report_write_failure(slice_name, error)

    def _report_write_failure(self, slice_name: str, error: BaseException) -> None:
        if self._closed:
            logger.info(
                f"Ignoring {slice_name} write failure for closed room "
                f"{self.room_code}: {error}"
            )
            return
        logger.warning(f"Write of {slice_name} in room {self.room_code} failed: {error}")
        self.notices.push(f"Firebase write failed: {_error_code(error)}", NOTICE_ERROR)

    def _on_subscription_error(self, slice_name: str, error: Exception) -> None:
        if self._closed:
            return
        logger.warning(
            f"Subscription to {slice_name} in room {self.room_code} reported: {error}"
        )
        self.notices.push(f"Firebase error: {_error_code(error)}", NOTICE_ERROR)
