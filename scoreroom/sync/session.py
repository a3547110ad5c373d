"""Per-device room sessions held by the web app."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from flask import current_app

from scoreroom.broadcast.services import BroadcastOverlay
from scoreroom.claims.services import ClaimCoordinator
from scoreroom.core.constants import (
    BROADCAST_DISMISS_MS,
    BROADCAST_VISIBLE_MS,
    CLIENT_ID_KEY,
    DEVICE_IDLE_MS,
    NOTICE_TTL_MS,
    ROLE_CONTESTANT,
    TIMER_DEFAULT_MINUTES,
)
from scoreroom.device.identity import IdentityProvider
from scoreroom.device.storage import MemoryStorage, SessionStorage
from scoreroom.utils import now_ms

from .client import RoomSyncClient
from .notices import NoticeBoard

if TYPE_CHECKING:
    from scoreroom.store.base import RemoteStore, StoreStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSettings:
    """Timing settings every device session shares."""

    notice_ttl_ms: int = NOTICE_TTL_MS
    broadcast_visible_ms: int = BROADCAST_VISIBLE_MS
    broadcast_dismiss_ms: int = BROADCAST_DISMISS_MS
    timer_default_minutes: int = TIMER_DEFAULT_MINUTES
    device_idle_ms: int = DEVICE_IDLE_MS


class DeviceSession:
    """Everything one device holds while it is in a room."""

    def __init__(
        self,
        client_id: str,
        store: Optional[RemoteStore],
        settings: SessionSettings,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.identity = IdentityProvider(MemoryStorage({CLIENT_ID_KEY: client_id}))
        self.notices = NoticeBoard(ttl_ms=settings.notice_ttl_ms, clock=clock)
        self.settings = settings
        self.clock = clock
        self.role: Optional[str] = None
        self.sync: Optional[RoomSyncClient] = None
        self.claims: Optional[ClaimCoordinator] = None
        self.overlay = self._new_overlay()
        self.last_seen = clock()
        self._store = store
        self._lock = threading.RLock()

    def _new_overlay(self) -> BroadcastOverlay:
        return BroadcastOverlay(
            visible_ms=self.settings.broadcast_visible_ms,
            dismiss_ms=self.settings.broadcast_dismiss_ms,
        )

    @property
    def client_id(self) -> str:
        return self.identity.client_id

    @property
    def room_code(self) -> Optional[str]:
        return self.sync.room_code if self.sync else None

    @property
    def ready(self) -> bool:
        return bool(self.sync and self.sync.ready)

    def enter_room(self, room_code: str, role: str) -> RoomSyncClient:
        """Switch this device to ``room_code``, dropping any previous room."""
        with self._lock:
            self.leave()
            if role == ROLE_CONTESTANT:
                self.identity.set_selected_player(room_code, None)
            sync = RoomSyncClient(self._store, room_code, self.notices)
            self.claims = ClaimCoordinator(sync, self.identity, clock=self.clock)
            self.sync = sync
            self.role = role
            self.identity.last_room = room_code
            sync.open()
            logger.info(f"Client {self.client_id} entered room {room_code} as {role}")
            return sync

    def leave(self) -> None:
        """Close the current room, if any."""
        with self._lock:
            if self.sync is not None:
                self.sync.close()
            self.sync = None
            self.claims = None
            self.role = None
            self.overlay = self._new_overlay()


class DeviceRegistry:
    """Device sessions of one app, keyed by client id."""

    def __init__(
        self,
        store: Optional[RemoteStore],
        status: StoreStatus,
        settings: SessionSettings,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.status = status
        self.settings = settings
        self.clock = clock
        self._devices: dict[str, DeviceSession] = {}
        self._lock = threading.Lock()

    def device(self, client_id: str) -> DeviceSession:
        """Return the session for a client, creating it on first use.

        Other devices that have been idle longer than ``device_idle_ms`` are
        dropped and their rooms closed.
        """
        now = self.clock()
        with self._lock:
            idle = [
                cid
                for cid, d in self._devices.items()
                if cid != client_id and now - d.last_seen > self.settings.device_idle_ms
            ]
            expired = [self._devices.pop(cid) for cid in idle]
            device = self._devices.get(client_id)
            if device is None:
                device = DeviceSession(client_id, self.store, self.settings, self.clock)
                self._devices[client_id] = device
            device.last_seen = now
        for stale in expired:
            logger.info(f"Closing idle device session {stale.client_id}")
            stale.leave()
        return device

    def close_all(self) -> None:
        """Close every device's room and stop the store's write workers."""
        with self._lock:
            devices = list(self._devices.values())
            self._devices.clear()
        for device in devices:
            device.leave()
        if self.store is not None:
            self.store.shutdown()

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)


def current_registry() -> DeviceRegistry:
    return current_app.extensions["room_sessions"]


def current_device() -> DeviceSession:
    """Session of the device making the current request.

    The client id lives in the signed session cookie so it survives reloads.
    """
    client_id = IdentityProvider(SessionStorage()).client_id
    return current_registry().device(client_id)
