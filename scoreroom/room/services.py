"""Service layer for entering rooms as scorer or contestant."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING, Any, Optional

from scoreroom.core.constants import META_KEY, SCORER_PIN_KEY
from scoreroom.device.identity import is_valid_room_code, normalize_room_code
from scoreroom.errors import (
    AuthorizationError,
    ConnectionUnavailableError,
    NotFoundError,
    ValidationError,
)
from scoreroom.store.base import room_path

if TYPE_CHECKING:
    from scoreroom.store.base import RemoteStore, StoreSnapshot, StoreStatus

logger = logging.getLogger(__name__)


def _error_code(error: Exception) -> str:
    return str(getattr(error, "code", None) or error)


class RoomService:
    """Handles room entry preconditions against the remote store."""

    @staticmethod
    def _require_store(
        store: Optional[RemoteStore], status: StoreStatus
    ) -> RemoteStore:
        if store is None or not status.ready:
            raise ConnectionUnavailableError(status.error or "Firebase not ready.")
        return store

    @staticmethod
    def _read(store: RemoteStore, path: str) -> StoreSnapshot:
        try:
            return store.once(path)
        except Exception as e:
            logger.error(f"Reading {path} failed: {e}")
            raise ConnectionUnavailableError(f"Firebase error: {_error_code(e)}") from e

    @staticmethod
    def _write(store: RemoteStore, path: str, value: Any) -> None:
        try:
            store.set(path, value).result()
        except Exception as e:
            logger.error(f"Writing {path} failed: {e}")
            raise ConnectionUnavailableError(
                f"Firebase write failed: {_error_code(e)}"
            ) from e

    @staticmethod
    def _require_code(raw_code: str) -> str:
        code = normalize_room_code(raw_code)
        if not is_valid_room_code(code):
            raise ValidationError("Enter a 4-digit room code.")
        return code

    @staticmethod
    def enter_as_scorer(
        store: Optional[RemoteStore],
        status: StoreStatus,
        raw_code: str,
        password: str,
        now: int,
    ) -> str:
        """Verify the scorer password, creating the room on first entry.

        Returns the normalised room code.
        """
        code = RoomService._require_code(raw_code)
        store = RoomService._require_store(store, status)
        if not password:
            raise ValidationError("Enter the scorer password.")

        pin = RoomService._read(store, room_path(code, SCORER_PIN_KEY))
        if not pin.exists:
            if not RoomService._read(store, room_path(code, META_KEY)).exists:
                RoomService._write(store, room_path(code, META_KEY), now)
            RoomService._write(store, room_path(code, SCORER_PIN_KEY), password)
            logger.info(f"Room {code} created.")
            return code

        if not hmac.compare_digest(str(pin.value).encode(), str(password).encode()):
            logger.warning(f"Rejected scorer entry for room {code}: wrong password.")
            raise AuthorizationError()
        return code

    @staticmethod
    def join_as_contestant(
        store: Optional[RemoteStore], status: StoreStatus, raw_code: str
    ) -> str:
        """Check that the room exists. Returns the normalised room code."""
        code = RoomService._require_code(raw_code)
        store = RoomService._require_store(store, status)
        if not RoomService._read(store, room_path(code, META_KEY)).exists:
            raise NotFoundError("Room not found.")
        return code
