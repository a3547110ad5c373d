"""Client identity and per-room device preferences."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Optional

from scoreroom.core.constants import (
    CLIENT_ID_KEY,
    DEFAULT_LANGUAGE,
    LANGUAGE_KEY,
    LAST_ROOM_KEY,
    ROOM_CODE_LENGTH,
    SCORER_PIN_CACHE_KEY,
    SELECTED_PLAYER_KEY,
)
from scoreroom.utils import generate_id

if TYPE_CHECKING:
    from .storage import DeviceStorage

_NON_DIGITS = re.compile(r"\D")


def normalize_room_code(value: Any) -> str:
    """Strip everything but digits and keep at most four of them."""
    return _NON_DIGITS.sub("", str(value or ""))[:ROOM_CODE_LENGTH]


def is_valid_room_code(code: Optional[str]) -> bool:
    """Check that a code is exactly four digits."""
    return bool(code) and len(code) == ROOM_CODE_LENGTH and code.isdigit()


class IdentityProvider:
    """Reads and writes the identity values a device keeps between visits."""

    def __init__(self, storage: DeviceStorage) -> None:
        self.storage = storage

    @property
    def client_id(self) -> str:
        """Return this device's stable id, creating it on first use."""
        client_id = self.storage.get(CLIENT_ID_KEY)
        if not client_id:
            client_id = generate_id()
            self.storage.set(CLIENT_ID_KEY, client_id)
        return client_id

    @property
    def last_room(self) -> str:
        return normalize_room_code(self.storage.get(LAST_ROOM_KEY, ""))

    @last_room.setter
    def last_room(self, code: str) -> None:
        if code:
            self.storage.set(LAST_ROOM_KEY, code)

    def selected_player(self, room_code: str) -> Optional[str]:
        """Return the player id this device picked in a room, if any."""
        return self.storage.get(SELECTED_PLAYER_KEY.format(code=room_code))

    def set_selected_player(self, room_code: str, player_id: Optional[str]) -> None:
        self.storage.set(SELECTED_PLAYER_KEY.format(code=room_code), player_id)

    def scorer_pin(self, room_code: str) -> Optional[str]:
        """Return the scorer pin cached for a room, if any."""
        return self.storage.get(SCORER_PIN_CACHE_KEY.format(code=room_code))

    def set_scorer_pin(self, room_code: str, pin: Optional[str]) -> None:
        self.storage.set(SCORER_PIN_CACHE_KEY.format(code=room_code), pin)

    @property
    def language(self) -> str:
        return self.storage.get(LANGUAGE_KEY) or DEFAULT_LANGUAGE

    @language.setter
    def language(self, value: str) -> None:
        self.storage.set(LANGUAGE_KEY, value)
