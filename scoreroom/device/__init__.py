"""Per-device identity and preference storage."""

from .identity import IdentityProvider, is_valid_room_code, normalize_room_code
from .storage import DeviceStorage, MemoryStorage, SessionStorage

__all__ = [
    "DeviceStorage",
    "IdentityProvider",
    "MemoryStorage",
    "SessionStorage",
    "is_valid_room_code",
    "normalize_room_code",
]
