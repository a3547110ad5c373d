"""Room state synchronization."""

from .client import RoomSyncClient, SliceState, default_value
from .notices import Notice, NoticeBoard
from .session import DeviceRegistry, DeviceSession, SessionSettings

__all__ = [
    "DeviceRegistry",
    "DeviceSession",
    "Notice",
    "NoticeBoard",
    "RoomSyncClient",
    "SessionSettings",
    "SliceState",
    "default_value",
]
