"""Remote store interface and its Firestore implementation."""

from .base import RemoteStore, StoreSnapshot, StoreStatus, Subscription, room_path
from .firestore import FirestoreRoomStore

__all__ = [
    "FirestoreRoomStore",
    "RemoteStore",
    "StoreSnapshot",
    "StoreStatus",
    "Subscription",
    "room_path",
]
