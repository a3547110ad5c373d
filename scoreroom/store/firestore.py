"""Firestore-backed implementation of the room store."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from scoreroom.core.constants import (
    ROOMS_COLLECTION,
    STATE_COLLECTION,
    STORE_WRITE_WORKERS,
    VALUE_FIELD,
)

from .base import StoreSnapshot

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

logger = logging.getLogger(__name__)


class WatchSubscription:
    """Wraps a Firestore watch so it can be closed like any subscription."""

    def __init__(self, watch: Any) -> None:
        self._watch = watch
        self._closed = False

    def close(self) -> None:
        """Stop listening. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._watch.unsubscribe()


class FirestoreRoomStore:
    """Maps logical ``rooms/{code}/{key}`` paths onto Firestore documents.

    Each key lives in its own document, ``rooms/{code}/state/{key}``, with the
    payload stored under a single ``value`` field. Writes run on a small
    thread pool so callers get a future instead of blocking.
    """

    def __init__(
        self, db: Client | None = None, max_workers: int = STORE_WRITE_WORKERS
    ) -> None:
        self._db = db if db is not None else firestore.client()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="room-store"
        )

    def _document(self, path: str) -> DocumentReference:
        segments = [s for s in path.split("/") if s]
        if len(segments) != 3 or segments[0] != ROOMS_COLLECTION:  # noqa: PLR2004
            raise ValueError(f"Unsupported store path: {path}")
        _, room_code, key = segments
        return (
            self._db.collection(ROOMS_COLLECTION)
            .document(room_code)
            .collection(STATE_COLLECTION)
            .document(key)
        )

    @staticmethod
    def _decode(doc: Any) -> tuple[Any, bool]:
        if doc is None or not doc.exists:
            return None, False
        data = doc.to_dict() or {}
        if VALUE_FIELD not in data:
            return None, False
        return data[VALUE_FIELD], True

    def once(self, path: str) -> StoreSnapshot:
        """Read a path a single time."""
        value, exists = self._decode(self._document(path).get())
        return StoreSnapshot(path=path, value=value, exists=exists)

    def set(self, path: str, value: Any) -> Future[Any]:
        """Replace the whole value at a path asynchronously."""
        doc_ref = self._document(path)
        return self._executor.submit(doc_ref.set, {VALUE_FIELD: value})

    def subscribe(
        self,
        path: str,
        on_value: Callable[[Any], None],
        on_error: Callable[[Exception], None],
    ) -> WatchSubscription:
        """Listen to a path; ``on_value`` receives ``None`` when it is absent."""
        doc_ref = self._document(path)

        def on_snapshot(doc_snapshots: list[Any], changes: Any, read_time: Any) -> None:
            try:
                value = None
                for doc in doc_snapshots:
                    decoded, exists = self._decode(doc)
                    if exists:
                        value = decoded
                on_value(value)
            except Exception as e:
                logger.error(f"Snapshot handling failed for {path}: {e}")
                on_error(e)

        return WatchSubscription(doc_ref.on_snapshot(on_snapshot))

    def shutdown(self) -> None:
        """Wait for pending writes and release the worker threads."""
        self._executor.shutdown(wait=True)
