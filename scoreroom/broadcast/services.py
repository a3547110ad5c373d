"""Broadcast messages: building, targeting and the on-screen overlay policy."""

from __future__ import annotations

import threading
from typing import Optional

from scoreroom.core.constants import (
    BROADCAST_ALL,
    BROADCAST_ALL_NAME,
    BROADCAST_DISMISS_MS,
    BROADCAST_VISIBLE_MS,
)
from scoreroom.core.types import BroadcastMessage, Player
from scoreroom.errors import ValidationError
from scoreroom.utils import generate_id


def resolve_targets(
    players: list[Player], player_ids: Optional[list[str]]
) -> tuple[list[str], list[str]]:
    """Turn a recipient selection into ``(targets, targetNames)``.

    ``None`` means everyone. An explicit selection must name at least one
    player on the roster.
    """
    if player_ids is None:
        return [BROADCAST_ALL], [BROADCAST_ALL_NAME]
    selected = [p for p in players if p.get("id") in set(player_ids)]
    if not selected:
        raise ValidationError("Select at least one player!")
    return [p["id"] for p in selected], [p.get("name", "") for p in selected]


def build_message(
    text: str,
    targets: list[str],
    target_names: list[str],
    now: int,
    message_id: Optional[str] = None,
) -> BroadcastMessage:
    """Build a new log entry."""
    text = (text or "").strip()
    if not text:
        raise ValidationError("Message text required.")
    if not targets:
        raise ValidationError("Select at least one player!")
    return {
        "id": message_id or generate_id(),
        "text": text,
        "targets": list(targets),
        "targetNames": list(target_names),
        "timestamp": now,
    }


def is_targeted(message: BroadcastMessage, player_id: Optional[str]) -> bool:
    """Whether a message is addressed to the given player (or to everyone)."""
    targets = message.get("targets") or []
    if not targets or BROADCAST_ALL in targets:
        return True
    if not player_id:
        return False
    return player_id in targets


def latest_for(
    messages: list[BroadcastMessage], player_id: Optional[str]
) -> Optional[BroadcastMessage]:
    """Most recent applicable message by log position, not timestamp."""
    for message in reversed(messages or []):
        if message and is_targeted(message, player_id):
            return message
    return None


def visible_message(
    messages: list[BroadcastMessage],
    player_id: Optional[str],
    now: int,
    window_ms: int = BROADCAST_VISIBLE_MS,
) -> Optional[BroadcastMessage]:
    """The message to show right now, ignoring stale ones from a reload."""
    message = latest_for(messages, player_id)
    if message is None:
        return None
    if now - (message.get("timestamp") or 0) >= window_ms:
        return None
    return message


def overlay_title(message: BroadcastMessage) -> str:
    """Heading shown above a broadcast."""
    targets = message.get("targets") or []
    if not targets or BROADCAST_ALL in targets:
        return "BROADCAST"
    names = message.get("targetNames")
    return f"MESSAGE FOR: {', '.join(names) if names else 'YOU'}"


class BroadcastOverlay:
    """Tracks which broadcast a single device is currently showing.

    A message is shown once: after it is dismissed, manually or by the
    auto-dismiss timeout, it does not come back while it stays the latest.
    """

    def __init__(
        self,
        visible_ms: int = BROADCAST_VISIBLE_MS,
        dismiss_ms: int = BROADCAST_DISMISS_MS,
    ) -> None:
        self.visible_ms = visible_ms
        self.dismiss_ms = dismiss_ms
        self.current: Optional[BroadcastMessage] = None
        self._shown_at = 0
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    def update(
        self, messages: list[BroadcastMessage], player_id: Optional[str], now: int
    ) -> Optional[BroadcastMessage]:
        """Re-evaluate the overlay against the latest log and return what to show."""
        with self._lock:
            if self.current and now - self._shown_at >= self.dismiss_ms:
                self._seen.add(self.current["id"])
                self.current = None

            candidate = visible_message(messages, player_id, now, self.visible_ms)
            if candidate is None or candidate.get("id") in self._seen:
                return self.current
            if self.current and self.current.get("id") == candidate.get("id"):
                return self.current
            if self.current:
                self._seen.add(self.current["id"])
            self.current = candidate
            self._shown_at = now
            return self.current

    def dismiss(self) -> None:
        """Close the overlay by hand."""
        with self._lock:
            if self.current:
                self._seen.add(self.current["id"])
            self.current = None
