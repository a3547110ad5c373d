"""Broadcast message delivery."""

from .services import (
    BroadcastOverlay,
    build_message,
    is_targeted,
    latest_for,
    overlay_title,
    resolve_targets,
    visible_message,
)

__all__ = [
    "BroadcastOverlay",
    "build_message",
    "is_targeted",
    "latest_for",
    "overlay_title",
    "resolve_targets",
    "visible_message",
]
