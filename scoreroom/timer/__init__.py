"""Shared countdown timer."""

from .services import (
    default_timer,
    format_countdown,
    pause_timer,
    remaining_seconds,
    reset_timer,
    start_timer,
)

__all__ = [
    "default_timer",
    "format_countdown",
    "pause_timer",
    "remaining_seconds",
    "reset_timer",
    "start_timer",
]
