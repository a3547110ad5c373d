"""Countdown timer transitions shared by scorer and contestant views."""

from __future__ import annotations

from scoreroom.core.types import TimerState
from scoreroom.errors import ValidationError


def default_timer() -> TimerState:
    """Return the timer state of a fresh room."""
    return {"targetTime": None, "isRunning": False, "remainingSeconds": 0}


def _validate_minutes(minutes: int) -> None:
    if minutes is None or minutes <= 0:
        raise ValidationError("Minutes must be a positive number.")


def start_timer(timer: TimerState, minutes: int, now: int) -> TimerState:
    """Start counting down.

    Resumes from the frozen ``remainingSeconds`` when there is one, otherwise
    counts down ``minutes`` from now.
    """
    if timer.get("isRunning"):
        raise ValidationError("Timer is already running.")
    seconds = timer.get("remainingSeconds") or 0
    if not seconds:
        _validate_minutes(minutes)
        seconds = minutes * 60
    return {
        **timer,
        "targetTime": now + seconds * 1000,
        "isRunning": True,
        "remainingSeconds": seconds,
    }


def pause_timer(timer: TimerState, now: int) -> TimerState:
    """Freeze the countdown at the seconds left."""
    if not timer.get("isRunning"):
        raise ValidationError("Timer is not running.")
    target = timer.get("targetTime") or now
    return {
        **timer,
        "targetTime": None,
        "isRunning": False,
        "remainingSeconds": max(0, (target - now) // 1000),
    }


def reset_timer(minutes: int) -> TimerState:
    """Stop the timer and arm it with a full ``minutes`` countdown."""
    _validate_minutes(minutes)
    return {"targetTime": None, "isRunning": False, "remainingSeconds": minutes * 60}


def remaining_seconds(timer: TimerState, now: int) -> int:
    """Seconds left as every client should display them."""
    if not timer.get("isRunning"):
        return timer.get("remainingSeconds") or 0
    target = timer.get("targetTime")
    if not target:
        return 0
    return max(0, (target - now) // 1000)


def format_countdown(seconds: int) -> str:
    """Format seconds as HH:MM:SS."""
    seconds = max(0, seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
