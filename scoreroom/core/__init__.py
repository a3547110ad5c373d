"""Core types and constants for the scoreroom application."""

from .types import BroadcastMessage, Match, Player, TimerState

__all__ = ["BroadcastMessage", "Match", "Player", "TimerState"]
