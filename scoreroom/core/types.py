"""Core data types for the scoreroom application."""

from typing import Optional, TypedDict, Union  # noqa: UP035


class Player(TypedDict, total=False):
    """A contestant on the room roster."""

    id: str
    name: str
    score: int
    wins: int
    losses: int
    selectedBy: Optional[str]
    selectedAt: Optional[int]


class Match(TypedDict, total=False):
    """An entry in the append-only match log."""

    id: str
    p1_id: str
    p2_id: Optional[str]
    score_p1: int
    score_p2: int
    winnerId: Optional[str]
    status: str
    type: str
    timestamp: int
    round: Union[int, str]


class TimerState(TypedDict, total=False):
    """Shared countdown state."""

    targetTime: Optional[int]
    isRunning: bool
    remainingSeconds: int


class BroadcastMessage(TypedDict, total=False):
    """A message in the broadcast log."""

    id: str
    text: str
    targets: list[str]
    targetNames: list[str]
    timestamp: int
