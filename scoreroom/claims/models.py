"""Claim states of a roster entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from scoreroom.core.types import Player


@dataclass(frozen=True)
class Unclaimed:
    """No device holds the player."""


@dataclass(frozen=True)
class Claimed:
    """A device holds the player."""

    owner: str
    at: Optional[int] = None


ClaimState = Union[Unclaimed, Claimed]


def claim_state(player: Player) -> ClaimState:
    """Read the claim state off a roster entry."""
    owner = player.get("selectedBy")
    if not owner:
        return Unclaimed()
    return Claimed(owner=owner, at=player.get("selectedAt"))
