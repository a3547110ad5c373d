"""Player claim coordination."""

from .models import Claimed, ClaimState, Unclaimed, claim_state
from .services import ClaimCoordinator, claim_player, release_player, resolve_selection

__all__ = [
    "ClaimCoordinator",
    "ClaimState",
    "Claimed",
    "Unclaimed",
    "claim_player",
    "claim_state",
    "release_player",
    "resolve_selection",
]
