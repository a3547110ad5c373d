"""Exclusive, best-effort binding of a contestant device to a roster entry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

from scoreroom.core.constants import NOTICE_WARNING, PLAYERS_SLICE
from scoreroom.core.types import Player
from scoreroom.errors import ClaimConflictError, NotFoundError, SyncPendingError
from scoreroom.utils import now_ms

from .models import Claimed, claim_state

if TYPE_CHECKING:
    from scoreroom.device.identity import IdentityProvider
    from scoreroom.sync.client import RoomSyncClient

logger = logging.getLogger(__name__)


def claim_player(
    players: list[Player], player_id: str, client_id: str, now: int
) -> list[Player]:
    """Claim ``player_id`` for ``client_id`` and return the new roster.

    Any other player the same client held is released in the same roster.

    Raises:
        NotFoundError: If the player is not on the roster.
        ClaimConflictError: If another client already holds the player.
    """
    target = next((p for p in players if p.get("id") == player_id), None)
    if target is None:
        raise NotFoundError("Player not found.")
    state = claim_state(target)
    if isinstance(state, Claimed) and state.owner != client_id:
        raise ClaimConflictError()

    roster = []
    for p in players:
        if p.get("id") == player_id:
            p = {**p, "selectedBy": client_id, "selectedAt": now}
        elif p.get("selectedBy") == client_id:
            p = {**p, "selectedBy": None, "selectedAt": None}
        roster.append(p)
    return roster


def release_player(
    players: list[Player], player_id: str, client_id: str
) -> list[Player]:
    """Clear a claim held by ``client_id``. Anyone else's claim is left alone."""
    return [
        {**p, "selectedBy": None, "selectedAt": None}
        if p.get("id") == player_id and p.get("selectedBy") == client_id
        else p
        for p in players
    ]


def resolve_selection(
    players: list[Player], selected_id: Optional[str], client_id: str
) -> Optional[str]:
    """Return the selection a device may keep given the latest roster.

    A selection is dropped when its player is gone or another device now
    holds it. A lost claim is never re-asserted.
    """
    if not selected_id:
        return None
    player = next((p for p in players if p.get("id") == selected_id), None)
    if player is None:
        return None
    state = claim_state(player)
    if isinstance(state, Claimed) and state.owner != client_id:
        return None
    return selected_id


class ClaimCoordinator:
    """Drives claims for one device in one room through its sync client."""

    def __init__(
        self,
        sync: RoomSyncClient,
        identity: IdentityProvider,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.sync = sync
        self.identity = identity
        self._clock = clock
        sync.add_listener(self._on_slice)

    @property
    def room_code(self) -> str:
        return self.sync.room_code or ""

    @property
    def selected_player_id(self) -> Optional[str]:
        return self.identity.selected_player(self.room_code)

    def current_player(self) -> Optional[Player]:
        selected = self.selected_player_id
        if not selected:
            return None
        return next((p for p in self.sync.players if p.get("id") == selected), None)

    def claim(self, player_id: str) -> Player:
        """Claim a player for this device and remember the selection."""
        if not self.sync.ready:
            raise SyncPendingError()
        client_id = self.identity.client_id
        roster = self.sync.update(
            PLAYERS_SLICE,
            lambda players: claim_player(players, player_id, client_id, self._clock()),
        )
        self.identity.set_selected_player(self.room_code, player_id)
        logger.info(f"Client {client_id} claimed {player_id} in room {self.room_code}")
        return next(p for p in roster if p.get("id") == player_id)

    def release(self) -> None:
        """Give up this device's player, if it has one."""
        selected = self.selected_player_id
        if not selected:
            return
        if self.sync.ready:
            client_id = self.identity.client_id
            self.sync.update(
                PLAYERS_SLICE,
                lambda players: release_player(players, selected, client_id),
            )
        self.identity.set_selected_player(self.room_code, None)

    def reconcile(self) -> Optional[str]:
        """Clear the local selection if the roster no longer backs it."""
        if not self.sync.ready:
            return self.selected_player_id
        selected = self.selected_player_id
        resolved = resolve_selection(self.sync.players, selected, self.identity.client_id)
        if selected and resolved is None:
            logger.info(
                f"Selection {selected} in room {self.room_code} is no longer "
                f"held by client {self.identity.client_id}"
            )
            self.identity.set_selected_player(self.room_code, None)
            self.sync.notices.push(
                "Your player is no longer available. Please choose again.",
                NOTICE_WARNING,
            )
        return resolved

    def _on_slice(self, slice_name: str, value: Any) -> None:
        self.reconcile()
