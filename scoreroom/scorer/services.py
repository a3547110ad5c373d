"""Service layer for the scorer console."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Optional

from scoreroom.broadcast.services import build_message, resolve_targets
from scoreroom.core.constants import (
    MATCH_MANUAL,
    MATCHES_SLICE,
    MESSAGES_SLICE,
    PLAYERS_SLICE,
    TIMER_SLICE,
)
from scoreroom.errors import NotFoundError, ValidationError
from scoreroom.schedule.services import ScheduleGenerator
from scoreroom.stats.services import (
    manual_adjustment,
    new_player,
    recompute_player_stats,
    remove_player,
    rename_player,
    submit_match_result,
)
from scoreroom.timer.services import pause_timer, reset_timer, start_timer
from scoreroom.utils import now_ms

if TYPE_CHECKING:
    from scoreroom.core.types import (
        BroadcastMessage,
        Match,
        Player,
        TimerState,
    )
    from scoreroom.schedule.services import ScheduleFormat
    from scoreroom.sync.client import RoomSyncClient

logger = logging.getLogger(__name__)


class ScorerService:
    """Scorer mutations applied through a room's sync client.

    A scoring change is two separate writes: the match log first, then the
    recomputed roster.
    """

    def __init__(
        self,
        sync: RoomSyncClient,
        clock: Callable[[], int] = now_ms,
        generator: Optional[ScheduleGenerator] = None,
    ) -> None:
        self.sync = sync
        self.clock = clock
        self.generator = generator or ScheduleGenerator()

    def _recompute(self, matches: list[Match]) -> list[Player]:
        return self.sync.update(
            PLAYERS_SLICE, lambda players: recompute_player_stats(players, matches)
        )

    # Players

    def add_player(self, name: str) -> Player:
        player = new_player(name)
        self.sync.update(PLAYERS_SLICE, lambda players: [*players, player])
        return player

    def rename_player(self, player_id: str, name: str) -> list[Player]:
        return self.sync.update(
            PLAYERS_SLICE, lambda players: rename_player(players, player_id, name)
        )

    def delete_player(self, player_id: str) -> list[Player]:
        """Remove a player along with every match they appear in."""
        players, matches = remove_player(self.sync.players, self.sync.matches, player_id)
        self.sync.set_matches(matches)
        self.sync.set_players(players)
        logger.info(f"Deleted player {player_id} from room {self.sync.room_code}")
        return players

    # Scoring

    def adjust_score(self, player_id: str, delta: int) -> list[Player]:
        """Record a manual point adjustment for one player."""
        if not any(p.get("id") == player_id for p in self.sync.players):
            raise NotFoundError("Player not found.")
        adjustment = manual_adjustment(player_id, delta, self.clock())
        matches = self.sync.update(MATCHES_SLICE, lambda ms: [*ms, adjustment])
        return self._recompute(matches)

    def submit_result(self, match_id: str, score_p1: int, score_p2: int) -> list[Player]:
        """Complete a match and refresh every player's stats."""
        if score_p1 < 0 or score_p2 < 0:
            raise ValidationError("Scores cannot be negative.")
        match = next((m for m in self.sync.matches if m.get("id") == match_id), None)
        if match and match.get("type") == MATCH_MANUAL:
            raise ValidationError("Manual adjustments cannot be scored.")
        matches = self.sync.update(
            MATCHES_SLICE,
            lambda ms: submit_match_result(ms, match_id, score_p1, score_p2),
        )
        return self._recompute(matches)

    def generate_schedule(
        self, schedule_format: ScheduleFormat | str, confirmed: bool
    ) -> list[Match]:
        """Replace the whole match log with a freshly generated schedule."""
        if not confirmed:
            raise ValidationError("Confirm to clear existing matches.")
        matches = self.generator.generate(self.sync.players, schedule_format, self.clock())
        self.sync.set_matches(matches)
        self._recompute(matches)
        logger.info(
            f"Generated {len(matches)} matches ({schedule_format}) "
            f"in room {self.sync.room_code}"
        )
        return matches

    # Timer

    def start_timer(self, minutes: int) -> TimerState:
        now = self.clock()
        return self.sync.update(TIMER_SLICE, lambda timer: start_timer(timer, minutes, now))

    def pause_timer(self) -> TimerState:
        now = self.clock()
        return self.sync.update(TIMER_SLICE, lambda timer: pause_timer(timer, now))

    def reset_timer(self, minutes: int) -> TimerState:
        return self.sync.update(TIMER_SLICE, lambda timer: reset_timer(minutes))

    # Broadcast

    def broadcast(
        self, text: str, player_ids: Optional[list[str]] = None
    ) -> BroadcastMessage:
        """Append a message for everyone (``player_ids=None``) or chosen players."""
        if not (text or "").strip():
            raise ValidationError("Message text required.")
        targets, names = resolve_targets(self.sync.players, player_ids)
        message = build_message(text, targets, names, self.clock())
        self.sync.update(MESSAGES_SLICE, lambda messages: [*messages, message])
        return message

    def reset_room(self, confirmed: bool) -> None:
        """Clear the roster and the match log. The room itself stays."""
        if not confirmed:
            raise ValidationError("Confirm to reset all data.")
        self.sync.set_players([])
        self.sync.set_matches([])
        logger.info(f"Room {self.sync.room_code} reset.")
