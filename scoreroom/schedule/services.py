"""Match schedule generation for a room."""

from __future__ import annotations

import random
from enum import Enum
from typing import Any, Optional, Union

from scoreroom.core.constants import MATCH_MANUAL, MATCH_PENDING, MATCH_SCHEDULED
from scoreroom.core.types import Match, Player
from scoreroom.errors import ValidationError
from scoreroom.utils import generate_id


class ScheduleFormat(str, Enum):
    """Tournament formats the scorer can generate."""

    SINGLE_ELIMINATION = "1V1"
    SWISS = "SWISS"
    ROUND_ROBIN = "GROUP"


def create_match(p1_id: str, p2_id: str, round_no: int, timestamp: int) -> Match:
    """Build a pending scheduled match."""
    return {
        "id": generate_id(),
        "p1_id": p1_id,
        "p2_id": p2_id,
        "score_p1": 0,
        "score_p2": 0,
        "winnerId": None,
        "status": MATCH_PENDING,
        "type": MATCH_SCHEDULED,
        "timestamp": timestamp,
        "round": round_no,
    }


class ScheduleGenerator:
    """Utility class for generating a fresh match list from the roster."""

    MIN_PLAYERS = 2

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def generate(
        self, players: list[Player], schedule_format: Union[ScheduleFormat, str], now: int
    ) -> list[Match]:
        """Generate a schedule that replaces every existing match."""
        if len(players) < self.MIN_PLAYERS:
            raise ValidationError("Need at least 2 players!")
        schedule_format = ScheduleFormat(schedule_format)

        ids = [p["id"] for p in players]
        self.rng.shuffle(ids)

        if schedule_format is ScheduleFormat.ROUND_ROBIN:
            return self.generate_round_robin(ids, now)
        return self.generate_first_round(ids, now)

    @staticmethod
    def generate_first_round(player_ids: list[str], start_ts: int) -> list[Match]:
        """Pair neighbours; an odd player out gets a bye with no match."""
        matches = []
        timestamp = start_ts
        for i in range(0, len(player_ids) - 1, 2):
            matches.append(create_match(player_ids[i], player_ids[i + 1], 1, timestamp))
            timestamp += 1
        return matches

    @staticmethod
    def generate_round_robin(player_ids: list[str], start_ts: int) -> list[Match]:
        """Generate round robin pairings using the circle method."""
        if len(player_ids) < ScheduleGenerator.MIN_PLAYERS:
            return []

        ids: list[Optional[str]] = list(player_ids)
        if len(ids) % 2 != 0:
            ids.append(None)

        num_players = len(ids)
        num_rounds = num_players - 1
        matches = []
        timestamp = start_ts

        for round_no in range(1, num_rounds + 1):
            for i in range(num_players // 2):
                p1 = ids[i]
                p2 = ids[num_players - 1 - i]
                if p1 is not None and p2 is not None:
                    matches.append(create_match(p1, p2, round_no, timestamp))
                    timestamp += 1
            # Rotate ids: keep the first element fixed, rotate others
            ids = [ids[0], ids[-1]] + ids[1:-1]

        return matches


def bracket_rounds(matches: list[Match]) -> list[dict[str, Any]]:
    """Group scheduled matches by round in log order, for the bracket view."""
    rounds: dict[Any, list[Match]] = {}
    for match in matches:
        if match.get("type") == MATCH_MANUAL:
            continue
        rounds.setdefault(match.get("round") or 1, []).append(match)
    return [{"round": round_no, "matches": items} for round_no, items in rounds.items()]
