"""Derived player statistics folded from the match log."""

from __future__ import annotations

from typing import Optional

from scoreroom.core.constants import (
    MANUAL_ROUND,
    MATCH_COMPLETED,
    MATCH_MANUAL,
)
from scoreroom.core.types import Match, Player
from scoreroom.errors import NotFoundError, ValidationError
from scoreroom.utils import generate_id


def new_player(name: str, player_id: Optional[str] = None) -> Player:
    """Build a roster entry with zeroed stats and no claim."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name required.")
    return {
        "id": player_id or generate_id(),
        "name": name,
        "score": 0,
        "wins": 0,
        "losses": 0,
        "selectedBy": None,
        "selectedAt": None,
    }


def recompute_player_stats(players: list[Player], matches: list[Match]) -> list[Player]:
    """Rebuild score, wins and losses for every player from the match log.

    Only completed matches count. Manual adjustments add to the score but
    never to wins or losses. A side whose player left the roster is skipped.
    """
    stats: list[Player] = [
        {**p, "score": 0, "wins": 0, "losses": 0} for p in players
    ]
    by_id = {p["id"]: p for p in stats if p.get("id")}

    for match in matches:
        if match.get("status") != MATCH_COMPLETED:
            continue

        p1 = by_id.get(match.get("p1_id"))
        p2_id = match.get("p2_id")
        p2 = by_id.get(p2_id) if p2_id else None

        if p1:
            p1["score"] += match.get("score_p1") or 0
        if p2:
            p2["score"] += match.get("score_p2") or 0

        winner_id = match.get("winnerId")
        if winner_id and match.get("type") != MATCH_MANUAL:
            loser_id = p2_id if winner_id == match.get("p1_id") else match.get("p1_id")
            winner = by_id.get(winner_id)
            loser = by_id.get(loser_id) if loser_id else None
            if winner:
                winner["wins"] += 1
            if loser:
                loser["losses"] += 1

    return stats


def rank_players(players: list[Player]) -> list[Player]:
    """Sort by score, highest first. Ties keep roster order."""
    return sorted(players, key=lambda p: p.get("score") or 0, reverse=True)


def submit_match_result(
    matches: list[Match], match_id: str, score_p1: int, score_p2: int
) -> list[Match]:
    """Complete one match with its final score and return the new log."""
    match = next((m for m in matches if m.get("id") == match_id), None)
    if match is None:
        raise NotFoundError("Match not found.")

    winner_id = None
    if score_p1 > score_p2:
        winner_id = match.get("p1_id")
    elif score_p2 > score_p1:
        winner_id = match.get("p2_id")

    return [
        {
            **m,
            "score_p1": score_p1,
            "score_p2": score_p2,
            "winnerId": winner_id,
            "status": MATCH_COMPLETED,
        }
        if m.get("id") == match_id
        else m
        for m in matches
    ]


def manual_adjustment(
    player_id: str, delta: int, now: int, match_id: Optional[str] = None
) -> Match:
    """Build the synthetic self-match that records a manual point change."""
    if not delta:
        raise ValidationError("Enter a non-zero amount of points.")
    return {
        "id": match_id or generate_id(),
        "p1_id": player_id,
        "p2_id": None,
        "score_p1": delta,
        "score_p2": 0,
        "winnerId": player_id if delta > 0 else None,
        "status": MATCH_COMPLETED,
        "type": MATCH_MANUAL,
        "timestamp": now,
        "round": MANUAL_ROUND,
    }


def remove_player(
    players: list[Player], matches: list[Match], player_id: str
) -> tuple[list[Player], list[Match]]:
    """Drop a player and every match that references them, then recompute."""
    if not any(p.get("id") == player_id for p in players):
        raise NotFoundError("Player not found.")
    remaining_players = [p for p in players if p.get("id") != player_id]
    remaining_matches = [
        m
        for m in matches
        if m.get("p1_id") != player_id and m.get("p2_id") != player_id
    ]
    return (
        recompute_player_stats(remaining_players, remaining_matches),
        remaining_matches,
    )


def rename_player(players: list[Player], player_id: str, name: str) -> list[Player]:
    """Change a player's display name."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name required.")
    if not any(p.get("id") == player_id for p in players):
        raise NotFoundError("Player not found.")
    return [{**p, "name": name} if p.get("id") == player_id else p for p in players]
