"""Stats recomputation over the match log."""

from .services import (
    manual_adjustment,
    new_player,
    rank_players,
    recompute_player_stats,
    remove_player,
    rename_player,
    submit_match_result,
)

__all__ = [
    "manual_adjustment",
    "new_player",
    "rank_players",
    "recompute_player_stats",
    "remove_player",
    "rename_player",
    "submit_match_result",
]
