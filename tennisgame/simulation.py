from __future__ import annotations

"""Drive a match to completion and describe it as a stream of events.

Front ends (the CLI, the scoreboard adapter and the GUI) consume these
events instead of poking at the engine between points.
"""

from typing import Callable, Dict, Generator, Optional, Tuple
import time

from .config import MatchConfig
from .engine import Match, Player, new_match
from .errors import InvalidState
from .strategies import WinnerStrategy


Event = Tuple[str, Dict]


def game_score_string(match: Match) -> str:
    """Return a friendly string for the score within the current game.

    This handles normal points and the deuce and advantage states.
    """
    if match.deuce:
        if match.is_in_advantage:
            holder = match.player_by_identifier(match.advantage_holder)
            return f"Ad {holder.display_name}"
        return "Deuce"
    a, b = match.score()
    return f"{a.label} - {b.label}"


def build_match(
    cfg: MatchConfig,
    pick_winner: Optional[WinnerStrategy] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Match:
    """Create a fresh match for the two players named in the config."""
    players = [Player(name=cfg.player_a), Player(name=cfg.player_b)]
    kwargs = {"sleep": sleep}
    if pick_winner is not None:
        kwargs["pick_winner"] = pick_winner
    return new_match(players, cfg, **kwargs)


def simulate_match(
    cfg: MatchConfig,
    pick_winner: Optional[WinnerStrategy] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Generator[Event, None, None]:
    """Play a match and yield start, point, game, set and match events.

    Every point yields one point event. A point that closes a game is
    followed by a game event, and by a set event when it also closes the
    set. The last event is always the match event.
    """
    match = build_match(cfg, pick_winner, sleep)
    a, b = match.players

    yield ("start", {"player_a": a.display_name, "player_b": b.display_name, "match": match})

    while not match.is_match_over:
        if match.points_played >= cfg.max_points:
            raise InvalidState(f"match still running after {cfg.max_points} points")

        set_points_before = match.set_points_score()
        sets_before = match.sets_score()

        match.play_point()

        winner = match.point_winner()
        record = match.history[-1]
        set_won = match.sets_score() != sets_before
        game_won = set_won or match.set_points_score() != set_points_before

        yield (
            "point",
            {
                "winner": winner.display_name,
                "winner_id": winner.identifier,
                "game_text": f"Game {winner.display_name}" if game_won else game_score_string(match),
                "score": tuple(int(p) for p in match.score()),
                "deuce": match.deuce,
                "advantage": (
                    match.player_by_identifier(match.advantage_holder).display_name
                    if match.is_in_advantage
                    else None
                ),
                "advantage_id": match.advantage_holder,
            },
        )

        if not game_won:
            continue

        # The record holds the set points before any set reset
        if winner is a:
            games = (record.winner_set_points, record.loser_set_points)
        else:
            games = (record.loser_set_points, record.winner_set_points)
        yield ("game", {"winner": winner.display_name, "set_score": games})

        if set_won:
            yield ("set", {"winner": winner.display_name, "final_games": games, "sets": match.sets_score()})

    yield (
        "match",
        {
            "winner": match.winner.display_name,
            "winner_id": match.winner.identifier,
            "final_sets": match.sets_score(),
            "points": match.points_played,
        },
    )
