from __future__ import annotations

"""Thin adapter over `tennisgame.simulation` to feed a scoreboard.

Exposes `PointStream`, an iterator that yields one structured record per
played point with the live scoreboard after that point: game text, point
levels, set points, sets won, deuce and advantage, and the match result
once it is decided.

The adapter consumes the underlying `simulate_match` generator and reads
the engine's match object for the live counters. Front ends should not
re-decide point winners; this stream carries the winner the engine chose.
"""

from dataclasses import dataclass
from typing import Iterator, Literal, Optional, Tuple

from tennisgame.config import MatchConfig
from tennisgame.engine import Match
from tennisgame.simulation import simulate_match
from tennisgame.strategies import WinnerStrategy


PlayerKey = Literal["A", "B"]


@dataclass
class PointOutcome:
    """Simple record for a point so a scoreboard can render it."""

    # Winner for the point as decided by the engine
    winner: PlayerKey

    # Human names
    name_a: str
    name_b: str

    # Live scoreboard after applying this point
    game_text: str
    points: Tuple[int, int]
    set_points: Tuple[int, int]
    sets: Tuple[int, int]
    deuce: bool = False
    advantage: Optional[PlayerKey] = None

    # Set the point closed, if any, as final games
    set_closed: Optional[Tuple[int, int]] = None

    # Match finished and match winner (if applicable)
    match_over: bool = False
    match_winner: Optional[PlayerKey] = None
    match_winner_name: Optional[str] = None

    @property
    def winner_name(self) -> str:
        return self.name_a if self.winner == "A" else self.name_b


def _id_to_key(identifier: Optional[int]) -> Optional[PlayerKey]:
    """Map an engine player identifier to player key A or B."""
    if identifier is None:
        return None
    return "A" if identifier == 1 else "B"


def PointStream(cfg: MatchConfig, pick_winner: Optional[WinnerStrategy] = None) -> Iterator[PointOutcome]:
    """Yield a structured outcome for each point.

    The point event is held back until the game, set and match events that
    follow it have been read, so each outcome carries the complete state.
    """
    it = simulate_match(cfg, pick_winner=pick_winner)

    match: Optional[Match] = None
    name_a = cfg.player_a
    name_b = cfg.player_b
    pending: Optional[PointOutcome] = None

    for event, data in it:
        if event == "start":
            match = data["match"]
            name_a = data["player_a"]
            name_b = data["player_b"]
            continue

        if event == "point":
            if pending is not None:
                yield pending
            pending = PointOutcome(
                winner=_id_to_key(data["winner_id"]),
                name_a=name_a,
                name_b=name_b,
                game_text=data["game_text"],
                points=tuple(data["score"]),
                set_points=match.set_points_score(),
                sets=match.sets_score(),
                deuce=data["deuce"],
                advantage=_id_to_key(data["advantage_id"]),
            )
        elif event == "set" and pending is not None:
            pending.set_closed = tuple(data["final_games"])
        elif event == "match" and pending is not None:
            pending.match_over = True
            pending.match_winner = _id_to_key(data["winner_id"])
            pending.match_winner_name = data["winner"]

    if pending is not None:
        yield pending


__all__ = ["PointOutcome", "PointStream"]
