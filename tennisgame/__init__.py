"""Two player tennis scoring engine.

Points, deuce and advantage, set points, sets and match completion, driven
one point at a time through `Match.play_point`.
"""

from .config import MatchConfig
from .engine import GamePoint, Match, Player, PointHistory, new_match
from .errors import InvalidArgument, InvalidState, TennisError
from .strategies import biased_winner, random_winner, scripted_winner

__all__ = [
    "GamePoint",
    "InvalidArgument",
    "InvalidState",
    "Match",
    "MatchConfig",
    "Player",
    "PointHistory",
    "TennisError",
    "biased_winner",
    "new_match",
    "random_winner",
    "scripted_winner",
]
