from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Sequence, Tuple, Union
import random
import time

from .config import MatchConfig
from .errors import InvalidArgument, InvalidState
from .logger import StructuredLogger, get_logger
from .strategies import WinnerStrategy, random_winner, strategy_for


MAX_PLAYERS = 2
# A set needs at least this many games, won by this margin. No tie-break.
MAX_SET_POINTS = 6
MAX_SET_POINT_MARGIN = 2
# The match ends once one player leads by this many sets.
MAX_SET_WON_MARGIN = 2


class GamePoint(IntEnum):
    ZERO = 0
    FIFTEEN = 15
    THIRTY = 30
    FORTY = 40

    def next(self) -> "GamePoint":
        """Return the level reached after winning a point. Forty stays forty."""
        return _SUCCESSOR[self]

    @property
    def label(self) -> str:
        return "Love" if self is GamePoint.ZERO else str(self.value)


_SUCCESSOR = {
    GamePoint.ZERO: GamePoint.FIFTEEN,
    GamePoint.FIFTEEN: GamePoint.THIRTY,
    GamePoint.THIRTY: GamePoint.FORTY,
    GamePoint.FORTY: GamePoint.FORTY,
}


@dataclass(eq=False)
class Player:
    name: Optional[str] = None
    # Assigned by the match: 1 for the first player, 2 for the second.
    identifier: Optional[int] = None
    game_points: GamePoint = GamePoint.ZERO
    # Games won in the current set.
    set_points: int = 0
    sets_won: int = 0
    won_point: bool = False
    advantage: bool = False

    @property
    def display_name(self) -> str:
        return self.name or f"Player {self.identifier}"


@dataclass(frozen=True)
class PointHistory:
    """Snapshot taken after each resolved point.

    For a won game the winner set points already include that game.
    """

    winner_point: GamePoint
    loser_point: GamePoint
    winner_set_points: int
    loser_set_points: int


PlayerRef = Union[int, Player]


class Match:
    """Two player tennis scoring state machine.

    Each point moves the winner through 0, 15, 30 and 40. Both players at 40
    is deuce, where the next point winner takes the advantage and converts it
    by winning again. A won game adds a set point; six set points with a two
    point margin win a set, and a two set lead ends the match.
    """

    def __init__(
        self,
        players: Optional[Sequence[Player]],
        pick_winner: Optional[WinnerStrategy] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[StructuredLogger] = None,
    ):
        if players is None:
            raise InvalidArgument("a match needs a list of players")
        players = list(players)
        if len(players) != MAX_PLAYERS:
            raise InvalidArgument("must be played by two players")
        if not all(isinstance(p, Player) for p in players):
            raise InvalidArgument("players must be Player instances")
        if players[0] is players[1]:
            raise InvalidArgument("a player cannot play against itself")
        if max_delay < 0:
            raise InvalidArgument(f"max_delay must not be negative, got {max_delay}")

        for identifier, player in enumerate(players, start=1):
            player.identifier = identifier
            player.game_points = GamePoint.ZERO
            player.set_points = 0
            player.sets_won = 0
            player.won_point = False
            player.advantage = False

        self.players: List[Player] = players
        self.history: List[PointHistory] = []
        self.advantage_holder: Optional[int] = None
        self.is_match_over = False
        self.max_delay = max_delay

        self._rng = rng if rng is not None else random.Random(seed)
        self._pick_winner = pick_winner if pick_winner is not None else random_winner(self._rng)
        # The pause has its own source so it never shifts the point sequence
        self._delay_rng = random.Random(seed)
        self._sleep = sleep
        self.log = logger if logger is not None else get_logger()

    # State views

    @property
    def deuce(self) -> bool:
        return all(p.game_points == GamePoint.FORTY for p in self.players)

    @property
    def is_in_advantage(self) -> bool:
        return self.advantage_holder is not None

    @property
    def winner(self) -> Optional[Player]:
        """Return the match winner once the match is over, else None."""
        if not self.is_match_over:
            return None
        a, b = self.players
        return a if a.sets_won > b.sets_won else b

    @property
    def points_played(self) -> int:
        return len(self.history)

    def score(self) -> Tuple[GamePoint, GamePoint]:
        a, b = self.players
        return GamePoint(a.game_points), GamePoint(b.game_points)

    def set_points_score(self) -> Tuple[int, int]:
        a, b = self.players
        return a.set_points, b.set_points

    def sets_score(self) -> Tuple[int, int]:
        a, b = self.players
        return a.sets_won, b.sets_won

    def player_by_identifier(self, identifier: int) -> Player:
        for player in self.players:
            if player.identifier == identifier:
                return player
        raise InvalidArgument(f"no player with identifier {identifier!r}")

    # Driving the match

    def play_point(self) -> None:
        """Play one point with a winner chosen by the strategy.

        Does nothing once the match is over.
        """
        if self._ignored_after_match():
            return
        self._delay()
        self._mark_point_winner(self._pick_winner(self.players))
        self.award_point()

    def point_won_by(self, player: PlayerRef) -> None:
        """Award the next point to a given player (index 0/1 or Player)."""
        index = self._index_of(player)
        if self._ignored_after_match():
            return
        self._mark_point_winner(index)
        self.award_point()

    def award_point(self) -> PointHistory:
        """Apply the scoring rules for the player marked as point winner.

        Returns the history record appended for this point.
        """
        winner = self.point_winner()
        loser = self.point_loser()

        if winner.game_points != GamePoint.FORTY:
            winner.game_points = GamePoint(winner.game_points).next()
            self.log.debug(
                "Point",
                winner=winner.display_name,
                score=self._score_text(),
            )
            return self._record(winner, loser)

        if self.deuce and not self.is_in_advantage:
            self._set_advantage(winner)
            return self._record(winner, loser)

        if self.is_in_advantage and self.advantage_holder != winner.identifier:
            self._set_advantage(winner)
            return self._record(winner, loser)

        return self._win_game(winner, loser)

    def point_winner(self) -> Player:
        winners = [p for p in self.players if p.won_point]
        if len(winners) != 1:
            raise InvalidState(f"get point winner: {len(winners)} players marked as point winner")
        return winners[0]

    def point_loser(self) -> Player:
        losers = [p for p in self.players if not p.won_point]
        if not losers:
            raise InvalidState("get point loser: every player is marked as point winner")
        return losers[0]

    # Internals

    def _ignored_after_match(self) -> bool:
        if self.is_match_over:
            self.log.warning("Point ignored, match is over", sets=list(self.sets_score()))
            return True
        return False

    def _delay(self) -> None:
        if self.max_delay > 0:
            self._sleep(self._delay_rng.uniform(0, self.max_delay))

    def _index_of(self, player: PlayerRef) -> int:
        if isinstance(player, Player):
            for index, candidate in enumerate(self.players):
                if candidate is player:
                    return index
            raise InvalidArgument(f"{player.display_name} does not play in this match")
        if isinstance(player, int) and not isinstance(player, bool) and 0 <= player < MAX_PLAYERS:
            return player
        raise InvalidArgument(f"unknown player reference {player!r}")

    def _mark_point_winner(self, index: int) -> None:
        if index not in range(MAX_PLAYERS):
            raise InvalidState(f"point winner index out of range: {index!r}")
        for player in self.players:
            player.won_point = False
        self.players[index].won_point = True

    def _set_advantage(self, winner: Player) -> None:
        for player in self.players:
            player.advantage = player is winner
        self.advantage_holder = winner.identifier
        self.log.debug("Advantage", player=winner.display_name)

    def _win_game(self, winner: Player, loser: Player) -> PointHistory:
        winner.set_points += 1
        record = self._record(winner, loser)
        self.log.info(
            "Game won",
            winner=winner.display_name,
            set_points=list(self.set_points_score()),
        )

        self._update_sets_won(winner, loser)
        self._update_match_over()
        self._reset_game()
        return record

    def _update_sets_won(self, winner: Player, loser: Player) -> None:
        margin = winner.set_points - loser.set_points
        if margin >= MAX_SET_POINT_MARGIN and winner.set_points >= MAX_SET_POINTS:
            winner.sets_won += 1
            self.log.info(
                "Set won",
                winner=winner.display_name,
                games=[winner.set_points, loser.set_points],
                sets=list(self.sets_score()),
            )
            winner.set_points = 0
            loser.set_points = 0

    def _update_match_over(self) -> None:
        a, b = self.players
        self.is_match_over = abs(a.sets_won - b.sets_won) >= MAX_SET_WON_MARGIN
        if self.is_match_over:
            self.log.info(
                "Match over",
                winner=self.winner.display_name,
                sets=list(self.sets_score()),
                points=self.points_played,
            )

    def _reset_game(self) -> None:
        for player in self.players:
            player.game_points = GamePoint.ZERO
            player.advantage = False
        self.advantage_holder = None

    def _record(self, winner: Player, loser: Player) -> PointHistory:
        record = PointHistory(
            winner_point=GamePoint(winner.game_points),
            loser_point=GamePoint(loser.game_points),
            winner_set_points=winner.set_points,
            loser_set_points=loser.set_points,
        )
        self.history.append(record)
        return record

    def _score_text(self) -> str:
        a, b = self.score()
        return f"{a.label}-{b.label}"

    def __repr__(self) -> str:
        a, b = self.players
        return (
            f"Match({a.display_name} {int(a.game_points)}/{a.set_points}/{a.sets_won}"
            f" vs {b.display_name} {int(b.game_points)}/{b.set_points}/{b.sets_won}"
            f", deuce={self.deuce}, over={self.is_match_over})"
        )


def new_match(
    players: Optional[Sequence[Player]],
    config: Optional[MatchConfig] = None,
    **kwargs,
) -> Match:
    """Build a match, taking the seed, bias and delay from a config if given.

    Keyword arguments override what the config provides.
    """
    if config is not None:
        config.validate()
        rng = kwargs.pop("rng", None) or random.Random(config.seed)
        kwargs.setdefault("pick_winner", strategy_for(config.bias, rng))
        kwargs.setdefault("max_delay", config.max_delay)
        kwargs["rng"] = rng
    return Match(players, **kwargs)
