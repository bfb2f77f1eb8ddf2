"""Tests for the match scoring engine."""

import random

import pytest

from tennisgame.config import MatchConfig
from tennisgame.engine import GamePoint, Match, Player, PointHistory, new_match
from tennisgame.errors import InvalidArgument, InvalidState
from tennisgame.strategies import random_winner, scripted_winner


def _win_points(match, index, num_points):
    """Award several points in a row to one player."""
    for _ in range(num_points):
        match.point_won_by(index)


def _set_deuce(match):
    for player in match.players:
        player.game_points = GamePoint.FORTY


# --- Construction ---


def test_new_match_has_two_players_with_zero_points(match):
    """A fresh match starts zeroed with an empty history."""
    assert len(match.players) == 2
    for player in match.players:
        assert player.game_points == GamePoint.ZERO
        assert player.set_points == 0
        assert player.sets_won == 0
        assert player.won_point is False
        assert player.advantage is False
    assert match.history == []
    assert match.deuce is False
    assert match.advantage_holder is None
    assert match.is_match_over is False
    assert match.winner is None


def test_players_get_distinct_identifiers(match):
    a, b = match.players
    assert a.identifier is not None
    assert b.identifier is not None
    assert a.identifier != b.identifier
    assert match.player_by_identifier(b.identifier) is b


def test_construction_resets_stale_players(quiet_logger):
    """Players carried over from elsewhere are zeroed."""
    stale = Player(name="Old", game_points=GamePoint.THIRTY, set_points=4, sets_won=1, won_point=True)
    match = Match([stale, Player()], logger=quiet_logger)
    assert stale.game_points == GamePoint.ZERO
    assert stale.set_points == 0
    assert stale.sets_won == 0
    assert stale.won_point is False
    assert match.players[0] is stale


def test_missing_player_list_rejected():
    with pytest.raises(InvalidArgument):
        Match(None)


@pytest.mark.parametrize("count", [0, 1, 3])
def test_wrong_player_count_rejected(count):
    """Only exactly two players can play."""
    with pytest.raises(InvalidArgument, match="two players"):
        Match([Player() for _ in range(count)])


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        new_match([Player()])


def test_same_player_twice_rejected():
    p = Player()
    with pytest.raises(InvalidArgument):
        Match([p, p])


def test_negative_delay_rejected(players):
    with pytest.raises(InvalidArgument):
        Match(players, max_delay=-1)


# --- Single points ---


@pytest.mark.parametrize("seed", range(10))
def test_play_point_marks_exactly_one_winner(players, quiet_logger, seed):
    """After a random point exactly one player has won it."""
    match = Match(players, seed=seed, logger=quiet_logger)
    for _ in range(30):
        match.play_point()
        assert sum(p.won_point for p in match.players) == 1
        assert sum(not p.won_point for p in match.players) == 1


def test_first_point_moves_winner_off_zero(players, quiet_logger):
    match = Match(players, seed=3, logger=quiet_logger)
    match.play_point()
    assert match.point_winner().game_points != GamePoint.ZERO
    assert match.point_loser().game_points == GamePoint.ZERO


def test_point_progression(match):
    """0 -> 15 -> 30 -> 40 with no set point on the way."""
    a, b = match.players
    expected = [GamePoint.FIFTEEN, GamePoint.THIRTY, GamePoint.FORTY]
    for level in expected:
        match.point_won_by(0)
        assert a.game_points == level
        assert a.set_points == 0
    assert b.game_points == GamePoint.ZERO


def test_point_won_by_player_instance(match):
    b = match.players[1]
    match.point_won_by(b)
    assert b.game_points == GamePoint.FIFTEEN
    assert match.point_winner() is b


def test_point_won_by_unknown_player(match):
    with pytest.raises(InvalidArgument):
        match.point_won_by(Player(name="Stranger"))
    with pytest.raises(InvalidArgument):
        match.point_won_by(2)


def test_forty_against_fifteen_wins_game(match):
    """Winner at 40 with the opponent below 40 takes a set point."""
    a, b = match.players
    a.game_points = GamePoint.FORTY
    b.game_points = GamePoint.FIFTEEN

    match.point_won_by(0)

    assert a.set_points == 1
    assert b.set_points == 0
    assert match.score() == (GamePoint.ZERO, GamePoint.ZERO)


def test_four_straight_points_win_game(match):
    _win_points(match, 1, 4)
    assert match.set_points_score() == (0, 1)
    assert match.score() == (GamePoint.ZERO, GamePoint.ZERO)
    # The point winner stays readable after the game resets
    assert match.point_winner() is match.players[1]


def test_award_point_applies_manual_winner(match):
    a, b = match.players
    a.won_point = True
    record = match.award_point()
    assert a.game_points == GamePoint.FIFTEEN
    assert record == PointHistory(GamePoint.FIFTEEN, GamePoint.ZERO, 0, 0)


# --- Deuce and advantage ---


def test_deuce_detection(match):
    """Both players at 40 is deuce, anything else is not."""
    _win_points(match, 0, 3)
    assert match.deuce is False
    _win_points(match, 1, 2)
    assert match.deuce is False
    match.point_won_by(1)
    assert match.deuce is True


@pytest.mark.parametrize("levels", [
    (GamePoint.ZERO, GamePoint.ZERO),
    (GamePoint.FORTY, GamePoint.THIRTY),
    (GamePoint.FIFTEEN, GamePoint.FORTY),
])
def test_no_deuce_below_forty_all(match, levels):
    match.players[0].game_points, match.players[1].game_points = levels
    assert match.deuce is False


def test_deuce_grants_advantage(match):
    """From deuce the point winner takes the advantage and the score stays 40-40."""
    _set_deuce(match)
    a, b = match.players

    match.point_won_by(0)

    assert a.advantage is True
    assert b.advantage is False
    assert match.is_in_advantage
    assert match.advantage_holder == a.identifier
    assert match.deuce is True
    assert match.score() == (GamePoint.FORTY, GamePoint.FORTY)
    assert match.set_points_score() == (0, 0)


def test_advantage_converted_wins_game(match):
    """The advantage holder winning again takes the game."""
    _set_deuce(match)
    a, b = match.players

    match.point_won_by(0)
    match.point_won_by(0)

    assert a.set_points == 1
    assert match.deuce is False
    assert match.is_in_advantage is False
    assert match.advantage_holder is None
    assert a.advantage is False
    assert match.score() == (GamePoint.ZERO, GamePoint.ZERO)


def test_advantage_lost_moves_to_other_player(match):
    """The other player winning at advantage takes the advantage over."""
    _set_deuce(match)
    a, b = match.players

    match.point_won_by(0)
    match.point_won_by(1)

    assert b.advantage is True
    assert a.advantage is False
    assert match.advantage_holder == b.identifier
    assert match.deuce is True
    assert match.set_points_score() == (0, 0)
    assert match.score() == (GamePoint.FORTY, GamePoint.FORTY)


def test_long_deuce_game(match):
    """Advantage swaps back and forth until someone converts it."""
    _win_points(match, 0, 3)
    _win_points(match, 1, 3)
    for index in (0, 1, 0, 1):
        match.point_won_by(index)
        assert match.set_points_score() == (0, 0)
    assert match.advantage_holder == match.players[1].identifier
    match.point_won_by(1)
    assert match.set_points_score() == (0, 1)
    assert match.deuce is False


def test_advantage_set_by_hand_is_respected(match):
    a, b = match.players
    _set_deuce(match)
    a.advantage = True
    match.advantage_holder = a.identifier

    match.point_won_by(0)

    assert a.set_points == 1


# --- Sets ---


def test_six_against_four_wins_set(match):
    a, b = match.players
    a.set_points = 5
    b.set_points = 4
    _set_deuce(match)

    # advantage, then game
    match.point_won_by(0)
    match.point_won_by(0)

    assert a.set_points == 0
    assert b.set_points == 0
    assert a.sets_won == 1


def test_six_against_five_does_not_win_set(match):
    """Win by two: 6-5 keeps the set going, 7-5 closes it."""
    a, b = match.players
    a.set_points = 5
    b.set_points = 5

    _win_points(match, 0, 4)
    assert a.set_points == 6
    assert a.sets_won == 0

    _win_points(match, 0, 4)
    assert a.sets_won == 1
    assert match.set_points_score() == (0, 0)


def test_set_runs_past_six_until_margin_two(match):
    a, b = match.players
    a.set_points = 6
    b.set_points = 6

    _win_points(match, 1, 4)
    assert match.set_points_score() == (6, 7)
    _win_points(match, 0, 4)
    assert match.set_points_score() == (7, 7)
    _win_points(match, 0, 4)
    assert match.set_points_score() == (8, 7)
    _win_points(match, 0, 4)
    assert a.sets_won == 1
    assert match.set_points_score() == (0, 0)


def test_six_against_five_with_advantage_wins_set(match):
    a, b = match.players
    b.set_points = 5
    a.set_points = 6
    _set_deuce(match)
    a.advantage = True
    match.advantage_holder = a.identifier

    match.point_won_by(0)

    assert a.set_points == 0
    assert a.sets_won == 1


def test_four_against_three_no_set(match):
    a, b = match.players
    a.set_points = 4
    b.set_points = 3
    _set_deuce(match)
    a.advantage = True
    match.advantage_holder = a.identifier

    match.point_won_by(0)

    assert a.set_points == 5
    assert a.sets_won == 0


# --- Match over ---


def test_margin_of_two_sets_wins_match(match):
    a, b = match.players
    a.set_points = 5
    b.set_points = 3
    a.sets_won = 2
    b.sets_won = 1
    a.game_points = GamePoint.FORTY
    b.game_points = GamePoint.FIFTEEN

    match.point_won_by(0)

    assert a.sets_won == 3
    assert match.is_match_over
    assert match.winner is a


def test_margin_of_one_set_keeps_playing(match):
    a, b = match.players
    a.set_points = 5
    b.sets_won = 1
    a.game_points = GamePoint.FORTY

    match.point_won_by(0)

    assert match.sets_score() == (1, 1)
    assert match.is_match_over is False
    assert match.winner is None


def test_straight_sets_match(match):
    """Two sets of six love games end the match."""
    _win_points(match, 1, 4 * 6)
    assert match.sets_score() == (0, 1)
    assert not match.is_match_over
    _win_points(match, 1, 4 * 6)
    assert match.sets_score() == (0, 2)
    assert match.is_match_over
    assert match.winner is match.players[1]
    assert match.points_played == 48


def test_points_after_match_over_are_ignored(match):
    _win_points(match, 0, 48)
    assert match.is_match_over
    before = (len(match.history), match.set_points_score(), match.score())

    match.play_point()
    match.point_won_by(1)

    assert (len(match.history), match.set_points_score(), match.score()) == before


@pytest.mark.parametrize("seed", range(5))
def test_play_until_match_over_terminates(players, quiet_logger, seed):
    """A random match always ends, one history record per point."""
    match = Match(players, seed=seed, logger=quiet_logger)
    calls = 0
    while not match.is_match_over:
        match.play_point()
        calls += 1
        assert calls < 100_000
    assert len(match.history) == calls
    sa, sb = match.sets_score()
    assert abs(sa - sb) >= 2


def test_biased_config_match_terminates(quiet_logger):
    cfg = MatchConfig(seed=7, bias=80)
    match = new_match([Player("A"), Player("B")], cfg, logger=quiet_logger)
    while not match.is_match_over:
        match.play_point()
    assert match.winner.name in ("A", "B")


def test_config_bias_hundred_always_second_player(quiet_logger):
    cfg = MatchConfig(seed=1, bias=100)
    match = new_match([Player(), Player()], cfg, logger=quiet_logger)
    for _ in range(4):
        match.play_point()
    assert match.set_points_score() == (0, 1)


def test_new_match_rejects_bad_config():
    with pytest.raises(InvalidArgument):
        new_match([Player(), Player()], MatchConfig(bias=101))


# --- History ---


def test_history_length_matches_points(players, quiet_logger):
    match = Match(players, seed=11, logger=quiet_logger)
    for _ in range(5):
        match.play_point()
    assert len(match.history) == 5


def test_history_records(match):
    match.point_won_by(0)
    match.point_won_by(1)
    match.point_won_by(0)

    assert match.history == [
        PointHistory(GamePoint.FIFTEEN, GamePoint.ZERO, 0, 0),
        PointHistory(GamePoint.FIFTEEN, GamePoint.FIFTEEN, 0, 0),
        PointHistory(GamePoint.THIRTY, GamePoint.FIFTEEN, 0, 0),
    ]


def test_history_game_record_counts_the_game(match):
    """A game-winning point records the winner's set points including that game."""
    a, b = match.players
    b.set_points = 2
    _win_points(match, 0, 4)

    last = match.history[-1]
    assert last.winner_point == GamePoint.FORTY
    assert last.loser_point == GamePoint.ZERO
    assert last.winner_set_points == 1
    assert last.loser_set_points == 2


def test_history_set_record_taken_before_reset(match):
    a, b = match.players
    a.set_points = 5
    _win_points(match, 0, 4)

    assert a.sets_won == 1
    assert match.history[-1].winner_set_points == 6
    assert match.history[-1].loser_set_points == 0


def test_history_records_are_immutable(match):
    match.point_won_by(0)
    with pytest.raises(Exception):
        match.history[0].winner_point = GamePoint.FORTY


# --- Invariant guards ---


def test_point_winner_missing_raises(match):
    with pytest.raises(InvalidState):
        match.point_winner()
    with pytest.raises(InvalidState):
        match.award_point()


def test_two_point_winners_raise(match):
    for player in match.players:
        player.won_point = True
    with pytest.raises(InvalidState):
        match.point_winner()
    with pytest.raises(InvalidState):
        match.point_loser()


def test_strategy_out_of_range_raises(players, quiet_logger):
    match = Match(players, pick_winner=lambda _: 2, logger=quiet_logger)
    with pytest.raises(InvalidState):
        match.play_point()
    assert match.history == []


def test_bad_strategy_index_keeps_previous_point_winner(players, quiet_logger):
    match = Match(players, pick_winner=lambda _: 2, logger=quiet_logger)
    match.point_won_by(0)
    with pytest.raises(InvalidState, match="out of range"):
        match.play_point()
    assert match.point_winner() is players[0]
    assert match.points_played == 1


def test_invalid_state_is_runtime_error(match):
    with pytest.raises(RuntimeError):
        match.point_winner()


# --- Strategy and delay plumbing ---


def test_scripted_strategy_drives_play_point(players, quiet_logger):
    match = Match(players, pick_winner=scripted_winner([1, 1, 0]), logger=quiet_logger)
    for _ in range(3):
        match.play_point()
    assert match.score() == (GamePoint.FIFTEEN, GamePoint.THIRTY)


def test_same_seed_same_match(quiet_logger):
    def final(seed):
        m = Match([Player(), Player()], pick_winner=random_winner(random.Random(seed)), logger=quiet_logger)
        while not m.is_match_over:
            m.play_point()
        return m.sets_score(), m.history

    assert final(5) == final(5)


def test_delay_bounded_by_max(players, quiet_logger):
    pauses = []
    match = Match(players, seed=2, max_delay=0.5, sleep=pauses.append, logger=quiet_logger)
    for _ in range(10):
        match.play_point()
    assert len(pauses) == 10
    assert all(0 <= p <= 0.5 for p in pauses)


def test_no_delay_by_default(players, quiet_logger):
    pauses = []
    match = Match(players, seed=2, sleep=pauses.append, logger=quiet_logger)
    match.play_point()
    assert pauses == []


def test_delay_keeps_seeded_point_sequence(quiet_logger):
    def history(max_delay):
        match = Match([Player(), Player()], seed=8, max_delay=max_delay, sleep=lambda _: None, logger=quiet_logger)
        for _ in range(40):
            match.play_point()
        return match.history

    assert history(0.5) == history(0)


# --- Game point levels ---


def test_game_point_successors():
    assert GamePoint.ZERO.next() is GamePoint.FIFTEEN
    assert GamePoint.FIFTEEN.next() is GamePoint.THIRTY
    assert GamePoint.THIRTY.next() is GamePoint.FORTY
    assert GamePoint.FORTY.next() is GamePoint.FORTY


def test_game_point_labels():
    assert [p.label for p in GamePoint] == ["Love", "15", "30", "40"]
    assert GamePoint.FORTY > GamePoint.THIRTY
