"""Tests for match configuration."""

import pytest

from tennisgame.config import MatchConfig
from tennisgame.errors import InvalidArgument


def test_defaults_are_valid():
    cfg = MatchConfig()
    assert cfg.validate() is cfg
    assert cfg.player_a == "Player A"
    assert cfg.bias == 50
    assert cfg.max_delay == 0.0


@pytest.mark.parametrize("kwargs", [
    {"bias": -1},
    {"bias": 101},
    {"max_delay": -0.1},
    {"max_points": 0},
    {"log_level": "LOUD"},
])
def test_bad_values_rejected(kwargs):
    with pytest.raises(InvalidArgument):
        MatchConfig(**kwargs).validate()


def test_log_level_case_insensitive():
    MatchConfig(log_level="debug").validate()
