"""
Pytest configuration and shared fixtures.
"""

import pytest

from tennisgame.engine import Match, Player
from tennisgame.logger import StructuredLogger, reset_logger


@pytest.fixture(autouse=True)
def fresh_global_logger():
    """Each test starts without a cached global logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    """Logger with no console or file output."""
    return StructuredLogger(name="tennisgame.test", level="DEBUG", enable_console=False)


@pytest.fixture
def players():
    """Two unnamed players."""
    return [Player(), Player()]


@pytest.fixture
def match(players, quiet_logger) -> Match:
    """Fresh match whose points are awarded explicitly by the test."""
    return Match(players, logger=quiet_logger)
