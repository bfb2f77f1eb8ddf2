from __future__ import annotations

"""Error types raised by the scoring engine."""


class TennisError(Exception):
    """Base class for every error the engine raises."""


class InvalidArgument(TennisError, ValueError):
    """Raised when a match is built or driven with bad input.

    This covers a missing player list, a list that does not hold exactly two
    players, and references to a player that is not part of the match.
    """


class InvalidState(TennisError, RuntimeError):
    """Raised when the engine finds its own state broken.

    A point was resolved with no winner marked, or no loser could be found.
    This points at an engine defect and must reach the caller.
    """
