from __future__ import annotations

"""Point winner selection strategies.

A strategy takes the two players of a match and returns the index (0 or 1)
of the player who wins the next point. The engine only cares about that
index, so tests can script exact point sequences while normal play draws
from a random source.
"""

import random
import threading
from typing import Callable, Iterable, Optional, Sequence
from weakref import WeakKeyDictionary

from .errors import InvalidArgument, InvalidState


WinnerStrategy = Callable[[Sequence[object]], int]

# One lock per random source, shared by every strategy drawing from it.
_RNG_LOCKS: "WeakKeyDictionary[random.Random, threading.Lock]" = WeakKeyDictionary()
_RNG_LOCKS_GUARD = threading.Lock()


def lock_for(rng: random.Random) -> threading.Lock:
    """Return the lock guarding draws from a given random source."""
    with _RNG_LOCKS_GUARD:
        lock = _RNG_LOCKS.get(rng)
        if lock is None:
            lock = _RNG_LOCKS[rng] = threading.Lock()
        return lock


def random_digit_biased(bias: int, rng: random.Random) -> int:
    """Return zero for a first player win or one for a second player win.

    Probability of one equals bias percent from zero to one hundred.
    """
    # Use 0..99 threshold so bias=100 means always 1, bias=0 means always 0
    roll = rng.randint(0, 99)
    return 1 if roll < bias else 0


def random_winner(rng: Optional[random.Random] = None) -> WinnerStrategy:
    """Return a strategy that picks either player with equal chance.

    The draw holds the lock of its rng, so one rng can be shared by
    matches on several threads.
    """
    source = rng if rng is not None else random.Random()
    lock = lock_for(source)

    def pick(players: Sequence[object]) -> int:
        with lock:
            return source.randrange(len(players))

    return pick


def biased_winner(bias: int, rng: Optional[random.Random] = None) -> WinnerStrategy:
    """Return a strategy where the second player wins bias percent of points."""
    if not 0 <= bias <= 100:
        raise InvalidArgument(f"bias must be within 0..100, got {bias}")
    source = rng if rng is not None else random.Random()
    lock = lock_for(source)

    def pick(players: Sequence[object]) -> int:
        with lock:
            return random_digit_biased(bias, source)

    return pick


def scripted_winner(sequence: Iterable[int]) -> WinnerStrategy:
    """Return a strategy that replays a fixed sequence of winner indices.

    Running past the end of the sequence raises InvalidState.
    """
    it = iter(sequence)

    def pick(players: Sequence[object]) -> int:
        try:
            return next(it)
        except StopIteration:
            raise InvalidState("scripted winner sequence exhausted") from None

    return pick


def strategy_for(bias: int, rng: random.Random) -> WinnerStrategy:
    """Pick the uniform strategy for an even bias, else the biased one."""
    if bias == 50:
        return random_winner(rng)
    return biased_winner(bias, rng)
