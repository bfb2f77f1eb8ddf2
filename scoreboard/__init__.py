"""Scoreboard adapter package for the tennis scoring engine.

This package provides thin adapters over `tennisgame.simulation` so that
front ends (e.g., the pygame viewer) can consume point-by-point outcomes
and the current score without re-implementing the scoring rules.
"""

__all__ = ["adapter"]
