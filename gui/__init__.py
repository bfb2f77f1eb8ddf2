"""Pygame scoreboard viewer for the tennis scoring engine.

Contains the HUD that renders a point outcome and the application entry
point (`python -m gui.app`).
"""

__all__ = [
    "constants",
    "hud",
    "app",
]
