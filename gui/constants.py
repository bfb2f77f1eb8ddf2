from __future__ import annotations

"""Constants for the scoreboard viewer."""

# Colors (R,G,B)
BACKGROUND_COLOR = (10, 18, 24)
COURT_COLOR = (36, 90, 66)
PLAYER_A_COLOR = (66, 135, 245)  # blue for Player A
PLAYER_B_COLOR = (236, 88, 64)   # red for Player B
HUD_TEXT_COLOR = (245, 245, 245)
HIGHLIGHT_COLOR = (255, 221, 0)

# Rendering
DEFAULT_WINDOW = (800, 420)
TARGET_FPS = 30
WINDOW_PADDING_PX = 24

# Scoreboard columns: name, points, set points, sets
COLUMN_WIDTHS_PX = (260, 110, 110, 90)
ROW_HEIGHT_PX = 48
