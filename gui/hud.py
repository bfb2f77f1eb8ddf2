from __future__ import annotations

"""HUD for the scoreboard: players, point levels, set points, sets and hints."""

from dataclasses import dataclass
from typing import Optional, Tuple
import pygame

from scoreboard.adapter import PointOutcome

from . import constants as C


POINT_LABELS = {0: "0", 15: "15", 30: "30", 40: "40"}


@dataclass
class HUDState:
    name_a: str = "A"
    name_b: str = "B"
    game_text: str = "Love - Love"
    points: Tuple[int, int] = (0, 0)
    set_points: Tuple[int, int] = (0, 0)
    sets: Tuple[int, int] = (0, 0)
    advantage: Optional[str] = None
    hint: str = "Space: next point | R: new match | Esc: quit"
    match_over: bool = False
    match_winner_name: Optional[str] = None
    last_point: str = ""
    points_played: int = 0


class HUD:
    def __init__(self, surf: pygame.Surface):
        # This sets up fonts and a small state object for drawing
        self.surf = surf
        self.font = pygame.font.SysFont("arial", 28)
        self.font_small = pygame.font.SysFont("arial", 18)
        self.state = HUDState()

    def update(self, **kwargs):
        # This updates values that the HUD will present
        for k, v in kwargs.items():
            if hasattr(self.state, k):
                setattr(self.state, k, v)

    def show_outcome(self, outcome: PointOutcome):
        """Copy the live score of a point outcome into the HUD state."""
        last_point = f"Point {outcome.winner_name}"
        if outcome.set_closed is not None:
            ga, gb = outcome.set_closed
            last_point += f", set {ga} - {gb}"
        self.update(
            name_a=outcome.name_a,
            name_b=outcome.name_b,
            game_text=outcome.game_text,
            points=outcome.points,
            set_points=outcome.set_points,
            sets=outcome.sets,
            advantage=outcome.advantage,
            match_over=outcome.match_over,
            match_winner_name=outcome.match_winner_name,
            last_point=last_point,
            points_played=self.state.points_played + 1,
        )

    def point_cell(self, key: str, points: int) -> str:
        """Return the text shown in the points column for one player."""
        if self.state.advantage is not None:
            return "AD" if self.state.advantage == key else ""
        return POINT_LABELS.get(points, str(points))

    def draw(self):
        # This renders the score table and a few text lines under it
        s = self.state
        pad = C.WINDOW_PADDING_PX
        x = pad
        y = pad

        header = ("Player", "Points", "Games", "Sets")
        rows = [
            (s.name_a, self.point_cell("A", s.points[0]), str(s.set_points[0]), str(s.sets[0]), C.PLAYER_A_COLOR),
            (s.name_b, self.point_cell("B", s.points[1]), str(s.set_points[1]), str(s.sets[1]), C.PLAYER_B_COLOR),
        ]

        cx = x
        for width, text in zip(C.COLUMN_WIDTHS_PX, header):
            img = self.font_small.render(text, True, C.HUD_TEXT_COLOR)
            self.surf.blit(img, (cx, y))
            cx += width
        y += self.font_small.get_height() + 8

        table_w = sum(C.COLUMN_WIDTHS_PX)
        for name, pts, games, sets, color in rows:
            pygame.draw.rect(self.surf, C.COURT_COLOR, pygame.Rect(x - 6, y - 4, table_w, C.ROW_HEIGHT_PX - 4))
            pygame.draw.rect(self.surf, color, pygame.Rect(x - 6, y - 4, 6, C.ROW_HEIGHT_PX - 4))
            cx = x + 6
            for width, text in zip(C.COLUMN_WIDTHS_PX, (name, pts, games, sets)):
                text_color = C.HIGHLIGHT_COLOR if text == "AD" else C.HUD_TEXT_COLOR
                img = self.font.render(text, True, text_color)
                self.surf.blit(img, (cx, y + (C.ROW_HEIGHT_PX - 4 - img.get_height()) // 2 - 4))
                cx += width
            y += C.ROW_HEIGHT_PX

        lines = [f"Game: {s.game_text}"]
        if s.last_point:
            lines.append(s.last_point)
        if s.match_over and s.match_winner_name:
            lines.append(f"Winner: {s.match_winner_name} after {s.points_played} points")
        lines.append(s.hint)

        y += 10
        for text in lines:
            img = self.font_small.render(text, True, C.HUD_TEXT_COLOR)
            bg = pygame.Surface((img.get_width() + 10, img.get_height() + 6), pygame.SRCALPHA)
            bg.fill((0, 0, 0, 120))
            self.surf.blit(bg, (x - 5, y - 3))
            self.surf.blit(img, (x, y))
            y += img.get_height() + 8
