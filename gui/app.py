from __future__ import annotations

"""Pygame scoreboard viewer for the tennis scoring engine.

Run with: `python -m gui.app`.

Controls:
  - Space/Click: next point
  - R: start a new match
  - Q/Esc: quit
"""

import argparse
import sys
from typing import Iterator, Optional

try:
    import pygame
except Exception as e:  # pragma: no cover - runtime dependency hint
    print("Pygame is required for GUI. Install via: pip install tennis-game-dojo[gui]", file=sys.stderr)
    raise

from tennisgame.config import MatchConfig
from scoreboard.adapter import PointStream, PointOutcome

from . import constants as C
from .hud import HUD, HUDState


def parse_args(argv=None):
    """Parse command line flags for the GUI app."""
    p = argparse.ArgumentParser(description="Tennis scoreboard (Pygame)")
    p.add_argument("--player-a", default="Player A")
    p.add_argument("--player-b", default="Player B")
    p.add_argument("--bias", type=int, default=50)
    p.add_argument("--seed", type=int, default=None, help="Deterministic seed (optional)")
    p.add_argument("--width", type=int, default=C.DEFAULT_WINDOW[0])
    p.add_argument("--height", type=int, default=C.DEFAULT_WINDOW[1])
    p.add_argument("--fps", type=int, default=C.TARGET_FPS)
    return p.parse_args(argv)


def run(argv=None) -> int:
    """Run the pygame scoreboard viewer.

    Each Space press pulls one point from the engine and redraws the score.
    """
    args = parse_args(argv)
    cfg = MatchConfig(
        player_a=args.player_a.strip() or "Player A",
        player_b=args.player_b.strip() or "Player B",
        seed=args.seed,
        bias=args.bias,
    ).validate()

    pygame.init()
    pygame.display.set_caption("Tennis Game Dojo - Scoreboard")
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    hud = HUD(screen)

    stream: Iterator[PointOutcome] = PointStream(cfg)
    last_outcome: Optional[PointOutcome] = None

    def new_match():
        """Start a fresh stream and clear the HUD."""
        nonlocal stream, last_outcome
        stream = PointStream(cfg)
        last_outcome = None
        hud.state = HUDState()
        hud.update(name_a=cfg.player_a, name_b=cfg.player_b)

    def next_point():
        """Advance the stream by one point unless the match is over."""
        nonlocal last_outcome
        if last_outcome is not None and last_outcome.match_over:
            return
        outcome = next(stream, None)
        if outcome is None:
            return
        last_outcome = outcome
        hud.show_outcome(outcome)

    new_match()
    running = True
    while running:
        clock.tick(args.fps)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                hud.surf = screen
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                elif event.key == pygame.K_SPACE:
                    next_point()
                elif event.key == pygame.K_r:
                    new_match()
            elif event.type == pygame.MOUSEBUTTONDOWN:
                next_point()

        screen.fill(C.BACKGROUND_COLOR)
        hud.draw()
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
