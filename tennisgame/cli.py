from __future__ import annotations

import argparse
import sys
import re
from typing import Callable

from .config import LOG_LEVELS, MatchConfig
from .errors import InvalidArgument, TennisError
from .logger import get_logger, reset_logger
from .simulation import simulate_match


def prompt_with_retries(prompt: str, validate: Callable[[str], bool], transform: Callable[[str], object] = lambda x: x, max_attempts: int = 10):
    """Ask for input with validation and a small retry budget.

    Returns the transformed value or exits on repeated invalid entries.
    """
    attempts = 0
    while attempts < max_attempts:
        try:
            raw = input(prompt).strip()
        except EOFError:
            print("Error: no input provided.")
            sys.exit(1)
        if validate(raw):
            return transform(raw)
        print("Invalid input. Please try again.")
        attempts += 1
    print("Multiple invalid attempts. Exiting.")
    sys.exit(1)


def is_valid_name(s: str) -> bool:
    """Return True if a player name has only letters and spaces."""
    s = s.strip()
    return bool(s) and re.fullmatch(r"[A-Za-z ]+", s) is not None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tennis game scoring simulator (CLI)")
    parser.add_argument("--player-a", dest="player_a", type=str, help="Player A name", default=None)
    parser.add_argument("--player-b", dest="player_b", type=str, help="Player B name", default=None)
    parser.add_argument("--seed", dest="seed", type=int, help="Random seed for reproducibility", default=None)
    parser.add_argument("--bias", dest="bias", type=int, default=50, help="Chance in percent that B wins a point (default 50)")
    parser.add_argument("--delay", dest="max_delay", type=float, default=0.0, help="Max pause in seconds before each point (default 0)")
    parser.add_argument("--log-level", dest="log_level", type=str.upper, choices=LOG_LEVELS, default="WARNING", help="Engine log level (default WARNING)")
    parser.add_argument("--prompt", action="store_true", help="Ask for player names interactively")
    return parser


def main(argv=None) -> int:
    """Run the text mode interface for the tennis simulator.

    This plays one match to the end and prints each event as text.
    """
    args = build_parser().parse_args(argv)

    names = []
    for flag, value, default in (("A", args.player_a, "Player A"), ("B", args.player_b, "Player B")):
        if value is None and args.prompt:
            names.append(prompt_with_retries(f"Player {flag} name: ", is_valid_name, str.strip))
            continue
        name = (value if value is not None else default).strip()
        if not is_valid_name(name):
            print("Invalid input. Please try again.")
            return 2
        names.append(name)
    player_a, player_b = names

    cfg = MatchConfig(
        player_a=player_a,
        player_b=player_b,
        seed=args.seed,
        bias=args.bias,
        max_delay=args.max_delay,
        log_level=args.log_level,
    )
    try:
        cfg.validate()
    except InvalidArgument as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    reset_logger()
    get_logger(level=cfg.log_level)

    try:
        for event, data in simulate_match(cfg):
            if event == "start":
                print(f"Start of play - {cfg.player_a} vs {cfg.player_b}")
            elif event == "point":
                winner = data["winner"]
                text = data["game_text"]
                if text.startswith("Game "):
                    print(f"Point {winner}, {text}")
                else:
                    print(f"Point {winner}, Game Score: {text}")
            elif event == "game":
                ga, gb = data["set_score"]
                print(f"Set Score: {cfg.player_a} vs {cfg.player_b} {ga} - {gb}")
            elif event == "set":
                ga, gb = data["final_games"]
                print(f"Set won by {data['winner']}. Games: {cfg.player_a} vs {cfg.player_b} {ga} - {gb}")
            elif event == "match":
                sa, sb = data["final_sets"]
                print(
                    f"Winner: {data['winner']}. Final Score (sets): {cfg.player_a} vs {cfg.player_b} {sa} - {sb}"
                )
    except TennisError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
