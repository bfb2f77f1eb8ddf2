from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidArgument


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MatchConfig:
    player_a: str = "Player A"
    player_b: str = "Player B"
    seed: Optional[int] = None
    # Probability percent that B wins a point. 50 keeps the draw uniform.
    bias: int = 50
    # Upper bound in seconds for the cosmetic pause before each point.
    max_delay: float = 0.0
    # Hard stop for simulation loops.
    max_points: int = 100_000
    log_level: str = "WARNING"

    def validate(self) -> "MatchConfig":
        """Check the values and return the config unchanged.

        Raises InvalidArgument on the first bad value found.
        """
        if not 0 <= self.bias <= 100:
            raise InvalidArgument(f"bias must be within 0..100, got {self.bias}")
        if self.max_delay < 0:
            raise InvalidArgument(f"max_delay must not be negative, got {self.max_delay}")
        if self.max_points <= 0:
            raise InvalidArgument(f"max_points must be positive, got {self.max_points}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise InvalidArgument(f"unknown log level {self.log_level!r}")
        return self
