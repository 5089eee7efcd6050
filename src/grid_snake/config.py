"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.direction import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tuning constants for a game.

    Values are fixed for the lifetime of an engine. Supports JSON
    serialization for reproducible runs.
    """

    # Board
    grid_width: int = 20
    grid_height: int = 20

    # Clock
    tick_period_ms: int = 150

    # Scoring
    score_increment: int = 10

    # Spawn
    start_cell: tuple[int, int] = (10, 10)
    start_direction: tuple[int, int] = (1, 0)

    # Food placement
    max_food_attempts: int = 1000
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_width < 2 or self.grid_height < 2:
            raise ValueError("grid_width and grid_height must each be at least 2.")
        if self.tick_period_ms < 1:
            raise ValueError("tick_period_ms must be at least 1.")
        if self.score_increment < 0:
            raise ValueError("score_increment must be >= 0.")
        if self.max_food_attempts < 0:
            raise ValueError("max_food_attempts must be >= 0.")

        x, y = self.start_cell
        if not (0 <= x < self.grid_width and 0 <= y < self.grid_height):
            raise ValueError("start_cell must lie within the grid.")
        if Direction.from_vector(self.start_direction) is None:
            raise ValueError("start_direction must be a cardinal unit vector.")

    @property
    def tick_period(self) -> float:
        """Tick period in seconds."""
        return self.tick_period_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["start_cell"] = list(self.start_cell)
        d["start_direction"] = list(self.start_direction)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        raw = dict(raw)
        for key in ("start_cell", "start_direction"):
            if key in raw:
                raw[key] = tuple(raw[key])
        return cls(**raw)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
