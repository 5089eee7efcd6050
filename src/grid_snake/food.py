"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import numpy as np

from grid_snake.grid import Position

if TYPE_CHECKING:
    from grid_snake.grid import Grid

logger = logging.getLogger(__name__)


class IntegerSource(Protocol):
    """Minimal random source: ``numpy.random.Generator`` satisfies it."""

    def integers(self, low: int, high: int) -> int: ...


class FoodPlacement:
    """Places food on a cell not covered by the snake.

    Draws uniformly random cells until a free one turns up. After
    ``max_attempts`` misses it falls back to choosing uniformly among the
    free cells, and reports a full board by returning ``None``.
    """

    def __init__(
        self,
        rng: IntegerSource | None = None,
        max_attempts: int = 1000,
    ) -> None:
        if max_attempts < 0:
            raise ValueError("max_attempts must be >= 0.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def generate(self, snake: Sequence[Position], grid: Grid) -> Position | None:
        """Return a free cell for the next food, or ``None`` if none exist."""
        occupied = set(snake)
        if len(occupied) >= grid.cell_count:
            logger.info("Board is full; no cell left for food.")
            return None

        for _ in range(self.max_attempts):
            candidate = Position(
                int(self.rng.integers(0, grid.width)),
                int(self.rng.integers(0, grid.height)),
            )
            if candidate not in occupied:
                return candidate

        free = grid.free_cells(occupied)
        if not free:
            logger.info("Board is full; no cell left for food.")
            return None
        logger.debug(
            "Random placement missed %d times; picking from %d free cells.",
            self.max_attempts, len(free),
        )
        return free[int(self.rng.integers(0, len(free)))]
