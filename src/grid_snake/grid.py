"""Grid bounds and occupancy queries for the snake game."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import numpy as np


class Position(NamedTuple):
    """A cell coordinate. ``x`` grows rightward, ``y`` grows downward."""

    x: int
    y: int


class Grid:
    """Fixed-size board of ``width`` x ``height`` cells.

    Occupancy queries build a NumPy mask indexed ``[y, x]`` so that
    free-cell enumeration stays vectorised on large boards.
    """

    def __init__(self, width: int = 20, height: int = 20) -> None:
        if width < 2 or height < 2:
            raise ValueError("Grid dimensions must be at least 2×2.")
        self.width = width
        self.height = height

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def contains(self, position: Position) -> bool:
        """Check whether a position lies within the grid."""
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def occupancy(self, cells: Iterable[Position]) -> np.ndarray:
        """Return a boolean ``(height, width)`` mask of the given cells.

        Cells outside the grid are ignored.
        """
        mask = np.zeros((self.height, self.width), dtype=bool)
        for x, y in cells:
            if 0 <= x < self.width and 0 <= y < self.height:
                mask[y, x] = True
        return mask

    def free_cells(self, cells: Iterable[Position]) -> list[Position]:
        """Return every position not covered by *cells*, in row-major order."""
        ys, xs = np.where(~self.occupancy(cells))
        return [
            Position(x, y)
            for x, y in zip(xs.tolist(), ys.tolist(), strict=True)
        ]

    def to_dict(self) -> dict:
        """Serialize grid bounds to a dictionary."""
        return {"width": self.width, "height": self.height}
