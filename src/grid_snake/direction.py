"""Movement directions and the guard that filters direction requests."""

from __future__ import annotations

import enum
import logging
from numbers import Integral

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_vector(cls, vector: object) -> Direction | None:
        """Resolve a raw ``(dx, dy)`` pair to a direction.

        Returns ``None`` for anything that is not one of the four cardinal
        unit vectors.
        """
        if isinstance(vector, Direction):
            return vector
        if not isinstance(vector, (tuple, list)) or len(vector) != 2:
            return None
        dx, dy = vector
        if not all(
            isinstance(v, Integral) and not isinstance(v, bool)
            for v in (dx, dy)
        ):
            return None
        return _BY_VECTOR.get((int(dx), int(dy)))


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_BY_VECTOR: dict[tuple[int, int], Direction] = {d.value: d for d in Direction}


def apply_direction(current: Direction, requested: object) -> Direction:
    """Filter a requested direction change against the current direction.

    Malformed vectors and exact reversals are rejected and *current* is
    returned unchanged. Any other cardinal direction, including a repeat of
    *current*, is accepted.
    """
    direction = Direction.from_vector(requested)
    if direction is None:
        logger.debug("Rejected malformed direction %r.", requested)
        return current
    if direction is current.opposite:
        logger.debug("Rejected reversal from %s to %s.", current.name, direction.name)
        return current
    return direction
