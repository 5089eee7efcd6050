"""Translation of key and button names into direction requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from grid_snake.direction import Direction

if TYPE_CHECKING:
    from grid_snake.session import GameSession

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, Direction] = {
    "w": Direction.UP,
    "arrowup": Direction.UP,
    "up": Direction.UP,
    "s": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "down": Direction.DOWN,
    "a": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "left": Direction.LEFT,
    "d": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
    "right": Direction.RIGHT,
}


def resolve_key(key: str) -> Direction | None:
    """Map a key or button name to a direction, case-insensitively."""
    return KEY_BINDINGS.get(key.strip().lower())


class InputDispatcher:
    """Forwards key presses to a session while its game is running."""

    def __init__(self, session: GameSession) -> None:
        self.session = session

    async def dispatch(self, key: str) -> bool:
        """Send the direction bound to *key*.

        Returns ``True`` if a request reached the session. Unbound keys and
        presses outside a running game are dropped.
        """
        direction = resolve_key(key)
        if direction is None:
            return False
        if not self.session.state.is_running:
            logger.debug("Ignoring key %r outside a running game.", key)
            return False
        await self.session.request_direction(direction)
        return True
