"""Immutable game state and the read-only views handed to collaborators."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from grid_snake.direction import Direction
from grid_snake.grid import Position


class Phase(str, enum.Enum):
    """Lifecycle phases of a game."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"
    BOARD_CLEARED = "board_cleared"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.GAME_OVER, Phase.BOARD_CLEARED)


@dataclass(frozen=True)
class RenderSnapshot:
    """What a renderer needs to draw one frame."""

    snake: tuple[Position, ...]
    food: Position | None


@dataclass(frozen=True)
class StatusSnapshot:
    """What a controller needs to display score and phase."""

    score: int
    phase: Phase


@dataclass(frozen=True)
class GameState:
    """A complete, immutable game state.

    The head is ``snake[0]``; the tail is ``snake[-1]``. Transitions never
    mutate a state; they return a new one.
    """

    snake: tuple[Position, ...]
    food: Position | None
    direction: Direction
    pending_direction: Direction
    score: int = 0
    phase: Phase = Phase.NOT_STARTED
    ticks: int = 0

    def __post_init__(self) -> None:
        if not self.snake:
            raise ValueError("Snake length must be at least 1.")
        # Normalise plain tuples/lists so equality and hashing line up.
        object.__setattr__(
            self, "snake", tuple(Position(*seg) for seg in self.snake),
        )
        if self.food is not None:
            object.__setattr__(self, "food", Position(*self.food))

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def tail(self) -> Position:
        return self.snake[-1]

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    def render_snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(snake=self.snake, food=self.food)

    def status_snapshot(self) -> StatusSnapshot:
        return StatusSnapshot(score=self.score, phase=self.phase)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": list(self.direction.value),
            "pending_direction": list(self.pending_direction.value),
            "score": self.score,
            "phase": self.phase.value,
            "ticks": self.ticks,
        }
