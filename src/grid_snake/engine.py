"""Step-based game engine composing grid, direction, and food logic."""

from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.direction import Direction, apply_direction
from grid_snake.food import FoodPlacement, IntegerSource
from grid_snake.grid import Grid, Position
from grid_snake.state import GameState, Phase

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake transition engine.

    The engine owns the grid and food placement but holds no game state of
    its own. Every operation takes a :class:`GameState` and returns the next
    one, so callers decide where state lives and how access is serialized.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: IntegerSource | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(
            width=self.config.grid_width, height=self.config.grid_height,
        )
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.food_placement = FoodPlacement(
            self.rng, max_attempts=self.config.max_food_attempts,
        )
        self._start_cell = Position(*self.config.start_cell)
        self._start_direction = Direction.from_vector(self.config.start_direction)

    def initial_state(self) -> GameState:
        """Return the canonical not-started state."""
        return GameState(
            snake=(self._start_cell,),
            food=None,
            direction=self._start_direction,
            pending_direction=self._start_direction,
        )

    def start(self, state: GameState) -> GameState:
        """Begin a fresh game. Ignored while a game is already running."""
        if state.phase is Phase.RUNNING:
            return state

        fresh = self.initial_state()
        food = self.food_placement.generate(fresh.snake, self.grid)
        if food is None:
            logger.info("Game started on a board with no room for food.")
            return replace(fresh, phase=Phase.BOARD_CLEARED)

        logger.info("Game started with food at %s.", tuple(food))
        return replace(fresh, food=food, phase=Phase.RUNNING)

    def reset(self, state: GameState) -> GameState:
        """Return to the not-started state from any phase."""
        if state.phase is not Phase.NOT_STARTED:
            logger.info("Game reset from %s.", state.phase.value)
        return self.initial_state()

    def request_direction(self, state: GameState, requested: object) -> GameState:
        """Record a direction request for the next tick.

        Requests outside a running game, exact reversals, and malformed
        vectors leave the pending direction unchanged.
        """
        if state.phase is not Phase.RUNNING:
            return state
        direction = Direction.from_vector(requested)
        if direction is None:
            return state
        if apply_direction(state.direction, direction) is not direction:
            return state
        if direction is state.pending_direction:
            return state
        return replace(state, pending_direction=direction)

    def tick(self, state: GameState) -> GameState:
        """Advance a running game by one cell."""
        if state.phase is not Phase.RUNNING:
            return state

        direction = state.pending_direction
        head = state.head
        candidate = Position(head.x + direction.dx, head.y + direction.dy)
        ticks = state.ticks + 1

        # --- boundary check ---
        if not self.grid.contains(candidate):
            return self._end(state, direction, ticks, "hit the wall")

        # --- self-collision check against the pre-move body ---
        if candidate in state.snake:
            return self._end(state, direction, ticks, "ran into itself")

        # --- move ---
        if candidate == state.food:
            snake = (candidate, *state.snake)
            score = state.score + self.config.score_increment
            food = self.food_placement.generate(snake, self.grid)
            if food is None:
                logger.info(
                    "Board cleared at tick %d with score %d.", ticks, score,
                )
                return replace(
                    state, snake=snake, food=None, direction=direction,
                    score=score, phase=Phase.BOARD_CLEARED, ticks=ticks,
                )
            return replace(
                state, snake=snake, food=food, direction=direction,
                score=score, ticks=ticks,
            )

        snake = (candidate, *state.snake[:-1])
        return replace(state, snake=snake, direction=direction, ticks=ticks)

    def _end(
        self, state: GameState, direction: Direction, ticks: int, reason: str,
    ) -> GameState:
        """Mark the game over, leaving snake, food, and score untouched."""
        logger.info(
            "Snake %s at tick %d with score %d.", reason, ticks, state.score,
        )
        return replace(
            state, direction=direction, phase=Phase.GAME_OVER, ticks=ticks,
        )
