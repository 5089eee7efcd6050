"""Grid Snake — core game-state transition engine."""

from grid_snake.config import GameConfig
from grid_snake.direction import Direction, apply_direction
from grid_snake.engine import GameEngine
from grid_snake.food import FoodPlacement
from grid_snake.grid import Grid, Position
from grid_snake.session import GameSession
from grid_snake.state import GameState, Phase, RenderSnapshot, StatusSnapshot

__all__ = [
    "Direction",
    "FoodPlacement",
    "GameConfig",
    "GameEngine",
    "GameSession",
    "GameState",
    "Grid",
    "Phase",
    "Position",
    "RenderSnapshot",
    "StatusSnapshot",
    "apply_direction",
]
