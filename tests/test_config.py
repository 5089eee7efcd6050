"""Tests for the game configuration dataclass."""

import json

import pytest

from grid_snake.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_width == 20
        assert cfg.grid_height == 20
        assert cfg.tick_period_ms == 150
        assert cfg.tick_period == pytest.approx(0.15)
        assert cfg.score_increment == 10
        assert cfg.start_cell == (10, 10)
        assert cfg.start_direction == (1, 0)
        assert cfg.seed is None

    def test_to_dict(self):
        d = GameConfig().to_dict()
        assert d["start_cell"] == [10, 10]
        assert d["start_direction"] == [1, 0]
        json.dumps(d)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_width=12, grid_height=9, start_cell=(2, 3), seed=5)
        path = tmp_path / "sub" / "config.json"
        cfg.save(path)
        assert GameConfig.load(path) == cfg

    @pytest.mark.parametrize("kwargs, message", [
        ({"grid_width": 1}, "at least 2"),
        ({"tick_period_ms": 0}, "tick_period_ms"),
        ({"score_increment": -1}, "score_increment"),
        ({"max_food_attempts": -5}, "max_food_attempts"),
        ({"start_cell": (20, 0)}, "start_cell"),
        ({"start_direction": (1, 1)}, "start_direction"),
        ({"start_direction": (0, 0)}, "start_direction"),
    ])
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            GameConfig(**kwargs)
