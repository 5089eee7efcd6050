"""Tests for key bindings and the input dispatcher."""

import pytest

from grid_snake.config import GameConfig
from grid_snake.controls import InputDispatcher, resolve_key
from grid_snake.direction import Direction
from grid_snake.engine import GameEngine
from grid_snake.session import GameSession


class TestResolveKey:
    @pytest.mark.parametrize("key, expected", [
        ("w", Direction.UP),
        ("W", Direction.UP),
        ("ArrowUp", Direction.UP),
        ("s", Direction.DOWN),
        ("ArrowDown", Direction.DOWN),
        ("a", Direction.LEFT),
        ("ArrowLeft", Direction.LEFT),
        ("d", Direction.RIGHT),
        ("ArrowRight", Direction.RIGHT),
        ("left", Direction.LEFT),
    ])
    def test_bound_keys(self, key, expected):
        assert resolve_key(key) is expected

    def test_unbound_key(self):
        assert resolve_key("q") is None
        assert resolve_key("") is None


@pytest.fixture()
async def session():
    s = GameSession(GameEngine(GameConfig(tick_period_ms=10_000, seed=0)))
    yield s
    await s.close()


class TestInputDispatcher:
    @pytest.mark.asyncio
    async def test_ignored_before_start(self, session):
        dispatcher = InputDispatcher(session)
        assert not await dispatcher.dispatch("w")
        assert session.state.pending_direction is Direction.RIGHT

    @pytest.mark.asyncio
    async def test_forwarded_while_running(self, session):
        await session.start()
        dispatcher = InputDispatcher(session)
        assert await dispatcher.dispatch("ArrowDown")
        assert session.state.pending_direction is Direction.DOWN

    @pytest.mark.asyncio
    async def test_unbound_key_dropped(self, session):
        await session.start()
        assert not await InputDispatcher(session).dispatch("x")

    @pytest.mark.asyncio
    async def test_reversal_forwarded_but_rejected(self, session):
        await session.start()
        assert await InputDispatcher(session).dispatch("a")
        assert session.state.pending_direction is Direction.RIGHT
