"""A live game session: serialized commands and an owned async tick loop."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable

from grid_snake.engine import GameEngine
from grid_snake.state import GameState, Phase

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], Awaitable[None]]


class GameSession:
    """Holds the current :class:`GameState` for one game and drives it.

    Every mutation runs under a single :class:`asyncio.Lock`, so a direction
    request that lands between two ticks is seen by exactly the next one.
    The tick loop is an owned task created by :meth:`start`. Each loop run
    carries a generation number; :meth:`reset` bumps the generation, and a
    wake-up from an older generation does nothing even if it slipped past
    cancellation.
    """

    def __init__(
        self,
        engine: GameEngine | None = None,
        session_id: str | None = None,
    ) -> None:
        self.engine = engine if engine is not None else GameEngine()
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.state: GameState = self.engine.initial_state()
        self.lock = asyncio.Lock()
        self._generation = 0
        self._task: asyncio.Task | None = None
        self._listeners: list[Listener] = []

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def timer_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: Listener) -> None:
        """Register an async callback invoked with each new state."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def start(self) -> GameState:
        """Start a new game and its tick loop."""
        async with self.lock:
            previous = self.state
            self.state = self.engine.start(previous)
            if self.state is previous:
                return previous
            if self.state.is_running:
                self._start_timer()
            state = self.state
        logger.info("Session %s started.", self.session_id)
        await self._notify(state)
        return state

    async def reset(self) -> GameState:
        """Stop the tick loop and return to the not-started state."""
        async with self.lock:
            self._stop_timer()
            self.state = self.engine.reset(self.state)
            state = self.state
        await self._notify(state)
        return state

    async def request_direction(self, requested: object) -> GameState:
        """Queue a direction change for the next tick."""
        async with self.lock:
            previous = self.state
            self.state = self.engine.request_direction(previous, requested)
            state = self.state
        if state is not previous:
            await self._notify(state)
        return state

    async def tick(self) -> GameState:
        """Advance one tick immediately, outside the timer."""
        state = await self._advance(None)
        return state if state is not None else self.state

    async def _advance(self, generation: int | None) -> GameState | None:
        """Run one serialized tick; ``None`` means nothing was applied."""
        async with self.lock:
            if generation is not None and generation != self._generation:
                return None
            if not self.state.is_running:
                return None
            self.state = self.engine.tick(self.state)
            state = self.state
            if not state.is_running:
                # Invalidate the running loop; it exits after this wake-up.
                self._generation += 1
                logger.info(
                    "Session %s ended (%s) with score %d.",
                    self.session_id, state.phase.value, state.score,
                )
        await self._notify(state)
        return state

    def _start_timer(self) -> None:
        self._stop_timer()
        self._task = asyncio.create_task(self._tick_loop(self._generation))

    def _stop_timer(self) -> None:
        self._generation += 1
        task = self._task
        self._task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def _tick_loop(self, generation: int) -> None:
        """Tick at the configured period until the game leaves RUNNING."""
        interval = self.engine.config.tick_period
        loop = asyncio.get_running_loop()
        deadline = loop.time() + interval
        try:
            while generation == self._generation:
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                state = await self._advance(generation)
                if state is None or not state.is_running:
                    return
                # Fixed period: time spent ticking comes out of the next wait.
                deadline = max(deadline + interval, loop.time())
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled for session %s.", self.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", self.session_id)

    async def _notify(self, state: GameState) -> None:
        """Deliver *state* to every listener, dropping the ones that fail."""
        for listener in list(self._listeners):
            try:
                await listener(state)
            except Exception:
                logger.warning(
                    "Dropping failed listener on session %s.", self.session_id,
                )
                self.unsubscribe(listener)

    async def close(self) -> None:
        """Cancel the tick loop and wait for it to finish."""
        task = self._task
        self._stop_timer()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        self._listeners.clear()
