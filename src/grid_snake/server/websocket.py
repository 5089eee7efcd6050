"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from grid_snake.controls import InputDispatcher
from grid_snake.server.game_manager import GameManager
from grid_snake.state import GameState

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def _encode(state: GameState) -> str:
    return json.dumps(state.to_dict(), separators=(",", ":"))


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send key presses and commands, receive the game state on every change."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()

    async def push(state: GameState) -> None:
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.send_text(_encode(state))

    session.subscribe(push)
    dispatcher = InputDispatcher(session)
    logger.info("Client connected to session %s.", session_id)

    # Send initial state snapshot so the client gets immediate feedback.
    await websocket.send_text(_encode(session.state))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            command = msg.get("command")
            if command == "start":
                await session.start()
                continue
            if command == "reset":
                await session.reset()
                continue

            key = msg.get("key", msg.get("direction"))
            if isinstance(key, str):
                await dispatcher.dispatch(key)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        session.unsubscribe(push)
