"""REST API route handlers for session lifecycle and control."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.controls import InputDispatcher, resolve_key
from grid_snake.server.game_manager import GameManager, summarize
from grid_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    DirectionResponse,
    SessionSummary,
)
from grid_snake.session import GameSession

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


def _get_session(request: Request, session_id: str) -> GameSession:
    try:
        return _get_manager(request).require_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new, not-yet-started session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            tick_period_ms=body.tick_period_ms, seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return summarize(session)


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all live sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current game state."""
    session = _get_session(request, session_id)
    result = summarize(session).model_dump(mode="json")
    result["grid"] = session.engine.grid.to_dict()
    result["state"] = session.state.to_dict()
    return result


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> None:
    """Stop and discard a session."""
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/{session_id}/start")
async def start_session(session_id: str, request: Request) -> dict:
    """Start a game. A no-op while one is already running."""
    session = _get_session(request, session_id)
    state = await session.start()
    return state.to_dict()


@router.post("/{session_id}/reset")
async def reset_session(session_id: str, request: Request) -> dict:
    """Return the session to the not-started state."""
    session = _get_session(request, session_id)
    state = await session.reset()
    return state.to_dict()


@router.post("/{session_id}/direction")
async def request_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> DirectionResponse:
    """Queue a direction change for the next tick."""
    session = _get_session(request, session_id)
    name = body.key or body.direction
    direction = resolve_key(name) if name else None
    if direction is None:
        raise HTTPException(status_code=422, detail="Unknown direction or key.")

    forwarded = await InputDispatcher(session).dispatch(name)
    state = session.state
    return DirectionResponse(
        accepted=forwarded and state.pending_direction is direction,
        state=state.to_dict(),
    )
