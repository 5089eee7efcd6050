"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from grid_snake.state import Phase


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    tick_period_ms: int = Field(default=150, ge=10, le=2000)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction.

    Accepts either a direction name (``up``) or a key name (``w``,
    ``ArrowUp``).
    """

    direction: str | None = Field(default=None, min_length=1, max_length=16)
    key: str | None = Field(default=None, min_length=1, max_length=16)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: Phase
    score: int
    tick_period_ms: int


class DirectionResponse(BaseModel):
    """Result of a direction request."""

    accepted: bool
    state: dict


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
