"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from grid_snake.server.app import create_app
from grid_snake.server.game_manager import GameManager

BASE = "http://test"


@pytest.fixture()
def app():
    application = create_app()
    application.state.game_manager = GameManager()
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await app.state.game_manager.cleanup()


async def _create(client, **body) -> str:
    body.setdefault("tick_period_ms", 2000)
    resp = await client.post("/sessions", json=body)
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions", json={})
        assert resp.status_code == 201
        data = resp.json()
        assert data["phase"] == "not_started"
        assert data["score"] == 0
        assert data["tick_period_ms"] == 150
        assert "session_id" in data

    @pytest.mark.asyncio
    async def test_create_invalid_tick(self, client):
        resp = await client.post("/sessions", json={"tick_period_ms": 1})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_session_limit(self):
        application = create_app()
        application.state.game_manager = GameManager(max_sessions=1)
        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url=BASE) as c:
            assert (await c.post("/sessions", json={})).status_code == 201
            resp = await c.post("/sessions", json={})
            assert resp.status_code == 409
            assert "limit" in resp.json()["detail"]


class TestReadSessions:
    @pytest.mark.asyncio
    async def test_list(self, client):
        await _create(client)
        await _create(client)
        resp = await client.get("/sessions")
        assert resp.status_code == 200
        assert len(resp.json()) == 2

    @pytest.mark.asyncio
    async def test_get_includes_state(self, client):
        session_id = await _create(client)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["grid"] == {"width": 20, "height": 20}
        assert data["state"]["snake"] == [[10, 10]]
        assert data["state"]["food"] is None

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        resp = await client.get("/sessions/nope")
        assert resp.status_code == 404


class TestSessionCommands:
    @pytest.mark.asyncio
    async def test_start_and_reset(self, client):
        session_id = await _create(client, seed=1)
        resp = await client.post(f"/sessions/{session_id}/start")
        assert resp.status_code == 200
        state = resp.json()
        assert state["phase"] == "running"
        assert state["food"] is not None
        assert state["food"] != [10, 10]

        resp = await client.post(f"/sessions/{session_id}/reset")
        assert resp.json()["phase"] == "not_started"
        assert resp.json()["food"] is None

    @pytest.mark.asyncio
    async def test_direction_by_key(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"key": "s"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["accepted"] is True
        assert data["state"]["pending_direction"] == [0, 1]

    @pytest.mark.asyncio
    async def test_direction_reversal_not_accepted(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "left"},
        )
        assert resp.json()["accepted"] is False
        assert resp.json()["state"]["pending_direction"] == [1, 0]

    @pytest.mark.asyncio
    async def test_rejected_direction_keeps_earlier_turn(self, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start")
        await client.post(
            f"/sessions/{session_id}/direction", json={"key": "w"},
        )
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"key": "a"},
        )
        assert resp.json()["accepted"] is False
        assert resp.json()["state"]["pending_direction"] == [0, -1]

    @pytest.mark.asyncio
    async def test_direction_before_start(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"direction": "up"},
        )
        assert resp.status_code == 200
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_unknown_direction(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/direction", json={"key": "q"},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_delete(self, client):
        session_id = await _create(client)
        resp = await client.delete(f"/sessions/{session_id}")
        assert resp.status_code == 204
        assert (await client.get(f"/sessions/{session_id}")).status_code == 404
        assert (await client.delete(f"/sessions/{session_id}")).status_code == 404
