"""Tests for API endpoints."""

import time
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app, limiter
from api.routes import game as game_routes
from api.session import get_session_store
from config import config
from core.cards import Card, Rank, Suit
from core.game import BlackjackGame, GameState
from core.hand import Hand


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with a fresh rate limit window."""
    limiter.reset()
    yield
    limiter.reset()


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _new_session(client) -> str:
    response = await client.post("/api/game/new")
    return response.json()["session_id"]


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_new_game(client):
    """Test creating a new game."""
    response = await client.post("/api/game/new")
    assert response.status_code == 200
    assert "session_id" in response.json()


@pytest.mark.asyncio
async def test_game_state(client):
    """A fresh deal hides the dealer's hand."""
    session_id = await _new_session(client)

    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})
    assert response.status_code == 200
    data = response.json()

    assert data["turn"] == "player_turn"
    assert data["status"] == "player_turn"
    assert data["result"] == "no_result"
    assert len(data["player_hand"]["cards"]) == 2
    assert data["dealer_hand"] is None
    assert data["dealer_showing"] is not None
    assert data["cards_remaining"] == 48
    assert data["can_hit"] is True
    assert data["can_stand"] is True


@pytest.mark.asyncio
async def test_hit(client):
    session_id = await _new_session(client)

    response = await client.post(
        "/api/game/action",
        json={"action": "hit"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data["player_hand"]["cards"]) == 3
    assert data["cards_remaining"] == 47
    assert data["turn"] == "player_turn"


@pytest.mark.asyncio
async def test_stand_reveals_dealer(client):
    session_id = await _new_session(client)

    response = await client.post(
        "/api/game/action",
        json={"action": "stand"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["turn"] == "dealer_turn"
    assert data["dealer_hand"] is not None
    assert data["dealer_showing"] is None
    assert data["can_hit"] is False
    assert data["can_stand"] is False
    total = len(data["player_hand"]["cards"]) + len(data["dealer_hand"]["cards"])
    assert total + data["cards_remaining"] == 52


@pytest.mark.asyncio
async def test_action_after_stand_rejected(client):
    session_id = await _new_session(client)
    headers = {"X-Session-ID": session_id}

    await client.post("/api/game/action", json={"action": "stand"}, headers=headers)
    response = await client.post("/api/game/action", json={"action": "hit"}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_action(client):
    session_id = await _new_session(client)

    response = await client.post(
        "/api/game/action",
        json={"action": "double"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reset(client):
    session_id = await _new_session(client)
    headers = {"X-Session-ID": session_id}

    await client.post("/api/game/action", json={"action": "stand"}, headers=headers)
    response = await client.post("/api/game/reset", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["turn"] == "player_turn"
    assert data["cards_remaining"] == 48


@pytest.mark.asyncio
async def test_forged_session_rejected(client):
    response = await client.get("/api/game/state", headers={"X-Session-ID": "not-a-token"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_session_header(client):
    response = await client.get("/api/game/state")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_deck_exhausted_is_conflict(client):
    session_id = await _new_session(client)
    state = GameState(
        player_hand=Hand((Card(Rank.TWO, Suit.CLUBS), Card(Rank.THREE, Suit.CLUBS))),
        dealer_hand=Hand((Card(Rank.FOUR, Suit.CLUBS), Card(Rank.FIVE, Suit.CLUBS))),
    )
    game_routes._games[session_id] = BlackjackGame.from_state(state)

    response = await client.post(
        "/api/game/action",
        json={"action": "hit"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 409
    assert "reset required" in response.json()["detail"]

    response = await client.post("/api/game/reset", headers={"X-Session-ID": session_id})
    assert response.status_code == 200
    assert response.json()["cards_remaining"] == 48


@pytest.mark.asyncio
async def test_expired_token_drops_cached_game(client):
    session_id = await _new_session(client)
    assert session_id in game_routes._games

    original_time = time.time
    # Token is two hours old against a one hour session TTL
    with patch("time.time", lambda: original_time() + 7200):
        response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})

    assert response.status_code == 401
    assert session_id not in game_routes._games


@pytest.mark.asyncio
async def test_new_game_evicts_expired_sessions(client):
    session_id = await _new_session(client)
    store = await get_session_store()
    data, _ = store._sessions[session_id]
    store._sessions[session_id] = (data, datetime.now() - timedelta(seconds=1))

    await _new_session(client)

    assert session_id not in game_routes._games
    assert await store.get(session_id) is None


@pytest.mark.asyncio
async def test_cached_game_dropped_when_session_gone(client):
    session_id = await _new_session(client)
    cached = game_routes._games[session_id]
    store = await get_session_store()
    await store.delete(session_id)

    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})

    assert response.status_code == 200
    assert game_routes._games[session_id] is not cached
    assert await store.exists(session_id)


@pytest.mark.asyncio
async def test_game_routes_rate_limited(client):
    if not config.rate_limit.enabled:
        pytest.skip("rate limiting disabled by environment")

    limit = config.rate_limit.requests_per_minute
    statuses = [(await client.post("/api/game/new")).status_code for _ in range(limit + 1)]

    assert statuses[:limit] == [200] * limit
    assert statuses[-1] == 429
