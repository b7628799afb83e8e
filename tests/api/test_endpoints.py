"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app
from blackjack_core.game.engine import MAX_SEATS


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _new_session(client, **body) -> str:
    response = await client.post("/api/game/new", json=body or None)
    assert response.status_code == 200
    return response.json()["session_id"]


async def _act(client, session_id, **action):
    return await client.post(
        "/api/game/action",
        json=action,
        headers={"X-Session-ID": session_id},
    )


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_new_game(client):
    """Test creating a new game."""
    response = await client.post("/api/game/new", json={"seed": 42})
    assert response.status_code == 200
    data = response.json()
    assert "session_id" in data
    assert data["seed"] == 42


@pytest.mark.asyncio
async def test_new_game_without_body(client):
    response = await client.post("/api/game/new")
    assert response.status_code == 200
    assert "session_id" in response.json()


@pytest.mark.asyncio
async def test_game_state(client):
    """Test getting game state."""
    session_id = await _new_session(client, seed=7, seats=2, bankroll=250)

    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})
    assert response.status_code == 200
    data = response.json()

    assert data["phase"] == "BETTING"
    assert data["round_id"] == 1
    assert [s["bankroll"] for s in data["seats"]] == [250.0, 250.0]
    assert data["count"]["running_count"] == 0
    assert data["count"]["cards_remaining"] == 6 * 52
    assert data["dealer"]["cards"] == []
    assert data["last_result"] is None


@pytest.mark.asyncio
async def test_new_game_with_rules(client):
    session_id = await _new_session(client, rules={"decks": 2, "allow_surrender": False})
    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})
    data = response.json()
    assert data["rules"]["decks"] == 2
    assert data["rules"]["allow_surrender"] is False
    assert data["count"]["cards_remaining"] == 104


@pytest.mark.asyncio
async def test_new_game_with_invalid_rules(client):
    response = await client.post("/api/game/new", json={"rules": {"dealer_peeks": True}})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_seat_count_bounded_by_engine_limit(client):
    response = await client.post("/api/game/new", json={"seats": MAX_SEATS})
    assert response.status_code == 200

    response = await client.post("/api/game/new", json={"seats": MAX_SEATS + 1})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_session(client):
    response = await client.get("/api/game/state", headers={"X-Session-ID": "not-a-token"})
    assert response.status_code == 404

    response = await _act(client, "not-a-token", type="HIT")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bet_and_deal(client):
    """Test placing a bet and dealing."""
    session_id = await _new_session(client, seed=42)

    response = await _act(client, session_id, type="PLACE_BET", amount=100)
    assert response.status_code == 200
    assert response.json()["accepted"] is True
    assert response.json()["state"]["capabilities"]["deal"] is True

    response = await _act(client, session_id, type="DEAL")
    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is True
    state = data["state"]
    assert state["phase"] in ["INSURANCE", "PLAYER_TURN", "BETTING"]
    assert state["count"]["cards_remaining"] == 6 * 52 - 4


@pytest.mark.asyncio
async def test_hole_card_hidden_during_play(client):
    for seed in range(20):
        session_id = await _new_session(client, seed=seed)
        await _act(client, session_id, type="PLACE_BET", amount=10)
        state = (await _act(client, session_id, type="DEAL")).json()["state"]
        if state["phase"] == "PLAYER_TURN":
            assert state["dealer"]["hole_card_hidden"] is True
            assert len(state["dealer"]["cards"]) == 1
            assert state["dealer"]["total"] is None
            return
    pytest.fail("no seed produced a player turn")


@pytest.mark.asyncio
async def test_rejected_action(client):
    """A rejected action returns the unchanged snapshot."""
    session_id = await _new_session(client, seed=1)
    response = await _act(client, session_id, type="HIT")
    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is False
    assert data["state"]["phase"] == "BETTING"


@pytest.mark.asyncio
async def test_unaffordable_bet_is_not_ready(client):
    session_id = await _new_session(client, bankroll=100)
    response = await _act(client, session_id, type="PLACE_BET", amount=10000)
    assert response.json()["accepted"] is True
    assert response.json()["state"]["seats"][0]["ready"] is False

    response = await _act(client, session_id, type="DEAL")
    assert response.json()["accepted"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "action",
    [
        {"type": "FLY"},
        {"type": "SET_BET", "seat_index": 0, "amount": -5},
        {"type": "PLACE_BET"},
        {"type": "HIT", "amount": 5},
        {},
    ],
)
async def test_malformed_action(client, action):
    session_id = await _new_session(client)
    response = await client.post(
        "/api/game/action",
        json=action,
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_seats_and_ready_flags(client):
    session_id = await _new_session(client, seed=3)
    assert (await _act(client, session_id, type="ADD_SEAT")).json()["accepted"]
    await _act(client, session_id, type="SET_BET", seat_index=1, amount=20)
    response = await _act(client, session_id, type="TOGGLE_READY", seat_index=1)
    seats = response.json()["state"]["seats"]
    assert len(seats) == 2
    assert seats[1]["ready"] is True
    assert seats[0]["ready"] is False


@pytest.mark.asyncio
async def test_reshuffle_and_set_rules(client):
    session_id = await _new_session(client)
    response = await _act(client, session_id, type="SET_RULES", overrides={"decks": 1})
    assert response.json()["state"]["count"]["cards_remaining"] == 52

    response = await _act(client, session_id, type="SET_RULES", overrides={"bogus": 1})
    assert response.json()["accepted"] is False

    response = await _act(client, session_id, type="SET_RULES", overrides={"decks": 1.5})
    assert response.status_code == 200
    assert response.json()["accepted"] is False

    response = await _act(client, session_id, type="RESHUFFLE", seed=9)
    assert response.json()["accepted"] is True
    assert response.json()["state"]["count"]["cards_discarded"] == 0


@pytest.mark.asyncio
async def test_capabilities(client):
    session_id = await _new_session(client)
    response = await client.get(
        "/api/game/capabilities",
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    caps = response.json()
    assert caps["deal"] is False
    assert caps["reshuffle"] is True
    assert caps["hit"] is False


@pytest.mark.asyncio
async def test_new_game_resets_existing_session(client):
    session_id = await _new_session(client, seed=5)
    await _act(client, session_id, type="ADD_SEAT")

    response = await client.post(
        "/api/game/new",
        json={"seed": 6},
        headers={"X-Session-ID": session_id},
    )
    assert response.json()["session_id"] == session_id

    state = (await client.get("/api/game/state", headers={"X-Session-ID": session_id})).json()
    assert len(state["seats"]) == 1


@pytest.mark.asyncio
async def test_full_round_settles(client):
    """Play rounds to completion and read back the result."""
    session_id = await _new_session(client, seed=11)
    for _ in range(3):
        await _act(client, session_id, type="PLACE_BET", amount=10)
        await _act(client, session_id, type="DEAL")
        await _act(client, session_id, type="DECLINE_INSURANCE")
        await _act(client, session_id, type="STAND")
        response = await _act(client, session_id, type="DEALER_PLAY")
    state = response.json()["state"]
    assert state["phase"] == "BETTING"
    assert state["last_result"] is not None
    assert state["last_result"]["hands"][0]["outcome"] in [
        "WIN",
        "LOSE",
        "PUSH",
        "BLACKJACK",
    ]
    assert state["dealer"]["hole_card_hidden"] is False
