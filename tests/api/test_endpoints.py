"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app
from api.routes.table import create_table, set_table
from core.game.pacing import NoPacer
from core.seeding import StaticSeedSource

from conftest import SEED, stack_shoe


@pytest.fixture
def table():
    """A fresh seeded table installed for the app."""
    t = create_table(seed_source=StaticSeedSource(SEED), pacer=NoPacer())
    set_table(t)
    yield t
    set_table(None)


@pytest_asyncio.fixture
async def client(table):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_table_snapshot(client):
    response = await client.get("/api/table")
    assert response.status_code == 200
    data = response.json()

    assert data["phase"] == "IDLE"
    assert data["balance"] == 1000
    assert data["hands"] == []
    assert data["count"]["cards_remaining"] == 312
    assert data["count"]["seeded"] is True
    assert data["actions"]["deal"] is False
    assert data["last_summary"] is None
    assert any(e["type"] == "SHOE_SHUFFLED" for e in data["events"])


@pytest.mark.asyncio
async def test_events_are_drained(client):
    await client.get("/api/table")
    response = await client.get("/api/table")
    assert response.json()["events"] == []


@pytest.mark.asyncio
async def test_bet_and_clear(client):
    response = await client.post("/api/table/bet", json={"amount": 25})
    assert response.status_code == 200
    assert response.json()["bet"] == 25
    assert response.json()["actions"]["deal"] is True

    response = await client.post("/api/table/bet/clear")
    assert response.json()["bet"] == 0


@pytest.mark.asyncio
async def test_invalid_bet_amount(client):
    response = await client.post("/api/table/bet", json={"amount": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_deal_without_bet_conflicts(client):
    response = await client.post("/api/table/deal")
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_play_a_hand(client, table):
    stack_shoe(table.machine, "TS 6H 8D TC")
    await client.post("/api/table/bet", json={"amount": 10})

    response = await client.post("/api/table/deal")
    assert response.status_code == 200
    data = response.json()
    assert data["phase"] == "PLAYER_TURN"
    assert data["balance"] == 990
    assert data["hands"][0]["total"] == 18
    assert data["dealer"]["cards"][1] == {
        "code": "??",
        "rank": None,
        "suit": None,
        "value": None,
        "face_down": True,
    }
    assert data["dealer"]["visible_total"] == 6
    assert data["dealer"]["hole_revealed"] is False

    advice = await client.get("/api/strategy/advice")
    assert advice.status_code == 200
    assert advice.json() == {
        "action": "stand",
        "table_type": "hard",
        "row_key": "17+",
        "dealer_upcard": "6",
    }

    response = await client.post("/api/table/action", json={"action": "stand"})
    assert response.status_code == 200
    data = response.json()
    assert data["phase"] == "IDLE"
    assert data["balance"] == 1010
    assert data["last_summary"]["message"] == "WIN +$10"
    assert data["last_summary"]["hands"][0]["outcome"] == "win"
    assert data["last_feedback"]["correct"] is True
    round_ended = [e for e in data["events"] if e["type"] == "ROUND_ENDED"]
    assert round_ended[0]["data"]["summary"]["net"] == 10


@pytest.mark.asyncio
async def test_action_out_of_phase_conflicts(client):
    response = await client.post("/api/table/action", json={"action": "hit"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_unknown_action_rejected(client):
    response = await client.post("/api/table/action", json={"action": "dance"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_insurance(client, table):
    stack_shoe(table.machine, "TS AH 9D KC")
    await client.post("/api/table/bet", json={"amount": 10})
    response = await client.post("/api/table/deal")
    assert response.json()["phase"] == "INSURANCE"
    assert response.json()["actions"]["insurance"] is True

    response = await client.post("/api/table/insurance", json={"accept": True})
    assert response.status_code == 200
    data = response.json()
    assert data["balance"] == 1000
    assert data["last_summary"]["insurance_returned"] == 15


@pytest.mark.asyncio
async def test_shuffle(client):
    response = await client.post("/api/table/shuffle")
    assert response.status_code == 200
    assert response.json()["count"]["cards_remaining"] == 312


@pytest.mark.asyncio
async def test_auto_bet(client):
    response = await client.post("/api/table/auto-bet", json={"enabled": True})
    assert response.status_code == 200
    assert response.json()["auto_bet"] is True
    assert response.json()["bet"] == 5


@pytest.mark.asyncio
async def test_advice_outside_player_turn(client):
    response = await client.get("/api/strategy/advice")
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_chart(client):
    response = await client.get("/api/strategy/chart")
    assert response.status_code == 200
    data = response.json()
    assert data["upcards"] == ["2", "3", "4", "5", "6", "7", "8", "9", "T", "A"]
    assert [row["key"] for row in data["hard"]][0] == "5-8"
    sixteen = next(row for row in data["hard"] if row["key"] == "16")
    assert sixteen["actions"][8] == "R"
    assert len(data["soft"]) == 7
    assert len(data["pairs"]) == 10
