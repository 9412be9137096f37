# tests/integration/test_market_flow.py
"""End-to-end HTTP flow: create → trade → resolve, against an in-process app.

Each test gets a fresh app (own registry and ledger) and a settable clock.
"""

import pytest

from src.pm_common.units import to_nano
from tests.factories import DAY, DEPLOYER, NOW, ORACLE, USER

pytestmark = pytest.mark.asyncio


def _create_body(**overrides) -> dict:
    body = {
        "sender": DEPLOYER,
        "question": "Will it rain tomorrow?",
        "clarification": "Official weather station report.",
        "close_timestamp": NOW + DAY,
        "oracle_addr": ORACLE,
        "fee_bps": 200,
        "initial_value": to_nano(10),
        "initial_probability": 30,
    }
    body.update(overrides)
    return body


async def _create(client, **overrides) -> dict:
    resp = await client.post("/api/v1/markets", json=_create_body(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header_matches_body(self, client):
        resp = await client.get("/api/v1/markets/next-id")
        assert resp.headers["X-Request-ID"] == resp.json()["request_id"]


class TestRegistry:
    async def test_next_id_starts_at_zero(self, client):
        resp = await client.get("/api/v1/markets/next-id")
        assert resp.status_code == 200
        assert resp.json()["data"]["next_market_id"] == 0

    async def test_create_market(self, client):
        data = await _create(client)
        assert data["market_id"] == 0
        assert data["next_market_id"] == 1

        resp = await client.get("/api/v1/markets/0/address")
        assert resp.json()["data"]["address"] == data["address"]

    async def test_invalid_probability_rejected(self, client):
        resp = await client.post("/api/v1/markets", json=_create_body(initial_probability=0))
        assert resp.status_code == 422
        assert resp.json()["code"] == 3004

        resp = await client.get("/api/v1/markets/next-id")
        assert resp.json()["data"]["next_market_id"] == 0

    async def test_below_min_liquidity(self, client):
        resp = await client.post(
            "/api/v1/markets", json=_create_body(initial_value=to_nano("0.09"))
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 3003

    async def test_unknown_market(self, client):
        resp = await client.get("/api/v1/markets/999")
        assert resp.status_code == 404
        assert resp.json()["code"] == 3001

        resp = await client.get("/api/v1/markets/999/address")
        assert resp.json()["code"] == 3001

    async def test_factory_balance_tracks_surplus(self, client):
        await _create(client, attached_value=to_nano(11))
        resp = await client.get("/api/v1/factory")
        data = resp.json()["data"]
        assert data["balance"] == to_nano(8)
        assert data["next_market_id"] == 1


class TestTrading:
    async def test_initial_price(self, client):
        await _create(client)
        resp = await client.get("/api/v1/markets/0/price")
        data = resp.json()["data"]
        assert data["price_yes"] == 23333
        assert data["reserve_yes"] == to_nano(3)
        assert data["reserve_no"] == to_nano(7)

    async def test_buy_moves_price(self, client):
        await _create(client)
        resp = await client.post(
            "/api/v1/markets/0/buy", json={"sender": USER, "side": "YES", "amount": to_nano(1)}
        )
        assert resp.status_code == 200
        shares = resp.json()["data"]["amount_out"]
        assert shares > 0

        price = (await client.get("/api/v1/markets/0/price")).json()["data"]
        assert price["price_yes"] > 23333

        balance = (await client.get(f"/api/v1/markets/0/balances/{USER}")).json()["data"]
        assert balance == {"market_id": 0, "holder": USER, "yes": shares, "no": 0}

    async def test_sell_round_trip(self, client):
        await _create(client)
        buy = await client.post(
            "/api/v1/markets/0/buy", json={"sender": USER, "side": "NO", "amount": to_nano(2)}
        )
        shares = buy.json()["data"]["amount_out"]
        sell = await client.post(
            "/api/v1/markets/0/sell", json={"sender": USER, "side": "NO", "amount": shares}
        )
        assert sell.status_code == 200
        data = sell.json()["data"]
        assert 0 < data["amount_out"] <= to_nano(2)
        assert data["no_shares"] == 0

    async def test_oversell(self, client):
        await _create(client)
        resp = await client.post(
            "/api/v1/markets/0/sell", json={"sender": USER, "side": "YES", "amount": 1}
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 5001

    async def test_zero_amount(self, client):
        await _create(client)
        resp = await client.post(
            "/api/v1/markets/0/buy", json={"sender": USER, "side": "YES", "amount": 0}
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 4001

    async def test_closed_market(self, client, clock):
        await _create(client)
        clock.advance(DAY)
        resp = await client.post(
            "/api/v1/markets/0/buy", json={"sender": USER, "side": "YES", "amount": to_nano(1)}
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 3006

        state = (await client.get("/api/v1/markets/0")).json()["data"]
        assert state["phase"] == "CLOSED"


class TestResolution:
    async def test_non_oracle_forbidden(self, client):
        await _create(client)
        resp = await client.post(
            "/api/v1/markets/0/resolve", json={"sender": USER, "outcome": True}
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 1001

    async def test_full_lifecycle(self, client):
        await _create(client)
        await client.post(
            "/api/v1/markets/0/buy", json={"sender": USER, "side": "YES", "amount": to_nano(5)}
        )
        resp = await client.post(
            "/api/v1/markets/0/resolve", json={"sender": ORACLE, "outcome": True}
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["payouts"][0]["recipient"] == USER
        assert data["total_paid"] == data["payout_pool"]

        state = (await client.get("/api/v1/markets/0")).json()["data"]
        assert state["resolved"] is True
        assert state["outcome"] is True
        assert state["phase"] == "RESOLVED"

        resp = await client.post(
            "/api/v1/markets/0/buy", json={"sender": USER, "side": "NO", "amount": to_nano(1)}
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 3007

    async def test_resolve_twice(self, client):
        await _create(client)
        body = {"sender": ORACLE, "outcome": False}
        await client.post("/api/v1/markets/0/resolve", json=body)
        resp = await client.post("/api/v1/markets/0/resolve", json=body)
        assert resp.status_code == 409
        assert resp.json()["code"] == 3007

    async def test_claim_before_resolution(self, client):
        await _create(client)
        resp = await client.post("/api/v1/markets/0/claim", json={"sender": USER})
        assert resp.status_code == 422
        assert resp.json()["code"] == 3008
