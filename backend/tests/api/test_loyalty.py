"""Loyalty API - balances, levels, gifts and redemption.

Invariants:
    - First read creates a zeroed bronze balance
    - Earning 200 total points reaches silver
    - Redemption needs an active gift and enough current points
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from freezefit.db.base import Base
from freezefit.infrastructure.database import DatabaseSessionManager
from freezefit.main import app
from freezefit.models.loyalty import (
    CustomerLoyalty, GiftRedemption, LoyaltyGift, LoyaltyTransaction,
)
from freezefit.services.loyalty import TRANSACTION_HISTORY_LIMIT


@pytest.fixture
async def seed_gifts(seed):
    return await seed(
        LoyaltyGift(id="gift-big", name="Monthly pass", points_cost=500),
        LoyaltyGift(id="gift-small", name="Towel", points_cost=50),
        LoyaltyGift(id="gift-old", name="Retired mug", points_cost=10, is_active=False),
    )


async def _add_points(client, points, user_id="u1", source="appointment"):
    return await client.post("/loyalty/add-points", json={
        "user_id": user_id, "points": points, "source": source,
    })


async def test_summary_creates_zeroed_bronze_balance(client, test_db):
    res = await client.get("/loyalty/user/u1")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["total_points"] == 0
    assert data["current_points"] == 0
    assert data["loyalty_level"] == "ברונזה"
    assert data["next_level_points"] == 200
    assert data["benefits"]

    row = await test_db.scalar(select(CustomerLoyalty).where(CustomerLoyalty.user_id == "u1"))
    assert row is not None


async def test_add_points_levels_up(client):
    await _add_points(client, 150)
    res = await _add_points(client, 50)
    data = res.json()["data"]
    assert data["total_points"] == 200
    assert data["current_points"] == 200
    assert data["loyalty_level"] == "כסף"
    assert data["next_level_points"] == 500


async def test_add_points_rejects_non_positive(client):
    res = await _add_points(client, 0)
    assert res.status_code == 400


async def test_gifts_only_active_cheapest_first(client, seed_gifts):
    data = (await client.get("/loyalty/gifts")).json()["data"]
    assert [g["id"] for g in data] == ["gift-small", "gift-big"]


async def test_transactions_newest_first_and_limited(client, seed):
    now = datetime.now(timezone.utc)
    await seed(*[
        LoyaltyTransaction(
            user_id="u1", transaction_type="earned", points=i, source="appointment",
            created_at=now - timedelta(minutes=i),
        )
        for i in range(1, TRANSACTION_HISTORY_LIMIT + 6)
    ])
    data = (await client.get("/loyalty/transactions/u1")).json()["data"]
    assert len(data) == TRANSACTION_HISTORY_LIMIT
    assert data[0]["points"] == 1


async def test_redeem_gift_spends_current_points_only(client, test_db, seed_gifts):
    await _add_points(client, 300)
    res = await client.post("/loyalty/redeem-gift", json={
        "user_id": "u1", "gift_id": "gift-small",
    })
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["current_points"] == 250
    assert data["total_points"] == 300
    assert data["loyalty_level"] == "כסף"

    redemptions = (await test_db.scalars(select(GiftRedemption))).all()
    assert [(r.gift_id, r.points_spent) for r in redemptions] == [("gift-small", 50)]

    history = (await client.get("/loyalty/transactions/u1")).json()["data"]
    spent = [t for t in history if t["transaction_type"] == "spent"]
    assert spent[0]["description"] == "Redeemed: Towel"
    assert spent[0]["source"] == "gift_redemption"


async def test_redeem_with_insufficient_points(client, seed_gifts):
    await _add_points(client, 100)
    res = await client.post("/loyalty/redeem-gift", json={
        "user_id": "u1", "gift_id": "gift-big",
    })
    assert res.status_code == 400
    assert res.json() == {
        "success": False, "error": "Insufficient points", "code": "INSUFFICIENT_POINTS",
    }
    summary = (await client.get("/loyalty/user/u1")).json()["data"]
    assert summary["current_points"] == 100


@pytest.mark.parametrize("gift_id", ["gift-old", "no-such-gift"])
async def test_redeem_unavailable_gift(client, seed_gifts, gift_id):
    await _add_points(client, 1000)
    res = await client.post("/loyalty/redeem-gift", json={
        "user_id": "u1", "gift_id": gift_id,
    })
    assert res.status_code == 400
    assert res.json()["code"] == "GIFT_UNAVAILABLE"


# ─── Concurrent requests ─────────────────────────────────────────

@pytest.fixture
async def pooled_engine(tmp_path):
    """File-backed SQLite with a real pool: one connection per request."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'loyalty.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def pooled_client(pooled_engine):
    original = getattr(app.state, "db", None)
    app.state.db = DatabaseSessionManager.from_engine(pooled_engine)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.db = original


async def test_concurrent_redemptions_never_overdraw(pooled_client, pooled_engine):
    async with AsyncSession(pooled_engine) as session:
        session.add(LoyaltyGift(id="gift-towel", name="Towel", points_cost=100))
        await session.commit()
    await _add_points(pooled_client, 100)

    responses = await asyncio.gather(*[
        pooled_client.post("/loyalty/redeem-gift", json={
            "user_id": "u1", "gift_id": "gift-towel",
        })
        for _ in range(2)
    ])

    assert sorted(r.status_code for r in responses) == [200, 400]
    summary = (await pooled_client.get("/loyalty/user/u1")).json()["data"]
    assert summary["current_points"] == 0
    async with AsyncSession(pooled_engine) as session:
        redemptions = (await session.scalars(select(GiftRedemption))).all()
    assert len(redemptions) == 1


async def test_concurrent_earning_for_new_user_adds_up(pooled_client):
    responses = await asyncio.gather(*[
        _add_points(pooled_client, 10, user_id="newcomer") for _ in range(5)
    ])

    assert [r.status_code for r in responses] == [200] * 5
    summary = (await pooled_client.get("/loyalty/user/newcomer")).json()["data"]
    assert summary["total_points"] == 50
    assert summary["current_points"] == 50
    history = (await pooled_client.get("/loyalty/transactions/newcomer")).json()["data"]
    assert len(history) == 5


async def test_redeem_without_account_is_insufficient(client, seed_gifts):
    res = await client.post("/loyalty/redeem-gift", json={
        "user_id": "stranger", "gift_id": "gift-small",
    })
    assert res.status_code == 400
    assert res.json()["code"] == "INSUFFICIENT_POINTS"
