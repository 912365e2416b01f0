"""Data-access failures - converted to a generic 500, never retried, never leaked.

Invariants:
    - Any SQLAlchemy error during a request -> 500 "Internal server error"
    - Driver messages (table names, SQL) never appear in the response
    - The failure is logged with the request path
"""

import logging

import pytest

from freezefit.db.base import Base


@pytest.fixture
async def broken_db(test_engine):
    """Drop every table so each statement fails inside the driver."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def test_insert_failure_returns_generic_500(client, broken_db):
    res = await client.post(
        "/messages", json={"user_id": "u1", "subject": "Hi", "content": "test"},
    )
    assert res.status_code == 500
    body = res.json()
    assert body == {
        "success": False, "error": "Internal server error", "code": "INTERNAL_ERROR",
    }
    assert "messages" not in res.text


async def test_query_failure_returns_generic_500(client, broken_db):
    res = await client.get("/messages/user/u1")
    assert res.status_code == 500
    assert res.json()["error"] == "Internal server error"


async def test_update_failure_returns_500_not_404(client, broken_db):
    res = await client.put("/messages/some-id/read")
    assert res.status_code == 500


async def test_database_failure_is_logged(client, broken_db, caplog):
    with caplog.at_level(logging.ERROR):
        await client.get("/appointments")
    assert any("no such table" in r.getMessage() for r in caplog.records)
