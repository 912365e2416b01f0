"""Messages API - create, list, mark read, update, delete.

Invariants:
    - POST with user_id, subject, content -> 201, is_read false, timestamps set,
      sender_type defaults to "customer"
    - POST missing any required field -> 400 with success false
    - PUT /{id}/read on unknown id -> 404; on existing id -> 200, is_read true,
      updated_at advances
"""

from datetime import datetime
from uuid import uuid4

import pytest

from freezefit.models.message import Message


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


@pytest.fixture
async def seed_message(seed):
    return await seed(Message(user_id="u1", subject="Hello", content="First"))


# ─── POST /messages ──────────────────────────────────────────────

async def test_create_message_returns_201_with_defaults(client):
    res = await client.post(
        "/messages", json={"user_id": "u1", "subject": "Hi", "content": "test"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert data["sender_type"] == "customer"
    assert data["message_type"] == "general"
    assert data["is_read"] is False
    assert data["institute_id"] is None
    assert data["id"]
    assert data["created_at"] and data["updated_at"]


async def test_create_message_keeps_institute_and_sender(client):
    res = await client.post("/messages", json={
        "user_id": "u1", "institute_id": "inst-1", "subject": "Re: booking",
        "content": "See you at 9", "sender_type": "institute",
    })
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["institute_id"] == "inst-1"
    assert data["sender_type"] == "institute"


@pytest.mark.parametrize("missing", ["user_id", "subject", "content"])
async def test_create_message_missing_required_field_returns_400(client, missing):
    payload = {"user_id": "u1", "subject": "Hi", "content": "test"}
    del payload[missing]
    res = await client.post("/messages", json=payload)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert missing in body["error"]


async def test_create_message_empty_required_field_returns_400(client):
    res = await client.post(
        "/messages", json={"user_id": "", "subject": "Hi", "content": "test"},
    )
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert res.json()["error"] == "user_id is required"


async def test_create_message_missing_all_fields_names_them(client):
    res = await client.post("/messages", json={})
    assert res.status_code == 400
    assert res.json()["error"] == "user_id, subject, and content are required"


async def test_create_message_rejects_unknown_sender_type(client):
    res = await client.post("/messages", json={
        "user_id": "u1", "subject": "Hi", "content": "x", "sender_type": "robot",
    })
    assert res.status_code == 400


# ─── GET ─────────────────────────────────────────────────────────

async def test_list_user_messages_newest_first(client):
    for subject in ("one", "two", "three"):
        await client.post(
            "/messages", json={"user_id": "u1", "subject": subject, "content": "c"},
        )
    await client.post(
        "/messages", json={"user_id": "u2", "subject": "other", "content": "c"},
    )

    res = await client.get("/messages/user/u1")
    assert res.status_code == 200
    subjects = [m["subject"] for m in res.json()["data"]]
    assert subjects == ["three", "two", "one"]


async def test_list_user_messages_empty_for_unknown_user(client):
    res = await client.get("/messages/user/nobody")
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": []}


async def test_list_institute_messages(client):
    await client.post("/messages", json={
        "user_id": "u1", "institute_id": "inst-1", "subject": "s", "content": "c",
    })
    await client.post("/messages", json={"user_id": "u1", "subject": "s", "content": "c"})

    res = await client.get("/messages/institute/inst-1")
    assert [m["institute_id"] for m in res.json()["data"]] == ["inst-1"]


async def test_get_message_by_id(client, seed_message):
    res = await client.get(f"/messages/{seed_message.id}")
    assert res.status_code == 200
    assert res.json()["data"]["subject"] == "Hello"


async def test_get_unknown_message_returns_404(client):
    res = await client.get(f"/messages/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["success"] is False


# ─── PUT /messages/{id}/read ─────────────────────────────────────

async def test_mark_read_unknown_id_returns_404(client):
    res = await client.put(f"/messages/{uuid4()}/read")
    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["code"] == "RESOURCE_NOT_FOUND"


async def test_mark_read_non_uuid_id_returns_404(client):
    res = await client.put("/messages/not-a-real-id/read")
    assert res.status_code == 404


async def test_mark_read_sets_flag_and_advances_updated_at(client):
    created = (await client.post(
        "/messages", json={"user_id": "u1", "subject": "Hi", "content": "test"},
    )).json()["data"]

    res = await client.put(f"/messages/{created['id']}/read")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == created["id"]
    assert data["is_read"] is True
    assert _ts(data["updated_at"]) > _ts(created["updated_at"])
    assert data["created_at"] == created["created_at"]


async def test_mark_read_is_persisted(client, seed_message):
    await client.put(f"/messages/{seed_message.id}/read")
    res = await client.get("/messages/user/u1")
    assert res.json()["data"][0]["is_read"] is True


# ─── PUT /messages/{id} and DELETE ───────────────────────────────

async def test_update_message_changes_only_given_fields(client, seed_message):
    res = await client.put(f"/messages/{seed_message.id}", json={"subject": "Edited"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["subject"] == "Edited"
    assert data["content"] == "First"


async def test_update_message_with_no_writable_fields_returns_400(client, seed_message):
    res = await client.put(
        f"/messages/{seed_message.id}", json={"id": "x", "created_at": "2020-01-01"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "No valid fields to update"


async def test_delete_message(client, seed_message):
    res = await client.delete(f"/messages/{seed_message.id}")
    assert res.status_code == 200
    assert res.json()["data"] == {"deleted": True}

    again = await client.delete(f"/messages/{seed_message.id}")
    assert again.json()["data"] == {"deleted": False}
