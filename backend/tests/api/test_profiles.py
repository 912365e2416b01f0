"""Profiles API - lookup by id/email/role, soft delete when history exists."""

import pytest

from freezefit.models.appointment import Appointment
from freezefit.models.profile import Profile
from freezefit.models.review import Review


@pytest.fixture
async def seed_profiles(seed):
    return await seed(
        Profile(id="p-1", email="zoe@example.com", full_name="Zoe", role="customer"),
        Profile(id="p-2", email="amir@example.com", full_name="Amir", role="provider"),
        Profile(id="p-3", email="bella@example.com", full_name="Bella", role="customer"),
    )


async def test_create_profile_defaults_role_and_normalizes_email(client):
    res = await client.post("/profiles", json={"email": " Yael@Example.com ", "full_name": "Yael"})
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["role"] == "customer"
    assert data["email"] == "yael@example.com"
    assert data["is_active"] is True


async def test_create_profile_with_auth_provider_id(client):
    res = await client.post("/profiles", json={"id": "auth-uid-9", "email": "a@b.co"})
    assert res.json()["data"]["id"] == "auth-uid-9"


async def test_create_profile_requires_email(client):
    res = await client.post("/profiles", json={"full_name": "Nobody"})
    assert res.status_code == 400
    assert res.json()["error"] == "email is required"


async def test_create_profile_short_email_is_invalid_not_missing(client):
    res = await client.post("/profiles", json={"email": "ab"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Invalid request data"
    assert body["details"][0]["type"] == "string_too_short"


async def test_list_profiles_ordered_by_name(client, seed_profiles):
    names = [p["full_name"] for p in (await client.get("/profiles")).json()["data"]]
    assert names == ["Amir", "Bella", "Zoe"]


async def test_profiles_by_role(client, seed_profiles):
    data = (await client.get("/profiles/role/customer")).json()["data"]
    assert [p["full_name"] for p in data] == ["Bella", "Zoe"]


async def test_profile_by_email(client, seed_profiles):
    res = await client.get("/profiles/email/amir@example.com")
    assert res.json()["data"]["id"] == "p-2"


async def test_profile_by_unknown_email_returns_404(client):
    assert (await client.get("/profiles/email/ghost@example.com")).status_code == 404


async def test_update_profile(client, seed_profiles):
    res = await client.put("/profiles/p-1", json={"age": 31, "gender": "female"})
    data = res.json()["data"]
    assert data["age"] == 31
    assert data["gender"] == "female"


async def test_delete_profile_without_history_deletes(client, seed_profiles):
    res = await client.delete("/profiles/p-3")
    data = res.json()["data"]
    assert data["deleted"] is True
    assert data["deactivated"] is False
    assert (await client.get("/profiles/p-3")).status_code == 404


async def test_delete_profile_with_history_deactivates(client, seed, seed_profiles):
    await seed(
        Appointment(
            user_id="p-1", institute_id="i-1", service_name="Plunge",
            appointment_date="2026-10-01", appointment_time="10:00",
        ),
        Review(user_id="p-1", institute_id="i-1", rating=5, content="Great"),
    )
    res = await client.delete("/profiles/p-1")
    data = res.json()["data"]
    assert data == {
        "deactivated": True,
        "deleted": False,
        "hasAppointments": True,
        "hasReviews": True,
        "message": "Profile deactivated due to existing data",
    }
    profile = (await client.get("/profiles/p-1")).json()["data"]
    assert profile["is_active"] is False
    assert profile["deactivated_at"] is not None
