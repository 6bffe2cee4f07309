"""Tests for explicit household creation.

Invariants:
    - A user owns and belongs to at most one household
    - A second creation attempt, explicit or after a lazy one, is a 400 conflict
"""

from sqlalchemy import func, select

from app.models.household import Household


async def test_create_household(client, auth_headers):
    res = await client.post("/api/v1/households", json={"name": "Home"}, headers=auth_headers)
    assert res.status_code == 201
    household = res.json()["household"]
    assert household["name"] == "Home"
    assert household["ownerId"]

    me = (await client.get("/api/v1/auth/me", headers=auth_headers)).json()
    assert me["user"]["householdId"] == household["id"]
    assert me["household"]["members"][0]["email"] == "a@x.com"


async def test_second_household_is_conflict(client, auth_headers, test_db):
    await client.post("/api/v1/households", json={"name": "Home"}, headers=auth_headers)
    res = await client.post("/api/v1/households", json={"name": "Cabin"}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "You already have a household", "code": "CONFLICT"}
    assert await test_db.scalar(select(func.count()).select_from(Household)) == 1


async def test_household_after_lazy_creation_is_conflict(client, auth_headers):
    await client.post(
        "/api/v1/accounts", json={"name": "Cash", "type": "CASH"}, headers=auth_headers,
    )
    res = await client.post("/api/v1/households", json={"name": "Home"}, headers=auth_headers)
    assert res.status_code == 400


async def test_blank_household_name_is_rejected(client, auth_headers):
    res = await client.post("/api/v1/households", json={"name": "   "}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


async def test_household_requires_session(client):
    res = await client.post("/api/v1/households", json={"name": "Home"})
    assert res.status_code == 401
