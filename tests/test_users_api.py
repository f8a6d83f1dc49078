"""Tests for the users API endpoints."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth, create_user


async def test_register_user(client: AsyncClient):
    """POST /api/users should create a user and hand back an API token."""
    resp = await client.post("/api/users", json={"name": "yash"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "yash"
    assert data["is_admin"] is False
    assert data["api_token"]

    me = await client.get(
        "/api/users/me", headers={"Authorization": f"Bearer {data['api_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["id"] == data["id"]
    assert "api_token" not in me.json()


async def test_register_user_duplicate(client: AsyncClient, db: AsyncSession):
    await create_user(db, name="bob")
    await db.commit()

    resp = await client.post("/api/users", json={"name": "bob"})
    assert resp.status_code == 409
    assert resp.json() == {"detail": "User bob already exists"}


async def test_get_current_user(client: AsyncClient, db: AsyncSession):
    """GET /api/users/me should return the authenticated user."""
    user = await create_user(db, name="yash")
    await db.commit()

    resp = await client.get("/api/users/me", headers=auth(user))
    assert resp.status_code == 200
    assert resp.json()["name"] == "yash"


async def test_get_current_user_via_cookie(client: AsyncClient, db: AsyncSession):
    user = await create_user(db, name="yash")
    await db.commit()

    resp = await client.get(
        "/api/users/me", headers={"Cookie": f"threadboard_token={user.api_token}"}
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "yash"


async def test_get_current_user_unauthenticated(client: AsyncClient):
    """GET /api/users/me should 401 without a token."""
    resp = await client.get("/api/users/me")
    assert resp.status_code == 401

    resp = await client.get("/api/users/me", headers={"Authorization": "Bearer bogus"})
    assert resp.status_code == 401
