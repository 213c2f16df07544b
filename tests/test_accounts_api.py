"""
Account API tests - signup provisioning, duplicate emails, login, own profile.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_signup_provisions_profile(client: AsyncClient):
    response = await client.post(
        "/api/v1/accounts/signup",
        json={
            "email": "ana@example.com",
            "password": "password123",
            "metadata": {"name": "Ana", "location": "Sibiu", "sellerType": "dealer"},
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "ana@example.com"
    assert data["profile_id"] is not None
    assert "hashed_password" not in data

    login = await client.post("/api/v1/accounts/login", json={"email": "ana@example.com", "password": "password123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    me = await client.get("/api/v1/profiles/me", headers=headers)
    assert me.status_code == 200
    profile = me.json()
    assert profile["name"] == "Ana"
    assert profile["location"] == "Sibiu"
    assert profile["phone"] == ""
    assert profile["seller_type"] == "dealer"
    assert profile["is_admin"] is False


@pytest.mark.asyncio
async def test_signup_without_metadata_uses_defaults(client: AsyncClient):
    response = await client.post(
        "/api/v1/accounts/signup", json={"email": "ion.popescu@example.com", "password": "password123"}
    )
    assert response.status_code == 201
    profile = await client.get(f"/api/v1/profiles/{response.json()['profile_id']}")
    assert profile.status_code == 200
    assert profile.json()["name"] == "ion.popescu"
    assert profile.json()["seller_type"] == "individual"


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, seller):
    response = await client.post(
        "/api/v1/accounts/signup", json={"email": "seller@example.com", "password": "password123"}
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_signup_rejects_unknown_seller_type(client: AsyncClient):
    response = await client.post(
        "/api/v1/accounts/signup",
        json={"email": "x@example.com", "password": "password123", "metadata": {"sellerType": "wholesaler"}},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, seller):
    response = await client.post("/api/v1/accounts/login", json={"email": "seller@example.com", "password": "nope"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_profile_me_requires_auth(client: AsyncClient):
    assert (await client.get("/api/v1/profiles/me")).status_code == 401


@pytest.mark.asyncio
async def test_create_profile_after_failed_provisioning(client: AsyncClient, make_account):
    _, _, headers = await make_account("orphan@example.com", with_profile=False)
    assert (await client.get("/api/v1/profiles/me", headers=headers)).status_code == 404

    created = await client.post(
        "/api/v1/profiles/me", headers=headers, json={"name": "Orphan", "location": "Arad"}
    )
    assert created.status_code == 201
    assert created.json()["email"] == "orphan@example.com"

    again = await client.post("/api/v1/profiles/me", headers=headers, json={"name": "Orphan"})
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_update_own_profile(client: AsyncClient, seller):
    _, profile, headers = seller
    response = await client.put("/api/v1/profiles/me", headers=headers, json={"phone": "0744111222"})
    assert response.status_code == 200
    assert response.json()["phone"] == "0744111222"
    assert response.json()["name"] == profile.name


@pytest.mark.asyncio
async def test_reconcile_endpoint_requires_admin(client: AsyncClient, seller, admin):
    _, _, seller_headers = seller
    _, _, admin_headers = admin
    assert (await client.post("/api/v1/admin/profiles/reconcile", headers=seller_headers)).status_code == 403
    response = await client.post("/api/v1/admin/profiles/reconcile", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"created": 0, "failed": 0, "promoted": 0}
