"""
Listing API tests - REST CRUD, read policy and owner/admin writes (TDD).
Challenge: Ensure endpoints return correct status codes and shape.
"""

import pytest
from httpx import AsyncClient

NEW_LISTING = {
    "title": "Ducati Monster 821",
    "description": "Un singur proprietar",
    "brand": "Ducati",
    "model": "Monster 821",
    "category": "naked",
    "year": 2019,
    "mileage": 18000,
    "price": 8900,
    "location": "Timișoara",
    "images": ["https://cdn.example.com/monster.jpg"],
}


@pytest.mark.asyncio
async def test_list_listings_empty(client: AsyncClient):
    """GET /api/v1/listings returns 200 and list (possibly empty)."""
    response = await client.get("/api/v1/listings")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_listing_requires_auth(client: AsyncClient):
    response = await client.post("/api/v1/listings", json=NEW_LISTING)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_listing_with_auth(client: AsyncClient, seller):
    """POST /api/v1/listings with valid token creates listing for the caller's profile."""
    _, profile, headers = seller
    response = await client.post("/api/v1/listings", headers=headers, json=NEW_LISTING)
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Ducati Monster 821"
    assert data["seller_id"] == profile.id
    assert data["seller_name"] == "Andrei Pop"
    assert data["seller_type"] == "individual"
    assert data["status"] == "active"
    assert data["availability"] == "pe_stoc"
    assert data["featured"] is False


@pytest.mark.asyncio
async def test_create_listing_without_profile_is_forbidden(client: AsyncClient, make_account):
    _, _, headers = await make_account("orphan@example.com", with_profile=False)
    response = await client.post("/api/v1/listings", headers=headers, json=NEW_LISTING)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_only_admin_can_feature(client: AsyncClient, seller, admin):
    _, _, headers = seller
    _, _, admin_headers = admin
    denied = await client.post("/api/v1/listings", headers=headers, json={**NEW_LISTING, "featured": True})
    assert denied.status_code == 403
    created = await client.post("/api/v1/listings", headers=admin_headers, json={**NEW_LISTING, "featured": True})
    assert created.status_code == 201
    assert created.json()["featured"] is True


@pytest.mark.asyncio
async def test_invalid_category_rejected(client: AsyncClient, seller):
    _, _, headers = seller
    response = await client.post("/api/v1/listings", headers=headers, json={**NEW_LISTING, "category": "tractor"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_filters_and_newest_first(client: AsyncClient, seller, make_listing):
    _, profile, _ = seller
    first = await make_listing(profile, category="sport")
    second = await make_listing(profile, category="sport", featured=True)
    await make_listing(profile, category="touring")

    sport = (await client.get("/api/v1/listings", params={"category": "sport"})).json()
    assert [l["id"] for l in sport] == [second.id, first.id]

    featured = (await client.get("/api/v1/listings", params={"featured": "true"})).json()
    assert [l["id"] for l in featured] == [second.id]


@pytest.mark.asyncio
async def test_inactive_listing_visibility(client: AsyncClient, seller, admin, make_account, make_listing):
    _, profile, owner_headers = seller
    _, _, admin_headers = admin
    _, _, other_headers = await make_account("other@example.com")
    hidden = await make_listing(profile, status="sold")

    assert (await client.get(f"/api/v1/listings/{hidden.id}")).status_code == 404
    assert (await client.get(f"/api/v1/listings/{hidden.id}", headers=other_headers)).status_code == 404
    assert (await client.get(f"/api/v1/listings/{hidden.id}", headers=owner_headers)).status_code == 200
    assert (await client.get(f"/api/v1/listings/{hidden.id}", headers=admin_headers)).status_code == 200

    anonymous = (await client.get("/api/v1/listings")).json()
    assert anonymous == []
    own = (await client.get("/api/v1/listings", headers=owner_headers)).json()
    assert [l["id"] for l in own] == [hidden.id]


@pytest.mark.asyncio
async def test_update_listing_owner_only(client: AsyncClient, seller, make_account, make_listing):
    _, profile, owner_headers = seller
    _, _, other_headers = await make_account("other@example.com")
    listing = await make_listing(profile)

    denied = await client.put(f"/api/v1/listings/{listing.id}", headers=other_headers, json={"price": 1})
    assert denied.status_code == 403

    response = await client.put(
        f"/api/v1/listings/{listing.id}", headers=owner_headers, json={"price": 5900, "status": "sold"}
    )
    assert response.status_code == 200
    assert response.json()["price"] == 5900
    assert response.json()["status"] == "sold"


@pytest.mark.asyncio
async def test_admin_can_edit_any_listing(client: AsyncClient, seller, admin, make_listing):
    _, profile, _ = seller
    _, _, admin_headers = admin
    listing = await make_listing(profile)
    response = await client.put(f"/api/v1/listings/{listing.id}", headers=admin_headers, json={"featured": True})
    assert response.status_code == 200
    assert response.json()["featured"] is True


@pytest.mark.asyncio
async def test_delete_listing(client: AsyncClient, seller, make_account, make_listing):
    _, profile, owner_headers = seller
    _, _, other_headers = await make_account("other@example.com")
    listing = await make_listing(profile)

    assert (await client.delete(f"/api/v1/listings/{listing.id}", headers=other_headers)).status_code == 403
    assert (await client.delete(f"/api/v1/listings/{listing.id}", headers=owner_headers)).status_code == 204
    assert (await client.get(f"/api/v1/listings/{listing.id}")).status_code == 404
    assert (await client.delete(f"/api/v1/listings/{listing.id}", headers=owner_headers)).status_code == 404
