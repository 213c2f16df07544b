"""
Storage API tests - bucket limits and owner-folder deletes.
"""

import pytest
from httpx import AsyncClient

JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 64


@pytest.mark.asyncio
async def test_upload_and_download(client: AsyncClient, seller):
    account, _, headers = seller
    path = f"/api/v1/storage/listing-images/{account.id}/bike.jpg"
    response = await client.put(path, headers={**headers, "Content-Type": "image/jpeg"}, content=JPEG)
    assert response.status_code == 201
    data = response.json()
    assert data["size"] == len(JPEG)
    assert data["owner_id"] == account.id
    assert data["public_path"] == path

    # Public bucket: readable without auth
    download = await client.get(path)
    assert download.status_code == 200
    assert download.content == JPEG
    assert download.headers["content-type"] == "image/jpeg"


@pytest.mark.asyncio
async def test_upload_requires_auth(client: AsyncClient):
    response = await client.put(
        "/api/v1/storage/listing-images/1/bike.jpg", headers={"Content-Type": "image/jpeg"}, content=JPEG
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_upload_rejects_wrong_type(client: AsyncClient, seller):
    account, _, headers = seller
    response = await client.put(
        f"/api/v1/storage/listing-images/{account.id}/notes.pdf",
        headers={**headers, "Content-Type": "application/pdf"},
        content=b"%PDF-1.4",
    )
    assert response.status_code == 415


@pytest.mark.asyncio
async def test_upload_rejects_oversized(client: AsyncClient, seller):
    account, _, headers = seller
    response = await client.put(
        f"/api/v1/storage/profile-images/{account.id}/avatar.png",
        headers={**headers, "Content-Type": "image/png"},
        content=b"\x00" * (2 * 1024 * 1024 + 1),
    )
    assert response.status_code == 413


@pytest.mark.asyncio
async def test_upload_unknown_bucket(client: AsyncClient, seller):
    _, _, headers = seller
    response = await client.put(
        "/api/v1/storage/documents/1/a.jpg", headers={**headers, "Content-Type": "image/jpeg"}, content=JPEG
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_upload_conflicts(client: AsyncClient, seller):
    account, _, headers = seller
    path = f"/api/v1/storage/listing-images/{account.id}/bike.jpg"
    upload_headers = {**headers, "Content-Type": "image/jpeg"}
    assert (await client.put(path, headers=upload_headers, content=JPEG)).status_code == 201
    assert (await client.put(path, headers=upload_headers, content=JPEG)).status_code == 409


@pytest.mark.asyncio
async def test_delete_only_from_own_folder(client: AsyncClient, seller, make_account):
    account, _, headers = seller
    _, _, other_headers = await make_account("other@example.com")
    path = f"/api/v1/storage/listing-images/{account.id}/bike.jpg"
    await client.put(path, headers={**headers, "Content-Type": "image/jpeg"}, content=JPEG)

    assert (await client.delete(path, headers=other_headers)).status_code == 403
    assert (await client.delete(path, headers=headers)).status_code == 204
    assert (await client.get(path)).status_code == 404
