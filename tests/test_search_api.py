"""
Search API tests - request shaping; Elasticsearch itself is replaced with monkeypatch.
"""

import pytest
from httpx import AsyncClient

from nexar.api.v1.endpoints import search as search_endpoint


@pytest.mark.asyncio
async def test_search_passes_filters(client: AsyncClient, monkeypatch):
    calls = []

    async def fake_search(query, *, category=None, skip=0, limit=20):
        calls.append({"query": query, "category": category, "skip": skip, "limit": limit})
        return [{"id": 1, "title": "BMW R 1250 GS"}]

    monkeypatch.setattr(search_endpoint, "search_listings", fake_search)
    response = await client.get("/api/v1/search/listings", params={"q": " bmw gs ", "category": "adventure"})
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["category"] == "adventure"
    assert calls == [{"query": "bmw gs", "category": "adventure", "skip": 0, "limit": 20}]


@pytest.mark.asyncio
async def test_search_requires_query(client: AsyncClient):
    assert (await client.get("/api/v1/search/listings")).status_code == 422


@pytest.mark.asyncio
async def test_search_degrades_to_empty_without_elasticsearch(client: AsyncClient, monkeypatch):
    async def unreachable():
        raise ConnectionError("Elasticsearch is down")

    monkeypatch.setattr("nexar.search.elasticsearch_client.get_elasticsearch", unreachable)
    response = await client.get("/api/v1/search/listings", params={"q": "honda"})
    assert response.status_code == 200
    assert response.json()["results"] == []
