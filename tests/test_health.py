"""
Health endpoint tests - TDD: fast feedback on API availability.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """GET /api/v1/health returns 200, status ok and the app name."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["app"] == "Nexar Marketplace API"


@pytest.mark.asyncio
async def test_ready(client: AsyncClient):
    """GET /api/v1/health/ready returns 200."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_metrics_exposes_storefront_counters(client: AsyncClient):
    """Prometheus endpoint is mounted and lists the storefront fetch counter."""
    response = await client.get("/metrics/")
    assert response.status_code == 200
    assert "nexar_storefront_fetch_total" in response.text
    assert "nexar_profile_provisioning_failures_total" in response.text


@pytest.mark.asyncio
async def test_ready_reports_optional_backends(client: AsyncClient):
    """Test settings switch Redis and search indexing off."""
    data = (await client.get("/api/v1/health/ready")).json()
    assert data["cache"] == "disabled"
    assert data["search_indexing"] == "disabled"
