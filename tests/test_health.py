"""
Health endpoint tests - fast feedback on API availability.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """GET /health returns 200 and status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


@pytest.mark.asyncio
async def test_ready(client: AsyncClient):
    """GET /health/ready returns 200 when ES pings and the DB answers."""
    response = await client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"elasticsearch": True, "database": True}}


@pytest.mark.asyncio
async def test_not_ready_when_search_backend_down(client: AsyncClient, elasticsearch):
    elasticsearch.reachable = False
    response = await client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["checks"]["elasticsearch"] is False


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient):
    response = await client.get("/metrics/")
    assert response.status_code == 200
    assert "search_requests_total" in response.text
