"""
Health endpoint tests - fast feedback on API availability.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["app"]


@pytest.mark.asyncio
async def test_ready_checks_database(client: AsyncClient):
    """GET /api/v1/health/ready runs a query through the session and returns ready."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"
