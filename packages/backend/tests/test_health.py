"""Health endpoint tests."""

import pytest

from bazaar import __version__


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint should return server status and version."""
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["server"] == "ok"
    assert data["version"] == __version__


@pytest.mark.asyncio
async def test_health_without_redis_is_not_degraded(client):
    """Redis is optional: only the database decides the status."""
    data = (await client.get("/api/health")).json()
    assert data["database"] == "ok"
    assert data["redis"].startswith("unavailable")
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_health_needs_no_credential(client):
    resp = await client.get("/api/health", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 200
