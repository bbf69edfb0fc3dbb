"""
Tests for application-level endpoints and middleware.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


@pytest.mark.asyncio
async def test_health_reports_status(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] in ("healthy", "degraded")
    assert "version" in data


@pytest.mark.asyncio
async def test_metrics_exposes_booking_counters(client: AsyncClient):
    await client.get("/api/bookings")
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "booking_operations_total" in response.text


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/api/bookings")
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_request_id_is_propagated(client: AsyncClient):
    response = await client.get("/api/bookings", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_cors_allows_any_origin(client: AsyncClient):
    response = await client.get("/api/bookings", headers={"Origin": "https://example.org"})
    assert response.headers["access-control-allow-origin"] in ("*", "https://example.org")


@pytest.mark.asyncio
async def test_malformed_json_is_bad_request(client: AsyncClient):
    response = await client.post(
        "/api/bookings",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body"


def test_cors_origins_setting():
    from booking_api.core.config import Settings

    assert Settings(CORS_ORIGINS="").cors_origins == ["*"]
    assert Settings(CORS_ORIGINS="https://a.example, https://b.example").cors_origins == [
        "https://a.example",
        "https://b.example",
    ]
