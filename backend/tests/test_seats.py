"""
Tests for the seat map and service endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_seat_map_of_fresh_car(client: AsyncClient):
    response = await client.get("/api/v1/seats/")
    assert response.status_code == 200
    data = response.json()
    assert data["capacity"] == 80
    assert data["row_width"] == 7
    assert data["row_widths"] == [7] * 11 + [3]
    assert data["available"] == 80
    assert len(data["rows"]) == 12
    assert [seat["id"] for seat in data["rows"][-1]] == [78, 79, 80]


@pytest.mark.asyncio
async def test_seat_map_shows_bookings(client: AsyncClient, auth_headers):
    await client.post("/api/v1/bookings/", json={"count": 2}, headers=auth_headers)

    data = (await client.get("/api/v1/seats/")).json()
    assert data["available"] == 78
    first_row = data["rows"][0]
    assert [seat["is_booked"] for seat in first_row[:3]] == [True, True, False]
    assert first_row[0]["owner"] == "alice@example.com"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_metrics(client: AsyncClient, auth_headers):
    await client.post("/api/v1/bookings/", json={"count": 1}, headers=auth_headers)
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "seat_booking_attempts_total" in response.text


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
