"""Public tracking endpoint tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.services import cargo as cargo_service


@pytest.mark.api
@pytest.mark.asyncio
class TestTracking:

    async def test_track_without_auth(
        self, client: AsyncClient, db_session: AsyncSession, cargo
    ):
        await cargo_service.add_flight_segment(
            db_session,
            cargo.id,
            {
                "flight_number": "EK001",
                "departure_airport": "DXB",
                "arrival_airport": "LHR",
                "departure_time": "2025-01-01T10:00",
                "arrival_time": "2025-01-01T14:00",
            },
        )
        await cargo_service.add_status_history(db_session, cargo.id, "Received", location="DXB")

        response = await client.get(f"/api/cargo/track/{cargo.tracking_number}")

        assert response.status_code == 200
        data = response.json()
        assert data["cargo"]["tracking_number"] == cargo.tracking_number
        assert data["cargo"]["status"] == "received"
        assert len(data["flight_segments"]) == 1
        assert data["status_history"][0]["location"] == "DXB"

    async def test_unknown_tracking_number(self, client: AsyncClient):
        response = await client.get("/api/cargo/track/00000000000000")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == (
            "Cargo not found. Please check your tracking number and try again."
        )

    async def test_tracking_is_read_only(
        self, client: AsyncClient, cargo
    ):
        first = await client.get(f"/api/cargo/track/{cargo.tracking_number}")
        second = await client.get(f"/api/cargo/track/{cargo.tracking_number}")

        assert first.json() == second.json()

    async def test_response_carries_security_headers(self, client: AsyncClient, cargo):
        response = await client.get(f"/api/cargo/track/{cargo.tracking_number}")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
