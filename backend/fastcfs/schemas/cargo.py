"""Pydantic schemas for cargo, flight segments, status history, and tracking."""

from datetime import datetime

from pydantic import BaseModel, Field

from fastcfs.models.cargo import CargoStatus


# ── Cargo ────────────────────────────────────────────────────

class CargoCreate(BaseModel):
    """Admin creates a cargo record; tracking_number and status are server-set."""
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    sales_rep_name: str = Field(..., min_length=1)
    cargo_description: str = Field(..., min_length=1)  # HTML
    origin: str | None = None
    destination: str | None = None
    weight: str | None = None
    dimensions: str | None = None


class CargoDetailsUpdate(BaseModel):
    """Editable customer/cargo fields.

    Anything else in the request body (status, tracking_number, ...) is
    dropped by Pydantic's default extra="ignore".
    """
    customer_name: str | None = None
    customer_phone: str | None = None
    sales_rep_name: str | None = None
    cargo_description: str | None = None
    origin: str | None = None
    destination: str | None = None
    weight: str | None = None
    dimensions: str | None = None


class CargoStatusUpdate(BaseModel):
    status: CargoStatus


class CargoOut(BaseModel):
    id: int
    tracking_number: str
    customer_name: str
    customer_phone: str
    sales_rep_name: str
    cargo_description: str
    status: str
    origin: str | None
    destination: str | None
    weight: str | None
    dimensions: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CargoListOut(BaseModel):
    cargo: list[CargoOut]
    total: int
    page: int
    limit: int


# ── Flight segments ──────────────────────────────────────────

class FlightSegmentCreate(BaseModel):
    """One flight leg.

    Times are accepted as ISO-8601 strings ("2025-01-01T10:00" from a
    datetime-local input is fine) and parsed by the cargo service, which
    reports the offending field by name.
    """
    flight_number: str = Field(..., min_length=1, max_length=20)
    airline: str | None = None
    departure_airport: str = Field(..., min_length=1)
    arrival_airport: str = Field(..., min_length=1)
    departure_time: str | None = None
    arrival_time: str | None = None
    pieces: str | None = None
    weight: str | None = None
    volume: str | None = None
    status: str = "Planned"


class FlightSegmentUpdate(BaseModel):
    flight_number: str | None = Field(None, min_length=1, max_length=20)
    airline: str | None = None
    departure_airport: str | None = None
    arrival_airport: str | None = None
    departure_time: str | None = None
    arrival_time: str | None = None
    pieces: str | None = None
    weight: str | None = None
    volume: str | None = None
    status: str | None = None


class FlightSegmentOut(BaseModel):
    id: int
    cargo_id: int
    flight_number: str
    airline: str | None
    departure_airport: str
    arrival_airport: str
    departure_time: datetime
    arrival_time: datetime
    pieces: str | None
    weight: str | None
    volume: str | None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ── Status history ───────────────────────────────────────────

class StatusHistoryCreate(BaseModel):
    status: str = Field(..., min_length=1, max_length=100)
    details: str | None = None
    location: str | None = None
    timestamp: datetime | None = None  # defaults to now


class StatusHistoryOut(BaseModel):
    id: int
    cargo_id: int
    status: str
    details: str | None
    location: str | None
    timestamp: datetime

    model_config = {"from_attributes": True}


# ── Public tracking ──────────────────────────────────────────

class TrackingOut(BaseModel):
    """Composite tracking view.

    status_history is newest-first; the tracking page reverses it for a
    chronological timeline.
    """
    cargo: CargoOut
    flight_segments: list[FlightSegmentOut]
    status_history: list[StatusHistoryOut]

    model_config = {"from_attributes": True}
