"""Cargo tracking service.

Owns the cargo lifecycle and its two append/edit-only child collections:

  - Creating cargo with a generated DDMMYYHHMMSSRR tracking number
    (retried against the store on collision)
  - Status changes and whitelisted detail edits
  - Flight segments (add / edit, times validated and parsed here)
  - Status history (append-only timeline)
  - The public tracking composite: cargo + segments + history
  - Deleting a cargo together with everything it owns

Functions only flush; the request-scoped session (database.get_db) commits
once or rolls back, so every call here is one transaction.

cargo.status and the status history are maintained independently: changing
the status does not append a history entry.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.config import settings
from fastcfs.middleware.exceptions import (
    ConflictError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from fastcfs.models.cargo import Cargo, CargoStatus
from fastcfs.models.flight_segment import CargoFlightSegment
from fastcfs.models.status_history import CargoStatusHistory
from fastcfs.schemas.cargo import CargoCreate
from fastcfs.utils.numbering import generate_tracking_number

logger = logging.getLogger("fastcfs.cargo")

REQUIRED_CARGO_FIELDS = (
    "customer_name",
    "customer_phone",
    "sales_rep_name",
    "cargo_description",
)

# The only fields update_cargo_details may touch
CARGO_DETAIL_FIELDS = frozenset(REQUIRED_CARGO_FIELDS) | {
    "origin",
    "destination",
    "weight",
    "dimensions",
}

SEGMENT_FIELDS = frozenset({
    "flight_number",
    "airline",
    "departure_airport",
    "arrival_airport",
    "departure_time",
    "arrival_time",
    "pieces",
    "weight",
    "volume",
    "status",
})
SEGMENT_REQUIRED_TEXT = ("flight_number", "departure_airport", "arrival_airport")
SEGMENT_TIME_FIELDS = ("departure_time", "arrival_time")
# Optional segment columns an edit may clear with None
SEGMENT_NULLABLE_FIELDS = frozenset({"airline", "pieces", "weight", "volume"})

TRACKING_NOT_FOUND_MESSAGE = (
    "Cargo not found. Please check your tracking number and try again."
)


@dataclass
class TrackingView:
    """Everything the public tracking page shows for one cargo."""
    cargo: Cargo
    flight_segments: list[CargoFlightSegment]
    status_history: list[CargoStatusHistory]


# ── Validation helpers ───────────────────────────────────────

def _require_text(value: Any, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationFailedError(field, f"{field} is required")
    return value


def _naive_utc(value: datetime) -> datetime:
    # Columns are timezone-naive UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_instant(value: Any, field: str) -> datetime:
    """Parse a flight time into a datetime.

    Accepts datetime objects and ISO-8601 strings, including the
    "YYYY-MM-DDTHH:MM" form sent by datetime-local inputs.

    Raises:
        ValidationFailedError naming the field if missing or unparseable.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationFailedError(
            field, f"{field} is required: select departure and arrival time"
        )
    if isinstance(value, datetime):
        return _naive_utc(value)
    try:
        parsed = datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationFailedError(
            field, f"Invalid {field} format: {value!r}"
        ) from None
    return _naive_utc(parsed)


def _coerce_status(value: Any) -> CargoStatus:
    try:
        return CargoStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in CargoStatus)
        raise ValidationFailedError(
            "status", f"Invalid status {value!r}. Choose: {allowed}"
        ) from None


# ── Tracking numbers ─────────────────────────────────────────

async def _allocate_tracking_number(db: AsyncSession) -> str:
    """Generate a tracking number not yet present in the store."""
    attempts = settings.tracking_number_max_attempts
    for attempt in range(1, attempts + 1):
        candidate = generate_tracking_number()
        taken = await db.scalar(
            select(Cargo.id).where(Cargo.tracking_number == candidate)
        )
        if taken is None:
            return candidate
        logger.warning(
            "Tracking number %s already taken (attempt %d/%d)",
            candidate, attempt, attempts,
        )
    raise ConflictError(
        f"Could not allocate a unique tracking number after {attempts} attempts"
    )


# ── Cargo ────────────────────────────────────────────────────

async def create_cargo(db: AsyncSession, data: CargoCreate) -> Cargo:
    """Create a cargo record with a fresh tracking number and status=received.

    Raises:
        ValidationFailedError if a required field is blank.
        ConflictError if no unique tracking number could be stored.
    """
    fields = data.model_dump()
    for name in REQUIRED_CARGO_FIELDS:
        _require_text(fields.get(name), name)

    tracking_number = await _allocate_tracking_number(db)
    now = datetime.utcnow()
    cargo = Cargo(
        **fields,
        tracking_number=tracking_number,
        status=CargoStatus.RECEIVED.value,
        created_at=now,
        updated_at=now,
    )
    db.add(cargo)
    try:
        await db.flush()
    except IntegrityError as exc:
        # A concurrent create stored the same number between check and insert
        raise ConflictError(
            f"Tracking number {tracking_number} was taken concurrently, please retry"
        ) from exc

    logger.info("Created cargo %s (id=%s)", cargo.tracking_number, cargo.id)
    return cargo


async def get_cargo(db: AsyncSession, cargo_id: int) -> Cargo:
    cargo = await db.get(Cargo, cargo_id)
    if cargo is None:
        raise ResourceNotFoundError("Cargo", cargo_id)
    return cargo


async def get_cargo_by_tracking_number(
    db: AsyncSession, tracking_number: str
) -> Cargo:
    result = await db.execute(
        select(Cargo).where(Cargo.tracking_number == tracking_number)
    )
    cargo = result.scalar_one_or_none()
    if cargo is None:
        raise ResourceNotFoundError(
            "Cargo", tracking_number, message=TRACKING_NOT_FOUND_MESSAGE
        )
    return cargo


async def list_cargo(
    db: AsyncSession, page: int = 1, limit: int = 50
) -> tuple[list[Cargo], int]:
    """Return one page of cargo (newest first) and the total count."""
    offset = (max(page, 1) - 1) * limit
    result = await db.execute(
        select(Cargo)
        .order_by(Cargo.created_at.desc(), Cargo.id.desc())
        .limit(limit)
        .offset(offset)
    )
    total = await db.scalar(select(func.count(Cargo.id)))
    return list(result.scalars().all()), total or 0


async def track_cargo(db: AsyncSession, tracking_number: str) -> TrackingView:
    """Public tracking lookup.

    Read-only and stateless, so the tracking page can poll it freely.
    status_history comes back newest-first.
    """
    cargo = await get_cargo_by_tracking_number(db, tracking_number)
    return TrackingView(
        cargo=cargo,
        flight_segments=await list_flight_segments(db, cargo.id),
        status_history=await list_status_history(db, cargo.id),
    )


async def update_cargo_status(
    db: AsyncSession, cargo_id: int, new_status: CargoStatus | str
) -> Cargo:
    """Set cargo.status.  Any status may follow any other.

    Does not append a status history entry.
    """
    status = _coerce_status(new_status)
    cargo = await get_cargo(db, cargo_id)

    previous = cargo.status
    cargo.status = status.value
    cargo.updated_at = datetime.utcnow()
    await db.flush()

    logger.info(
        "Cargo %s status %s -> %s", cargo.tracking_number, previous, status.value
    )
    return cargo


async def update_cargo_details(
    db: AsyncSession, cargo_id: int, fields: dict[str, Any]
) -> Cargo:
    """Apply a partial edit restricted to CARGO_DETAIL_FIELDS.

    Only keys present in `fields` are applied; keys outside the whitelist
    are ignored.  None clears an optional field (origin, destination,
    weight, dimensions) and is rejected for a required one.  updated_at is
    refreshed even if nothing else changed.
    """
    cargo = await get_cargo(db, cargo_id)

    updates = {
        key: value for key, value in fields.items() if key in CARGO_DETAIL_FIELDS
    }
    for name in REQUIRED_CARGO_FIELDS:
        if name in updates:
            _require_text(updates[name], name)

    for key, value in updates.items():
        setattr(cargo, key, value)
    cargo.updated_at = datetime.utcnow()
    await db.flush()
    return cargo


async def delete_cargo(db: AsyncSession, cargo_id: int) -> None:
    """Delete a cargo after its flight segments and status history.

    The three deletes share the session's transaction, so a failure part
    way leaves everything in place.
    """
    cargo = await get_cargo(db, cargo_id)

    await db.execute(
        delete(CargoFlightSegment).where(CargoFlightSegment.cargo_id == cargo_id)
    )
    await db.execute(
        delete(CargoStatusHistory).where(CargoStatusHistory.cargo_id == cargo_id)
    )
    await db.delete(cargo)
    await db.flush()

    logger.info("Deleted cargo %s (id=%s)", cargo.tracking_number, cargo_id)


# ── Flight segments ──────────────────────────────────────────

async def list_flight_segments(
    db: AsyncSession, cargo_id: int
) -> list[CargoFlightSegment]:
    """Segments of a cargo in insertion order."""
    result = await db.execute(
        select(CargoFlightSegment)
        .where(CargoFlightSegment.cargo_id == cargo_id)
        .order_by(CargoFlightSegment.id)
    )
    return list(result.scalars().all())


async def add_flight_segment(
    db: AsyncSession, cargo_id: int, fields: dict[str, Any]
) -> CargoFlightSegment:
    """Add a flight leg to an existing cargo.

    Raises:
        ValidationFailedError if a time is missing/unparseable or a required
            text field is blank; nothing is persisted in that case.
        ResourceNotFoundError if the cargo does not exist.
    """
    values = {key: value for key, value in fields.items() if key in SEGMENT_FIELDS}
    for name in SEGMENT_TIME_FIELDS:
        values[name] = parse_instant(values.get(name), name)
    for name in SEGMENT_REQUIRED_TEXT:
        _require_text(values.get(name), name)
    if not values.get("status"):
        values["status"] = "Planned"

    await get_cargo(db, cargo_id)

    segment = CargoFlightSegment(
        cargo_id=cargo_id,
        created_at=datetime.utcnow(),
        **values,
    )
    db.add(segment)
    await db.flush()
    return segment


async def update_flight_segment(
    db: AsyncSession,
    cargo_id: int,
    segment_id: int,
    fields: dict[str, Any],
) -> CargoFlightSegment:
    """Edit a flight leg.  Supplied times go through parse_instant.

    None clears airline, pieces, weight or volume and is ignored for the
    other fields.

    Raises:
        ResourceNotFoundError if the segment does not exist under this cargo.
    """
    result = await db.execute(
        select(CargoFlightSegment).where(
            CargoFlightSegment.id == segment_id,
            CargoFlightSegment.cargo_id == cargo_id,
        )
    )
    segment = result.scalar_one_or_none()
    if segment is None:
        raise ResourceNotFoundError("Flight segment", segment_id)

    updates = {
        key: value
        for key, value in fields.items()
        if key in SEGMENT_FIELDS
        and (value is not None or key in SEGMENT_NULLABLE_FIELDS)
    }
    for name in SEGMENT_TIME_FIELDS:
        if name in updates:
            updates[name] = parse_instant(updates[name], name)
    for name in SEGMENT_REQUIRED_TEXT:
        if name in updates:
            _require_text(updates[name], name)

    for key, value in updates.items():
        setattr(segment, key, value)
    await db.flush()
    return segment


# ── Status history ───────────────────────────────────────────

async def list_status_history(
    db: AsyncSession, cargo_id: int
) -> list[CargoStatusHistory]:
    """Timeline entries of a cargo, newest first."""
    result = await db.execute(
        select(CargoStatusHistory)
        .where(CargoStatusHistory.cargo_id == cargo_id)
        .order_by(CargoStatusHistory.timestamp.desc(), CargoStatusHistory.id.desc())
    )
    return list(result.scalars().all())


async def add_status_history(
    db: AsyncSession,
    cargo_id: int,
    status: str,
    details: str | None = None,
    location: str | None = None,
    timestamp: datetime | None = None,
) -> CargoStatusHistory:
    """Append a timeline entry; timestamp defaults to now."""
    _require_text(status, "status")
    await get_cargo(db, cargo_id)

    entry = CargoStatusHistory(
        cargo_id=cargo_id,
        status=status,
        details=details,
        location=location,
        timestamp=_naive_utc(timestamp) if timestamp else datetime.utcnow(),
    )
    db.add(entry)
    await db.flush()
    return entry
