"""Admin cargo management router.

Endpoints:
    POST   /api/admin/cargo                                   Create cargo
    GET    /api/admin/cargo                                   List (paged)
    GET    /api/admin/cargo/{id}                              Get one
    PUT    /api/admin/cargo/{id}                              Edit details
    PUT    /api/admin/cargo/{id}/status                       Change status
    DELETE /api/admin/cargo/{id}                              Delete with children
    GET    /api/admin/cargo/{id}/flight-segments              List segments
    POST   /api/admin/cargo/{id}/flight-segments              Add segment
    PUT    /api/admin/cargo/{id}/flight-segments/{segment_id} Edit segment
    GET    /api/admin/cargo/{id}/status-history               List history
    POST   /api/admin/cargo/{id}/status-history               Add history entry
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.models.user import User
from fastcfs.schemas.cargo import (
    CargoCreate,
    CargoDetailsUpdate,
    CargoListOut,
    CargoOut,
    CargoStatusUpdate,
    FlightSegmentCreate,
    FlightSegmentOut,
    FlightSegmentUpdate,
    StatusHistoryCreate,
    StatusHistoryOut,
)
from fastcfs.schemas.common import PageParams, page_params
from fastcfs.services import cargo as cargo_service

router = APIRouter()


# ── Cargo ────────────────────────────────────────────────────

@router.post("", response_model=CargoOut, status_code=status.HTTP_201_CREATED)
async def create_cargo(
    body: CargoCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    """Create a cargo record; the tracking number is generated server-side."""
    cargo = await cargo_service.create_cargo(db, body)
    return CargoOut.model_validate(cargo)


@router.get("", response_model=CargoListOut)
async def list_cargo(
    params: PageParams = Depends(page_params()),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    items, total = await cargo_service.list_cargo(db, params.page, params.limit)
    return CargoListOut(
        cargo=[CargoOut.model_validate(c) for c in items],
        total=total,
        page=params.page,
        limit=params.limit,
    )


@router.get("/{cargo_id}", response_model=CargoOut)
async def get_cargo(
    cargo_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    return CargoOut.model_validate(await cargo_service.get_cargo(db, cargo_id))


@router.put("/{cargo_id}/status", response_model=CargoOut)
async def update_cargo_status(
    cargo_id: int,
    body: CargoStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    """Change cargo.status.  Does not add a status history entry."""
    cargo = await cargo_service.update_cargo_status(db, cargo_id, body.status)
    return CargoOut.model_validate(cargo)


@router.put("/{cargo_id}", response_model=CargoOut)
async def update_cargo_details(
    cargo_id: int,
    body: CargoDetailsUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    """Edit customer and cargo fields; status and tracking number are ignored."""
    cargo = await cargo_service.update_cargo_details(
        db, cargo_id, body.model_dump(exclude_unset=True)
    )
    return CargoOut.model_validate(cargo)


@router.delete("/{cargo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cargo(
    cargo_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    await cargo_service.delete_cargo(db, cargo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Flight segments ──────────────────────────────────────────

@router.get("/{cargo_id}/flight-segments", response_model=list[FlightSegmentOut])
async def list_flight_segments(
    cargo_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    segments = await cargo_service.list_flight_segments(db, cargo_id)
    return [FlightSegmentOut.model_validate(s) for s in segments]


@router.post(
    "/{cargo_id}/flight-segments",
    response_model=FlightSegmentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_flight_segment(
    cargo_id: int,
    body: FlightSegmentCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    segment = await cargo_service.add_flight_segment(db, cargo_id, body.model_dump())
    return FlightSegmentOut.model_validate(segment)


@router.put(
    "/{cargo_id}/flight-segments/{segment_id}",
    response_model=FlightSegmentOut,
)
async def update_flight_segment(
    cargo_id: int,
    segment_id: int,
    body: FlightSegmentUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    segment = await cargo_service.update_flight_segment(
        db, cargo_id, segment_id, body.model_dump(exclude_unset=True)
    )
    return FlightSegmentOut.model_validate(segment)


# ── Status history ───────────────────────────────────────────

@router.get("/{cargo_id}/status-history", response_model=list[StatusHistoryOut])
async def list_status_history(
    cargo_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    """Timeline entries, newest first."""
    entries = await cargo_service.list_status_history(db, cargo_id)
    return [StatusHistoryOut.model_validate(e) for e in entries]


@router.post(
    "/{cargo_id}/status-history",
    response_model=StatusHistoryOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_status_history(
    cargo_id: int,
    body: StatusHistoryCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    entry = await cargo_service.add_status_history(
        db,
        cargo_id,
        status=body.status,
        details=body.details,
        location=body.location,
        timestamp=body.timestamp,
    )
    return StatusHistoryOut.model_validate(entry)
