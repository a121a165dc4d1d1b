"""Public cargo tracking.

Endpoints:
    GET /api/cargo/track/{tracking_number}   Cargo, flight segments and
                                             status history (newest first)

No authentication.  The tracking page polls this every 10 seconds.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.database import get_db
from fastcfs.schemas.cargo import TrackingOut
from fastcfs.services import cargo as cargo_service

router = APIRouter()


@router.get("/track/{tracking_number}", response_model=TrackingOut)
async def track_cargo(tracking_number: str, db: AsyncSession = Depends(get_db)):
    view = await cargo_service.track_cargo(db, tracking_number)
    return TrackingOut.model_validate(view)
