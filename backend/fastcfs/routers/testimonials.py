"""Customer testimonials.

Endpoints:
    POST   /api/testimonials                     Submit (always unapproved)
    GET    /api/testimonials                     Approved testimonials
    GET    /api/admin/testimonials               All testimonials
    PUT    /api/admin/testimonials/{id}/approve  Approve
    DELETE /api/admin/testimonials/{id}          Reject (delete)
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ResourceNotFoundError
from fastcfs.models.testimonial import Testimonial
from fastcfs.models.user import User
from fastcfs.schemas.testimonial import TestimonialCreate, TestimonialOut

router = APIRouter()
admin_router = APIRouter()


async def _get_testimonial(db: AsyncSession, testimonial_id: int) -> Testimonial:
    testimonial = await db.get(Testimonial, testimonial_id)
    if testimonial is None:
        raise ResourceNotFoundError("Testimonial", testimonial_id)
    return testimonial


@router.post("", response_model=TestimonialOut, status_code=status.HTTP_201_CREATED)
async def submit_testimonial(body: TestimonialCreate, db: AsyncSession = Depends(get_db)):
    """Visitors cannot self-approve; an admin has to approve it first."""
    testimonial = Testimonial(**body.model_dump(), is_approved=False)
    db.add(testimonial)
    await db.flush()
    return TestimonialOut.model_validate(testimonial)


@router.get("", response_model=list[TestimonialOut])
async def list_approved_testimonials(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Testimonial)
        .where(Testimonial.is_approved == True)  # noqa: E712
        .order_by(Testimonial.created_at.desc())
    )
    return [TestimonialOut.model_validate(t) for t in result.scalars().all()]


@admin_router.get("", response_model=list[TestimonialOut])
async def list_all_testimonials(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    result = await db.execute(
        select(Testimonial).order_by(Testimonial.created_at.desc())
    )
    return [TestimonialOut.model_validate(t) for t in result.scalars().all()]


@admin_router.put("/{testimonial_id}/approve", response_model=TestimonialOut)
async def approve_testimonial(
    testimonial_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    testimonial = await _get_testimonial(db, testimonial_id)
    testimonial.is_approved = True
    await db.flush()
    return TestimonialOut.model_validate(testimonial)


@admin_router.delete("/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
async def reject_testimonial(
    testimonial_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    await db.delete(await _get_testimonial(db, testimonial_id))
    await db.flush()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
