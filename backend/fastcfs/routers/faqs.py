"""Frequently asked questions.

Endpoints:
    GET    /api/faqs                  Active FAQs
    GET    /api/admin/faqs            All FAQs (?is_active= to filter)
    POST   /api/admin/faqs            Create
    PUT    /api/admin/faqs/{id}       Update
    DELETE /api/admin/faqs/{id}       Delete
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ResourceNotFoundError
from fastcfs.models.faq import Faq
from fastcfs.models.user import User
from fastcfs.schemas.faq import FaqCreate, FaqOut, FaqUpdate

router = APIRouter()
admin_router = APIRouter()


async def _get_faq(db: AsyncSession, faq_id: int) -> Faq:
    faq = await db.get(Faq, faq_id)
    if faq is None:
        raise ResourceNotFoundError("FAQ", faq_id)
    return faq


@router.get("", response_model=list[FaqOut])
async def list_active_faqs(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Faq).where(Faq.is_active == True).order_by(Faq.id)  # noqa: E712
    )
    return [FaqOut.model_validate(f) for f in result.scalars().all()]


@admin_router.get("", response_model=list[FaqOut])
async def list_faqs(
    is_active: bool | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    query = select(Faq)
    if is_active is not None:
        query = query.where(Faq.is_active == is_active)
    result = await db.execute(query.order_by(Faq.id))
    return [FaqOut.model_validate(f) for f in result.scalars().all()]


@admin_router.post("", response_model=FaqOut, status_code=status.HTTP_201_CREATED)
async def create_faq(
    body: FaqCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    faq = Faq(**body.model_dump())
    db.add(faq)
    await db.flush()
    return FaqOut.model_validate(faq)


@admin_router.put("/{faq_id}", response_model=FaqOut)
async def update_faq(
    faq_id: int,
    body: FaqUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    faq = await _get_faq(db, faq_id)
    for key, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(faq, key, value)
    await db.flush()
    return FaqOut.model_validate(faq)


@admin_router.delete("/{faq_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_faq(
    faq_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    await db.delete(await _get_faq(db, faq_id))
    await db.flush()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
