"""Contact form.

Endpoints:
    POST /api/contact                     Submit a message (public)
    GET  /api/admin/contact               Submissions, newest first (paged)
    PUT  /api/admin/contact/{id}/read     Mark as read
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ResourceNotFoundError
from fastcfs.models.contact_submission import ContactSubmission
from fastcfs.models.user import User
from fastcfs.schemas.common import PageParams, page_params
from fastcfs.schemas.contact import ContactCreate, ContactListOut, ContactOut

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.post("", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
async def submit_contact(body: ContactCreate, db: AsyncSession = Depends(get_db)):
    submission = ContactSubmission(**body.model_dump(), is_read=False)
    db.add(submission)
    await db.flush()
    logger.info("Contact submission %s received", submission.id)
    return ContactOut.model_validate(submission)


@admin_router.get("", response_model=ContactListOut)
async def list_submissions(
    params: PageParams = Depends(page_params()),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    result = await db.execute(
        select(ContactSubmission)
        .order_by(ContactSubmission.created_at.desc(), ContactSubmission.id.desc())
        .limit(params.limit)
        .offset(params.offset)
    )
    total = await db.scalar(select(func.count(ContactSubmission.id)))
    return ContactListOut(
        submissions=[ContactOut.model_validate(s) for s in result.scalars().all()],
        total=total or 0,
    )


@admin_router.put("/{submission_id}/read", response_model=ContactOut)
async def mark_submission_read(
    submission_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    submission = await db.get(ContactSubmission, submission_id)
    if submission is None:
        raise ResourceNotFoundError("Contact submission", submission_id)
    submission.is_read = True
    await db.flush()
    return ContactOut.model_validate(submission)
