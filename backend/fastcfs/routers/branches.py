"""Branch offices.

Endpoints:
    GET    /api/branches               Active branches (public, paged)
    GET    /api/admin/branches         All branches (paged)
    POST   /api/admin/branches         Create branch
    PUT    /api/admin/branches/{id}    Update branch
    DELETE /api/admin/branches/{id}    Delete branch
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ResourceNotFoundError
from fastcfs.models.branch import Branch
from fastcfs.models.user import User
from fastcfs.schemas.branch import BranchCreate, BranchListOut, BranchOut, BranchUpdate
from fastcfs.schemas.common import PageParams, page_params

router = APIRouter()
admin_router = APIRouter()

# Optional columns an edit may clear with null
NULLABLE_FIELDS = frozenset({"location"})


async def _list_branches(
    db: AsyncSession, params: PageParams, active_only: bool
) -> BranchListOut:
    query = select(Branch)
    count_query = select(func.count(Branch.id))
    if active_only:
        query = query.where(Branch.is_active == True)  # noqa: E712
        count_query = count_query.where(Branch.is_active == True)  # noqa: E712

    result = await db.execute(
        query.order_by(Branch.name).limit(params.limit).offset(params.offset)
    )
    total = await db.scalar(count_query)
    return BranchListOut(
        branches=[BranchOut.model_validate(b) for b in result.scalars().all()],
        total=total or 0,
    )


async def _get_branch(db: AsyncSession, branch_id: int) -> Branch:
    branch = await db.get(Branch, branch_id)
    if branch is None:
        raise ResourceNotFoundError("Branch", branch_id)
    return branch


@router.get("", response_model=BranchListOut)
async def list_active_branches(
    params: PageParams = Depends(page_params()),
    db: AsyncSession = Depends(get_db),
):
    return await _list_branches(db, params, active_only=True)


@admin_router.get("", response_model=BranchListOut)
async def list_all_branches(
    params: PageParams = Depends(page_params()),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    return await _list_branches(db, params, active_only=False)


@admin_router.post("", response_model=BranchOut, status_code=status.HTTP_201_CREATED)
async def create_branch(
    body: BranchCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    branch = Branch(**body.model_dump())
    db.add(branch)
    await db.flush()
    return BranchOut.model_validate(branch)


@admin_router.put("/{branch_id}", response_model=BranchOut)
async def update_branch(
    branch_id: int,
    body: BranchUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    branch = await _get_branch(db, branch_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is not None or key in NULLABLE_FIELDS:
            setattr(branch, key, value)
    await db.flush()
    return BranchOut.model_validate(branch)


@admin_router.delete("/{branch_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_branch(
    branch_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    await db.delete(await _get_branch(db, branch_id))
    await db.flush()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
