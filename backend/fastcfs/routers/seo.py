"""Per-page SEO metadata.

Endpoints:
    GET /api/seo/{page}     Metadata for one page (404 if not set)
    PUT /api/admin/seo      Create or replace metadata for a page
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ResourceNotFoundError
from fastcfs.models.seo_setting import SeoSetting
from fastcfs.models.user import User
from fastcfs.schemas.seo import SeoSettingOut, SeoSettingUpsert

router = APIRouter()
admin_router = APIRouter()


async def _find(db: AsyncSession, page: str) -> SeoSetting | None:
    result = await db.execute(select(SeoSetting).where(SeoSetting.page == page))
    return result.scalar_one_or_none()


@router.get("/{page}", response_model=SeoSettingOut)
async def get_seo_setting(page: str, db: AsyncSession = Depends(get_db)):
    setting = await _find(db, page)
    if setting is None:
        raise ResourceNotFoundError("SEO settings", page)
    return SeoSettingOut.model_validate(setting)


@admin_router.put("", response_model=SeoSettingOut)
async def upsert_seo_setting(
    body: SeoSettingUpsert,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    setting = await _find(db, body.page)
    if setting is None:
        setting = SeoSetting(**body.model_dump())
        db.add(setting)
    else:
        for key, value in body.model_dump(exclude={"page"}).items():
            setattr(setting, key, value)
    setting.updated_at = datetime.utcnow()
    await db.flush()
    return SeoSettingOut.model_validate(setting)
