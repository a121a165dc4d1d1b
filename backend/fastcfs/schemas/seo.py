from datetime import datetime

from pydantic import BaseModel, Field


class SeoSettingUpsert(BaseModel):
    """Create or replace the metadata of one page, keyed by `page`."""
    page: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    keywords: str | None = None
    og_image: str | None = None


class SeoSettingOut(BaseModel):
    id: int
    page: str
    title: str
    description: str
    keywords: str | None
    og_image: str | None
    updated_at: datetime

    model_config = {"from_attributes": True}
