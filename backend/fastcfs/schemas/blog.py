"""Pydantic schemas for blog posts."""

from datetime import datetime

from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    excerpt: str | None = None
    content: str = Field(..., min_length=1)  # HTML
    cover_image: str | None = None
    category: str = "General"
    is_published: bool = False


class BlogPostUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, max_length=255, pattern=SLUG_PATTERN)
    excerpt: str | None = None
    content: str | None = None
    cover_image: str | None = None
    category: str | None = None
    is_published: bool | None = None


class BlogPostOut(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str
    cover_image: str | None
    category: str
    is_published: bool
    author_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BlogPostListOut(BaseModel):
    posts: list[BlogPostOut]
    total: int
