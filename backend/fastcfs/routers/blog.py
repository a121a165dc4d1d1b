"""Blog posts.

Endpoints:
    GET    /api/blog                 Published posts, newest first (paged)
    GET    /api/blog/{slug}          One published post
    GET    /api/admin/blog           All posts including drafts (paged)
    POST   /api/admin/blog           Create post (author = current user)
    PUT    /api/admin/blog/{id}      Update post
    DELETE /api/admin/blog/{id}      Delete post
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fastcfs.auth.deps import require_admin
from fastcfs.database import get_db
from fastcfs.middleware.exceptions import ConflictError, ResourceNotFoundError
from fastcfs.models.blog_post import BlogPost
from fastcfs.models.user import User
from fastcfs.schemas.blog import BlogPostCreate, BlogPostListOut, BlogPostOut, BlogPostUpdate
from fastcfs.schemas.common import PageParams, page_params

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()

# Optional columns an edit may clear with null
NULLABLE_FIELDS = frozenset({"excerpt", "cover_image"})


async def _list_posts(
    db: AsyncSession, params: PageParams, published_only: bool
) -> BlogPostListOut:
    query = select(BlogPost)
    count_query = select(func.count(BlogPost.id))
    if published_only:
        query = query.where(BlogPost.is_published == True)  # noqa: E712
        count_query = count_query.where(BlogPost.is_published == True)  # noqa: E712

    result = await db.execute(
        query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .limit(params.limit)
        .offset(params.offset)
    )
    total = await db.scalar(count_query)
    return BlogPostListOut(
        posts=[BlogPostOut.model_validate(p) for p in result.scalars().all()],
        total=total or 0,
    )


async def _ensure_slug_free(db: AsyncSession, slug: str, exclude_id: int | None = None):
    query = select(BlogPost.id).where(BlogPost.slug == slug)
    if exclude_id is not None:
        query = query.where(BlogPost.id != exclude_id)
    if await db.scalar(query) is not None:
        raise ConflictError(f"A blog post with slug '{slug}' already exists")


# ── Public ───────────────────────────────────────────────────

@router.get("", response_model=BlogPostListOut)
async def list_published_posts(
    params: PageParams = Depends(page_params(default_limit=10)),
    db: AsyncSession = Depends(get_db),
):
    return await _list_posts(db, params, published_only=True)


@router.get("/{slug}", response_model=BlogPostOut)
async def get_published_post(slug: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(BlogPost).where(
            BlogPost.slug == slug,
            BlogPost.is_published == True,  # noqa: E712
        )
    )
    post = result.scalar_one_or_none()
    if post is None:
        raise ResourceNotFoundError("Blog post", slug)
    return BlogPostOut.model_validate(post)


# ── Admin ────────────────────────────────────────────────────

@admin_router.get("", response_model=BlogPostListOut)
async def list_all_posts(
    params: PageParams = Depends(page_params(default_limit=10)),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    return await _list_posts(db, params, published_only=False)


@admin_router.post("", response_model=BlogPostOut, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: BlogPostCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    await _ensure_slug_free(db, body.slug)

    now = datetime.utcnow()
    post = BlogPost(**body.model_dump(), author_id=user.id, created_at=now, updated_at=now)
    db.add(post)
    await db.flush()

    logger.info("Blog post %r created by %s", post.slug, user.username)
    return BlogPostOut.model_validate(post)


@admin_router.put("/{post_id}", response_model=BlogPostOut)
async def update_post(
    post_id: int,
    body: BlogPostUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    post = await db.get(BlogPost, post_id)
    if post is None:
        raise ResourceNotFoundError("Blog post", post_id)

    updates = {
        key: value
        for key, value in body.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    if "slug" in updates and updates["slug"] != post.slug:
        await _ensure_slug_free(db, updates["slug"], exclude_id=post.id)

    for key, value in updates.items():
        setattr(post, key, value)
    post.updated_at = datetime.utcnow()
    await db.flush()
    return BlogPostOut.model_validate(post)


@admin_router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_admin),
):
    post = await db.get(BlogPost, post_id)
    if post is None:
        raise ResourceNotFoundError("Blog post", post_id)
    await db.delete(post)
    await db.flush()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
