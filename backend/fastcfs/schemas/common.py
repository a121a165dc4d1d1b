"""Common schemas used across the application."""

from fastapi import Query
from pydantic import BaseModel


class PageParams(BaseModel):
    """1-based page/limit pagination.

    Usage:
        params: PageParams = Depends(page_params(default_limit=10))
    """
    page: int = 1
    limit: int = 50

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(default_limit: int = 50, max_limit: int = 200):
    """Dependency factory reading ?page=&limit= from the query string."""
    def _params(
        page: int = Query(1, ge=1),
        limit: int = Query(default_limit, ge=1, le=max_limit),
    ) -> PageParams:
        return PageParams(page=page, limit=limit)

    return _params
