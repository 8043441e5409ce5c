"""
Standardized pagination for list endpoints.

Lists are paged by page number and page size and answer with the same
envelope everywhere:

    {"items": [...], "pagination": {"current": 2, "total": 5, "total_items": 42, "limit": 10}}

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/fichas")
    def list_sheets(
        pagination: Pagination = Depends(get_pagination),
        db: Session = Depends(get_db),
    ):
        items, total = service.list_all(filters)
        return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel

from shared.config.constants import Limits
from shared.utils.schemas import PaginationMeta

T = TypeVar("T")


@dataclass
class Pagination:
    """
    Pagination parameters with validation.

    Attributes:
        page: 1-indexed page number
        limit: Items per page (1 to max_limit)
    """

    page: int = 1
    limit: int = Limits.DEFAULT_PAGE_SIZE
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), self.max_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PaginationMeta:
        pages = (total + self.limit - 1) // self.limit
        return PaginationMeta(current=self.page, total=pages, total_items=total, limit=self.limit)


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Items per page",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    return Pagination(page=page, limit=limit)


class Page(BaseModel, Generic[T]):
    """Response model of every paginated list."""

    items: list[T]
    pagination: PaginationMeta


@dataclass
class PaginatedResponse:
    """
    Wrapper for paginated responses.

    Usage:
        items, total = service.list_all(filters)
        return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()
    """

    items: list[Any]
    pagination: Pagination
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "pagination": self.pagination.meta(self.total),
        }
