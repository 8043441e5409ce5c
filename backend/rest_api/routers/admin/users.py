"""
User management endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import RepositoryFilters
from rest_api.routers._common import (
    Page,
    PaginatedResponse,
    Pagination,
    admin_user,
    current_user,
    get_pagination,
)
from rest_api.services.domain import UserService
from shared.infrastructure.db import get_db
from shared.utils.catalog_schemas import UserUpdate
from shared.utils.schemas import StatusUpdate, UserInfo


router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=Page[UserInfo])
def list_users(
    search: str | None = None,
    sort_by: str | None = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    admin: User = Depends(admin_user),
) -> dict:
    """List accounts (admin only). `search` matches name and email."""
    filters = RepositoryFilters(
        limit=pagination.limit,
        offset=pagination.offset,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, total = UserService(db).list_all(filters)
    return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()


@router.patch("/{user_id}", response_model=UserInfo)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> UserInfo:
    """Update a profile. Users edit their own; admins edit anyone."""
    return UserService(db).update(user_id, body, user.id, user.email, user.admin)


@router.patch("/{user_id}/status", response_model=UserInfo)
def set_user_status(
    user_id: int,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(admin_user),
) -> UserInfo:
    """Activate or deactivate an account (admin only, never your own)."""
    return UserService(db).set_status(user_id, body.ativo, admin.id, admin.email)
