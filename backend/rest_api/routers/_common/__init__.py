"""
Common utilities shared across routers.

Schemas live in shared/utils so services never import from routers.
"""

from .base import admin_user, client_ip, current_user
from .pagination import (
    Page,
    Pagination,
    PaginatedResponse,
    get_pagination,
)

__all__ = [
    # Dependencies
    "current_user",
    "admin_user",
    "client_ip",
    # Pagination
    "Page",
    "Pagination",
    "PaginatedResponse",
    "get_pagination",
]
