"""
Admin routers.

- users: account listing, profile updates, activation (/api/users)
- audit: audit log viewing (/api/admin/audit-log)
"""

from .users import router as users_router
from .audit import router as audit_router

__all__ = ["users_router", "audit_router"]
