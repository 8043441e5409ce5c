"""
Audit log endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rest_api.models import AuditLog, User
from rest_api.routers._common import Page, PaginatedResponse, Pagination, admin_user, get_pagination
from shared.infrastructure.db import get_db
from shared.utils.schemas import AuditLogOutput


router = APIRouter(prefix="/api/admin", tags=["admin-audit"])


@router.get("/audit-log", response_model=Page[AuditLogOutput])
def get_audit_log(
    entity_type: str | None = None,
    entity_id: str | None = None,
    action: str | None = None,
    user_id: int | None = None,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    admin: User = Depends(admin_user),
) -> dict:
    """
    Get audit log entries with optional filters, newest first.

    Filters:
    - entity_type: ingrediente, mix, ficha_tecnica or usuario
    - entity_id: Filter by specific entity ID
    - action: CREATE, UPDATE, STATUS, CLONE, RECALCULATE
    - user_id: Filter by user who made the change
    """
    query = select(AuditLog)
    if entity_type:
        query = query.where(AuditLog.entity_type == entity_type)
    if entity_id:
        query = query.where(AuditLog.entity_id == entity_id)
    if action:
        query = query.where(AuditLog.action == action.upper())
    if user_id:
        query = query.where(AuditLog.user_id == user_id)

    total = db.scalar(select(func.count()).select_from(query.subquery())) or 0
    entries = db.execute(
        query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .offset(pagination.offset)
        .limit(pagination.limit)
    ).scalars().all()

    items = [
        AuditLogOutput(
            id=entry.id,
            user_id=entry.user_id,
            user_email=entry.user_email,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            action=entry.action,
            old_values=entry.old_values,
            new_values=entry.new_values,
            changes=entry.changes,
            ip_address=entry.ip_address,
            created_at=entry.created_at,
        )
        for entry in entries
    ]
    return PaginatedResponse(items=items, pagination=pagination, total=total).to_dict()
