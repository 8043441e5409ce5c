"""
Audit logging service.
Records every write to catalog entities and recipe sheets.
"""

import json
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from rest_api.models import AuditLog
from shared.config.constants import AuditAction

# Actions whose before/after snapshots are diffed
_DIFFED_ACTIONS = {AuditAction.UPDATE, AuditAction.STATUS, AuditAction.RECALCULATE}


def log_change(
    db: Session,
    *,
    user_id: Optional[int],
    user_email: Optional[str],
    entity_type: str,
    entity_id: str | int,
    action: str,
    old_values: Optional[dict] = None,
    new_values: Optional[dict] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditLog:
    """
    Add an audit entry to the session.

    Does not commit; the entry is written with the caller's transaction.
    """
    changes = None
    if action in _DIFFED_ACTIONS and old_values and new_values:
        changes = {}
        for key in set(old_values) | set(new_values):
            old_val = old_values.get(key)
            new_val = new_values.get(key)
            if old_val != new_val:
                changes[key] = {"old": old_val, "new": new_val}

    audit_entry = AuditLog(
        user_id=user_id,
        user_email=user_email,
        entity_type=entity_type,
        entity_id=str(entity_id),
        action=action,
        old_values=json.dumps(old_values, default=str) if old_values else None,
        new_values=json.dumps(new_values, default=str) if new_values else None,
        changes=json.dumps(changes, default=str) if changes else None,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.add(audit_entry)
    return audit_entry


def serialize_model(obj: Any, exclude: list[str] | None = None) -> dict:
    """
    Column values of a model instance as a JSON-friendly dict.

    Dates become ISO strings. Child collections are not included; callers
    add them when they matter.
    """
    exclude = exclude or []

    result = {}
    for column in obj.__table__.columns:
        if column.name in exclude:
            continue
        value = getattr(obj, column.name)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        result[column.name] = value
    return result
