"""
Request-scoped dependencies shared by the routers.
"""

from typing import Any

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.services.domain.account_service import INACTIVE_ACCOUNT_MESSAGE
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.utils.exceptions import AdminRequiredError, AuthenticationError


def current_user(
    ctx: dict[str, Any] = Depends(current_user_context),
    db: Session = Depends(get_db),
) -> User:
    """
    The authenticated account, loaded from the database.

    Tokens outlive deactivation, so the active flag is checked on every
    request.
    """
    user = db.get(User, int(ctx["sub"]))
    if user is None:
        raise AuthenticationError("Token inválido. Usuário não encontrado.", user_id=ctx["sub"])
    if not user.is_active:
        raise AuthenticationError(INACTIVE_ACCOUNT_MESSAGE, user_id=user.id)
    return user


def admin_user(user: User = Depends(current_user)) -> User:
    """current_user restricted to administrators."""
    if not user.admin:
        raise AdminRequiredError(user_id=user.id)
    return user


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None
