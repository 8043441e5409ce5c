"""
User Service: admin listing, profile updates and account status.

Business rules:
- Users edit their own profile; admins edit anyone
- Email changes must not collide with another account
- Only admins change status, and never to deactivate themselves
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import UserRepository
from rest_api.services.audit import serialize_model
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.domain.account_service import user_info
from shared.config.constants import USER_ENTITY_TYPE, AuditAction
from shared.config.logging import get_logger
from shared.utils.catalog_schemas import UserUpdate
from shared.utils.exceptions import ForbiddenError, ValidationError
from shared.utils.schemas import UserInfo

logger = get_logger(__name__)

_PRIVATE_COLUMNS = ["password", "token_verificacao", "token_reset_senha", "token_reset_expira"]


class UserService(BaseCRUDService[User, UserInfo]):
    def __init__(self, db: Session):
        users = UserRepository(db)
        super().__init__(db, users, "Usuário", USER_ENTITY_TYPE)
        self._users = users

    def to_output(self, entity: User) -> UserInfo:
        return user_info(entity)

    def snapshot(self, entity: User) -> dict[str, Any]:
        return serialize_model(entity, exclude=_PRIVATE_COLUMNS)

    def update(self, user_id: int, body: UserUpdate, actor_id: int, actor_email: str, actor_admin: bool) -> UserInfo:
        if user_id != actor_id and not actor_admin:
            raise ForbiddenError("editar o perfil de outro usuário", user_id=user_id, actor_id=actor_id)

        entity = self.get_entity(user_id)
        data = body.model_dump(exclude_unset=True)
        for required in ("nome", "email"):
            if required in data and data[required] is None:
                data.pop(required)

        if "email" in data:
            data["email"] = data["email"].strip().lower()
            if data["email"] != entity.email:
                other = self._users.find_by_email(data["email"])
                if other is not None and other.id != entity.id:
                    raise ValidationError("Email já está em uso")
        if "nome" in data:
            data["nome"] = data["nome"].strip()

        old_values = self.snapshot(entity)
        for field_name, value in data.items():
            setattr(entity, field_name, value)
        entity.set_updated_by(actor_id, actor_email)

        self._audit(AuditAction.UPDATE, entity, actor_id, actor_email, old_values)
        self._commit("atualizar usuário", user_id=user_id)

        logger.info("User updated", user_id=user_id, actor_id=actor_id, fields=sorted(data))
        return self.to_output(entity)

    def set_status(self, entity_id: int, ativo: bool, user_id: int | None, user_email: str | None) -> UserInfo:
        if entity_id == user_id and not ativo:
            raise ValidationError("Você não pode desativar sua própria conta")
        return super().set_status(entity_id, ativo, user_id, user_email)

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        if "email" in str(error.orig).lower():
            raise ValidationError("Email já está em uso") from error
