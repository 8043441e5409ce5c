"""
Base service classes.

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Services own the transaction: they validate, write, add the audit entry
and commit. Routers never commit.

Usage:
    class IngredientService(BaseCRUDService[Ingredient, IngredientOutput]):
        def __init__(self, db: Session):
            super().__init__(db, IngredientRepository(db), "Ingrediente", Collections.INGREDIENT)

        def to_output(self, entity: Ingredient) -> IngredientOutput:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.repositories.base import BaseRepository, RepositoryFilters
from rest_api.services.audit import log_change, serialize_model
from shared.config.constants import AuditAction
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import DatabaseError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseCRUDService(ABC, Generic[ModelT, OutputT]):
    """
    Base service for entities with list/get/status operations and audit.

    Subclasses implement to_output() and their own create/update.
    """

    def __init__(
        self,
        db: Session,
        repo: BaseRepository[ModelT],
        entity_name: str,
        entity_type: str,
    ):
        self._db = db
        self._repo = repo
        self._entity_name = entity_name
        self._entity_type = entity_type

    @property
    def db(self) -> Session:
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        return self._repo

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: Any) -> ModelT:
        """Raw entity, active or not. Raises NotFoundError."""
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get(self, entity_id: Any) -> OutputT:
        return self.to_output(self.get_entity(entity_id))

    def list_all(self, filters: RepositoryFilters) -> tuple[list[OutputT], int]:
        """One page of outputs plus the total count for the same filters."""
        entities = self._repo.find_all(filters)
        total = self._repo.count(filters)
        return [self.to_output(e) for e in entities], total

    # =========================================================================
    # Write Operations
    # =========================================================================

    def set_status(
        self,
        entity_id: Any,
        ativo: bool,
        user_id: int | None,
        user_email: str | None,
    ) -> OutputT:
        """Activate or deactivate. Never touches computed values."""
        entity = self.get_entity(entity_id)
        old_values = {"ativo": entity.is_active}

        entity.set_active(ativo, user_id, user_email)
        self._audit(AuditAction.STATUS, entity, user_id, user_email, old_values, {"ativo": ativo})
        self._commit(f"alterar status de {self._entity_name.lower()}", entity_id=entity_id)

        logger.info(
            f"{self._entity_name} status changed",
            entity_id=entity_id,
            ativo=ativo,
            user_id=user_id,
        )
        return self.to_output(entity)

    # =========================================================================
    # Transformation
    # =========================================================================

    @abstractmethod
    def to_output(self, entity: ModelT) -> OutputT:
        ...

    def snapshot(self, entity: ModelT) -> dict[str, Any]:
        """Audit representation of an entity. Override to include children."""
        return serialize_model(entity)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _audit(
        self,
        action: str,
        entity: ModelT,
        user_id: int | None,
        user_email: str | None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> None:
        log_change(
            self._db,
            user_id=user_id,
            user_email=user_email,
            entity_type=self._entity_type,
            entity_id=entity.id,
            action=action,
            old_values=old_values,
            new_values=new_values if new_values is not None else self.snapshot(entity),
        )

    def _commit(self, operation: str, **log_context: Any) -> None:
        """
        Commit the unit of work.

        IntegrityError goes through _on_integrity_error so subclasses can
        translate constraint violations; anything else becomes DatabaseError.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            logger.warning(
                f"Integrity error during {operation}",
                error=str(e.orig),
                **log_context,
            )
            self._on_integrity_error(e, operation)
            raise DatabaseError(operation, **log_context) from e
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to {operation}",
                error=str(e),
                exc_info=True,
                **log_context,
            )
            raise DatabaseError(operation, **log_context) from e

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        """Hook to raise a domain error for a violated constraint."""
        pass
