"""
Ingredient Service.

Business rules:
- Names are unique case-insensitively across active and inactive ingredients
- Ingredients are never hard-deleted, only deactivated
- Price changes do not touch mixes or recipe sheets; those keep their
  snapshot until they are recalculated
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Ingredient, new_public_id
from rest_api.repositories import IngredientRepository, SqlCatalogStore
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.costing import ensure_unique_name
from shared.config.constants import AuditAction, Collections
from shared.config.logging import get_logger
from shared.utils.catalog_schemas import IngredientCreate, IngredientOutput, IngredientUpdate
from shared.utils.exceptions import DuplicateNameError
from shared.utils.validators import normalize_name

logger = get_logger(__name__)


def is_name_key_violation(error: IntegrityError) -> bool:
    """True when the violated constraint is a unique name key."""
    return "nome_chave" in str(error.orig).lower()


class IngredientService(BaseCRUDService[Ingredient, IngredientOutput]):
    def __init__(self, db: Session):
        super().__init__(db, IngredientRepository(db), "Ingrediente", Collections.INGREDIENT)
        self._store = SqlCatalogStore(db)
        self._pending_name: str | None = None

    def to_output(self, entity: Ingredient) -> IngredientOutput:
        return IngredientOutput(
            id=entity.id,
            alimento=entity.alimento,
            unidade=entity.unidade,
            preco=entity.preco,
            peso=entity.peso,
            fator_correcao=entity.fator_correcao,
            categoria=entity.categoria,
            quantidade_estoque=entity.quantidade_estoque,
            data_validade=entity.data_validade,
            fornecedor=entity.fornecedor,
            ativo=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def create(self, body: IngredientCreate, user_id: int | None, user_email: str | None) -> IngredientOutput:
        ensure_unique_name(body.alimento, Collections.INGREDIENT, self._store)

        data = body.model_dump(exclude={"ativo"})
        entity = Ingredient(
            id=new_public_id(),
            nome_chave=normalize_name(body.alimento),
            is_active=body.ativo,
            **data,
        )
        entity.set_created_by(user_id, user_email)
        self._db.add(entity)

        self._audit(AuditAction.CREATE, entity, user_id, user_email)
        self._pending_name = body.alimento
        self._commit("criar ingrediente", alimento=body.alimento)

        logger.info("Ingredient created", ingrediente_id=entity.id, user_id=user_id)
        return self.to_output(entity)

    def update(
        self,
        ingredient_id: str,
        body: IngredientUpdate,
        user_id: int | None,
        user_email: str | None,
    ) -> IngredientOutput:
        entity = self.get_entity(ingredient_id)
        data: dict[str, Any] = body.model_dump(exclude_unset=True)

        new_name = data.get("alimento")
        if new_name is not None and normalize_name(new_name) != entity.nome_chave:
            ensure_unique_name(new_name, Collections.INGREDIENT, self._store, exclude_id=entity.id)
        if new_name is not None:
            data["nome_chave"] = normalize_name(new_name)
            self._pending_name = new_name

        # Required columns cannot be cleared
        for required in ("alimento", "unidade", "preco", "peso", "fator_correcao"):
            if required in data and data[required] is None:
                data.pop(required)

        old_values = self.snapshot(entity)
        for field_name, value in data.items():
            setattr(entity, field_name, value)
        entity.set_updated_by(user_id, user_email)

        self._audit(AuditAction.UPDATE, entity, user_id, user_email, old_values)
        self._commit("atualizar ingrediente", ingrediente_id=ingredient_id)

        logger.info("Ingredient updated", ingrediente_id=ingredient_id, fields=sorted(data))
        return self.to_output(entity)

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        if is_name_key_violation(error) and self._pending_name is not None:
            raise DuplicateNameError(self.entity_name, self._pending_name) from error
