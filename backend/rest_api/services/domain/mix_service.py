"""
Mix Service.

Business rules:
- Names are unique case-insensitively across active and inactive mixes
- A mix has at least one entry and every entry must reference an
  existing ingredient; a missing id rejects the whole write
- preco_total and fator_correcao are recomputed whenever the entry list
  is replaced and are never taken from the client
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Mix, MixEntry, new_public_id
from rest_api.repositories import MixRepository, SqlCatalogStore
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.costing import MixAggregate, MixEntryInput, aggregate_mix, ensure_unique_name
from rest_api.services.domain.ingredient_service import is_name_key_violation
from shared.config.constants import AuditAction, Collections
from shared.config.logging import get_logger
from shared.utils.catalog_schemas import MixCreate, MixEntryIn, MixEntryOut, MixOutput, MixUpdate
from shared.utils.exceptions import DuplicateNameError
from shared.utils.validators import normalize_name

logger = get_logger(__name__)


class MixService(BaseCRUDService[Mix, MixOutput]):
    def __init__(self, db: Session):
        super().__init__(db, MixRepository(db), "Mix", Collections.MIX)
        self._store = SqlCatalogStore(db)
        self._pending_name: str | None = None

    def to_output(self, entity: Mix) -> MixOutput:
        entries = []
        for entry in entity.ingredientes:
            ingredient = entry.ingrediente
            entries.append(
                MixEntryOut(
                    ingrediente_id=entry.ingrediente_id,
                    alimento=ingredient.alimento if ingredient else None,
                    quantidade=entry.quantidade,
                    unidade=entry.unidade,
                    preco=ingredient.preco if ingredient else None,
                    fator_correcao=ingredient.fator_correcao if ingredient else None,
                )
            )
        return MixOutput(
            id=entity.id,
            nome=entity.nome,
            ingredientes=entries,
            categoria=entity.categoria,
            peso_total=entity.peso_total,
            unidade=entity.unidade,
            preco_total=entity.preco_total,
            fator_correcao=entity.fator_correcao,
            descricao=entity.descricao,
            ativo=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def snapshot(self, entity: Mix) -> dict[str, Any]:
        values = super().snapshot(entity)
        values["ingredientes"] = [
            {"ingrediente_id": e.ingrediente_id, "quantidade": e.quantidade, "unidade": e.unidade}
            for e in entity.ingredientes
        ]
        return values

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, body: MixCreate, user_id: int | None, user_email: str | None) -> MixOutput:
        ensure_unique_name(body.nome, Collections.MIX, self._store)
        aggregate = self._aggregate(body.ingredientes)

        entity = Mix(
            id=new_public_id(),
            nome=body.nome,
            nome_chave=normalize_name(body.nome),
            categoria=body.categoria or "Mix",
            peso_total=body.peso_total,
            unidade=body.unidade,
            descricao=body.descricao,
            is_active=body.ativo,
        )
        self._apply_entries(entity, body.ingredientes, aggregate)
        entity.set_created_by(user_id, user_email)
        self._db.add(entity)

        self._audit(AuditAction.CREATE, entity, user_id, user_email)
        self._pending_name = body.nome
        self._commit("criar mix", nome=body.nome)

        logger.info(
            "Mix created",
            mix_id=entity.id,
            preco_total=entity.preco_total,
            entries=len(body.ingredientes),
        )
        return self.to_output(entity)

    def update(self, mix_id: str, body: MixUpdate, user_id: int | None, user_email: str | None) -> MixOutput:
        entity = self.get_entity(mix_id)
        data = body.model_dump(exclude_unset=True, exclude={"ingredientes"})

        new_name = data.get("nome")
        if new_name is not None and normalize_name(new_name) != entity.nome_chave:
            ensure_unique_name(new_name, Collections.MIX, self._store, exclude_id=entity.id)
        if new_name is not None:
            data["nome_chave"] = normalize_name(new_name)
            self._pending_name = new_name

        for required in ("nome", "peso_total", "unidade", "categoria"):
            if required in data and data[required] is None:
                data.pop(required)

        # Resolve before mutating anything
        aggregate = None
        if body.ingredientes is not None:
            aggregate = self._aggregate(body.ingredientes)

        old_values = self.snapshot(entity)
        for field_name, value in data.items():
            setattr(entity, field_name, value)
        if aggregate is not None:
            self._apply_entries(entity, body.ingredientes, aggregate)
        entity.set_updated_by(user_id, user_email)

        self._audit(AuditAction.UPDATE, entity, user_id, user_email, old_values)
        self._commit("atualizar mix", mix_id=mix_id)

        logger.info(
            "Mix updated",
            mix_id=mix_id,
            recomputed=aggregate is not None,
            preco_total=entity.preco_total,
        )
        return self.to_output(entity)

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _aggregate(self, entries: list[MixEntryIn]) -> MixAggregate:
        return aggregate_mix(
            [MixEntryInput(e.ingrediente_id, e.quantidade, e.unidade) for e in entries],
            self._store,
        )

    def _apply_entries(self, entity: Mix, entries: list[MixEntryIn], aggregate: MixAggregate) -> None:
        """Replace the entry list and the derived values together."""
        entity.ingredientes = [
            MixEntry(
                ingrediente_id=e.ingrediente_id,
                posicao=position,
                quantidade=e.quantidade,
                unidade=e.unidade,
            )
            for position, e in enumerate(entries)
        ]
        entity.preco_total = aggregate.total_price
        entity.fator_correcao = aggregate.average_correction_factor

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        if is_name_key_violation(error) and self._pending_name is not None:
            raise DuplicateNameError(self.entity_name, self._pending_name) from error
