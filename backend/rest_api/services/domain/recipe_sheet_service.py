"""
Recipe Sheet Service.

Business rules:
- A sheet has at least one line and a name unique among all sheets
- Lines are resolved against ingredients first, then mixes; nome, unidade
  and the price inputs are snapshotted on the line
- Derived costs are written at create and on every update touching a
  cost-relevant field; reads never recompute
- Recalculate is the only operation that refreshes line snapshots from
  current ingredient and mix data
- Clone copies lines and costs under a free "<name> - Cópia" name
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import RecipeSheet, RecipeSheetLine, new_public_id
from rest_api.repositories import RecipeSheetRepository, SqlCatalogStore
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.costing import (
    CostResult,
    IngredientLine,
    PurchasableSnapshot,
    RecipeInputs,
    calculate_recipe_costs,
    ensure_unique_name,
    require_lines,
    resolve_many,
    to_cost_line,
)
from rest_api.services.domain.ingredient_service import is_name_key_violation
from shared.config.constants import CLONE_SUFFIX, RECIPE_COST_FIELDS, AuditAction, Collections, Limits
from shared.config.logging import costing_logger as logger
from shared.utils.catalog_schemas import (
    CostDetails,
    CostPreviewOutput,
    CostPreviewRequest,
    RecipeLineIn,
    RecipeLineOut,
    RecipeSheetCreate,
    RecipeSheetOutput,
    RecipeSheetUpdate,
)
from shared.utils.exceptions import DuplicateNameError
from shared.utils.validators import normalize_name


def apply_costs(lines: Sequence[RecipeSheetLine], result: CostResult) -> None:
    """Write per-line costs back onto stored lines, in order."""
    for line, cost in zip(lines, result.line_costs, strict=True):
        line.custo_calculado = cost


def apply_totals(sheet: RecipeSheet, result: CostResult) -> None:
    sheet.custo_total = result.total_cost
    sheet.custo_por_unidade = result.cost_per_unit
    sheet.preco_venda_sugerido = result.suggested_price


def clone_name(name: str, taken: set[str]) -> str:
    """
    First free copy name for a sheet.

    "<name> - Cópia", then "<name> - Cópia 2", "<name> - Cópia 3"...
    The base is shortened so the result fits the name column. `taken`
    holds normalized names.
    """
    attempt = 1
    while True:
        suffix = CLONE_SUFFIX if attempt == 1 else f"{CLONE_SUFFIX} {attempt}"
        base = name[: Limits.MAX_RECIPE_NAME_LENGTH - len(suffix)].rstrip()
        candidate = f"{base}{suffix}"
        if normalize_name(candidate) not in taken:
            return candidate
        attempt += 1


class RecipeSheetService(BaseCRUDService[RecipeSheet, RecipeSheetOutput]):
    def __init__(self, db: Session):
        super().__init__(db, RecipeSheetRepository(db), "Ficha técnica", Collections.RECIPE_SHEET)
        self._store = SqlCatalogStore(db)
        self._pending_name: str | None = None

    def to_output(self, entity: RecipeSheet) -> RecipeSheetOutput:
        return RecipeSheetOutput(
            id=entity.id,
            nome_receita=entity.nome_receita,
            ingredientes=[self._line_output(line) for line in entity.ingredientes],
            rendimento=entity.rendimento,
            unidade_rendimento=entity.unidade_rendimento,
            gas_energia=entity.gas_energia,
            embalagem=entity.embalagem,
            mao_obra=entity.mao_obra,
            outros=entity.outros,
            margem_lucro=entity.margem_lucro,
            custo_total=entity.custo_total,
            custo_por_unidade=entity.custo_por_unidade,
            preco_venda_sugerido=entity.preco_venda_sugerido,
            modo_preparo=entity.modo_preparo,
            observacoes=entity.observacoes,
            ativo=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def snapshot(self, entity: RecipeSheet) -> dict[str, Any]:
        values = super().snapshot(entity)
        values["ingredientes"] = [self._line_output(line).model_dump() for line in entity.ingredientes]
        return values

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(
        self,
        body: RecipeSheetCreate,
        user_id: int | None,
        user_email: str | None,
    ) -> RecipeSheetOutput:
        require_lines(body.ingredientes)
        ensure_unique_name(body.nome_receita, Collections.RECIPE_SHEET, self._store)

        drafts = self._resolve_drafts(body.ingredientes)
        result = calculate_recipe_costs(
            RecipeInputs(
                lines=[line for _, line in drafts],
                yield_quantity=body.rendimento,
                gas_energy=body.gas_energia,
                packaging=body.embalagem,
                labor=body.mao_obra,
                other=body.outros,
                profit_margin_percent=body.margem_lucro,
            )
        )

        entity = RecipeSheet(
            id=new_public_id(),
            nome_receita=body.nome_receita,
            nome_chave=normalize_name(body.nome_receita),
            rendimento=body.rendimento,
            unidade_rendimento=body.unidade_rendimento,
            gas_energia=body.gas_energia,
            embalagem=body.embalagem,
            mao_obra=body.mao_obra,
            outros=body.outros,
            margem_lucro=body.margem_lucro,
            modo_preparo=body.modo_preparo,
            observacoes=body.observacoes,
            is_active=body.ativo,
        )
        entity.ingredientes = self._build_lines(drafts)
        apply_costs(entity.ingredientes, result)
        apply_totals(entity, result)
        entity.set_created_by(user_id, user_email)
        self._db.add(entity)

        self._audit(AuditAction.CREATE, entity, user_id, user_email)
        self._pending_name = body.nome_receita
        self._commit("criar ficha técnica", nome_receita=body.nome_receita)

        logger.info(
            "Recipe sheet created",
            ficha_id=entity.id,
            custo_total=entity.custo_total,
            lines=len(entity.ingredientes),
        )
        return self.to_output(entity)

    def update(
        self,
        sheet_id: str,
        body: RecipeSheetUpdate,
        user_id: int | None,
        user_email: str | None,
    ) -> RecipeSheetOutput:
        entity = self.get_entity(sheet_id)
        data = body.model_dump(exclude_unset=True, exclude={"ingredientes"})
        for required in (
            "nome_receita", "rendimento", "unidade_rendimento",
            "gas_energia", "embalagem", "mao_obra", "outros", "margem_lucro",
        ):
            if required in data and data[required] is None:
                data.pop(required)

        new_name = data.get("nome_receita")
        if new_name is not None and normalize_name(new_name) != entity.nome_chave:
            ensure_unique_name(new_name, Collections.RECIPE_SHEET, self._store, exclude_id=entity.id)
        if new_name is not None:
            data["nome_chave"] = normalize_name(new_name)
            self._pending_name = new_name

        replace_lines = body.ingredientes is not None
        recompute = replace_lines or bool(RECIPE_COST_FIELDS & data.keys())

        # Everything is validated and computed before the entity is touched
        drafts: list[tuple[PurchasableSnapshot, IngredientLine]] = []
        result = None
        if recompute:
            if replace_lines:
                require_lines(body.ingredientes)
                drafts = self._resolve_drafts(body.ingredientes)
                lines = [line for _, line in drafts]
            else:
                lines = [self._stored_line(line) for line in entity.ingredientes]
            result = calculate_recipe_costs(self._merged_inputs(entity, data, lines))

        old_values = self.snapshot(entity)
        for field_name, value in data.items():
            setattr(entity, field_name, value)
        if replace_lines:
            entity.ingredientes = self._build_lines(drafts)
        if result is not None:
            apply_costs(entity.ingredientes, result)
            apply_totals(entity, result)
        entity.set_updated_by(user_id, user_email)

        self._audit(AuditAction.UPDATE, entity, user_id, user_email, old_values)
        self._commit("atualizar ficha técnica", ficha_id=sheet_id)

        logger.info(
            "Recipe sheet updated",
            ficha_id=sheet_id,
            recomputed=result is not None,
            custo_total=entity.custo_total,
        )
        return self.to_output(entity)

    def clone(self, sheet_id: str, user_id: int | None, user_email: str | None) -> RecipeSheetOutput:
        """Copy a sheet with its lines and costs under a new name."""
        source = self.get_entity(sheet_id)
        taken = {normalize_name(name) for _, name in self._store.list_entity_names(Collections.RECIPE_SHEET)}
        name = clone_name(source.nome_receita, taken)

        copy = RecipeSheet(
            id=new_public_id(),
            nome_receita=name,
            nome_chave=normalize_name(name),
            rendimento=source.rendimento,
            unidade_rendimento=source.unidade_rendimento,
            gas_energia=source.gas_energia,
            embalagem=source.embalagem,
            mao_obra=source.mao_obra,
            outros=source.outros,
            margem_lucro=source.margem_lucro,
            custo_total=source.custo_total,
            custo_por_unidade=source.custo_por_unidade,
            preco_venda_sugerido=source.preco_venda_sugerido,
            modo_preparo=source.modo_preparo,
            observacoes=source.observacoes,
            is_active=True,
        )
        copy.ingredientes = [
            RecipeSheetLine(
                posicao=line.posicao,
                ingrediente_id=line.ingrediente_id,
                tipo=line.tipo,
                nome=line.nome,
                unidade=line.unidade,
                quantidade_usada=line.quantidade_usada,
                preco_unitario=line.preco_unitario,
                peso_compra=line.peso_compra,
                fator_correcao=line.fator_correcao,
                custo_calculado=line.custo_calculado,
            )
            for line in source.ingredientes
        ]
        copy.set_created_by(user_id, user_email)
        self._db.add(copy)

        self._audit(
            AuditAction.CLONE,
            copy,
            user_id,
            user_email,
            new_values={**self.snapshot(copy), "clonado_de": source.id},
        )
        self._pending_name = name
        self._commit("clonar ficha técnica", ficha_id=sheet_id)

        logger.info("Recipe sheet cloned", ficha_id=sheet_id, clone_id=copy.id, nome_receita=name)
        return self.to_output(copy)

    def recalculate(self, sheet_id: str, user_id: int | None, user_email: str | None) -> RecipeSheetOutput:
        """
        Refresh every line from current ingredient and mix data and recompute.

        Quantities are kept; price inputs stored on the lines are replaced
        by the referenced item's current values.
        """
        entity = self.get_entity(sheet_id)
        snapshots = resolve_many([line.ingrediente_id for line in entity.ingredientes], self._store)
        lines = [
            to_cost_line(snap, stored.quantidade_usada)
            for snap, stored in zip(snapshots, entity.ingredientes, strict=True)
        ]
        result = calculate_recipe_costs(self._merged_inputs(entity, {}, lines))

        old_values = self.snapshot(entity)
        for stored, snap, line in zip(entity.ingredientes, snapshots, lines, strict=True):
            self._fill_line(stored, snap, line)
        apply_costs(entity.ingredientes, result)
        apply_totals(entity, result)
        entity.set_updated_by(user_id, user_email)

        self._audit(AuditAction.RECALCULATE, entity, user_id, user_email, old_values)
        self._commit("recalcular ficha técnica", ficha_id=sheet_id)

        logger.info(
            "Recipe sheet recalculated",
            ficha_id=sheet_id,
            custo_total=entity.custo_total,
            preco_venda_sugerido=entity.preco_venda_sugerido,
        )
        return self.to_output(entity)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def preview(self, body: CostPreviewRequest) -> CostPreviewOutput:
        """Resolve and calculate without persisting anything."""
        drafts = self._resolve_drafts(body.ingredientes)
        result = calculate_recipe_costs(
            RecipeInputs(
                lines=[line for _, line in drafts],
                yield_quantity=body.rendimento,
                gas_energy=body.gas_energia,
                packaging=body.embalagem,
                labor=body.mao_obra,
                other=body.outros,
                profit_margin_percent=body.margem_lucro,
            )
        )
        return CostPreviewOutput(
            custo_total=result.total_cost,
            custo_por_unidade=result.cost_per_unit,
            preco_venda_sugerido=result.suggested_price,
            detalhes_custos=CostDetails(
                ingredientes=result.breakdown.ingredients,
                gas_energia=result.breakdown.gas_energy,
                embalagem=result.breakdown.packaging,
                mao_obra=result.breakdown.labor,
                outros=result.breakdown.other,
            ),
            ingredientes=[
                RecipeLineOut(
                    ingrediente_id=snap.id,
                    tipo=snap.kind,
                    nome=snap.name,
                    unidade=snap.unit,
                    quantidade_usada=line.quantity_used,
                    preco_unitario=line.unit_price,
                    peso_compra=line.purchase_weight,
                    fator_correcao=line.correction_factor,
                    custo_calculado=cost,
                )
                for (snap, line), cost in zip(drafts, result.line_costs, strict=True)
            ],
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _resolve_drafts(self, lines: list[RecipeLineIn]) -> list[tuple[PurchasableSnapshot, IngredientLine]]:
        snapshots = resolve_many([line.ingrediente_id for line in lines], self._store)
        return [
            (
                snap,
                to_cost_line(
                    snap,
                    line.quantidade_usada,
                    unit_price=line.preco_unitario,
                    purchase_weight=line.peso_compra,
                    correction_factor=line.fator_correcao,
                ),
            )
            for snap, line in zip(snapshots, lines, strict=True)
        ]

    def _build_lines(self, drafts: list[tuple[PurchasableSnapshot, IngredientLine]]) -> list[RecipeSheetLine]:
        stored = []
        for position, (snap, line) in enumerate(drafts):
            row = RecipeSheetLine(posicao=position)
            self._fill_line(row, snap, line)
            stored.append(row)
        return stored

    @staticmethod
    def _fill_line(row: RecipeSheetLine, snap: PurchasableSnapshot, line: IngredientLine) -> None:
        row.ingrediente_id = snap.id
        row.tipo = snap.kind
        row.nome = snap.name
        row.unidade = snap.unit
        row.quantidade_usada = line.quantity_used
        row.preco_unitario = line.unit_price
        row.peso_compra = line.purchase_weight
        row.fator_correcao = line.correction_factor

    @staticmethod
    def _stored_line(row: RecipeSheetLine) -> IngredientLine:
        return IngredientLine(
            quantity_used=row.quantidade_usada,
            unit_price=row.preco_unitario,
            purchase_weight=row.peso_compra,
            correction_factor=row.fator_correcao,
            reference_id=row.ingrediente_id,
            name=row.nome,
        )

    @staticmethod
    def _merged_inputs(entity: RecipeSheet, data: dict[str, Any], lines: list[IngredientLine]) -> RecipeInputs:
        """Inputs from the pending changes, falling back to stored values."""

        def value(field_name: str) -> Any:
            return data[field_name] if field_name in data else getattr(entity, field_name)

        return RecipeInputs(
            lines=lines,
            yield_quantity=value("rendimento"),
            gas_energy=value("gas_energia"),
            packaging=value("embalagem"),
            labor=value("mao_obra"),
            other=value("outros"),
            profit_margin_percent=value("margem_lucro"),
        )

    @staticmethod
    def _line_output(line: RecipeSheetLine) -> RecipeLineOut:
        return RecipeLineOut(
            ingrediente_id=line.ingrediente_id,
            tipo=line.tipo,
            nome=line.nome,
            unidade=line.unidade,
            quantidade_usada=line.quantidade_usada,
            preco_unitario=line.preco_unitario,
            peso_compra=line.peso_compra,
            fator_correcao=line.fator_correcao,
            custo_calculado=line.custo_calculado or 0.0,
        )

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        if is_name_key_violation(error) and self._pending_name is not None:
            raise DuplicateNameError(self.entity_name, self._pending_name) from error
