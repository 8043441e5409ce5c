"""
SQLAlchemy implementation of the costing core's CatalogStore port.
"""

from sqlalchemy.orm import Session

from rest_api.models import Ingredient, Mix
from rest_api.services.costing.ports import IngredientRecord, MixRecord
from shared.config.constants import Collections

from .catalog import IngredientRepository, MixRepository
from .recipe import RecipeSheetRepository


def ingredient_record(row: Ingredient) -> IngredientRecord:
    return IngredientRecord(
        id=row.id,
        name=row.alimento,
        unit=row.unidade,
        price=row.preco,
        purchase_weight=row.peso,
        correction_factor=row.fator_correcao,
        active=row.is_active,
    )


def mix_record(row: Mix) -> MixRecord:
    return MixRecord(
        id=row.id,
        name=row.nome,
        unit=row.unidade,
        total_price=row.preco_total,
        total_weight=row.peso_total,
        correction_factor=row.fator_correcao,
        active=row.is_active,
    )


class SqlCatalogStore:
    """CatalogStore over a session; sees pending objects only after a flush."""

    def __init__(self, db: Session):
        self._db = db
        self._ingredients = IngredientRepository(db)
        self._mixes = MixRepository(db)
        self._recipes = RecipeSheetRepository(db)

    def find_ingredient_by_id(self, ingredient_id: str) -> IngredientRecord | None:
        row = self._db.get(Ingredient, ingredient_id)
        return ingredient_record(row) if row is not None else None

    def find_mix_by_id(self, mix_id: str) -> MixRecord | None:
        row = self._db.get(Mix, mix_id)
        return mix_record(row) if row is not None else None

    def list_entity_names(self, collection: str) -> list[tuple[str, str]]:
        if collection == Collections.INGREDIENT:
            return self._ingredients.list_names()
        if collection == Collections.MIX:
            return self._mixes.list_names()
        if collection == Collections.RECIPE_SHEET:
            return self._recipes.list_names()
        raise ValueError(f"Unknown collection: {collection}")
