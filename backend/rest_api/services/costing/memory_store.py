"""
Dict-backed CatalogStore for tests and previews.
"""

from __future__ import annotations

from rest_api.services.costing.ports import IngredientRecord, MixRecord
from shared.config.constants import Collections


class InMemoryCatalogStore:
    def __init__(
        self,
        ingredients: list[IngredientRecord] | None = None,
        mixes: list[MixRecord] | None = None,
        recipe_names: dict[str, str] | None = None,
    ):
        self.ingredients: dict[str, IngredientRecord] = {i.id: i for i in ingredients or []}
        self.mixes: dict[str, MixRecord] = {m.id: m for m in mixes or []}
        self.recipe_names: dict[str, str] = dict(recipe_names or {})

    def add_ingredient(self, record: IngredientRecord) -> IngredientRecord:
        self.ingredients[record.id] = record
        return record

    def add_mix(self, record: MixRecord) -> MixRecord:
        self.mixes[record.id] = record
        return record

    def add_recipe_name(self, recipe_id: str, name: str) -> None:
        self.recipe_names[recipe_id] = name

    def find_ingredient_by_id(self, ingredient_id: str) -> IngredientRecord | None:
        return self.ingredients.get(ingredient_id)

    def find_mix_by_id(self, mix_id: str) -> MixRecord | None:
        return self.mixes.get(mix_id)

    def list_entity_names(self, collection: str) -> list[tuple[str, str]]:
        if collection == Collections.INGREDIENT:
            return [(i.id, i.name) for i in self.ingredients.values()]
        if collection == Collections.MIX:
            return [(m.id, m.name) for m in self.mixes.values()]
        if collection == Collections.RECIPE_SHEET:
            return list(self.recipe_names.items())
        raise ValueError(f"Unknown collection: {collection}")
