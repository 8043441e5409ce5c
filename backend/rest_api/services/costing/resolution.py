"""
Resolve an ingredient reference to a purchasable snapshot.

A recipe line may point at a base ingredient or at a mix. Both are reduced
to the same immutable PurchasableSnapshot; the ingredient collection is
consulted first.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rest_api.services.costing.calculator import IngredientLine
from rest_api.services.costing.ports import CatalogStore, IngredientRecord, MixRecord
from shared.config.constants import PurchasableKind
from shared.utils.exceptions import ReferenceNotFoundError
from shared.utils.validators import parse_decimal_text


@dataclass(frozen=True)
class PurchasableSnapshot:
    kind: str
    id: str
    name: str
    unit: str
    unit_price: float
    # None when the stored weight text holds no number
    purchase_weight: float | None
    correction_factor: float
    active: bool


def snapshot_ingredient(record: IngredientRecord) -> PurchasableSnapshot:
    return PurchasableSnapshot(
        kind=PurchasableKind.INGREDIENT,
        id=record.id,
        name=record.name,
        unit=record.unit,
        unit_price=record.price,
        purchase_weight=parse_decimal_text(record.purchase_weight),
        correction_factor=record.correction_factor,
        active=record.active,
    )


def snapshot_mix(record: MixRecord) -> PurchasableSnapshot:
    return PurchasableSnapshot(
        kind=PurchasableKind.MIX,
        id=record.id,
        name=record.name,
        unit=record.unit,
        unit_price=record.total_price,
        purchase_weight=parse_decimal_text(record.total_weight),
        correction_factor=record.correction_factor,
        active=record.active,
    )


def resolve_purchasable(ref_id: str, store: CatalogStore) -> PurchasableSnapshot:
    """Ingredient first, then mix. Raises ReferenceNotFoundError when neither exists."""
    ingredient = store.find_ingredient_by_id(ref_id)
    if ingredient is not None:
        return snapshot_ingredient(ingredient)

    mix = store.find_mix_by_id(ref_id)
    if mix is not None:
        return snapshot_mix(mix)

    raise ReferenceNotFoundError("Ingrediente ou mix", ref_id)


def resolve_many(ref_ids: Iterable[str], store: CatalogStore) -> list[PurchasableSnapshot]:
    """Resolve in order; stops at the first missing reference."""
    return [resolve_purchasable(ref_id, store) for ref_id in ref_ids]


def to_cost_line(
    snapshot: PurchasableSnapshot,
    quantity_used: float,
    unit_price: float | None = None,
    purchase_weight: float | None = None,
    correction_factor: float | None = None,
) -> IngredientLine:
    """
    Calculator line for a resolved reference.

    Values supplied by the client win; missing ones come from the snapshot.
    """
    return IngredientLine(
        quantity_used=quantity_used,
        unit_price=snapshot.unit_price if unit_price is None else unit_price,
        purchase_weight=snapshot.purchase_weight if purchase_weight is None else purchase_weight,
        correction_factor=snapshot.correction_factor if correction_factor is None else correction_factor,
        reference_id=snapshot.id,
        name=snapshot.name,
    )
