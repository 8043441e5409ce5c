"""
Mix aggregation: price and averaged correction factor of a blend.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from rest_api.services.costing.ports import CatalogStore, IngredientRecord
from shared.utils.exceptions import InvalidInputError, ReferenceNotFoundError


@dataclass(frozen=True)
class MixEntryInput:
    ingredient_id: str
    quantity: float
    unit: str | None = None


@dataclass(frozen=True)
class MixAggregate:
    total_price: float
    average_correction_factor: float
    # Resolved ingredients, same order as the entries
    ingredients: tuple[IngredientRecord, ...] = ()


def aggregate_mix(entries: Sequence[MixEntryInput], store: CatalogStore) -> MixAggregate:
    """
    total_price = sum(ingredient.price * entry.quantity)
    average_correction_factor = mean(ingredient.correction_factor)

    Every id is resolved before any arithmetic: the first missing id raises
    ReferenceNotFoundError and no partial total is produced. A repeated id
    counts once per entry. A total that overflows raises InvalidInputError.
    """
    if not entries:
        raise InvalidInputError("O mix deve ter pelo menos um ingrediente", field="ingredientes")

    for position, entry in enumerate(entries):
        quantity = entry.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or not math.isfinite(quantity):
            raise InvalidInputError(
                "Quantidade deve ser um número finito",
                field=f"ingredientes[{position}].quantidade",
            )
        if quantity <= 0:
            raise InvalidInputError(
                "Quantidade deve ser maior que zero",
                field=f"ingredientes[{position}].quantidade",
            )

    resolved: list[IngredientRecord] = []
    for entry in entries:
        record = store.find_ingredient_by_id(entry.ingredient_id)
        if record is None:
            raise ReferenceNotFoundError("Ingrediente", entry.ingredient_id)
        resolved.append(record)

    total_price = 0.0
    factor_sum = 0.0
    for entry, record in zip(entries, resolved):
        total_price += record.price * entry.quantity
        factor_sum += record.correction_factor

    average_factor = factor_sum / len(resolved)
    if not (math.isfinite(total_price) and math.isfinite(average_factor)):
        raise InvalidInputError("Preço total excede o intervalo numérico suportado", field="ingredientes")

    return MixAggregate(
        total_price=total_price,
        average_correction_factor=average_factor,
        ingredients=tuple(resolved),
    )
