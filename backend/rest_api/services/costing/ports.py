"""
Read-only storage port used by the costing core.

The core never talks to the database directly; it receives a CatalogStore
and works on the plain records defined here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class IngredientRecord:
    """Stored ingredient as seen by the costing core."""

    id: str
    name: str
    unit: str
    price: float
    # Raw stored weight; may be text such as "0,5" or "1 kg"
    purchase_weight: str | float | None
    correction_factor: float
    active: bool = True


@dataclass(frozen=True)
class MixRecord:
    """Stored mix as seen by the costing core."""

    id: str
    name: str
    unit: str
    total_price: float
    total_weight: str | float | None
    correction_factor: float
    active: bool = True


class CatalogStore(Protocol):
    """Lookups the costing core needs. Inactive entities are returned too."""

    def find_ingredient_by_id(self, ingredient_id: str) -> IngredientRecord | None:
        ...

    def find_mix_by_id(self, mix_id: str) -> MixRecord | None:
        ...

    def list_entity_names(self, collection: str) -> list[tuple[str, str]]:
        """(id, display name) of every entity in the collection."""
        ...
