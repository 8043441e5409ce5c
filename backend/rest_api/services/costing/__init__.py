"""
Costing core: pure calculation and catalog rules.

- calculator: recipe cost, per-unit cost and suggested price
- aggregation: mix total price and averaged correction factor
- invariants: case-insensitive name uniqueness, non-empty ingredient lists
- resolution: ingredient-or-mix reference to PurchasableSnapshot
- ports: CatalogStore protocol and the records it returns
"""

from .calculator import (
    CostBreakdown,
    CostResult,
    IngredientLine,
    RecipeInputs,
    calculate_recipe_costs,
    line_cost,
)
from .aggregation import MixAggregate, MixEntryInput, aggregate_mix
from .invariants import (
    check_duplicate_name,
    ensure_unique_name,
    is_duplicate_name,
    require_lines,
)
from .resolution import (
    PurchasableSnapshot,
    resolve_many,
    resolve_purchasable,
    to_cost_line,
)
from .ports import CatalogStore, IngredientRecord, MixRecord
from .memory_store import InMemoryCatalogStore

__all__ = [
    "CostBreakdown",
    "CostResult",
    "IngredientLine",
    "RecipeInputs",
    "calculate_recipe_costs",
    "line_cost",
    "MixAggregate",
    "MixEntryInput",
    "aggregate_mix",
    "check_duplicate_name",
    "ensure_unique_name",
    "is_duplicate_name",
    "require_lines",
    "PurchasableSnapshot",
    "resolve_many",
    "resolve_purchasable",
    "to_cost_line",
    "CatalogStore",
    "IngredientRecord",
    "MixRecord",
    "InMemoryCatalogStore",
]
