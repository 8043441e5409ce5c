"""
Recipe cost calculator.

Pure arithmetic, no I/O:

    line_cost        = (unit_price / purchase_weight) * quantity_used * correction_factor
    ingredients_cost = line costs summed left to right from 0
    total_cost       = ingredients_cost + gas_energy + packaging + labor + other
    cost_per_unit    = total_cost / yield_quantity
    suggested_price  = cost_per_unit * (1 + profit_margin_percent / 100)

Nothing is rounded here; rounding is a presentation concern.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from shared.config.logging import costing_logger as logger
from shared.utils.exceptions import InvalidInputError


@dataclass
class IngredientLine:
    """Cost inputs of one recipe line."""

    quantity_used: float
    unit_price: float
    purchase_weight: float | None
    correction_factor: float | None
    reference_id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class RecipeInputs:
    lines: Sequence[IngredientLine]
    yield_quantity: float
    gas_energy: float = 0.0
    packaging: float = 0.0
    labor: float = 0.0
    other: float = 0.0
    profit_margin_percent: float = 0.0


@dataclass(frozen=True)
class CostBreakdown:
    ingredients: float
    gas_energy: float
    packaging: float
    labor: float
    other: float


@dataclass(frozen=True)
class CostResult:
    total_cost: float
    cost_per_unit: float
    suggested_price: float
    breakdown: CostBreakdown
    # Same order as RecipeInputs.lines
    line_costs: tuple[float, ...] = field(default_factory=tuple)


def _require_finite(value: float | None, label: str, field_name: str) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{label} é obrigatório", field=field_name)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{label} deve ser numérico", field=field_name)
    if not math.isfinite(number):
        raise InvalidInputError(f"{label} deve ser um número finito", field=field_name)
    return number


def _require_positive(value: float | None, label: str, field_name: str) -> float:
    number = _require_finite(value, label, field_name)
    if number <= 0:
        raise InvalidInputError(f"{label} deve ser maior que zero", field=field_name)
    return number


def _require_non_negative(value: float | None, label: str, field_name: str) -> float:
    number = _require_finite(value, label, field_name)
    if number < 0:
        raise InvalidInputError(f"{label} não pode ser negativo", field=field_name)
    return number


def line_cost(line: IngredientLine, position: int = 0) -> float:
    """Cost of a single line. Validates the line first."""
    prefix = f"ingredientes[{position}]"
    quantity = _require_positive(line.quantity_used, "Quantidade usada", f"{prefix}.quantidade_usada")
    price = _require_non_negative(line.unit_price, "Preço unitário", f"{prefix}.preco_unitario")
    weight = _require_positive(line.purchase_weight, "Peso de compra", f"{prefix}.peso_compra")
    factor = _require_positive(line.correction_factor, "Fator de correção", f"{prefix}.fator_correcao")
    return (price / weight) * quantity * factor


def calculate_recipe_costs(inputs: RecipeInputs) -> CostResult:
    """
    Compute line costs, totals, per-unit cost and suggested price.

    Raises InvalidInputError when the yield is not positive, when a line has
    no usable purchase weight or correction factor, or when any number is
    negative or not finite. An empty line list costs 0 for ingredients.
    """
    yield_quantity = _require_positive(inputs.yield_quantity, "Rendimento", "rendimento")
    gas_energy = _require_non_negative(inputs.gas_energy, "Gás/energia", "gas_energia")
    packaging = _require_non_negative(inputs.packaging, "Embalagem", "embalagem")
    labor = _require_non_negative(inputs.labor, "Mão de obra", "mao_obra")
    other = _require_non_negative(inputs.other, "Outros custos", "outros")
    margin = _require_non_negative(inputs.profit_margin_percent, "Margem de lucro", "margem_lucro")

    costs = tuple(line_cost(line, position) for position, line in enumerate(inputs.lines))

    # Plain left fold: sum() uses compensated summation on newer interpreters
    ingredients_cost = 0.0
    for cost in costs:
        ingredients_cost += cost

    total_cost = ingredients_cost + gas_energy + packaging + labor + other
    cost_per_unit = total_cost / yield_quantity
    suggested_price = cost_per_unit * (1 + margin / 100)

    for value, label in ((total_cost, "Custo total"), (suggested_price, "Preço sugerido")):
        if not math.isfinite(value):
            raise InvalidInputError(f"{label} excede o intervalo numérico suportado")

    logger.debug(
        "Recipe costs calculated",
        lines=len(costs),
        total_cost=total_cost,
        cost_per_unit=cost_per_unit,
    )

    return CostResult(
        total_cost=total_cost,
        cost_per_unit=cost_per_unit,
        suggested_price=suggested_price,
        breakdown=CostBreakdown(
            ingredients=ingredients_cost,
            gas_energy=gas_energy,
            packaging=packaging,
            labor=labor,
            other=other,
        ),
        line_costs=costs,
    )
