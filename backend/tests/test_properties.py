"""
Property-based tests with Hypothesis for the costing core.
"""

import math
import string

from hypothesis import given, settings, strategies as st

from rest_api.services.costing import (
    IngredientLine,
    IngredientRecord,
    InMemoryCatalogStore,
    MixEntryInput,
    RecipeInputs,
    aggregate_mix,
    calculate_recipe_costs,
    is_duplicate_name,
)

money = st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False)
positive = st.floats(min_value=1e-3, max_value=1e4, allow_nan=False, allow_infinity=False)

lines = st.lists(
    st.builds(
        IngredientLine,
        quantity_used=positive,
        unit_price=money,
        purchase_weight=positive,
        correction_factor=positive,
    ),
    max_size=8,
)


def _inputs(draw_lines, yield_quantity, overheads, margin):
    gas, packaging, labor, other = overheads
    return RecipeInputs(
        lines=draw_lines,
        yield_quantity=yield_quantity,
        gas_energy=gas,
        packaging=packaging,
        labor=labor,
        other=other,
        profit_margin_percent=margin,
    )


class TestCalculatorProperties:
    @given(lines, positive, st.tuples(money, money, money, money), st.floats(0, 500))
    @settings(max_examples=100)
    def test_totals_are_consistent(self, draw_lines, yield_quantity, overheads, margin):
        """Property: total, per-unit cost and suggested price follow their definitions exactly."""
        result = calculate_recipe_costs(_inputs(draw_lines, yield_quantity, overheads, margin))
        b = result.breakdown

        assert result.total_cost == b.ingredients + b.gas_energy + b.packaging + b.labor + b.other
        assert result.cost_per_unit == result.total_cost / yield_quantity
        assert result.suggested_price == result.cost_per_unit * (1 + margin / 100)
        assert len(result.line_costs) == len(draw_lines)

    @given(lines, positive, st.tuples(money, money, money, money))
    @settings(max_examples=50)
    def test_zero_margin_price_equals_unit_cost(self, draw_lines, yield_quantity, overheads):
        result = calculate_recipe_costs(_inputs(draw_lines, yield_quantity, overheads, 0))
        assert result.suggested_price == result.cost_per_unit

    @given(lines, positive, st.tuples(money, money, money, money), st.floats(0, 500))
    @settings(max_examples=50)
    def test_idempotent(self, draw_lines, yield_quantity, overheads, margin):
        """Property: identical inputs give identical outputs."""
        inputs = _inputs(draw_lines, yield_quantity, overheads, margin)
        assert calculate_recipe_costs(inputs) == calculate_recipe_costs(inputs)


class TestMixProperties:
    @given(
        st.lists(st.tuples(money, positive, positive), min_size=1, max_size=6),
        st.integers(min_value=2, max_value=5),
    )
    @settings(max_examples=50)
    def test_price_scales_with_quantities(self, entries, k):
        """Property: multiplying every quantity by k multiplies the total by k."""
        store = InMemoryCatalogStore(
            ingredients=[
                IngredientRecord(f"i{n}", f"Item {n}", "kg", price, "1", factor)
                for n, (price, factor, _) in enumerate(entries)
            ]
        )
        base = aggregate_mix([MixEntryInput(f"i{n}", qty) for n, (_, _, qty) in enumerate(entries)], store)
        scaled = aggregate_mix([MixEntryInput(f"i{n}", qty * k) for n, (_, _, qty) in enumerate(entries)], store)

        assert math.isclose(scaled.total_price, base.total_price * k, rel_tol=1e-9, abs_tol=1e-9)

    @given(st.lists(positive, min_size=1, max_size=6), st.randoms())
    @settings(max_examples=50)
    def test_average_factor_ignores_order(self, factors, rnd):
        store = InMemoryCatalogStore(
            ingredients=[
                IngredientRecord(f"i{n}", f"Item {n}", "kg", 1.0, "1", factor)
                for n, factor in enumerate(factors)
            ]
        )
        entries = [MixEntryInput(f"i{n}", 1) for n in range(len(factors))]
        shuffled = list(entries)
        rnd.shuffle(shuffled)

        a = aggregate_mix(entries, store).average_correction_factor
        b = aggregate_mix(shuffled, store).average_correction_factor
        assert math.isclose(a, b, rel_tol=1e-12)
        assert min(factors) - 1e-9 <= a <= max(factors) + 1e-9


class TestNameProperties:
    @given(st.text(alphabet=string.ascii_letters + " ", min_size=1, max_size=40))
    def test_case_variants_collide(self, name):
        """Property: changing letter case never escapes the duplicate check."""
        assert is_duplicate_name(name.swapcase(), [("x", name)])

    @given(st.text(min_size=1, max_size=40))
    def test_self_is_never_a_duplicate(self, name):
        assert not is_duplicate_name(name, [("self", name)], exclude_id="self")
