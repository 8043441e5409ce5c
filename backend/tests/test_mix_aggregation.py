"""
Tests for mix aggregation against an in-memory catalog.
"""

import pytest

from rest_api.services.costing import (
    IngredientRecord,
    InMemoryCatalogStore,
    MixEntryInput,
    aggregate_mix,
)
from shared.utils.exceptions import InvalidInputError, NotFoundError, ReferenceNotFoundError


@pytest.fixture
def store():
    return InMemoryCatalogStore(
        ingredients=[
            IngredientRecord("farinha", "Farinha", "kg", 5.0, "1", 1.0),
            IngredientRecord("acucar", "Açúcar", "kg", 3.0, "1", 1.5),
        ]
    )


class TestAggregateMix:
    def test_price_and_average_factor(self, store):
        """(5, 1.0, x2) + (3, 1.5, x1) -> 13 and 1.25."""
        result = aggregate_mix(
            [MixEntryInput("farinha", 2), MixEntryInput("acucar", 1)],
            store,
        )
        assert result.total_price == 13
        assert result.average_correction_factor == 1.25
        assert [r.id for r in result.ingredients] == ["farinha", "acucar"]

    def test_missing_ingredient_rejects_whole_mix(self, store):
        with pytest.raises(ReferenceNotFoundError) as exc_info:
            aggregate_mix(
                [MixEntryInput("farinha", 2), MixEntryInput("fantasma", 1)],
                store,
            )
        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Ingrediente com ID fantasma não encontrado"

    def test_repeated_ingredient_counts_per_entry(self, store):
        result = aggregate_mix(
            [MixEntryInput("farinha", 1), MixEntryInput("farinha", 1), MixEntryInput("acucar", 1)],
            store,
        )
        assert result.total_price == 13
        assert result.average_correction_factor == (1.0 + 1.0 + 1.5) / 3

    def test_inactive_ingredient_still_counts(self, store):
        store.add_ingredient(IngredientRecord("sal", "Sal", "kg", 2.0, "1", 1.0, active=False))
        result = aggregate_mix([MixEntryInput("sal", 3)], store)
        assert result.total_price == 6

    def test_empty_entries_are_rejected(self, store):
        with pytest.raises(InvalidInputError):
            aggregate_mix([], store)

    @pytest.mark.parametrize("quantity", [0, -1, float("inf")])
    def test_non_positive_quantity_is_rejected(self, store, quantity):
        with pytest.raises(InvalidInputError) as exc_info:
            aggregate_mix([MixEntryInput("farinha", quantity)], store)
        assert exc_info.value.field == "ingredientes[0].quantidade"

    def test_overflowing_total_is_rejected(self, store):
        store.add_ingredient(IngredientRecord("trufa", "Trufa", "kg", 1e300, "1", 1.0))
        with pytest.raises(InvalidInputError) as exc_info:
            aggregate_mix([MixEntryInput("trufa", 1e10)], store)
        assert exc_info.value.status_code == 400
        assert exc_info.value.field == "ingredientes"
