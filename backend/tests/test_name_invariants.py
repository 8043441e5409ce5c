"""
Tests for case-insensitive name uniqueness and the non-empty line rule.
"""

import pytest

from rest_api.services.costing import (
    IngredientRecord,
    InMemoryCatalogStore,
    check_duplicate_name,
    ensure_unique_name,
    is_duplicate_name,
    require_lines,
)
from shared.config.constants import Collections
from shared.utils.exceptions import DuplicateNameError, InvalidInputError


@pytest.fixture
def store():
    store = InMemoryCatalogStore(
        ingredients=[IngredientRecord("i1", "Farinha de Trigo", "kg", 5.0, "1", 1.0, active=False)]
    )
    store.add_recipe_name("r1", "bolo de cenoura")
    store.add_recipe_name("r2", "Pão de Queijo")
    return store


class TestDuplicateNames:
    def test_recipe_name_differing_only_in_case(self, store):
        with pytest.raises(DuplicateNameError) as exc_info:
            ensure_unique_name("Bolo de Cenoura", Collections.RECIPE_SHEET, store)
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Ficha técnica com o nome 'Bolo de Cenoura' já existe"

    def test_self_update_with_unchanged_name(self, store):
        ensure_unique_name("bolo de cenoura", Collections.RECIPE_SHEET, store, exclude_id="r1")

    def test_rename_onto_another_sheet(self, store):
        assert check_duplicate_name("PÃO DE QUEIJO", Collections.RECIPE_SHEET, store, exclude_id="r1")

    def test_inactive_entities_still_hold_their_name(self, store):
        assert check_duplicate_name("farinha de trigo", Collections.INGREDIENT, store)

    def test_collections_are_independent(self, store):
        assert not check_duplicate_name("Bolo de Cenoura", Collections.MIX, store)

    def test_surrounding_whitespace_is_ignored(self):
        assert is_duplicate_name("  Molho Branco ", [("m1", "molho branco")])

    def test_accented_names_compare_by_lower_case(self):
        assert is_duplicate_name("MOLHO DE MAÇÃ", [("m1", "molho de maçã")])
        assert not is_duplicate_name("Straße", [("m1", "STRASSE")])

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            check_duplicate_name("x", "produto", store)


class TestRequireLines:
    def test_empty_list(self):
        with pytest.raises(InvalidInputError) as exc_info:
            require_lines([])
        assert exc_info.value.field == "ingredientes"

    def test_one_line_is_enough(self):
        require_lines([object()])
