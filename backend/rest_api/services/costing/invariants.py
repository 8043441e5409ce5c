"""
Name uniqueness and structural checks run before catalog writes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sized

from rest_api.services.costing.ports import CatalogStore
from shared.config.constants import Collections
from shared.utils.exceptions import DuplicateNameError, InvalidInputError
from shared.utils.validators import normalize_name

COLLECTION_LABELS: dict[str, str] = {
    Collections.INGREDIENT: "Ingrediente",
    Collections.MIX: "Mix",
    Collections.RECIPE_SHEET: "Ficha técnica",
}


def is_duplicate_name(
    candidate: str,
    existing: Iterable[tuple[str, str]],
    exclude_id: str | None = None,
) -> bool:
    """
    True when candidate equals (case-insensitively) the name of any
    (id, name) pair other than exclude_id.

    >>> is_duplicate_name("Bolo de Cenoura", [("a1", "bolo de cenoura")])
    True
    >>> is_duplicate_name("Bolo de Cenoura", [("a1", "bolo de cenoura")], exclude_id="a1")
    False
    """
    key = normalize_name(candidate)
    return any(
        normalize_name(name) == key
        for entity_id, name in existing
        if exclude_id is None or entity_id != exclude_id
    )


def check_duplicate_name(
    name: str,
    collection: str,
    store: CatalogStore,
    exclude_id: str | None = None,
) -> bool:
    """Duplicate check against every entity (active or not) of the collection."""
    if collection not in COLLECTION_LABELS:
        raise ValueError(f"Unknown collection: {collection}")
    return is_duplicate_name(name, store.list_entity_names(collection), exclude_id)


def ensure_unique_name(
    name: str,
    collection: str,
    store: CatalogStore,
    exclude_id: str | None = None,
) -> None:
    """Raise DuplicateNameError when check_duplicate_name reports a collision."""
    if check_duplicate_name(name, collection, store, exclude_id):
        raise DuplicateNameError(COLLECTION_LABELS[collection], name.strip(), collection=collection)


def require_lines(lines: Sized, entity: str = "A ficha técnica") -> None:
    """Recipes and mixes need at least one ingredient."""
    if len(lines) == 0:
        raise InvalidInputError(f"{entity} deve ter pelo menos um ingrediente", field="ingredientes")
