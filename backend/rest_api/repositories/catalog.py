"""
Ingredient and Mix repositories.
"""

from dataclasses import dataclass

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from rest_api.models import Ingredient, Mix, MixEntry
from shared.utils.validators import escape_like_pattern

from .base import BaseRepository, RepositoryFilters


@dataclass
class CatalogFilters(RepositoryFilters):
    """Ingredient/mix filters: category is a case-insensitive substring match."""

    categoria: str | None = None


def _apply_category(query: Select, model, filters: RepositoryFilters) -> Select:
    categoria = getattr(filters, "categoria", None)
    if categoria:
        pattern = f"%{escape_like_pattern(categoria.strip())}%"
        query = query.where(model.categoria.ilike(pattern, escape="\\"))
    return query


class IngredientRepository(BaseRepository[Ingredient]):
    search_columns = ("alimento", "categoria", "fornecedor")
    sortable_fields = {
        "alimento": "alimento",
        "categoria": "categoria",
        "preco": "preco",
        "fornecedor": "fornecedor",
        "data_validade": "data_validade",
        "createdAt": "created_at",
        "created_at": "created_at",
    }
    default_sort = "alimento"

    @property
    def model(self) -> type[Ingredient]:
        return Ingredient

    def _base_query(self) -> Select:
        return select(Ingredient)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        query = super()._apply_filters(query, filters)
        return _apply_category(query, Ingredient, filters)

    def list_names(self) -> list[tuple[str, str]]:
        return [(row.id, row.alimento) for row in self._db.execute(select(Ingredient.id, Ingredient.alimento))]


class MixRepository(BaseRepository[Mix]):
    """
    Repository for Mix entities.

    Guarantees eager loading of the entries and their ingredients.
    """

    search_columns = ("nome", "categoria", "descricao")
    sortable_fields = {
        "nome": "nome",
        "categoria": "categoria",
        "preco_total": "preco_total",
        "createdAt": "created_at",
        "created_at": "created_at",
    }
    default_sort = "nome"

    @property
    def model(self) -> type[Mix]:
        return Mix

    def _base_query(self) -> Select:
        return select(Mix).options(
            selectinload(Mix.ingredientes).selectinload(MixEntry.ingrediente)
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        query = super()._apply_filters(query, filters)
        return _apply_category(query, Mix, filters)

    def list_names(self) -> list[tuple[str, str]]:
        return [(row.id, row.nome) for row in self._db.execute(select(Mix.id, Mix.nome))]
