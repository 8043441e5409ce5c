"""
Recipe sheet repository.
"""

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from rest_api.models import RecipeSheet

from .base import BaseRepository


class RecipeSheetRepository(BaseRepository[RecipeSheet]):
    """
    Repository for RecipeSheet entities.

    Guarantees eager loading of the ingredient lines.
    """

    search_columns = ("nome_receita",)
    sortable_fields = {
        "nome_receita": "nome_receita",
        "custo_total": "custo_total",
        "custo_por_unidade": "custo_por_unidade",
        "preco_venda_sugerido": "preco_venda_sugerido",
        "createdAt": "created_at",
        "created_at": "created_at",
    }
    default_sort = "nome_receita"

    @property
    def model(self) -> type[RecipeSheet]:
        return RecipeSheet

    def _base_query(self) -> Select:
        return select(RecipeSheet).options(selectinload(RecipeSheet.ingredientes))

    def list_names(self) -> list[tuple[str, str]]:
        rows = self._db.execute(select(RecipeSheet.id, RecipeSheet.nome_receita))
        return [(row.id, row.nome_receita) for row in rows]
