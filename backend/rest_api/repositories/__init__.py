"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from rest_api.repositories import MixRepository, CatalogFilters

    repo = MixRepository(db)
    mixes = repo.find_all(CatalogFilters(search="massa", ativo=True))
    mix = repo.find_by_id(mix_id)
"""

from .base import BaseRepository, RepositoryFilters
from .catalog import CatalogFilters, IngredientRepository, MixRepository
from .recipe import RecipeSheetRepository
from .user import UserRepository
from .catalog_store import SqlCatalogStore

__all__ = [
    "BaseRepository",
    "RepositoryFilters",
    "CatalogFilters",
    "IngredientRepository",
    "MixRepository",
    "RecipeSheetRepository",
    "UserRepository",
    "SqlCatalogStore",
]
