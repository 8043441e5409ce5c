"""
Content routers - catalog and costing.
- /api/ingredientes/* - Ingredients
- /api/mixes/* - Mixes
- /api/fichas/* - Recipe cost sheets
- /api/insumos/* - Ingredient-or-mix lookup
"""

from .ingredients import router as ingredients_router
from .mixes import router as mixes_router
from .recipe_sheets import router as recipe_sheets_router
from .purchasables import router as purchasables_router

__all__ = [
    "ingredients_router",
    "mixes_router",
    "recipe_sheets_router",
    "purchasables_router",
]
