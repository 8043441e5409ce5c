"""
Domain Services - application layer.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import RecipeSheetService

    # In router
    service = RecipeSheetService(db)
    sheet = service.recalculate(ficha_id, user_id, user_email)
"""

from .ingredient_service import IngredientService
from .mix_service import MixService
from .recipe_sheet_service import RecipeSheetService, apply_costs, clone_name
from .purchasable_service import lookup_purchasable
from .account_service import AccountService, user_info
from .user_service import UserService

__all__ = [
    # Catalog
    "IngredientService",
    "MixService",
    "RecipeSheetService",
    "apply_costs",
    "clone_name",
    "lookup_purchasable",
    # Accounts
    "AccountService",
    "UserService",
    "user_info",
]
