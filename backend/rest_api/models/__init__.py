"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class, AuditMixin, id helpers
- user: User
- catalog: Ingredient, Mix, MixEntry
- recipe: RecipeSheet, RecipeSheetLine
- audit: AuditLog
"""

# Base classes
from .base import Base, AuditMixin, new_public_id

# Accounts
from .user import User

# Purchasable catalog
from .catalog import Ingredient, Mix, MixEntry

# Recipe cost sheets
from .recipe import RecipeSheet, RecipeSheetLine

# Audit
from .audit import AuditLog

__all__ = [
    "Base",
    "AuditMixin",
    "new_public_id",
    "User",
    "Ingredient",
    "Mix",
    "MixEntry",
    "RecipeSheet",
    "RecipeSheetLine",
    "AuditLog",
]
