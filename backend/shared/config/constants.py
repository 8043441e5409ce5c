"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Collections, AuditAction, Limits

    if collection == Collections.MIX:
        ...
"""

from typing import Final


# =============================================================================
# Catalog collections
# =============================================================================


class Collections:
    """Named collections whose display names must stay unique."""

    INGREDIENT: Final[str] = "ingrediente"
    MIX: Final[str] = "mix"
    RECIPE_SHEET: Final[str] = "ficha_tecnica"

    ALL: Final[list[str]] = [INGREDIENT, MIX, RECIPE_SHEET]


class PurchasableKind:
    """What an ingredient reference on a recipe line resolved to."""

    INGREDIENT: Final[str] = "INGREDIENTE"
    MIX: Final[str] = "MIX"


# =============================================================================
# Audit
# =============================================================================


class AuditAction:
    """Actions recorded in the audit log."""

    CREATE: Final[str] = "CREATE"
    UPDATE: Final[str] = "UPDATE"
    STATUS: Final[str] = "STATUS"
    CLONE: Final[str] = "CLONE"
    RECALCULATE: Final[str] = "RECALCULATE"

    ALL: Final[list[str]] = [CREATE, UPDATE, STATUS, CLONE, RECALCULATE]


# entity_type of audit entries written for user accounts
USER_ENTITY_TYPE: Final[str] = "usuario"


# =============================================================================
# Costing
# =============================================================================

# Suffix appended to the name of a cloned recipe sheet
CLONE_SUFFIX: Final[str] = " - Cópia"

# Fields of a recipe sheet whose change forces a cost recomputation
RECIPE_COST_FIELDS: Final[frozenset[str]] = frozenset(
    {"ingredientes", "gas_energia", "embalagem", "mao_obra", "outros", "rendimento", "margem_lucro"}
)


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths
    MAX_INGREDIENT_NAME_LENGTH: Final[int] = 100
    MAX_MIX_NAME_LENGTH: Final[int] = 100
    MIN_RECIPE_NAME_LENGTH: Final[int] = 2
    MAX_RECIPE_NAME_LENGTH: Final[int] = 200
    MAX_UNIT_LENGTH: Final[int] = 30
    MAX_WEIGHT_TEXT_LENGTH: Final[int] = 50
    MAX_CATEGORY_LENGTH: Final[int] = 100
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 100
