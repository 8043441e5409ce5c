"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ReferenceNotFoundError,
    ForbiddenError,
    ValidationError,
    InvalidInputError,
    DuplicateNameError,
    ConflictError,
)
from shared.utils.validators import (
    escape_like_pattern,
    normalize_name,
    parse_decimal_text,
    sanitize_search_term,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "NotFoundError",
    "ReferenceNotFoundError",
    "ForbiddenError",
    "ValidationError",
    "InvalidInputError",
    "DuplicateNameError",
    "ConflictError",
    # validators
    "escape_like_pattern",
    "normalize_name",
    "parse_decimal_text",
    "sanitize_search_term",
    # schemas
    "ErrorResponse",
]
