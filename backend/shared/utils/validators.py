"""
Shared validators for input sanitization and numeric text parsing.
"""

import math
import re

# Leading number of a free-text weight such as "1", "0,5", "1.5 kg", "500g"
_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:[.,]\d+)?|[+-]?[.,]\d+)")


def parse_decimal_text(value: str | float | int | None) -> float | None:
    """
    Parse a weight or quantity stored as text.

    Accepts a comma or a dot as decimal separator and ignores a trailing
    unit ("1,5 kg" -> 1.5). Returns None when no finite number can be read.

    >>> parse_decimal_text("0,5")
    0.5
    >>> parse_decimal_text("kg") is None
    True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    match = _LEADING_NUMBER.match(value)
    if not match:
        return None
    number = float(match.group(1).replace(",", "."))
    return number if math.isfinite(number) else None


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards; escaping them keeps a search
    term from turning into a pattern.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str | None, max_length: int = 100) -> str:
    """
    Sanitize search term for safe use in queries.

    Trims whitespace, limits length and removes control characters.
    """
    if not term:
        return ""

    term = term.strip()
    if len(term) > max_length:
        term = term[:max_length]

    return re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)


def normalize_name(name: str) -> str:
    """Comparison key for display names: surrounding whitespace dropped, lower-cased."""
    return name.strip().lower()
