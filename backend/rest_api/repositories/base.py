"""
Base Repository implementation.
Provides common data access patterns: filtering, sorting, pagination.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.utils.validators import escape_like_pattern, sanitize_search_term

ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Pagination
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0

    # Active flag (None = both)
    ativo: bool | None = None

    # Search
    search: str | None = None

    # Sorting
    sort_by: str | None = None
    sort_order: str = "asc"

    def __post_init__(self):
        """Validate and normalize filters."""
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)
        if self.search:
            self.search = sanitize_search_term(self.search, Limits.MAX_SEARCH_TERM_LENGTH) or None
        self.sort_order = "desc" if str(self.sort_order).lower() == "desc" else "asc"


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - _base_query(): base select with eager loading
    and may override search_columns, sortable_fields, default_sort.
    """

    # Attribute names matched by the free-text search
    search_columns: tuple[str, ...] = ()
    # API sort key -> model attribute name
    sortable_fields: dict[str, str] = {}
    default_sort: str = "created_at"

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """Return base query with proper eager loading."""
        ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Active flag and free-text search. Subclasses add their own."""
        if filters.ativo is not None:
            query = query.where(self.model.is_active.is_(filters.ativo))

        if filters.search and self.search_columns:
            pattern = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(
                or_(
                    *(
                        getattr(self.model, column).ilike(pattern, escape="\\")
                        for column in self.search_columns
                    )
                )
            )
        return query

    def _apply_sort(self, query: Select, filters: RepositoryFilters) -> Select:
        attribute = self.sortable_fields.get(filters.sort_by or "", self.default_sort)
        column = getattr(self.model, attribute)
        ordered = column.desc() if filters.sort_order == "desc" else column.asc()
        return query.order_by(ordered, self.model.id.asc())

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        """Find all entities matching filters, sorted and paginated."""
        filters = filters or RepositoryFilters()
        query = self._apply_filters(self._base_query(), filters)
        query = self._apply_sort(query, filters)
        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().unique().all()

    def count(self, filters: RepositoryFilters | None = None) -> int:
        """Count entities matching filters."""
        filters = filters or RepositoryFilters()
        query = self._apply_filters(select(func.count()).select_from(self.model), filters)
        return self._db.scalar(query) or 0

    def find_by_id(self, entity_id: Any) -> ModelT | None:
        """Find entity by ID, active or not."""
        query = self._base_query().where(self.model.id == entity_id)
        return self._db.scalar(query)
