"""
User repository.
"""

from datetime import datetime, timezone

from sqlalchemy import Select, func, select

from rest_api.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    search_columns = ("nome", "email")
    sortable_fields = {
        "nome": "nome",
        "email": "email",
        "createdAt": "created_at",
        "created_at": "created_at",
    }
    default_sort = "created_at"

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User)

    def find_by_email(self, email: str) -> User | None:
        return self._db.scalar(select(User).where(func.lower(User.email) == email.strip().lower()))

    def find_by_verification_token(self, token: str) -> User | None:
        return self._db.scalar(select(User).where(User.token_verificacao == token))

    def find_by_valid_reset_token(self, token: str, now: datetime | None = None) -> User | None:
        """User holding this reset token, if the token has not expired."""
        now = now or datetime.now(timezone.utc)
        user = self._db.scalar(select(User).where(User.token_reset_senha == token))
        if user is None or user.token_reset_expira is None:
            return None
        expires = user.token_reset_expira
        # SQLite returns naive datetimes
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return user if expires > now else None
