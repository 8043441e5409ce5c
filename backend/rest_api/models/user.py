"""
User account model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base, IdType


class User(AuditMixin, Base):
    """
    Application user.

    Accounts start inactive (is_active=False) and become active when the
    email is confirmed. Administrators can toggle any account.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id/email from AuditMixin.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(200), nullable=False)
    # Stored lower-cased
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    company: Mapped[Optional[str]] = mapped_column(String(200))
    phone: Mapped[Optional[str]] = mapped_column(String(40))
    admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    email_verificado: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    token_verificacao: Mapped[Optional[str]] = mapped_column(String(128), index=True)
    token_reset_senha: Mapped[Optional[str]] = mapped_column(String(128), index=True)
    token_reset_expira: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', admin={self.admin})>"
