"""
Shared Pydantic schemas used across the application.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from shared.config.settings import settings


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class UserInfo(BaseModel):
    """Public view of a user account."""

    id: int
    nome: str
    email: str
    company: str | None = None
    phone: str | None = None
    admin: bool = False
    ativo: bool = False
    email_verificado: bool = False
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


class RegisterRequest(BaseModel):
    """Self-service account creation."""

    nome: str = Field(min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(min_length=settings.min_password_length)
    company: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=40)


class RegisterResponse(BaseModel):
    message: str
    user: UserInfo


class TokenRequest(BaseModel):
    """Body carrying a single verification or reset token."""

    token: str = Field(min_length=1)


class EmailRequest(BaseModel):
    """Body carrying a single email address."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=settings.min_password_length)


# =============================================================================
# Generic responses
# =============================================================================


class MessageResponse(BaseModel):
    """Acknowledgement with a human readable message."""

    message: str


class StatusUpdate(BaseModel):
    """Body of every PATCH .../status endpoint."""

    ativo: bool


class PaginationMeta(BaseModel):
    current: int
    total: int
    total_items: int
    limit: int


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    code: str | None = None


# =============================================================================
# Audit
# =============================================================================


class AuditLogOutput(BaseModel):
    """One audit entry; the *_values fields hold JSON text."""

    id: int
    user_id: int | None = None
    user_email: str | None = None
    entity_type: str
    entity_id: str
    action: str
    old_values: str | None = None
    new_values: str | None = None
    changes: str | None = None
    ip_address: str | None = None
    created_at: datetime | None = None
