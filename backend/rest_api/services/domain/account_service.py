"""
Account Service: registration, login, email confirmation and password reset.

Business rules:
- Emails are stored lower-cased and are unique
- New accounts are inactive and unverified; confirming the email
  verifies and activates the account
- Inactive accounts cannot log in
- Reset tokens expire after settings.reset_token_expire_minutes
- A failed verification email does not undo the registration; a failed
  reset email clears the reset token
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import UserRepository
from shared.config.logging import audit_auth_event, auth_logger as logger, mask_email
from shared.config.settings import settings
from shared.infrastructure.db import safe_commit
from shared.infrastructure.email import EmailSender, password_reset_email, verification_email
from shared.security.auth import generate_account_token, reset_token_expiry, sign_access_token
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.utils.exceptions import (
    AuthenticationError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from shared.utils.schemas import (
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)

INACTIVE_ACCOUNT_MESSAGE = "Conta desativada. Entre em contato com o administrador."


def user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        nome=user.nome,
        email=user.email,
        company=user.company,
        phone=user.phone,
        admin=user.admin,
        ativo=user.is_active,
        email_verificado=user.email_verificado,
        created_at=user.created_at,
    )


class AccountService:
    """Self-service account flows. Owns its transactions."""

    def __init__(self, db: Session, mailer: EmailSender):
        self._db = db
        self._repo = UserRepository(db)
        self._mailer = mailer

    def register(self, body: RegisterRequest, ip_address: str | None = None) -> RegisterResponse:
        email = body.email.strip().lower()
        if self._repo.find_by_email(email) is not None:
            audit_auth_event("REGISTER", email=email, success=False, reason="email_taken", ip_address=ip_address)
            raise ValidationError("Usuário já existe com este email")

        token = generate_account_token()
        user = User(
            nome=body.nome.strip(),
            email=email,
            password=hash_password(body.password),
            company=body.company,
            phone=body.phone,
            admin=False,
            is_active=False,
            email_verificado=False,
            token_verificacao=token,
        )
        self._db.add(user)
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            raise ValidationError("Usuário já existe com este email") from e
        self._db.refresh(user)

        try:
            self._mailer.send(verification_email(user.email, token))
        except Exception as e:
            # Registration stands; /resend-confirmation issues a new link
            logger.warning(
                "Verification email failed",
                user_id=user.id,
                email=mask_email(user.email),
                error=str(e),
            )

        audit_auth_event("REGISTER", user_id=user.id, email=user.email, ip_address=ip_address)
        return RegisterResponse(
            message="Usuário registrado com sucesso. Verifique seu email para ativar a conta.",
            user=user_info(user),
        )

    def login(self, email: str, password: str, ip_address: str | None = None) -> LoginResponse:
        user = self._repo.find_by_email(email)

        if user is None or not verify_password(password, user.password):
            audit_auth_event(
                "LOGIN",
                user_id=user.id if user else None,
                email=email,
                success=False,
                reason="user_not_found" if user is None else "invalid_password",
                ip_address=ip_address,
            )
            raise AuthenticationError("Credenciais inválidas")

        if not user.is_active:
            audit_auth_event("LOGIN", user_id=user.id, email=email, success=False, reason="inactive", ip_address=ip_address)
            raise AuthenticationError(INACTIVE_ACCOUNT_MESSAGE)

        # Upgrade hashes made with outdated bcrypt rounds
        if needs_rehash(user.password):
            user.password = hash_password(password)
            safe_commit(self._db)

        audit_auth_event("LOGIN", user_id=user.id, email=user.email, ip_address=ip_address)
        return LoginResponse(
            access_token=sign_access_token(user.id, user.email, user.admin),
            token_type="Bearer",
            expires_in=settings.jwt_access_token_expire_minutes * 60,
            user=user_info(user),
        )

    def confirm_email(self, token: str) -> MessageResponse:
        user = self._repo.find_by_verification_token(token)
        if user is None:
            raise ValidationError("Token de verificação inválido")

        user.email_verificado = True
        user.is_active = True
        user.token_verificacao = None
        safe_commit(self._db)

        audit_auth_event("CONFIRM_EMAIL", user_id=user.id, email=user.email)
        return MessageResponse(message="Email verificado com sucesso")

    def resend_confirmation(self, email: str) -> MessageResponse:
        user = self._repo.find_by_email(email)
        if user is None:
            raise NotFoundError("Usuário")
        if user.email_verificado:
            raise ValidationError("Email já verificado")

        token = generate_account_token()
        user.token_verificacao = token
        safe_commit(self._db)

        try:
            self._mailer.send(verification_email(user.email, token))
        except Exception as e:
            raise ExternalServiceError("email", "Erro ao enviar email", user_id=user.id) from e

        logger.info("Verification email resent", user_id=user.id, email=mask_email(user.email))
        return MessageResponse(message="Email de confirmação reenviado")

    def forgot_password(self, email: str) -> MessageResponse:
        user = self._repo.find_by_email(email)
        if user is None:
            raise NotFoundError("Usuário")

        token = generate_account_token()
        user.token_reset_senha = token
        user.token_reset_expira = reset_token_expiry()
        safe_commit(self._db)

        try:
            self._mailer.send(password_reset_email(user.email, token))
        except Exception as e:
            user.token_reset_senha = None
            user.token_reset_expira = None
            safe_commit(self._db)
            raise ExternalServiceError("email", "Erro ao enviar email", user_id=user.id) from e

        audit_auth_event("PASSWORD_RESET_REQUEST", user_id=user.id, email=user.email)
        return MessageResponse(message="Email de redefinição enviado")

    def validate_reset_token(self, token: str) -> MessageResponse:
        if self._repo.find_by_valid_reset_token(token, datetime.now(timezone.utc)) is None:
            raise ValidationError("Token inválido ou expirado")
        return MessageResponse(message="Token válido")

    def reset_password(self, token: str, password: str) -> MessageResponse:
        user = self._repo.find_by_valid_reset_token(token, datetime.now(timezone.utc))
        if user is None:
            raise ValidationError("Token inválido ou expirado")

        user.password = hash_password(password)
        user.token_reset_senha = None
        user.token_reset_expira = None
        safe_commit(self._db)

        audit_auth_event("PASSWORD_RESET", user_id=user.id, email=user.email)
        return MessageResponse(message="Senha redefinida com sucesso")
