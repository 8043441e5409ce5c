"""
Authentication router.
Handles registration, login, email confirmation and password reset.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.routers._common import client_ip, current_user
from rest_api.services.domain import AccountService, user_info
from shared.infrastructure.db import get_db
from shared.infrastructure.email import EmailSender, get_email_sender
from shared.utils.schemas import (
    EmailRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenRequest,
    UserInfo,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_account_service(
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
) -> AccountService:
    return AccountService(db, mailer)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: Request,
    body: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """
    Create an account.

    The account starts inactive and unverified; a confirmation link is
    sent to the email address.
    """
    return service.register(body, ip_address=client_ip(request))


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    body: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """
    Authenticate and return an access token.

    The token contains:
    - sub: user ID
    - email: user's email
    - admin: administrator flag
    """
    return service.login(body.email, body.password, ip_address=client_ip(request))


@router.post("/confirm", response_model=MessageResponse)
def confirm_email(
    body: TokenRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    return service.confirm_email(body.token)


@router.post("/resend-confirmation", response_model=MessageResponse)
def resend_confirmation(
    body: EmailRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    return service.resend_confirmation(body.email)


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: EmailRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Send a password reset link. The token is valid for a few minutes."""
    return service.forgot_password(body.email)


@router.post("/validate-reset-token", response_model=MessageResponse)
def validate_reset_token(
    body: TokenRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    return service.validate_reset_token(body.token)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    return service.reset_password(body.token, body.password)


@router.get("/me", response_model=UserInfo)
def me(user: User = Depends(current_user)) -> UserInfo:
    """Current user info."""
    return user_info(user)
