"""
Outbound email.

Account flows only depend on the EmailSender protocol. The default
LoggingEmailSender writes the message to the log; a real transport is
plugged in by overriding get_email_sender.
"""

from dataclasses import dataclass
from typing import Protocol

from shared.config.logging import get_logger, mask_email
from shared.config.settings import settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str
    sender: str = settings.mail_from


class EmailSender(Protocol):
    def send(self, message: EmailMessage) -> None:
        """Deliver the message or raise."""
        ...


class LoggingEmailSender:
    """Records outgoing mail in the log instead of delivering it."""

    def send(self, message: EmailMessage) -> None:
        logger.info(
            "Email queued",
            to=mask_email(message.to),
            subject=message.subject,
            sender=message.sender,
        )


_default_sender = LoggingEmailSender()


def get_email_sender() -> EmailSender:
    """FastAPI dependency returning the configured sender."""
    return _default_sender


def verification_email(to: str, token: str) -> EmailMessage:
    url = f"{settings.frontend_url}/confirm-email?token={token}"
    return EmailMessage(
        to=to,
        subject="Verificação de Email - Ficha Técnica",
        body=f"Por favor, clique no link para verificar seu email: {url}",
    )


def password_reset_email(to: str, token: str) -> EmailMessage:
    url = f"{settings.frontend_url}/reset-password?token={token}"
    return EmailMessage(
        to=to,
        subject="Redefinição de Senha - Ficha Técnica",
        body=f"Você solicitou a redefinição de senha. Clique no link: {url}",
    )
