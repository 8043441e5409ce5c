"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from shared.utils.exceptions import NotFoundError, DuplicateNameError, InvalidInputError

    raise NotFoundError("Ingrediente", ingrediente_id)
    raise DuplicateNameError("Mix", "Massa base")
    raise InvalidInputError("O rendimento deve ser maior que zero", field="rendimento")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class so every error
    reaches the log with its context and renders as {"detail": ...}.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Ficha técnica", ficha_id)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} com ID {entity_id} não encontrado"
        else:
            detail = f"{entity} não encontrado"

        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class ReferenceNotFoundError(NotFoundError):
    """An id referenced from inside a payload (mix entry, recipe line) does not exist."""

    def __init__(self, entity: str, entity_id: int | str, **log_context: Any):
        super().__init__(entity, entity_id, reference=True, **log_context)


# =============================================================================
# 401 / 403 Errors
# =============================================================================


class AuthenticationError(AppException):
    """Missing, invalid or rejected credentials (401)."""

    def __init__(self, detail: str = "Credenciais inválidas", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("listar usuários")
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Não autorizado a {action}"
        else:
            detail = "Acesso negado"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class AdminRequiredError(ForbiddenError):
    """The operation is restricted to administrators."""

    def __init__(self, **log_context: Any):
        super().__init__("executar esta ação (requer administrador)", **log_context)


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Token inválido ou expirado")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidInputError(ValidationError):
    """A numeric or structural precondition of a cost calculation was violated."""

    def __init__(self, detail: str, field: str | None = None, **log_context: Any):
        self.field = field
        super().__init__(detail, field=field, **log_context)


class DuplicateEntityError(ValidationError):
    """Entity already exists."""

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"{entity} com identificador '{identifier}' já existe"
        else:
            detail = f"{entity} já existe"

        super().__init__(detail, entity=entity, identifier=identifier, **log_context)


class DuplicateNameError(DuplicateEntityError):
    """Name collides (case-insensitively) with another entity of the same collection."""

    def __init__(self, entity: str, name: str, **log_context: Any):
        self.entity = entity
        self.name = name
        ValidationError.__init__(
            self,
            f"{entity} com o nome '{name}' já existe",
            entity=entity,
            identifier=name,
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Este email já está em uso")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Falha ao salvar ficha", ficha_id=ficha_id)
    """

    def __init__(self, detail: str = "Erro interno do servidor", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Erro de banco de dados durante {operation}. Tente novamente."
        super().__init__(detail, operation=operation, **log_context)


class ExternalServiceError(InternalError):
    """An outbound collaborator (email delivery) failed."""

    def __init__(self, service: str, detail: str | None = None, **log_context: Any):
        super().__init__(detail or f"Falha ao comunicar com {service}", service=service, **log_context)
