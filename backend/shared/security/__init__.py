"""
Security module: JWT authentication, account tokens, password hashing.
"""

from shared.security.auth import (
    sign_jwt,
    sign_access_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    generate_account_token,
    reset_token_expiry,
)
from shared.security.password import hash_password, verify_password, needs_rehash

__all__ = [
    # auth
    "sign_jwt",
    "sign_access_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "generate_account_token",
    "reset_token_expiry",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
]
