"""
Authentication routers - /api/auth/*
Handles registration, login, email confirmation, password reset and user info.
"""

from .routes import router

__all__ = ["router"]
