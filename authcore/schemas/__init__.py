"""Pydantic schemas for accounts, sessions and the auth endpoints."""

from authcore.schemas.auth import (
    AccountResponse,
    AccountView,
    ActivateRequest,
    LoginRequest,
    LogoutRequest,
    NameRequest,
    SessionView,
)

__all__ = [
    "AccountResponse",
    "AccountView",
    "ActivateRequest",
    "LoginRequest",
    "LogoutRequest",
    "NameRequest",
    "SessionView",
]
