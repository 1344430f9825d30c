"""SQLAlchemy ORM models."""

from authcore.models.account import Account
from authcore.models.session import Session

__all__ = [
    "Account",
    "Session",
]
