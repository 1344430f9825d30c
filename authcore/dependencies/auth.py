"""Dependencies wiring the managers into request handlers."""

from collections.abc import Callable
from datetime import timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from authcore.config import settings
from authcore.database import get_db
from authcore.exceptions import InvalidIdError
from authcore.schemas.auth import SessionView, check_password_strength
from authcore.services.auth import AccountManager, PasswordHasher, SessionManager
from authcore.services.repositories import AccountRepository, SessionRepository

PasswordChecker = Callable[[str], None]

security = HTTPBearer(auto_error=False)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(scheme=settings.password_hash_scheme, rounds=settings.bcrypt_rounds)


def get_password_checker() -> PasswordChecker:
    """Policy applied to new passwords on activation. Override to replace it."""
    return check_password_strength


def get_account_manager(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AccountManager:
    return AccountManager(
        AccountRepository(db),
        hasher=hasher,
        temp_password_length=settings.temp_password_length,
        temp_password_ttl=timedelta(minutes=settings.temp_password_expire_minutes),
    )


def get_session_manager(db: Session = Depends(get_db)) -> SessionManager:
    return SessionManager(
        SessionRepository(db),
        sliding_window=timedelta(minutes=settings.session_sliding_window_minutes),
    )


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionView:
    """
    Verify the bearer session id and extend its sliding window.

    Usage:
        @router.get("/protected")
        def protected_route(session: SessionView = Depends(get_current_session)):
            return {"account_id": session.account_id}
    """
    if credentials is None:
        raise InvalidIdError("Missing session id")
    session = sessions.verify(credentials.credentials)
    return sessions.refresh(session)
