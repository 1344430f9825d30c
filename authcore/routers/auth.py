"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, status

from authcore.dependencies.auth import (
    PasswordChecker,
    get_account_manager,
    get_current_session,
    get_password_checker,
    get_session_manager,
)
from authcore.schemas.auth import (
    AccountResponse,
    ActivateRequest,
    LoginRequest,
    LogoutRequest,
    NameRequest,
    SessionView,
)
from authcore.services.auth import AccountManager, SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: NameRequest, accounts: AccountManager = Depends(get_account_manager)
) -> AccountResponse:
    """Register a new account pending activation with a temporary password."""
    logger.debug(f"Register: name={data.name}")
    account = accounts.register(data.name)
    return AccountResponse.model_validate(account)


@router.post("/reset", response_model=AccountResponse)
def reset(
    data: NameRequest, accounts: AccountManager = Depends(get_account_manager)
) -> AccountResponse:
    """Issue a new temporary password; the current password stays valid."""
    logger.debug(f"Reset: name={data.name}")
    account = accounts.request_reset(data.name)
    return AccountResponse.model_validate(account)


@router.post("/activate", response_model=SessionView)
def activate(
    data: ActivateRequest,
    accounts: AccountManager = Depends(get_account_manager),
    sessions: SessionManager = Depends(get_session_manager),
    check_password: PasswordChecker = Depends(get_password_checker),
) -> SessionView:
    """Set the permanent password using the temporary one, then log in."""
    logger.debug(f"Activate: name={data.name} id={data.id}")

    # Make sure the new password will be strong enough
    check_password(data.password)

    account = accounts.authenticate(
        data.name, data.temp_password, is_temp=True, account_id=data.id
    )
    account = accounts.complete_activation(account, data.password)

    session = sessions.create(account.id)
    logger.info(f"Logged in {account.name} with session {session.id}")
    return session


@router.post("/login", response_model=SessionView)
def login(
    data: LoginRequest,
    accounts: AccountManager = Depends(get_account_manager),
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionView:
    """Log in with the permanent password and start a session."""
    logger.debug(f"Login: name={data.name} id={data.id}")
    account = accounts.authenticate(data.name, data.password, account_id=data.id)

    session = sessions.create(account.id)
    logger.info(f"Logged in {account.name} with session {session.id}")
    return session


@router.post("/logout", response_model=SessionView)
def logout(
    data: LogoutRequest, sessions: SessionManager = Depends(get_session_manager)
) -> SessionView:
    """End a session. The returned session has its id cleared."""
    logger.debug(f"Logout: session id={data.id}")
    return sessions.end(data.id)


@router.get("/session", response_model=SessionView)
def current_session(session: SessionView = Depends(get_current_session)) -> SessionView:
    """Return the caller's session after extending its sliding window."""
    return session
