"""Session issuance and sliding-window verification."""

import logging
from datetime import UTC, datetime, timedelta

from authcore.exceptions import (
    AlreadyEndedError,
    InvalidIdError,
    MissingIdError,
    SessionExpiredError,
    SessionNotFoundError,
    StorageError,
    ValidationError,
)
from authcore.models import Session
from authcore.schemas.auth import SessionView
from authcore.services.repositories import NotFoundError, RepositoryError, SessionRepository

from .account_manager import is_valid_id

logger = logging.getLogger(__name__)

DEFAULT_SLIDING_WINDOW = timedelta(minutes=10)


class SessionManager:
    """Owns session records.

    A session is live while it has not ended and was last touched within
    the sliding window. Expiry is evaluated lazily on verify; nothing
    sweeps stale sessions and rows are never deleted.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        sliding_window: timedelta = DEFAULT_SLIDING_WINDOW,
    ) -> None:
        self._sessions = sessions
        self._sliding_window = sliding_window

    def create(self, account_id: str) -> SessionView:
        """Start a session for an already authenticated account."""
        # TODO: limit the number of live sessions per account
        if not account_id:
            raise ValidationError("Session requires an account id")
        now = datetime.now(UTC)
        session = Session(account_id=account_id, start_time=now, last_time=now, ended=False)
        try:
            session = self._sessions.insert(session)
        except RepositoryError as e:
            raise StorageError(f"Failed to create session for account id={account_id}: {e}") from e
        logger.info(f"Session started id={session.id} account_id={account_id}")
        return SessionView.model_validate(session)

    def verify(self, session_id: str) -> SessionView:
        """Load the stored session and check that it is still live.

        Returns the freshly loaded state. Does not move last_time; call
        refresh for that.
        """
        if not is_valid_id(session_id):
            raise InvalidIdError(f"Invalid session id {session_id!r}")
        try:
            session = self._sessions.find_by_id(session_id)
        except RepositoryError as e:
            raise StorageError(f"Failed to load session id={session_id}: {e}") from e
        if session is None:
            raise SessionNotFoundError(f"Session id={session_id} does not exist")

        view = SessionView.model_validate(session)
        if datetime.now(UTC) > view.last_time + self._sliding_window:
            raise SessionExpiredError(f"Session id={session_id} expired")
        if view.ended:
            raise AlreadyEndedError(f"Session id={session_id} already ended")
        return view

    def refresh(self, session: SessionView) -> SessionView:
        """Set last_time to now and persist the session."""
        if not session.id:
            raise MissingIdError("Session update without id")
        refreshed = session.model_copy(update={"last_time": datetime.now(UTC)})
        try:
            self._sessions.update_by_id(
                refreshed.id,
                {"last_time": refreshed.last_time, "ended": refreshed.ended},
            )
        except (NotFoundError, RepositoryError) as e:
            raise StorageError(f"Failed to update session id={session.id}: {e}") from e
        logger.debug(f"Refreshed session id={refreshed.id}")
        return refreshed

    def end(self, session_id: str) -> SessionView:
        """End a live session.

        The stored row keeps its id with ended set. The returned view has
        its id cleared so it cannot be used for further updates.
        """
        verified = self.verify(session_id)
        ended = self.refresh(verified.model_copy(update={"ended": True}))
        logger.info(f"Session ended id={ended.id} account_id={ended.account_id}")
        return ended.model_copy(update={"id": ""})
