"""Error kinds raised by the account and session managers.

Each kind carries the status class the HTTP layer maps it to. The
authorization-class kinds (wrong credential, expired temp password,
ended or expired session, malformed id) share one public message so a
client cannot tell which factor failed.
"""


class AuthError(Exception):
    """Base exception for account and session operations."""

    kind = "error"
    status_code = 500
    public_detail: str | None = None

    def __init__(self, message: str = ""):
        self.message = message or self.__class__.__doc__ or self.kind
        super().__init__(self.message)

    @property
    def detail(self) -> str:
        return self.public_detail or self.message


class ValidationError(AuthError):
    """Malformed or missing input."""

    kind = "validation"
    status_code = 400


class MissingIdError(ValidationError):
    """Record has no id and cannot be written."""

    kind = "missing_id"


class DuplicateNameError(AuthError):
    """Account name already exists."""

    kind = "duplicate_name"
    status_code = 409


class NotFoundError(AuthError):
    """Record does not exist."""

    kind = "not_found"
    status_code = 404


class AccountNotFoundError(NotFoundError):
    """Account does not exist."""


class SessionNotFoundError(NotFoundError):
    """Session does not exist."""


class UnauthorizedError(AuthError):
    """Authentication or session state violation."""

    kind = "unauthorized"
    status_code = 403
    public_detail = "Not authorized"


class WrongCredentialError(UnauthorizedError):
    """Wrong password."""

    kind = "wrong_credential"


class TempExpiredError(UnauthorizedError):
    """Temp password expired."""

    kind = "temp_expired"


class InvalidIdError(UnauthorizedError):
    """Malformed id."""

    kind = "invalid_id"


class AlreadyEndedError(UnauthorizedError):
    """Session already ended."""

    kind = "already_ended"


class SessionExpiredError(UnauthorizedError):
    """Session expired."""

    kind = "expired"


class StorageError(AuthError):
    """Backing store failed."""

    kind = "storage"
    status_code = 500
    public_detail = "Internal storage error"
