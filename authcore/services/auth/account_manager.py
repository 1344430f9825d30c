"""Account lifecycle: registration, reset, activation and authentication.

An account holds two independent credentials. The permanent password is
stored as a digest and is empty until activation. The temporary password
is a short random string with an expiry, issued at registration and on
every reset. Both may be valid at the same time: a reset leaves the old
permanent password working while the new temporary one is pending.
"""

import hmac
import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID

from authcore.exceptions import (
    AccountNotFoundError,
    DuplicateNameError,
    InvalidIdError,
    MissingIdError,
    StorageError,
    TempExpiredError,
    ValidationError,
    WrongCredentialError,
)
from authcore.models import Account
from authcore.schemas.auth import AccountView
from authcore.services.repositories import (
    AccountRepository,
    DuplicateError,
    NotFoundError,
    RepositoryError,
)

from .password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

DEFAULT_TEMP_PASSWORD_LENGTH = 8
DEFAULT_TEMP_PASSWORD_TTL = timedelta(hours=1)


def is_valid_id(value: str) -> bool:
    """True if value is a well-formed record id (UUID string)."""
    if not value:
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


class AccountManager:
    """Owns account records and verifies credentials against them."""

    def __init__(
        self,
        accounts: AccountRepository,
        hasher: PasswordHasher | None = None,
        temp_password_length: int = DEFAULT_TEMP_PASSWORD_LENGTH,
        temp_password_ttl: timedelta = DEFAULT_TEMP_PASSWORD_TTL,
    ) -> None:
        self._accounts = accounts
        self._hasher = hasher or PasswordHasher()
        self._temp_password_length = temp_password_length
        self._temp_password_ttl = temp_password_ttl

    def _new_temp_credential(self) -> tuple[str, datetime]:
        password = self._hasher.generate_temp_password(self._temp_password_length)
        return password, datetime.now(UTC) + self._temp_password_ttl

    def _find_by_name(self, name: str) -> Account | None:
        try:
            return self._accounts.find_by_name(name)
        except RepositoryError as e:
            raise StorageError(f"Failed to look up account {name!r}: {e}") from e

    def register(self, name: str) -> AccountView:
        """Create an account with a fresh temporary password and no permanent one.

        The returned view includes the temporary password so it can be
        delivered out of band.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Missing account name")

        if self._find_by_name(name) is not None:
            raise DuplicateNameError(f"Account {name!r} already exists")

        temp_password, temp_expiry = self._new_temp_credential()
        account = Account(
            name=name,
            password_hash="",
            temp_password=temp_password,
            temp_expiry=temp_expiry,
        )
        try:
            account = self._accounts.insert(account)
        except DuplicateError as e:
            # Lost the race against a concurrent registration
            raise DuplicateNameError(f"Account {name!r} already exists") from e
        except RepositoryError as e:
            raise StorageError(f"Failed to register {name!r}: {e}") from e

        logger.info(f"Registered account name={account.name} id={account.id}")
        return AccountView.model_validate(account)

    def request_reset(self, name: str) -> AccountView:
        """Issue a new temporary password, leaving the permanent one untouched."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Missing account name")

        account = self._find_by_name(name)
        if account is None:
            raise AccountNotFoundError(f"Account {name!r} does not exist")

        temp_password, temp_expiry = self._new_temp_credential()
        view = AccountView.model_validate(account).model_copy(
            update={"temp_password": temp_password, "temp_expiry": temp_expiry}
        )
        view = self.update(view)
        logger.info(f"Reset requested for account name={view.name} id={view.id}")
        return view

    def get(self, account_id: str) -> AccountView:
        """Load an account by id."""
        logger.debug(f"Getting account id={account_id}")
        if not is_valid_id(account_id):
            raise InvalidIdError(f"Invalid account id {account_id!r}")
        try:
            account = self._accounts.get_by_id(account_id)
        except NotFoundError as e:
            raise AccountNotFoundError(f"Account id={account_id} does not exist") from e
        except RepositoryError as e:
            raise StorageError(f"Failed to get account id={account_id}: {e}") from e
        return AccountView.model_validate(account)

    def _resolve(self, name: str, account_id: str) -> Account | None:
        name = (name or "").strip()
        if is_valid_id(account_id):
            try:
                return self._accounts.find_by_id(account_id)
            except RepositoryError as e:
                raise StorageError(f"Failed to get account id={account_id}: {e}") from e
        return self._find_by_name(name)

    def authenticate(
        self,
        name: str,
        credential: str,
        is_temp: bool = False,
        account_id: str = "",
    ) -> AccountView:
        """Check a name (or id) and credential against the stored account.

        With is_temp the credential is compared with the temporary password;
        the returned view has the temporary password cleared and its expiry
        set to now, which the caller persists via complete_activation.
        Nothing is written here.

        Without is_temp the credential is digested and checked against the
        permanent password; the returned view carries the stored digest so
        writing it back never replaces the password with a re-hash of itself.
        """
        existing = self._resolve(name, account_id)
        if existing is None:
            if not is_temp:
                self._hasher.burn_verification(credential)
            raise AccountNotFoundError("Account does not exist")

        now = datetime.now(UTC)
        if is_temp:
            stored = AccountView.model_validate(existing)
            if stored.temp_expiry is None or now >= stored.temp_expiry:
                raise TempExpiredError(f"Temp password expired for account id={existing.id}")
            if not stored.temp_password or not hmac.compare_digest(
                credential.encode("utf-8"), stored.temp_password.encode("utf-8")
            ):
                raise WrongCredentialError(f"Wrong temp password for account id={existing.id}")
            logger.debug(f"Authenticated inactive account id={existing.id}")
            return AccountView(
                id=existing.id,
                name=existing.name,
                temp_password="",
                temp_expiry=now,
            )

        if not self._hasher.verify_password(credential, existing.password_hash):
            raise WrongCredentialError(f"Wrong password for account id={existing.id}")
        logger.debug(f"Authenticated active account id={existing.id}")
        return AccountView(
            id=existing.id,
            name=existing.name,
            password_hash=existing.password_hash,
        )

    def complete_activation(self, account: AccountView, new_password: str) -> AccountView:
        """Set the permanent password and retire the temporary one.

        Only meaningful straight after authenticate(is_temp=True) on the
        same account; enforcing that order is up to the caller.
        """
        activated = account.model_copy(
            update={
                "password_hash": self._hasher.hash_password(new_password),
                "temp_password": "",
                "temp_expiry": datetime.now(UTC),
            }
        )
        activated = self.update(activated)
        logger.info(f"Activated account name={activated.name} id={activated.id}")
        return activated

    def update(self, account: AccountView) -> AccountView:
        """Persist an account view previously obtained from this manager."""
        if not account.id:
            raise MissingIdError("Account update without id")
        values = account.model_dump(exclude={"id"})
        try:
            updated = self._accounts.update_by_id(account.id, values)
        except NotFoundError as e:
            raise AccountNotFoundError(f"Account id={account.id} does not exist") from e
        except DuplicateError as e:
            raise DuplicateNameError(f"Account {account.name!r} already exists") from e
        except RepositoryError as e:
            raise StorageError(f"Failed to update account id={account.id}: {e}") from e
        logger.info(f"Updated account id={updated.id}")
        return AccountView.model_validate(updated)
