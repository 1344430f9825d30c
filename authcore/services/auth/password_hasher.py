"""Password digests and temporary password generation."""

import hashlib
import hmac
import logging
import secrets

import bcrypt

from authcore.constants import MAX_PASSWORD_BYTES
from authcore.exceptions import ValidationError

logger = logging.getLogger(__name__)

BCRYPT = "bcrypt"
SHA1 = "sha1"


class PasswordHasher:
    """Digest and verify permanent passwords.

    New digests use the configured scheme. Verification picks the scheme
    from the stored digest itself, so accounts written by the legacy
    unsalted SHA-1 scheme keep authenticating after bcrypt becomes the
    default.
    """

    # Pre-computed bcrypt hash for timing-consistent password verification
    # Used when the account doesn't exist to prevent name enumeration via timing attacks
    _DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VTtYA9dWQ6E3Ky"

    def __init__(self, scheme: str = BCRYPT, rounds: int = 12) -> None:
        if scheme not in (BCRYPT, SHA1):
            raise ValueError(f"Unsupported password hash scheme: {scheme}")
        self.scheme = scheme
        self.rounds = rounds

    @staticmethod
    def get_dummy_hash() -> str:
        """Get a dummy password hash for timing-consistent verification."""
        return PasswordHasher._DUMMY_HASH

    @staticmethod
    def sha1_hex(password: str) -> str:
        """Legacy digest: unsalted SHA-1, lowercase hex."""
        return hashlib.sha1(password.encode("utf-8")).hexdigest()

    @staticmethod
    def fits_bcrypt(password: str) -> bool:
        return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES

    def hash_password(self, password: str) -> str:
        """Digest a plaintext password with the configured scheme."""
        if not self.fits_bcrypt(password):
            raise ValidationError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
        if self.scheme == SHA1:
            return self.sha1_hex(password)
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against its stored digest."""
        if not hashed:
            return False
        if hashed.startswith("$2"):
            if not self.fits_bcrypt(password):
                self.burn_verification(password)
                return False
            try:
                return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
            except ValueError as e:
                logger.error(f"Password verification error: {e}")
                return False
        return hmac.compare_digest(self.sha1_hex(password), hashed)

    def burn_verification(self, password: str) -> None:
        """Spend the time of a real bcrypt check without a real digest."""
        candidate = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        try:
            bcrypt.checkpw(candidate, self._DUMMY_HASH.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Password verification error: {e}")

    @staticmethod
    def generate_temp_password(length: int = 8) -> str:
        """Random lowercase hex string of the given length."""
        return secrets.token_hex((length + 1) // 2)[:length]
