"""Authentication services.

Handles credential digests, the account lifecycle (register, reset,
activate, authenticate) and sliding-window sessions.
"""

from .account_manager import AccountManager
from .password_hasher import PasswordHasher
from .session_manager import SessionManager

__all__ = [
    "AccountManager",
    "PasswordHasher",
    "SessionManager",
]
