"""Repository layer - data access abstraction.

Repositories are the storage collaborator of the account and session
managers: insert, find-by-key, update-by-id and remove-by-id, each atomic
for a single row. Managers receive a repository in their constructor and
never query SQLAlchemy models directly.

Dependency direction: Services -> Repositories -> Models
"""

from .account_repository import AccountRepository
from .base import DocumentRepository
from .exceptions import DuplicateError, NotFoundError, RepositoryError
from .session_repository import SessionRepository

__all__ = [
    "AccountRepository",
    "DocumentRepository",
    "DuplicateError",
    "NotFoundError",
    "RepositoryError",
    "SessionRepository",
]
