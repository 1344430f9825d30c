"""Account data access layer."""

from authcore.models import Account

from .base import DocumentRepository


class AccountRepository(DocumentRepository[Account]):
    """Centralized account data access."""

    model = Account
    entity_type = "Account"
    unique_field = "name"

    def find_by_name(self, name: str) -> Account | None:
        """Find account by exact (case-sensitive) name."""
        return self.find_one(name=name)
