"""Session data access layer."""

from authcore.models import Session

from .base import DocumentRepository


class SessionRepository(DocumentRepository[Session]):
    """Centralized session data access."""

    model = Session
    entity_type = "Session"
