"""Single-collection data access over SQLAlchemy."""

import logging
from typing import Any, ClassVar, Generic, TypeVar
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.database import Base

from .exceptions import DuplicateError, NotFoundError, RepositoryError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class DocumentRepository(Generic[ModelT]):
    """Insert / find / update / remove for one table, one row at a time.

    Every write commits on its own, so each call is atomic for the row it
    touches and nothing more. Composite operations (check-then-insert,
    load-then-update) are not transactional across calls.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises exception if missing
    """

    model: ClassVar[type[Base]]
    entity_type: ClassVar[str]
    # Column whose unique constraint violation means "already exists"
    unique_field: ClassVar[str | None] = None

    def __init__(self, db: Session) -> None:
        self._db = db

    def insert(self, record: ModelT) -> ModelT:
        """Insert a new row, assigning an id if the record has none."""
        if not record.id:
            record.id = str(uuid4())
        logger.debug(f"Inserting {self.entity_type} id={record.id}")
        self._db.add(record)
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            if self.unique_field is not None:
                value = getattr(record, self.unique_field)
                raise DuplicateError(self.entity_type, self.unique_field, value) from e
            raise RepositoryError(f"Failed to insert {self.entity_type}: {e}") from e
        except SQLAlchemyError as e:
            self._db.rollback()
            raise RepositoryError(f"Failed to insert {self.entity_type}: {e}") from e
        self._db.refresh(record)
        return record

    def find_one(self, **filters: Any) -> ModelT | None:
        """Find the first row whose columns equal the given values."""
        try:
            return self._db.query(self.model).filter_by(**filters).first()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise RepositoryError(f"Failed to query {self.entity_type}: {e}") from e

    def find_by_id(self, record_id: str) -> ModelT | None:
        """Find row by primary key."""
        return self.find_one(id=record_id)

    def get_by_id(self, record_id: str) -> ModelT:
        """Get row by primary key, raising NotFoundError if missing."""
        record = self.find_by_id(record_id)
        if record is None:
            raise NotFoundError(self.entity_type, record_id)
        return record

    def update_by_id(self, record_id: str, values: dict[str, Any]) -> ModelT:
        """Overwrite the given columns of an existing row."""
        record = self.get_by_id(record_id)
        for field, value in values.items():
            setattr(record, field, value)
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            if self.unique_field is not None and self.unique_field in values:
                raise DuplicateError(
                    self.entity_type, self.unique_field, values[self.unique_field]
                ) from e
            raise RepositoryError(f"Failed to update {self.entity_type}: {e}") from e
        except SQLAlchemyError as e:
            self._db.rollback()
            raise RepositoryError(f"Failed to update {self.entity_type}: {e}") from e
        self._db.refresh(record)
        logger.debug(f"Updated {self.entity_type} id={record_id}")
        return record

    def remove_by_id(self, record_id: str) -> None:
        """Delete a row by primary key."""
        record = self.get_by_id(record_id)
        self._db.delete(record)
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise RepositoryError(f"Failed to delete {self.entity_type}: {e}") from e
        logger.debug(f"Deleted {self.entity_type} id={record_id}")
