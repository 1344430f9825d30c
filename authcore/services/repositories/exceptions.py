"""Storage failures as seen by the account and session managers.

Managers translate these into the error kinds of authcore.exceptions;
nothing above the manager layer should catch them directly.
"""


class RepositoryError(Exception):
    """The backing store failed (connection, constraint, driver error)."""


class NotFoundError(RepositoryError):
    """No row with the requested key."""

    def __init__(self, entity_type: str, identifier: str):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(f"{entity_type} id={identifier} does not exist")


class DuplicateError(RepositoryError):
    """Write rejected by a unique index."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type}.{field}={value!r} is already taken")
