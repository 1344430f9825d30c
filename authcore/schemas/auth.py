"""Schemas for accounts, sessions and authentication endpoints.

JSON field names are camelCase (passwordHash, tempExpiry, accountId, ...);
Python code uses the snake_case attribute names.
"""

import re
from datetime import UTC, datetime

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel

from authcore.config import settings
from authcore.constants import MAX_PASSWORD_BYTES
from authcore.exceptions import ValidationError

_CAMEL_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def check_password_strength(password: str) -> None:
    """Default password policy: minimum length plus lower, upper and digit."""
    errors = []
    if len(password) < settings.min_password_length:
        errors.append(f"at least {settings.min_password_length} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(f"at most {MAX_PASSWORD_BYTES} bytes")
    if not re.search(r"[a-z]", password):
        errors.append("lowercase letter")
    if not re.search(r"[A-Z]", password):
        errors.append("uppercase letter")
    if not re.search(r"\d", password):
        errors.append("number")

    if errors:
        raise ValidationError(f"New password is not strong enough, needs: {', '.join(errors)}")


class AccountView(BaseModel):
    """Account state as passed between the account manager and its callers."""

    id: str = ""
    name: str = ""
    password_hash: str = ""
    temp_password: str = ""
    temp_expiry: datetime | None = None

    model_config = _CAMEL_CONFIG

    @field_validator("temp_expiry")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class SessionView(BaseModel):
    """Session state. An empty id marks a view that may not be written back."""

    id: str = ""
    account_id: str
    start_time: datetime
    last_time: datetime
    ended: bool = False

    model_config = _CAMEL_CONFIG

    @field_validator("start_time", "last_time")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return _as_utc(v)


class AccountResponse(BaseModel):
    """Account as returned over HTTP: the permanent digest is never included."""

    id: str
    name: str
    temp_password: str = ""
    temp_expiry: datetime | None = None

    model_config = _CAMEL_CONFIG


class NameRequest(BaseModel):
    """Schema for register and reset."""

    name: str = ""


class LoginRequest(BaseModel):
    """Schema for login. id takes precedence over name when well-formed."""

    id: str = ""
    name: str = ""
    password: str = ""


class ActivateRequest(BaseModel):
    """Schema for activation with a temporary password."""

    id: str = ""
    name: str = ""
    temp_password: str = ""
    password: str = ""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class LogoutRequest(BaseModel):
    """Schema for logout."""

    id: str = ""
