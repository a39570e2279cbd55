"""
Input sanitization and field validation for account operations.
"""

import re
from typing import Any, Mapping, Optional, Sequence

import pydantic
from pydantic import EmailStr, TypeAdapter

from .exceptions import InvalidFieldError, MissingFieldsError, PasswordTooShortError

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 50
# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72

_MARKUP_RE = re.compile(r"[<>]")
_PHONE_RE = re.compile(r"^\+?[\d\s().-]+$")
_email_adapter = TypeAdapter(EmailStr)


def sanitize_input(value: str) -> str:
    """Strip surrounding whitespace and markup brackets."""
    return _MARKUP_RE.sub("", value).strip()


def require_fields(data: Mapping[str, Any], fields: Sequence[str]) -> None:
    """
    Check that every named field is present and not blank.

    Raises:
        MissingFieldsError: Naming every missing field, in the given order.
    """
    missing = [
        name for name in fields
        if data.get(name) is None or (isinstance(data[name], str) and not data[name].strip())
    ]
    if missing:
        raise MissingFieldsError(missing)


def validate_email(value: str) -> str:
    """Return the lowercased email, or raise if it is not a valid address."""
    email = value.lower()
    try:
        _email_adapter.validate_python(email)
    except pydantic.ValidationError:
        raise InvalidFieldError("email", "Please enter a valid email")
    return email


def validate_username(value: str) -> str:
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        raise InvalidFieldError(
            "username",
            f"username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters",
        )
    return value


def validate_phone(value: Optional[str]) -> Optional[str]:
    """Accept empty values and plausible phone numbers (7-15 digits)."""
    if not value:
        return None
    digits = sum(ch.isdigit() for ch in value)
    if not _PHONE_RE.match(value) or not 7 <= digits <= 15:
        raise InvalidFieldError("phone", "Please enter a valid phone number")
    return value


def validate_password(value: str, min_length: int, field: str = "password") -> str:
    if len(value) < min_length:
        raise PasswordTooShortError(min_length, field=field)
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise InvalidFieldError(field, f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes")
    return value
