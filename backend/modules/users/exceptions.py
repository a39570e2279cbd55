"""
Users module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class UserNotFoundError(NotFoundError):
    """Raised when a user record doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class UserAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self):
        super().__init__("User already exists with this email", code="USER_EXISTS")


class MissingFieldsError(ValidationError):
    """Raised when required request fields are absent or blank."""

    def __init__(self, fields: list[str]):
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            code="MISSING_FIELDS",
            details={"missing_fields": fields},
        )


class InvalidFieldError(ValidationError):
    """Raised when a field value fails validation."""

    def __init__(self, field: str, message: str):
        super().__init__(message, code="INVALID_FIELD", details={"field": field})


class InvalidAddressError(ValidationError):
    """Raised when an address cannot be parsed into its structured form."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            "Invalid address format",
            code="INVALID_ADDRESS",
            details={"reason": reason},
        )


class IncorrectPasswordError(ValidationError):
    """Raised when the current password given to a password change is wrong."""

    def __init__(self):
        super().__init__("Current password is incorrect", code="INCORRECT_PASSWORD")


class PasswordTooShortError(ValidationError):
    """Raised when a new password is below the minimum length."""

    def __init__(self, min_length: int, field: str = "password"):
        super().__init__(
            f"Password must be at least {min_length} characters long",
            code="PASSWORD_TOO_SHORT",
            details={"field": field, "min_length": min_length},
        )


class AvatarUploadError(ExternalServiceError):
    """Raised when the avatar could not be stored. Details stay server-side."""

    def __init__(self):
        super().__init__(
            "Failed to upload avatar",
            service="image_store",
            code="AVATAR_UPLOAD_FAILED",
        )
