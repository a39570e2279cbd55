"""
Users module.

Account lifecycle: registration, login/logout, profile and avatar updates,
password changes, wishlist, and the administrator listing.

Public API:
- IUserService: Interface for account operations
- UserService: Supabase-backed implementation
- AddressNormalizer: Repair of legacy string addresses
- Models: UserRecord, UserView, UserProfile, Address, ...
- Exceptions: UserNotFoundError, UserAlreadyExistsError, ...
"""

from .interfaces import IUserService
from .models import (
    Address,
    LegacyAddress,
    Avatar,
    UserRole,
    UserRecord,
    UserView,
    UserProfile,
    ProductSummary,
    WishlistItem,
    RegisterRequest,
    LoginRequest,
    ChangePasswordRequest,
    UpdateProfileRequest,
    AuthResult,
    WishlistToggleResult,
    UserListResponse,
)
from .address import AddressNormalizer, AddressNormalization, normalize_address, parse_address
from .exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    MissingFieldsError,
    InvalidFieldError,
    InvalidAddressError,
    IncorrectPasswordError,
    PasswordTooShortError,
    AvatarUploadError,
)

__all__ = [
    # Interface
    "IUserService",
    # Models
    "Address",
    "LegacyAddress",
    "Avatar",
    "UserRole",
    "UserRecord",
    "UserView",
    "UserProfile",
    "ProductSummary",
    "WishlistItem",
    "RegisterRequest",
    "LoginRequest",
    "ChangePasswordRequest",
    "UpdateProfileRequest",
    "AuthResult",
    "WishlistToggleResult",
    "UserListResponse",
    # Address repair
    "AddressNormalizer",
    "AddressNormalization",
    "normalize_address",
    "parse_address",
    # Exceptions
    "UserNotFoundError",
    "UserAlreadyExistsError",
    "MissingFieldsError",
    "InvalidFieldError",
    "InvalidAddressError",
    "IncorrectPasswordError",
    "PasswordTooShortError",
    "AvatarUploadError",
]
