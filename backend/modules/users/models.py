"""
Users module data models.

UserRecord is the full stored row, secrets included, and never leaves the
service layer. UserView and UserProfile are the external representations.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from modules.auth.models import Session


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


DEFAULT_COUNTRY = "Australia"


class Address(BaseModel):
    """Structured postal address."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, alias="zipCode")
    country: str = DEFAULT_COUNTRY

    def to_store(self) -> dict[str, Any]:
        """Dictionary in the stored (camelCase) shape."""
        return self.model_dump(by_alias=True)


class LegacyAddress(BaseModel):
    """
    An address persisted as a serialized string by older releases.

    Only ever produced when reading existing rows; new writes are always
    structured.
    """

    raw: str

    model_config = {"frozen": True}


StoredAddress = Union[Address, LegacyAddress]


class Avatar(BaseModel):
    """Avatar image kept in the image store."""

    store_id: str
    url: str


class UserRecord(BaseModel):
    """A full user row as held by the store."""

    model_config = ConfigDict(use_enum_values=True)

    id: str
    username: str
    email: str
    password_hash: str = Field(..., repr=False)
    role: UserRole = UserRole.USER
    phone: Optional[str] = None
    address: Optional[StoredAddress] = None
    avatar: Optional[Avatar] = None
    wishlist: list[str] = Field(default_factory=list)
    refresh_token: Optional[str] = Field(None, repr=False)
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_legacy_address(self) -> bool:
        return isinstance(self.address, LegacyAddress)


class UserView(BaseModel):
    """User as returned to clients: no password hash, no refresh token."""

    id: str
    username: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    # A legacy string address is still usable data and is passed through
    address: Optional[Union[Address, str]] = None
    avatar: Optional[Avatar] = None
    wishlist: list[str] = Field(default_factory=list)
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserView":
        data = record.model_dump(exclude={"password_hash", "refresh_token", "address"})
        address = record.address
        if isinstance(address, LegacyAddress):
            address = address.raw
        return cls(**data, address=address)


class ProductSummary(BaseModel):
    """Wishlist entry as shown on the profile page."""

    id: str
    name: str
    price: float
    image: Optional[str] = None


class WishlistItem(ProductSummary):
    """Wishlist entry as shown on the wishlist page."""

    old_price: Optional[float] = None
    category: Optional[str] = None
    stock: int = 0
    is_available: bool = True
    ratings: Optional[Any] = None


class UserProfile(UserView):
    """User view with the wishlist expanded to product summaries."""

    wishlist: list[ProductSummary] = Field(default_factory=list)  # type: ignore[assignment]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
# Fields are optional so that missing ones are reported together by the
# service ("Missing required fields: ...") instead of by request parsing.


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)


class UpdateProfileRequest(BaseModel):
    """Profile changes. `address` may be an object or its JSON string."""

    username: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Union[Address, str]] = None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class AuthResult(BaseModel):
    """Outcome of register/login/refresh: the user plus their new session."""

    user: UserView
    session: Session


class WishlistToggleResult(BaseModel):
    action: Literal["added", "removed"]
    product_id: str
    wishlist: list[str]

    @property
    def message(self) -> str:
        if self.action == "added":
            return "Product added to wishlist"
        return "Product removed from wishlist"


class UserListResponse(BaseModel):
    """Paginated user listing for administrators."""

    items: list[UserView]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
