"""
Users module interface.

Routes depend on IUserService, not the concrete implementation, so they
can be tested against a service wired with in-memory collaborators.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.auth.models import SessionCookie

from .models import (
    AuthResult,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserListResponse,
    UserProfile,
    UserView,
    WishlistItem,
    WishlistToggleResult,
)


@runtime_checkable
class IUserService(Protocol):
    """Account lifecycle operations."""

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create an account and sign it in.

        Raises:
            MissingFieldsError: If username, email or password is missing
            InvalidFieldError / PasswordTooShortError: On invalid input
            UserAlreadyExistsError: If the email is taken
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResult:
        """
        Verify credentials and start a new session.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountDeactivatedError: If the account is deactivated
        """
        ...

    async def refresh_session(self, refresh_token: Optional[str]) -> AuthResult:
        """Exchange the current refresh token for a new session."""
        ...

    async def logout(self, user_id: str) -> list[SessionCookie]:
        """Revoke the user's refresh token; returns cookies to clear."""
        ...

    async def get_profile(self, user_id: str) -> UserProfile:
        """Get a user with the wishlist expanded to product summaries."""
        ...

    async def get_my_info(self, user_id: str) -> UserView:
        """Get the signed-in user, repairing a legacy address on the way."""
        ...

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
        avatar: Optional[bytes] = None,
    ) -> UserProfile:
        """
        Update username, phone, address and/or avatar.

        Raises:
            InvalidAddressError: If a string address cannot be parsed
            AvatarUploadError: If the new avatar cannot be stored
            UserNotFoundError: If the user doesn't exist
        """
        ...

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        """
        Replace the password after verifying the current one.

        Raises:
            IncorrectPasswordError: If the current password is wrong
            PasswordTooShortError: If the new password is too short
        """
        ...

    async def toggle_wishlist(self, user_id: str, product_id: str) -> WishlistToggleResult:
        """Add the product if absent, remove it if present."""
        ...

    async def get_wishlist(self, user_id: str) -> list[WishlistItem]:
        """Get the wishlist expanded to full product details."""
        ...

    async def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> UserListResponse:
        """Paginated, filtered user listing for administrators."""
        ...
