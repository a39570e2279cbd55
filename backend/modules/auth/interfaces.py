"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The session store is implemented by the users module's
repository; the auth module never imports it directly.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for request authentication.

    This protocol defines the contract that the auth module exposes
    to the API layer.
    """

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate an access token and return the authenticated user.

        Args:
            token: Access token from the `token` cookie or bearer header

        Returns:
            AuthenticatedUser with user ID, email and role

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...


class SessionSubject(Protocol):
    """The parts of a user record a session is built from."""

    id: str
    email: str
    role: str
    is_active: bool
    refresh_token: Optional[str]


@runtime_checkable
class IRefreshTokenStore(Protocol):
    """Persistence for the single live refresh token of each user."""

    def get_by_id(self, user_id: str) -> Optional[SessionSubject]:
        """Load a user record, or None if it does not exist."""
        ...

    def set_refresh_token(self, user_id: str, token: Optional[str]) -> None:
        """Overwrite the stored refresh token; None clears it."""
        ...
