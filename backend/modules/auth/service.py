"""
Authentication service implementation.

Validates access tokens issued by this backend and turns their claims
into an AuthenticatedUser for the request.
"""

from typing import Optional

from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .tokens import TokenIssuer
from .exceptions import MissingTokenError


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Access tokens are stateless: validation checks the signature, expiry
    and token type only. A revoked session's access token stays valid
    until it expires.
    """

    def __init__(self, issuer: TokenIssuer):
        self._issuer = issuer

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """Validate an access token and return the authenticated user."""
        if not token:
            raise MissingTokenError()

        payload = self._issuer.decode_access(token)

        return AuthenticatedUser(
            id=payload.sub,
            email=payload.email or "",
            role=payload.role or "user",
        )

