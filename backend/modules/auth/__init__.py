"""
Authentication module.

Handles password hashing, JWT issuing/validation and the session lifecycle.

Public API:
- IAuthService: Interface for request authentication
- PasswordHasher: bcrypt hashing and verification
- TokenIssuer: Access/refresh token signing
- SessionManager: Session establish/rotate/terminate with cookie instructions
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IRefreshTokenStore
from .models import AccessClaims, RefreshClaims, TokenPayload, Session, SessionCookie
from .passwords import PasswordHasher
from .tokens import TokenIssuer, parse_duration
from .sessions import SessionManager, ACCESS_COOKIE, REFRESH_COOKIE
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    AccountDeactivatedError,
    InsufficientPermissionsError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IRefreshTokenStore",
    # Models
    "AccessClaims",
    "RefreshClaims",
    "TokenPayload",
    "Session",
    "SessionCookie",
    # Components
    "PasswordHasher",
    "TokenIssuer",
    "parse_duration",
    "SessionManager",
    "ACCESS_COOKIE",
    "REFRESH_COOKIE",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "AccountDeactivatedError",
    "InsufficientPermissionsError",
]
