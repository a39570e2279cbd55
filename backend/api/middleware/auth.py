"""
Request authentication dependencies.

Reads the access token from the `token` cookie (set at login) or from an
`Authorization: Bearer` header, and applies session cookie instructions
to responses.
"""

from typing import Optional
from fastapi import Cookie, Depends, Response
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InsufficientPermissionsError, MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.auth.models import SessionCookie
from modules.auth.sessions import ACCESS_COOKIE
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    credentials: Optional[HTTPAuthorizationCredentials],
    cookie_token: Optional[str],
) -> Optional[str]:
    """Prefer the session cookie, then an explicit bearer header."""
    if cookie_token:
        return cookie_token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Cookie(default=None, alias=ACCESS_COOKIE),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = extract_token(credentials, cookie_token)
    if token is None:
        raise MissingTokenError()

    return await auth.validate_token(token)


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that requires an authenticated administrator."""
    if not user.is_admin:
        raise InsufficientPermissionsError(required_role="admin", user_role=user.role)
    return user


def apply_cookies(response: Response, cookies: list[SessionCookie]) -> None:
    """Set or delete cookies on the response as instructed by the session manager."""
    for cookie in cookies:
        if cookie.is_deletion:
            response.delete_cookie(
                cookie.name,
                path=cookie.path,
                secure=cookie.secure,
                httponly=cookie.httponly,
                samesite=cookie.samesite,
            )
        else:
            response.set_cookie(
                cookie.name,
                cookie.value,
                max_age=cookie.max_age,
                path=cookie.path,
                secure=cookie.secure,
                httponly=cookie.httponly,
                samesite=cookie.samesite,
            )

