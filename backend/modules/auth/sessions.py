"""
Session lifecycle: issuing, rotating and revoking token pairs.

A user has at most one live refresh token, stored on the user record.
Issuing a new session overwrites it, which implicitly revokes the previous
one. Access tokens are never stored and stay valid until they expire.
"""

import hmac
import logging
from datetime import timedelta
from typing import Optional

from shared.config import Settings

from .exceptions import InvalidTokenError
from .interfaces import IRefreshTokenStore, SessionSubject
from .models import AccessClaims, RefreshClaims, Session, SessionCookie
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "token"
REFRESH_COOKIE = "refreshToken"
COOKIE_MAX_AGE = timedelta(days=7)


class SessionManager:
    """Issues token pairs, persists the refresh token and describes cookies."""

    def __init__(
        self,
        issuer: TokenIssuer,
        store: IRefreshTokenStore,
        secure_cookies: bool = False,
        cookie_max_age: timedelta = COOKIE_MAX_AGE,
    ):
        self._issuer = issuer
        self._store = store
        self._secure = secure_cookies
        self._max_age = int(cookie_max_age.total_seconds())

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: IRefreshTokenStore,
        issuer: Optional[TokenIssuer] = None,
    ) -> "SessionManager":
        return cls(
            issuer=issuer or TokenIssuer.from_settings(settings),
            store=store,
            secure_cookies=settings.is_production,
        )

    def establish_session(self, user: SessionSubject) -> Session:
        """
        Issue a fresh access/refresh pair for a user.

        The refresh token replaces whatever was stored before.
        """
        access_token = self._issuer.issue_access(
            AccessClaims(user_id=user.id, email=user.email, role=user.role)
        )
        refresh_token = self._issuer.issue_refresh(RefreshClaims(user_id=user.id))

        self._store.set_refresh_token(user.id, refresh_token)
        logger.info("Session established for user %s", user.id)

        return Session(
            access_token=access_token,
            refresh_token=refresh_token,
            cookies=[
                self._cookie(ACCESS_COOKIE, access_token),
                self._cookie(REFRESH_COOKIE, refresh_token),
            ],
        )

    def terminate_session(self, user_id: str) -> list[SessionCookie]:
        """Revoke the stored refresh token and clear both cookies."""
        self._store.set_refresh_token(user_id, None)
        logger.info("Session terminated for user %s", user_id)
        return [self._cookie(ACCESS_COOKIE, None), self._cookie(REFRESH_COOKIE, None)]

    def rotate_session(self, refresh_token: Optional[str]) -> tuple[SessionSubject, Session]:
        """
        Exchange a refresh token for a new session.

        The presented token must verify and must still be the one stored on
        the user record, so a token superseded by a later login or revoked
        by logout cannot be replayed.

        Raises:
            InvalidTokenError: If the token is unknown, superseded or revoked.
            ExpiredTokenError: If the token has expired.
        """
        payload = self._issuer.decode_refresh(refresh_token or "")

        user = self._store.get_by_id(payload.sub)
        if user is None or not user.is_active:
            raise InvalidTokenError("Invalid refresh token")
        stored = user.refresh_token or ""
        if not stored or not hmac.compare_digest(stored.encode(), refresh_token.encode()):
            logger.warning("Rejected superseded refresh token for user %s", payload.sub)
            raise InvalidTokenError("Invalid refresh token")

        return user, self.establish_session(user)

    def _cookie(self, name: str, value: Optional[str]) -> SessionCookie:
        return SessionCookie(
            name=name,
            value=value,
            max_age=self._max_age if value is not None else None,
            httponly=True,
            secure=self._secure,
            samesite="strict",
        )
