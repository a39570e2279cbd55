"""
JWT access and refresh token issuing.

Tokens are stateless HS256 signatures over the identity claims, an expiry
and a token type. Refresh tokens may use their own secret; when none is
configured they share the access secret.
"""

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import jwt

from shared.config import Settings

from .models import AccessClaims, RefreshClaims, TokenPayload
from .exceptions import ExpiredTokenError, InvalidTokenError

ALGORITHM = "HS256"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


def parse_duration(value: Union[str, int, timedelta]) -> timedelta:
    """
    Parse an expiry such as "15m", "1d", "7d" or a number of seconds.

    Raises:
        ValueError: If the value is not a positive duration.
    """
    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, int):
        duration = timedelta(seconds=value)
    else:
        match = _DURATION_RE.match(value)
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        duration = timedelta(seconds=int(amount) * _UNIT_SECONDS[unit.lower()])

    if duration <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    return duration


class TokenIssuer:
    """
    Creates and verifies signed access and refresh tokens.

    Construction fails when no signing secret is configured, so a
    misconfigured server refuses to start instead of failing per request.
    """

    def __init__(
        self,
        secret: str,
        refresh_secret: Optional[str] = None,
        access_ttl: Union[str, int, timedelta] = "1d",
        refresh_ttl: Union[str, int, timedelta] = "7d",
    ):
        if not secret:
            raise RuntimeError(
                "Token signing secret missing. Set the JWT_SECRET environment variable."
            )
        self._secret = secret
        self._refresh_secret = refresh_secret or secret
        self._access_ttl = parse_duration(access_ttl)
        self._refresh_ttl = parse_duration(refresh_ttl)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            refresh_secret=settings.jwt_refresh_secret,
            access_ttl=settings.jwt_expires_in,
            refresh_ttl=settings.jwt_refresh_expires_in,
        )

    @property
    def access_ttl(self) -> timedelta:
        return self._access_ttl

    @property
    def refresh_ttl(self) -> timedelta:
        return self._refresh_ttl

    def issue_access(self, claims: AccessClaims) -> str:
        """Sign an access token carrying user id, email and role."""
        return self._encode(
            {"sub": claims.user_id, "email": claims.email, "role": claims.role},
            token_type="access",
            ttl=self._access_ttl,
            secret=self._secret,
        )

    def issue_refresh(self, claims: RefreshClaims) -> str:
        """Sign a refresh token carrying only the user id."""
        return self._encode(
            {"sub": claims.user_id},
            token_type="refresh",
            ttl=self._refresh_ttl,
            secret=self._refresh_secret,
        )

    def decode_access(self, token: str) -> TokenPayload:
        return self._decode(token, "access", self._secret)

    def decode_refresh(self, token: str) -> TokenPayload:
        return self._decode(token, "refresh", self._refresh_secret)

    def _encode(self, claims: dict, token_type: str, ttl: timedelta, secret: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "type": token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            # Two tokens issued within the same second must still differ
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def _decode(self, token: str, expected_type: str, secret: str) -> TokenPayload:
        if not token:
            raise InvalidTokenError()

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        if payload.get("type") != expected_type:
            raise InvalidTokenError(f"Invalid token type: expected {expected_type}")

        return TokenPayload(**payload)
