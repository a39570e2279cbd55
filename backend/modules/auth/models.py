"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class AccessClaims(BaseModel):
    """Identity claims embedded in an access token."""

    user_id: str
    email: str
    role: str = "user"


class RefreshClaims(BaseModel):
    """Identity claims embedded in a refresh token."""

    user_id: str


class TokenPayload(BaseModel):
    """
    Decoded JWT payload issued by this service.

    Refresh tokens carry only `sub`; access tokens add email and role.
    """

    sub: str = Field(..., description="Subject (user ID)")
    type: Literal["access", "refresh"] = Field(..., description="Token type")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    jti: Optional[str] = Field(None, description="Unique token ID")
    email: Optional[str] = Field(None, description="User's email")
    role: Optional[str] = Field(None, description="User role")


class SessionCookie(BaseModel):
    """
    Instruction for the transport layer to set or clear one cookie.

    A cookie with `value=None` is a deletion.
    """

    name: str
    value: Optional[str] = None
    max_age: Optional[int] = None
    httponly: bool = True
    secure: bool = False
    samesite: Literal["strict", "lax", "none"] = "strict"
    path: str = "/"

    model_config = {"frozen": True}

    @property
    def is_deletion(self) -> bool:
        return self.value is None


class Session(BaseModel):
    """A freshly established session: both tokens plus cookie instructions."""

    access_token: str
    refresh_token: str
    cookies: list[SessionCookie] = Field(default_factory=list)
