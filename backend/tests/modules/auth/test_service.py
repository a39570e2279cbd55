import pytest
import jwt
from datetime import datetime, timedelta, timezone

from modules.auth.models import AccessClaims, RefreshClaims
from modules.auth.service import AuthService
from modules.auth.exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


class TestAuthService:
    @pytest.fixture
    def service(self, issuer):
        return AuthService(issuer=issuer)

    @pytest.fixture
    def valid_token(self, issuer):
        return issuer.issue_access(
            AccessClaims(user_id="user-123", email="test@example.com", role="admin")
        )

    @pytest.fixture
    def expired_token(self, jwt_secret):
        """Create an expired access token."""
        payload = {
            "sub": "user-123",
            "email": "test@example.com",
            "role": "user",
            "type": "access",
            "exp": datetime.now(timezone.utc) - timedelta(hours=1),
            "iat": datetime.now(timezone.utc) - timedelta(hours=2),
        }
        return jwt.encode(payload, jwt_secret, algorithm="HS256")

    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service, valid_token):
        """Should validate a valid token and return user."""
        user = await service.validate_token(valid_token)
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.role == "admin"

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service, expired_token):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(expired_token)

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_refresh_token_rejected(self, service, issuer):
        """A refresh token cannot be used to authorize requests."""
        token = issuer.issue_refresh(RefreshClaims(user_id="user-123"))
        with pytest.raises(InvalidTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_validate_none_token(self, service):
        """Should raise MissingTokenError for None token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token(None)

