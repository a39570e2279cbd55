"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
a token issuer with a fixed secret, a fast password hasher, and in-memory
stand-ins for the Supabase-backed repositories and the image store.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from api.dependencies import reset_container
from modules.auth.models import AccessClaims
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AuthService
from modules.auth.sessions import SessionManager
from modules.auth.tokens import TokenIssuer
from modules.images.exceptions import ImageDeleteError, ImageUploadError
from modules.images.interfaces import IImageStore
from modules.images.models import StoredImage
from modules.users.repository import ProductRepository, UserRepository
from modules.users.service import UserService
from shared.config import get_settings
from shared.models import AuthenticatedUser


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class InMemoryUserRepository(UserRepository):
    """UserRepository that keeps rows in a dict instead of Supabase."""

    def __init__(self):
        super().__init__(MagicMock())
        self.rows: dict[str, dict[str, Any]] = {}

    def insert_row(self, **fields) -> dict[str, Any]:
        """Store a raw row (bypassing validation), e.g. one with a legacy address."""
        row = {
            "id": str(uuid.uuid4()),
            "username": "someone",
            "email": f"{uuid.uuid4().hex[:8]}@example.com",
            "password_hash": "",
            "role": "user",
            "wishlist": [],
            "is_active": True,
            "refresh_token": None,
            "created_at": (BASE_TIME + timedelta(minutes=len(self.rows))).isoformat(),
        }
        row.update(fields)
        self.rows[row["id"]] = row
        return row

    def get_by_id(self, user_id):
        row = self.rows.get(user_id)
        return self._map_to_user(row) if row else None

    def get_by_email(self, email):
        for row in self.rows.values():
            if row["email"] == email.lower():
                return self._map_to_user(row)
        return None

    def email_exists(self, email):
        return self.get_by_email(email) is not None

    def create(self, data):
        return self._map_to_user(self.insert_row(**data))

    def update(self, user_id, fields):
        row = self.rows.get(user_id)
        if row is None:
            return None
        row.update(fields)
        return self._map_to_user(row)

    def set_refresh_token(self, user_id, token):
        if user_id in self.rows:
            self.rows[user_id]["refresh_token"] = token

    def list_users(self, offset, limit, search=None, role=None):
        rows = list(self.rows.values())
        if search:
            term = search.lower()
            rows = [r for r in rows if term in r["username"].lower() or term in r["email"].lower()]
        if role:
            rows = [r for r in rows if r["role"] == role]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        page = [self._map_to_user(r) for r in rows[offset:offset + limit]]
        # Listing never carries secrets
        page = [u.model_copy(update={"password_hash": "", "refresh_token": None}) for u in page]
        return page, len(rows)


class FakeProductRepository(ProductRepository):
    """ProductRepository over a dict of product rows."""

    def __init__(self, products: Optional[dict[str, dict[str, Any]]] = None):
        super().__init__(MagicMock())
        self.products = products or {}

    def get_many(self, product_ids, columns):
        return [
            {"id": pid, **{c: self.products[pid].get(c) for c in columns if c in self.products[pid]}}
            for pid in product_ids
            if pid in self.products
        ]


class FakeImageStore(IImageStore):
    """Image store that records calls and can be told to fail."""

    def __init__(self):
        self.stored: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_store = False
        self.fail_delete = False

    async def store(self, data, folder="garden", name=None):
        path = f"{folder}/{name or uuid.uuid4().hex}"
        if self.fail_store:
            raise ImageUploadError(path, reason="boom")
        self.stored[path] = data
        return StoredImage(store_id=path, url=f"https://img.test/{path}")

    async def delete(self, store_id):
        if self.fail_delete:
            raise ImageDeleteError(store_id, reason="boom")
        self.deleted.append(store_id)
        self.stored.pop(store_id, None)
        return True


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SECRET, access_ttl="15m", refresh_ttl="7d")


@pytest.fixture
def hasher() -> PasswordHasher:
    """Low-cost bcrypt so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def product_repo() -> FakeProductRepository:
    return FakeProductRepository({
        "p1": {"name": "Fern", "price": 12.5, "image": "fern.webp", "old_price": 15.0,
               "category": "indoor", "stock": 3, "is_available": True, "ratings": 4.5},
        "p2": {"name": "Cactus", "price": 8.0, "image": "cactus.webp", "old_price": None,
               "category": "succulent", "stock": 0, "is_available": False, "ratings": None},
    })


@pytest.fixture
def image_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
def sessions(issuer, user_repo) -> SessionManager:
    return SessionManager(issuer, user_repo)


@pytest.fixture
def user_service(user_repo, product_repo, hasher, sessions, image_store) -> UserService:
    return UserService(
        users=user_repo,
        products=product_repo,
        hasher=hasher,
        sessions=sessions,
        images=image_store,
        avatar_folder="avatars",
    )


@pytest.fixture
def auth_service(issuer) -> AuthService:
    return AuthService(issuer=issuer)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_user(test_user_id, test_user_email) -> AuthenticatedUser:
    return AuthenticatedUser(id=test_user_id, email=test_user_email, role="user")


@pytest.fixture
def auth_token(issuer, test_user_id, test_user_email) -> str:
    """Create a valid access token for testing."""
    return issuer.issue_access(AccessClaims(user_id=test_user_id, email=test_user_email))


@pytest.fixture
def admin_token(issuer) -> str:
    return issuer.issue_access(AccessClaims(user_id="admin-1", email="admin@example.com", role="admin"))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
