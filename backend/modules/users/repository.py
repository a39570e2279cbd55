"""
User and product repositories for database access.

Encapsulates all Supabase queries and data mapping for:
- users
- products (read-only, for wishlist expansion)
"""

import re
import uuid
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Address, Avatar, LegacyAddress, StoredAddress, UserRecord

# Listing never reads password hashes or refresh tokens
LIST_COLUMNS = (
    "id,username,email,role,phone,address,avatar,wishlist,"
    "is_active,last_login,created_at,updated_at"
)

PROFILE_PRODUCT_COLUMNS = ("name", "price", "image")
WISHLIST_PRODUCT_COLUMNS = (
    "name", "price", "old_price", "image", "category", "stock", "is_available", "ratings",
)

# Characters with meaning in PostgREST's or=() filter grammar
_FILTER_META_RE = re.compile(r"[,()*\"\\]")


def escape_search_term(term: str) -> str:
    """Make a user-supplied search term safe for an ilike filter."""
    term = _FILTER_META_RE.sub("", term)
    return term.replace("%", r"\%").replace("_", r"\_")


def is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    All methods return UserRecord models mapped from database rows.
    Password hashing and validation are the service layer's job; this
    class stores whatever it is given.
    """

    table_name = "users"

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        result = self._table().select("*").eq("id", user_id).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = self._table().select("*").eq("email", email.lower()).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def email_exists(self, email: str) -> bool:
        result = self._table().select("id").eq("email", email.lower()).limit(1).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> UserRecord:
        """
        Insert a user row.

        Args:
            data: Column values; must include username, email and password_hash.

        Returns:
            Created UserRecord with generated ID and timestamps.
        """
        result = self._table().insert(data).execute()
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        """
        Update columns on one user.

        Returns:
            The updated record, or None if no such user exists.
        """
        result = self._table().update(fields).eq("id", user_id).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def set_refresh_token(self, user_id: str, token: Optional[str]) -> None:
        self._table().update({"refresh_token": token}).eq("id", user_id).execute()

    # -------------------------------------------------------------------------
    # Admin listing
    # -------------------------------------------------------------------------

    def list_users(
        self,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> tuple[list[UserRecord], int]:
        """
        List users, newest first, without refresh tokens.

        Args:
            offset: Rows to skip.
            limit: Maximum rows to return.
            search: Case-insensitive substring of username or email.
            role: Exact role to filter on.

        Returns:
            The page of users and the total number of matches.
        """
        query = self._table().select(LIST_COLUMNS, count="exact")

        if search:
            term = escape_search_term(search)
            query = query.or_(f"username.ilike.%{term}%,email.ilike.%{term}%")
        if role:
            query = query.eq("role", role)

        result = (
            query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        users = [self._map_to_user(row) for row in result.data or []]
        return users, result.count or 0

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_user(self, row: dict[str, Any]) -> UserRecord:
        wishlist = [str(pid) for pid in row.get("wishlist") or []]
        return UserRecord(
            id=str(row["id"]),
            username=row["username"],
            email=row["email"],
            password_hash=row.get("password_hash") or "",
            role=row.get("role") or "user",
            phone=row.get("phone"),
            address=self._map_address(row.get("address")),
            avatar=Avatar(**row["avatar"]) if row.get("avatar") else None,
            wishlist=list(dict.fromkeys(wishlist)),
            refresh_token=row.get("refresh_token"),
            is_active=row.get("is_active", True),
            last_login=row.get("last_login") or None,
            created_at=row.get("created_at") or None,
            updated_at=row.get("updated_at") or None,
        )

    @staticmethod
    def _map_address(value: Any) -> Optional[StoredAddress]:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            return LegacyAddress(raw=value)
        return Address.model_validate(value)


class ProductRepository(BaseRepository[dict]):
    """Read-only access to products referenced by wishlists."""

    table_name = "products"

    def get_many(self, product_ids: list[str], columns: tuple[str, ...]) -> list[dict[str, Any]]:
        """
        Fetch products by ID, in the order of `product_ids`.

        IDs with no matching product are skipped. products.id is a uuid
        column, so IDs that are not UUIDs cannot match and never reach the
        query.
        """
        lookup = [pid for pid in dict.fromkeys(product_ids) if is_uuid(pid)]
        if not lookup:
            return []

        select = ",".join(("id",) + columns)
        result = self._table().select(select).in_("id", lookup).execute()
        by_id = {str(row["id"]): row for row in result.data or []}
        return [by_id[pid] for pid in product_ids if pid in by_id]
