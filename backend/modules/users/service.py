"""
Account lifecycle service.

Registration, login and logout, profile reads and updates, password
changes, wishlist management and the administrator user listing. Hashing,
sessions and avatar storage are delegated to injected collaborators.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from postgrest.exceptions import APIError

from modules.auth.exceptions import AccountDeactivatedError, InvalidCredentialsError
from modules.auth.models import SessionCookie
from modules.auth.passwords import PasswordHasher
from modules.auth.sessions import SessionManager
from modules.images.interfaces import IImageStore
from shared.exceptions import ExternalServiceError

from .address import AddressNormalizer, coerce_address
from .exceptions import (
    AvatarUploadError,
    IncorrectPasswordError,
    InvalidFieldError,
    MissingFieldsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .interfaces import IUserService
from .models import (
    AuthResult,
    Avatar,
    ChangePasswordRequest,
    LoginRequest,
    ProductSummary,
    RegisterRequest,
    UpdateProfileRequest,
    UserListResponse,
    UserProfile,
    UserRecord,
    UserRole,
    UserView,
    WishlistItem,
    WishlistToggleResult,
)
from .repository import (
    PROFILE_PRODUCT_COLUMNS,
    WISHLIST_PRODUCT_COLUMNS,
    ProductRepository,
    UserRepository,
)
from .validation import (
    require_fields,
    sanitize_input,
    validate_email,
    validate_password,
    validate_phone,
    validate_username,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
UNIQUE_VIOLATION = "23505"


class UserService(IUserService):
    """
    Account lifecycle service backed by Supabase.

    Concurrent updates to the same user are last-write-wins; there is no
    locking around read-modify-write operations such as the wishlist toggle.
    """

    def __init__(
        self,
        users: UserRepository,
        products: ProductRepository,
        hasher: PasswordHasher,
        sessions: SessionManager,
        images: IImageStore,
        normalizer: Optional[AddressNormalizer] = None,
        password_min_length: int = 8,
        avatar_folder: str = "garden/avatars",
    ):
        self._users = users
        self._products = products
        self._hasher = hasher
        self._sessions = sessions
        self._images = images
        self._normalizer = normalizer or AddressNormalizer(users)
        self._password_min_length = password_min_length
        self._avatar_folder = avatar_folder
        self._dummy_hash: Optional[str] = None

    # -------------------------------------------------------------------------
    # Registration and sessions
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResult:
        require_fields(request.model_dump(), ["username", "email", "password"])

        username = validate_username(sanitize_input(request.username))
        email = validate_email(sanitize_input(request.email))
        validate_password(request.password, self._password_min_length)
        phone = validate_phone(sanitize_input(request.phone)) if request.phone else None

        if self._users.email_exists(email):
            raise UserAlreadyExistsError()

        data = {
            "username": username,
            "email": email,
            "password_hash": await self._hasher.hash_async(request.password),
            "role": UserRole.USER.value,
            "wishlist": [],
            "is_active": True,
        }
        if phone:
            data["phone"] = phone

        try:
            user = self._users.create(data)
        except APIError as e:
            # Lost a race with a concurrent registration of the same email
            if e.code == UNIQUE_VIOLATION:
                raise UserAlreadyExistsError()
            raise

        logger.info("Registered user %s", user.id)
        session = self._sessions.establish_session(user)
        return AuthResult(user=UserView.from_record(user), session=session)

    async def login(self, request: LoginRequest) -> AuthResult:
        require_fields(request.model_dump(), ["email", "password"])

        user = self._users.get_by_email(sanitize_input(request.email).lower())
        if user is None:
            # Spend the same hashing time as a real check
            await self._hasher.verify_async(request.password, await self._get_dummy_hash())
            raise InvalidCredentialsError()

        if not await self._hasher.verify_async(request.password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDeactivatedError()

        now = datetime.now(timezone.utc)
        user = self._users.update(user.id, {"last_login": now.isoformat()}) or user

        session = self._sessions.establish_session(user)
        logger.info("User %s logged in", user.id)
        return AuthResult(user=UserView.from_record(user), session=session)

    async def refresh_session(self, refresh_token: Optional[str]) -> AuthResult:
        user, session = self._sessions.rotate_session(refresh_token)
        return AuthResult(user=UserView.from_record(user), session=session)

    async def logout(self, user_id: str) -> list[SessionCookie]:
        return self._sessions.terminate_session(user_id)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def get_profile(self, user_id: str) -> UserProfile:
        return self._to_profile(self._get_user(user_id))

    async def get_my_info(self, user_id: str) -> UserView:
        user = self._normalizer.normalize(self._get_user(user_id))
        return UserView.from_record(user)

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
        avatar: Optional[bytes] = None,
    ) -> UserProfile:
        updates: dict = {}

        if request.username:
            updates["username"] = validate_username(sanitize_input(request.username))
        if request.phone:
            updates["phone"] = validate_phone(sanitize_input(request.phone))
        if request.address:
            updates["address"] = coerce_address(request.address).to_store()

        if avatar:
            current = self._get_user(user_id)
            updates["avatar"] = (await self._replace_avatar(current, avatar)).model_dump()

        if updates:
            user = self._users.update(user_id, updates)
            if user is None:
                raise UserNotFoundError(user_id)
        else:
            user = self._get_user(user_id)

        user = self._normalizer.normalize(user)
        logger.info("Updated profile for user %s: %s", user_id, sorted(updates))
        return self._to_profile(user)

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        require_fields(request.model_dump(by_alias=True), ["currentPassword", "newPassword"])

        user = self._get_user(user_id)
        if not await self._hasher.verify_async(request.current_password, user.password_hash):
            raise IncorrectPasswordError()

        validate_password(request.new_password, self._password_min_length, field="newPassword")

        password_hash = await self._hasher.hash_async(request.new_password)
        if self._users.update(user_id, {"password_hash": password_hash}) is None:
            raise UserNotFoundError(user_id)
        logger.info("Password changed for user %s", user_id)

    # -------------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------------

    async def toggle_wishlist(self, user_id: str, product_id: str) -> WishlistToggleResult:
        product_id = (product_id or "").strip()
        if not product_id:
            raise MissingFieldsError(["productId"])

        user = self._get_user(user_id)
        if product_id in user.wishlist:
            action = "removed"
            wishlist = [pid for pid in user.wishlist if pid != product_id]
        else:
            action = "added"
            wishlist = [*user.wishlist, product_id]

        updated = self._users.update(user_id, {"wishlist": wishlist})
        if updated is None:
            raise UserNotFoundError(user_id)

        return WishlistToggleResult(action=action, product_id=product_id, wishlist=updated.wishlist)

    async def get_wishlist(self, user_id: str) -> list[WishlistItem]:
        user = self._get_user(user_id)
        rows = self._products.get_many(user.wishlist, WISHLIST_PRODUCT_COLUMNS)
        return [WishlistItem(**row) for row in rows]

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    async def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        role: Optional[str] = None,
    ) -> UserListResponse:
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        search = search.strip() if search else None

        if role and role not in {r.value for r in UserRole}:
            raise InvalidFieldError("role", f"Unknown role: {role}")

        users, total = self._users.list_users(
            offset=(page - 1) * limit,
            limit=limit,
            search=search or None,
            role=role or None,
        )
        return UserListResponse(
            items=[UserView.from_record(user) for user in users],
            page=page,
            limit=limit,
            total=total,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_user(self, user_id: str) -> UserRecord:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _to_profile(self, user: UserRecord) -> UserProfile:
        rows = self._products.get_many(user.wishlist, PROFILE_PRODUCT_COLUMNS)
        view = UserView.from_record(user)
        return UserProfile(
            **view.model_dump(exclude={"wishlist"}),
            wishlist=[ProductSummary(**row) for row in rows],
        )

    async def _replace_avatar(self, user: UserRecord, data: bytes) -> Avatar:
        """Delete the old avatar (best-effort), then upload the new one."""
        if user.avatar:
            try:
                await self._images.delete(user.avatar.store_id)
            except ExternalServiceError as e:
                logger.warning(
                    "Could not delete old avatar %s for user %s: %s",
                    user.avatar.store_id, user.id, e.details,
                )

        name = f"avatar_{user.id}_{int(time.time() * 1000)}"
        try:
            stored = await self._images.store(data, folder=self._avatar_folder, name=name)
        except ExternalServiceError as e:
            logger.error("Avatar upload failed for user %s: %s", user.id, e.details)
            raise AvatarUploadError() from e

        return Avatar(store_id=stored.store_id, url=stored.url)

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self._hasher.hash_async("invalid-password-placeholder")
        return self._dummy_hash
