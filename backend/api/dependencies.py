"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from Settings.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService
    from modules.auth.passwords import PasswordHasher
    from modules.auth.sessions import SessionManager
    from modules.auth.tokens import TokenIssuer
    from modules.images.interfaces import IImageStore
    from modules.users.interfaces import IUserService
    from modules.users.repository import ProductRepository, UserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._db: "Client | None" = None
        self._token_issuer: "TokenIssuer | None" = None
        self._hasher: "PasswordHasher | None" = None
        self._user_repository: "UserRepository | None" = None
        self._product_repository: "ProductRepository | None" = None
        self._sessions: "SessionManager | None" = None
        self._images: "IImageStore | None" = None
        self._auth_service: "IAuthService | None" = None
        self._user_service: "IUserService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def db(self) -> "Client":
        """Get the Supabase service-role client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    @property
    def token_issuer(self) -> "TokenIssuer":
        """Get the token issuer. Raises RuntimeError if JWT_SECRET is unset."""
        if self._token_issuer is None:
            from modules.auth.tokens import TokenIssuer
            self._token_issuer = TokenIssuer.from_settings(self.settings)
        return self._token_issuer

    @property
    def hasher(self) -> "PasswordHasher":
        if self._hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def user_repository(self) -> "UserRepository":
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            self._user_repository = UserRepository(self.db)
        return self._user_repository

    @property
    def product_repository(self) -> "ProductRepository":
        if self._product_repository is None:
            from modules.users.repository import ProductRepository
            self._product_repository = ProductRepository(self.db)
        return self._product_repository

    @property
    def sessions(self) -> "SessionManager":
        if self._sessions is None:
            from modules.auth.sessions import SessionManager
            self._sessions = SessionManager.from_settings(
                self.settings,
                store=self.user_repository,
                issuer=self.token_issuer,
            )
        return self._sessions

    @property
    def images(self) -> "IImageStore":
        if self._images is None:
            from modules.images.service import ImageStore
            self._images = ImageStore.from_settings(self.db, self.settings)
        return self._images

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(issuer=self.token_issuer)
        return self._auth_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                users=self.user_repository,
                products=self.product_repository,
                hasher=self.hasher,
                sessions=self.sessions,
                images=self.images,
                password_min_length=self.settings.password_min_length,
                avatar_folder=self.settings.avatar_folder,
            )
        return self._user_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self.__init__(self._settings)


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users
