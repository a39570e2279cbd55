"""
Centralized configuration for the Garden accounts backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., JWT_*, SUPABASE_*, AVATAR_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Garden Accounts API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""
    supabase_timeout: float = 10.0

    # Tokens
    jwt_secret: str = ""
    jwt_expires_in: str = "1d"
    jwt_refresh_secret: Optional[str] = None
    jwt_refresh_expires_in: str = "7d"

    # Passwords
    bcrypt_rounds: int = 10
    password_min_length: int = 8

    # Avatars (Supabase Storage)
    avatar_bucket: str = "avatars"
    avatar_folder: str = "garden/avatars"
    avatar_quality: int = 80
    image_store_timeout: float = 30.0

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production (controls secure cookies)."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
