"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings()
        assert settings.app_name == "Garden Accounts API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.app_version == "0.1.0"
        assert settings.bcrypt_rounds == 10
        assert settings.password_min_length == 8
        assert settings.avatar_folder == "garden/avatars"
        assert settings.image_store_timeout == 30.0

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_token_config_from_env(self):
        with patch.dict(os.environ, {
            "JWT_SECRET": "s3cret",
            "JWT_EXPIRES_IN": "15m",
            "JWT_REFRESH_SECRET": "r3fresh",
            "JWT_REFRESH_EXPIRES_IN": "30d",
        }):
            settings = Settings()
            assert settings.jwt_secret == "s3cret"
            assert settings.jwt_expires_in == "15m"
            assert settings.jwt_refresh_secret == "r3fresh"
            assert settings.jwt_refresh_expires_in == "30d"

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings()
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"

    @pytest.mark.parametrize("environment,expected", [
        ("production", True),
        ("Production", True),
        ("development", False),
        ("staging", False),
    ])
    def test_is_production(self, environment, expected):
        assert Settings(environment=environment).is_production is expected


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
