"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Axys Auth"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.otp_ttl_seconds == 300
        assert settings.otp_table == "otp_verifications"
        assert settings.email_provider == "sendgrid"
        assert settings.email_from_name == "Axys Banking"
        assert settings.biometric_device == "simulated"
        assert settings.bootstrap_min_duration_seconds == 2.0

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "SUPABASE_DB_URL": "postgresql://localhost/test",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.supabase_db_url == "postgresql://localhost/test"

    def test_loads_email_provider_from_env(self):
        """Email provider and keys should be configurable."""
        with patch.dict(os.environ, {
            "EMAIL_PROVIDER": "resend",
            "RESEND_API_KEY": "re_test",
        }):
            settings = Settings(_env_file=None)
            assert settings.email_provider == "resend"
            assert settings.resend_api_key == "re_test"

    def test_loads_list_values_from_env(self):
        """List settings should parse from JSON in the environment."""
        with patch.dict(os.environ, {"BIOMETRIC_SIMULATED_TYPES": "[1, 3]"}):
            settings = Settings(_env_file=None)
            assert settings.biometric_simulated_types == [1, 3]


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self):
        """get_settings should return the same instance on repeated calls."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
