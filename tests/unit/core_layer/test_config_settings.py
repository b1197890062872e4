"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from redis_template.core.config.settings import Settings, get_settings, reload_settings


@pytest.mark.unit
class TestSettingsInitialization:
    """Test Settings class initialization and validation."""

    def test_settings_has_required_sections(self):
        settings = Settings()

        assert hasattr(settings, "redis")
        assert hasattr(settings, "template")
        assert hasattr(settings, "logging")

    def test_template_settings_have_valid_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.template.TEMPLATE_EXPOSE_CONNECTION is False
        assert settings.template.TEMPLATE_DEFAULT_SERIALIZER == "pickle"
        assert settings.template.TEMPLATE_STRING_ENCODING == "utf-8"

    def test_redis_settings_have_valid_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.redis.REDIS_HOST == "localhost"
        assert settings.redis.REDIS_PORT == 6379
        assert settings.redis.REDIS_MAX_CONNECTIONS >= 1
        assert settings.redis.REDIS_SOCKET_TIMEOUT > 0


@pytest.mark.unit
class TestSettingsEnvironment:
    """Test environment variable overrides."""

    def test_environment_overrides_defaults(self):
        env = {
            "REDIS_HOST": "cache.internal",
            "REDIS_PORT": "6380",
            "TEMPLATE_DEFAULT_SERIALIZER": "json",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.redis.REDIS_HOST == "cache.internal"
        assert settings.redis.REDIS_PORT == 6380
        assert settings.template.TEMPLATE_DEFAULT_SERIALIZER == "json"
        assert settings.logging.LOG_LEVEL == "DEBUG"


@pytest.mark.unit
class TestSettingsValidation:
    """Test field validators."""

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD", _env_file=None)

    def test_zero_max_connections_rejected(self):
        with pytest.raises(ValidationError):
            Settings(REDIS_MAX_CONNECTIONS=0, _env_file=None)

    def test_unknown_serializer_rejected(self):
        with pytest.raises(ValidationError):
            Settings(TEMPLATE_DEFAULT_SERIALIZER="xml", _env_file=None)

    def test_unknown_encoding_rejected(self):
        with pytest.raises(ValidationError):
            Settings(TEMPLATE_STRING_ENCODING="no-such-codec", _env_file=None)


@pytest.mark.unit
class TestSettingsSingleton:
    """Test the global settings accessors."""

    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_instance(self):
        first = get_settings()
        second = reload_settings()

        assert second is not first
        assert get_settings() is second
