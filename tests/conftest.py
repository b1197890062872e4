"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# ============================================================================
# Mock Configuration Fixtures
# ============================================================================


@pytest.fixture
def mock_settings():
    """
    Mock application settings for testing.

    Returns a MagicMock with the settings sections the library reads.
    """
    from redis_template.core.config.settings import Settings

    settings = MagicMock(spec=Settings)

    # Redis settings
    settings.redis.REDIS_HOST = "redis.test"
    settings.redis.REDIS_PORT = 6380
    settings.redis.REDIS_DB = 2
    settings.redis.REDIS_PASSWORD = None
    settings.redis.REDIS_MAX_CONNECTIONS = 4
    settings.redis.REDIS_SOCKET_TIMEOUT = 1.0
    settings.redis.REDIS_SOCKET_CONNECT_TIMEOUT = 1.0
    settings.redis.REDIS_HEALTH_CHECK_INTERVAL = 10

    # Template settings
    settings.template.TEMPLATE_EXPOSE_CONNECTION = False
    settings.template.TEMPLATE_DEFAULT_SERIALIZER = "json"
    settings.template.TEMPLATE_STRING_ENCODING = "utf-8"

    # Logging settings
    settings.logging.LOG_LEVEL = "DEBUG"
    settings.logging.LOG_FORMAT = "console"

    return settings


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Template Fixtures
# ============================================================================


@pytest.fixture
def memory_factory():
    """Fresh in-memory connection factory (own keyspace per test)."""
    from redis_template.infrastructure.memory import InMemoryConnectionFactory

    return InMemoryConnectionFactory()


@pytest.fixture
def template(memory_factory):
    """
    Initialized RedisTemplate over the in-memory factory.

    Keys and hash fields are text; values and hash values use the default
    pickle serializer.
    """
    from redis_template import RedisTemplate, StringRedisSerializer

    text = StringRedisSerializer()
    return RedisTemplate(
        memory_factory, key_serializer=text, hash_key_serializer=text
    ).after_properties_set()


@pytest.fixture
def string_template(memory_factory):
    """StringRedisTemplate over the in-memory factory."""
    from redis_template import StringRedisTemplate

    return StringRedisTemplate(memory_factory)


@pytest.fixture
def mock_connection():
    """StoreConnection mock that is neither pipelined nor queueing."""
    from tests.test_fixtures import TemplateTestFactory

    return TemplateTestFactory.mock_connection()


@pytest.fixture
def real_or_memory_factory(use_real_redis, memory_factory):
    """
    Return a redis-backed factory if enabled, otherwise the in-memory one.
    """
    if use_real_redis:
        from redis_template.infrastructure.redis import RedisConnectionFactory

        return RedisConnectionFactory()
    return memory_factory
