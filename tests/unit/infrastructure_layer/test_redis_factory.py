"""
Unit Tests for RedisConnectionFactory and create_redis_template
"""

from unittest.mock import MagicMock, patch

import pytest
import redis

from redis_template import (
    ConnectionPoolExhaustedError,
    JsonRedisSerializer,
    StoreConnectionError,
    StringRedisSerializer,
)
from redis_template.infrastructure.redis import (
    RedisConnection,
    RedisConnectionFactory,
    create_redis_template,
)

POOL = "redis_template.infrastructure.redis.factory.redis.ConnectionPool"
CLIENT = "redis_template.infrastructure.redis.factory.redis.Redis"


@pytest.mark.unit
class TestRedisConnectionFactory:
    """Test pool creation and connection hand-out."""

    def test_pool_built_from_settings_once(self, mock_settings):
        with patch(POOL) as pool_class:
            factory = RedisConnectionFactory(mock_settings)

            assert factory.pool is factory.pool

        pool_class.assert_called_once_with(
            host="redis.test",
            port=6380,
            db=2,
            password=None,
            max_connections=4,
            socket_connect_timeout=1.0,
            socket_timeout=1.0,
            health_check_interval=10,
            decode_responses=False,
        )

    def test_pool_not_built_until_used(self, mock_settings):
        with patch(POOL) as pool_class:
            RedisConnectionFactory(mock_settings)

        pool_class.assert_not_called()

    def test_get_connection_wraps_dedicated_client(self, mock_settings):
        pool = MagicMock(spec=redis.ConnectionPool)
        factory = RedisConnectionFactory(mock_settings, pool=pool)

        with patch(CLIENT) as client_class:
            connection = factory.get_connection()

        client_class.assert_called_once_with(connection_pool=pool, single_connection_client=True)
        assert isinstance(connection, RedisConnection)
        assert connection.client is client_class.return_value

    def test_exhausted_pool(self, mock_settings):
        factory = RedisConnectionFactory(mock_settings, pool=MagicMock())

        with patch(CLIENT, side_effect=redis.ConnectionError("Too many connections")):
            with pytest.raises(ConnectionPoolExhaustedError) as exc_info:
                factory.get_connection()

        assert exc_info.value.details["max_connections"] == 4

    def test_unreachable_server(self, mock_settings):
        factory = RedisConnectionFactory(mock_settings, pool=MagicMock())

        with patch(CLIENT, side_effect=redis.ConnectionError("Connection refused")):
            with pytest.raises(StoreConnectionError) as exc_info:
                factory.get_connection()

        assert not isinstance(exc_info.value, ConnectionPoolExhaustedError)
        assert exc_info.value.details["host"] == "redis.test"

    def test_release_closes_connection(self, mock_settings):
        factory = RedisConnectionFactory(mock_settings, pool=MagicMock())
        connection = MagicMock()

        factory.release_connection(connection)

        connection.close.assert_called_once()

    def test_release_failure_logged_not_raised(self, mock_settings):
        factory = RedisConnectionFactory(mock_settings, pool=MagicMock())
        connection = MagicMock()
        connection.close.side_effect = redis.ConnectionError("gone")

        factory.release_connection(connection)

    def test_disconnect(self, mock_settings):
        pool = MagicMock()
        factory = RedisConnectionFactory(mock_settings, pool=pool)

        factory.disconnect()

        pool.disconnect.assert_called_once()


@pytest.mark.unit
class TestCreateRedisTemplate:
    """Test building a template from configuration."""

    def test_serializers_from_settings(self, mock_settings):
        template = create_redis_template(mock_settings)

        assert template.initialized
        assert isinstance(template.key_serializer, StringRedisSerializer)
        assert isinstance(template.hash_key_serializer, StringRedisSerializer)
        assert isinstance(template.value_serializer, JsonRedisSerializer)
        assert isinstance(template.hash_value_serializer, JsonRedisSerializer)

    def test_expose_connection_from_settings(self, mock_settings):
        mock_settings.template.TEMPLATE_EXPOSE_CONNECTION = True

        assert create_redis_template(mock_settings).expose_connection is True

    def test_factory_uses_settings(self, mock_settings):
        template = create_redis_template(mock_settings)

        assert isinstance(template.connection_factory, RedisConnectionFactory)
        assert "redis.test:6380/2" in repr(template.connection_factory)
