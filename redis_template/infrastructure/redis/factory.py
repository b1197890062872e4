"""
redis-py Connection Factory

Builds one shared redis.ConnectionPool from settings and hands out one
RedisConnection per unit of work.

Why single_connection_client?
- A unit of work may WATCH, MULTI and EXEC across several commands; all of
  them must travel on the same socket
- The client takes a socket from the pool when created and returns it on
  close(), so release_connection() is simply close()
- Pipelines and WATCH/MULTI windows run on that same socket (BoundPipeline),
  so a unit of work never holds more than one pooled connection

Pool Configuration:
- Max connections: REDIS_MAX_CONNECTIONS (bounds concurrent units of work)
- Socket timeout / connect timeout: REDIS_SOCKET_TIMEOUT, REDIS_SOCKET_CONNECT_TIMEOUT
- Health check interval: REDIS_HEALTH_CHECK_INTERVAL
- decode_responses=False: the template works on bytes

Author: System Architect
Date: 2026-03-02
"""

import threading

import redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from redis_template.core.config.constants import Stage
from redis_template.core.config.settings import Settings, get_settings
from redis_template.core.exceptions import ConnectionPoolExhaustedError, StoreConnectionError
from redis_template.core.interfaces import StoreConnection
from redis_template.core.logging import get_logger
from redis_template.infrastructure.redis.connection import RedisConnection
from redis_template.serializer import serializer_for
from redis_template.template import RedisTemplate

logger = get_logger(__name__)


class RedisConnectionFactory:
    """
    ConnectionFactory backed by a redis-py connection pool.

    Thread-safe: the pool is created once, under a lock, on first use.

    Args:
        settings: Application settings (defaults to get_settings())
        pool: Pre-built pool to use instead of one built from settings
    """

    def __init__(self, settings: Settings | None = None, pool: redis.ConnectionPool | None = None):
        self._settings = settings or get_settings()
        self._pool = pool
        self._lock = threading.Lock()

    @property
    def pool(self) -> redis.ConnectionPool:
        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    self._pool = self._create_pool()
        return self._pool

    def _create_pool(self) -> redis.ConnectionPool:
        redis_settings = self._settings.redis
        pool = redis.ConnectionPool(
            host=redis_settings.REDIS_HOST,
            port=redis_settings.REDIS_PORT,
            db=redis_settings.REDIS_DB,
            password=redis_settings.REDIS_PASSWORD,
            max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
            socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
            socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
            health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
            decode_responses=False,
        )
        logger.info(
            "Redis connection pool created",
            stage=Stage.REDIS_CONNECT,
            host=redis_settings.REDIS_HOST,
            port=redis_settings.REDIS_PORT,
            db=redis_settings.REDIS_DB,
            max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
        )
        return pool

    def get_connection(self) -> StoreConnection:
        """
        Take a socket from the pool and wrap it.

        Raises:
            ConnectionPoolExhaustedError: If every pooled connection is in use
            StoreConnectionError: If the server cannot be reached
        """
        try:
            client = redis.Redis(connection_pool=self.pool, single_connection_client=True)
        except (ConnectionError, TimeoutError) as e:
            logger.error("Failed to get Redis connection", stage=Stage.CONNECTION_ACQUIRE, error=str(e))
            if "Too many connections" in str(e):
                raise ConnectionPoolExhaustedError(
                    details={"max_connections": self._settings.redis.REDIS_MAX_CONNECTIONS}
                ) from e
            raise StoreConnectionError.from_exception(
                e,
                message=f"Failed to connect to Redis: {e}",
                host=self._settings.redis.REDIS_HOST,
                port=self._settings.redis.REDIS_PORT,
            ) from e
        return RedisConnection(client)

    def release_connection(self, connection: StoreConnection) -> None:
        """Close the connection, which puts its socket back into the pool."""
        try:
            connection.close()
        except RedisError as e:
            logger.warning("Closing Redis connection failed", stage=Stage.CONNECTION_RELEASE, error=str(e))

    def disconnect(self) -> None:
        """Close every pooled socket."""
        if self._pool is not None:
            self._pool.disconnect()
            logger.info("Redis connection pool disconnected", stage=Stage.REDIS_CONNECT)

    def __repr__(self) -> str:
        redis_settings = self._settings.redis
        return f"RedisConnectionFactory({redis_settings.REDIS_HOST}:{redis_settings.REDIS_PORT}/{redis_settings.REDIS_DB})"


def create_redis_template(settings: Settings | None = None) -> RedisTemplate:
    """
    Build an initialized RedisTemplate from configuration.

    Keys, hash fields and text arguments use the string serializer; values
    and hash values use TEMPLATE_DEFAULT_SERIALIZER.

    Usage:
        template = create_redis_template()
        template.ops_for_value().set("user:1", {"name": "Ada"})
    """
    settings = settings or get_settings()
    template_settings = settings.template
    encoding = template_settings.TEMPLATE_STRING_ENCODING
    key_serializer = serializer_for("string", encoding)

    template = RedisTemplate(
        RedisConnectionFactory(settings),
        default_serializer=serializer_for(template_settings.TEMPLATE_DEFAULT_SERIALIZER, encoding),
        key_serializer=key_serializer,
        hash_key_serializer=key_serializer,
        string_serializer=key_serializer,
        expose_connection=template_settings.TEMPLATE_EXPOSE_CONNECTION,
    )
    return template.after_properties_set()
