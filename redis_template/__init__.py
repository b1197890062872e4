"""
redis-template: template-style access to Redis.

A RedisTemplate runs units of work against a store connection it acquires
and always releases, batches replies through pipelines and transactions,
and converts keys and values with pluggable serializers.

Usage:
    from redis_template import create_redis_template

    template = create_redis_template()
    template.ops_for_hash().put("user:1", "name", "Ada")
    template.ops_for_hash().entries("user:1")
"""

from redis_template.core.config import DataType, Settings, get_settings
from redis_template.core.exceptions import (
    ConfigurationError,
    ConnectionPoolExhaustedError,
    DataRetrievalError,
    IncompleteSortResultError,
    InvalidDataAccessUsageError,
    RedisTemplateError,
    SerializationError,
    StoreCommandError,
    StoreConnectionError,
    TransactionAbortedError,
)
from redis_template.core.interfaces import ConnectionFactory, StoreConnection
from redis_template.core.logging import get_logger, setup_logging
from redis_template.infrastructure.memory import InMemoryConnectionFactory
from redis_template.infrastructure.redis import RedisConnectionFactory, create_redis_template
from redis_template.query import Order, Range, SortQuery, SortQueryBuilder
from redis_template.serializer import (
    JsonRedisSerializer,
    PickleRedisSerializer,
    RawRedisSerializer,
    RedisSerializer,
    StringRedisSerializer,
)
from redis_template.template import RedisTemplate, StringRedisTemplate

__version__ = "1.0.0"

__all__ = [
    "RedisTemplate",
    "StringRedisTemplate",
    "create_redis_template",
    "ConnectionFactory",
    "StoreConnection",
    "RedisConnectionFactory",
    "InMemoryConnectionFactory",
    "RedisSerializer",
    "RawRedisSerializer",
    "StringRedisSerializer",
    "PickleRedisSerializer",
    "JsonRedisSerializer",
    "SortQuery",
    "SortQueryBuilder",
    "Order",
    "Range",
    "DataType",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "RedisTemplateError",
    "ConfigurationError",
    "StoreConnectionError",
    "ConnectionPoolExhaustedError",
    "InvalidDataAccessUsageError",
    "StoreCommandError",
    "TransactionAbortedError",
    "DataRetrievalError",
    "IncompleteSortResultError",
    "SerializationError",
]
