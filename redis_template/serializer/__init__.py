"""
Serializers: value conversion between Python objects and stored bytes.
"""

from redis_template.core.exceptions import ConfigurationError
from redis_template.serializer.base import RawRedisSerializer, RedisSerializer
from redis_template.serializer.json import JsonRedisSerializer
from redis_template.serializer.pickle import PickleRedisSerializer
from redis_template.serializer.serializer_set import SerializerSet
from redis_template.serializer.string import StringRedisSerializer

__all__ = [
    "RedisSerializer",
    "RawRedisSerializer",
    "StringRedisSerializer",
    "PickleRedisSerializer",
    "JsonRedisSerializer",
    "SerializerSet",
    "serializer_for",
]


def serializer_for(name: str, encoding: str = "utf-8") -> RedisSerializer:
    """
    Build a serializer from its configuration name.

    Args:
        name: "pickle", "json" or "string"
        encoding: Text encoding for the string serializer
    """
    if name == "pickle":
        return PickleRedisSerializer()
    if name == "json":
        return JsonRedisSerializer()
    if name == "string":
        return StringRedisSerializer(encoding)
    raise ConfigurationError(f"Unknown serializer: {name}", details={"serializer": name})
