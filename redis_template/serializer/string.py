"""
Text serializer.
"""

from redis_template.core.config.constants import DEFAULT_STRING_ENCODING
from redis_template.core.exceptions import SerializationError
from redis_template.serializer.base import RedisSerializer


class StringRedisSerializer(RedisSerializer[str]):
    """
    Encodes ``str`` values with a fixed text encoding.

    Used for the string role of every template, and for all roles of
    StringRedisTemplate. An empty string round-trips as "" (not None).

    Args:
        encoding: Codec name (default utf-8)
    """

    def __init__(self, encoding: str = DEFAULT_STRING_ENCODING):
        self.encoding = encoding

    def serialize(self, value: str | None) -> bytes | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise SerializationError(
                f"Cannot serialize {type(value).__name__} with {self!r}; a str is required",
                details={"value_type": type(value).__name__},
            )
        try:
            return value.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise SerializationError.from_exception(e, encoding=self.encoding)

    def deserialize(self, data: bytes | None) -> str | None:
        if data is None:
            return None
        try:
            return bytes(data).decode(self.encoding)
        except UnicodeDecodeError as e:
            raise SerializationError.from_exception(e, encoding=self.encoding)

    def __repr__(self) -> str:
        return f"StringRedisSerializer(encoding='{self.encoding}')"
