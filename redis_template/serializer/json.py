"""
JSON serializer backed by orjson.
"""

from typing import Any

import orjson

from redis_template.core.exceptions import SerializationError
from redis_template.serializer.base import RedisSerializer


class JsonRedisSerializer(RedisSerializer[Any]):
    """
    Stores values as UTF-8 JSON documents.

    Interoperable with non-Python readers, at the cost of only supporting
    JSON-shaped values (dicts, lists, str, int, float, bool, plus what orjson
    natively handles: dataclasses, datetimes, UUIDs).

    Empty stored bytes decode to None, like a missing key.
    """

    def __init__(self, option: int | None = None):
        self.option = option

    def serialize(self, value: Any) -> bytes | None:
        if value is None:
            return None
        try:
            return orjson.dumps(value, option=self.option)
        except TypeError as e:
            raise SerializationError.from_exception(
                e, message=f"Cannot encode {type(value).__name__} as JSON", value_type=type(value).__name__
            )

    def deserialize(self, data: bytes | None) -> Any:
        if not data:
            return None
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise SerializationError.from_exception(e, message="Stored value is not valid JSON")
