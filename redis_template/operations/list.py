"""
List operations.
"""

from __future__ import annotations

from typing import Any

from redis_template.operations.base import AbstractOperations


class ListOperations(AbstractOperations):
    """Operations on lists. Elements go through the value serializer."""

    def range(self, key: Any, start: int, end: int) -> list[Any] | None:
        """Elements between start and end, both inclusive (-1 is the last)."""
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.lrange(raw_key, start, end))
        return self.serializers.deserialize_values(raw)

    def trim(self, key: Any, start: int, end: int) -> None:
        raw_key = self.raw_key(key)
        self.execute(lambda connection: connection.ltrim(raw_key, start, end))

    def size(self, key: Any) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.llen(raw_key))

    def left_push(self, key: Any, value: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.lpush(raw_key, raw_value))

    def left_push_all(self, key: Any, *values: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_values = self.serializers.raw_values(values)
        return self.execute(lambda connection: connection.lpush(raw_key, *raw_values))

    def left_push_if_present(self, key: Any, value: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.lpushx(raw_key, raw_value))

    def right_push(self, key: Any, value: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.rpush(raw_key, raw_value))

    def right_push_all(self, key: Any, *values: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_values = self.serializers.raw_values(values)
        return self.execute(lambda connection: connection.rpush(raw_key, *raw_values))

    def right_push_if_present(self, key: Any, value: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.rpushx(raw_key, raw_value))

    def set(self, key: Any, index: int, value: Any) -> None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        self.execute(lambda connection: connection.lset(raw_key, index, raw_value))

    def remove(self, key: Any, count: int, value: Any) -> int | None:
        """Remove up to count occurrences (0 = all, negative = from the tail)."""
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.lrem(raw_key, count, raw_value))

    def index(self, key: Any, index: int) -> Any:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.lindex(raw_key, index))
        return self.serializers.deserialize_value(raw)

    def left_pop(self, key: Any) -> Any:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.lpop(raw_key))
        return self.serializers.deserialize_value(raw)

    def right_pop(self, key: Any) -> Any:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.rpop(raw_key))
        return self.serializers.deserialize_value(raw)

    def right_pop_and_left_push(self, source_key: Any, destination_key: Any) -> Any:
        raw_source = self.raw_key(source_key)
        raw_destination = self.raw_key(destination_key)
        raw = self.execute(lambda connection: connection.rpoplpush(raw_source, raw_destination))
        return self.serializers.deserialize_value(raw)
