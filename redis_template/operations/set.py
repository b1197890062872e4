"""
Set operations.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from redis_template.operations.base import AbstractOperations


class SetOperations(AbstractOperations):
    """Operations on unordered sets. Members go through the value serializer."""

    def _keys(self, key: Any, other_keys: Any | Iterable[Any]) -> list[bytes]:
        if isinstance(other_keys, (list, tuple, set, frozenset)):
            return [self.raw_key(key), *self.serializers.raw_keys(other_keys)]
        return [self.raw_key(key), self.raw_key(other_keys)]

    def add(self, key: Any, *values: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_values = self.serializers.raw_values(values)
        return self.execute(lambda connection: connection.sadd(raw_key, *raw_values))

    def remove(self, key: Any, *values: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_values = self.serializers.raw_values(values)
        return self.execute(lambda connection: connection.srem(raw_key, *raw_values))

    def pop(self, key: Any) -> Any:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.spop(raw_key))
        return self.serializers.deserialize_value(raw)

    def move(self, key: Any, value: Any, destination_key: Any) -> bool | None:
        raw_key = self.raw_key(key)
        raw_destination = self.raw_key(destination_key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.smove(raw_key, raw_destination, raw_value))

    def size(self, key: Any) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.scard(raw_key))

    def is_member(self, key: Any, value: Any) -> bool | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.sismember(raw_key, raw_value))

    def members(self, key: Any) -> set[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.smembers(raw_key))
        return self.serializers.deserialize_value_set(raw)

    def random_member(self, key: Any) -> Any:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.srandmember(raw_key))
        return self.serializers.deserialize_value(raw)

    def intersect(self, key: Any, other_keys: Any | Iterable[Any]) -> set[Any] | None:
        """Members present in key and every other key (one key or a collection)."""
        raw_keys = self._keys(key, other_keys)
        raw = self.execute(lambda connection: connection.sinter(*raw_keys))
        return self.serializers.deserialize_value_set(raw)

    def intersect_and_store(self, key: Any, other_keys: Any | Iterable[Any], destination_key: Any) -> int | None:
        raw_keys = self._keys(key, other_keys)
        raw_destination = self.raw_key(destination_key)
        return self.execute(lambda connection: connection.sinter_store(raw_destination, *raw_keys))

    def union(self, key: Any, other_keys: Any | Iterable[Any]) -> set[Any] | None:
        raw_keys = self._keys(key, other_keys)
        raw = self.execute(lambda connection: connection.sunion(*raw_keys))
        return self.serializers.deserialize_value_set(raw)

    def union_and_store(self, key: Any, other_keys: Any | Iterable[Any], destination_key: Any) -> int | None:
        raw_keys = self._keys(key, other_keys)
        raw_destination = self.raw_key(destination_key)
        return self.execute(lambda connection: connection.sunion_store(raw_destination, *raw_keys))

    def difference(self, key: Any, other_keys: Any | Iterable[Any]) -> set[Any] | None:
        raw_keys = self._keys(key, other_keys)
        raw = self.execute(lambda connection: connection.sdiff(*raw_keys))
        return self.serializers.deserialize_value_set(raw)

    def difference_and_store(self, key: Any, other_keys: Any | Iterable[Any], destination_key: Any) -> int | None:
        raw_keys = self._keys(key, other_keys)
        raw_destination = self.raw_key(destination_key)
        return self.execute(lambda connection: connection.sdiff_store(raw_destination, *raw_keys))
