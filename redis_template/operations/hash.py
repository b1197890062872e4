"""
Hash operations.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from redis_template.operations.base import AbstractOperations


class HashOperations(AbstractOperations):
    """Operations on hashes. Fields use the hash-key serializer, values the hash-value serializer."""

    def get(self, key: Any, hash_key: Any) -> Any:
        raw_key = self.raw_key(key)
        raw_hash_key = self.raw_hash_key(hash_key)
        raw = self.execute(lambda connection: connection.hget(raw_key, raw_hash_key))
        return self.serializers.deserialize_hash_value(raw)

    def put(self, key: Any, hash_key: Any, value: Any) -> None:
        raw_key = self.raw_key(key)
        raw_hash_key = self.raw_hash_key(hash_key)
        raw_value = self.raw_hash_value(value)
        self.execute(lambda connection: connection.hset(raw_key, raw_hash_key, raw_value))

    def put_if_absent(self, key: Any, hash_key: Any, value: Any) -> bool | None:
        raw_key = self.raw_key(key)
        raw_hash_key = self.raw_hash_key(hash_key)
        raw_value = self.raw_hash_value(value)
        return self.execute(lambda connection: connection.hset_nx(raw_key, raw_hash_key, raw_value))

    def put_all(self, key: Any, mapping: Mapping[Any, Any]) -> None:
        if not mapping:
            return
        raw_key = self.raw_key(key)
        raw_mapping = self.serializers.raw_hash(mapping)
        self.execute(lambda connection: connection.hmset(raw_key, raw_mapping))

    def multi_get(self, key: Any, hash_keys: Iterable[Any]) -> list[Any] | None:
        raw_key = self.raw_key(key)
        raw_hash_keys = self.serializers.raw_hash_keys(hash_keys)
        if not raw_hash_keys:
            return []
        raw = self.execute(lambda connection: connection.hmget(raw_key, *raw_hash_keys))
        return self.serializers.deserialize_hash_values(raw)

    def increment(self, key: Any, hash_key: Any, delta: int = 1) -> int | None:
        raw_key = self.raw_key(key)
        raw_hash_key = self.raw_hash_key(hash_key)
        return self.execute(lambda connection: connection.hincr_by(raw_key, raw_hash_key, delta))

    def has_key(self, key: Any, hash_key: Any) -> bool | None:
        raw_key = self.raw_key(key)
        raw_hash_key = self.raw_hash_key(hash_key)
        return self.execute(lambda connection: connection.hexists(raw_key, raw_hash_key))

    def delete(self, key: Any, *hash_keys: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_hash_keys = self.serializers.raw_hash_keys(hash_keys)
        return self.execute(lambda connection: connection.hdel(raw_key, *raw_hash_keys))

    def size(self, key: Any) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.hlen(raw_key))

    def keys(self, key: Any) -> set[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.hkeys(raw_key))
        return self.serializers.deserialize_hash_keys(raw)

    def values(self, key: Any) -> list[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.hvals(raw_key))
        return self.serializers.deserialize_hash_values(raw)

    def entries(self, key: Any) -> dict[Any, Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.hgetall(raw_key))
        return self.serializers.deserialize_hash(raw)
