"""
Sorted set operations.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from redis_template.operations.base import AbstractOperations


class ZSetOperations(AbstractOperations):
    """
    Operations on sorted sets.

    Members go through the value serializer. Range queries return members in
    score order; the *_with_scores variants return (member, score) tuples.
    """

    def _keys(self, key: Any, other_keys: Any | Iterable[Any]) -> list[bytes]:
        if isinstance(other_keys, (list, tuple, set, frozenset)):
            return [self.raw_key(key), *self.serializers.raw_keys(other_keys)]
        return [self.raw_key(key), self.raw_key(other_keys)]

    def add(self, key: Any, value: Any, score: float) -> bool | None:
        """Add a member or update its score; True if it was new."""
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.zadd(raw_key, score, raw_value))

    def remove(self, key: Any, *values: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_values = self.serializers.raw_values(values)
        return self.execute(lambda connection: connection.zrem(raw_key, *raw_values))

    def increment_score(self, key: Any, value: Any, delta: float) -> float | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.zincrby(raw_key, delta, raw_value))

    def rank(self, key: Any, value: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.zrank(raw_key, raw_value))

    def reverse_rank(self, key: Any, value: Any) -> int | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.zrevrank(raw_key, raw_value))

    def range(self, key: Any, start: int, end: int) -> list[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.zrange(raw_key, start, end))
        return self.serializers.deserialize_values(raw)

    def range_with_scores(self, key: Any, start: int, end: int) -> list[tuple[Any, float]] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.zrange(raw_key, start, end, True))
        return self.serializers.deserialize_tuples(raw)

    def reverse_range(self, key: Any, start: int, end: int) -> list[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.zrevrange(raw_key, start, end))
        return self.serializers.deserialize_values(raw)

    def reverse_range_with_scores(self, key: Any, start: int, end: int) -> list[tuple[Any, float]] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.zrevrange(raw_key, start, end, True))
        return self.serializers.deserialize_tuples(raw)

    def range_by_score(self, key: Any, min_score: float, max_score: float) -> list[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.zrange_by_score(raw_key, min_score, max_score))
        return self.serializers.deserialize_values(raw)

    def range_by_score_with_scores(
        self, key: Any, min_score: float, max_score: float
    ) -> list[tuple[Any, float]] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(
            lambda connection: connection.zrange_by_score(raw_key, min_score, max_score, True)
        )
        return self.serializers.deserialize_tuples(raw)

    def reverse_range_by_score(self, key: Any, min_score: float, max_score: float) -> list[Any] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(
            lambda connection: connection.zrevrange_by_score(raw_key, min_score, max_score)
        )
        return self.serializers.deserialize_values(raw)

    def reverse_range_by_score_with_scores(
        self, key: Any, min_score: float, max_score: float
    ) -> list[tuple[Any, float]] | None:
        raw_key = self.raw_key(key)
        raw = self.execute(
            lambda connection: connection.zrevrange_by_score(raw_key, min_score, max_score, True)
        )
        return self.serializers.deserialize_tuples(raw)

    def count(self, key: Any, min_score: float, max_score: float) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.zcount(raw_key, min_score, max_score))

    def size(self, key: Any) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.zcard(raw_key))

    def score(self, key: Any, value: Any) -> float | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.zscore(raw_key, raw_value))

    def remove_range(self, key: Any, start: int, end: int) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.zrem_range(raw_key, start, end))

    def remove_range_by_score(self, key: Any, min_score: float, max_score: float) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(
            lambda connection: connection.zrem_range_by_score(raw_key, min_score, max_score)
        )

    def union_and_store(self, key: Any, other_keys: Any | Iterable[Any], destination_key: Any) -> int | None:
        raw_keys = self._keys(key, other_keys)
        raw_destination = self.raw_key(destination_key)
        return self.execute(lambda connection: connection.zunion_store(raw_destination, *raw_keys))

    def intersect_and_store(self, key: Any, other_keys: Any | Iterable[Any], destination_key: Any) -> int | None:
        raw_keys = self._keys(key, other_keys)
        raw_destination = self.raw_key(destination_key)
        return self.execute(lambda connection: connection.zinter_store(raw_destination, *raw_keys))
