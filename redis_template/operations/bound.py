"""
Key-bound operations.

Thin wrappers that fix the key of a facade, so code working on one key does
not repeat it:

    cart = template.bound_hash_ops("cart:42")
    cart.put("apples", 3)
    cart.entries()
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from redis_template.core.config.constants import DataType
from redis_template.operations.hash import HashOperations
from redis_template.operations.list import ListOperations
from redis_template.operations.set import SetOperations
from redis_template.operations.value import ValueOperations
from redis_template.operations.zset import ZSetOperations


class BoundKeyOperations:
    """Key-level commands shared by every bound wrapper."""

    def __init__(self, key: Any, operations):
        self._key = key
        self._ops = operations

    @property
    def key(self) -> Any:
        return self._key

    @property
    def operations(self):
        return self._ops

    def expire(self, timeout: int | timedelta) -> bool | None:
        return self._ops.template.expire(self._key, timeout)

    def get_expire(self) -> int | None:
        return self._ops.template.get_expire(self._key)

    def persist(self) -> bool | None:
        return self._ops.template.persist(self._key)

    def rename(self, new_key: Any) -> None:
        """Rename the key; the wrapper follows it."""
        self._ops.template.rename(self._key, new_key)
        self._key = new_key

    def type(self) -> DataType | None:
        return self._ops.template.type(self._key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self._key!r})"


class BoundValueOperations(BoundKeyOperations):
    _ops: ValueOperations

    def set(self, value: Any, timeout: int | timedelta | None = None) -> None:
        self._ops.set(self._key, value, timeout)

    def set_if_absent(self, value: Any) -> bool | None:
        return self._ops.set_if_absent(self._key, value)

    def get(self) -> Any:
        return self._ops.get(self._key)

    def get_and_set(self, value: Any) -> Any:
        return self._ops.get_and_set(self._key, value)

    def increment(self, delta: int | float = 1) -> int | float | None:
        return self._ops.increment(self._key, delta)

    def append(self, value: str) -> int | None:
        return self._ops.append(self._key, value)

    def get_range(self, start: int, end: int) -> str | None:
        return self._ops.get_range(self._key, start, end)

    def set_range(self, value: Any, offset: int) -> None:
        self._ops.set_range(self._key, value, offset)

    def size(self) -> int | None:
        return self._ops.size(self._key)


class BoundListOperations(BoundKeyOperations):
    _ops: ListOperations

    def range(self, start: int, end: int) -> list[Any] | None:
        return self._ops.range(self._key, start, end)

    def trim(self, start: int, end: int) -> None:
        self._ops.trim(self._key, start, end)

    def size(self) -> int | None:
        return self._ops.size(self._key)

    def left_push(self, value: Any) -> int | None:
        return self._ops.left_push(self._key, value)

    def left_push_all(self, *values: Any) -> int | None:
        return self._ops.left_push_all(self._key, *values)

    def right_push(self, value: Any) -> int | None:
        return self._ops.right_push(self._key, value)

    def right_push_all(self, *values: Any) -> int | None:
        return self._ops.right_push_all(self._key, *values)

    def set(self, index: int, value: Any) -> None:
        self._ops.set(self._key, index, value)

    def remove(self, count: int, value: Any) -> int | None:
        return self._ops.remove(self._key, count, value)

    def index(self, index: int) -> Any:
        return self._ops.index(self._key, index)

    def left_pop(self) -> Any:
        return self._ops.left_pop(self._key)

    def right_pop(self) -> Any:
        return self._ops.right_pop(self._key)


class BoundSetOperations(BoundKeyOperations):
    _ops: SetOperations

    def add(self, *values: Any) -> int | None:
        return self._ops.add(self._key, *values)

    def remove(self, *values: Any) -> int | None:
        return self._ops.remove(self._key, *values)

    def pop(self) -> Any:
        return self._ops.pop(self._key)

    def move(self, value: Any, destination_key: Any) -> bool | None:
        return self._ops.move(self._key, value, destination_key)

    def size(self) -> int | None:
        return self._ops.size(self._key)

    def is_member(self, value: Any) -> bool | None:
        return self._ops.is_member(self._key, value)

    def members(self) -> set[Any] | None:
        return self._ops.members(self._key)

    def random_member(self) -> Any:
        return self._ops.random_member(self._key)

    def intersect(self, other_keys: Any | Iterable[Any]) -> set[Any] | None:
        return self._ops.intersect(self._key, other_keys)

    def union(self, other_keys: Any | Iterable[Any]) -> set[Any] | None:
        return self._ops.union(self._key, other_keys)

    def difference(self, other_keys: Any | Iterable[Any]) -> set[Any] | None:
        return self._ops.difference(self._key, other_keys)


class BoundZSetOperations(BoundKeyOperations):
    _ops: ZSetOperations

    def add(self, value: Any, score: float) -> bool | None:
        return self._ops.add(self._key, value, score)

    def remove(self, *values: Any) -> int | None:
        return self._ops.remove(self._key, *values)

    def increment_score(self, value: Any, delta: float) -> float | None:
        return self._ops.increment_score(self._key, value, delta)

    def rank(self, value: Any) -> int | None:
        return self._ops.rank(self._key, value)

    def reverse_rank(self, value: Any) -> int | None:
        return self._ops.reverse_rank(self._key, value)

    def range(self, start: int, end: int) -> list[Any] | None:
        return self._ops.range(self._key, start, end)

    def range_with_scores(self, start: int, end: int) -> list[tuple[Any, float]] | None:
        return self._ops.range_with_scores(self._key, start, end)

    def reverse_range(self, start: int, end: int) -> list[Any] | None:
        return self._ops.reverse_range(self._key, start, end)

    def range_by_score(self, min_score: float, max_score: float) -> list[Any] | None:
        return self._ops.range_by_score(self._key, min_score, max_score)

    def count(self, min_score: float, max_score: float) -> int | None:
        return self._ops.count(self._key, min_score, max_score)

    def size(self) -> int | None:
        return self._ops.size(self._key)

    def score(self, value: Any) -> float | None:
        return self._ops.score(self._key, value)


class BoundHashOperations(BoundKeyOperations):
    _ops: HashOperations

    def get(self, hash_key: Any) -> Any:
        return self._ops.get(self._key, hash_key)

    def put(self, hash_key: Any, value: Any) -> None:
        self._ops.put(self._key, hash_key, value)

    def put_if_absent(self, hash_key: Any, value: Any) -> bool | None:
        return self._ops.put_if_absent(self._key, hash_key, value)

    def put_all(self, mapping: Mapping[Any, Any]) -> None:
        self._ops.put_all(self._key, mapping)

    def multi_get(self, hash_keys: Iterable[Any]) -> list[Any] | None:
        return self._ops.multi_get(self._key, hash_keys)

    def increment(self, hash_key: Any, delta: int = 1) -> int | None:
        return self._ops.increment(self._key, hash_key, delta)

    def has_key(self, hash_key: Any) -> bool | None:
        return self._ops.has_key(self._key, hash_key)

    def delete(self, *hash_keys: Any) -> int | None:
        return self._ops.delete(self._key, *hash_keys)

    def size(self) -> int | None:
        return self._ops.size(self._key)

    def keys(self) -> set[Any] | None:
        return self._ops.keys(self._key)

    def values(self) -> list[Any] | None:
        return self._ops.values(self._key)

    def entries(self) -> dict[Any, Any] | None:
        return self._ops.entries(self._key)
