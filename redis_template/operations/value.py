"""
Value (string) operations.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from redis_template.operations.base import AbstractOperations


def _seconds(timeout: int | timedelta) -> int:
    if isinstance(timeout, timedelta):
        return int(timeout.total_seconds())
    return int(timeout)


class ValueOperations(AbstractOperations):
    """Operations on plain values stored under a key."""

    def set(self, key: Any, value: Any, timeout: int | timedelta | None = None) -> None:
        """Store a value, optionally with a time to live in seconds."""
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        if timeout is None:
            self.execute(lambda connection: connection.set(raw_key, raw_value))
            return
        seconds = _seconds(timeout)
        self.execute(lambda connection: connection.set_ex(raw_key, seconds, raw_value))

    def set_if_absent(self, key: Any, value: Any) -> bool | None:
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        return self.execute(lambda connection: connection.set_nx(raw_key, raw_value))

    def get(self, key: Any) -> Any:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.get(raw_key))
        return self.serializers.deserialize_value(raw)

    def get_and_set(self, key: Any, value: Any) -> Any:
        """Store a new value and return the previous one."""
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        raw = self.execute(lambda connection: connection.get_set(raw_key, raw_value))
        return self.serializers.deserialize_value(raw)

    def multi_get(self, keys: Iterable[Any]) -> list[Any] | None:
        raw_keys = self.serializers.raw_keys(keys)
        if not raw_keys:
            return []
        raw = self.execute(lambda connection: connection.mget(*raw_keys))
        return self.serializers.deserialize_values(raw)

    def multi_set(self, mapping: Mapping[Any, Any]) -> None:
        if not mapping:
            return
        raw_mapping = {self.raw_key(k): self.raw_value(v) for k, v in mapping.items()}
        self.execute(lambda connection: connection.mset(raw_mapping))

    def multi_set_if_absent(self, mapping: Mapping[Any, Any]) -> bool | None:
        """Store all pairs only if none of the keys exists."""
        if not mapping:
            return True
        raw_mapping = {self.raw_key(k): self.raw_value(v) for k, v in mapping.items()}
        return self.execute(lambda connection: connection.mset_nx(raw_mapping))

    def increment(self, key: Any, delta: int | float = 1) -> int | float | None:
        """Add delta to the number stored at key (integer or float arithmetic by type of delta)."""
        raw_key = self.raw_key(key)
        if isinstance(delta, float):
            return self.execute(lambda connection: connection.incr_by_float(raw_key, delta))
        return self.execute(lambda connection: connection.incr_by(raw_key, delta))

    def append(self, key: Any, value: str) -> int | None:
        """Append text; returns the new length."""
        raw_key = self.raw_key(key)
        raw_value = self.serializers.raw_string(value)
        return self.execute(lambda connection: connection.append(raw_key, raw_value))

    def get_range(self, key: Any, start: int, end: int) -> str | None:
        raw_key = self.raw_key(key)
        raw = self.execute(lambda connection: connection.get_range(raw_key, start, end))
        return self.serializers.deserialize_string(raw)

    def set_range(self, key: Any, value: Any, offset: int) -> None:
        """Overwrite part of the stored value starting at offset."""
        raw_key = self.raw_key(key)
        raw_value = self.raw_value(value)
        self.execute(lambda connection: connection.set_range(raw_key, offset, raw_value))

    def size(self, key: Any) -> int | None:
        raw_key = self.raw_key(key)
        return self.execute(lambda connection: connection.strlen(raw_key))
