"""
Serializer Set

Holds the serializer of every role a template converts through, and the raw
encode/decode helpers built on them.

Roles:
    key         - keys (and key patterns)
    value       - values, list elements, set and sorted-set members
    hash_key    - hash field names
    hash_value  - hash field values
    string      - channels, sort patterns and other always-text arguments

Lifecycle (single writer, then frozen):
    1. Assign serializers (constructor or setters)
    2. freeze() fills unset key/value/hash roles with the default serializer
    3. After freeze() every setter raises InvalidDataAccessUsageError, so two
       calls encoding the same key always produce the same bytes and the set
       can be shared by any number of threads

Author: System Architect
Date: 2026-03-02
"""

from collections.abc import Iterable, Mapping
from typing import Any

from redis_template.core.exceptions import InvalidDataAccessUsageError
from redis_template.serializer.base import RedisSerializer
from redis_template.serializer.pickle import PickleRedisSerializer
from redis_template.serializer.string import StringRedisSerializer

_BINARY = (bytes, bytearray, memoryview)


class SerializerSet:
    """
    The five serializer roles of a template.

    Args:
        default_serializer: Fallback for unset key/value/hash roles
            (PickleRedisSerializer when omitted)
        key_serializer: Serializer for keys
        value_serializer: Serializer for values
        hash_key_serializer: Serializer for hash fields
        hash_value_serializer: Serializer for hash values
        string_serializer: Serializer for text arguments; defaults to
            StringRedisSerializer and is never replaced by default_serializer
    """

    def __init__(
        self,
        default_serializer: RedisSerializer | None = None,
        key_serializer: RedisSerializer | None = None,
        value_serializer: RedisSerializer | None = None,
        hash_key_serializer: RedisSerializer | None = None,
        hash_value_serializer: RedisSerializer | None = None,
        string_serializer: RedisSerializer[str] | None = None,
    ):
        self._frozen = False
        self._default = default_serializer if default_serializer is not None else PickleRedisSerializer()
        self._key = key_serializer
        self._value = value_serializer
        self._hash_key = hash_key_serializer
        self._hash_value = hash_value_serializer
        self._string = string_serializer if string_serializer is not None else StringRedisSerializer()

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def _check_mutable(self, role: str) -> None:
        if self._frozen:
            raise InvalidDataAccessUsageError(
                f"Cannot change the {role} serializer after the template was initialized",
                details={"role": role},
            )

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def default_serializer(self) -> RedisSerializer:
        return self._default

    @default_serializer.setter
    def default_serializer(self, serializer: RedisSerializer) -> None:
        self._check_mutable("default")
        self._default = serializer

    @property
    def key_serializer(self) -> RedisSerializer | None:
        return self._key

    @key_serializer.setter
    def key_serializer(self, serializer: RedisSerializer) -> None:
        self._check_mutable("key")
        self._key = serializer

    @property
    def value_serializer(self) -> RedisSerializer | None:
        return self._value

    @value_serializer.setter
    def value_serializer(self, serializer: RedisSerializer) -> None:
        self._check_mutable("value")
        self._value = serializer

    @property
    def hash_key_serializer(self) -> RedisSerializer | None:
        return self._hash_key

    @hash_key_serializer.setter
    def hash_key_serializer(self, serializer: RedisSerializer) -> None:
        self._check_mutable("hash_key")
        self._hash_key = serializer

    @property
    def hash_value_serializer(self) -> RedisSerializer | None:
        return self._hash_value

    @hash_value_serializer.setter
    def hash_value_serializer(self, serializer: RedisSerializer) -> None:
        self._check_mutable("hash_value")
        self._hash_value = serializer

    @property
    def string_serializer(self) -> RedisSerializer[str]:
        return self._string

    @string_serializer.setter
    def string_serializer(self, serializer: RedisSerializer[str]) -> None:
        self._check_mutable("string")
        self._string = serializer

    def freeze(self) -> list[str]:
        """
        Fill unset roles with the default serializer and lock the set.

        Returns:
            Names of the roles that fell back to the default serializer
        """
        defaulted = []
        if self._key is None:
            self._key = self._default
            defaulted.append("key")
        if self._value is None:
            self._value = self._default
            defaulted.append("value")
        if self._hash_key is None:
            self._hash_key = self._default
            defaulted.append("hash_key")
        if self._hash_value is None:
            self._hash_value = self._default
            defaulted.append("hash_value")

        self._frozen = True
        return defaulted

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def raw_key(self, key: Any) -> bytes:
        if key is None:
            raise InvalidDataAccessUsageError("non null key required")
        return self._key.serialize(key)

    def raw_keys(self, keys: Iterable[Any]) -> list[bytes]:
        return [self.raw_key(key) for key in keys]

    def raw_value(self, value: Any) -> bytes | None:
        return self._value.serialize(value)

    def raw_values(self, values: Iterable[Any]) -> list[bytes | None]:
        return [self.raw_value(value) for value in values]

    def raw_hash_key(self, hash_key: Any) -> bytes | None:
        return self._hash_key.serialize(hash_key)

    def raw_hash_keys(self, hash_keys: Iterable[Any]) -> list[bytes | None]:
        return [self.raw_hash_key(hash_key) for hash_key in hash_keys]

    def raw_hash_value(self, value: Any) -> bytes | None:
        return self._hash_value.serialize(value)

    def raw_hash(self, mapping: Mapping[Any, Any]) -> dict[bytes, bytes]:
        return {self.raw_hash_key(k): self.raw_hash_value(v) for k, v in mapping.items()}

    def raw_string(self, value: str) -> bytes | None:
        return self._string.serialize(value)

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def deserialize_key(self, data: bytes | None) -> Any:
        return self._key.deserialize(data)

    def deserialize_keys(self, data: Iterable[bytes] | None) -> set[Any] | None:
        if data is None:
            return None
        return {self._key.deserialize(item) for item in data}

    def deserialize_value(self, data: bytes | None) -> Any:
        return self._value.deserialize(data)

    def deserialize_values(self, data: Iterable[bytes | None] | None, serializer: RedisSerializer | None = None) -> list[Any] | None:
        if data is None:
            return None
        serializer = serializer or self._value
        return [serializer.deserialize(item) for item in data]

    def deserialize_value_set(self, data: Iterable[bytes] | None) -> set[Any] | None:
        if data is None:
            return None
        return {self._value.deserialize(item) for item in data}

    def deserialize_tuples(self, data: Iterable[tuple[bytes, float]] | None) -> list[tuple[Any, float]] | None:
        """Decode (member, score) pairs from sorted-set replies."""
        if data is None:
            return None
        return [(self._value.deserialize(member), score) for member, score in data]

    def deserialize_hash_key(self, data: bytes | None) -> Any:
        return self._hash_key.deserialize(data)

    def deserialize_hash_keys(self, data: Iterable[bytes] | None) -> set[Any] | None:
        if data is None:
            return None
        return {self._hash_key.deserialize(item) for item in data}

    def deserialize_hash_value(self, data: bytes | None) -> Any:
        return self._hash_value.deserialize(data)

    def deserialize_hash_values(self, data: Iterable[bytes | None] | None) -> list[Any] | None:
        if data is None:
            return None
        return [self._hash_value.deserialize(item) for item in data]

    def deserialize_hash(self, data: Mapping[bytes, bytes] | None) -> dict[Any, Any] | None:
        if data is None:
            return None
        return {
            self._hash_key.deserialize(k): self._hash_value.deserialize(v)
            for k, v in data.items()
        }

    def deserialize_string(self, data: bytes | None) -> str | None:
        return self._string.deserialize(data)

    def deserialize_mixed_results(
        self, results: list[Any] | None, result_serializer: RedisSerializer | None = None
    ) -> list[Any]:
        """
        Decode the replies harvested from a pipeline or transaction.

        Each reply is decoded according to its shape: bytes and collections
        of bytes through the value serializer (or result_serializer), hashes
        through the hash serializers (or result_serializer), scored members
        as (member, score). Integers, floats, booleans and DataType replies
        pass through. A None reply stays None.
        """
        if results is None:
            return []
        value_serializer = result_serializer or self._value
        hash_key_serializer = result_serializer or self._hash_key
        hash_value_serializer = result_serializer or self._hash_value
        return [
            self._deserialize_result(result, value_serializer, hash_key_serializer, hash_value_serializer)
            for result in results
        ]

    def _deserialize_result(self, result, value_serializer, hash_key_serializer, hash_value_serializer):
        if result is None:
            return None
        if isinstance(result, _BINARY):
            return value_serializer.deserialize(bytes(result))
        if isinstance(result, Mapping):
            return {
                hash_key_serializer.deserialize(k): hash_value_serializer.deserialize(v)
                for k, v in result.items()
            }
        if isinstance(result, tuple) and len(result) == 2 and isinstance(result[0], _BINARY):
            return (value_serializer.deserialize(bytes(result[0])), result[1])
        if isinstance(result, (set, frozenset)):
            decoded = [
                self._deserialize_result(item, value_serializer, hash_key_serializer, hash_value_serializer)
                for item in result
            ]
            try:
                return set(decoded)
            except TypeError:
                # unhashable decoded members (e.g. JSON objects)
                return decoded
        if isinstance(result, list):
            return [
                self._deserialize_result(item, value_serializer, hash_key_serializer, hash_value_serializer)
                for item in result
            ]
        return result
