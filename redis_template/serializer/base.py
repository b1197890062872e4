"""
Serializer base class.

A serializer maps a Python value to the bytes stored in Redis and back.
``None`` stands for "no value" in both directions: serializing None yields
None, and deserializing the store's missing-key reply (None) yields None.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class RedisSerializer(ABC, Generic[T]):
    """Bidirectional mapping between values of type T and raw bytes."""

    @abstractmethod
    def serialize(self, value: T | None) -> bytes | None:
        """
        Encode a value.

        Raises:
            SerializationError: If the value cannot be encoded
        """

    @abstractmethod
    def deserialize(self, data: bytes | None) -> T | None:
        """
        Decode stored bytes.

        Raises:
            SerializationError: If the bytes cannot be decoded
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RawRedisSerializer(RedisSerializer[bytes]):
    """Pass-through serializer for callers that want the stored bytes untouched."""

    def serialize(self, value: bytes | None) -> bytes | None:
        if value is None:
            return None
        return bytes(value)

    def deserialize(self, data: bytes | None) -> bytes | None:
        return data
