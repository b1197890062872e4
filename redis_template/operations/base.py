"""
Shared plumbing of the operation facades.

Every facade method follows the same three steps:
1. encode arguments through the template's serializers
2. run one command through template.execute() with the raw connection
3. decode the reply (None while pipelined or queueing stays None)
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from redis_template.core.interfaces import StoreConnection
from redis_template.serializer import SerializerSet

if TYPE_CHECKING:
    from redis_template.template.redis_template import RedisTemplate

T = TypeVar("T")


class AbstractOperations:
    """
    Base of ValueOperations, ListOperations, SetOperations, ZSetOperations
    and HashOperations.

    Args:
        template: Initialized template the facade runs through
    """

    def __init__(self, template: "RedisTemplate"):
        self._template = template

    @property
    def template(self) -> "RedisTemplate":
        return self._template

    @property
    def serializers(self) -> SerializerSet:
        return self._template.serializers

    def execute(self, action: Callable[[StoreConnection], T]) -> T:
        return self._template.execute(action, True)

    def raw_key(self, key: Any) -> bytes:
        return self.serializers.raw_key(key)

    def raw_value(self, value: Any) -> bytes | None:
        return self.serializers.raw_value(value)

    def raw_hash_key(self, hash_key: Any) -> bytes | None:
        return self.serializers.raw_hash_key(hash_key)

    def raw_hash_value(self, value: Any) -> bytes | None:
        return self.serializers.raw_hash_value(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._template!r})"
