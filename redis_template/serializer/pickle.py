"""
Object-graph serializer.

The default for every role except the string role: any picklable object can
be stored. Only read data written by trusted producers; unpickling untrusted
bytes can execute arbitrary code.
"""

import pickle
from typing import Any

from redis_template.core.exceptions import SerializationError
from redis_template.serializer.base import RedisSerializer


class PickleRedisSerializer(RedisSerializer[Any]):
    """
    Serializes arbitrary Python object graphs with :mod:`pickle`.

    Empty stored bytes are never produced by pickle, so they decode to None,
    the same as a missing key. A stored ``0`` or ``""`` decodes to itself.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def serialize(self, value: Any) -> bytes | None:
        if value is None:
            return None
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise SerializationError.from_exception(
                e, message=f"Cannot pickle {type(value).__name__}", value_type=type(value).__name__
            )

    def deserialize(self, data: bytes | None) -> Any:
        if not data:
            return None
        try:
            return pickle.loads(data)
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, IndexError, ValueError) as e:
            raise SerializationError.from_exception(e, message="Cannot unpickle stored value")

    def __repr__(self) -> str:
        return f"PickleRedisSerializer(protocol={self.protocol})"
