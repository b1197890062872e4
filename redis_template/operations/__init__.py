"""
Typed operation facades: one per store data type, plus key-bound variants.
"""

from redis_template.operations.base import AbstractOperations
from redis_template.operations.bound import (
    BoundHashOperations,
    BoundKeyOperations,
    BoundListOperations,
    BoundSetOperations,
    BoundValueOperations,
    BoundZSetOperations,
)
from redis_template.operations.hash import HashOperations
from redis_template.operations.list import ListOperations
from redis_template.operations.set import SetOperations
from redis_template.operations.value import ValueOperations
from redis_template.operations.zset import ZSetOperations

__all__ = [
    "AbstractOperations",
    "ValueOperations",
    "ListOperations",
    "SetOperations",
    "ZSetOperations",
    "HashOperations",
    "BoundKeyOperations",
    "BoundValueOperations",
    "BoundListOperations",
    "BoundSetOperations",
    "BoundZSetOperations",
    "BoundHashOperations",
]
