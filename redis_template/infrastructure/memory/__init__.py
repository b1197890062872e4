from redis_template.infrastructure.memory.connection import InMemoryConnection, InMemoryConnectionFactory
from redis_template.infrastructure.memory.store import InMemoryStore, SortedSet

__all__ = [
    "InMemoryConnection",
    "InMemoryConnectionFactory",
    "InMemoryStore",
    "SortedSet",
]
