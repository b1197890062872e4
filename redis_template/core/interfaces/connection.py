"""
Store Connection Protocols

This module defines the structural interfaces the template consumes: a
connection that speaks raw bytes, and the factory that hands connections out.

Architectural Decision: Protocol-based abstraction
- Enables multiple connection implementations (redis-py, in-memory)
- Facilitates testing with fake implementations
- The template never depends on a driver class

Implementations:
- RedisConnection / RedisConnectionFactory: redis-py backed
- InMemoryConnection / InMemoryConnectionFactory: testing and development

Author: System Architect
Date: 2026-03-02
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from redis_template.core.config.constants import DataType
    from redis_template.query.sort_query import SortParameters


@runtime_checkable
class StoreConnection(Protocol):
    """
    A single connection to the store, exclusively owned by one unit of work.

    All keys, values, members and fields are raw bytes. A missing key reads
    back as ``None``.

    Batching:
    - While pipelined (open_pipeline .. close_pipeline) every command returns
      None and its reply is collected by close_pipeline(), in issue order.
    - While queueing (multi .. exec) every command returns None and its reply
      is collected by exec(), in issue order.
    """

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the underlying socket. Suppressed for callbacks by default."""
        ...

    def quit(self) -> None:
        """Ask the server to close the connection. Suppressed for callbacks by default."""
        ...

    def shutdown(self) -> None:
        """Ask the server to shut down. Suppressed for callbacks by default."""
        ...

    def is_closed(self) -> bool:
        ...

    # -------------------------------------------------------------------------
    # Batching
    # -------------------------------------------------------------------------

    def open_pipeline(self) -> None:
        """Start collecting commands instead of sending them one by one."""
        ...

    def close_pipeline(self) -> list[Any]:
        """
        Send all collected commands and return their replies.

        Returns:
            Replies in the order the commands were issued
        """
        ...

    def discard_pipeline(self) -> None:
        """Drop the collected commands without sending them and leave pipeline mode."""
        ...

    def is_pipelined(self) -> bool:
        ...

    def is_queueing(self) -> bool:
        """True between MULTI and EXEC/DISCARD."""
        ...

    def multi(self) -> None:
        ...

    def exec(self) -> list[Any] | None:
        """
        Apply the queued transaction.

        Returns:
            Replies of the queued commands in order, [] when no transaction
            was active, None when the connection is also pipelined (replies
            then arrive with close_pipeline())

        Raises:
            TransactionAbortedError: If a watched key changed
        """
        ...

    def discard(self) -> None:
        ...

    def watch(self, *keys: bytes) -> None:
        ...

    def unwatch(self) -> None:
        ...

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def delete(self, *keys: bytes) -> int | None:
        ...

    def exists(self, key: bytes) -> bool | None:
        ...

    def expire(self, key: bytes, seconds: int) -> bool | None:
        ...

    def expire_at(self, key: bytes, unix_time: int) -> bool | None:
        ...

    def ttl(self, key: bytes) -> int | None:
        """TTL in seconds, -1 if the key has none, -2 if the key does not exist."""
        ...

    def persist(self, key: bytes) -> bool | None:
        ...

    def keys(self, pattern: bytes) -> set[bytes] | None:
        ...

    def random_key(self) -> bytes | None:
        ...

    def rename(self, old_key: bytes, new_key: bytes) -> None:
        ...

    def rename_nx(self, old_key: bytes, new_key: bytes) -> bool | None:
        ...

    def move(self, key: bytes, db_index: int) -> bool | None:
        ...

    def type(self, key: bytes) -> DataType | None:
        ...

    def publish(self, channel: bytes, message: bytes) -> int | None:
        ...

    def sort(
        self, key: bytes, params: SortParameters, store_key: bytes | None = None
    ) -> list[bytes] | int | None:
        """SORT key; returns the sorted elements, or the stored count when store_key is given."""
        ...

    # -------------------------------------------------------------------------
    # Strings
    # -------------------------------------------------------------------------

    def get(self, key: bytes) -> bytes | None:
        ...

    def set(self, key: bytes, value: bytes) -> None:
        ...

    def set_nx(self, key: bytes, value: bytes) -> bool | None:
        ...

    def set_ex(self, key: bytes, seconds: int, value: bytes) -> None:
        ...

    def get_set(self, key: bytes, value: bytes) -> bytes | None:
        ...

    def mget(self, *keys: bytes) -> list[bytes | None] | None:
        ...

    def mset(self, mapping: Mapping[bytes, bytes]) -> None:
        ...

    def mset_nx(self, mapping: Mapping[bytes, bytes]) -> bool | None:
        ...

    def incr_by(self, key: bytes, delta: int) -> int | None:
        ...

    def incr_by_float(self, key: bytes, delta: float) -> float | None:
        ...

    def append(self, key: bytes, value: bytes) -> int | None:
        ...

    def get_range(self, key: bytes, start: int, end: int) -> bytes | None:
        ...

    def set_range(self, key: bytes, offset: int, value: bytes) -> int | None:
        ...

    def strlen(self, key: bytes) -> int | None:
        ...

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def lpush(self, key: bytes, *values: bytes) -> int | None:
        ...

    def rpush(self, key: bytes, *values: bytes) -> int | None:
        ...

    def lpushx(self, key: bytes, value: bytes) -> int | None:
        ...

    def rpushx(self, key: bytes, value: bytes) -> int | None:
        ...

    def lrange(self, key: bytes, start: int, end: int) -> list[bytes] | None:
        ...

    def ltrim(self, key: bytes, start: int, end: int) -> None:
        ...

    def llen(self, key: bytes) -> int | None:
        ...

    def lindex(self, key: bytes, index: int) -> bytes | None:
        ...

    def lset(self, key: bytes, index: int, value: bytes) -> None:
        ...

    def lrem(self, key: bytes, count: int, value: bytes) -> int | None:
        ...

    def lpop(self, key: bytes) -> bytes | None:
        ...

    def rpop(self, key: bytes) -> bytes | None:
        ...

    def rpoplpush(self, src_key: bytes, dst_key: bytes) -> bytes | None:
        ...

    # -------------------------------------------------------------------------
    # Sets
    # -------------------------------------------------------------------------

    def sadd(self, key: bytes, *members: bytes) -> int | None:
        ...

    def srem(self, key: bytes, *members: bytes) -> int | None:
        ...

    def spop(self, key: bytes) -> bytes | None:
        ...

    def smove(self, src_key: bytes, dst_key: bytes, member: bytes) -> bool | None:
        ...

    def scard(self, key: bytes) -> int | None:
        ...

    def sismember(self, key: bytes, member: bytes) -> bool | None:
        ...

    def sinter(self, *keys: bytes) -> set[bytes] | None:
        ...

    def sinter_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        ...

    def sunion(self, *keys: bytes) -> set[bytes] | None:
        ...

    def sunion_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        ...

    def sdiff(self, *keys: bytes) -> set[bytes] | None:
        ...

    def sdiff_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        ...

    def smembers(self, key: bytes) -> set[bytes] | None:
        ...

    def srandmember(self, key: bytes) -> bytes | None:
        ...

    # -------------------------------------------------------------------------
    # Sorted sets
    # -------------------------------------------------------------------------

    def zadd(self, key: bytes, score: float, member: bytes) -> bool | None:
        ...

    def zrem(self, key: bytes, *members: bytes) -> int | None:
        ...

    def zincrby(self, key: bytes, increment: float, member: bytes) -> float | None:
        ...

    def zrank(self, key: bytes, member: bytes) -> int | None:
        ...

    def zrevrank(self, key: bytes, member: bytes) -> int | None:
        ...

    def zrange(
        self, key: bytes, start: int, end: int, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        ...

    def zrevrange(
        self, key: bytes, start: int, end: int, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        ...

    def zrange_by_score(
        self, key: bytes, min_score: float, max_score: float, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        ...

    def zrevrange_by_score(
        self, key: bytes, min_score: float, max_score: float, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        ...

    def zcount(self, key: bytes, min_score: float, max_score: float) -> int | None:
        ...

    def zcard(self, key: bytes) -> int | None:
        ...

    def zscore(self, key: bytes, member: bytes) -> float | None:
        ...

    def zrem_range(self, key: bytes, start: int, end: int) -> int | None:
        ...

    def zrem_range_by_score(self, key: bytes, min_score: float, max_score: float) -> int | None:
        ...

    def zunion_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        ...

    def zinter_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        ...

    # -------------------------------------------------------------------------
    # Hashes
    # -------------------------------------------------------------------------

    def hset(self, key: bytes, field: bytes, value: bytes) -> bool | None:
        ...

    def hset_nx(self, key: bytes, field: bytes, value: bytes) -> bool | None:
        ...

    def hget(self, key: bytes, field: bytes) -> bytes | None:
        ...

    def hmget(self, key: bytes, *fields: bytes) -> list[bytes | None] | None:
        ...

    def hmset(self, key: bytes, mapping: Mapping[bytes, bytes]) -> None:
        ...

    def hincr_by(self, key: bytes, field: bytes, delta: int) -> int | None:
        ...

    def hexists(self, key: bytes, field: bytes) -> bool | None:
        ...

    def hdel(self, key: bytes, *fields: bytes) -> int | None:
        ...

    def hlen(self, key: bytes) -> int | None:
        ...

    def hkeys(self, key: bytes) -> set[bytes] | None:
        ...

    def hvals(self, key: bytes) -> list[bytes] | None:
        ...

    def hgetall(self, key: bytes) -> dict[bytes, bytes] | None:
        ...


@runtime_checkable
class ConnectionFactory(Protocol):
    """
    Hands out connections and takes them back.

    Must be safe to call from several threads at once.
    """

    def get_connection(self) -> StoreConnection:
        """
        Acquire a connection.

        Raises:
            StoreConnectionError: If no connection can be obtained
        """
        ...

    def release_connection(self, connection: StoreConnection) -> None:
        """Return a connection obtained from get_connection()."""
        ...
