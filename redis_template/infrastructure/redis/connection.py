"""
redis-py Store Connection

Adapts one dedicated redis-py client to the StoreConnection protocol.

Architecture:
    RedisConnection (StoreConnection)
        ├── redis.Redis (single_connection_client, one socket per unit of work)
        ├── BoundPipeline (transaction=False) while pipelined
        └── BoundPipeline (transaction=True) while watching / inside MULTI

Both pipelines borrow the client's socket, so a unit of work holds exactly
one pooled connection whether it runs direct, pipelined or transactional
commands.

Reply handling:
- Direct commands return their converted reply.
- Buffered commands (pipelined or queued) return None; each records a
  converter that is applied to its reply when close_pipeline()/exec()
  harvests the batch, so batched and direct replies have the same shape.

Error Handling Strategy:
- redis.WatchError           -> TransactionAbortedError
- redis.ConnectionError /
  redis.TimeoutError         -> StoreConnectionError
- other redis.RedisError     -> StoreCommandError
- Every failure is logged with the command name before it is raised.

Author: System Architect
Date: 2026-03-02
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError, WatchError

from redis_template.core.config.constants import DataType, Stage
from redis_template.core.exceptions import (
    InvalidDataAccessUsageError,
    RedisTemplateError,
    StoreCommandError,
    StoreConnectionError,
    TransactionAbortedError,
)
from redis_template.core.logging import get_logger
from redis_template.query.sort_query import Order, SortParameters

logger = get_logger(__name__)

Converter = Callable[[Any], Any] | None


def _to_bool(reply: Any) -> bool | None:
    return None if reply is None else bool(reply)


def _to_none(reply: Any) -> None:
    return None


def _to_set(reply: Any) -> set[bytes] | None:
    return None if reply is None else set(reply)


def _to_float(reply: Any) -> float | None:
    return None if reply is None else float(reply)


def translate_error(error: RedisError, command: str) -> RedisTemplateError:
    """Map a redis-py exception to the template hierarchy."""
    if isinstance(error, WatchError):
        return TransactionAbortedError.from_exception(
            error, message="Transaction aborted: a watched key was modified", command=command
        )
    if isinstance(error, (ConnectionError, TimeoutError)):
        return StoreConnectionError.from_exception(
            error, message=f"Redis {command} failed: {error}", command=command
        )
    return StoreCommandError.from_exception(
        error, message=f"Redis {command} failed: {error}", command=command
    )


class BoundPipeline(redis.client.Pipeline):
    """
    Pipeline that runs on its client's dedicated socket.

    A plain redis-py pipeline checks a second connection out of the pool and
    releases it on reset(). This one borrows client.connection for its whole
    life and never hands it to the pool; the owning client releases it on
    close().

    Args:
        client: redis.Redis created with single_connection_client=True
        transaction: Wrap the buffered commands in MULTI/EXEC
    """

    def __init__(self, client: redis.Redis, transaction: bool):
        super().__init__(client.connection_pool, client.response_callbacks, transaction, None)
        self._borrowed = client.connection
        self.connection = self._borrowed

    def reset(self) -> None:
        connection, self.connection = self.connection, None
        try:
            if self.watching and connection is not None:
                connection.send_command("UNWATCH")
                connection.read_response()
        except ConnectionError:
            connection.disconnect()
        finally:
            # with no connection attached the base reset releases nothing
            super().reset()
            self.connection = self._borrowed


class RedisConnection:
    """
    StoreConnection over a dedicated redis-py client.

    Not thread-safe: a connection belongs to one unit of work at a time.

    Args:
        client: redis.Redis created with single_connection_client=True and
            decode_responses=False
    """

    def __init__(self, client: redis.Redis):
        self._client = client
        self._pipe: redis.client.Pipeline | None = None
        self._pipelined = False
        self._queueing = False
        self._watching = False
        self._converters: list[Converter] = []
        self._closed = False

    @property
    def client(self) -> redis.Redis:
        """The underlying redis-py client."""
        return self._client

    # -------------------------------------------------------------------------
    # Command dispatch
    # -------------------------------------------------------------------------

    def _target(self):
        return self._pipe if self._pipe is not None else self._client

    def _buffering(self) -> bool:
        return self._pipelined or self._queueing

    def _call(self, command: str, *args, convert: Converter = None, **kwargs) -> Any:
        if self._closed:
            raise InvalidDataAccessUsageError(
                f"Cannot run {command} on a closed connection", details={"command": command}
            )
        try:
            reply = getattr(self._target(), command)(*args, **kwargs)
        except RedisError as e:
            logger.error(
                "Redis command failed",
                stage=Stage.REDIS_COMMAND,
                command=command,
                error=str(e),
            )
            raise translate_error(e, command) from e

        if self._buffering():
            self._converters.append(convert)
            return None
        return convert(reply) if convert else reply

    def _harvest(self, command: str) -> list[Any]:
        converters, self._converters = self._converters, []
        try:
            replies = self._pipe.execute()
        except RedisError as e:
            logger.error(
                "Redis batch failed",
                stage=Stage.REDIS_COMMAND,
                command=command,
                commands=len(converters),
                error=str(e),
            )
            raise translate_error(e, command) from e
        finally:
            self._reset_pipe()
        return [
            convert(reply) if convert else reply
            for convert, reply in zip(converters, replies)
        ]

    def _reset_pipe(self) -> None:
        pipe, self._pipe = self._pipe, None
        self._pipelined = self._queueing = self._watching = False
        if pipe is not None:
            pipe.reset()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Drop any batch state and give the socket back to the pool."""
        if self._closed:
            return
        self._converters = []
        try:
            self._reset_pipe()
        finally:
            self._closed = True
            self._client.close()

    def quit(self) -> None:
        self.close()

    def shutdown(self) -> None:
        self._call("shutdown")

    def is_closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Batching
    # -------------------------------------------------------------------------

    def open_pipeline(self) -> None:
        if self._pipelined:
            return
        if self._queueing or self._watching:
            raise InvalidDataAccessUsageError(
                "Cannot open a pipeline inside WATCH/MULTI on a redis connection"
            )
        self._pipe = BoundPipeline(self._client, transaction=False)
        self._pipelined = True
        self._converters = []

    def close_pipeline(self) -> list[Any]:
        if not self._pipelined:
            return []
        return self._harvest("pipeline")

    def discard_pipeline(self) -> None:
        if not self._pipelined:
            return
        self._converters = []
        self._reset_pipe()

    def is_pipelined(self) -> bool:
        return self._pipelined

    def is_queueing(self) -> bool:
        return self._queueing

    def multi(self) -> None:
        if self._pipelined:
            raise InvalidDataAccessUsageError(
                "MULTI inside an open pipeline is not supported on a redis connection"
            )
        if self._queueing:
            raise InvalidDataAccessUsageError("MULTI calls can not be nested")
        if self._pipe is None:
            self._pipe = BoundPipeline(self._client, transaction=True)
        self._pipe.multi()
        self._queueing = True
        self._converters = []

    def exec(self) -> list[Any] | None:
        if not self._queueing:
            return None if self._pipelined else []
        return self._harvest("exec")

    def discard(self) -> None:
        if not self._queueing:
            raise InvalidDataAccessUsageError("DISCARD without MULTI")
        self._converters = []
        self._reset_pipe()

    def watch(self, *keys: bytes) -> None:
        if self._pipelined or self._queueing:
            raise InvalidDataAccessUsageError("WATCH is only allowed before MULTI, outside a pipeline")
        if self._pipe is None:
            self._pipe = BoundPipeline(self._client, transaction=True)
        try:
            self._pipe.watch(*keys)
        except RedisError as e:
            logger.error("Redis command failed", stage=Stage.REDIS_COMMAND, command="watch", error=str(e))
            self._reset_pipe()
            raise translate_error(e, "watch") from e
        self._watching = True

    def unwatch(self) -> None:
        # EXEC/DISCARD drop the watches of a queued transaction anyway
        if self._watching and not self._queueing:
            self._reset_pipe()

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def delete(self, *keys: bytes) -> int | None:
        return self._call("delete", *keys)

    def exists(self, key: bytes) -> bool | None:
        return self._call("exists", key, convert=_to_bool)

    def expire(self, key: bytes, seconds: int) -> bool | None:
        return self._call("expire", key, seconds, convert=_to_bool)

    def expire_at(self, key: bytes, unix_time: int) -> bool | None:
        return self._call("expireat", key, unix_time, convert=_to_bool)

    def ttl(self, key: bytes) -> int | None:
        return self._call("ttl", key)

    def persist(self, key: bytes) -> bool | None:
        return self._call("persist", key, convert=_to_bool)

    def keys(self, pattern: bytes) -> set[bytes] | None:
        return self._call("keys", pattern, convert=_to_set)

    def random_key(self) -> bytes | None:
        return self._call("randomkey")

    def rename(self, old_key: bytes, new_key: bytes) -> None:
        return self._call("rename", old_key, new_key, convert=_to_none)

    def rename_nx(self, old_key: bytes, new_key: bytes) -> bool | None:
        return self._call("renamenx", old_key, new_key, convert=_to_bool)

    def move(self, key: bytes, db_index: int) -> bool | None:
        return self._call("move", key, db_index, convert=_to_bool)

    def type(self, key: bytes) -> DataType | None:
        return self._call("type", key, convert=DataType.from_code)

    def publish(self, channel: bytes, message: bytes) -> int | None:
        return self._call("publish", channel, message)

    def sort(
        self, key: bytes, params: SortParameters, store_key: bytes | None = None
    ) -> list[bytes] | int | None:
        start = num = None
        if params.limit is not None:
            start, num = params.limit.start, params.limit.count
        return self._call(
            "sort",
            key,
            start=start,
            num=num,
            by=params.by_pattern,
            get=list(params.get_patterns) or None,
            desc=params.order is Order.DESC,
            alpha=bool(params.alphabetic),
            store=store_key,
        )

    # -------------------------------------------------------------------------
    # Strings
    # -------------------------------------------------------------------------

    def get(self, key: bytes) -> bytes | None:
        return self._call("get", key)

    def set(self, key: bytes, value: bytes) -> None:
        return self._call("set", key, value, convert=_to_none)

    def set_nx(self, key: bytes, value: bytes) -> bool | None:
        return self._call("set", key, value, nx=True, convert=_to_bool)

    def set_ex(self, key: bytes, seconds: int, value: bytes) -> None:
        return self._call("setex", key, seconds, value, convert=_to_none)

    def get_set(self, key: bytes, value: bytes) -> bytes | None:
        return self._call("getset", key, value)

    def mget(self, *keys: bytes) -> list[bytes | None] | None:
        return self._call("mget", list(keys))

    def mset(self, mapping: Mapping[bytes, bytes]) -> None:
        return self._call("mset", dict(mapping), convert=_to_none)

    def mset_nx(self, mapping: Mapping[bytes, bytes]) -> bool | None:
        return self._call("msetnx", dict(mapping), convert=_to_bool)

    def incr_by(self, key: bytes, delta: int) -> int | None:
        return self._call("incrby", key, delta)

    def incr_by_float(self, key: bytes, delta: float) -> float | None:
        return self._call("incrbyfloat", key, delta, convert=_to_float)

    def append(self, key: bytes, value: bytes) -> int | None:
        return self._call("append", key, value)

    def get_range(self, key: bytes, start: int, end: int) -> bytes | None:
        return self._call("getrange", key, start, end)

    def set_range(self, key: bytes, offset: int, value: bytes) -> int | None:
        return self._call("setrange", key, offset, value)

    def strlen(self, key: bytes) -> int | None:
        return self._call("strlen", key)

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def lpush(self, key: bytes, *values: bytes) -> int | None:
        return self._call("lpush", key, *values)

    def rpush(self, key: bytes, *values: bytes) -> int | None:
        return self._call("rpush", key, *values)

    def lpushx(self, key: bytes, value: bytes) -> int | None:
        return self._call("lpushx", key, value)

    def rpushx(self, key: bytes, value: bytes) -> int | None:
        return self._call("rpushx", key, value)

    def lrange(self, key: bytes, start: int, end: int) -> list[bytes] | None:
        return self._call("lrange", key, start, end)

    def ltrim(self, key: bytes, start: int, end: int) -> None:
        return self._call("ltrim", key, start, end, convert=_to_none)

    def llen(self, key: bytes) -> int | None:
        return self._call("llen", key)

    def lindex(self, key: bytes, index: int) -> bytes | None:
        return self._call("lindex", key, index)

    def lset(self, key: bytes, index: int, value: bytes) -> None:
        return self._call("lset", key, index, value, convert=_to_none)

    def lrem(self, key: bytes, count: int, value: bytes) -> int | None:
        return self._call("lrem", key, count, value)

    def lpop(self, key: bytes) -> bytes | None:
        return self._call("lpop", key)

    def rpop(self, key: bytes) -> bytes | None:
        return self._call("rpop", key)

    def rpoplpush(self, src_key: bytes, dst_key: bytes) -> bytes | None:
        return self._call("rpoplpush", src_key, dst_key)

    # -------------------------------------------------------------------------
    # Sets
    # -------------------------------------------------------------------------

    def sadd(self, key: bytes, *members: bytes) -> int | None:
        return self._call("sadd", key, *members)

    def srem(self, key: bytes, *members: bytes) -> int | None:
        return self._call("srem", key, *members)

    def spop(self, key: bytes) -> bytes | None:
        return self._call("spop", key)

    def smove(self, src_key: bytes, dst_key: bytes, member: bytes) -> bool | None:
        return self._call("smove", src_key, dst_key, member, convert=_to_bool)

    def scard(self, key: bytes) -> int | None:
        return self._call("scard", key)

    def sismember(self, key: bytes, member: bytes) -> bool | None:
        return self._call("sismember", key, member, convert=_to_bool)

    def sinter(self, *keys: bytes) -> set[bytes] | None:
        return self._call("sinter", list(keys), convert=_to_set)

    def sinter_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("sinterstore", dest_key, list(keys))

    def sunion(self, *keys: bytes) -> set[bytes] | None:
        return self._call("sunion", list(keys), convert=_to_set)

    def sunion_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("sunionstore", dest_key, list(keys))

    def sdiff(self, *keys: bytes) -> set[bytes] | None:
        return self._call("sdiff", list(keys), convert=_to_set)

    def sdiff_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("sdiffstore", dest_key, list(keys))

    def smembers(self, key: bytes) -> set[bytes] | None:
        return self._call("smembers", key, convert=_to_set)

    def srandmember(self, key: bytes) -> bytes | None:
        return self._call("srandmember", key)

    # -------------------------------------------------------------------------
    # Sorted sets
    # -------------------------------------------------------------------------

    def zadd(self, key: bytes, score: float, member: bytes) -> bool | None:
        return self._call("zadd", key, {member: score}, convert=_to_bool)

    def zrem(self, key: bytes, *members: bytes) -> int | None:
        return self._call("zrem", key, *members)

    def zincrby(self, key: bytes, increment: float, member: bytes) -> float | None:
        return self._call("zincrby", key, increment, member, convert=_to_float)

    def zrank(self, key: bytes, member: bytes) -> int | None:
        return self._call("zrank", key, member)

    def zrevrank(self, key: bytes, member: bytes) -> int | None:
        return self._call("zrevrank", key, member)

    def zrange(
        self, key: bytes, start: int, end: int, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call("zrange", key, start, end, withscores=with_scores)

    def zrevrange(
        self, key: bytes, start: int, end: int, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call("zrevrange", key, start, end, withscores=with_scores)

    def zrange_by_score(
        self, key: bytes, min_score: float, max_score: float, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call("zrangebyscore", key, min_score, max_score, withscores=with_scores)

    def zrevrange_by_score(
        self, key: bytes, min_score: float, max_score: float, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        # ZREVRANGEBYSCORE takes max before min
        return self._call("zrevrangebyscore", key, max_score, min_score, withscores=with_scores)

    def zcount(self, key: bytes, min_score: float, max_score: float) -> int | None:
        return self._call("zcount", key, min_score, max_score)

    def zcard(self, key: bytes) -> int | None:
        return self._call("zcard", key)

    def zscore(self, key: bytes, member: bytes) -> float | None:
        return self._call("zscore", key, member, convert=_to_float)

    def zrem_range(self, key: bytes, start: int, end: int) -> int | None:
        return self._call("zremrangebyrank", key, start, end)

    def zrem_range_by_score(self, key: bytes, min_score: float, max_score: float) -> int | None:
        return self._call("zremrangebyscore", key, min_score, max_score)

    def zunion_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("zunionstore", dest_key, list(keys))

    def zinter_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("zinterstore", dest_key, list(keys))

    # -------------------------------------------------------------------------
    # Hashes
    # -------------------------------------------------------------------------

    def hset(self, key: bytes, field: bytes, value: bytes) -> bool | None:
        return self._call("hset", key, field, value, convert=_to_bool)

    def hset_nx(self, key: bytes, field: bytes, value: bytes) -> bool | None:
        return self._call("hsetnx", key, field, value, convert=_to_bool)

    def hget(self, key: bytes, field: bytes) -> bytes | None:
        return self._call("hget", key, field)

    def hmget(self, key: bytes, *fields: bytes) -> list[bytes | None] | None:
        return self._call("hmget", key, list(fields))

    def hmset(self, key: bytes, mapping: Mapping[bytes, bytes]) -> None:
        return self._call("hset", key, mapping=dict(mapping), convert=_to_none)

    def hincr_by(self, key: bytes, field: bytes, delta: int) -> int | None:
        return self._call("hincrby", key, field, delta)

    def hexists(self, key: bytes, field: bytes) -> bool | None:
        return self._call("hexists", key, field, convert=_to_bool)

    def hdel(self, key: bytes, *fields: bytes) -> int | None:
        return self._call("hdel", key, *fields)

    def hlen(self, key: bytes) -> int | None:
        return self._call("hlen", key)

    def hkeys(self, key: bytes) -> set[bytes] | None:
        return self._call("hkeys", key, convert=_to_set)

    def hvals(self, key: bytes) -> list[bytes] | None:
        return self._call("hvals", key)

    def hgetall(self, key: bytes) -> dict[bytes, bytes] | None:
        return self._call("hgetall", key)

    def __repr__(self) -> str:
        return (
            f"RedisConnection(pipelined={self._pipelined}, queueing={self._queueing}, "
            f"closed={self._closed})"
        )
