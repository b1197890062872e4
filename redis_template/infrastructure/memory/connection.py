"""
In-memory Store Connection

StoreConnection implementation over a process-local InMemoryStore, for tests
and development. Implements the same batching contract as the redis binding:

- Pipelined or queued commands return None and are collected
- close_pipeline()/exec() apply the collected commands under the store lock,
  in issue order, and return their replies
- WATCH records key versions; EXEC raises TransactionAbortedError if any of
  them moved
- MULTI inside a pipeline, and a pipeline inside WATCH/MULTI, are rejected

Note: Connections are not thread-safe; the factory and the store are.

Author: System Architect
Date: 2026-03-02
"""

from __future__ import annotations

import fnmatch
import random
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any

from redis_template.core.config.constants import DataType, Stage
from redis_template.core.exceptions import (
    InvalidDataAccessUsageError,
    StoreCommandError,
    TransactionAbortedError,
)
from redis_template.core.interfaces import StoreConnection
from redis_template.core.logging import get_logger
from redis_template.infrastructure.memory.store import InMemoryStore, SortedSet
from redis_template.query.sort_query import Order, SortParameters

logger = get_logger(__name__)


def _bounds(length: int, start: int, end: int) -> tuple[int, int]:
    """Inclusive store-style (start, end) with negative indexes -> Python slice bounds."""
    if start < 0:
        start = max(length + start, 0)
    if end < 0:
        end = length + end
    end = min(end, length - 1)
    if start > end or start >= length:
        return 0, 0
    return start, end + 1


def _parse_int(raw: bytes | None) -> int:
    if raw is None:
        return 0
    try:
        return int(raw)
    except ValueError:
        raise StoreCommandError("ERR value is not an integer or out of range") from None


def _parse_float(raw: bytes | None) -> float:
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        raise StoreCommandError("ERR value is not a valid float") from None


def _format_float(value: float) -> bytes:
    if value.is_integer():
        return str(int(value)).encode()
    return repr(value).encode()


class InMemoryConnection:
    """
    StoreConnection over an InMemoryStore.

    Args:
        store: Shared keyspace
        db: Database index this connection works on
    """

    def __init__(self, store: InMemoryStore, db: int = 0):
        self._store = store
        self._db = db
        self._pipelined = False
        self._queueing = False
        self._queue: list[tuple[str, Callable[[], Any]]] = []
        self._watched: dict[bytes, int] = {}
        self._closed = False

    @property
    def db(self) -> int:
        return self._db

    # -------------------------------------------------------------------------
    # Command dispatch
    # -------------------------------------------------------------------------

    def _call(self, command: str, fn: Callable[[], Any]) -> Any:
        if self._closed:
            raise InvalidDataAccessUsageError(
                f"Cannot run {command} on a closed connection", details={"command": command}
            )
        if self._pipelined or self._queueing:
            self._queue.append((command, fn))
            return None
        with self._store.lock:
            try:
                return fn()
            except StoreCommandError as e:
                logger.error("In-memory command failed", stage=Stage.REDIS_COMMAND, command=command, error=str(e))
                raise

    def _apply(self, queue: list[tuple[str, Callable[[], Any]]]) -> list[Any]:
        """Run a collected batch. Every command runs; the first failure is raised afterwards."""
        results: list[Any] = []
        first_error: StoreCommandError | None = None
        for command, fn in queue:
            try:
                results.append(fn())
            except StoreCommandError as e:
                logger.error("In-memory command failed", stage=Stage.REDIS_COMMAND, command=command, error=str(e))
                first_error = first_error or e
                results.append(e)
        if first_error is not None:
            raise first_error
        return results

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Drop batch state and watches; further commands are rejected."""
        self._queue = []
        self._watched = {}
        self._pipelined = self._queueing = False
        self._closed = True

    def quit(self) -> None:
        self.close()

    def shutdown(self) -> None:
        self._store.flush()

    def is_closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Batching
    # -------------------------------------------------------------------------

    def open_pipeline(self) -> None:
        if self._pipelined:
            return
        if self._queueing or self._watched:
            raise InvalidDataAccessUsageError("Cannot open a pipeline inside WATCH/MULTI")
        self._pipelined = True
        self._queue = []

    def close_pipeline(self) -> list[Any]:
        if not self._pipelined:
            return []
        queue, self._queue = self._queue, []
        self._pipelined = False
        with self._store.lock:
            return self._apply(queue)

    def discard_pipeline(self) -> None:
        self._queue = []
        self._pipelined = False

    def is_pipelined(self) -> bool:
        return self._pipelined

    def is_queueing(self) -> bool:
        return self._queueing

    def multi(self) -> None:
        if self._pipelined:
            raise InvalidDataAccessUsageError("MULTI inside an open pipeline is not supported")
        if self._queueing:
            raise InvalidDataAccessUsageError("MULTI calls can not be nested")
        self._queueing = True
        self._queue = []

    def exec(self) -> list[Any] | None:
        if not self._queueing:
            return None if self._pipelined else []
        queue, self._queue = self._queue, []
        watched, self._watched = self._watched, {}
        self._queueing = False
        with self._store.lock:
            changed = [key for key, version in watched.items() if self._store.version(self._db, key) != version]
            if changed:
                raise TransactionAbortedError(
                    "Transaction aborted: a watched key was modified",
                    details={"keys": changed},
                )
            return self._apply(queue)

    def discard(self) -> None:
        if not self._queueing:
            raise InvalidDataAccessUsageError("DISCARD without MULTI")
        self._queue = []
        self._watched = {}
        self._queueing = False

    def watch(self, *keys: bytes) -> None:
        if self._pipelined or self._queueing:
            raise InvalidDataAccessUsageError("WATCH is only allowed before MULTI, outside a pipeline")
        with self._store.lock:
            for key in keys:
                self._watched.setdefault(key, self._store.version(self._db, key))

    def unwatch(self) -> None:
        if not self._queueing:
            self._watched = {}

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def delete(self, *keys: bytes) -> int | None:
        return self._call("delete", lambda: sum(self._store.remove(self._db, key) for key in keys))

    def exists(self, key: bytes) -> bool | None:
        return self._call("exists", lambda: self._store.lookup(self._db, key) is not None)

    def _expire_at(self, key: bytes, deadline: float) -> bool:
        if self._store.lookup(self._db, key) is None:
            return False
        if deadline <= time.time():
            self._store.remove(self._db, key)
        else:
            self._store.set_deadline(self._db, key, deadline)
        return True

    def expire(self, key: bytes, seconds: int) -> bool | None:
        return self._call("expire", lambda: self._expire_at(key, time.time() + seconds))

    def expire_at(self, key: bytes, unix_time: int) -> bool | None:
        return self._call("expireat", lambda: self._expire_at(key, unix_time))

    def _ttl(self, key: bytes) -> int:
        if self._store.lookup(self._db, key) is None:
            return -2
        deadline = self._store.deadline(self._db, key)
        if deadline is None:
            return -1
        return max(0, round(deadline - time.time()))

    def ttl(self, key: bytes) -> int | None:
        return self._call("ttl", lambda: self._ttl(key))

    def persist(self, key: bytes) -> bool | None:
        return self._call(
            "persist",
            lambda: self._store.lookup(self._db, key) is not None and self._store.clear_deadline(self._db, key),
        )

    def _keys(self, pattern: bytes) -> set[bytes]:
        text_pattern = pattern.decode("latin-1")
        return {
            key for key in self._store.live_keys(self._db)
            if fnmatch.fnmatchcase(key.decode("latin-1"), text_pattern)
        }

    def keys(self, pattern: bytes) -> set[bytes] | None:
        return self._call("keys", lambda: self._keys(pattern))

    def _random_key(self) -> bytes | None:
        keys = self._store.live_keys(self._db)
        return random.choice(keys) if keys else None

    def random_key(self) -> bytes | None:
        return self._call("randomkey", self._random_key)

    def _rename(self, old_key: bytes, new_key: bytes, if_absent: bool) -> bool:
        value = self._store.lookup(self._db, old_key)
        if value is None:
            raise StoreCommandError("ERR no such key", details={"key": old_key})
        if old_key == new_key:
            return not if_absent
        if if_absent and self._store.lookup(self._db, new_key) is not None:
            return False
        deadline = self._store.deadline(self._db, old_key)
        self._store.remove(self._db, old_key)
        self._store.put(self._db, new_key, value)
        if deadline is not None:
            self._store.set_deadline(self._db, new_key, deadline)
        return True

    def rename(self, old_key: bytes, new_key: bytes) -> None:
        self._call("rename", lambda: self._rename(old_key, new_key, False) and None)

    def rename_nx(self, old_key: bytes, new_key: bytes) -> bool | None:
        return self._call("renamenx", lambda: self._rename(old_key, new_key, True))

    def _move(self, key: bytes, db_index: int) -> bool:
        if db_index == self._db:
            raise StoreCommandError("ERR source and destination objects are the same")
        value = self._store.lookup(self._db, key)
        if value is None or self._store.lookup(db_index, key) is not None:
            return False
        deadline = self._store.deadline(self._db, key)
        self._store.remove(self._db, key)
        self._store.put(db_index, key, value)
        if deadline is not None:
            self._store.set_deadline(db_index, key, deadline)
        return True

    def move(self, key: bytes, db_index: int) -> bool | None:
        return self._call("move", lambda: self._move(key, db_index))

    def type(self, key: bytes) -> DataType | None:
        return self._call("type", lambda: self._store.type_of(self._db, key))

    def publish(self, channel: bytes, message: bytes) -> int | None:
        # no subscribers exist in a process-local store
        return self._call("publish", lambda: 0)

    def _lookup_pattern(self, pattern: bytes, element: bytes) -> bytes | None:
        if pattern == b"#":
            return element
        key_pattern, _, field = pattern.partition(b"->")
        value = self._store.lookup(self._db, key_pattern.replace(b"*", element, 1))
        if not field:
            return value if isinstance(value, bytes) else None
        if isinstance(value, dict) and not isinstance(value, SortedSet):
            return value.get(field)
        return None

    def _sort(self, key: bytes, params: SortParameters, store_key: bytes | None) -> list[bytes] | int:
        value = self._store.lookup(self._db, key)
        if value is None:
            elements: list[bytes] = []
        elif isinstance(value, SortedSet):
            elements = [member for member, _ in value.ordered()]
        elif isinstance(value, (list, set)):
            elements = list(value)
        else:
            raise StoreCommandError("WRONGTYPE Operation against a key holding the wrong kind of value")

        by = params.by_pattern
        if by is None or b"*" in by:
            def weight(element: bytes):
                raw = element if by is None else self._lookup_pattern(by, element)
                if params.alphabetic:
                    return raw or b""
                if raw is None:
                    return 0.0
                try:
                    return float(raw)
                except ValueError:
                    raise StoreCommandError("ERR One or more scores can't be converted into double") from None

            elements.sort(key=weight, reverse=params.order is Order.DESC)

        if params.limit is not None:
            elements = elements[params.limit.start:params.limit.start + params.limit.count]

        if params.get_patterns:
            result = [
                self._lookup_pattern(pattern, element)
                for element in elements
                for pattern in params.get_patterns
            ]
        else:
            result = elements

        if store_key is None:
            return result
        stored = [item if item is not None else b"" for item in result]
        if stored:
            self._store.put(self._db, store_key, stored)
        else:
            self._store.remove(self._db, store_key)
        return len(stored)

    def sort(
        self, key: bytes, params: SortParameters, store_key: bytes | None = None
    ) -> list[bytes] | int | None:
        return self._call("sort", lambda: self._sort(key, params, store_key))

    # -------------------------------------------------------------------------
    # Strings
    # -------------------------------------------------------------------------

    def _string(self, key: bytes) -> bytes | None:
        return self._store.typed(self._db, key, bytes)

    def get(self, key: bytes) -> bytes | None:
        return self._call("get", lambda: self._string(key))

    def set(self, key: bytes, value: bytes) -> None:
        self._call("set", lambda: self._store.put(self._db, key, value))

    def _set_nx(self, key: bytes, value: bytes) -> bool:
        if self._store.lookup(self._db, key) is not None:
            return False
        self._store.put(self._db, key, value)
        return True

    def set_nx(self, key: bytes, value: bytes) -> bool | None:
        return self._call("setnx", lambda: self._set_nx(key, value))

    def _set_ex(self, key: bytes, seconds: int, value: bytes) -> None:
        if seconds <= 0:
            raise StoreCommandError("ERR invalid expire time in 'setex' command")
        self._store.put(self._db, key, value)
        self._store.set_deadline(self._db, key, time.time() + seconds)

    def set_ex(self, key: bytes, seconds: int, value: bytes) -> None:
        self._call("setex", lambda: self._set_ex(key, seconds, value))

    def _get_set(self, key: bytes, value: bytes) -> bytes | None:
        previous = self._string(key)
        self._store.put(self._db, key, value)
        return previous

    def get_set(self, key: bytes, value: bytes) -> bytes | None:
        return self._call("getset", lambda: self._get_set(key, value))

    def _mget(self, keys: tuple[bytes, ...]) -> list[bytes | None]:
        values = (self._store.lookup(self._db, key) for key in keys)
        return [value if isinstance(value, bytes) else None for value in values]

    def mget(self, *keys: bytes) -> list[bytes | None] | None:
        return self._call("mget", lambda: self._mget(keys))

    def _mset(self, mapping: dict[bytes, bytes]) -> None:
        for key, value in mapping.items():
            self._store.put(self._db, key, value)

    def mset(self, mapping: Mapping[bytes, bytes]) -> None:
        mapping = dict(mapping)
        self._call("mset", lambda: self._mset(mapping))

    def _mset_nx(self, mapping: dict[bytes, bytes]) -> bool:
        if any(self._store.lookup(self._db, key) is not None for key in mapping):
            return False
        self._mset(mapping)
        return True

    def mset_nx(self, mapping: Mapping[bytes, bytes]) -> bool | None:
        mapping = dict(mapping)
        return self._call("msetnx", lambda: self._mset_nx(mapping))

    def _incr_by(self, key: bytes, delta: int) -> int:
        value = _parse_int(self._string(key)) + delta
        self._store.put(self._db, key, str(value).encode(), keep_ttl=True)
        return value

    def incr_by(self, key: bytes, delta: int) -> int | None:
        return self._call("incrby", lambda: self._incr_by(key, delta))

    def _incr_by_float(self, key: bytes, delta: float) -> float:
        value = _parse_float(self._string(key)) + delta
        self._store.put(self._db, key, _format_float(value), keep_ttl=True)
        return value

    def incr_by_float(self, key: bytes, delta: float) -> float | None:
        return self._call("incrbyfloat", lambda: self._incr_by_float(key, delta))

    def _append(self, key: bytes, value: bytes) -> int:
        updated = (self._string(key) or b"") + value
        self._store.put(self._db, key, updated, keep_ttl=True)
        return len(updated)

    def append(self, key: bytes, value: bytes) -> int | None:
        return self._call("append", lambda: self._append(key, value))

    def _get_range(self, key: bytes, start: int, end: int) -> bytes:
        value = self._string(key) or b""
        lo, hi = _bounds(len(value), start, end)
        return value[lo:hi]

    def get_range(self, key: bytes, start: int, end: int) -> bytes | None:
        return self._call("getrange", lambda: self._get_range(key, start, end))

    def _set_range(self, key: bytes, offset: int, value: bytes) -> int:
        if offset < 0:
            raise StoreCommandError("ERR offset is out of range")
        current = self._string(key) or b""
        if len(current) < offset:
            current += b"\x00" * (offset - len(current))
        updated = current[:offset] + value + current[offset + len(value):]
        self._store.put(self._db, key, updated, keep_ttl=True)
        return len(updated)

    def set_range(self, key: bytes, offset: int, value: bytes) -> int | None:
        return self._call("setrange", lambda: self._set_range(key, offset, value))

    def strlen(self, key: bytes) -> int | None:
        return self._call("strlen", lambda: len(self._string(key) or b""))

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def _list(self, key: bytes, create: bool = False) -> list[bytes] | None:
        return self._store.typed(self._db, key, list, create)

    def _push(self, key: bytes, values: tuple[bytes, ...], left: bool, only_existing: bool) -> int:
        if only_existing and self._list(key) is None:
            return 0
        items = self._list(key, create=True)
        for value in values:
            if left:
                items.insert(0, value)
            else:
                items.append(value)
        self._store.touch(self._db, key)
        self._store.cleanup(self._db, key)
        return len(items)

    def lpush(self, key: bytes, *values: bytes) -> int | None:
        return self._call("lpush", lambda: self._push(key, values, True, False))

    def rpush(self, key: bytes, *values: bytes) -> int | None:
        return self._call("rpush", lambda: self._push(key, values, False, False))

    def lpushx(self, key: bytes, value: bytes) -> int | None:
        return self._call("lpushx", lambda: self._push(key, (value,), True, True))

    def rpushx(self, key: bytes, value: bytes) -> int | None:
        return self._call("rpushx", lambda: self._push(key, (value,), False, True))

    def _lrange(self, key: bytes, start: int, end: int) -> list[bytes]:
        items = self._list(key) or []
        lo, hi = _bounds(len(items), start, end)
        return items[lo:hi]

    def lrange(self, key: bytes, start: int, end: int) -> list[bytes] | None:
        return self._call("lrange", lambda: self._lrange(key, start, end))

    def _ltrim(self, key: bytes, start: int, end: int) -> None:
        items = self._list(key)
        if items is None:
            return
        lo, hi = _bounds(len(items), start, end)
        items[:] = items[lo:hi]
        self._store.touch(self._db, key)
        self._store.cleanup(self._db, key)

    def ltrim(self, key: bytes, start: int, end: int) -> None:
        self._call("ltrim", lambda: self._ltrim(key, start, end))

    def llen(self, key: bytes) -> int | None:
        return self._call("llen", lambda: len(self._list(key) or []))

    def _lindex(self, key: bytes, index: int) -> bytes | None:
        items = self._list(key) or []
        if -len(items) <= index < len(items):
            return items[index]
        return None

    def lindex(self, key: bytes, index: int) -> bytes | None:
        return self._call("lindex", lambda: self._lindex(key, index))

    def _lset(self, key: bytes, index: int, value: bytes) -> None:
        items = self._list(key)
        if items is None:
            raise StoreCommandError("ERR no such key", details={"key": key})
        if not -len(items) <= index < len(items):
            raise StoreCommandError("ERR index out of range", details={"index": index})
        items[index] = value
        self._store.touch(self._db, key)

    def lset(self, key: bytes, index: int, value: bytes) -> None:
        self._call("lset", lambda: self._lset(key, index, value))

    def _lrem(self, key: bytes, count: int, value: bytes) -> int:
        items = self._list(key)
        if items is None:
            return 0
        limit = abs(count) or len(items)
        positions = range(len(items)) if count >= 0 else range(len(items) - 1, -1, -1)
        doomed = [i for i in positions if items[i] == value][:limit]
        for i in sorted(doomed, reverse=True):
            del items[i]
        if doomed:
            self._store.touch(self._db, key)
            self._store.cleanup(self._db, key)
        return len(doomed)

    def lrem(self, key: bytes, count: int, value: bytes) -> int | None:
        return self._call("lrem", lambda: self._lrem(key, count, value))

    def _pop(self, key: bytes, left: bool) -> bytes | None:
        items = self._list(key)
        if not items:
            return None
        value = items.pop(0 if left else -1)
        self._store.touch(self._db, key)
        self._store.cleanup(self._db, key)
        return value

    def lpop(self, key: bytes) -> bytes | None:
        return self._call("lpop", lambda: self._pop(key, True))

    def rpop(self, key: bytes) -> bytes | None:
        return self._call("rpop", lambda: self._pop(key, False))

    def _rpoplpush(self, src_key: bytes, dst_key: bytes) -> bytes | None:
        self._list(dst_key)
        value = self._pop(src_key, False)
        if value is not None:
            self._push(dst_key, (value,), True, False)
        return value

    def rpoplpush(self, src_key: bytes, dst_key: bytes) -> bytes | None:
        return self._call("rpoplpush", lambda: self._rpoplpush(src_key, dst_key))

    # -------------------------------------------------------------------------
    # Sets
    # -------------------------------------------------------------------------

    def _set(self, key: bytes, create: bool = False) -> set[bytes] | None:
        return self._store.typed(self._db, key, set, create)

    def _sadd(self, key: bytes, members: tuple[bytes, ...]) -> int:
        items = self._set(key, create=True)
        added = len(set(members) - items)
        items.update(members)
        self._store.touch(self._db, key)
        self._store.cleanup(self._db, key)
        return added

    def sadd(self, key: bytes, *members: bytes) -> int | None:
        return self._call("sadd", lambda: self._sadd(key, members))

    def _srem(self, key: bytes, members: tuple[bytes, ...]) -> int:
        items = self._set(key)
        if items is None:
            return 0
        removed = len(items & set(members))
        items.difference_update(members)
        if removed:
            self._store.touch(self._db, key)
            self._store.cleanup(self._db, key)
        return removed

    def srem(self, key: bytes, *members: bytes) -> int | None:
        return self._call("srem", lambda: self._srem(key, members))

    def _spop(self, key: bytes) -> bytes | None:
        items = self._set(key)
        if not items:
            return None
        member = random.choice(list(items))
        self._srem(key, (member,))
        return member

    def spop(self, key: bytes) -> bytes | None:
        return self._call("spop", lambda: self._spop(key))

    def _smove(self, src_key: bytes, dst_key: bytes, member: bytes) -> bool:
        self._set(dst_key)
        if not self._srem(src_key, (member,)):
            return False
        self._sadd(dst_key, (member,))
        return True

    def smove(self, src_key: bytes, dst_key: bytes, member: bytes) -> bool | None:
        return self._call("smove", lambda: self._smove(src_key, dst_key, member))

    def scard(self, key: bytes) -> int | None:
        return self._call("scard", lambda: len(self._set(key) or ()))

    def sismember(self, key: bytes, member: bytes) -> bool | None:
        return self._call("sismember", lambda: member in (self._set(key) or ()))

    def _combine(self, keys: tuple[bytes, ...], how: str) -> set[bytes]:
        sets = [set(self._set(key) or ()) for key in keys]
        if not sets:
            return set()
        if how == "inter":
            return set.intersection(*sets)
        if how == "union":
            return set.union(*sets)
        return sets[0].difference(*sets[1:])

    def _combine_store(self, dest_key: bytes, keys: tuple[bytes, ...], how: str) -> int:
        result = self._combine(keys, how)
        if result:
            self._store.put(self._db, dest_key, result)
        else:
            self._store.remove(self._db, dest_key)
        return len(result)

    def sinter(self, *keys: bytes) -> set[bytes] | None:
        return self._call("sinter", lambda: self._combine(keys, "inter"))

    def sinter_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("sinterstore", lambda: self._combine_store(dest_key, keys, "inter"))

    def sunion(self, *keys: bytes) -> set[bytes] | None:
        return self._call("sunion", lambda: self._combine(keys, "union"))

    def sunion_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("sunionstore", lambda: self._combine_store(dest_key, keys, "union"))

    def sdiff(self, *keys: bytes) -> set[bytes] | None:
        return self._call("sdiff", lambda: self._combine(keys, "diff"))

    def sdiff_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("sdiffstore", lambda: self._combine_store(dest_key, keys, "diff"))

    def smembers(self, key: bytes) -> set[bytes] | None:
        return self._call("smembers", lambda: set(self._set(key) or ()))

    def _srandmember(self, key: bytes) -> bytes | None:
        items = self._set(key)
        return random.choice(list(items)) if items else None

    def srandmember(self, key: bytes) -> bytes | None:
        return self._call("srandmember", lambda: self._srandmember(key))

    # -------------------------------------------------------------------------
    # Sorted sets
    # -------------------------------------------------------------------------

    def _zset(self, key: bytes, create: bool = False) -> SortedSet | None:
        return self._store.typed(self._db, key, SortedSet, create)

    def _zadd(self, key: bytes, score: float, member: bytes) -> bool:
        items = self._zset(key, create=True)
        added = member not in items
        items[member] = float(score)
        self._store.touch(self._db, key)
        return added

    def zadd(self, key: bytes, score: float, member: bytes) -> bool | None:
        return self._call("zadd", lambda: self._zadd(key, score, member))

    def _zrem(self, key: bytes, members: tuple[bytes, ...]) -> int:
        items = self._zset(key)
        if items is None:
            return 0
        removed = sum(items.pop(member, None) is not None for member in members)
        if removed:
            self._store.touch(self._db, key)
            self._store.cleanup(self._db, key)
        return removed

    def zrem(self, key: bytes, *members: bytes) -> int | None:
        return self._call("zrem", lambda: self._zrem(key, members))

    def _zincrby(self, key: bytes, increment: float, member: bytes) -> float:
        items = self._zset(key, create=True)
        items[member] = items.get(member, 0.0) + increment
        self._store.touch(self._db, key)
        return items[member]

    def zincrby(self, key: bytes, increment: float, member: bytes) -> float | None:
        return self._call("zincrby", lambda: self._zincrby(key, increment, member))

    def _zrank(self, key: bytes, member: bytes, reverse: bool) -> int | None:
        ordered = [m for m, _ in (self._zset(key) or SortedSet()).ordered()]
        if member not in ordered:
            return None
        rank = ordered.index(member)
        return len(ordered) - 1 - rank if reverse else rank

    def zrank(self, key: bytes, member: bytes) -> int | None:
        return self._call("zrank", lambda: self._zrank(key, member, False))

    def zrevrank(self, key: bytes, member: bytes) -> int | None:
        return self._call("zrevrank", lambda: self._zrank(key, member, True))

    @staticmethod
    def _shape(items: list[tuple[bytes, float]], with_scores: bool) -> list[Any]:
        return list(items) if with_scores else [member for member, _ in items]

    def _zrange(self, key: bytes, start: int, end: int, with_scores: bool, reverse: bool) -> list[Any]:
        ordered = (self._zset(key) or SortedSet()).ordered()
        if reverse:
            ordered.reverse()
        lo, hi = _bounds(len(ordered), start, end)
        return self._shape(ordered[lo:hi], with_scores)

    def zrange(
        self, key: bytes, start: int, end: int, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call("zrange", lambda: self._zrange(key, start, end, with_scores, False))

    def zrevrange(
        self, key: bytes, start: int, end: int, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call("zrevrange", lambda: self._zrange(key, start, end, with_scores, True))

    def _by_score(self, key: bytes, min_score: float, max_score: float) -> list[tuple[bytes, float]]:
        ordered = (self._zset(key) or SortedSet()).ordered()
        return [(member, score) for member, score in ordered if min_score <= score <= max_score]

    def zrange_by_score(
        self, key: bytes, min_score: float, max_score: float, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call(
            "zrangebyscore",
            lambda: self._shape(self._by_score(key, min_score, max_score), with_scores),
        )

    def zrevrange_by_score(
        self, key: bytes, min_score: float, max_score: float, with_scores: bool = False
    ) -> list[bytes] | list[tuple[bytes, float]] | None:
        return self._call(
            "zrevrangebyscore",
            lambda: self._shape(self._by_score(key, min_score, max_score)[::-1], with_scores),
        )

    def zcount(self, key: bytes, min_score: float, max_score: float) -> int | None:
        return self._call("zcount", lambda: len(self._by_score(key, min_score, max_score)))

    def zcard(self, key: bytes) -> int | None:
        return self._call("zcard", lambda: len(self._zset(key) or ()))

    def zscore(self, key: bytes, member: bytes) -> float | None:
        return self._call("zscore", lambda: (self._zset(key) or SortedSet()).get(member))

    def _zrem_range(self, key: bytes, start: int, end: int) -> int:
        ordered = (self._zset(key) or SortedSet()).ordered()
        lo, hi = _bounds(len(ordered), start, end)
        return self._zrem(key, tuple(member for member, _ in ordered[lo:hi]))

    def zrem_range(self, key: bytes, start: int, end: int) -> int | None:
        return self._call("zremrangebyrank", lambda: self._zrem_range(key, start, end))

    def zrem_range_by_score(self, key: bytes, min_score: float, max_score: float) -> int | None:
        return self._call(
            "zremrangebyscore",
            lambda: self._zrem(key, tuple(member for member, _ in self._by_score(key, min_score, max_score))),
        )

    def _zscores(self, key: bytes) -> dict[bytes, float]:
        value = self._store.lookup(self._db, key)
        if isinstance(value, set):
            return dict.fromkeys(value, 1.0)
        return dict(self._zset(key) or {})

    def _zstore(self, dest_key: bytes, keys: tuple[bytes, ...], intersect: bool) -> int:
        sources = [self._zscores(key) for key in keys]
        result = SortedSet()
        if sources:
            members = set(sources[0])
            for source in sources[1:]:
                members = members & set(source) if intersect else members | set(source)
            for member in members:
                result[member] = sum(source.get(member, 0.0) for source in sources)
        if result:
            self._store.put(self._db, dest_key, result)
        else:
            self._store.remove(self._db, dest_key)
        return len(result)

    def zunion_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("zunionstore", lambda: self._zstore(dest_key, keys, False))

    def zinter_store(self, dest_key: bytes, *keys: bytes) -> int | None:
        return self._call("zinterstore", lambda: self._zstore(dest_key, keys, True))

    # -------------------------------------------------------------------------
    # Hashes
    # -------------------------------------------------------------------------

    def _hash(self, key: bytes, create: bool = False) -> dict[bytes, bytes] | None:
        return self._store.typed(self._db, key, dict, create)

    def _hset(self, key: bytes, field: bytes, value: bytes, if_absent: bool) -> bool:
        items = self._hash(key, create=True)
        if field in items:
            if if_absent:
                return False
            items[field] = value
            self._store.touch(self._db, key)
            return False
        items[field] = value
        self._store.touch(self._db, key)
        return True

    def hset(self, key: bytes, field: bytes, value: bytes) -> bool | None:
        return self._call("hset", lambda: self._hset(key, field, value, False))

    def hset_nx(self, key: bytes, field: bytes, value: bytes) -> bool | None:
        return self._call("hsetnx", lambda: self._hset(key, field, value, True))

    def hget(self, key: bytes, field: bytes) -> bytes | None:
        return self._call("hget", lambda: (self._hash(key) or {}).get(field))

    def hmget(self, key: bytes, *fields: bytes) -> list[bytes | None] | None:
        return self._call("hmget", lambda: [(self._hash(key) or {}).get(field) for field in fields])

    def _hmset(self, key: bytes, mapping: dict[bytes, bytes]) -> None:
        self._hash(key, create=True).update(mapping)
        self._store.touch(self._db, key)
        self._store.cleanup(self._db, key)

    def hmset(self, key: bytes, mapping: Mapping[bytes, bytes]) -> None:
        mapping = dict(mapping)
        self._call("hmset", lambda: self._hmset(key, mapping))

    def _hincr_by(self, key: bytes, field: bytes, delta: int) -> int:
        items = self._hash(key, create=True)
        value = _parse_int(items.get(field)) + delta
        items[field] = str(value).encode()
        self._store.touch(self._db, key)
        return value

    def hincr_by(self, key: bytes, field: bytes, delta: int) -> int | None:
        return self._call("hincrby", lambda: self._hincr_by(key, field, delta))

    def hexists(self, key: bytes, field: bytes) -> bool | None:
        return self._call("hexists", lambda: field in (self._hash(key) or {}))

    def _hdel(self, key: bytes, fields: tuple[bytes, ...]) -> int:
        items = self._hash(key)
        if items is None:
            return 0
        removed = sum(items.pop(field, None) is not None for field in fields)
        if removed:
            self._store.touch(self._db, key)
            self._store.cleanup(self._db, key)
        return removed

    def hdel(self, key: bytes, *fields: bytes) -> int | None:
        return self._call("hdel", lambda: self._hdel(key, fields))

    def hlen(self, key: bytes) -> int | None:
        return self._call("hlen", lambda: len(self._hash(key) or {}))

    def hkeys(self, key: bytes) -> set[bytes] | None:
        return self._call("hkeys", lambda: set(self._hash(key) or {}))

    def hvals(self, key: bytes) -> list[bytes] | None:
        return self._call("hvals", lambda: list((self._hash(key) or {}).values()))

    def hgetall(self, key: bytes) -> dict[bytes, bytes] | None:
        return self._call("hgetall", lambda: dict(self._hash(key) or {}))

    def __repr__(self) -> str:
        return (
            f"InMemoryConnection(db={self._db}, pipelined={self._pipelined}, "
            f"queueing={self._queueing}, closed={self._closed})"
        )


class InMemoryConnectionFactory:
    """
    ConnectionFactory over one shared InMemoryStore.

    Tracks how many connections are out, which tests use to check that every
    acquired connection was released.

    Args:
        store: Keyspace to share (a fresh one when omitted)
        db: Database index of the connections handed out
    """

    def __init__(self, store: InMemoryStore | None = None, db: int = 0):
        self._store = store or InMemoryStore()
        self._db = db
        self._lock = threading.Lock()
        self._active = 0
        self._acquired = 0
        self._released = 0

    @property
    def store(self) -> InMemoryStore:
        return self._store

    @property
    def active_connections(self) -> int:
        return self._active

    @property
    def acquired(self) -> int:
        return self._acquired

    @property
    def released(self) -> int:
        return self._released

    def get_connection(self) -> StoreConnection:
        with self._lock:
            self._active += 1
            self._acquired += 1
        return InMemoryConnection(self._store, self._db)

    def release_connection(self, connection: StoreConnection) -> None:
        connection.close()
        with self._lock:
            self._active -= 1
            self._released += 1
