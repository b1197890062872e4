"""
RedisTemplate - execution engine

Runs units of work against a store connection, converting between Python
objects and stored bytes through the template's serializers.

Architecture:
    RedisTemplate (Public API)
        ├── ConnectionBinder (which connection a call runs on)
        ├── BatchController (pipeline / MULTI ownership)
        ├── SerializerSet (key/value/hash/string conversion)
        └── Operation facades (value/list/set/zset/hash)

Execution modes:
    execute()              one call, one connection
    execute(pipeline=True) one call, one connection, replies batched
    execute_pipelined()    pipelined execution with decoded replies
    execute_session()      several calls sharing one connection
    execute_transaction()  session wrapped in MULTI/EXEC

Thread safety:
    Configure first (constructor / setters), then call after_properties_set().
    From then on the template is read-only and may be shared by any number
    of threads; every call owns its own connection.

Author: System Architect
Date: 2026-03-02
"""

import copy
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, TypeVar

from redis_template.core.config.constants import DataType, Stage
from redis_template.core.exceptions import ConfigurationError, InvalidDataAccessUsageError
from redis_template.core.interfaces import ConnectionFactory, StoreConnection
from redis_template.core.logging import get_logger, reset_session_id, set_session_id
from redis_template.operations import (
    BoundHashOperations,
    BoundListOperations,
    BoundSetOperations,
    BoundValueOperations,
    BoundZSetOperations,
    HashOperations,
    ListOperations,
    SetOperations,
    ValueOperations,
    ZSetOperations,
)
from redis_template.query import BulkMapper, SortQuery, convert_query, reassemble
from redis_template.serializer import RedisSerializer, SerializerSet
from redis_template.template.batch_controller import BatchController
from redis_template.template.close_suppressing import CloseSuppressingConnection
from redis_template.template.connection_binder import ConnectionBinder

logger = get_logger(__name__)

T = TypeVar("T")

# Unit of work run against a connection
RedisCallback = Callable[[StoreConnection], T]
# Unit of work run against a pipelined connection; replies are harvested, never returned
PipelineCallback = Callable[[StoreConnection], None]
# Multi-step sequence run against the template itself, on one shared connection
SessionCallback = Callable[["RedisTemplate"], T]


class RedisTemplate:
    """
    Central entry point for store access.

    Args:
        connection_factory: Source of connections
        default_serializer: Fallback for unset key/value/hash roles (pickle)
        key_serializer: Serializer for keys
        value_serializer: Serializer for values
        hash_key_serializer: Serializer for hash fields
        hash_value_serializer: Serializer for hash values
        string_serializer: Serializer for text arguments (utf-8 text)
        expose_connection: Give callbacks the raw connection instead of a
            close-suppressing view

    Usage:
        template = RedisTemplate(factory, key_serializer=StringRedisSerializer())
        template.after_properties_set()

        template.ops_for_value().set("user:1", {"name": "Ada"})
        template.ops_for_value().get("user:1")

        results = template.execute_pipelined(
            lambda connection: [connection.incr_by(b"hits", 1) for _ in range(3)] and None
        )
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory | None = None,
        *,
        default_serializer: RedisSerializer | None = None,
        key_serializer: RedisSerializer | None = None,
        value_serializer: RedisSerializer | None = None,
        hash_key_serializer: RedisSerializer | None = None,
        hash_value_serializer: RedisSerializer | None = None,
        string_serializer: RedisSerializer[str] | None = None,
        expose_connection: bool = False,
    ):
        self._connection_factory = connection_factory
        self._serializers = SerializerSet(
            default_serializer=default_serializer,
            key_serializer=key_serializer,
            value_serializer=value_serializer,
            hash_key_serializer=hash_key_serializer,
            hash_value_serializer=hash_value_serializer,
            string_serializer=string_serializer,
        )
        self._expose_connection = expose_connection
        self._batch = BatchController()
        self._binder: ConnectionBinder | None = None
        self._initialized = False

        self._value_ops: ValueOperations | None = None
        self._list_ops: ListOperations | None = None
        self._set_ops: SetOperations | None = None
        self._zset_ops: ZSetOperations | None = None
        self._hash_ops: HashOperations | None = None

    # =========================================================================
    # Configuration
    # =========================================================================

    def _check_mutable(self, name: str) -> None:
        if self._initialized:
            raise InvalidDataAccessUsageError(
                f"Cannot change {name} after the template was initialized",
                details={"property": name},
            )

    @property
    def connection_factory(self) -> ConnectionFactory | None:
        return self._connection_factory

    @connection_factory.setter
    def connection_factory(self, factory: ConnectionFactory) -> None:
        self._check_mutable("connection_factory")
        self._connection_factory = factory

    @property
    def expose_connection(self) -> bool:
        return self._expose_connection

    @expose_connection.setter
    def expose_connection(self, expose: bool) -> None:
        self._check_mutable("expose_connection")
        self._expose_connection = expose

    @property
    def serializers(self) -> SerializerSet:
        """The template's serializer roles (read-only once initialized)."""
        return self._serializers

    @property
    def default_serializer(self) -> RedisSerializer:
        return self._serializers.default_serializer

    @default_serializer.setter
    def default_serializer(self, serializer: RedisSerializer) -> None:
        self._serializers.default_serializer = serializer

    @property
    def key_serializer(self) -> RedisSerializer | None:
        return self._serializers.key_serializer

    @key_serializer.setter
    def key_serializer(self, serializer: RedisSerializer) -> None:
        self._serializers.key_serializer = serializer

    @property
    def value_serializer(self) -> RedisSerializer | None:
        return self._serializers.value_serializer

    @value_serializer.setter
    def value_serializer(self, serializer: RedisSerializer) -> None:
        self._serializers.value_serializer = serializer

    @property
    def hash_key_serializer(self) -> RedisSerializer | None:
        return self._serializers.hash_key_serializer

    @hash_key_serializer.setter
    def hash_key_serializer(self, serializer: RedisSerializer) -> None:
        self._serializers.hash_key_serializer = serializer

    @property
    def hash_value_serializer(self) -> RedisSerializer | None:
        return self._serializers.hash_value_serializer

    @hash_value_serializer.setter
    def hash_value_serializer(self, serializer: RedisSerializer) -> None:
        self._serializers.hash_value_serializer = serializer

    @property
    def string_serializer(self) -> RedisSerializer[str]:
        return self._serializers.string_serializer

    @string_serializer.setter
    def string_serializer(self, serializer: RedisSerializer[str]) -> None:
        self._serializers.string_serializer = serializer

    @property
    def initialized(self) -> bool:
        return self._initialized

    def after_properties_set(self) -> "RedisTemplate":
        """
        Finish configuration.

        Fills unset serializer roles with the default serializer, freezes
        the configuration and builds the operation facades. Idempotent.

        Raises:
            ConfigurationError: If no connection factory was given
        """
        if self._initialized:
            return self
        if self._connection_factory is None:
            raise ConfigurationError("RedisTemplate requires a connection_factory")

        defaulted = self._serializers.freeze()
        self._binder = ConnectionBinder(self._connection_factory)
        self._create_operations()
        self._initialized = True

        logger.info(
            "RedisTemplate initialized",
            stage=Stage.TEMPLATE_INIT,
            defaulted_roles=defaulted,
            default_serializer=repr(self._serializers.default_serializer),
            expose_connection=self._expose_connection,
        )
        return self

    def _create_operations(self) -> None:
        self._value_ops = ValueOperations(self)
        self._list_ops = ListOperations(self)
        self._set_ops = SetOperations(self)
        self._zset_ops = ZSetOperations(self)
        self._hash_ops = HashOperations(self)

    def _assert_initialized(self) -> None:
        if not self._initialized:
            raise InvalidDataAccessUsageError(
                "RedisTemplate is not initialized"
            ).with_suggestion("Call after_properties_set() once configuration is complete")

    # =========================================================================
    # Execution
    # =========================================================================

    def execute(
        self,
        action: RedisCallback[T],
        expose_connection: bool | None = None,
        pipeline: bool = False,
    ) -> T:
        """
        Run a unit of work on a connection.

        Steps:
        1. Acquire a connection (the session's one when bound)
        2. Open a pipeline when asked and none is active
        3. Run the callback on the connection, or on a close-suppressing view
        4. When this call opened the pipeline: require a None result, close
           the pipeline and return its replies instead
        5. Release the connection, on every exit path

        Args:
            action: Callback receiving the connection
            expose_connection: Pass the raw connection (default: template setting)
            pipeline: Run the callback pipelined

        Returns:
            The callback's result, or the raw pipeline replies when this call
            opened the pipeline

        Raises:
            InvalidDataAccessUsageError: If the callback returns a value under
                a pipeline opened by this call
            StoreConnectionError: If no connection can be acquired
        """
        self._assert_initialized()
        if action is None:
            raise InvalidDataAccessUsageError("Callback object must not be None")

        expose = self._expose_connection if expose_connection is None else expose_connection

        connection, existing = self._binder.acquire()
        try:
            conn = self.pre_process_connection(connection, existing)

            pipeline_opened = self._batch.open_pipeline(conn, pipeline)
            pipeline_closed = False
            try:
                result = action(conn if expose else CloseSuppressingConnection(conn))

                if pipeline_opened:
                    self._batch.assert_no_direct_result(result)
                    result = self._batch.close_pipeline(conn, pipeline_opened)
                    pipeline_closed = True

                return self.post_process_result(result, conn, existing)
            finally:
                if pipeline_opened and not pipeline_closed:
                    self._batch.discard_pipeline(conn, pipeline_opened)
        finally:
            self._binder.release(connection)

    def execute_pipelined(
        self,
        action: PipelineCallback,
        result_serializer: RedisSerializer | None = None,
    ) -> list[Any]:
        """
        Run a callback on a pipelined connection and return the decoded replies.

        The callback must return None: every command it issues answers None
        and the real replies come back here, in issue order. Binary replies
        are decoded with the value serializer (or result_serializer); hashes
        with the hash serializers; counters and flags pass through.

        When the connection is already pipelined by an enclosing session the
        replies belong to that session and this returns [].
        """
        results = self.execute(action, pipeline=True)
        return self._serializers.deserialize_mixed_results(results, result_serializer)

    def execute_session(self, session: SessionCallback[T]) -> T:
        """
        Run several template calls on one connection.

        The callback receives a view of this template whose calls all share a
        single bound connection, so MULTI/WATCH/EXEC issued through it apply
        to the same connection. The connection is released when the callback
        returns or raises. Inside a session, a nested execute_session reuses
        the bound connection.

        Usage:
            def transfer(ops):
                ops.watch("balance")
                ops.multi()
                ops.ops_for_value().increment("balance", -10)
                return ops.exec()

            template.execute_session(transfer)
        """
        self._assert_initialized()
        if session is None:
            raise InvalidDataAccessUsageError("Session callback must not be None")
        if self._binder.is_bound:
            return session(self)

        binder = self._binder.bind()
        token = set_session_id(uuid.uuid4().hex[:12])
        try:
            return session(self._session_view(binder))
        finally:
            try:
                binder.unbind()
            finally:
                reset_session_id(token)

    def execute_transaction(
        self,
        session: Callable[["RedisTemplate"], None],
        result_serializer: RedisSerializer | None = None,
    ) -> list[Any]:
        """
        Run a session inside MULTI/EXEC and return the decoded replies.

        The callback issues commands through the template view it receives;
        they are queued and applied atomically on EXEC. The callback must
        return None. On failure the transaction is discarded.

        Raises:
            TransactionAbortedError: If a watched key changed before EXEC
        """
        return self.execute_session(
            lambda ops: ops._run_transaction(session, result_serializer)
        )

    def _run_transaction(self, session, result_serializer):
        connection, _ = self._binder.acquire()
        opened = self._batch.open_transaction(connection, True)
        closed = False
        try:
            result = session(self)
            if opened:
                self._batch.assert_no_direct_result(result)
            results = self._batch.close_transaction(connection, opened)
            closed = True
        finally:
            if opened and not closed:
                self._batch.abort_transaction(connection, opened)
        return self._serializers.deserialize_mixed_results(results, result_serializer)

    def _session_view(self, binder: ConnectionBinder) -> "RedisTemplate":
        view = copy.copy(self)
        view._binder = binder
        view._create_operations()
        return view

    def pre_process_connection(self, connection: StoreConnection, existing: bool) -> StoreConnection:
        """Hook run before the callback. Returns the connection the callback should use."""
        return connection

    def post_process_result(self, result: Any, connection: StoreConnection, existing: bool) -> Any:
        """Hook run on the callback's result before it is returned."""
        return result

    # =========================================================================
    # Key operations
    # =========================================================================

    def delete(self, *keys: Any) -> int | None:
        """Delete keys; returns how many existed."""
        raw_keys = self._serializers.raw_keys(keys)
        return self.execute(lambda connection: connection.delete(*raw_keys), True)

    def has_key(self, key: Any) -> bool | None:
        raw_key = self._serializers.raw_key(key)
        return self.execute(lambda connection: connection.exists(raw_key), True)

    def expire(self, key: Any, timeout: int | timedelta) -> bool | None:
        """Set a time to live, in seconds or as a timedelta."""
        raw_key = self._serializers.raw_key(key)
        seconds = int(timeout.total_seconds()) if isinstance(timeout, timedelta) else int(timeout)
        return self.execute(lambda connection: connection.expire(raw_key, seconds), True)

    def expire_at(self, key: Any, when: datetime) -> bool | None:
        raw_key = self._serializers.raw_key(key)
        unix_time = int(when.timestamp())
        return self.execute(lambda connection: connection.expire_at(raw_key, unix_time), True)

    def get_expire(self, key: Any) -> int | None:
        """Remaining time to live in seconds (-1 without TTL, -2 for a missing key)."""
        raw_key = self._serializers.raw_key(key)
        return self.execute(lambda connection: connection.ttl(raw_key), True)

    def persist(self, key: Any) -> bool | None:
        raw_key = self._serializers.raw_key(key)
        return self.execute(lambda connection: connection.persist(raw_key), True)

    def move(self, key: Any, db_index: int) -> bool | None:
        raw_key = self._serializers.raw_key(key)
        return self.execute(lambda connection: connection.move(raw_key, db_index), True)

    def keys(self, pattern: Any) -> set[Any] | None:
        raw_pattern = self._serializers.raw_key(pattern)
        raw_keys = self.execute(lambda connection: connection.keys(raw_pattern), True)
        return self._serializers.deserialize_keys(raw_keys)

    def random_key(self) -> Any:
        raw_key = self.execute(lambda connection: connection.random_key(), True)
        return self._serializers.deserialize_key(raw_key)

    def rename(self, old_key: Any, new_key: Any) -> None:
        raw_old_key = self._serializers.raw_key(old_key)
        raw_new_key = self._serializers.raw_key(new_key)
        self.execute(lambda connection: connection.rename(raw_old_key, raw_new_key), True)

    def rename_if_absent(self, old_key: Any, new_key: Any) -> bool | None:
        raw_old_key = self._serializers.raw_key(old_key)
        raw_new_key = self._serializers.raw_key(new_key)
        return self.execute(lambda connection: connection.rename_nx(raw_old_key, raw_new_key), True)

    def type(self, key: Any) -> DataType | None:
        raw_key = self._serializers.raw_key(key)
        return self.execute(lambda connection: connection.type(raw_key), True)

    def convert_and_send(self, channel: str, message: Any) -> int | None:
        """
        Publish a message serialized with the value serializer.

        Returns:
            Number of subscribers that received it
        """
        if not channel:
            raise InvalidDataAccessUsageError("a non-empty channel is required")
        raw_channel = self._serializers.raw_string(channel)
        raw_message = self._serializers.raw_value(message)
        return self.execute(lambda connection: connection.publish(raw_channel, raw_message), True)

    # =========================================================================
    # Transactions
    # =========================================================================
    # Meaningful inside execute_session(); outside a session each call runs on
    # its own connection.

    def multi(self) -> None:
        self.execute(lambda connection: connection.multi(), True)

    def exec(self, result_serializer: RedisSerializer | None = None) -> list[Any]:
        """
        EXEC the transaction started with multi().

        Returns:
            Decoded replies of the queued commands; [] if no transaction was active

        Raises:
            TransactionAbortedError: If a watched key changed
        """
        results = self.execute(lambda connection: connection.exec(), True)
        return self._serializers.deserialize_mixed_results(results, result_serializer)

    def discard(self) -> None:
        self.execute(lambda connection: connection.discard(), True)

    def watch(self, *keys: Any) -> None:
        raw_keys = self._serializers.raw_keys(keys)
        self.execute(lambda connection: connection.watch(*raw_keys), True)

    def unwatch(self) -> None:
        self.execute(lambda connection: connection.unwatch(), True)

    # =========================================================================
    # Sort
    # =========================================================================

    def sort(self, query: SortQuery, result_serializer: RedisSerializer | None = None) -> list[Any] | None:
        """SORT and decode each element (value serializer unless result_serializer is given)."""
        raw_key = self._serializers.raw_key(query.key)
        params = convert_query(query, self._serializers.string_serializer)
        values = self.execute(lambda connection: connection.sort(raw_key, params), True)
        return self._serializers.deserialize_values(values, result_serializer)

    def sort_bulk(
        self,
        query: SortQuery,
        bulk_mapper: BulkMapper,
        result_serializer: RedisSerializer | None = None,
    ) -> list[Any]:
        """
        SORT with GET patterns and build one record per sorted element.

        Raises:
            InvalidDataAccessUsageError: If the query has no GET patterns
            IncompleteSortResultError: If the reply does not split into whole records
        """
        values = self.sort(query, result_serializer)
        return reassemble(values, len(query.get_patterns), bulk_mapper)

    def sort_and_store(self, query: SortQuery, store_key: Any) -> int | None:
        """SORT ... STORE; returns the number of stored elements."""
        raw_store_key = self._serializers.raw_key(store_key)
        raw_key = self._serializers.raw_key(query.key)
        params = convert_query(query, self._serializers.string_serializer)
        return self.execute(lambda connection: connection.sort(raw_key, params, raw_store_key), True)

    # =========================================================================
    # Operation facades
    # =========================================================================

    def ops_for_value(self) -> ValueOperations:
        self._assert_initialized()
        return self._value_ops

    def ops_for_list(self) -> ListOperations:
        self._assert_initialized()
        return self._list_ops

    def ops_for_set(self) -> SetOperations:
        self._assert_initialized()
        return self._set_ops

    def ops_for_zset(self) -> ZSetOperations:
        self._assert_initialized()
        return self._zset_ops

    def ops_for_hash(self) -> HashOperations:
        self._assert_initialized()
        return self._hash_ops

    def bound_value_ops(self, key: Any) -> BoundValueOperations:
        return BoundValueOperations(key, self.ops_for_value())

    def bound_list_ops(self, key: Any) -> BoundListOperations:
        return BoundListOperations(key, self.ops_for_list())

    def bound_set_ops(self, key: Any) -> BoundSetOperations:
        return BoundSetOperations(key, self.ops_for_set())

    def bound_zset_ops(self, key: Any) -> BoundZSetOperations:
        return BoundZSetOperations(key, self.ops_for_zset())

    def bound_hash_ops(self, key: Any) -> BoundHashOperations:
        return BoundHashOperations(key, self.ops_for_hash())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(factory={self._connection_factory!r}, "
            f"initialized={self._initialized}, session={self._binder is not None and self._binder.is_bound})"
        )
