"""
Unit Tests for RedisTemplate sessions and transactions

Tests connection sharing, MULTI/EXEC through a session, WATCH conflicts and
execute_transaction.
"""

import pytest

from redis_template import (
    InvalidDataAccessUsageError,
    StringRedisSerializer,
    TransactionAbortedError,
)
from redis_template.core.logging import get_session_id


@pytest.mark.unit
class TestExecuteSession:
    """Test calls sharing one bound connection."""

    def test_calls_share_one_connection(self, template, memory_factory):
        def session(ops):
            ops.ops_for_value().set("a", 1)
            ops.ops_for_value().set("b", 2)
            return ops.ops_for_value().get("a")

        assert template.execute_session(session) == 1
        assert memory_factory.acquired == 1
        assert memory_factory.active_connections == 0

    def test_session_view_is_not_the_template(self, template):
        views = []
        template.execute_session(views.append)

        assert views[0] is not template
        assert views[0].ops_for_value() is not template.ops_for_value()

    def test_template_stays_unbound(self, template, memory_factory):
        template.execute_session(lambda ops: ops.ops_for_value().set("a", 1))
        template.ops_for_value().get("a")
        template.ops_for_value().get("a")

        assert memory_factory.acquired == 3

    def test_session_id_set_for_logging(self, template):
        seen = []

        template.execute_session(lambda ops: seen.append(get_session_id()))

        assert seen[0] is not None
        assert get_session_id() is None

    def test_nested_session_reuses_connection(self, template, memory_factory):
        def outer(ops):
            return ops.execute_session(lambda inner: inner.ops_for_value().set("a", 1))

        template.execute_session(outer)

        assert memory_factory.acquired == 1

    def test_connection_released_on_failure(self, template, memory_factory):
        def session(ops):
            ops.ops_for_value().set("a", 1)
            raise ValueError("stop")

        with pytest.raises(ValueError):
            template.execute_session(session)

        assert memory_factory.active_connections == 0
        assert template.ops_for_value().get("a") == 1

    def test_none_session_rejected(self, template):
        with pytest.raises(InvalidDataAccessUsageError):
            template.execute_session(None)

    def test_multi_exec_in_session(self, string_template):
        def session(ops):
            ops.multi()
            ops.ops_for_value().set("a", "1")
            ops.ops_for_value().increment("a", 5)
            ops.ops_for_list().right_push("log", "done")
            return ops.exec()

        assert string_template.execute_session(session) == [None, 6, 1]
        assert string_template.ops_for_value().get("a") == "6"

    def test_discard_in_session(self, string_template):
        def session(ops):
            ops.multi()
            ops.ops_for_value().set("a", "1")
            ops.discard()

        string_template.execute_session(session)

        assert string_template.has_key("a") is False

    def test_exec_without_multi(self, string_template):
        assert string_template.execute_session(lambda ops: ops.exec()) == []

    def test_watch_conflict_aborts(self, string_template):
        string_template.ops_for_value().set("balance", "100")

        def session(ops):
            ops.watch("balance")
            # another client writes between WATCH and EXEC
            string_template.ops_for_value().set("balance", "50")
            ops.multi()
            ops.ops_for_value().increment("balance", -10)
            return ops.exec()

        with pytest.raises(TransactionAbortedError):
            string_template.execute_session(session)

        assert string_template.ops_for_value().get("balance") == "50"

    def test_watch_without_conflict_commits(self, string_template):
        string_template.ops_for_value().set("balance", "100")

        def session(ops):
            ops.watch("balance")
            ops.multi()
            ops.ops_for_value().increment("balance", -10)
            return ops.exec()

        assert string_template.execute_session(session) == [90]


@pytest.mark.unit
class TestExecuteTransaction:
    """Test MULTI/EXEC wrapped around a session."""

    def test_replies_decoded(self, template):
        def transaction(ops):
            ops.ops_for_value().set("user", {"name": "Ada"})
            ops.execute(lambda connection: connection.get(b"user"))
            ops.execute(lambda connection: connection.incr_by(b"count", 2))

        assert template.execute_transaction(transaction) == [None, {"name": "Ada"}, 2]

    def test_result_serializer_override(self, template):
        def transaction(ops):
            ops.execute(lambda connection: connection.set(b"g", b"hi"))
            ops.execute(lambda connection: connection.get(b"g"))

        assert template.execute_transaction(transaction, StringRedisSerializer()) == [None, "hi"]

    def test_discarded_on_failure(self, template, memory_factory):
        def transaction(ops):
            ops.ops_for_value().set("a", 1)
            raise RuntimeError("abort")

        with pytest.raises(RuntimeError):
            template.execute_transaction(transaction)

        assert template.has_key("a") is False
        assert memory_factory.active_connections == 0

    def test_direct_result_rejected(self, template):
        def transaction(ops):
            ops.ops_for_value().set("a", 1)
            return "value"

        with pytest.raises(InvalidDataAccessUsageError):
            template.execute_transaction(transaction)

        assert template.has_key("a") is False

    def test_commands_return_none_while_queued(self, template):
        seen = []

        template.execute_transaction(lambda ops: seen.append(ops.has_key("a")))

        assert seen == [None]
