"""
Unit Tests for socket ownership in the redis-py adapter

Runs RedisConnection over a fakeredis-backed pool capped at one connection.
Any batch that checked out a second socket would fail with
"Too many connections".
"""

import fakeredis
import pytest
import redis

from redis_template import (
    ConnectionPoolExhaustedError,
    RedisTemplate,
    Settings,
    StringRedisSerializer,
    TransactionAbortedError,
)
from redis_template.infrastructure.redis import RedisConnectionFactory


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def single_socket_factory(fake_server):
    pool = redis.ConnectionPool(
        connection_class=fakeredis.FakeConnection,
        server=fake_server,
        max_connections=1,
    )
    factory = RedisConnectionFactory(Settings(_env_file=None), pool=pool)
    yield factory
    factory.disconnect()


@pytest.fixture
def single_socket_template(single_socket_factory):
    template = RedisTemplate(single_socket_factory, default_serializer=StringRedisSerializer())
    return template.after_properties_set()


@pytest.mark.unit
class TestOneSocketPerUnitOfWork:
    """Test that batches share the unit of work's pooled connection."""

    def test_pipeline_on_acquired_socket(self, single_socket_factory):
        connection = single_socket_factory.get_connection()
        try:
            connection.open_pipeline()
            connection.incr_by(b"n", 1)
            connection.incr_by(b"n", 2)

            assert connection.close_pipeline() == [1, 3]
            assert connection.get(b"n") == b"3"
        finally:
            single_socket_factory.release_connection(connection)

    def test_watch_multi_exec_on_acquired_socket(self, single_socket_factory):
        connection = single_socket_factory.get_connection()
        try:
            connection.set(b"k", b"v")
            connection.watch(b"k")
            assert connection.get(b"k") == b"v"

            connection.multi()
            connection.set(b"k", b"w")
            connection.incr_by(b"n", 1)

            assert connection.exec() == [None, 1]
            assert connection.get(b"k") == b"w"
        finally:
            single_socket_factory.release_connection(connection)

    def test_watch_conflict_aborts(self, single_socket_factory, fake_server):
        other_client = fakeredis.FakeRedis(server=fake_server)
        connection = single_socket_factory.get_connection()
        try:
            connection.watch(b"k")
            other_client.set(b"k", b"changed")
            connection.multi()
            connection.set(b"k", b"mine")

            with pytest.raises(TransactionAbortedError):
                connection.exec()
        finally:
            single_socket_factory.release_connection(connection)

        assert other_client.get(b"k") == b"changed"

    def test_socket_returned_after_batches(self, single_socket_factory):
        connection = single_socket_factory.get_connection()
        connection.open_pipeline()
        connection.set(b"k", b"v")
        connection.close_pipeline()
        connection.watch(b"k")
        connection.unwatch()
        single_socket_factory.release_connection(connection)

        again = single_socket_factory.get_connection()
        try:
            assert again.get(b"k") == b"v"
        finally:
            single_socket_factory.release_connection(again)

    def test_second_unit_of_work_exhausts_pool(self, single_socket_factory):
        connection = single_socket_factory.get_connection()
        try:
            with pytest.raises(ConnectionPoolExhaustedError):
                single_socket_factory.get_connection()
        finally:
            single_socket_factory.release_connection(connection)


@pytest.mark.unit
class TestTemplateOnOneSocket:
    """Test pipelined and transactional template calls with a pool of one."""

    def test_execute_pipelined(self, single_socket_template):
        def increments(connection):
            connection.incr_by(b"n", 1)
            connection.incr_by(b"n", 1)

        assert single_socket_template.execute_pipelined(increments) == [1, 2]

    def test_execute_transaction(self, single_socket_template):
        def transaction(ops):
            ops.ops_for_value().set("a", "1")
            ops.ops_for_value().increment("n", 2)

        assert single_socket_template.execute_transaction(transaction) == [None, 2]
        assert single_socket_template.ops_for_value().get("a") == "1"
