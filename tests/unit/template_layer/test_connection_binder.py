"""
Unit Tests for ConnectionBinder

Tests which connection a call runs on and when it goes back to the factory.
"""

import pytest

from redis_template.core.exceptions import ConnectionPoolExhaustedError, StoreConnectionError
from redis_template.template import ConnectionBinder
from tests.test_fixtures import TemplateTestFactory


@pytest.mark.unit
class TestUnboundBinder:
    """Test per-call acquisition."""

    def test_acquire_takes_from_factory(self, mock_connection):
        factory = TemplateTestFactory.mock_factory(mock_connection)
        binder = ConnectionBinder(factory)

        connection, existing = binder.acquire()

        assert connection is mock_connection
        assert existing is False
        factory.get_connection.assert_called_once()

    def test_release_returns_to_factory(self, mock_connection):
        factory = TemplateTestFactory.mock_factory(mock_connection)
        binder = ConnectionBinder(factory)

        binder.release(mock_connection)

        factory.release_connection.assert_called_once_with(mock_connection)

    def test_release_of_none_is_noop(self):
        factory = TemplateTestFactory.mock_factory()

        ConnectionBinder(factory).release(None)

        factory.release_connection.assert_not_called()

    def test_factory_failure_wrapped(self):
        binder = ConnectionBinder(TemplateTestFactory.failing_factory())

        with pytest.raises(StoreConnectionError) as exc_info:
            binder.acquire()

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_library_errors_pass_through(self):
        error = ConnectionPoolExhaustedError("pool exhausted")
        binder = ConnectionBinder(TemplateTestFactory.failing_factory(error))

        with pytest.raises(ConnectionPoolExhaustedError):
            binder.acquire()


@pytest.mark.unit
class TestBoundBinder:
    """Test session binding."""

    def test_bind_acquires_once(self, mock_connection):
        factory = TemplateTestFactory.mock_factory(mock_connection)
        bound = ConnectionBinder(factory).bind()

        first, _ = bound.acquire()
        second, existing = bound.acquire()

        assert first is second is mock_connection
        assert existing is True
        assert bound.is_bound
        factory.get_connection.assert_called_once()

    def test_release_of_bound_connection_is_noop(self, mock_connection):
        factory = TemplateTestFactory.mock_factory(mock_connection)
        bound = ConnectionBinder(factory).bind()

        bound.release(mock_connection)

        factory.release_connection.assert_not_called()

    def test_unbind_releases_once(self, mock_connection):
        factory = TemplateTestFactory.mock_factory(mock_connection)
        bound = ConnectionBinder(factory).bind()

        bound.unbind()
        bound.unbind()

        factory.release_connection.assert_called_once_with(mock_connection)
        assert not bound.is_bound

    def test_bind_leaves_parent_unbound(self, mock_connection):
        parent = ConnectionBinder(TemplateTestFactory.mock_factory(mock_connection))

        parent.bind()

        assert not parent.is_bound
