"""
Unit Tests for Core Exceptions

Tests the exception hierarchy and its structured-error helpers.
"""

import pytest

from redis_template.core.exceptions import (
    ConfigurationError,
    ConnectionPoolExhaustedError,
    DataRetrievalError,
    IncompleteSortResultError,
    InvalidDataAccessUsageError,
    RedisTemplateError,
    SerializationError,
    StoreCommandError,
    StoreConnectionError,
    TransactionAbortedError,
)


@pytest.mark.unit
class TestRedisTemplateError:
    """Test the base exception class."""

    def test_base_error_creation(self):
        error = RedisTemplateError("Test message")
        assert str(error) == "Test message"
        assert error.message == "Test message"

    def test_base_error_default_details(self):
        error = RedisTemplateError("Test")
        assert error.details == {}

    def test_details_are_copied(self):
        details = {"key": "value"}
        error = RedisTemplateError("Test", details=details)
        details["key"] = "changed"

        assert error.details == {"key": "value"}

    def test_to_dict(self):
        error = StoreCommandError("WRONGTYPE", details={"key": "k"})

        assert error.to_dict() == {
            "error_type": "StoreCommandError",
            "message": "WRONGTYPE",
            "details": {"key": "k"},
        }

    def test_with_suggestion_and_context_chain(self):
        error = RedisTemplateError("Test").with_suggestion("Try again").with_context(port=6379)

        assert error.details["suggestion"] == "Try again"
        assert error.details["port"] == 6379

    def test_repr_includes_details(self):
        error = StoreConnectionError("Refused", details={"port": 6379})
        assert repr(error) == "StoreConnectionError(message='Refused', details={'port': 6379})"

    def test_repr_without_details(self):
        assert repr(RedisTemplateError("Plain")) == "RedisTemplateError(message='Plain')"

    def test_from_exception_wraps_original(self):
        original = OSError("connection refused")

        error = StoreConnectionError.from_exception(original, host="localhost")

        assert isinstance(error, StoreConnectionError)
        assert error.message == "connection refused"
        assert error.details["original_error"] == "OSError"
        assert error.details["original_message"] == "connection refused"
        assert error.details["host"] == "localhost"

    def test_from_exception_custom_message(self):
        error = SerializationError.from_exception(ValueError("bad"), message="Cannot decode")
        assert error.message == "Cannot decode"


@pytest.mark.unit
class TestHierarchy:
    """Test how the themed exceptions relate."""

    @pytest.mark.parametrize(
        "error_class",
        [
            ConfigurationError,
            StoreConnectionError,
            InvalidDataAccessUsageError,
            StoreCommandError,
            DataRetrievalError,
            SerializationError,
        ],
    )
    def test_all_errors_share_base(self, error_class):
        assert issubclass(error_class, RedisTemplateError)

    def test_transaction_abort_is_a_command_error(self):
        assert issubclass(TransactionAbortedError, StoreCommandError)

    def test_incomplete_sort_is_a_retrieval_error(self):
        assert issubclass(IncompleteSortResultError, DataRetrievalError)

    def test_pool_exhausted_is_a_connection_error(self):
        error = ConnectionPoolExhaustedError()

        assert isinstance(error, StoreConnectionError)
        assert error.message == "Connection pool exhausted"
