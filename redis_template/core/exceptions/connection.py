"""
Connection Exceptions

Raised when a connection cannot be obtained from the connection factory.
These are fatal to the current call and never retried by the template.
"""

from redis_template.core.exceptions.base import RedisTemplateError


class StoreConnectionError(RedisTemplateError):
    """
    Raised when unable to acquire a connection to the store.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class ConnectionPoolExhaustedError(StoreConnectionError):
    """Raised when the connection pool has no connection left to hand out."""

    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(
            message=message or "Connection pool exhausted",
            details=details
        )
