"""
Connection Binder

Decides which connection a template call runs on.

- Unbound binder: every acquire() takes a fresh connection from the factory,
  every release() gives it back.
- Bound binder (session): acquire() always returns the bound connection and
  release() of it is a no-op; the connection goes back to the factory only
  on unbind().

Bound binders are created with bind() and handed to the session view of the
template explicitly; nothing is stored per thread.

Author: System Architect
Date: 2026-03-02
"""

from redis_template.core.config.constants import Stage
from redis_template.core.exceptions import RedisTemplateError, StoreConnectionError
from redis_template.core.interfaces import ConnectionFactory, StoreConnection
from redis_template.core.logging import get_logger

logger = get_logger(__name__)


class ConnectionBinder:
    """
    Acquires and releases connections for template calls.

    Args:
        factory: Where connections come from
        bound_connection: Connection every acquire() returns (session mode)
    """

    def __init__(self, factory: ConnectionFactory, bound_connection: StoreConnection | None = None):
        self._factory = factory
        self._bound = bound_connection

    @property
    def factory(self) -> ConnectionFactory:
        return self._factory

    @property
    def bound_connection(self) -> StoreConnection | None:
        return self._bound

    @property
    def is_bound(self) -> bool:
        return self._bound is not None

    def acquire(self) -> tuple[StoreConnection, bool]:
        """
        Get the connection for one template call.

        Returns:
            (connection, already_bound)

        Raises:
            StoreConnectionError: If the factory cannot provide a connection
        """
        if self._bound is not None:
            return self._bound, True
        return self._get_from_factory(), False

    def release(self, connection: StoreConnection | None) -> None:
        """Give a connection obtained from acquire() back. No-op for the bound connection."""
        if connection is None:
            return
        if self._bound is not None and connection is self._bound:
            return
        self._factory.release_connection(connection)

    def bind(self) -> "ConnectionBinder":
        """
        Acquire a connection and return a binder bound to it.

        Raises:
            StoreConnectionError: If the factory cannot provide a connection
        """
        connection = self._get_from_factory()
        logger.debug("Connection bound to session", stage=Stage.SESSION_BIND)
        return ConnectionBinder(self._factory, connection)

    def unbind(self) -> None:
        """Release the bound connection back to the factory."""
        connection, self._bound = self._bound, None
        if connection is not None:
            self._factory.release_connection(connection)
            logger.debug("Session connection released", stage=Stage.SESSION_UNBIND)

    def _get_from_factory(self) -> StoreConnection:
        try:
            return self._factory.get_connection()
        except RedisTemplateError:
            raise
        except Exception as e:
            logger.error(
                "Failed to acquire connection",
                stage=Stage.CONNECTION_ACQUIRE,
                error=str(e),
            )
            raise StoreConnectionError.from_exception(
                e, message=f"Could not get a connection: {e}"
            ) from e
