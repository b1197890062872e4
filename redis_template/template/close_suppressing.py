"""
Close-suppressing connection view.

Callbacks that are not trusted with the connection lifecycle receive this
wrapper instead of the real connection. Every command is forwarded to the
wrapped connection except those in SUPPRESSED_CONNECTION_COMMANDS, which are
dropped: the template owns the connection and releases it itself.
"""

from collections.abc import Callable
from typing import Any

from redis_template.core.config.constants import SUPPRESSED_CONNECTION_COMMANDS, Stage
from redis_template.core.interfaces import StoreConnection
from redis_template.core.logging import get_logger

logger = get_logger(__name__)


class CloseSuppressingConnection:
    """
    StoreConnection wrapper that ignores lifecycle-terminating commands.

    Args:
        target: The connection to forward to
    """

    __slots__ = ("_target",)

    def __init__(self, target: StoreConnection):
        self._target = target

    @property
    def target_connection(self) -> StoreConnection:
        """The wrapped connection."""
        return self._target

    def __getattr__(self, name: str) -> Any:
        if name in SUPPRESSED_CONNECTION_COMMANDS:
            return _suppressed(name)
        return getattr(self._target, name)

    def __repr__(self) -> str:
        return f"CloseSuppressingConnection({self._target!r})"


def _suppressed(command: str) -> Callable[..., None]:
    def drop(*args, **kwargs) -> None:
        logger.debug(
            "Suppressed lifecycle command on template-managed connection",
            stage=Stage.CALLBACK,
            command=command,
        )

    return drop
