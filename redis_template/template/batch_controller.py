"""
Batch Controller

Opens and closes pipelines and MULTI/EXEC transactions on a connection with
ownership semantics: the call that opened a batch is the only one that may
close it. A call that finds the connection already pipelined or queueing
inherits the batch and leaves it open.

Usage (what RedisTemplate.execute does):
    opened = controller.open_pipeline(connection, want=True)
    try:
        result = callback(connection)
        if opened:
            controller.assert_no_direct_result(result)
            result = controller.close_pipeline(connection, opened)
    ...
"""

from typing import Any

from redis_template.core.config.constants import Stage
from redis_template.core.exceptions import InvalidDataAccessUsageError, RedisTemplateError
from redis_template.core.interfaces import StoreConnection
from redis_template.core.logging import get_logger

logger = get_logger(__name__)


class BatchController:
    """Pipeline and transaction open/close with ownership tracking."""

    # -------------------------------------------------------------------------
    # Pipelines
    # -------------------------------------------------------------------------

    def open_pipeline(self, connection: StoreConnection, want: bool) -> bool:
        """
        Open a pipeline unless one is already active.

        Returns:
            True if this call opened it and therefore owns it
        """
        if not want or connection.is_pipelined():
            return False
        connection.open_pipeline()
        logger.debug("Pipeline opened", stage=Stage.PIPELINE_OPEN)
        return True

    def close_pipeline(self, connection: StoreConnection, opened: bool) -> list[Any] | None:
        """
        Close an owned pipeline and harvest its replies.

        Returns:
            Replies in issue order, or None when the caller does not own the pipeline
        """
        if not opened:
            return None
        results = connection.close_pipeline()
        logger.debug("Pipeline closed", stage=Stage.PIPELINE_CLOSE, results=len(results))
        return results

    def discard_pipeline(self, connection: StoreConnection, opened: bool) -> None:
        """
        Drop an owned pipeline on a failure path. Its commands are never sent.

        A failure while dropping is logged and not raised, so the error that
        aborted the callback is the one the caller sees.
        """
        if not opened or not connection.is_pipelined():
            return
        try:
            connection.discard_pipeline()
            logger.debug("Pipeline discarded", stage=Stage.PIPELINE_CLOSE)
        except RedisTemplateError as e:
            logger.warning(
                "Discarding pipeline after failure raised",
                stage=Stage.PIPELINE_CLOSE,
                error=str(e),
            )

    @staticmethod
    def assert_no_direct_result(result: Any) -> None:
        """
        Reject a direct result produced under an owned batch.

        Raises:
            InvalidDataAccessUsageError: If result is not None
        """
        if result is not None:
            raise InvalidDataAccessUsageError(
                "Callback cannot return a non-null value as it gets overwritten by the pipeline",
                details={"result_type": type(result).__name__},
            ).with_suggestion("Use execute_pipelined() with a callback that returns None")

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def open_transaction(self, connection: StoreConnection, want: bool) -> bool:
        """
        Issue MULTI unless a transaction is already queueing.

        Returns:
            True if this call opened the transaction and owns it
        """
        if not want or connection.is_queueing():
            return False
        connection.multi()
        logger.debug("Transaction started", stage=Stage.TRANSACTION_MULTI)
        return True

    def close_transaction(self, connection: StoreConnection, opened: bool) -> list[Any] | None:
        """
        EXEC an owned transaction.

        Returns:
            Replies of the queued commands in order, or None when the caller
            does not own the transaction

        Raises:
            TransactionAbortedError: If a watched key changed
        """
        if not opened:
            return None
        results = connection.exec()
        logger.debug(
            "Transaction executed",
            stage=Stage.TRANSACTION_EXEC,
            results=len(results) if results is not None else None,
        )
        return results

    def abort_transaction(self, connection: StoreConnection, opened: bool) -> None:
        """DISCARD an owned transaction on a failure path."""
        if not opened or not connection.is_queueing():
            return
        try:
            connection.discard()
            logger.debug("Transaction discarded", stage=Stage.TRANSACTION_DISCARD)
        except RedisTemplateError as e:
            logger.warning(
                "Discarding transaction after failure raised",
                stage=Stage.TRANSACTION_DISCARD,
                error=str(e),
            )
