"""
Store-Reported Exceptions

Errors returned by the store for an issued command, and errors found while
shaping the data it returned.

Author: System Architect
Date: 2026-03-02
"""

from redis_template.core.exceptions.base import RedisTemplateError


class StoreCommandError(RedisTemplateError):
    """
    Raised when the store rejects a command.

    Common causes:
    - WRONGTYPE operation against a key holding another kind of value
    - Value is not an integer or out of range
    - Syntax errors in command arguments
    """
    pass


class TransactionAbortedError(StoreCommandError):
    """Raised by EXEC when a watched key changed and the transaction was not applied."""
    pass


class DataRetrievalError(RedisTemplateError):
    """Base exception for results that cannot be shaped into what the caller asked for."""
    pass


class IncompleteSortResultError(DataRetrievalError):
    """
    Raised when a SORT ... GET result cannot be split into whole records.

    The flat result length must be a multiple of the number of GET patterns.
    """
    pass
