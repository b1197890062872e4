"""
Exception Module

Structured exception hierarchy for the template.
All exceptions are organized by theme.

Module Structure:
-----------------
- **base.py**: RedisTemplateError base class + ConfigurationError
- **connection.py**: Connection acquisition failures
- **usage.py**: API misuse
- **store.py**: Store-reported command failures and result-shaping failures
- **serialization.py**: Serializer failures

Usage:
------
```python
from redis_template.core.exceptions import InvalidDataAccessUsageError, StoreConnectionError
```

Author: System Architect
Date: 2026-03-02
"""

# Base exception
from redis_template.core.exceptions.base import ConfigurationError, RedisTemplateError

# Connection exceptions
from redis_template.core.exceptions.connection import (
    ConnectionPoolExhaustedError,
    StoreConnectionError,
)

# Serialization exceptions
from redis_template.core.exceptions.serialization import SerializationError

# Store exceptions
from redis_template.core.exceptions.store import (
    DataRetrievalError,
    IncompleteSortResultError,
    StoreCommandError,
    TransactionAbortedError,
)

# Usage exceptions
from redis_template.core.exceptions.usage import InvalidDataAccessUsageError

__all__ = [
    # Base
    "RedisTemplateError",
    "ConfigurationError",
    # Connection
    "StoreConnectionError",
    "ConnectionPoolExhaustedError",
    # Usage
    "InvalidDataAccessUsageError",
    # Store
    "StoreCommandError",
    "TransactionAbortedError",
    "DataRetrievalError",
    "IncompleteSortResultError",
    # Serialization
    "SerializationError",
]
