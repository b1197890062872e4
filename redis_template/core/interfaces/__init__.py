"""
Core Interfaces Module

Structural interfaces the template depends on.

Components:
-----------
- **connection.py**: StoreConnection and ConnectionFactory protocols

Interfaces follow the Protocol pattern (PEP 544) for structural subtyping:
- Runtime type checking with @runtime_checkable
- No inheritance required
- Easy to fake in tests
"""

from redis_template.core.interfaces.connection import ConnectionFactory, StoreConnection

__all__ = [
    "ConnectionFactory",
    "StoreConnection",
]
