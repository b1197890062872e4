"""
System Constants and Enumerations

Author: System Architect
Date: 2026-03-02
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Execution stages of a template call, used as the ``stage`` log field.

    Format: {PREFIX}.{SEQUENCE}_{DESCRIPTIVE_NAME}
    """

    CONNECTION_ACQUIRE = "T.1_CONNECTION_ACQUIRE"
    PIPELINE_OPEN = "T.2_PIPELINE_OPEN"
    CALLBACK = "T.3_CALLBACK"
    PIPELINE_CLOSE = "T.4_PIPELINE_CLOSE"
    CONNECTION_RELEASE = "T.5_CONNECTION_RELEASE"

    SESSION_BIND = "S.1_SESSION_BIND"
    SESSION_UNBIND = "S.2_SESSION_UNBIND"

    TRANSACTION_MULTI = "TX.1_MULTI"
    TRANSACTION_EXEC = "TX.2_EXEC"
    TRANSACTION_DISCARD = "TX.3_DISCARD"

    TEMPLATE_INIT = "I.1_TEMPLATE_INIT"
    REDIS_COMMAND = "R.1_REDIS_COMMAND"
    REDIS_CONNECT = "R.2_REDIS_CONNECT"


# ============================================================================
# Store data types
# ============================================================================


class DataType(str, Enum):
    """Value types reported by the TYPE command."""

    NONE = "none"
    STRING = "string"
    LIST = "list"
    SET = "set"
    ZSET = "zset"
    HASH = "hash"
    STREAM = "stream"

    @classmethod
    def from_code(cls, code: str | bytes | None) -> "DataType":
        """Map a raw TYPE reply to a DataType."""
        if code is None:
            return cls.NONE
        if isinstance(code, bytes):
            code = code.decode("ascii")
        return cls(code.lower())


# ============================================================================
# Connection lifecycle
# ============================================================================

# Commands the close-suppressing connection view drops instead of forwarding
SUPPRESSED_CONNECTION_COMMANDS = frozenset({"close", "quit", "shutdown"})

# ============================================================================
# Serialization
# ============================================================================

DEFAULT_STRING_ENCODING = "utf-8"
