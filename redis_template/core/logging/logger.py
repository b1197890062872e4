#!/usr/bin/env python3
"""
Structured Logging Module using structlog

This module provides structured logging with:
- Session ID correlation for multi-call sessions
- Stage identifiers for the template execution flow
- JSON formatting for log aggregation
- Raw payload summarising (bytes fields are never written verbatim)

Author: System Architect
Date: 2026-03-02
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, WrappedLogger

from redis_template.core.config.settings import get_settings

# Context variable for the active template session
session_id_ctx: ContextVar[str | None] = ContextVar("session_id", default=None)


def add_session_id(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add session ID to log event from context variable.

    Every log line emitted inside RedisTemplate.execute_session() carries the
    identifier of that session.
    """
    session_id = session_id_ctx.get()
    if session_id:
        event_dict["session_id"] = session_id
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def summarize_binary(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Replace raw bytes fields with a length summary.

    Keys and values travel as serialized bytes; writing them out verbatim
    would leak stored data into logs.
    """
    for field, value in event_dict.items():
        if isinstance(value, (bytes, bytearray, memoryview)):
            event_dict[field] = f"<{len(value)} bytes>"
    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Upper-case the log level name."""
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Setup structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    settings = get_settings()

    # Use settings if not provided
    log_level = log_level or settings.logging.LOG_LEVEL
    log_format = log_format or settings.logging.LOG_FORMAT

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    # Choose renderer based on format
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_session_id,
            add_timestamp,
            structlog.stdlib.add_log_level,
            add_log_level_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            summarize_binary,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.debug("pipeline opened", stage=Stage.PIPELINE_OPEN)
    """
    return structlog.get_logger(name)


def set_session_id(session_id: str | None):
    """
    Set the session ID for the current context.

    Returns:
        Token that restores the previous value via reset_session_id()
    """
    return session_id_ctx.set(session_id)


def reset_session_id(token) -> None:
    """Restore the session ID that was active before set_session_id()."""
    session_id_ctx.reset(token)


def get_session_id() -> str | None:
    """Get current session ID from context."""
    return session_id_ctx.get()
