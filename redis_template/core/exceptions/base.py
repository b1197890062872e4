"""
Root of the template error hierarchy.

Only RedisTemplateError and ConfigurationError live here; the themed
subclasses (connection, data access, serialization) have their own modules.

Author: System Architect
Date: 2026-03-02
"""

from typing import Any


class RedisTemplateError(Exception):
    """
    Base class for every error the template raises.

    Carries a human message plus a details dict that log calls can splat
    into structured fields.

    Attributes:
        message: Error message
        details: Extra fields (copied on construction)

    Example:
        raise StoreConnectionError(
            "Pool refused a connection",
            details={"host": "localhost", "max_connections": 50}
        )
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to error_type / message / details for log events."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def with_suggestion(self, suggestion: str) -> "RedisTemplateError":
        """Attach a remediation hint under details['suggestion'] and return self."""
        self.details["suggestion"] = suggestion
        return self

    def with_context(self, **context) -> "RedisTemplateError":
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        return f"{self.__class__.__name__}(message='{self.message}'{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        **details
    ) -> "RedisTemplateError":
        """
        Wrap a driver or serializer exception.

        The original class name and text are kept under original_error and
        original_message; message defaults to str(exc).

        Example:
            >>> try:
            ...     client.execute_command("PING")
            ... except redis.TimeoutError as e:
            ...     raise StoreConnectionError.from_exception(e, command="PING")
        """
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(message or str(exc), details=error_details)


class ConfigurationError(RedisTemplateError):
    """Settings or template wiring is invalid."""
