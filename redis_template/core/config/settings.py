#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
template and its redis-py connection factory.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms

Author: System Architect
Date: 2026-03-02
"""

import codecs
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _check_encoding(v: str) -> str:
    try:
        codecs.lookup(v)
    except LookupError:
        raise ValueError(f"Unknown encoding: {v}") from None
    return v


class RedisSettings(BaseSettings):
    """
    Redis connection configuration used by RedisConnectionFactory.

    Every template call borrows one connection from the pool for its whole
    unit of work, so REDIS_MAX_CONNECTIONS bounds the number of concurrent
    template calls.
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")

    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum total connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class TemplateSettings(BaseSettings):
    """
    Template behaviour defaults.
    """

    TEMPLATE_EXPOSE_CONNECTION: bool = Field(
        default=False,
        description="Hand callbacks the raw connection instead of a close-suppressing view"
    )
    TEMPLATE_DEFAULT_SERIALIZER: Literal["pickle", "json", "string"] = Field(
        default="pickle",
        description="Serializer used for roles that are not explicitly configured"
    )
    TEMPLATE_STRING_ENCODING: str = Field(default="utf-8", description="Encoding of the string serializer")

    @field_validator("TEMPLATE_STRING_ENCODING")
    @classmethod
    def validate_encoding(cls, v):
        """Validate that the codec exists."""
        return _check_encoding(v)

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from redis_template.core.config import get_settings

        settings = get_settings()
        redis_host = settings.redis.REDIS_HOST
        default = settings.template.TEMPLATE_DEFAULT_SERIALIZER
    """

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum total connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Template settings
    TEMPLATE_EXPOSE_CONNECTION: bool = Field(default=False, description="Expose raw connection to callbacks")
    TEMPLATE_DEFAULT_SERIALIZER: Literal["pickle", "json", "string"] = Field(
        default="pickle",
        description="Serializer used for roles that are not explicitly configured"
    )
    TEMPLATE_STRING_ENCODING: str = Field(default="utf-8", description="Encoding of the string serializer")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("TEMPLATE_STRING_ENCODING")
    @classmethod
    def validate_encoding(cls, v):
        """Validate that the codec exists."""
        return _check_encoding(v)

    @field_validator("REDIS_MAX_CONNECTIONS")
    @classmethod
    def validate_max_connections(cls, v):
        """A pool needs at least one connection."""
        if v < 1:
            raise ValueError("REDIS_MAX_CONNECTIONS must be at least 1")
        return v

    # Nested configuration objects
    @property
    def redis(self) -> RedisSettings:
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL
        )

    @property
    def template(self) -> TemplateSettings:
        """Get template settings."""
        return TemplateSettings(
            TEMPLATE_EXPOSE_CONNECTION=self.TEMPLATE_EXPOSE_CONNECTION,
            TEMPLATE_DEFAULT_SERIALIZER=self.TEMPLATE_DEFAULT_SERIALIZER,
            TEMPLATE_STRING_ENCODING=self.TEMPLATE_STRING_ENCODING
        )

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
