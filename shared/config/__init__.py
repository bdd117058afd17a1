"""Shared configuration base classes.

Provides common configuration patterns used across the averager service and
its tests so settings stay consistent between them.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "key",
        "authorization",
        "cookie",
        "session",
    ]
    app_environment: str = "production"


class BaseUpstreamConfig(BaseSettings):
    """Connection settings for the upstream numbers source."""

    upstream_base_url: str = "http://20.244.56.144"
    upstream_service_path: str = "numbers"
    upstream_auth_token: str = ""
    upstream_timeout_ms: int = Field(default=500, gt=0)


class BaseServiceConfig(BaseLoggingConfig, BaseUpstreamConfig):
    """Base configuration combining logging and upstream settings.

    The otel_service_name should be overridden by the concrete service.
    """

    otel_service_name: str = "unknown"  # Should be overridden by service


__all__ = ["BaseLoggingConfig", "BaseUpstreamConfig", "BaseServiceConfig"]
