from __future__ import annotations

import logging

from shared.logging.json import configure_logging as _shared_configure_logging

from .config import settings

_configured = False


def configure_logging(force: bool = False) -> None:
    """Install the shared JSON handler once; redaction happens in its formatter."""
    global _configured
    if _configured and not force:
        return
    _shared_configure_logging(
        service=settings.otel_service_name,
        level=settings.app_log_level,
        environment=settings.app_environment,
        redaction_patterns=settings.app_log_redaction_patterns,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get preconfigured structured logger"""
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
