"""Shared utilities and components for the averager service."""

from .config import BaseLoggingConfig, BaseServiceConfig, BaseUpstreamConfig
from .constants import Categories, Environment

__all__ = [
    "Categories",
    "Environment",
    "BaseServiceConfig",
    "BaseLoggingConfig",
    "BaseUpstreamConfig",
]
