"""
Configuration management for remote_resources.

Configuration comes from explicit ``ClientConfig`` objects, configuration
files and ``REMOTE_RESOURCES_*`` environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import (
    DEFAULT_BASE_URL,
    DEV_BASE_URL,
    ClientConfig,
    LoggingConfig,
    LogLevel,
)

__all__ = [
    "ConfigLoader",
    "load_config",
    "DEFAULT_BASE_URL",
    "DEV_BASE_URL",
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
]
