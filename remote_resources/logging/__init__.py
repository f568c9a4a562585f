"""
Logging setup for remote_resources.

This module provides console/file handlers with structured or colored
output and masking of API credentials.
"""

from .filters import SensitiveDataFilter
from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, get_logger, get_logging_manager, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "get_logger",
    "get_logging_manager",
    "StructuredFormatter",
    "ColoredFormatter",
    "SensitiveDataFilter",
]
