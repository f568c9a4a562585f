"""
Custom logging filters for remote_resources.

This module provides credential masking for log records.
"""

import logging
import re
from typing import List, Pattern, Tuple


class SensitiveDataFilter(logging.Filter):
    """Filter to mask credentials in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.patterns: List[Tuple[Pattern[str], str]] = [
            # api_key=..., api_key: ..., "api_key": "..."
            (
                re.compile(
                    r'(api[_-]?key|token|secret)(["\']?\s*[:=]\s*["\']?)([^\s"\'&;,}]+)',
                    re.IGNORECASE,
                ),
                r"\1\2***MASKED***",
            ),
            # Authorization: ApiKey user:key
            (
                re.compile(r"(ApiKey\s+[^:\s]+:)(\S+)", re.IGNORECASE),
                r"\1***MASKED***",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@\s]+)@", re.IGNORECASE), r"\1:***MASKED***@"),
        ]

    def mask(self, message: str) -> str:
        """Return ``message`` with every credential replaced."""
        for pattern, replacement in self.patterns:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed %-args; let the handler report it
            return True

        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True
