"""
Configuration models for remote_resources.

This module defines the configuration data models with validation and
defaults. A ``ClientConfig`` is passed explicitly to each API object, so
several independently configured clients can live in one process.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, SecretStr, field_validator

from ..models.resource import PollingPolicy

DEFAULT_BASE_URL = "https://bigml.io/andromeda/"
DEV_BASE_URL = "https://bigml.io/dev/andromeda/"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    max_file_size: int = Field(
        default=10 * 1024 * 1024, description="Max log file size in bytes"
    )
    backup_count: int = Field(default=5, description="Number of backup log files")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )

    # Component-specific log levels
    component_levels: Dict[str, LogLevel] = Field(
        default_factory=dict, description="Per-component log levels"
    )


class ClientConfig(BaseModel):
    """
    Settings of one API client.

    Example:
        ```python
        config = ClientConfig(
            username="alice",
            api_key="abc123",
            polling=PollingPolicy(interval_millis=1000, max_attempts=30),
        )
        config.api_url  # "https://bigml.io/andromeda/"
        ```
    """

    username: Optional[str] = Field(default=None, description="Account username")
    api_key: Optional[SecretStr] = Field(default=None, description="Account API key")
    base_url: Optional[str] = Field(
        default=None, description="API root; overrides the dev_mode choice"
    )
    dev_mode: bool = Field(default=False, description="Use the development API root")
    timeout_seconds: float = Field(
        default=30.0, gt=0, description="Total timeout per request in seconds"
    )
    polling: PollingPolicy = Field(
        default_factory=PollingPolicy, description="Default pre-create wait"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return value if value.endswith("/") else value + "/"

    @property
    def api_url(self) -> str:
        """The API root requests are sent to."""
        if self.base_url:
            return self.base_url
        return DEV_BASE_URL if self.dev_mode else DEFAULT_BASE_URL

    @property
    def has_credentials(self) -> bool:
        return bool(
            self.username and self.api_key and self.api_key.get_secret_value()
        )
