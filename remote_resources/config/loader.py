"""
Configuration loader for remote_resources.

This module handles loading configuration from JSON/YAML files and from
``REMOTE_RESOURCES_*`` environment variables. Environment values override
file values.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import ClientConfig


def _to_bool(value: str) -> bool:
    lower = value.strip().lower()
    if lower in ("true", "yes", "1", "on"):
        return True
    if lower in ("false", "no", "0", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


class ConfigLoader:
    """Configuration loader with support for files and the environment."""

    env_prefix = "REMOTE_RESOURCES_"

    def __init__(self, environ: Optional[Dict[str, str]] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            environ: Environment mapping to read (``os.environ`` by default)
        """
        self.environ = os.environ if environ is None else environ
        self.config_paths = [
            Path("remote_resources.yaml"),
            Path("remote_resources.yml"),
            Path("remote_resources.json"),
            Path.home() / ".remote_resources" / "config.yaml",
            Path.home() / ".remote_resources" / "config.json",
        ]

        # Environment variable -> (config path, converter)
        self.env_mappings: Dict[str, Tuple[Tuple[str, ...], Callable[[str], Any]]] = {
            "USERNAME": (("username",), str),
            "API_KEY": (("api_key",), str),
            "BASE_URL": (("base_url",), str),
            "DEV_MODE": (("dev_mode",), _to_bool),
            "TIMEOUT": (("timeout_seconds",), float),
            "POLL_INTERVAL_MS": (("polling", "interval_millis"), int),
            "POLL_MAX_ATTEMPTS": (("polling", "max_attempts"), int),
            "LOG_LEVEL": (("logging", "level"), str.upper),
            "LOG_FILE": (("logging", "file_path"), str),
        }

    def load_config(
        self,
        config_file: Optional[Union[str, Path]] = None,
        require_credentials: bool = False,
    ) -> ClientConfig:
        """
        Load configuration from all available sources.

        Args:
            config_file: Specific config file to load (must exist)
            require_credentials: Fail when username or API key is missing

        Returns:
            ClientConfig with merged configuration

        Raises:
            ConfigurationError: On unreadable files, invalid values or
                missing required credentials
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        try:
            config = ClientConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        if require_credentials and not config.has_credentials:
            raise ConfigurationError(
                f"Missing credentials: set {self.env_prefix}USERNAME and "
                f"{self.env_prefix}API_KEY or add them to a config file"
            )
        return config

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                return self._parse_config_file(config_path)
        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                elif suffix == ".json":
                    data = json.load(f) or {}
                else:
                    raise ConfigurationError(
                        f"Unsupported config file format: {config_path.suffix}"
                    )
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse config file {config_path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping"
            )
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        for name, (config_path, convert) in self.env_mappings.items():
            env_var = f"{self.env_prefix}{name}"
            value = self.environ.get(env_var)
            if value is None or value == "":
                continue
            try:
                converted_value = convert(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_var}: {e}") from e

            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = converted_value

        return config

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    require_credentials: bool = False,
) -> ClientConfig:
    """Load configuration with a default ConfigLoader."""
    return ConfigLoader().load_config(config_file, require_credentials)
