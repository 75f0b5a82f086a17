"""
Configuration management utilities.

This module provides centralized configuration loading. Connection settings
live in the ``[vcd]`` section of a TOML file; environment variables fill in
whatever the file leaves out.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import CONFIG_SECTION, DEFAULT_CONFIG_PATH

# Environment variables consulted for keys missing from the config file
ENV_FALLBACKS = {
    "url": "VCD_URL",
    "user": "VCLOUD_USERNAME",
    "password": "VCLOUD_PASSWORD",
    "org": "VCLOUD_ORG",
    "vdc": "VCD_VDC",
    "api_version": "VCD_API_VERSION",
    "insecure": "VCD_ALLOW_UNVERIFIED_SSL",
    "max_retry_timeout": "VCD_MAX_RETRY_TIMEOUT",
}


class ConfigManager:
    """
    Manages configuration loading and access.

    This class provides a centralized way to load and access configuration
    from TOML files with proper error handling.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path).expanduser() if config_path else Path(DEFAULT_CONFIG_PATH).expanduser()
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._config = tomllib.load(f)
            logging.debug("Loaded configuration from %s", self.config_path)
            return self._config
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration from {self.config_path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports nested keys using dot notation (e.g., "vcd.url").

        Example:
            >>> config = ConfigManager("~/.config/vcd/cli.toml")
            >>> config.get("vcd.url")
            'https://vcd.example.com/api'
        """
        if self._config is None:
            self.load()

        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default

        return value

    def get_section(self, section: str = CONFIG_SECTION) -> Dict[str, Any]:
        """
        Get an entire configuration section, or an empty dict if it is missing.
        """
        if self._config is None:
            self.load()

        if self._config is None:
            return {}

        return self._config.get(section, {})

    def connection_settings(self) -> Dict[str, Any]:
        """
        Return the ``[vcd]`` section merged with the environment fallbacks.

        File values win; environment variables only fill keys the file does
        not set. A missing file leaves the environment as the only source.
        """
        try:
            settings = dict(self.get_section(CONFIG_SECTION))
        except FileNotFoundError:
            logging.debug("No configuration file at %s, using environment only", self.config_path)
            settings = {}
        for key, env_var in ENV_FALLBACKS.items():
            if settings.get(key) in (None, "") and os.environ.get(env_var):
                settings[key] = os.environ[env_var]
                logging.debug("Using %s for vcd.%s", env_var, key)
        return settings

    def reload(self) -> None:
        """Force reload configuration from file."""
        self._config = None
        self.load()


__all__ = ["ConfigManager", "ENV_FALLBACKS"]
