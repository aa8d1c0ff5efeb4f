"""
Configuration manager for centralized configuration handling.

This module provides a manager for loading and managing application
configurations, with support for different environments.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .config_validator import ConfigValidator
from .environment_config import EnvironmentConfig

DEFAULT_CONFIG: Dict[str, Any] = {
    "search": {
        "endpoint_url": "",
        "webhook_secret": None,
        "timeout_seconds": 30.0,
        "retry_attempts": 0,
        "retry_delay_seconds": 1.0,
        "default_search_type": "all",
        "max_query_length": 1000,
    },
    "location": {
        "fallback": {
            "country": "France",
            "city": "Paris",
            "latitude": 48.8566,
            "longitude": 2.3522,
        },
    },
    "presentation": {
        "results_path": "/search",
        "entry_path": "/",
        "items_per_page": 9,
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigManager:
    """
    Manager for application configurations.

    ``base.yaml`` is required in the configuration directory; an optional
    ``<environment>.yaml`` is merged over it. Both are merged over the
    built-in defaults, then environment variables are applied.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = "config",
        environment: Optional[str] = None
    ):
        """
        Initialize the manager.

        Args:
            config_dir: Configuration directory path, or None for defaults only
            environment: Optional environment name
        """
        self.config_dir = Path(config_dir) if config_dir is not None else None
        self.environment = environment or os.getenv("APP_ENV", "development")
        self.validator = ConfigValidator()
        self._config: Optional[EnvironmentConfig] = None
        self._overrides: Dict[str, Any] = {}

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> "ConfigManager":
        """
        Build a manager from in-memory settings instead of files.

        Args:
            overrides: Settings merged over the defaults

        Returns:
            ConfigManager: Manager that never touches the filesystem
        """
        manager = cls(config_dir=None)
        manager._overrides = copy.deepcopy(overrides)
        return manager

    def load_config(self) -> EnvironmentConfig:
        """
        Load configuration.

        Returns:
            EnvironmentConfig: Loaded configuration

        Raises:
            FileNotFoundError: If base.yaml is missing
            ValueError: If configuration is invalid
        """
        if self._config is not None:
            return self._config

        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_dir is not None:
            config = self._merge_configs(config, self._load_yaml("base.yaml"))
            env_file = self.config_dir / f"{self.environment}.yaml"
            if env_file.exists():
                config = self._merge_configs(config, self._load_yaml(env_file.name))

        config = self._merge_configs(config, self._overrides)

        environment_config = EnvironmentConfig(config)
        self.validator.validate_config(environment_config.config)

        self._config = environment_config
        return self._config

    def get_config(self) -> EnvironmentConfig:
        """
        Get the current configuration.

        Returns:
            EnvironmentConfig: Current configuration
        """
        return self.load_config()

    def _load_yaml(self, filename: str) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Args:
            filename: Configuration file name

        Returns:
            Dict[str, Any]: Loaded configuration

        Raises:
            FileNotFoundError: If file is not found
        """
        file_path = self.config_dir / filename
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(file_path, "r") as f:
            return yaml.safe_load(f) or {}

    def _merge_configs(
        self,
        base: Dict[str, Any],
        override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Merge two configurations.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Dict[str, Any]: Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result and
                isinstance(result[key], dict) and
                isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result
