"""Unified configuration management for the tag manager."""
from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from pydantic import ValidationError

from cloudtag.config.defaults import CONFIG_FILE_ENV, DEFAULT_CONFIG, deep_merge
from cloudtag.config.schemas import (
    AppConfig,
    LoggingConfig,
    ProviderConfig,
    WaiterConfig,
)
from cloudtag.config.utils import expand_config_env_vars
from cloudtag.infrastructure.exceptions import ConfigurationError
from cloudtag.infrastructure.logging.logger import get_logger

T = TypeVar("T")
logger = get_logger(__name__)


class ConfigurationManager:
    """
    Single source of truth for application configuration.

    Sources are layered in order: built-in defaults, an optional JSON or YAML
    file, then environment variable expansion. The result is validated into
    AppConfig on first access.
    """

    _TYPE_MAPPING = {
        ProviderConfig: "provider",
        WaiterConfig: "waiter",
        LoggingConfig: "logging",
    }

    def __init__(self, config_file: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration manager with lazy loading.

        Args:
            config_file: Path to a JSON or YAML file. Falls back to the
                CLOUDTAG_CONFIG_FILE environment variable.
            overrides: Values applied on top of the file, mainly for tests.
        """
        self._config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
        self._overrides = overrides or {}
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        config_data = dict(DEFAULT_CONFIG)
        if self._config_file:
            config_data = deep_merge(config_data, self.load_file(self._config_file))
        config_data = deep_merge(config_data, self._overrides)
        config_data = expand_config_env_vars(config_data)

        try:
            app_config = AppConfig.from_dict(config_data)
        except ValidationError as e:
            logger.error("Configuration validation failed", errors=e.errors())
            raise ConfigurationError(f"Invalid configuration: {e}", details=e.errors()) from e

        logger.debug(
            "Configuration loaded",
            config_file=self._config_file,
            provider_type=app_config.provider.type,
        )
        return app_config

    @staticmethod
    def load_file(path: str) -> Dict[str, Any]:
        """Read a JSON or YAML configuration file."""
        file_path = Path(path)
        if not file_path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with file_path.open("r", encoding="utf-8") as f:
                if file_path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")
        return data

    def get_typed(self, config_type: Type[T]) -> T:
        """Get a typed configuration section."""
        attr_name = self._TYPE_MAPPING.get(config_type)
        if attr_name is None:
            raise ValueError(f"Unknown configuration type: {config_type.__name__}")
        return getattr(self.app_config, attr_name)

    def get_provider_type(self) -> str:
        """Get the configured provider type."""
        return self.app_config.provider.type

    def reload(self) -> None:
        """Reload configuration from sources."""
        with self._lock:
            self._app_config = None
