"""Configuration settings for the golf booking application."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from golfmatch.config.env import EnvConfig
from golfmatch.config.types import AppConfig
from golfmatch.config.types import GlobalConfig
from golfmatch.config.utils import deep_merge
from golfmatch.config.utils import get_config_paths
from golfmatch.config.utils import resolve_path

logger = logging.getLogger(__name__)


class ConfigurationManager:
    """Centralized configuration management with caching."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config: AppConfig | None = None
        self._config_path: Path | None = None
        self._initialized = True

    @property
    def config(self) -> AppConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config() first.")
        return self._config

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    def load_config(
        self,
        config_dir: str | None = None,
        dev_mode: bool = False,
        verbose: bool = False,
        overrides: dict[str, Any] | None = None
    ) -> AppConfig:
        """Load configuration with caching.

        Args:
            config_dir: Directory holding an optional config.yaml
            dev_mode: Lower the default log level to the dev level
            verbose: Lower the default log level to the verbose level
            overrides: Values merged last, over file and environment

        Returns:
            Loaded configuration
        """
        if self._config is not None and overrides is None:
            return self._config

        self._config_path = _get_config_path(config_dir)
        global_config = _load_global_config(self._config_path)
        if overrides:
            global_config = deep_merge(global_config, overrides)

        logging_section = global_config.get('logging', {})
        log_level = logging_section.get('default_level', 'WARNING')
        if dev_mode:
            log_level = logging_section.get('dev_level', 'DEBUG')
        elif verbose:
            log_level = logging_section.get('verbose_level', 'INFO')

        self._config = AppConfig(
            global_config=global_config,
            config_dir=str(self._config_path),
            log_level=str(log_level).upper(),
            log_file=logging_section.get('file_path')
        )

        return self._config

    def reload_config(self, config_dir: str | None = None) -> AppConfig:
        """Force reload configuration."""
        self._config = None
        return self.load_config(config_dir)

    def reset(self) -> None:
        """Drop the cached configuration."""
        self._config = None
        self._config_path = None

def _get_config_path(config_dir: str | None = None) -> Path:
    """Get configuration directory path."""
    return resolve_path(
        config_dir or os.getenv("GOLFMATCH_CONFIG_DIR", os.getcwd())
    )

def _load_global_config(config_path: Path) -> GlobalConfig:
    """Load global configuration from defaults, environment and YAML file."""
    global_config = EnvConfig.get_global_config()

    config_file = get_config_paths(config_path)['config']
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            loaded_config = yaml.safe_load(f) or {}
        if not isinstance(loaded_config, dict):
            raise ValueError(f"Invalid configuration file, expected a mapping: {config_file}")
        logger.debug(f"Loaded configuration file {config_file}")
        global_config = deep_merge(global_config, loaded_config)

    return global_config

def load_config(config_dir: str | None = None, dev_mode: bool = False, verbose: bool = False) -> AppConfig:
    """Load configuration using the ConfigurationManager."""
    config_manager = ConfigurationManager()
    return config_manager.load_config(config_dir, dev_mode, verbose)
