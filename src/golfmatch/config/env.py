"""Environment variable handling for configuration."""

import os
from typing import Any

from golfmatch.config.types import GlobalConfig

DEFAULT_OVERPASS_URL = 'https://overpass-api.de/api/interpreter'

# Madrid; the curated dataset covers Spain
DEFAULT_MAP_CENTER = [40.4168, -3.7038]

class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to configuration paths
    ENV_MAPPING = {
        'GOLFMATCH_BACKEND_URL': ('backend', 'url'),
        'GOLFMATCH_BACKEND_ANON_KEY': ('backend', 'anon_key'),
        'GOLFMATCH_BACKEND_TIMEOUT': ('backend', 'timeout'),
        'GOLFMATCH_OVERPASS_URL': ('overpass', 'url'),
        'GOLFMATCH_OVERPASS_TIMEOUT': ('overpass', 'timeout'),
        'GOLFMATCH_OVERPASS_CACHE': ('overpass', 'cache_name'),
        'GOLFMATCH_LOG_LEVEL': ('logging', 'default_level'),
        'GOLFMATCH_LOG_FILE': ('logging', 'file_path'),
        'GOLFMATCH_HOST': ('server', 'host'),
        'GOLFMATCH_PORT': ('server', 'port'),
        'GOLFMATCH_SITE_URL': ('server', 'site_url'),
    }

    # Values that must be numeric when they come from the environment
    NUMERIC_PATHS = {
        ('backend', 'timeout'): float,
        ('overpass', 'timeout'): float,
        ('server', 'port'): int,
    }

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
        current = config
        for part in path[:-1]:
            current = current.setdefault(part, {})
        current[path[-1]] = value

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.

        Args:
            config: Configuration dictionary to update
        """
        for env_var, path in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is None or value == '':
                continue
            converter = cls.NUMERIC_PATHS.get(path)
            if converter is not None:
                try:
                    value = converter(value)
                except ValueError as e:
                    raise ValueError(f"Invalid value for {env_var}: {value!r}") from e
            cls._set_nested_value(config, path, value)

    @staticmethod
    def get_defaults() -> GlobalConfig:
        """Built-in defaults used before environment and file overrides."""
        return {
            'backend': {
                'url': '',
                'anon_key': '',
                'timeout': 10.0,
                'detail_timeout': 2.5,
                'connection_check_timeout': 5.0,
            },
            'overpass': {
                'url': DEFAULT_OVERPASS_URL,
                'timeout': 30.0,
                'cache_name': 'golfmatch_overpass',
                'cache_expire': 3600,
                'max_calls': 2,
                'time_window': 10,
            },
            'map': {
                'default_center': list(DEFAULT_MAP_CENTER),
                'default_zoom': 6,
                'user_zoom': 10,
            },
            'server': {
                'host': '127.0.0.1',
                'port': 5000,
                'cors_origins': ['http://localhost:3000'],
                'site_url': 'http://localhost:3000',
            },
            'logging': {
                'default_level': 'WARNING',
            },
        }

    @classmethod
    def get_global_config(cls) -> GlobalConfig:
        """Get global configuration from defaults and environment."""
        config = cls.get_defaults()
        cls.update_config_from_env(config)  # type: ignore[arg-type]
        return config
