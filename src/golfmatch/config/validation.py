"""Configuration validation utilities."""

import logging
from pathlib import Path
from typing import Any

from golfmatch.config.types import PLACEHOLDER_BACKEND_URL
from golfmatch.config.types import AppConfig
from golfmatch.config.utils import validate_backend_url

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Configuration validation error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}

def _require_positive(section: str, values: dict[str, Any], keys: list[str]) -> None:
    for key in keys:
        value = values.get(key)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            raise ConfigValidationError(
                f"{section}.{key} must be a positive number",
                {"section": section, "key": key, "value": value}
            )

def validate_backend_config(config: AppConfig) -> None:
    """Validate backend configuration.

    A malformed backend URL is not fatal, it only selects demo mode.
    """
    backend = config.backend
    url = backend.get('url')
    try:
        validate_backend_url(url)
    except ValueError as e:
        if url != PLACEHOLDER_BACKEND_URL:
            logger.warning(f"{e}, running in demo mode")

    _require_positive('backend', dict(backend), ['timeout', 'detail_timeout', 'connection_check_timeout'])

def validate_overpass_config(config: AppConfig) -> None:
    """Validate map-data query service configuration."""
    overpass = config.overpass
    if not str(overpass.get('url', '')).startswith(('http://', 'https://')):
        raise ConfigValidationError(
            "overpass.url must be an http(s) URL",
            {"section": "overpass", "url": overpass.get('url')}
        )
    _require_positive('overpass', dict(overpass), ['timeout', 'max_calls', 'time_window'])

def validate_map_config(config: AppConfig) -> None:
    """Validate map defaults."""
    center = config.map.get('default_center')
    if not isinstance(center, (list, tuple)) or len(center) != 2:
        raise ConfigValidationError(
            "map.default_center must be [lat, lng]",
            {"section": "map", "default_center": center}
        )
    lat, lng = center
    if not (-90 <= float(lat) <= 90) or not (-180 <= float(lng) <= 180):
        raise ConfigValidationError(
            "map.default_center is out of range",
            {"section": "map", "default_center": center}
        )
    for key in ('default_zoom', 'user_zoom'):
        zoom = config.map.get(key)
        if not isinstance(zoom, int) or not 0 <= zoom <= 19:
            raise ConfigValidationError(
                f"map.{key} must be an integer between 0 and 19",
                {"section": "map", key: zoom}
            )

def validate_log_file(config: AppConfig) -> None:
    """Create the log directory if a log file is configured."""
    if config.log_file:
        log_dir = Path(config.log_file).parent
        log_dir.mkdir(parents=True, exist_ok=True)

def validate_config(config: AppConfig) -> None:
    """
    Validate configuration.

    Args:
        config: AppConfig object to validate

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    try:
        validate_backend_config(config)
        validate_overpass_config(config)
        validate_map_config(config)
        validate_log_file(config)
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(
            f"Unexpected error during configuration validation: {e!s}",
            {"error_type": type(e).__name__}
        ) from e
