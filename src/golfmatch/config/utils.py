"""Configuration utility functions."""

import os
from copy import deepcopy
from pathlib import Path
from typing import Any
from typing import TypeVar
from urllib.parse import urlparse


T = TypeVar('T', bound=dict[str, Any])

def deep_merge(base: T, override: dict[str, Any]) -> T:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to override base values

    Returns:
        Merged dictionary, neither input is modified
    """
    result = deepcopy(base)

    for key, value in override.items():
        if (
            key in result and
            isinstance(result[key], dict) and
            isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result

def resolve_path(
    path: str | Path,
    base_dir: str | Path | None = None,
    create: bool = False
) -> Path:
    """Resolve path relative to base directory.

    Args:
        path: Path to resolve
        base_dir: Base directory for relative paths
        create: Whether to create the directory

    Returns:
        Resolved Path object
    """
    path = Path(path).expanduser()

    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir) / path

    if create:
        path.mkdir(parents=True, exist_ok=True)

    return path

def validate_backend_url(url: str | None) -> None:
    """Validate the backend project URL.

    An empty URL is allowed and means demo mode.

    Raises:
        ValueError: If a non-empty URL is not an absolute http(s) URL
    """
    if not url:
        return

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValueError(f"Invalid backend URL (must start with http/https): {url}")

def get_config_paths(config_dir: str | Path | None = None) -> dict[str, Path]:
    """Get configuration file paths.

    Args:
        config_dir: Base configuration directory

    Returns:
        Dictionary of configuration file paths
    """
    if config_dir is None:
        config_dir = os.getenv("GOLFMATCH_CONFIG_DIR", os.getcwd())

    base_path = Path(config_dir)

    return {
        'config': base_path / 'config.yaml',
    }
