"""Configuration type definitions."""

from dataclasses import dataclass, field
from typing import Any, TypedDict

from golfmatch.config.utils import validate_backend_url

PLACEHOLDER_BACKEND_URL = 'your-project-url'

class BackendConfig(TypedDict):
    """Hosted database/auth backend configuration."""
    url: str
    anon_key: str
    timeout: float
    detail_timeout: float
    connection_check_timeout: float

class OverpassConfig(TypedDict):
    """Map-data query service configuration."""
    url: str
    timeout: float
    cache_name: str
    cache_expire: int
    max_calls: int
    time_window: int

class MapConfig(TypedDict):
    """Map view defaults."""
    default_center: list[float]
    default_zoom: int
    user_zoom: int

class ServerConfig(TypedDict):
    """HTTP server configuration."""
    host: str
    port: int
    cors_origins: list[str]
    site_url: str

class GlobalConfig(TypedDict):
    """Global configuration structure."""
    backend: BackendConfig
    overpass: OverpassConfig
    map: MapConfig
    server: ServerConfig
    logging: dict[str, Any]

@dataclass
class AppConfig:
    """Application configuration."""
    global_config: GlobalConfig
    config_dir: str = "config"
    log_level: str = "WARNING"
    log_file: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def backend(self) -> BackendConfig:
        return self.global_config['backend']

    @property
    def overpass(self) -> OverpassConfig:
        return self.global_config['overpass']

    @property
    def map(self) -> MapConfig:
        return self.global_config['map']

    @property
    def server(self) -> ServerConfig:
        return self.global_config['server']

    @property
    def backend_configured(self) -> bool:
        """Whether a usable backend URL and key are configured.

        Without them the application serves curated data and a demo user.
        """
        url = (self.backend.get('url') or '').strip()
        key = (self.backend.get('anon_key') or '').strip()
        if not url or not key:
            return False
        if url == PLACEHOLDER_BACKEND_URL:
            return False
        try:
            validate_backend_url(url)
        except ValueError:
            return False
        return True

    @property
    def demo_mode(self) -> bool:
        return not self.backend_configured

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        if hasattr(self, key):
            return getattr(self, key)
        if key in self.global_config:
            return self.global_config[key]
        return self.extra.get(key, default)
