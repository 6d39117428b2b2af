"""Logging configuration types and loading utilities."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_LIBRARY_LEVELS = {
    'urllib3': 'WARNING',
    'requests': 'WARNING',
    'requests_cache': 'WARNING',
    'werkzeug': 'WARNING',
}

DEFAULT_SENSITIVE_FIELDS = [
    'password',
    'access_token',
    'refresh_token',
    'apikey',
    'anon_key',
    'authorization',
]

@dataclass
class FileConfig:
    """File logging configuration."""
    enabled: bool = False
    path: str = 'logs/golfmatch.log'
    max_size_mb: int = 10
    backup_count: int = 5
    format: str = 'json'
    include_timestamp: bool = True

@dataclass
class ConsoleConfig:
    """Console logging configuration."""
    enabled: bool = True
    format: str = 'text'
    include_timestamp: bool = True
    color: bool = True

@dataclass
class CorrelationConfig:
    """Correlation ID configuration."""
    enabled: bool = True
    include_in_console: bool = False
    header_name: str = 'X-GolfMatch-Correlation-ID'

@dataclass
class SensitiveDataConfig:
    """Sensitive data masking configuration."""
    enabled: bool = True
    global_fields: list[str] = field(default_factory=lambda: list(DEFAULT_SENSITIVE_FIELDS))
    mask_pattern: str = '***MASKED***'

@dataclass
class ErrorAggregationConfig:
    """Error aggregation configuration."""
    enabled: bool = True
    report_interval: int = 3600
    error_threshold: int = 5
    time_threshold: int = 300
    categorize_by: list[str] = field(default_factory=lambda: ['service', 'message'])

@dataclass
class LoggingConfig:
    """Complete logging configuration."""
    default_level: str = 'WARNING'
    dev_level: str = 'DEBUG'
    verbose_level: str = 'INFO'
    file: FileConfig = field(default_factory=FileConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    libraries: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LIBRARY_LEVELS))
    correlation: CorrelationConfig = field(default_factory=CorrelationConfig)
    sensitive_data: SensitiveDataConfig = field(default_factory=SensitiveDataConfig)
    error_aggregation: ErrorAggregationConfig = field(default_factory=ErrorAggregationConfig)

def load_logging_config(config_dict: dict[str, Any] | None = None) -> LoggingConfig:
    """Build logging configuration from the ``logging`` section of the app config.

    Args:
        config_dict: Raw ``logging`` mapping, missing keys take defaults

    Returns:
        LoggingConfig instance
    """
    config_dict = config_dict or {}

    libraries = dict(DEFAULT_LIBRARY_LEVELS)
    libraries.update(config_dict.get('libraries', {}))

    file_config = dict(config_dict.get('file', {}))
    # A flat file_path (environment or command line) wins over the nested section
    if config_dict.get('file_path'):
        file_config['enabled'] = True
        file_config['path'] = config_dict['file_path']

    return LoggingConfig(
        default_level=str(config_dict.get('default_level', 'WARNING')).upper(),
        dev_level=str(config_dict.get('dev_level', 'DEBUG')).upper(),
        verbose_level=str(config_dict.get('verbose_level', 'INFO')).upper(),
        file=FileConfig(**file_config),
        console=ConsoleConfig(**config_dict.get('console', {})),
        libraries=libraries,
        correlation=CorrelationConfig(**config_dict.get('correlation', {})),
        sensitive_data=SensitiveDataConfig(**config_dict.get('sensitive_data', {})),
        error_aggregation=ErrorAggregationConfig(**config_dict.get('error_aggregation', {}))
    )
