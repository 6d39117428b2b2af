"""Logging configuration utilities."""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path

from golfmatch.config.error_aggregator import init_error_aggregator
from golfmatch.config.logging_config import LoggingConfig
from golfmatch.config.logging_config import load_logging_config
from golfmatch.config.logging_filters import CorrelationFilter
from golfmatch.config.logging_filters import SensitiveDataFilter
from golfmatch.config.logging_handlers import AggregatingErrorHandler
from golfmatch.config.types import AppConfig


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        """Initialize formatter.

        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted string
        """
        data = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            data.update(record.extra_fields)

        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True, include_timestamp: bool = True):
        super().__init__()
        self.use_color = use_color
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color.

        Args:
            record: Log record to format

        Returns:
            Colored string
        """
        color = self.COLORS.get(record.levelname, self.RESET) if self.use_color else ''
        reset = self.RESET if self.use_color else ''

        msg = record.getMessage()

        context = ""
        if getattr(record, 'extra_fields', None):
            fields = [f"\n    {key}: {value}" for key, value in record.extra_fields.items()]
            context = " |" + "".join(fields)

        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"

        prefix = ""
        if self.include_timestamp:
            timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]
            prefix = f"{timestamp} - "

        return f"{color}{prefix}{record.name} - {record.levelname} - {msg}{context}{reset}"

def get_console_handler(formatter: logging.Formatter) -> logging.StreamHandler:
    """Create console handler.

    Args:
        formatter: Formatter to use

    Returns:
        Configured console handler
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    return console_handler

def get_file_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.handlers.RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        formatter: Formatter to use
        max_bytes: Maximum file size in bytes
        backup_count: Number of backup files to keep

    Returns:
        Configured file handler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    return file_handler

def _add_filters(handler: logging.Handler, config: LoggingConfig) -> None:
    if config.correlation.enabled:
        handler.addFilter(CorrelationFilter())
    if config.sensitive_data.enabled:
        handler.addFilter(SensitiveDataFilter(
            set(config.sensitive_data.global_fields),
            config.sensitive_data.mask_pattern
        ))

def setup_logging(
    config: AppConfig | None = None,
    dev_mode: bool = False,
    verbose: bool = False,
    log_file: str | None = None
) -> LoggingConfig:
    """Set up application logging.

    Args:
        config: Application configuration, defaults are used when omitted
        dev_mode: Log at the configured development level
        verbose: Log at the configured verbose level
        log_file: Log file path, overrides the configured one

    Returns:
        The effective logging configuration
    """
    raw = dict(config.global_config.get('logging', {})) if config else {}
    if log_file:
        raw['file_path'] = log_file
    logging_config = load_logging_config(raw)

    level_name = logging_config.default_level
    if dev_mode:
        level_name = logging_config.dev_level
    elif verbose:
        level_name = logging_config.verbose_level
    level = getattr(logging, level_name, logging.WARNING)

    app_logger = logging.getLogger('golfmatch')
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = False

    if logging_config.console.enabled:
        if logging_config.console.format == 'json':
            console_formatter: logging.Formatter = JsonFormatter(logging_config.console.include_timestamp)
        else:
            console_formatter = ColoredFormatter(
                use_color=logging_config.console.color and sys.stderr.isatty(),
                include_timestamp=logging_config.console.include_timestamp
            )
        console_handler = get_console_handler(console_formatter)
        console_handler.setLevel(level)
        if logging_config.sensitive_data.enabled:
            console_handler.addFilter(SensitiveDataFilter(
                set(logging_config.sensitive_data.global_fields),
                logging_config.sensitive_data.mask_pattern
            ))
        if logging_config.correlation.include_in_console:
            console_handler.addFilter(CorrelationFilter())
        app_logger.addHandler(console_handler)

    if logging_config.file.enabled:
        file_handler = get_file_handler(
            logging_config.file.path,
            JsonFormatter(include_timestamp=logging_config.file.include_timestamp),
            logging_config.file.max_size_mb * 1024 * 1024,
            logging_config.file.backup_count
        )
        # The file keeps debug detail for troubleshooting
        file_handler.setLevel(logging.DEBUG)
        _add_filters(file_handler, logging_config)
        app_logger.addHandler(file_handler)
        app_logger.setLevel(logging.DEBUG)

    for library, library_level in logging_config.libraries.items():
        logging.getLogger(library).setLevel(getattr(logging, str(library_level).upper(), logging.WARNING))

    init_error_aggregator(logging_config.error_aggregation)
    if logging_config.error_aggregation.enabled:
        app_logger.addHandler(AggregatingErrorHandler())

    return logging_config
