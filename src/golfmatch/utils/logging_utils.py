"""
Logging utilities for the golf booking application.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from inspect import signature
from typing import Any
from typing import TypeVar

from typing_extensions import ParamSpec


T = TypeVar('T')
P = ParamSpec('P')

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)

def log_execution(level: str = 'DEBUG', include_args: bool = False) -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Decorator to log function execution with timing."""
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            logger = logging.getLogger(func.__module__)
            log_level = getattr(logging, level)
            start_time = time.monotonic()

            if include_args:
                bound_args = signature(func).bind(*args, **kwargs)
                bound_args.apply_defaults()
                arg_str = ", ".join(
                    f"{k}={v!r}" for k, v in bound_args.arguments.items() if k != 'self'
                )
                logger.log(log_level, f"Calling {func.__name__}({arg_str})")
            else:
                logger.log(log_level, f"Calling {func.__name__}")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    f"{func.__name__} failed after {time.monotonic() - start_time:.3f}s: {e!s}"
                )
                raise
            logger.log(log_level, f"{func.__name__} completed in {time.monotonic() - start_time:.3f}s")
            return result

        return wrapper
    return decorator

class EnhancedLoggerMixin:
    """Mixin class that provides logging with per-instance context fields.

    Context is attached to records as ``extra_fields`` so formatters and
    the sensitive data filter can see it.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__module__)
        self._log_context: dict[str, Any] = {}

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_log_context(self, **kwargs: Any) -> None:
        """Set context values for all subsequent log messages."""
        self._log_context.update(kwargs)

    def _log(self, level: int, msg: str, exc_info: Any = None, **kwargs: Any) -> None:
        context = {**self._log_context, **kwargs}
        extra = {'extra_fields': context} if context else None
        self.logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: Any = None, **kwargs: Any) -> None:
        """Log an error message with context and optional exception info."""
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)

class LoggerMixin(EnhancedLoggerMixin):
    """Shorthand used by API clients and services."""
