"""Logging filters and utilities."""

import logging
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any
from typing import TypeVar

from golfmatch.config.logging_config import DEFAULT_SENSITIVE_FIELDS


F = TypeVar('F', bound=Callable[..., Any])

# Context variable for correlation ID
correlation_id: ContextVar[str] = ContextVar('correlation_id', default='')

def new_correlation_id(value: str | None = None) -> str:
    """Set the correlation ID for the current context and return it."""
    cid = value or str(uuid.uuid4())
    correlation_id.set(cid)
    return cid

class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in logs."""

    def __init__(self, sensitive_fields: set[str] | None = None, mask: str = '***MASKED***'):
        """Initialize filter.

        Args:
            sensitive_fields: Set of field names to mask
            mask: Replacement text
        """
        super().__init__()
        self.sensitive_fields = {f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS)}
        self.mask = mask

    def _mask_sensitive_data(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {
                k: self.mask if str(k).lower() in self.sensitive_fields else self._mask_sensitive_data(v)
                for k, v in obj.items()
            }
        if isinstance(obj, list):
            return [self._mask_sensitive_data(item) for item in obj]
        return obj

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in log record."""
        if hasattr(record, 'extra_fields'):
            record.extra_fields = self._mask_sensitive_data(record.extra_fields)
        return True

class CorrelationFilter(logging.Filter):
    """Filter to add correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to log record."""
        cid = correlation_id.get()
        if not cid:
            return True
        if not hasattr(record, 'extra_fields'):
            record.extra_fields = {}
        record.extra_fields['correlation_id'] = cid
        return True

def with_correlation_id(func: F) -> F:
    """Decorator that makes sure a correlation ID is set while ``func`` runs.

    An ID already set by the caller is kept, a generated one is cleared again
    when ``func`` returns.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if correlation_id.get():
            return func(*args, **kwargs)
        token = correlation_id.set(str(uuid.uuid4()))
        try:
            return func(*args, **kwargs)
        finally:
            correlation_id.reset(token)
    return wrapper  # type: ignore[return-value]
