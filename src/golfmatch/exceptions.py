"""Centralized error definitions for the golf booking application."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import requests

from golfmatch.config.error_aggregator import aggregate_error
from golfmatch.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class GolfMatchError(Exception):
    """Base exception for all golf booking errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for JSON responses."""
        return {
            "error": self.code.value,
            "message": self.message,
            "details": self.details or {}
        }

class APIError(GolfMatchError):
    """Base class for remote API errors."""
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REQUEST_FAILED,
        response: requests.Response | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code, details)
        self.response = response

    @property
    def status_code(self) -> int | None:
        """HTTP status of the failed response, if there was one."""
        if self.response is None:
            return None
        return self.response.status_code

class APITimeoutError(APIError):
    """Remote API timeout or unreachable host."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.TIMEOUT, details=details)

class APIResponseError(APIError):
    """Remote API returned an error status."""
    def __init__(
        self,
        message: str,
        response: requests.Response | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, ErrorCode.INVALID_RESPONSE, response=response, details=details)

class APIValidationError(APIError):
    """Remote API returned a body that could not be parsed."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED, details=details)

class AuthError(GolfMatchError):
    """Authentication error."""
    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.AUTH_FAILED
    ):
        super().__init__(message, code, details)

class ConfigError(GolfMatchError):
    """Configuration error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, details)

class BackendNotConfiguredError(ConfigError):
    """Operation needs the hosted backend but the app runs in demo mode."""
    def __init__(self, operation: str):
        super().__init__(
            f"Backend not configured, cannot {operation} in demo mode",
            {"operation": operation}
        )
        self.code = ErrorCode.BACKEND_NOT_CONFIGURED

class ValidationError(GolfMatchError):
    """Validation error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED, details)

class NotFoundError(GolfMatchError):
    """Requested record does not exist."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.NOT_FOUND, details)

@contextmanager
def handle_errors(
    error_type: type[GolfMatchError],
    service: str,
    operation: str
) -> Iterator[None]:
    """Log and aggregate errors raised inside the block, then re-raise.

    Args:
        error_type: Expected error type, aggregated without a log line
        service: The service name
        operation: The operation name
    """
    try:
        yield
    except error_type as e:
        aggregate_error(str(e), service, e.__traceback__)
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        raise
