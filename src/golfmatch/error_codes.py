"""Error codes for the golf booking application."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Authentication Errors
    AUTH_FAILED = "auth_failed"
    AUTH_REQUIRED = "auth_required"
    INVALID_CREDENTIALS = "invalid_credentials"

    # API Errors
    REQUEST_FAILED = "request_failed"
    TIMEOUT = "timeout"

    # Data Errors
    INVALID_RESPONSE = "invalid_response"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"

    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    BACKEND_NOT_CONFIGURED = "backend_not_configured"

    # Service Errors
    SERVICE_UNAVAILABLE = "service_unavailable"
