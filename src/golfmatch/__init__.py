"""
Golf course discovery, tee-time booking and score tracking.
"""

__version__ = '0.1.0'

from .exceptions import (
    APIError,
    APIResponseError,
    APITimeoutError,
    APIValidationError,
    AuthError,
    BackendNotConfiguredError,
    ConfigError,
    GolfMatchError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    'APIError',
    'APIResponseError',
    'APITimeoutError',
    'APIValidationError',
    'AuthError',
    'BackendNotConfiguredError',
    'ConfigError',
    'GolfMatchError',
    'NotFoundError',
    'ValidationError',
]
