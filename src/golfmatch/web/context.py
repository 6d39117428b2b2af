"""Request helpers shared by the blueprints."""

from dataclasses import dataclass
from typing import Any

from flask import current_app
from flask import request

from golfmatch.api.backend import BackendClient
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import ValidationError
from golfmatch.services.auth_service import AuthService
from golfmatch.services.booking_service import BookingService
from golfmatch.services.course_service import CourseService
from golfmatch.services.round_service import RoundService
from golfmatch.services.stats_service import StatsService

EXTENSION_KEY = 'golfmatch'

@dataclass
class Services:
    """Services shared by all requests of one app."""
    config: AppConfig
    backend: BackendClient | None
    courses: CourseService
    auth: AuthService
    bookings: BookingService
    rounds: RoundService
    stats: StatsService

    @classmethod
    def build(cls, config: AppConfig, backend: BackendClient | None = None, overpass: Any = None) -> 'Services':
        courses = CourseService(config, backend, overpass)
        auth = AuthService(config, backend)
        rounds = RoundService(config, backend, auth)
        return cls(
            config=config,
            backend=backend,
            courses=courses,
            auth=auth,
            bookings=BookingService(config, backend, auth, courses),
            rounds=rounds,
            stats=StatsService(config, rounds)
        )

def services() -> Services:
    return current_app.extensions[EXTENSION_KEY]

def bearer_token() -> str | None:
    """Access token from the ``Authorization: Bearer`` header."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()

def json_body() -> dict[str, Any]:
    """Request JSON object.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data

def optional_float(name: str) -> float | None:
    value = request.args.get(name)
    if value in (None, ''):
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ValidationError(f"{name} must be a number", {name: value}) from e
